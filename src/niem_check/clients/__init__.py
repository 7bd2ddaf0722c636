"""
Client Layer

This package contains low-level clients for the resources schema checking
depends on but does not own.

Modules:
- catalog_client: OASIS XML Catalog resolver
"""

from .catalog_client import CatalogResolver, XMLCatalogResolver, create_catalog_resolver

__all__ = [
    'CatalogResolver',
    'XMLCatalogResolver',
    'create_catalog_resolver',
]
