"""
Schema Assembly Domain

Handles checking how schema documents combine into a schema:
- Resolution of import/include/redefine references through catalogs and relative paths
- Breadth-first loading of every reachable schema document
- Consistency findings (namespace conflicts, unresolvable references, etc.)
- Namespace declaration reconciliation
"""

from .assembly import AssemblyStage, SchemaAssemblyChecker, SchemaInitializationError
from .document_loader import parse_schema_document
from .namespace_decls import NamespaceDeclarations
from .resolution import resolve_load_request

__all__ = [
    # Assembly checking
    "AssemblyStage",
    "SchemaAssemblyChecker",
    "SchemaInitializationError",
    # Building blocks
    "parse_schema_document",
    "resolve_load_request",
    "NamespaceDeclarations",
]
