"""
Domain Layer

This package contains the checking logic organized by domain area.
Domain services implement core algorithms and workflows; catalog access
lives in the clients layer.

Domains:
- schema: schema document assembly (resolution, loading, consistency findings)
"""
