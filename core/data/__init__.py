"""
core/data - Data Services Layer

Modules:
    - catalog: Vendor instance catalogs (descriptor loading, lookups, cache)

Design Principle:
    core/ = How (infrastructure) + Data (shared services)
    plugins/ = What (analysis features)

Usage:
    from core.data.catalog import CatalogCache, InstanceCatalog
"""

from .catalog import CatalogCache, CloudInstance, InstanceCatalog

__all__ = [
    "CatalogCache",
    "CloudInstance",
    "InstanceCatalog",
]
