"""
core/data/catalog - Vendor Instance Catalogs

Loads vendor descriptor files into indexed, read-only catalogs and caches
one catalog per vendor.

Classes:
    - CloudInstance: Single instance size (model, vCPUs, RAM, prices)
    - InstanceCatalog: model/family lookup tables for one descriptor
    - CatalogCache: vendor -> catalog store, populated on first use

Usage:
    from core.data.catalog import CatalogCache

    cache = CatalogCache()
    catalog = cache.get("aws")
    family = catalog.get_family("m5.2xlarge")
"""

from .cache import CatalogCache
from .catalog import InstanceCatalog
from .types import MISSING_PRICE, CloudInstance

__all__ = [
    "CatalogCache",
    "InstanceCatalog",
    "CloudInstance",
    "MISSING_PRICE",
]
