"""
core/data/catalog/cache.py - Vendor -> Catalog Cache

Holds one InstanceCatalog per vendor for the lifetime of the cache owner.
Catalogs are built on first use and never mutated afterwards.
"""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from threading import Lock
from typing import Any

from core.config import CUSTOM_CATALOG_KEY, Settings
from core.exceptions import UnknownVendorError

from .catalog import InstanceCatalog

logger = logging.getLogger(__name__)


class CatalogCache:
    """Lazily populated, thread-safe vendor catalog store

    A per-key lock guards first use, so two threads asking for the same
    uninitialized vendor build its catalog exactly once.

    Example:
        cache = CatalogCache(settings)

        # Built-in descriptor (core/data/catalog/data/aws-instances.json)
        aws = cache.get("aws")

        # Custom descriptor configured through data_path
        custom = cache.get("custom")
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize cache

        Args:
            settings: Optional Settings; a custom data_path is loaded eagerly
        """
        self._settings = settings or Settings()
        self._catalogs: dict[str, InstanceCatalog] = {}
        self._locks: dict[str, Lock] = {}
        self._guard = Lock()
        self._hits = 0
        self._misses = 0

        if self._settings.data_path:
            self.preload(CUSTOM_CATALOG_KEY, self._settings.data_path)

    @property
    def settings(self) -> Settings:
        return self._settings

    def _key_lock(self, key: str) -> Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = Lock()
            return lock

    def get(self, vendor: str) -> InstanceCatalog:
        """Catalog for vendor, building it on first use

        Raises:
            UnknownVendorError: no configured or built-in descriptor for vendor
            CatalogLoadError: descriptor invalid (strict_catalog only)
        """
        catalog = self._catalogs.get(vendor)
        if catalog is not None:
            self._hits += 1
            return catalog

        with self._key_lock(vendor):
            catalog = self._catalogs.get(vendor)
            if catalog is not None:
                self._hits += 1
                return catalog

            self._misses += 1
            path = self._settings.catalog_path(vendor)
            if path is None:
                raise UnknownVendorError(vendor)

            catalog = InstanceCatalog.from_file(path, name=vendor, strict=self._settings.strict_catalog)
            self._catalogs[vendor] = catalog
            return catalog

    def preload(self, key: str, path: str | Path) -> InstanceCatalog:
        """Build and store a catalog under key, replacing any previous one"""
        with self._key_lock(key):
            catalog = InstanceCatalog.from_file(path, name=key, strict=self._settings.strict_catalog)
            self._catalogs[key] = catalog
            return catalog

    def put(self, key: str, catalog: InstanceCatalog) -> None:
        """Register an already built catalog (tests, embedding)"""
        with self._key_lock(key):
            self._catalogs[key] = catalog

    def has(self, key: str) -> bool:
        return key in self._catalogs

    def keys(self, pattern: str = "*") -> list[str]:
        if pattern == "*":
            return list(self._catalogs)
        return [key for key in self._catalogs if fnmatch.fnmatch(key, pattern)]

    def invalidate(self, pattern: str = "*") -> int:
        """Drop cached catalogs matching pattern

        Returns:
            Number of catalogs removed
        """
        keys_to_delete = self.keys(pattern)
        for key in keys_to_delete:
            with self._key_lock(key):
                self._catalogs.pop(key, None)
        return len(keys_to_delete)

    @property
    def stats(self) -> dict[str, Any]:
        return {
            "catalogs": len(self._catalogs),
            "hits": self._hits,
            "misses": self._misses,
        }

    def __repr__(self) -> str:
        return f"CatalogCache(keys={self.keys()}, hits={self._hits}, misses={self._misses})"
