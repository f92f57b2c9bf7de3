"""
tests/core/data/catalog/test_catalog_cache.py - CatalogCache 테스트
"""

import threading
from unittest.mock import patch

import pytest

from core.config import Settings
from core.data.catalog import CatalogCache, InstanceCatalog
from core.exceptions import CatalogLoadError, UnknownVendorError


class TestCatalogCacheGet:
    """벤더 카탈로그 조회 테스트"""

    def test_builtin_vendor(self):
        """내장 디스크립터는 최초 사용 시 로드"""
        cache = CatalogCache()
        assert not cache.has("aws")

        catalog = cache.get("aws")
        assert cache.has("aws")
        assert catalog.name == "aws"
        assert "m5.large" in catalog

    def test_cached_instance_reused(self):
        """같은 벤더는 같은 카탈로그 객체"""
        cache = CatalogCache()
        first = cache.get("azure")
        second = cache.get("azure")

        assert first is second
        assert cache.stats == {"catalogs": 1, "hits": 1, "misses": 1}

    def test_unknown_vendor(self):
        cache = CatalogCache()
        with pytest.raises(UnknownVendorError):
            cache.get("oracle")
        assert not cache.has("oracle")

    def test_configured_catalog_path(self, descriptor_path):
        """settings.catalogs 매핑 사용"""
        cache = CatalogCache(Settings(catalogs={"lab": str(descriptor_path)}))
        assert cache.get("lab").get_family_name("A") == "example"

    def test_custom_data_path_loaded_eagerly(self, descriptor_path):
        """data_path는 생성 시 "custom" 키로 로드"""
        cache = CatalogCache(Settings(data_path=str(descriptor_path)))
        assert cache.has("custom")
        assert cache.get("custom").source == str(descriptor_path)

    def test_invalid_data_path_strict(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{", encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            CatalogCache(Settings(data_path=str(bad)))

    def test_invalid_data_path_non_strict(self, tmp_path):
        """strict_catalog=False면 빈 카탈로그"""
        bad = tmp_path / "bad.json"
        bad.write_text("{", encoding="utf-8")
        cache = CatalogCache(Settings(data_path=str(bad), strict_catalog=False))
        assert cache.get("custom").is_empty

    def test_concurrent_first_use_builds_once(self):
        """동시 최초 조회 시 카탈로그는 한 번만 생성"""
        cache = CatalogCache()
        results = []
        original = InstanceCatalog.from_file
        calls = []

        def counting_from_file(*args, **kwargs):
            calls.append(args)
            return original(*args, **kwargs)

        with patch.object(InstanceCatalog, "from_file", side_effect=counting_from_file):
            threads = [threading.Thread(target=lambda: results.append(cache.get("aws"))) for _ in range(8)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)


class TestCatalogCacheManagement:
    """등록/무효화 테스트"""

    def test_put(self, sample_catalog):
        cache = CatalogCache()
        cache.put("sample", sample_catalog)
        assert cache.get("sample") is sample_catalog

    def test_keys_pattern(self, sample_catalog):
        cache = CatalogCache()
        cache.put("aws-east", sample_catalog)
        cache.put("aws-west", sample_catalog)
        cache.put("azure", sample_catalog)

        assert sorted(cache.keys("aws-*")) == ["aws-east", "aws-west"]
        assert len(cache.keys()) == 3

    def test_invalidate(self, sample_catalog):
        """무효화 후 다시 로드"""
        cache = CatalogCache()
        first = cache.get("aws")
        cache.put("other", sample_catalog)

        assert cache.invalidate("aws") == 1
        assert not cache.has("aws")
        assert cache.has("other")
        assert cache.get("aws") is not first

    def test_invalidate_all(self, sample_catalog):
        cache = CatalogCache()
        cache.put("a", sample_catalog)
        cache.put("b", sample_catalog)
        assert cache.invalidate() == 2
        assert cache.keys() == []

    def test_preload_replaces(self, descriptor_path, sample_catalog):
        cache = CatalogCache()
        cache.put("x", sample_catalog)
        replaced = cache.preload("x", descriptor_path)
        assert cache.get("x") is replaced
        assert replaced is not sample_catalog

    def test_settings_property(self):
        settings = Settings(search_max_nodes=5)
        assert CatalogCache(settings).settings is settings
