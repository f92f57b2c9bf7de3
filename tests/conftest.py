"""
tests/conftest.py - pytest 공통 픽스처

테스트용 카탈로그 디스크립터와 엔진을 제공합니다.

Usage:
    def test_something(sample_catalog, engine):
        # sample_catalog: tmp_path에 저장된 디스크립터로 만든 InstanceCatalog
        # engine: sample_catalog가 "sample" 벤더로 등록된 RightSizingEngine
        pass
"""

import json
import sys
from pathlib import Path

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """RS_* 환경 변수가 테스트에 섞이지 않도록 제거"""
    for key in ("RS_CONFIG_FILE", "RS_DATA_PATH", "RS_CATALOG_STRICT", "RS_SEARCH_MAX_NODES", "RS_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)

    yield


# =============================================================================
# 카탈로그 픽스처
# =============================================================================

# 문서 예시 패밀리: A 8vCPU/32GB/$10, B 4vCPU/16GB/$6, C 4vCPU/16GB/$5
SAMPLE_DESCRIPTOR = {
    "example": [
        {"model": "A", "vCPUs": 8, "RAM": 32, "Price": {"r1": 10.0}},
        {"model": "B", "vCPUs": 4, "RAM": 16, "Price": {"r1": 6.0}},
        {"model": "C", "vCPUs": 4, "RAM": 16, "Price": {"r1": 5.0}},
    ],
    "general": [
        {"model": "g.small", "vCPUs": 2, "RAM": 8, "Price": {"r1": 1.0, "r2": 1.2}},
        {"model": "g.medium", "vCPUs": 4, "RAM": 16, "Price": {"r1": 2.0, "r2": 2.4}},
        {"model": "g.large", "vCPUs": 8, "RAM": 32, "Price": {"r1": 4.0, "r2": 4.8}},
        {"model": "g.xlarge", "vCPUs": 16, "RAM": 64, "Price": {"r1": 8.0, "r2": 9.6}},
    ],
    "burst": [
        {"model": "b.big", "vCPUs": 8, "RAM": 32, "Price": {"r1": 4.0}},
        {"model": "b.half", "vCPUs": 4, "RAM": 16, "Price": {"r1": 1.5}},
    ],
    "solo": [
        {"model": "s.only", "vCPUs": 4, "RAM": 16, "Price": {"r1": 3.0}},
    ],
}


@pytest.fixture
def sample_descriptor():
    """디스크립터 딕셔너리 복사본"""
    return json.loads(json.dumps(SAMPLE_DESCRIPTOR))


@pytest.fixture
def descriptor_path(tmp_path, sample_descriptor):
    """tmp_path에 저장된 JSON 디스크립터 경로"""
    path = tmp_path / "sample-instances.json"
    path.write_text(json.dumps(sample_descriptor), encoding="utf-8")
    return path


@pytest.fixture
def sample_catalog(descriptor_path):
    """샘플 디스크립터로 만든 InstanceCatalog"""
    from core.data.catalog import InstanceCatalog

    return InstanceCatalog.from_file(descriptor_path, name="sample")


@pytest.fixture
def catalog_cache(sample_catalog):
    """"sample" 벤더가 미리 등록된 CatalogCache"""
    from core.data.catalog import CatalogCache

    cache = CatalogCache()
    cache.put("sample", sample_catalog)
    return cache


@pytest.fixture
def engine(catalog_cache):
    """샘플 카탈로그를 사용하는 RightSizingEngine"""
    from plugins.rightsizing import RightSizingEngine

    return RightSizingEngine(cache=catalog_cache)


def make_row(model, cpu=25, mem=25, vendor="sample", location="r1", **extra):
    """입력 행 생성 헬퍼"""
    row = {
        "cloud-vendor": vendor,
        "cloud-instance-type": model,
        "cpu-util": cpu,
        "mem-util": mem,
    }
    if location is not None:
        row["location"] = location
    row.update(extra)
    return row


@pytest.fixture
def row_factory():
    """make_row 픽스처 버전"""
    return make_row
