# core/__init__.py
"""
core - Cloud Rightsizing 인프라

아키텍처:
    core/
    ├── data/
    │   └── catalog/    # 벤더 인스턴스 카탈로그 (로드, 조회, 캐시)
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 설정 사용
    from core.config import load_settings
    settings = load_settings()

    # 카탈로그
    from core.data.catalog import CatalogCache
    catalog = CatalogCache(settings).get("aws")

    # 예외 처리
    from core.exceptions import InstanceNotFoundError
"""

from core import config, data, exceptions

__all__: list[str] = [
    "data",
    "config",
    "exceptions",
]
