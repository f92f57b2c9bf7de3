"""
core/config.py - 중앙 설정 관리

설정 우선순위 (뒤에 오는 값이 우선):
    1. 기본값 (Settings 필드 기본값)
    2. YAML 설정 파일 (--config 또는 RS_CONFIG_FILE)
    3. 환경변수 (RS_*)
    4. 명시적 오버라이드 (CLI 옵션)

YAML 설정 파일 예시:
    data_path: ./my-instances.json
    strict_catalog: true
    search_max_nodes: 200000
    log_level: INFO
    catalogs:
      gcp: ./gcp-instances.yaml

환경변수:
    RS_CONFIG_FILE: YAML 설정 파일 경로
    RS_DATA_PATH: custom 카탈로그 디스크립터 경로
    RS_CATALOG_STRICT: 카탈로그 로드 실패 시 예외 발생 여부 (true/false)
    RS_SEARCH_MAX_NODES: 조합 탐색 노드 예산 (0 = 무제한)
    RS_LOG_LEVEL: 로그 레벨
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from core.exceptions import ConfigError

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# 내장 벤더 디스크립터 디렉토리
BUILTIN_DATA_DIR = PROJECT_ROOT / "core" / "data" / "catalog" / "data"

# 설정 파일에 custom 카탈로그가 로드되는 캐시 키
CUSTOM_CATALOG_KEY = "custom"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def get_version() -> str:
    """version.txt에서 버전 문자열 반환 (없으면 0.0.0)"""
    version_file = PROJECT_ROOT / "version.txt"
    try:
        return version_file.read_text(encoding="utf-8").strip() or "0.0.0"
    except OSError:
        return "0.0.0"


@dataclass
class Settings:
    """런타임 설정"""

    data_path: str | None = None
    catalogs: dict[str, str] = field(default_factory=dict)
    data_dir: Path = BUILTIN_DATA_DIR
    strict_catalog: bool = True
    search_max_nodes: int = 0
    log_level: str = "WARNING"

    def __post_init__(self):
        self.data_dir = Path(self.data_dir)
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError("log_level", f"알 수 없는 로그 레벨: {self.log_level}")
        if not isinstance(self.search_max_nodes, int) or isinstance(self.search_max_nodes, bool):
            raise ConfigError("search_max_nodes", "정수여야 합니다")
        if self.search_max_nodes < 0:
            raise ConfigError("search_max_nodes", "0 이상이어야 합니다")
        if not isinstance(self.catalogs, dict):
            raise ConfigError("catalogs", "벤더 -> 경로 매핑이어야 합니다")

    def catalog_path(self, vendor: str) -> Path | None:
        """벤더의 디스크립터 경로 (설정 매핑 우선, 없으면 내장 파일)"""
        if vendor in self.catalogs:
            return Path(self.catalogs[vendor])

        builtin = self.data_dir / f"{vendor}-instances.json"
        if builtin.exists():
            return builtin
        return None


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(key, f"불리언 값이 아닙니다: {value}")


def _parse_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(key, f"정수 값이 아닙니다: {value}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(key, f"정수 값이 아닙니다: {value}", cause=e) from e


def load_config_file(path: str | Path) -> dict[str, Any]:
    """YAML 설정 파일 로드

    Args:
        path: 설정 파일 경로

    Returns:
        설정 딕셔너리 (빈 파일이면 빈 딕셔너리)
    """
    config_file = Path(path)
    try:
        with config_file.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError("config_file", f"설정 파일을 읽을 수 없습니다: {config_file}", cause=e) from e
    except yaml.YAMLError as e:
        raise ConfigError("config_file", f"YAML 파싱 실패: {config_file}", cause=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("config_file", "최상위는 매핑이어야 합니다")
    return data


def _from_env() -> dict[str, Any]:
    values: dict[str, Any] = {}

    data_path = os.getenv("RS_DATA_PATH", "").strip()
    if data_path:
        values["data_path"] = data_path

    strict = os.getenv("RS_CATALOG_STRICT", "").strip()
    if strict:
        values["strict_catalog"] = _parse_bool("RS_CATALOG_STRICT", strict)

    max_nodes = os.getenv("RS_SEARCH_MAX_NODES", "").strip()
    if max_nodes:
        values["search_max_nodes"] = _parse_int("RS_SEARCH_MAX_NODES", max_nodes)

    log_level = os.getenv("RS_LOG_LEVEL", "").strip()
    if log_level:
        values["log_level"] = log_level

    return values


def load_settings(config_file: str | Path | None = None, **overrides: Any) -> Settings:
    """기본값 <- 설정 파일 <- 환경변수 <- 오버라이드 순으로 Settings 생성

    Args:
        config_file: YAML 설정 파일 (None이면 RS_CONFIG_FILE 참조)
        **overrides: 명시적 설정값 (None 값은 무시)

    Returns:
        Settings 인스턴스
    """
    known = {f.name for f in fields(Settings)}
    values: dict[str, Any] = {}

    config_file = config_file or os.getenv("RS_CONFIG_FILE", "").strip() or None
    if config_file:
        file_values = load_config_file(config_file)
        unknown = set(file_values) - known
        if unknown:
            raise ConfigError("config_file", f"알 수 없는 설정 키: {', '.join(sorted(unknown))}")
        values.update(file_values)
        logger.debug("설정 파일 로드: %s", config_file)

    values.update(_from_env())
    values.update({k: v for k, v in overrides.items() if v is not None})

    if "strict_catalog" in values:
        values["strict_catalog"] = _parse_bool("strict_catalog", values["strict_catalog"])
    if "search_max_nodes" in values:
        values["search_max_nodes"] = _parse_int("search_max_nodes", values["search_max_nodes"])

    return Settings(**values)
