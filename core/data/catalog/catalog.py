"""
core/data/catalog/catalog.py - Vendor instance catalog

Parses a vendor descriptor file into lookup tables:
    - model -> family name
    - family name -> instance list (descriptor order)
    - model -> instance

Descriptor format (JSON or YAML), keyed by family name:
    {
        "m5": [
            {"model": "m5.large", "vCPUs": 2, "RAM": 8, "Price": {"us-east-1": 0.096}},
            ...
        ]
    }

A catalog is built once per vendor and treated as read-only afterwards.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml  # type: ignore[import-untyped]

from core.exceptions import CatalogLoadError

from .types import CloudInstance

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def _read_descriptor(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogLoadError(str(path), "파일을 읽을 수 없습니다", cause=e) from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogLoadError(str(path), "파싱 실패", cause=e) from e


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_instance(path: str, family: str, entry: Any) -> CloudInstance:
    if not isinstance(entry, Mapping):
        raise CatalogLoadError(path, f"{family}: 인스턴스 항목은 객체여야 합니다")

    model = entry.get("model")
    if not isinstance(model, str) or not model:
        raise CatalogLoadError(path, f"{family}: model 누락")

    vcpus = entry.get("vCPUs")
    ram = entry.get("RAM")
    if not _is_number(vcpus) or vcpus <= 0:
        raise CatalogLoadError(path, f"{model}: vCPUs는 양수여야 합니다")
    if not _is_number(ram) or ram <= 0:
        raise CatalogLoadError(path, f"{model}: RAM은 양수여야 합니다")

    prices = entry.get("Price", entry.get("price")) or {}
    if not isinstance(prices, Mapping):
        raise CatalogLoadError(path, f"{model}: Price는 리전 -> 요금 매핑이어야 합니다")
    for region, rate in prices.items():
        if not _is_number(rate) or rate < 0:
            raise CatalogLoadError(path, f"{model}: 잘못된 요금 ({region}={rate})")

    return CloudInstance(
        model=model,
        vcpus=vcpus,
        ram=ram,
        prices={str(region): float(rate) for region, rate in prices.items()},
        family=family,
    )


class InstanceCatalog:
    """Indexed, read-only view of one vendor descriptor

    Example:
        catalog = InstanceCatalog.from_file("core/data/catalog/data/aws-instances.json")

        instance = catalog.get_instance("m5.2xlarge")
        siblings = catalog.get_family("m5.2xlarge")
        hourly = catalog.price(instance, "us-east-1")
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.source: str | None = None
        self._model_to_family: dict[str, str] = {}
        self._family_to_instances: dict[str, list[CloudInstance]] = {}
        self._model_to_instance: dict[str, CloudInstance] = {}

    @classmethod
    def from_file(cls, path: str | Path, name: str = "", strict: bool = True) -> InstanceCatalog:
        catalog = cls(name=name)
        catalog.load(path, strict=strict)
        return catalog

    def load(self, path: str | Path, strict: bool = True) -> None:
        """Build the indices from a descriptor file

        Args:
            path: JSON/YAML descriptor path
            strict: If False, log the failure and leave the catalog empty

        Raises:
            CatalogLoadError: descriptor unreadable or invalid (strict only)
        """
        path = Path(path)
        try:
            self._build(path)
        except CatalogLoadError:
            if strict:
                raise
            logger.exception("카탈로그 로드 실패, 빈 카탈로그로 계속 진행: %s", path)
            self._clear()
            return

        self.source = str(path)
        logger.info(
            "카탈로그 로드 완료: %s (families=%d, models=%d)",
            path,
            len(self._family_to_instances),
            len(self._model_to_instance),
        )

    def _build(self, path: Path) -> None:
        data = _read_descriptor(path)
        if not isinstance(data, Mapping):
            raise CatalogLoadError(str(path), "최상위는 패밀리 이름 -> 인스턴스 목록 매핑이어야 합니다")

        model_to_family: dict[str, str] = {}
        family_to_instances: dict[str, list[CloudInstance]] = {}
        model_to_instance: dict[str, CloudInstance] = {}

        for family_name, entries in data.items():
            family_name = str(family_name)
            if not isinstance(entries, list):
                raise CatalogLoadError(str(path), f"{family_name}: 인스턴스 목록이어야 합니다")

            instances = [_parse_instance(str(path), family_name, entry) for entry in entries]
            for instance in instances:
                if instance.model in model_to_instance:
                    raise CatalogLoadError(str(path), f"중복 모델: {instance.model}")
                model_to_family[instance.model] = family_name
                model_to_instance[instance.model] = instance
            family_to_instances[family_name] = instances

        self._model_to_family = model_to_family
        self._family_to_instances = family_to_instances
        self._model_to_instance = model_to_instance

    def _clear(self) -> None:
        self._model_to_family = {}
        self._family_to_instances = {}
        self._model_to_instance = {}

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_instance(self, model: str) -> CloudInstance | None:
        return self._model_to_instance.get(model)

    def get_family_name(self, model: str) -> str | None:
        return self._model_to_family.get(model)

    def get_family(self, model: str) -> list[CloudInstance] | None:
        """Sibling instances of model's family (a fresh list), or None"""
        family_name = self._model_to_family.get(model)
        if family_name is None:
            return None
        instances = self._family_to_instances.get(family_name)
        return list(instances) if instances is not None else None

    @staticmethod
    def price(instance: CloudInstance, region: str | None) -> float:
        return instance.get_price(region)

    @property
    def families(self) -> Mapping[str, tuple[CloudInstance, ...]]:
        return MappingProxyType({name: tuple(items) for name, items in self._family_to_instances.items()})

    def models(self) -> list[str]:
        return list(self._model_to_instance)

    @property
    def is_empty(self) -> bool:
        return not self._model_to_instance

    def __contains__(self, model: object) -> bool:
        return model in self._model_to_instance

    def __iter__(self) -> Iterator[CloudInstance]:
        return iter(self._model_to_instance.values())

    def __len__(self) -> int:
        return len(self._model_to_instance)

    def __repr__(self) -> str:
        return f"InstanceCatalog(name={self.name!r}, families={len(self._family_to_instances)}, models={len(self)})"
