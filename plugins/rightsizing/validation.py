"""
plugins/rightsizing/validation.py - 입력 행 검증 및 정규화

입력 경계에서 한 번만 검증하고, 이후 알고리즘은 검증된 숫자 값만 사용합니다.

입력 필드:
    cloud-instance-type: 필수, 문자열
    cloud-vendor: 필수, 문자열
    cpu-util: 필수, 0~100 숫자 또는 숫자 문자열
    mem-util: 필수, 0~100 숫자 또는 숫자 문자열
    target-cpu-util: 선택 (기본 100), 0 초과 100 이하
    location: 선택, 가격 조회용 리전
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from core.exceptions import InputValidationError

# 숫자 문자열 형식 (음수/지수 표기 불허)
NUMERIC_STRING = re.compile(r"^[0-9]+(\.[0-9]+)?$")

DEFAULT_TARGET_CPU_UTIL = 100.0


def parse_percentage(row: Mapping[str, Any], key: str, allow_zero: bool = True) -> float:
    """숫자 또는 숫자 문자열 필드를 0~100 범위의 float로 변환

    Raises:
        InputValidationError: 누락, 타입 오류, 숫자가 아닌 문자열, 범위 초과
    """
    if key not in row or row[key] is None:
        raise InputValidationError(key, "필수 필드가 없습니다")

    value = row[key]
    if isinstance(value, bool):
        raise InputValidationError(key, "숫자 또는 숫자 문자열이어야 합니다", value)

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not NUMERIC_STRING.match(text):
            raise InputValidationError(key, "숫자 문자열이 아닙니다", value)
        number = float(text)
    else:
        raise InputValidationError(key, "숫자 또는 숫자 문자열이어야 합니다", value)

    if number != number or number < 0 or number > 100:
        raise InputValidationError(key, "0 ~ 100 범위여야 합니다", value)
    if not allow_zero and number == 0:
        raise InputValidationError(key, "0보다 커야 합니다", value)
    return number


def _require_string(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    if value is None:
        raise InputValidationError(key, "필수 필드가 없습니다")
    if not isinstance(value, str) or not value.strip():
        raise InputValidationError(key, "비어있지 않은 문자열이어야 합니다", value)
    return value.strip()


@dataclass(frozen=True)
class RightSizingInput:
    """검증된 입력 행 (퍼센트 값은 0~100)"""

    instance_type: str
    vendor: str
    cpu_util: float
    mem_util: float
    target_cpu_util: float = DEFAULT_TARGET_CPU_UTIL
    location: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> RightSizingInput:
        if not isinstance(row, Mapping):
            raise InputValidationError("input", "입력 행은 객체여야 합니다", row)

        instance_type = _require_string(row, "cloud-instance-type")
        vendor = _require_string(row, "cloud-vendor")
        cpu_util = parse_percentage(row, "cpu-util")
        mem_util = parse_percentage(row, "mem-util")

        target = DEFAULT_TARGET_CPU_UTIL
        if row.get("target-cpu-util") is not None:
            target = parse_percentage(row, "target-cpu-util", allow_zero=False)

        location = row.get("location")
        if location is not None and not isinstance(location, str):
            raise InputValidationError("location", "문자열이어야 합니다", location)

        return cls(
            instance_type=instance_type,
            vendor=vendor,
            cpu_util=cpu_util,
            mem_util=mem_util,
            target_cpu_util=target,
            location=location or None,
        )

    @property
    def cpu_fraction(self) -> float:
        return self.cpu_util / 100

    @property
    def mem_fraction(self) -> float:
        return self.mem_util / 100

    @property
    def target_fraction(self) -> float:
        return self.target_cpu_util / 100
