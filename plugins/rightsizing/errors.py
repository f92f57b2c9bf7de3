"""
plugins/rightsizing/errors.py - 행 단위 에러 수집

실패한 입력 행을 건너뛰고 나머지 행을 계속 처리할 때 사용합니다.

주요 구성 요소:
- ErrorSeverity: 에러 심각도 분류
- CollectedError: 수집된 에러 상세 정보
- ErrorCollector: 스레드 세이프 에러 수집기

Example:
    collector = ErrorCollector()

    try:
        outputs = engine.process_input(row)
    except RightSizingError as e:
        collector.collect(e, index, row)

    if collector.has_errors:
        print(collector.get_summary())
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from core.exceptions import is_row_error

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """에러 심각도 분류"""

    CRITICAL = "critical"  # 카탈로그/설정 문제 - 다른 행도 실패할 가능성
    WARNING = "warning"  # 해당 행만 실패


@dataclass
class CollectedError:
    """수집된 에러 상세 정보

    Attributes:
        timestamp: 에러 발생 시각
        row_index: 입력 행 번호 (0부터)
        instance_type: 행의 cloud-instance-type (있으면)
        vendor: 행의 cloud-vendor (있으면)
        error_type: 예외 클래스 이름
        error_message: 에러 메시지
        severity: 에러 심각도
    """

    timestamp: datetime
    row_index: int
    instance_type: str
    vendor: str
    error_type: str
    error_message: str
    severity: ErrorSeverity

    def __str__(self) -> str:
        loc = f"row {self.row_index}"
        if self.instance_type:
            loc = f"{loc} ({self.vendor}/{self.instance_type})"
        return f"[{self.severity.value.upper()}] {loc} - {self.error_type}: {self.error_message}"

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (로깅/직렬화용)"""
        return {
            "timestamp": self.timestamp.isoformat(),
            "row_index": self.row_index,
            "instance_type": self.instance_type,
            "vendor": self.vendor,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "severity": self.severity.value,
        }


class ErrorCollector:
    """스레드 세이프 에러 수집기"""

    def __init__(self):
        self._errors: list[CollectedError] = []
        self._lock = threading.Lock()

    def collect(self, error: Exception, row_index: int, row: Any = None) -> CollectedError:
        """예외를 수집하고 로깅

        입력 검증/모델 조회 실패는 WARNING, 그 외(카탈로그 로드 등)는 CRITICAL.
        """
        severity = ErrorSeverity.WARNING if is_row_error(error) else ErrorSeverity.CRITICAL
        fields = row if isinstance(row, Mapping) else {}

        collected = CollectedError(
            timestamp=datetime.now(),
            row_index=row_index,
            instance_type=str(fields.get("cloud-instance-type") or ""),
            vendor=str(fields.get("cloud-vendor") or ""),
            error_type=type(error).__name__,
            error_message=str(error),
            severity=severity,
        )

        with self._lock:
            self._errors.append(collected)

        if severity == ErrorSeverity.CRITICAL:
            logger.error("%s", collected)
        else:
            logger.warning("%s", collected)
        return collected

    @property
    def errors(self) -> list[CollectedError]:
        """수집된 모든 에러의 복사본 반환"""
        with self._lock:
            return list(self._errors)

    @property
    def has_errors(self) -> bool:
        with self._lock:
            return len(self._errors) > 0

    def get_summary(self) -> str:
        """심각도별 에러 건수 요약 (예: "에러 3건 (critical: 1건, warning: 2건)")"""
        with self._lock:
            if not self._errors:
                return "에러 없음"

            by_severity: dict[str, int] = {}
            for e in self._errors:
                by_severity[e.severity.value] = by_severity.get(e.severity.value, 0) + 1

            parts = [f"{k}: {v}건" for k, v in sorted(by_severity.items())]
            return f"에러 {len(self._errors)}건 ({', '.join(parts)})"

    def clear(self) -> None:
        with self._lock:
            self._errors.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._errors)
