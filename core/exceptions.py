"""
core/exceptions.py - 통합 예외 계층 구조

라이트사이징 전반에서 사용되는 예외 클래스들을 정의합니다.
모든 예외는 단일 입력 행(row)에 대해서만 치명적이며,
카탈로그 상태를 변경하거나 다른 행의 처리에 영향을 주지 않습니다.

예외 계층 구조:
    RightSizingError (베이스)
    ├── InputValidationError (입력 행 검증)
    │   └── UnknownVendorError
    ├── InstanceNotFoundError (카탈로그에 없는 모델, LookupError 호환)
    ├── CatalogLoadError (디스크립터 파일 읽기/파싱 실패)
    ├── ConfigError (설정 관련)
    └── FileIOError (입출력 파일)

Usage:
    from core.exceptions import InstanceNotFoundError

    instance = catalog.get_instance(model)
    if instance is None:
        raise InstanceNotFoundError(model=model, vendor=vendor)
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class RightSizingError(Exception):
    """Cloud Rightsizing 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 입력 검증 관련 예외
# =============================================================================


class InputValidationError(RightSizingError):
    """입력 행 검증 오류

    필수 필드 누락, 타입 불일치, 범위 초과, 숫자가 아닌 문자열 등.
    """

    def __init__(
        self,
        field: str,
        reason: str,
        value: Any = None,
        cause: Optional[Exception] = None,
    ):
        message = f"입력 검증 오류 [{field}]: {reason}"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.reason = reason
        self.details.update(
            {
                "field": field,
                "value": None if value is None else str(value),
                "reason": reason,
            }
        )


class UnknownVendorError(InputValidationError):
    """내장/설정된 디스크립터가 없는 cloud-vendor"""

    def __init__(self, vendor: str):
        super().__init__(
            field="cloud-vendor",
            reason=f"지원하지 않는 클라우드 벤더입니다: {vendor}",
            value=vendor,
        )
        self.vendor = vendor


# =============================================================================
# 카탈로그 관련 예외
# =============================================================================


class InstanceNotFoundError(RightSizingError, LookupError):
    """벤더 카탈로그에 존재하지 않는 인스턴스 모델"""

    def __init__(self, model: str, vendor: str):
        message = f"Invalid cloud instance: {model}, not found in cloud vendor database: {vendor}"
        super().__init__(message)
        self.model = model
        self.vendor = vendor
        self.details.update({"model": model, "vendor": vendor})


class CatalogLoadError(RightSizingError):
    """인스턴스 디스크립터 파일을 읽거나 파싱할 수 없음"""

    def __init__(
        self,
        path: str,
        reason: str,
        cause: Optional[Exception] = None,
    ):
        message = f"카탈로그 로드 실패 [{path}]: {reason}"
        super().__init__(message, cause)
        self.path = path
        self.reason = reason
        self.details["path"] = path


# =============================================================================
# 설정 / 입출력 관련 예외
# =============================================================================


class ConfigError(RightSizingError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


class FileIOError(RightSizingError):
    """입력/출력 파일 처리 오류"""

    def __init__(
        self,
        path: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(f"파일 오류 [{path}]: {message}", cause)
        self.path = path
        self.details["path"] = path


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def is_row_error(error: Exception) -> bool:
    """단일 행만 실패시키는 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        입력 검증 또는 모델 조회 실패이면 True
    """
    return isinstance(error, (InputValidationError, InstanceNotFoundError))
