# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈

CLI 전용 UI 컴포넌트들 (메시지, 결과 테이블, 카탈로그 테이블)
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    console,
    get_console,
    get_logger,
    logger,
    print_error,
    print_info,
    print_success,
    print_warning,
    render_families,
    render_family,
    render_results,
)

__all__ = [
    "SYMBOL_ERROR",
    "SYMBOL_INFO",
    "SYMBOL_SUCCESS",
    "SYMBOL_WARNING",
    "console",
    "get_console",
    "get_logger",
    "logger",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "render_families",
    "render_family",
    "render_results",
]
