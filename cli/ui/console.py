"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들
"""

import logging
import platform
from collections.abc import Mapping, Sequence
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from core.data.catalog import CloudInstance


def get_console() -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()


def get_logger(name: str = "rich", level: int = logging.INFO) -> logging.Logger:
    """Rich 핸들러가 설정된 logger를 반환합니다.

    Args:
        name: logger 이름 (기본값: "rich")
        level: 로그 레벨

    Returns:
        logging.Logger: 설정된 logger 인스턴스
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 이미 핸들러가 설정되어 있으면 반환
    if logger.handlers:
        return logger

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    return logger


# 전역 logger 인스턴스 (CLI 실패 traceback 출력)
logger = get_logger()


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

# 상태 심볼
SYMBOL_SUCCESS = "✓"  # 완료
SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고
SYMBOL_INFO = "•"  # 정보


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)"""
    console.print(f"[green]{SYMBOL_SUCCESS} {message}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)"""
    console.print(f"[red]{SYMBOL_ERROR} {message}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {message}[/yellow]")


def print_info(message: str) -> None:
    """정보 메시지 출력 (파란색 정보)"""
    console.print(f"[blue]{SYMBOL_INFO} {message}[/blue]")


# =============================================================================
# 테이블 출력
# =============================================================================

# (헤더, 행 키, 정렬)
RESULT_COLUMNS = [
    ("Old Instance", "old-instance", "left"),
    ("New Instance", "cloud-instance-type", "left"),
    ("CPU %", "cpu-util", "right"),
    ("Mem %", "mem-util", "right"),
    ("Memory GB", "total-memoryGB", "right"),
    ("Price Change", "price-change", "left"),
    ("Group", "output-id", "left"),
    ("Recommendation", "Recommendation", "left"),
]


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    return escape(str(value))


def render_results(rows: Sequence[Mapping[str, Any]], title: str = "Right-Sizing Results") -> Table:
    """출력 행 목록을 Rich 테이블로 렌더링

    output-id는 앞 8자리만 표시합니다.
    """
    table = Table(title=title, show_lines=False, header_style="bold cyan")
    for header, _, justify in RESULT_COLUMNS:
        table.add_column(header, justify=justify)

    for row in rows:
        cells = []
        for _, key, _ in RESULT_COLUMNS:
            value = row.get(key)
            if key == "output-id" and value:
                value = str(value)[:8]
            cells.append(_cell(value))
        style = "green" if str(row.get("price-change", "")).startswith("Price decreased") else None
        table.add_row(*cells, style=style)
    return table


def render_family(name: str, instances: Sequence[CloudInstance], region: str | None = None) -> Table:
    """패밀리 인스턴스 목록 테이블 (region 지정 시 해당 리전 요금)"""
    table = Table(title=f"Family: {name}", header_style="bold cyan")
    table.add_column("Model")
    table.add_column("vCPUs", justify="right")
    table.add_column("RAM GB", justify="right")
    table.add_column(f"Price ({region})" if region else "Regions", justify="right" if region else "left")

    for instance in instances:
        if region:
            price = instance.prices.get(region)
            last = f"{price:.4f}" if price is not None else "-"
        else:
            last = ", ".join(instance.regions) or "-"
        table.add_row(escape(instance.model), _cell(instance.vcpus), _cell(instance.ram), last)
    return table


def render_families(families: Mapping[str, Sequence[CloudInstance]], vendor: str) -> Table:
    """카탈로그 패밀리 요약 테이블"""
    table = Table(title=f"Catalog: {vendor}", header_style="bold cyan")
    table.add_column("Family")
    table.add_column("Models", justify="right")
    table.add_column("Smallest")
    table.add_column("Largest")

    for name, instances in families.items():
        by_ram = sorted(instances, key=lambda item: item.ram)
        smallest = by_ram[0].model if by_ram else "-"
        largest = by_ram[-1].model if by_ram else "-"
        table.add_row(escape(name), str(len(instances)), escape(smallest), escape(largest))
    return table
