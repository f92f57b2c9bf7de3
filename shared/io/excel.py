"""
shared/io/excel.py - 라이트사이징 결과 Excel 출력

헤더 스타일(파란 배경, 흰 글자)과 교대 행 배경, 열 너비 자동 조정.
같은 output-id로 묶인 행(하나를 여러 인스턴스로 대체)은 정보 색상으로 표시합니다.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

# 색상 상수 (RGB Hex)
COLOR_HEADER_BG = "4472C4"  # 헤더 배경 (파란색)
COLOR_HEADER_FG = "FFFFFF"  # 헤더 글자 (흰색)
COLOR_ALT_ROW_BG = "F2F2F2"  # 교대 행 배경 (연한 회색)
COLOR_INFO = "CCE5FF"  # 묶음 행 (연한 파랑)

MAX_COLUMN_WIDTH = 50


def _thin_border() -> Border:
    thin_side = Side(style="thin", color="808080")
    return Border(left=thin_side, right=thin_side, top=thin_side, bottom=thin_side)


def write_excel(rows: Sequence[Mapping[str, Any]], path: str | Path, sheet_name: str = "Right-Sizing") -> Path:
    """출력 행을 xlsx로 저장

    Args:
        rows: 출력 행 목록
        path: 저장 경로
        sheet_name: 시트 이름

    Returns:
        저장된 파일 경로
    """
    from .rows import collect_headers

    path = Path(path)
    headers = collect_headers(rows)

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    border = _thin_border()
    header_font = Font(size=10, bold=True, color=COLOR_HEADER_FG)
    header_fill = PatternFill(start_color=COLOR_HEADER_BG, end_color=COLOR_HEADER_BG, fill_type="solid")
    alt_fill = PatternFill(start_color=COLOR_ALT_ROW_BG, end_color=COLOR_ALT_ROW_BG, fill_type="solid")
    group_fill = PatternFill(start_color=COLOR_INFO, end_color=COLOR_INFO, fill_type="solid")

    for col, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.border = border
        cell.alignment = Alignment(horizontal="center", vertical="center")

    widths = [len(str(h)) for h in headers]
    for row_idx, row in enumerate(rows, start=2):
        if row.get("output-id"):
            fill = group_fill
        elif row_idx % 2 == 1:
            fill = alt_fill
        else:
            fill = None

        for col, header in enumerate(headers, start=1):
            value = row.get(header)
            if isinstance(value, (dict, list)):
                value = str(value)
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.border = border
            if fill is not None:
                cell.fill = fill
            if value is not None:
                widths[col - 1] = max(widths[col - 1], len(str(value)))

    for col, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(col)].width = min(width + 2, MAX_COLUMN_WIDTH)

    ws.freeze_panes = "A2"
    wb.save(path)
    return path
