"""입출력 유틸리티.

하위 모듈:
- rows: 입력 행 로드 (JSON/YAML/CSV), 출력 행 저장 (JSON/CSV/Excel)
- excel: Excel 파일 출력 (openpyxl 기반)
"""

from .rows import OUTPUT_FORMATS, collect_headers, read_rows, write_rows

__all__: list[str] = [
    "OUTPUT_FORMATS",
    "read_rows",
    "write_rows",
    "collect_headers",
]
