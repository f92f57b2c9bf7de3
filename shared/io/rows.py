"""
shared/io/rows.py - 입력/출력 행 파일 처리

입력 형식:
    - JSON: 객체 배열 또는 {"inputs": [...]}
    - YAML: JSON과 동일한 구조
    - CSV: 헤더 행 + 데이터 행 (값은 문자열 그대로, 검증은 입력 경계에서 수행)

출력 형식:
    - json: 들여쓰기 2칸, ensure_ascii=False
    - csv: 모든 행의 키 합집합을 첫 등장 순서대로 헤더로 사용
    - excel: shared.io.excel.write_excel
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from core.exceptions import FileIOError

logger = logging.getLogger(__name__)

# CSV 인코딩 감지 우선순위 (BOM 포함 UTF-8 -> UTF-8 -> 한국어 Windows)
ENCODING_PRIORITIES = ["utf-8-sig", "utf-8", "cp949"]

OUTPUT_FORMATS = ("json", "csv", "excel")


def _read_csv(path: Path) -> list[dict[str, Any]]:
    last_error: Exception | None = None
    for encoding in ENCODING_PRIORITIES:
        try:
            with path.open(encoding=encoding, newline="") as f:
                reader = csv.DictReader(f)
                # 빈 셀은 누락 필드로 취급
                return [{k: v for k, v in row.items() if k and v not in (None, "")} for row in reader]
        except UnicodeDecodeError as e:
            last_error = e
            logger.debug("CSV 인코딩 불일치 (%s): %s", encoding, path)
    raise FileIOError(str(path), "CSV 인코딩을 감지할 수 없습니다", cause=last_error)


def _normalize(path: Path, data: Any) -> list[dict[str, Any]]:
    if isinstance(data, Mapping) and "inputs" in data:
        data = data["inputs"]
    if not isinstance(data, list):
        raise FileIOError(str(path), "입력은 객체 배열이어야 합니다")
    for index, row in enumerate(data):
        if not isinstance(row, Mapping):
            raise FileIOError(str(path), f"{index}번째 행이 객체가 아닙니다")
    return [dict(row) for row in data]


def read_rows(path: str | Path) -> list[dict[str, Any]]:
    """입력 파일에서 행 목록 로드

    Args:
        path: .json / .yaml / .yml / .csv 파일 경로

    Returns:
        행 딕셔너리 목록

    Raises:
        FileIOError: 파일 없음, 파싱 실패, 지원하지 않는 형식
    """
    path = Path(path)
    if not path.exists():
        raise FileIOError(str(path), "파일을 찾을 수 없습니다")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        return _read_csv(path)

    try:
        text = path.read_text(encoding="utf-8")
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        elif suffix == ".json":
            data = json.loads(text)
        else:
            raise FileIOError(str(path), f"지원하지 않는 입력 형식: {suffix}")
    except (OSError, UnicodeDecodeError) as e:
        raise FileIOError(str(path), "파일을 읽을 수 없습니다", cause=e) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise FileIOError(str(path), "파싱 실패", cause=e) from e

    return _normalize(path, data)


def collect_headers(rows: Sequence[Mapping[str, Any]]) -> list[str]:
    """모든 행의 키를 첫 등장 순서대로 반환"""
    headers: dict[str, None] = {}
    for row in rows:
        for key in row:
            headers.setdefault(key, None)
    return list(headers)


def write_rows(rows: Sequence[Mapping[str, Any]], path: str | Path, fmt: str = "json") -> Path:
    """출력 행 저장

    Args:
        rows: 출력 행 목록
        path: 저장 경로 (상위 디렉토리 자동 생성)
        fmt: json / csv / excel

    Returns:
        저장된 파일 경로
    """
    if fmt not in OUTPUT_FORMATS:
        raise FileIOError(str(path), f"지원하지 않는 출력 형식: {fmt}")

    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        if fmt == "excel":
            from .excel import write_excel

            return write_excel(rows, path)

        if fmt == "csv":
            with path.open("w", encoding="utf-8-sig", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=collect_headers(rows), restval="")
                writer.writeheader()
                writer.writerows(rows)
        else:
            path.write_text(json.dumps(list(rows), ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as e:
        raise FileIOError(str(path), "파일을 저장할 수 없습니다", cause=e) from e

    logger.info("결과 저장: %s (%d행)", path, len(rows))
    return path
