"""
tests/shared/io/test_io_rows.py - shared/io 입출력 테스트
"""

import csv
import json

import pytest

from core.exceptions import FileIOError
from shared.io import collect_headers, read_rows, write_rows

ROWS = [
    {"cloud-vendor": "aws", "cloud-instance-type": "m5.large", "cpu-util": 20, "mem-util": 30},
    {"cloud-vendor": "aws", "cloud-instance-type": "c5.large", "cpu-util": "5", "mem-util": "50", "location": "eu-west-1"},
]

# =============================================================================
# read_rows
# =============================================================================


class TestReadRows:
    """입력 파일 로드 테스트"""

    def test_json_array(self, tmp_path):
        path = tmp_path / "in.json"
        path.write_text(json.dumps(ROWS), encoding="utf-8")
        assert read_rows(path) == ROWS

    def test_json_inputs_object(self, tmp_path):
        """{"inputs": [...]} 형식"""
        path = tmp_path / "in.json"
        path.write_text(json.dumps({"inputs": ROWS}), encoding="utf-8")
        assert read_rows(path) == ROWS

    def test_yaml(self, tmp_path):
        path = tmp_path / "in.yaml"
        path.write_text(
            "inputs:\n"
            "  - cloud-vendor: azure\n"
            "    cloud-instance-type: Standard_D4s_v3\n"
            "    cpu-util: 10\n"
            "    mem-util: '20'\n",
            encoding="utf-8",
        )
        rows = read_rows(path)
        assert rows == [
            {"cloud-vendor": "azure", "cloud-instance-type": "Standard_D4s_v3", "cpu-util": 10, "mem-util": "20"}
        ]

    def test_csv_drops_empty_cells(self, tmp_path):
        """빈 셀은 누락 필드"""
        path = tmp_path / "in.csv"
        path.write_text(
            "cloud-vendor,cloud-instance-type,cpu-util,mem-util,location\naws,m5.large,20,30,\n",
            encoding="utf-8",
        )
        assert read_rows(path) == [
            {"cloud-vendor": "aws", "cloud-instance-type": "m5.large", "cpu-util": "20", "mem-util": "30"}
        ]

    def test_csv_bom(self, tmp_path):
        path = tmp_path / "in.csv"
        path.write_text("cloud-vendor,cpu-util\naws,1\n", encoding="utf-8-sig")
        assert read_rows(path) == [{"cloud-vendor": "aws", "cpu-util": "1"}]

    def test_csv_cp949(self, tmp_path):
        """한국어 Windows 인코딩 CSV"""
        path = tmp_path / "in.csv"
        path.write_bytes("cloud-vendor,메모\naws,테스트\n".encode("cp949"))
        assert read_rows(path) == [{"cloud-vendor": "aws", "메모": "테스트"}]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileIOError):
            read_rows(tmp_path / "none.json")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "in.txt"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(FileIOError):
            read_rows(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "in.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(FileIOError):
            read_rows(path)

    @pytest.mark.parametrize("payload", ['{"rows": []}', "[1, 2]", '"text"'])
    def test_wrong_shape(self, tmp_path, payload):
        path = tmp_path / "in.json"
        path.write_text(payload, encoding="utf-8")
        with pytest.raises(FileIOError):
            read_rows(path)


# =============================================================================
# write_rows
# =============================================================================


class TestWriteRows:
    """출력 저장 테스트"""

    def test_collect_headers_first_seen_order(self):
        assert collect_headers(ROWS) == ["cloud-vendor", "cloud-instance-type", "cpu-util", "mem-util", "location"]

    def test_json(self, tmp_path):
        path = write_rows(ROWS, tmp_path / "out" / "result.json")
        assert json.loads(path.read_text(encoding="utf-8")) == ROWS

    def test_csv_union_headers(self, tmp_path):
        """행마다 키가 달라도 모든 열 출력"""
        path = write_rows(ROWS, tmp_path / "result.csv", fmt="csv")

        with path.open(encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            assert reader.fieldnames == collect_headers(ROWS)
            rows = list(reader)

        assert rows[0]["location"] == ""
        assert rows[1]["location"] == "eu-west-1"

    def test_unknown_format(self, tmp_path):
        with pytest.raises(FileIOError):
            write_rows(ROWS, tmp_path / "result.html", fmt="html")


class TestWriteExcel:
    """Excel 출력 테스트"""

    def test_excel(self, tmp_path):
        from openpyxl import load_workbook

        rows = [
            {"old-instance": "b.big", "cloud-instance-type": "b.half", "output-id": "abc"},
            {"old-instance": "b.big", "cloud-instance-type": "b.half", "output-id": "abc"},
            {"old-instance": "A", "cloud-instance-type": "C"},
        ]
        path = write_rows(rows, tmp_path / "result.xlsx", fmt="excel")

        wb = load_workbook(path)
        ws = wb.active
        assert ws.title == "Right-Sizing"
        assert [c.value for c in ws[1]] == ["old-instance", "cloud-instance-type", "output-id"]
        assert ws.cell(row=1, column=1).font.bold
        assert ws.cell(row=2, column=1).fill.start_color.rgb.endswith("CCE5FF")
        assert ws.cell(row=4, column=2).value == "C"
        assert ws.cell(row=4, column=3).value is None
        assert ws.freeze_panes == "A2"
