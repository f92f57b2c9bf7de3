"""
tests/plugins/rightsizing/test_rightsizing_validation.py - 입력 검증 테스트
"""

import pytest

from core.exceptions import InputValidationError
from plugins.rightsizing.validation import DEFAULT_TARGET_CPU_UTIL, RightSizingInput, parse_percentage


class TestParsePercentage:
    """parse_percentage 테스트"""

    @pytest.mark.parametrize(
        "value,expected",
        [(0, 0.0), (25, 25.0), (100, 100.0), (33.3, 33.3), ("20", 20.0), ("20.5", 20.5), (" 7 ", 7.0)],
    )
    def test_valid(self, value, expected):
        assert parse_percentage({"cpu-util": value}, "cpu-util") == expected

    @pytest.mark.parametrize("value", ["abc", "-5", "1e3", "", "20%", ".5", "5."])
    def test_non_numeric_string(self, value):
        with pytest.raises(InputValidationError) as exc_info:
            parse_percentage({"cpu-util": value}, "cpu-util")
        assert exc_info.value.field == "cpu-util"

    @pytest.mark.parametrize("value", [-1, 100.5, "101", float("nan")])
    def test_out_of_range(self, value):
        with pytest.raises(InputValidationError):
            parse_percentage({"mem-util": value}, "mem-util")

    @pytest.mark.parametrize("value", [True, False, [20], {"v": 1}])
    def test_wrong_type(self, value):
        with pytest.raises(InputValidationError):
            parse_percentage({"cpu-util": value}, "cpu-util")

    def test_missing(self):
        with pytest.raises(InputValidationError, match="cpu-util"):
            parse_percentage({}, "cpu-util")

    def test_zero_not_allowed(self):
        with pytest.raises(InputValidationError):
            parse_percentage({"target-cpu-util": "0"}, "target-cpu-util", allow_zero=False)


class TestRightSizingInput:
    """RightSizingInput.from_row 테스트"""

    def test_full_row(self, row_factory):
        parsed = RightSizingInput.from_row(row_factory("g.large", cpu="20", mem=30, **{"target-cpu-util": "80"}))

        assert parsed.instance_type == "g.large"
        assert parsed.vendor == "sample"
        assert parsed.cpu_util == 20.0
        assert parsed.mem_util == 30.0
        assert parsed.target_cpu_util == 80.0
        assert parsed.location == "r1"
        assert parsed.cpu_fraction == pytest.approx(0.2)
        assert parsed.mem_fraction == pytest.approx(0.3)
        assert parsed.target_fraction == pytest.approx(0.8)

    def test_defaults(self, row_factory):
        """target-cpu-util 기본 100, location 선택"""
        parsed = RightSizingInput.from_row(row_factory("g.large", location=None))
        assert parsed.target_cpu_util == DEFAULT_TARGET_CPU_UTIL
        assert parsed.target_fraction == 1.0
        assert parsed.location is None

    def test_empty_location_is_none(self, row_factory):
        assert RightSizingInput.from_row(row_factory("g.large", location="")).location is None

    @pytest.mark.parametrize(
        "field,value",
        [
            ("cloud-instance-type", None),
            ("cloud-instance-type", ""),
            ("cloud-instance-type", 5),
            ("cloud-vendor", None),
            ("cpu-util", "high"),
            ("mem-util", 120),
            ("target-cpu-util", 0),
            ("location", 42),
        ],
    )
    def test_invalid_field(self, row_factory, field, value):
        """잘못된 필드 이름이 예외에 포함"""
        row = row_factory("g.large")
        row[field] = value
        with pytest.raises(InputValidationError) as exc_info:
            RightSizingInput.from_row(row)
        assert exc_info.value.field == field

    def test_first_invalid_field_reported(self):
        """여러 필드가 잘못되면 앞 필드부터 보고"""
        with pytest.raises(InputValidationError) as exc_info:
            RightSizingInput.from_row({"cloud-vendor": "aws", "cpu-util": "x"})
        assert exc_info.value.field == "cloud-instance-type"

    def test_not_a_mapping(self):
        with pytest.raises(InputValidationError):
            RightSizingInput.from_row(["not", "a", "row"])

    def test_frozen(self, row_factory):
        parsed = RightSizingInput.from_row(row_factory("g.large"))
        with pytest.raises(AttributeError):
            parsed.cpu_util = 1
