"""날짜 유틸리티 테스트"""

from datetime import date, datetime

import pytest

from src.utils.date_utils import add_days, format_date, parse_date, weekday_name


class TestParseDate:

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        ("2026-10-21", "2026-10-21"),
        ("2026/10/21", "2026-10-21"),
        ("2026-1-5", "2026-01-05"),
        ("20261021", "2026-10-21"),
        (20261021, "2026-10-21"),
        (20261021.0, "2026-10-21"),
        (date(2026, 10, 21), "2026-10-21"),
        (datetime(2026, 10, 21, 9, 30), "2026-10-21"),
        (" 2026-10-21 ", "2026-10-21"),
    ])
    def test_supported_formats(self, value, expected):
        assert parse_date(value) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, "", "날짜없음", "2026-13-01", "20260231", "1021"])
    def test_unparseable_returns_none(self, value):
        assert parse_date(value) is None


class TestWeekdayName:

    @pytest.mark.unit
    def test_korean_weekday(self):
        assert weekday_name("2026-10-19") == "월"
        assert weekday_name("2026-10-25") == "일"

    @pytest.mark.unit
    def test_invalid_gives_empty(self):
        assert weekday_name("nope") == ""


@pytest.mark.unit
def test_add_and_format():
    assert format_date(add_days(date(2026, 10, 19), 2)) == "2026-10-21"
    assert format_date(add_days(date(2026, 12, 30), 7)) == "2027-01-06"
