"""Unit tests for schedulegrid.calendar.civil_dates."""

from datetime import date, datetime, timezone

import pytest

from schedulegrid.calendar.civil_dates import (
    clamp_day_of_month,
    days_in_month,
    format_date_key,
    minute_of_day,
    parse_civil_date,
    parse_time_of_day,
    parse_timestamp,
    start_of_day,
    weekday_number,
)
from schedulegrid.exceptions import CivilDateParseError

pytestmark = pytest.mark.unit


class TestParseCivilDate:
    """Tests for parse_civil_date."""

    def test_parses_literal_components(self):
        assert parse_civil_date("2026-03-09") == date(2026, 3, 9)

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_civil_date(" 2026-12-31 ") == date(2026, 12, 31)

    @pytest.mark.parametrize("bad", ["2026-3-9", "20260309", "2026/03/09", "", "2026-03-09T10:00"])
    def test_malformed_strings_raise(self, bad):
        with pytest.raises(CivilDateParseError):
            parse_civil_date(bad)

    def test_impossible_date_raises(self):
        with pytest.raises(CivilDateParseError):
            parse_civil_date("2026-02-30")

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_civil_date("nope")


class TestDateHelpers:
    """Tests for start_of_day, format_date_key and month arithmetic."""

    def test_start_of_day_strips_time(self):
        assert start_of_day(datetime(2026, 3, 9, 18, 45)) == date(2026, 3, 9)

    def test_start_of_day_keeps_dates(self):
        assert start_of_day(date(2026, 3, 9)) == date(2026, 3, 9)

    def test_format_date_key_zero_pads(self):
        assert format_date_key(date(2026, 1, 5)) == "2026-01-05"

    def test_format_date_key_accepts_datetimes(self):
        assert format_date_key(datetime(2026, 11, 30, 23, 59, tzinfo=timezone.utc)) == "2026-11-30"

    @pytest.mark.parametrize(
        "year,month,expected",
        [(2026, 1, 31), (2026, 2, 28), (2028, 2, 29), (2100, 2, 28), (2000, 2, 29), (2026, 4, 30)],
    )
    def test_days_in_month(self, year, month, expected):
        assert days_in_month(year, month) == expected

    def test_clamp_day_of_month_short_month(self):
        assert clamp_day_of_month(2026, 2, 31) == date(2026, 2, 28)
        assert clamp_day_of_month(2028, 2, 31) == date(2028, 2, 29)

    def test_clamp_day_of_month_keeps_valid_day(self):
        assert clamp_day_of_month(2026, 3, 15) == date(2026, 3, 15)

    def test_weekday_number_starts_on_sunday(self):
        assert weekday_number(date(2026, 3, 8)) == 0
        assert weekday_number(date(2026, 3, 9)) == 1
        assert weekday_number(date(2026, 3, 14)) == 6


class TestTimeOfDay:
    """Tests for parse_time_of_day and minute_of_day."""

    @pytest.mark.parametrize(
        "value,expected",
        [("09:30", 570), ("9", 540), ("00:00", 0), ("22:00", 1320), ("24:00", 1440), ("13:45:00", 825)],
    )
    def test_parses_times(self, value, expected):
        assert parse_time_of_day(value) == expected

    @pytest.mark.parametrize("bad", ["25:00", "10:75", "ab", "", "10:"])
    def test_rejects_bad_times(self, bad):
        with pytest.raises(CivilDateParseError):
            parse_time_of_day(bad)

    def test_minute_of_day(self):
        assert minute_of_day(datetime(2026, 3, 9, 18, 5)) == 1085


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_iso_string_with_z_suffix(self):
        parsed = parse_timestamp("2026-03-09T18:00:00.000Z")
        assert parsed == datetime(2026, 3, 9, 18, 0, tzinfo=timezone.utc)

    def test_wall_clock_is_not_shifted(self):
        parsed = parse_timestamp("2026-03-09T18:00:00-05:00")
        assert parsed.hour == 18

    def test_datetime_passthrough(self):
        value = datetime(2026, 3, 9, 8)
        assert parse_timestamp(value) is value

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError):
            parse_timestamp(12345)
