"""Tests for instant / ISO date / decimal year conversions."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from datefilter.temporal import (
    MS_PER_DAY,
    civil_from_days,
    date_from_datetime,
    date_from_iso_date,
    date_from_utc,
    days_from_civil,
    decimal_year_from_date,
    iso_date_from_date,
    parse_iso_date,
    utc_year,
)


def _ms(*args: int) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


# ---------------------------------------------------------------------------
# civil day arithmetic
# ---------------------------------------------------------------------------


class TestCivilDays:
    def test_epoch(self) -> None:
        assert days_from_civil(1970, 1, 1) == 0
        assert civil_from_days(0) == (1970, 1, 1)

    def test_matches_datetime_in_supported_range(self) -> None:
        epoch = datetime(1970, 1, 1)
        for d in (datetime(1, 1, 1), datetime(1600, 2, 29), datetime(2000, 12, 31), datetime(9999, 12, 31)):
            assert days_from_civil(d.year, d.month, d.day) == (d - epoch).days

    def test_round_trips_across_year_zero(self) -> None:
        start = days_from_civil(-2, 11, 1)
        for days in range(start, start + 3 * 366):
            y, m, d = civil_from_days(days)
            assert days_from_civil(y, m, d) == days

    def test_year_zero_is_leap(self) -> None:
        assert civil_from_days(days_from_civil(0, 2, 28) + 1) == (0, 2, 29)
        assert civil_from_days(days_from_civil(-1, 2, 28) + 1) == (-1, 3, 1)


# ---------------------------------------------------------------------------
# date_from_utc
# ---------------------------------------------------------------------------


class TestDateFromUTC:
    def test_zero_based_month(self) -> None:
        assert date_from_utc(2013, 3, 14) == _ms(2013, 4, 14)

    def test_two_digit_years_are_literal(self) -> None:
        assert utc_year(date_from_utc(99, 0, 1)) == 99
        assert utc_year(date_from_utc(0, 0, 1)) == 0

    def test_month_overflow_rolls_into_next_year(self) -> None:
        assert date_from_utc(2013, 12, 1) == _ms(2014, 1, 1)
        assert date_from_utc(2013, -1, 1) == _ms(2012, 12, 1)

    def test_day_overflow(self) -> None:
        assert date_from_utc(2013, 1, 29) == _ms(2013, 3, 1)
        assert date_from_utc(2013, 2, 0) == _ms(2013, 2, 28)


# ---------------------------------------------------------------------------
# date_from_iso_date
# ---------------------------------------------------------------------------


class TestDateFromISODate:
    def test_converts_date_strings(self) -> None:
        assert date_from_iso_date("2013-01-01") == _ms(2013, 1, 1)
        assert date_from_iso_date("2013-04-14") == _ms(2013, 4, 14)
        assert date_from_iso_date("2013-12-31") == _ms(2013, 12, 31)

    def test_truncated_dates_default_to_first(self) -> None:
        assert date_from_iso_date("2013") == _ms(2013, 1, 1)
        assert date_from_iso_date("2013-04") == _ms(2013, 4, 1)

    def test_bce_dates(self) -> None:
        assert date_from_iso_date("0001-01-01") == -62135596800000
        assert date_from_iso_date("0000-01-01") == -62167219200000
        assert date_from_iso_date("-0000-01-01") == -62167219200000
        assert date_from_iso_date("-0001-01-01") == -62198755200000
        assert date_from_iso_date("-9999-01-01") == -377705116800000

    def test_short_years(self) -> None:
        assert date_from_iso_date("1") == date_from_iso_date("0001")
        assert date_from_iso_date("-44-03-15") == date_from_utc(-44, 2, 15)

    @pytest.mark.parametrize(
        "value",
        [None, "", "abc", "12345", "2013-4", "2013-04-1", "2013/04/14", "2013-04-14T00:00", "2013-04-14\n", "+2013", "２０１３", "2013-٠٤", 2013],
    )
    def test_rejects_malformed(self, value) -> None:
        assert date_from_iso_date(value) is None
        assert parse_iso_date(value) is None

    def test_parse_parts(self) -> None:
        assert parse_iso_date("-0044-03") == (-44, 3, None)
        assert parse_iso_date("2013") == (2013, None, None)


# ---------------------------------------------------------------------------
# decimal_year_from_date
# ---------------------------------------------------------------------------


class TestDecimalYearFromDate:
    def test_converts_dates(self) -> None:
        assert decimal_year_from_date(_ms(2013, 1, 1)) == 2013
        assert decimal_year_from_date(_ms(2013, 4, 14)) == pytest.approx(2013.28219, abs=1e-5)
        assert decimal_year_from_date(_ms(2013, 12, 31)) == pytest.approx(2013.99726, abs=1e-5)

    def test_midyear(self) -> None:
        assert decimal_year_from_date(_ms(2013, 7, 2, 12)) == pytest.approx(2013.5)

    def test_leap_year_uses_366_days(self) -> None:
        assert decimal_year_from_date(_ms(2012, 7, 2)) == pytest.approx(2012 + 183 / 366)

    def test_bce_dates_astronomical(self) -> None:
        assert decimal_year_from_date(date_from_iso_date("0001-01-01")) == 1
        assert decimal_year_from_date(date_from_iso_date("0000-01-01")) == 0
        assert decimal_year_from_date(date_from_iso_date("-0001-01-01")) == -1
        assert decimal_year_from_date(date_from_iso_date("-9999-01-01")) == -9999

    def test_bce_dates_historical(self) -> None:
        assert decimal_year_from_date(date_from_iso_date("-0001-01-01"), historical_bce=True) == -2
        assert decimal_year_from_date(date_from_iso_date("0000-01-01"), historical_bce=True) == 0
        assert decimal_year_from_date(date_from_iso_date("2013-01-01"), historical_bce=True) == 2013

    def test_fraction_within_negative_year(self) -> None:
        mid = date_from_utc(-1, 6, 2) + MS_PER_DAY // 2
        assert decimal_year_from_date(mid) == pytest.approx(-1 + 0.5)

    @pytest.mark.parametrize("historical_bce", [False, True])
    def test_monotonic(self, historical_bce: bool) -> None:
        instants = [date_from_utc(-3, 0, 1) + i * 7 * MS_PER_DAY for i in range(0, 52 * 6)]
        values = [decimal_year_from_date(t, historical_bce=historical_bce) for t in instants]
        assert values == sorted(values)


# ---------------------------------------------------------------------------
# formatting and datetime input
# ---------------------------------------------------------------------------


class TestFormatting:
    def test_iso_date(self) -> None:
        assert iso_date_from_date(_ms(2013, 4, 14, 23, 59)) == "2013-04-14"
        assert iso_date_from_date(date_from_iso_date("7-01-02")) == "0007-01-02"

    def test_iso_date_negative_year(self) -> None:
        assert iso_date_from_date(date_from_iso_date("-44-03-15")) == "-0044-03-15"

    def test_iso_date_beyond_9999(self) -> None:
        assert iso_date_from_date(date_from_utc(10000, 0, 1)) == "10000-01-01"

    def test_datetime_conversion(self) -> None:
        assert date_from_datetime(datetime(2013, 4, 14, 6, 30, tzinfo=timezone.utc)) == _ms(2013, 4, 14, 6, 30)
        # naive is UTC
        assert date_from_datetime(datetime(2013, 4, 14)) == _ms(2013, 4, 14)

    def test_datetime_with_offset(self) -> None:
        cet = timezone(timedelta(hours=1))
        assert date_from_datetime(datetime(2013, 1, 1, 0, 30, tzinfo=cet)) == _ms(2012, 12, 31, 23, 30)
