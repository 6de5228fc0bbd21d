# datefilter:date_range.py

# MIT License
#
# Copyright (c) 2025 Jonas Waldeck
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND.

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from datefilter.temporal import (
    date_from_datetime,
    date_from_utc,
    decimal_year_from_date,
    iso_date_from_date,
    parse_iso_date,
)


@dataclass(frozen=True)
class DateRange:
    """
    Half-open interval [start, end) in three parallel forms.
    A field is None when its instant could not be computed.
    """
    start_date: Optional[int]             # ms since epoch
    start_decimal_year: Optional[float]
    start_iso_date: Optional[str]
    end_date: Optional[int]
    end_decimal_year: Optional[float]
    end_iso_date: Optional[str]

    @property
    def is_valid(self) -> bool:
        return None not in (
            self.start_date,
            self.start_decimal_year,
            self.start_iso_date,
            self.end_date,
            self.end_decimal_year,
            self.end_iso_date,
        )

    @property
    def has_bounds(self) -> bool:
        """True when at least one value a rewritten filter compares against is set."""
        return any(
            v is not None
            for v in (
                self.start_decimal_year,
                self.start_iso_date,
                self.end_decimal_year,
                self.end_iso_date,
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startDate": self.start_date,
            "startDecimalYear": self.start_decimal_year,
            "startISODate": self.start_iso_date,
            "endDate": self.end_date,
            "endDecimalYear": self.end_decimal_year,
            "endISODate": self.end_iso_date,
        }


def _range_from_instants(
    start: Optional[int], end: Optional[int], *, historical_bce: bool
) -> DateRange:
    def _dec(instant: Optional[int]) -> Optional[float]:
        return None if instant is None else decimal_year_from_date(instant, historical_bce=historical_bce)

    def _iso(instant: Optional[int]) -> Optional[str]:
        return None if instant is None else iso_date_from_date(instant)

    return DateRange(
        start_date=start,
        start_decimal_year=_dec(start),
        start_iso_date=_iso(start),
        end_date=end,
        end_decimal_year=_dec(end),
        end_iso_date=_iso(end),
    )


def date_range_from_iso_date(iso_date: Any, *, historical_bce: bool = False) -> Optional[DateRange]:
    """
    Returns the range a possibly truncated date denotes:

      "2013"        -> [2013-01-01, 2014-01-01)
      "2013-04"     -> [2013-04-01, 2013-05-01)
      "2013-04-14"  -> [2013-04-14, 2013-04-14]  (zero width)

    None if the string is not YYYY, YYYY-MM or YYYY-MM-DD.
    """
    parts = parse_iso_date(iso_date)
    if parts is None:
        return None

    year, month, day = parts
    if month is None:
        start = date_from_utc(year, 0, 1)
        end = date_from_utc(year + 1, 0, 1)
    elif day is None:
        start = date_from_utc(year, month - 1, 1)
        end = date_from_utc(year, month, 1)
    else:
        start = date_from_utc(year, month - 1, day)
        end = start
    return _range_from_instants(start, end, historical_bce=historical_bce)


def date_range_from_date(value: Any, *, historical_bce: bool = False) -> Optional[DateRange]:
    """
    Resolves a date string, a datetime or an instant (ms since epoch) to a
    DateRange. A point in time is always precise, so it gives a zero-width
    range at exactly that instant.
    """
    if isinstance(value, str):
        return date_range_from_iso_date(value, historical_bce=historical_bce)
    if isinstance(value, datetime):
        instant = date_from_datetime(value)
    elif isinstance(value, int) and not isinstance(value, bool):
        instant = value
    else:
        return None
    return _range_from_instants(instant, instant, historical_bce=historical_bce)
