# datefilter:temporal.py

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

import re
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

# Instants are integer milliseconds since 1970-01-01T00:00:00Z on the
# proleptic Gregorian calendar. datetime stops at year 1, so BCE dates
# go through the civil-day arithmetic below instead.
MS_PER_DAY = 86_400_000

# ASCII digits only: int() would otherwise accept fullwidth and other Unicode digits
ISO_DATE_RE = re.compile(r"(-?)(\d{1,4})(?:-(\d{2}))?(?:-(\d{2}))?", re.ASCII)


def days_from_civil(year: int, month: int, day: int) -> int:
    """
    Days since 1970-01-01 for a proleptic Gregorian (year, month 1..12, day).
    Works for any integer year, including 0 and negatives.
    """
    y = year - 1 if month <= 2 else year
    era = y // 400
    yoe = y - era * 400                                      # 0..399
    mp = (month + 9) % 12                                    # March = 0
    doy = (153 * mp + 2) // 5 + day - 1                      # 0..365
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy            # 0..146096
    return era * 146097 + doe - 719468


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Inverse of days_from_civil(): returns (year, month 1..12, day 1..31)."""
    z = days + 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def date_from_utc(year: int, month: int, day: int = 1) -> int:
    """
    Instant for the given UTC date components.

    year:  proleptic Gregorian year, taken literally (no 1900 offset for 0..99)
    month: zero-based month; values outside 0..11 roll over into other years
    day:   one-based day; values outside the month roll over as well
    """
    year += month // 12
    month = month % 12
    return (days_from_civil(year, month + 1, 1) + day - 1) * MS_PER_DAY


def date_from_datetime(dt: datetime) -> int:
    # naive datetimes are taken as UTC
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    days = days_from_civil(dt.year, dt.month, dt.day)
    ms_of_day = ((dt.hour * 60 + dt.minute) * 60 + dt.second) * 1000 + dt.microsecond // 1000
    return days * MS_PER_DAY + ms_of_day


def utc_year(instant: int) -> int:
    return civil_from_days(instant // MS_PER_DAY)[0]


def iso_date_from_date(instant: int) -> str:
    """
    Formats an instant as YYYY-MM-DD (UTC). Years are zero-padded to four
    digits and negative years keep their sign: -0044-03-15.
    """
    year, month, day = civil_from_days(instant // MS_PER_DAY)
    sign = "-" if year < 0 else ""
    return f"{sign}{abs(year):04d}-{month:02d}-{day:02d}"


def decimal_year_from_date(instant: int, *, historical_bce: bool = False) -> float:
    """
    Converts an instant to a decimal year: the UTC year plus the fraction of
    that year elapsed between its New Year's Day and the next one.

    Years are astronomical by default (year 0 exists, -0001-01-01 -> -1.0).
    With historical_bce=True negative years are shifted down by one before
    the fraction is added (-0001-01-01 -> -2.0).
    """
    year = utc_year(instant)
    last_new_year = date_from_utc(year, 0, 1)
    next_new_year = date_from_utc(year + 1, 0, 1)
    fraction = (instant - last_new_year) / (next_new_year - last_new_year)
    if historical_bce and year < 0:
        year -= 1
    return year + fraction


def parse_iso_date(iso_date: Any) -> Optional[Tuple[int, Optional[int], Optional[int]]]:
    """
    Splits a YYYY, YYYY-MM or YYYY-MM-DD string into (year, month, day).
    The year may have 1..4 digits and a leading minus. Missing parts are None.
    Returns None if the string does not have that shape.
    """
    if not isinstance(iso_date, str) or not iso_date:
        return None
    m = ISO_DATE_RE.fullmatch(iso_date)
    if not m:
        return None

    sign, year_s, month_s, day_s = m.groups()
    year = -int(year_s) if sign else int(year_s)
    month = int(month_s) if month_s is not None else None
    day = int(day_s) if day_s is not None else None
    return year, month, day


def date_from_iso_date(iso_date: Any) -> Optional[int]:
    """
    Converts a YYYY, YYYY-MM or YYYY-MM-DD string to an instant at UTC
    midnight. Missing month/day default to January/1st.
    Returns None for anything else.
    """
    parts = parse_iso_date(iso_date)
    if parts is None:
        return None
    year, month, day = parts
    return date_from_utc(year, (1 if month is None else month) - 1, 1 if day is None else day)
