# datefilter:legacy_filter.py

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

import copy
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from datefilter.date_range import DateRange

START_DECDATE = "start_decdate"
START_DATE = "start_date"
END_DECDATE = "end_decdate"
END_DATE = "end_date"


@dataclass(frozen=True)
class BoundClause:
    """
    One side of the overlap test, e.g. for the start bound:

      ["any",
        ["all", ["has", "start_decdate"], ["<", "start_decdate", decimal]],
        ["all", ["!has", "start_decdate"], ["has", "start_date"], ["<", "start_date", iso]],
        ["all", ["!has", "start_decdate"], ["!has", "start_date"]]]
    """
    op: str
    decimal_key: str
    iso_key: str
    decimal_value: Any
    iso_value: Any

    def to_filter(self) -> List[Any]:
        return [
            "any",
            ["all", ["has", self.decimal_key], [self.op, self.decimal_key, self.decimal_value]],
            [
                "all",
                ["!has", self.decimal_key],
                ["has", self.iso_key],
                [self.op, self.iso_key, self.iso_value],
            ],
            ["all", ["!has", self.decimal_key], ["!has", self.iso_key]],
        ]


@dataclass(frozen=True)
class LegacyDateFilter:
    """A legacy filter previously constrained by this module."""
    start: BoundClause
    end: BoundClause
    original: Any = None
    has_original: bool = False

    def to_filter(self) -> List[Any]:
        out: List[Any] = ["all", self.start.to_filter(), self.end.to_filter()]
        if self.has_original:
            out.append(copy.deepcopy(self.original))
        return out


def _match_literal_comparison(node: Any, op: str, key: str) -> Tuple[bool, Any]:
    if isinstance(node, list) and len(node) == 3 and node[0] == op and node[1] == key:
        return True, node[2]
    return False, None


def _match_bound_clause(node: Any, op: str, decimal_key: str, iso_key: str) -> Optional[BoundClause]:
    if not (isinstance(node, list) and len(node) == 4 and node[0] == "any"):
        return None
    decimal_branch, iso_branch, unbounded_branch = node[1], node[2], node[3]

    if not (
        isinstance(decimal_branch, list)
        and len(decimal_branch) == 3
        and decimal_branch[0] == "all"
        and decimal_branch[1] == ["has", decimal_key]
    ):
        return None
    ok, decimal_value = _match_literal_comparison(decimal_branch[2], op, decimal_key)
    if not ok:
        return None

    if not (
        isinstance(iso_branch, list)
        and len(iso_branch) == 4
        and iso_branch[0] == "all"
        and iso_branch[1] == ["!has", decimal_key]
        and iso_branch[2] == ["has", iso_key]
    ):
        return None
    ok, iso_value = _match_literal_comparison(iso_branch[3], op, iso_key)
    if not ok:
        return None

    if unbounded_branch != ["all", ["!has", decimal_key], ["!has", iso_key]]:
        return None

    return BoundClause(op, decimal_key, iso_key, decimal_value, iso_value)


def match_legacy_date_filter(node: Any) -> Optional[LegacyDateFilter]:
    """
    Recognises ["all", <start clause>, <end clause>, original?] as produced by
    constrain_legacy_filter_by_date_range(). Returns None for anything else.
    """
    if not (isinstance(node, list) and len(node) in (3, 4) and node[0] == "all"):
        return None
    start = _match_bound_clause(node[1], "<", START_DECDATE, START_DATE)
    if start is None:
        return None
    end = _match_bound_clause(node[2], ">=", END_DECDATE, END_DATE)
    if end is None:
        return None
    if len(node) == 4:
        return LegacyDateFilter(start, end, original=node[3], has_original=True)
    return LegacyDateFilter(start, end)


def _replace(clause: BoundClause, decimal_value: Any, iso_value: Any) -> BoundClause:
    return BoundClause(
        clause.op,
        clause.decimal_key,
        clause.iso_key,
        clause.decimal_value if decimal_value is None else decimal_value,
        clause.iso_value if iso_value is None else iso_value,
    )


def constrain_legacy_filter_by_date_range(filter: Any, date_range: DateRange) -> List[Any]:
    """
    Returns a legacy filter that additionally requires the feature's
    [start, end) to overlap date_range. A bound the feature lacks is
    unbounded; *_decdate takes precedence over *_date when both exist.

    If filter was already constrained by an earlier call, only the four date
    literals are replaced (fields of date_range that are None keep their old
    value) and the original filter is carried over unchanged. The input is
    never modified.
    """
    existing = match_legacy_date_filter(filter)
    if existing is not None:
        return LegacyDateFilter(
            start=_replace(existing.start, date_range.end_decimal_year, date_range.end_iso_date),
            end=_replace(existing.end, date_range.start_decimal_year, date_range.start_iso_date),
            original=existing.original,
            has_original=existing.has_original,
        ).to_filter()

    # feature starts before the range ends ...
    start = BoundClause("<", START_DECDATE, START_DATE, date_range.end_decimal_year, date_range.end_iso_date)
    # ... and ends at or after the range starts
    end = BoundClause(">=", END_DECDATE, END_DATE, date_range.start_decimal_year, date_range.start_iso_date)
    return LegacyDateFilter(start, end, original=filter, has_original=filter is not None).to_filter()
