# datefilter:expression_filter.py

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
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from datefilter.date_range import DateRange
from datefilter.legacy_filter import END_DATE, END_DECDATE, START_DATE, START_DECDATE

# Marks the variables this module injects into ["let", ...] filters
VARIABLE_PREFIX = "datefilter"

_PREFIX_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]*")

# suffix -> DateRange attribute, in binding order
_RANGE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("startDecimalYear", "start_decimal_year"),
    ("startISODate", "start_iso_date"),
    ("endDecimalYear", "end_decimal_year"),
    ("endISODate", "end_iso_date"),
)


def validate_prefix(prefix: str) -> str:
    """
    Injected names are "<prefix>__<field>". The prefix itself may not
    contain "__" so that the separator stays unambiguous.
    """
    if not isinstance(prefix, str) or not _PREFIX_RE.fullmatch(prefix) or "__" in prefix:
        raise ValueError(f"invalid variable prefix: {prefix!r}")
    return prefix


def variable_name(prefix: str, suffix: str) -> str:
    return f"{prefix}__{suffix}"


def date_variables(date_range: DateRange, prefix: str = VARIABLE_PREFIX) -> List[Tuple[str, Any]]:
    """(name, value) pairs for the range fields; value is None for invalid fields."""
    validate_prefix(prefix)
    return [(variable_name(prefix, suffix), getattr(date_range, attr)) for suffix, attr in _RANGE_FIELDS]


@dataclass(frozen=True)
class LetExpression:
    """["let", name1, value1, ..., nameN, valueN, body]"""
    bindings: List[Tuple[Any, Any]]
    body: Any

    def binding_names(self) -> List[Any]:
        return [name for name, _ in self.bindings]

    def to_filter(self) -> List[Any]:
        out: List[Any] = ["let"]
        for name, value in self.bindings:
            out.extend([name, value])
        out.append(self.body)
        return out


def match_let_expression(node: Any) -> Optional[LetExpression]:
    if not (isinstance(node, list) and len(node) >= 2 and len(node) % 2 == 0 and node[0] == "let"):
        return None
    pairs = node[1:-1]
    bindings = [(pairs[i], pairs[i + 1]) for i in range(0, len(pairs), 2)]
    return LetExpression(bindings=bindings, body=node[-1])


def _bound_clause(op: str, decimal_key: str, iso_key: str, decimal_var: str, iso_var: str) -> List[Any]:
    return [
        "any",
        ["all", ["has", decimal_key], [op, ["get", decimal_key], ["var", decimal_var]]],
        [
            "all",
            ["!", ["has", decimal_key]],
            ["has", iso_key],
            [op, ["get", iso_key], ["var", iso_var]],
        ],
        ["all", ["!", ["has", decimal_key]], ["!", ["has", iso_key]]],
    ]


def date_overlap_expression(prefix: str = VARIABLE_PREFIX) -> List[Any]:
    """
    ["all", <start clause>, <end clause>] comparing feature properties with
    the injected variables. Same overlap semantics as the legacy rewrite.
    """
    names: Dict[str, str] = {suffix: variable_name(prefix, suffix) for suffix, _ in _RANGE_FIELDS}
    return [
        "all",
        _bound_clause("<", START_DECDATE, START_DATE, names["endDecimalYear"], names["endISODate"]),
        _bound_clause(">=", END_DECDATE, END_DATE, names["startDecimalYear"], names["startISODate"]),
    ]


def constrain_expression_filter_by_date_range(
    filter: Any,
    date_range: DateRange,
    *,
    prefix: str = VARIABLE_PREFIX,
) -> List[Any]:
    """
    Returns an expression filter that additionally requires the feature to
    overlap date_range, with the range endpoints bound as let-variables.

    A let node already carrying prefixed variables is treated as an earlier
    result: its variables are overwritten (or appended when missing) and
    everything else is left alone. Any other filter is wrapped in a new let
    node. The input is never modified.

    Fields of date_range that are None are not bound, but the body still
    refers to all four variables. Renderers reject a var without a binding,
    so such a result is only usable once a later call binds the rest.
    """
    variables = date_variables(date_range, prefix)
    marker = variable_name(prefix, "")

    existing = match_let_expression(filter)
    if existing is not None and any(
        isinstance(name, str) and name.startswith(marker) for name in existing.binding_names()
    ):
        bindings = [(name, copy.deepcopy(value)) for name, value in existing.bindings]
        for name, value in variables:
            if value is None:
                continue
            for i, (bound_name, _) in enumerate(bindings):
                if bound_name == name:
                    bindings[i] = (name, value)
                    break
            else:
                bindings.append((name, value))
        return LetExpression(bindings=bindings, body=copy.deepcopy(existing.body)).to_filter()

    body = date_overlap_expression(prefix)
    if filter is not None:
        body.append(copy.deepcopy(filter))
    bindings = [(name, value) for name, value in variables if value is not None]
    return LetExpression(bindings=bindings, body=body).to_filter()
