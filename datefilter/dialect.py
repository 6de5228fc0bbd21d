# datefilter:dialect.py

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

from typing import Any

LEGACY = "legacy"
EXPRESSION = "expression"

# Pseudo-properties that only exist in the legacy grammar
RESERVED_KEYS = ("$id", "$type")

COMPARISON_OPERATORS = ("==", "!=", ">", ">=", "<", "<=")


def _is_number_or_bool(value: Any) -> bool:
    return isinstance(value, (bool, int, float))


def is_legacy_filter(node: Any) -> bool:
    """
    Best-effort check whether a filter is written in the legacy (deprecated)
    filter grammar rather than as an expression.

    The two grammars overlap, so this can only ever prove "legacy". A False
    result means "not recognisably legacy" and callers should then treat the
    filter as an expression. Never raises.
    """
    if not isinstance(node, list) or len(node) < 2:
        return False

    op = node[0]
    args = node[1:]

    if op in ("!has", "!in", "none"):
        # no expression equivalent with these names
        return True

    if op == "has":
        return args[0] in RESERVED_KEYS

    if op == "in":
        key = args[0]
        if len(args) > 2:
            # expressions take the haystack as a single argument
            return True
        if key in RESERVED_KEYS:
            return True
        if len(args) < 2:
            return False
        value = args[1]
        if _is_number_or_bool(value):
            # cannot be searched in an expression
            return True
        # a string looked up in a string literal is pointless as an expression
        return isinstance(key, str) and isinstance(value, str)

    if op in COMPARISON_OPERATORS:
        # an expression would compare ["get", key], not a bare string literal
        return isinstance(args[0], str) and (len(args) < 2 or not isinstance(args[1], list))

    if op in ("all", "any"):
        return any(is_legacy_filter(child) for child in args)

    return False


def filter_dialect(node: Any) -> str:
    return LEGACY if is_legacy_filter(node) else EXPRESSION
