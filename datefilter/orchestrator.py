# datefilter:orchestrator.py

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

import logging
from typing import Any, Dict, List, Optional, Protocol

from datefilter.date_range import DateRange, date_range_from_date
from datefilter.dialect import is_legacy_filter
from datefilter.expression_filter import (
    VARIABLE_PREFIX,
    constrain_expression_filter_by_date_range,
    validate_prefix,
)
from datefilter.legacy_filter import constrain_legacy_filter_by_date_range

logger = logging.getLogger(__name__)


class MapLike(Protocol):
    def get_style(self) -> Dict[str, Any]: ...

    def get_filter(self, layer_id: str) -> Any: ...

    def set_filter(self, layer_id: str, filter: Any) -> None: ...


def resolve_date_range(value: Any, *, historical_bce: bool = False) -> Optional[DateRange]:
    if isinstance(value, DateRange):
        return value
    return date_range_from_date(value, historical_bce=historical_bce)


def constrain_filter_by_date_range(
    filter: Any,
    date_range: DateRange,
    *,
    prefix: str = VARIABLE_PREFIX,
) -> List[Any]:
    # Never mix grammars: an unrecognised filter is treated as an expression
    if is_legacy_filter(filter):
        return constrain_legacy_filter_by_date_range(filter, date_range)
    return constrain_expression_filter_by_date_range(filter, date_range, prefix=prefix)


def filter_by_date(
    map_like: MapLike,
    date: Any,
    *,
    prefix: str = VARIABLE_PREFIX,
    historical_bce: bool = False,
) -> None:
    """
    Constrains the filter of every data-driven layer (one with a
    "source-layer") to features overlapping the given date or date range.

    date: "YYYY", "YYYY-MM", "YYYY-MM-DD", a datetime, an instant in ms,
          or an already resolved DateRange.

    Layers are updated in place through map_like.set_filter(). An
    unparseable date leaves all layers untouched. A DateRange with only
    some fields missing is still applied; the rewriters skip the missing
    ones.
    """
    validate_prefix(prefix)
    date_range = resolve_date_range(date, historical_bce=historical_bce)
    if date_range is None or not date_range.has_bounds:
        logger.warning("Not filtering by date: cannot resolve %r", date)
        return

    n_layers = 0
    for layer in map_like.get_style().get("layers") or []:
        if "source-layer" not in layer:
            logger.debug("Skipping layer without source-layer: %s", layer.get("id"))
            continue

        layer_id = layer["id"]
        current = map_like.get_filter(layer_id)
        map_like.set_filter(layer_id, constrain_filter_by_date_range(current, date_range, prefix=prefix))
        n_layers += 1

    logger.info(
        "Filtered %d layers by date range %s..%s",
        n_layers,
        date_range.start_iso_date,
        date_range.end_iso_date,
    )
