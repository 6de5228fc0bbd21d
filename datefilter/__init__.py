"""
datefilter package

Constrains MapLibre/Mapbox style layer filters to a date or date range.
"""
__all__ = [
    "config",
    "logging_utils",
    "cli_paths",
    "temporal",
    "date_range",
    "dialect",
    "legacy_filter",
    "expression_filter",
    "orchestrator",
    "style",
    "style_client",
]

from datefilter.date_range import DateRange, date_range_from_date, date_range_from_iso_date  # noqa: E402
from datefilter.orchestrator import filter_by_date  # noqa: E402
