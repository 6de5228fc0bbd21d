"""Shared pytest fixtures for datefilter tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pytest

from datefilter.config import Config
from datefilter.date_range import DateRange
from datefilter.logging_utils import PACKAGE_LOGGER


def make_range(
    start_decimal_year: Optional[float] = 2013.5,
    end_decimal_year: Optional[float] = 2013.5 + 1 / 365,
    start_iso_date: Optional[str] = "2013-07-02",
    end_iso_date: Optional[str] = "2013-07-03",
) -> DateRange:
    """A DateRange built from its comparison fields only (instants left empty)."""
    return DateRange(
        start_date=None,
        start_decimal_year=start_decimal_year,
        start_iso_date=start_iso_date,
        end_date=None,
        end_decimal_year=end_decimal_year,
        end_iso_date=end_iso_date,
    )


@pytest.fixture
def date_range() -> DateRange:
    """[2013.5, 2013.5 + 1/365) with matching ISO dates."""
    return make_range()


@pytest.fixture
def cfg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Config:
    for key in (
        "DATEFILTER_STYLE_URL",
        "DATEFILTER_ALLOWED_STYLE_URLS",
        "DATEFILTER_VARIABLE_PREFIX",
        "DATEFILTER_BCE_CONVENTION",
        "DATEFILTER_HTTP_TIMEOUT_S",
        "DATEFILTER_OUT_DIR",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DATEFILTER_LOGS_DIR", str(tmp_path / "logs"))
    return Config(repo_root=tmp_path)


@pytest.fixture
def reset_package_logging():
    """Undo handler changes made by setup_logger()/setup_server_logger()."""
    yield
    for name in (PACKAGE_LOGGER, "filter_style", "datefilter-server"):
        lg = logging.getLogger(name)
        for h in list(lg.handlers):
            h.close()
            lg.removeHandler(h)
        lg.propagate = True
        lg.setLevel(logging.NOTSET)
