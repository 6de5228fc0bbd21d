# datefilter:config.py

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

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple
import os

from datefilter.expression_filter import VARIABLE_PREFIX, validate_prefix

BCE_ASTRONOMICAL = "astronomical"   # year 0 exists, -0001 is 2 BCE
BCE_HISTORICAL = "historical"       # negative years shifted down by one
BCE_CONVENTIONS = (BCE_ASTRONOMICAL, BCE_HISTORICAL)

DEFAULT_STYLE_URL = "https://openhistoricalmap.github.io/map-styles/main/main.json"


def _env(key: str, default: str) -> str:
    return os.getenv(key, default).strip()


@dataclass(frozen=True)
class Config:
    repo_root: Path

    style_url: str = field(default_factory=lambda: _env("DATEFILTER_STYLE_URL", DEFAULT_STYLE_URL))
    variable_prefix: str = field(default_factory=lambda: _env("DATEFILTER_VARIABLE_PREFIX", VARIABLE_PREFIX))
    bce_convention: str = field(default_factory=lambda: _env("DATEFILTER_BCE_CONVENTION", BCE_ASTRONOMICAL).lower())
    http_timeout_s: int = field(default_factory=lambda: int(_env("DATEFILTER_HTTP_TIMEOUT_S", "60")))

    logs_dir: Path = None  # type: ignore[assignment]
    out_dir: Path = None   # type: ignore[assignment]
    # urls the server may fetch styles from; style_url is always included
    allowed_style_urls: Tuple[str, ...] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        def _p(env_key: str, default_rel: Path) -> Path:
            raw = os.getenv(env_key, str(default_rel))
            return Path(raw).expanduser().resolve()

        validate_prefix(self.variable_prefix)
        if self.bce_convention not in BCE_CONVENTIONS:
            raise ValueError(
                f"DATEFILTER_BCE_CONVENTION must be one of {', '.join(BCE_CONVENTIONS)}, got {self.bce_convention!r}"
            )

        if self.logs_dir is None:
            object.__setattr__(self, "logs_dir", _p("DATEFILTER_LOGS_DIR", self.repo_root / "logs"))
        if self.out_dir is None:
            object.__setattr__(self, "out_dir", _p("DATEFILTER_OUT_DIR", self.repo_root / "data" / "out"))
        if self.allowed_style_urls is None:
            extra = [u.strip() for u in _env("DATEFILTER_ALLOWED_STYLE_URLS", "").split(",") if u.strip()]
            object.__setattr__(self, "allowed_style_urls", tuple(dict.fromkeys([self.style_url, *extra])))

    @property
    def historical_bce(self) -> bool:
        return self.bce_convention == BCE_HISTORICAL
