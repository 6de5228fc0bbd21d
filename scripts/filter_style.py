#!/usr/bin/env python3

# script:filter_style.py

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

# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path

# --- make repo root importable ---
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))
# --------------------------------

from datefilter.cli_paths import apply_path_overrides
from datefilter.config import Config
from datefilter.date_range import date_range_from_date
from datefilter.logging_utils import setup_logger
from datefilter.orchestrator import filter_by_date
from datefilter.style import StyleDocument, dump_style, load_style
from datefilter.style_client import StyleClient

USAGE = (
    "usage: filter_style.py [--style PATH | --url URL] [--date YYYY[-MM[-DD]]] "
    "[--out PATH] [--logs-dir DIR] [--historical-bce]"
)


def _get_arg(name: str, default: str | None = None) -> str | None:
    if name in sys.argv:
        i = sys.argv.index(name)
        if i + 1 < len(sys.argv):
            return sys.argv[i + 1]
    return default


def main() -> int:
    if "-h" in sys.argv or "--help" in sys.argv:
        print(USAGE)
        return 0

    apply_path_overrides(logs_dir=_get_arg("--logs-dir"))
    cfg = Config(repo_root=REPO_ROOT)
    logger = setup_logger("filter_style", cfg.logs_dir)

    historical_bce = cfg.historical_bce or "--historical-bce" in sys.argv

    date_arg = _get_arg("--date")
    date_value = date_arg if date_arg else datetime.now(timezone.utc)
    date_range = date_range_from_date(date_value, historical_bce=historical_bce)
    if date_range is None or not date_range.is_valid:
        logger.error("Invalid --date %r (expected YYYY, YYYY-MM or YYYY-MM-DD)", date_arg)
        return 2
    logger.info("Date range: %s..%s", date_range.start_iso_date, date_range.end_iso_date)

    style_path = _get_arg("--style")
    if style_path:
        path = Path(style_path).expanduser().resolve()
        if not path.exists():
            logger.error("Style file not found: %s", path)
            return 2
        logger.info("Loading style: %s", path)
        style = load_style(path)
    else:
        url = _get_arg("--url", cfg.style_url)
        logger.info("Fetching style: %s", url)
        style = StyleClient(timeout_s=cfg.http_timeout_s).fetch_style(url)

    doc = StyleDocument(style)
    filter_by_date(doc, date_range, prefix=cfg.variable_prefix)
    logger.info("Constrained %d data layers", len(doc.data_layer_ids()))

    out = _get_arg("--out")
    if out:
        out_path = Path(out).expanduser().resolve()
        dump_style(doc.get_style(), out_path)
        logger.info("Wrote filtered style to: %s", out_path)
    else:
        json.dump(doc.get_style(), sys.stdout, ensure_ascii=False)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
