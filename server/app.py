#!/usr/bin/env python3

# server/app.py

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

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import requests
from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest, Forbidden, HTTPException

# repo root resolution
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from datefilter.config import Config  # noqa: E402
from datefilter.date_range import DateRange, date_range_from_date  # noqa: E402
from datefilter.dialect import filter_dialect  # noqa: E402
from datefilter.orchestrator import constrain_filter_by_date_range, filter_by_date  # noqa: E402
from datefilter.style import StyleDocument  # noqa: E402
from datefilter.style_client import StyleClient  # noqa: E402

import logging  # noqa: E402
logger = logging.getLogger("datefilter-server")


def parse_date_arg(value: Any, *, name: str = "date", historical_bce: bool = False) -> DateRange:
    """
    Accepts:
      - None / "" => now (UTC)
      - "YYYY", "YYYY-MM", "YYYY-MM-DD" (optionally negative year)
      - an integer instant in ms since 1970-01-01
    """
    if value is None or value == "":
        value = datetime.now(timezone.utc)
    elif isinstance(value, bool) or not isinstance(value, (str, int)):
        raise BadRequest(description=f"{name} must be a date string or an integer timestamp")

    date_range = date_range_from_date(value, historical_bce=historical_bce)
    if date_range is None or not date_range.is_valid:
        raise BadRequest(description=f"{name} is not a valid date (YYYY, YYYY-MM or YYYY-MM-DD): {value!r}")
    return date_range


def _json_body() -> dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise BadRequest(description="request body must be a JSON object")
    return body


def make_app(cfg: Config | None = None, style_client: StyleClient | None = None) -> Flask:
    app = Flask(__name__)
    CORS(app)  # keep it simple for local dev

    if cfg is None:
        cfg = Config(repo_root=REPO_ROOT)
    if style_client is None:
        style_client = StyleClient(timeout_s=cfg.http_timeout_s)

    logger.info("Resolved style_url=%s", cfg.style_url)
    logger.info("Resolved variable_prefix=%s", cfg.variable_prefix)
    logger.info("Resolved bce_convention=%s", cfg.bce_convention)
    logger.info("Resolved allowed_style_urls=%s", ", ".join(cfg.allowed_style_urls))

    @app.before_request
    def log_request():
        logger.info(
            "REQUEST %s %s from %s",
            request.method,
            request.path,
            request.remote_addr,
        )

    @app.get("/api/health")
    def health():
        return jsonify({"ok": True})

    @app.get("/api/date_range")
    def date_range():
        dr = parse_date_arg(request.args.get("date"), historical_bce=cfg.historical_bce)
        return jsonify({"ok": True, **dr.to_dict()})

    @app.post("/api/filter")
    def constrain_filter():
        body = _json_body()
        dr = parse_date_arg(body.get("date"), historical_bce=cfg.historical_bce)
        original = body.get("filter")

        dialect = filter_dialect(original)
        new_filter = constrain_filter_by_date_range(original, dr, prefix=cfg.variable_prefix)
        logger.info("filter request dialect=%s range=%s..%s", dialect, dr.start_iso_date, dr.end_iso_date)
        return jsonify({"ok": True, "dialect": dialect, "filter": new_filter})

    def _filtered_style(style: Any, dr: DateRange) -> dict[str, Any]:
        try:
            doc = StyleDocument(style)
        except ValueError as e:
            raise BadRequest(description=str(e))

        filter_by_date(doc, dr, prefix=cfg.variable_prefix, historical_bce=cfg.historical_bce)
        logger.info(
            "style filtered layers=%d range=%s..%s",
            len(doc.data_layer_ids()),
            dr.start_iso_date,
            dr.end_iso_date,
        )
        return doc.get_style()

    @app.post("/api/style/filter")
    def filter_posted_style():
        body = _json_body()
        dr = parse_date_arg(body.get("date"), historical_bce=cfg.historical_bce)
        return jsonify(_filtered_style(body.get("style"), dr))

    @app.get("/api/style")
    def filter_remote_style():
        dr = parse_date_arg(request.args.get("date"), historical_bce=cfg.historical_bce)
        url = (request.args.get("url") or cfg.style_url).strip()
        if not url.startswith(("http://", "https://")):
            raise BadRequest(description=f"url must be http(s): {url!r}")
        if url not in cfg.allowed_style_urls:
            raise Forbidden(description=f"url is not an allowed style url: {url!r}")

        try:
            style = style_client.fetch_style(url)
        except (RuntimeError, ValueError, requests.RequestException) as e:
            logger.warning("Style fetch failed url=%s: %s", url, e)
            return jsonify({"ok": False, "code": "upstream_error", "error": str(e), "status": 502}), 502

        return jsonify(_filtered_style(style, dr))

    @app.errorhandler(Exception)
    def handle_any_exception(e: Exception):
        logger.exception("Unhandled exception: %s", e)
        return jsonify({"ok": False, "code": "internal_error", "error": str(e), "status": 500}), 500

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return jsonify({
            "ok": False,
            "code": {400: "bad_request", 403: "forbidden"}.get(e.code, "http_error"),
            "error": e.description,
            "status": e.code,
        }), e.code

    return app


if __name__ == "__main__":
    import argparse

    ap = argparse.ArgumentParser(description="datefilter dev API server.")
    ap.add_argument("--host", default=os.environ.get("HOST", "0.0.0.0"))
    ap.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8089")))
    ap.add_argument("--logs-dir", default=None, help="Override logs directory (default: <repo>/logs).")
    args = ap.parse_args()

    # Map CLI dirs into DATEFILTER_* env vars so Config sees them
    from datefilter.cli_paths import apply_path_overrides
    apply_path_overrides(logs_dir=args.logs_dir)

    from server.logging_utils import setup_server_logger
    log_dir = Path(args.logs_dir).expanduser().resolve() if args.logs_dir else None
    logger = setup_server_logger(name="datefilter-server", log_dir=log_dir)

    logger.info("Starting server with host=%s port=%d", args.host, args.port)
    if args.logs_dir:
        logger.info("Logs dir: %s", str(log_dir))

    app = make_app()

    debug = bool(os.environ.get("DATEFILTER_SERVER_DEBUG", "1") == "1")
    use_reloader = bool(os.environ.get("DATEFILTER_SERVER_RELOAD", "0") == "1")

    app.run(
        host=args.host,
        port=args.port,
        debug=debug,
        use_reloader=use_reloader,
    )
