# datefilter:logging_utils.py

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
import sys
import time
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Iterable, Optional

# Library modules log below this name via logging.getLogger(__name__)
PACKAGE_LOGGER = "datefilter"


def _formatter() -> logging.Formatter:
    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03dZ %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    fmt.converter = time.gmtime
    return fmt


def setup_logger(
    name: str,
    logs_dir: Optional[Path],
    level: str = "INFO",
    to_console: bool = True,
    also: Iterable[str] = (PACKAGE_LOGGER,),
) -> logging.Logger:
    """
    Configures logger `name` (and the loggers listed in `also`) with a daily
    rotated file under logs_dir and, optionally, stderr. stdout is left
    alone since scripts may write their result there.
    """
    handlers: list[logging.Handler] = []
    fmt = _formatter()

    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        fh = TimedRotatingFileHandler(
            str(logs_dir / f"{name}.log"),
            when="D",
            interval=1,
            backupCount=14,
            encoding="utf-8",
            utc=True,
        )
        fh.setFormatter(fmt)
        handlers.append(fh)

    if to_console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(fmt)
        handlers.append(ch)

    for logger_name in (name, *also):
        lg = logging.getLogger(logger_name)
        lg.setLevel(getattr(logging, level.upper(), logging.INFO))
        lg.propagate = False
        if lg.handlers:
            lg.handlers.clear()
        for h in handlers:
            lg.addHandler(h)

    return logging.getLogger(name)
