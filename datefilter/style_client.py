# datefilter:style_client.py

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

from dataclasses import dataclass
from typing import Any, Dict

import requests


@dataclass(frozen=True)
class StyleClient:
    timeout_s: int = 60
    user_agent: str = "datefilter/0.1"

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Cache-Control": "no-cache",
            "User-Agent": self.user_agent,
        }

    def fetch_style(self, url: str) -> Dict[str, Any]:
        resp = requests.get(url, headers=self._headers(), timeout=self.timeout_s)
        if resp.status_code != 200:
            raise RuntimeError(f"Style fetch failed: HTTP {resp.status_code} – {resp.text[:500]}")

        style = resp.json()
        if not isinstance(style, dict) or not isinstance(style.get("layers"), list):
            raise ValueError(f"Not a style document (no 'layers' list): {url}")
        return style
