# datefilter:style.py

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
import json
from pathlib import Path
from typing import Any, Dict, List


class StyleDocument:
    """
    A MapLibre/Mapbox style JSON held in memory, exposing the same filter
    accessors as a live map so filter_by_date() can work on it directly.
    The style passed in is copied; read the result back with get_style().
    """

    def __init__(self, style: Dict[str, Any]) -> None:
        if not isinstance(style, dict) or not isinstance(style.get("layers"), list):
            raise ValueError("style must be an object with a 'layers' list")
        self._style = copy.deepcopy(style)

    def get_style(self) -> Dict[str, Any]:
        return self._style

    def _layer(self, layer_id: str) -> Dict[str, Any]:
        for layer in self._style["layers"]:
            if layer.get("id") == layer_id:
                return layer
        raise KeyError(layer_id)

    def get_filter(self, layer_id: str) -> Any:
        return copy.deepcopy(self._layer(layer_id).get("filter"))

    def set_filter(self, layer_id: str, filter: Any) -> None:
        layer = self._layer(layer_id)
        if filter is None:
            layer.pop("filter", None)
        else:
            layer["filter"] = copy.deepcopy(filter)

    def data_layer_ids(self) -> List[str]:
        return [layer["id"] for layer in self._style["layers"] if "source-layer" in layer]


def load_style(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def dump_style(style: Dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(style, ensure_ascii=False, indent=2), encoding="utf-8")
