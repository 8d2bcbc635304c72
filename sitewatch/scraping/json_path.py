"""
Dotted-path lookup and string rendering for decoded JSON documents.

Path syntax: segments separated by ``.``; ``\\.`` escapes a literal dot;
an integer segment indexes an array and ``#`` yields an array's length.
Missing paths render as an empty string.
"""

from __future__ import annotations

import json
import math
from typing import Any

_MISSING = object()


def split_path(path: str) -> list[str]:
    segments: list[str] = []
    current: list[str] = []
    escaped = False
    for char in path:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == ".":
            segments.append("".join(current))
            current = []
        else:
            current.append(char)
    if escaped:
        current.append("\\")
    segments.append("".join(current))
    return segments


def lookup(document: Any, path: str) -> Any:
    """
    Walk `path` into `document`, returning None when any segment is missing.
    """

    if not path:
        return None

    node: Any = document
    for segment in split_path(path):
        node = _step(node, segment)
        if node is _MISSING:
            return None
    return node


def _step(node: Any, segment: str) -> Any:
    if isinstance(node, dict):
        return node.get(segment, _MISSING)
    if isinstance(node, list):
        if segment == "#":
            return len(node)
        if segment.isascii() and segment.isdigit():
            index = int(segment)
            return node[index] if index < len(node) else _MISSING
    return _MISSING


def render(value: Any) -> str:
    """
    Render a decoded JSON value as the string a threshold compares against.
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, int):
        return str(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
