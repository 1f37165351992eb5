"""Conversion between SYML values and JSON-compatible Python data."""

from __future__ import annotations

import json
import math
import re

from .values import Value, VDict, VList, VText

# JSON number grammar (RFC 8259)
_NUMBER_RE = re.compile(r"-?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?")


def text_to_json(
    text: str,
    numbers: bool = False,
    booleans: bool = False,
    null: bool = False,
):
    """Reinterpret scalar *text* for JSON output.

    Enabled conversions are tried in order number, boolean, null; text that
    none of them accepts stays a string.
    """
    if numbers and _NUMBER_RE.fullmatch(text):
        number = json.loads(text)
        # 1e999 overflows to inf, which JSON cannot represent
        if not (isinstance(number, float) and math.isinf(number)):
            return number
    if booleans and text in ("true", "false"):
        return text == "true"
    if null and text == "null":
        return None
    return text


def to_json_data(
    value: Value,
    numbers: bool = False,
    booleans: bool = False,
    null: bool = False,
):
    """SYML value → ``str`` / ``list`` / ``dict`` tree ready for ``json.dumps``."""
    if isinstance(value, VText):
        return text_to_json(value.value, numbers, booleans, null)
    if isinstance(value, VList):
        return [to_json_data(v, numbers, booleans, null) for v in value.items]
    return {k: to_json_data(v, numbers, booleans, null) for k, v in value.entries.items()}


def from_json_data(obj) -> Value:
    """Decoded JSON → SYML value.

    ``null`` and booleans become the scalars ``null`` / ``true`` / ``false``;
    numbers keep their JSON spelling.
    """
    if obj is None:
        return VText("null")
    if isinstance(obj, bool):
        return VText("true" if obj else "false")
    if isinstance(obj, (int, float)):
        return VText(json.dumps(obj))
    if isinstance(obj, str):
        return VText(obj)
    if isinstance(obj, list):
        return VList([from_json_data(v) for v in obj])
    if isinstance(obj, dict):
        return VDict.from_pairs((k, from_json_data(v)) for k, v in obj.items())
    raise TypeError(f"not a JSON value: {type(obj).__name__}")
