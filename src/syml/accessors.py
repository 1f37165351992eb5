"""Variant tests, typed views and scalar conversions for SYML values."""

from __future__ import annotations

import re

from .errors import MalformedScalar, NotAScalar, TypeMismatch
from .values import Value, VDict, VList, VText

_INT_RE = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Variant tests
# ---------------------------------------------------------------------------

def is_text(value: Value) -> bool:
    return isinstance(value, VText)


def is_list(value: Value) -> bool:
    return isinstance(value, VList)


def is_dict(value: Value) -> bool:
    return isinstance(value, VDict)


# ---------------------------------------------------------------------------
# Typed views
# ---------------------------------------------------------------------------

def as_text(value: Value) -> str:
    """Return the scalar text, or raise TypeMismatch holding *value*."""
    if isinstance(value, VText):
        return value.value
    raise TypeMismatch(value, "text")


def as_list(value: Value) -> list[Value]:
    if isinstance(value, VList):
        return value.items
    raise TypeMismatch(value, "list")


def as_dict(value: Value) -> dict[str, Value]:
    if isinstance(value, VDict):
        return value.entries
    raise TypeMismatch(value, "dict")


# ---------------------------------------------------------------------------
# Scalar conversions
# ---------------------------------------------------------------------------

def _scalar_text(value: Value, target: str) -> str:
    if not isinstance(value, VText):
        raise NotAScalar(value, target)
    return value.value


def parse_int(value: Value) -> int:
    """Read an integer: optional sign followed by ASCII digits.

    Raises NotAScalar for lists and dicts, MalformedScalar for other text.
    """
    text = _scalar_text(value, "int")
    if not _INT_RE.fullmatch(text):
        raise MalformedScalar(text, "int")
    return int(text)


def parse_float(value: Value) -> float:
    text = _scalar_text(value, "float")
    # float() is lenient about padding and digit grouping
    if text != text.strip() or "_" in text:
        raise MalformedScalar(text, "float")
    try:
        return float(text)
    except ValueError as exc:
        raise MalformedScalar(text, "float") from exc


def parse_bool(value: Value) -> bool:
    text = _scalar_text(value, "bool")
    if text == "true":
        return True
    if text == "false":
        return False
    raise MalformedScalar(text, "bool")


def parse_char(value: Value) -> str:
    text = _scalar_text(value, "char")
    if len(text) != 1:
        raise MalformedScalar(text, "char")
    return text
