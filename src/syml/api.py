"""json-module style entry points: load, loads, dump, dumps."""

from __future__ import annotations

from typing import IO

from .parser import parse
from .serializer import serialize, serialize_compact, to_string
from .values import Value, to_value


def loads(text: str) -> Value:
    """Parse a SYML document from a string."""
    return parse(text)


def load(fp: IO[str]) -> Value:
    """Parse a SYML document from a text file object."""
    return parse(fp.read())


def dumps(value: object, compact: bool = False) -> str:
    """Serialize *value* (a Value or plain str/list/dict data) to a string."""
    return to_string(to_value(value), compact=compact)


def dump(value: object, fp: IO[str], compact: bool = False) -> None:
    """Serialize *value* to a text file object, chunk by chunk."""
    if compact:
        serialize_compact(to_value(value), fp.write)
    else:
        serialize(to_value(value), fp.write)
