"""Serializer: Value tree → SYML text.

Output goes through a *write* callable that receives one chunk per token,
e.g. ``io.StringIO().write`` or ``sys.stdout.write``.

Two layouts are produced:

- compact: one line, no whitespace between elements::

      [2,[3,4,5],{x:6}]

- indented: two spaces per nesting level::

      - 2
      - - 3
        - 4
        - 5
      - x: 6

Scalars and empty containers are always written compact.
"""

from __future__ import annotations

import io
import unicodedata
from typing import Callable

from .parser import is_bare_literal
from .values import Value, VList, VText

Write = Callable[[str], object]

_SHORT_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\\": "\\\\",
    '"': '\\"',
}


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def _needs_escape(ch: str) -> bool:
    if ch in _SHORT_ESCAPES or ch == "'":
        return True
    # Combining marks are escaped as well
    return not ch.isprintable() or unicodedata.category(ch) in ("Mn", "Me")


def escape_char(ch: str) -> str:
    """Spelling of *ch* inside a double-quoted string."""
    if ch == "'" or not _needs_escape(ch):
        return ch
    if ch in _SHORT_ESCAPES:
        return _SHORT_ESCAPES[ch]
    cp = ord(ch)
    if cp < 0x100:
        return f"\\x{cp:02x}"
    if cp < 0x10000:
        return f"\\u{cp:04x}"
    return f"\\u{{{cp:x}}}"


def write_scalar(text: str, write: Write) -> None:
    """Write *text* in the lightest form that reads back unchanged.

    ``''`` for empty text, then bare, then single-quoted, then
    double-quoted with escapes.
    """
    if not text:
        write("''")
        return
    if is_bare_literal(text):
        write(text)
        return
    if all(ch != "'" and (ch == '"' or not _needs_escape(ch)) for ch in text):
        write(f"'{text}'")
        return
    write('"')
    for ch in text:
        write(escape_char(ch))
    write('"')


# ---------------------------------------------------------------------------
# Compact form
# ---------------------------------------------------------------------------

def serialize_compact(value: Value, write: Write) -> None:
    if isinstance(value, VText):
        write_scalar(value.value, write)
    elif isinstance(value, VList):
        write("[")
        for i, item in enumerate(value.items):
            if i:
                write(",")
            serialize_compact(item, write)
        write("]")
    else:
        write("{")
        for i, (key, item) in enumerate(value.entries.items()):
            if i:
                write(",")
            write_scalar(key, write)
            write(":")
            serialize_compact(item, write)
        write("}")


# ---------------------------------------------------------------------------
# Indented form
# ---------------------------------------------------------------------------

def serialize(value: Value, write: Write, indent: int = 0) -> None:
    """Write *value* in indented form.

    *indent* is the nesting level of the current line (two spaces each).
    The first line is written without leading indentation; following lines
    are indented to *indent* or deeper. No trailing newline is written.
    """
    if isinstance(value, VText) or value.is_empty():
        serialize_compact(value, write)
        return

    if isinstance(value, VList):
        for i, item in enumerate(value.items):
            if i:
                write("\n")
                write("  " * indent)
            write("- ")
            serialize(item, write, indent + 1)
        return

    for i, (key, item) in enumerate(value.entries.items()):
        if i:
            write("\n")
            write("  " * indent)
        write_scalar(key, write)
        write(":")
        if isinstance(item, VText) or item.is_empty():
            write(" ")
            serialize_compact(item, write)
            continue
        # Lists line up with their key; the "- " markers show the nesting
        child = indent if isinstance(item, VList) else indent + 1
        write("\n")
        write("  " * child)
        serialize(item, write, child)


def to_string(value: Value, compact: bool = False) -> str:
    """Serialize *value* into a new string."""
    buf = io.StringIO()
    if compact:
        serialize_compact(value, buf.write)
    else:
        serialize(value, buf.write)
    return buf.getvalue()
