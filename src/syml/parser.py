"""Parser layer: converts SYML text to a Value tree.

The grammar is an ordered-choice (PEG) grammar written as recursive descent.
Every rule takes a position and returns ``(result, end)`` on success or
``None`` on failure, so backtracking is just retrying from the caller's own
position. Block rules also take the indentation *level* (in spaces) and pass
``level + 2`` down to nested values.

Each call to :func:`parse` gets its own ``_Parser``; nothing is shared between
calls.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Tuple, TypeVar

from .errors import ParseError
from .values import Value, VDict, VList, VText

T = TypeVar("T")
Match = Optional[Tuple[T, int]]

#: Maximum number of containers a document may nest.
MAX_DEPTH = 100

_BARE_CHARS = frozenset(
    "!#$%&()*+./0123456789<=>?@"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ\\^_`"
    "abcdefghijklmnopqrstuvwxyz|~"
)
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_SIMPLE_ESCAPES = {
    "\\": "\\",
    "'": "'",
    '"': '"',
    " ": " ",
    "\t": "\t",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


# ---------------------------------------------------------------------------
# Bare literals (shared with the serializer)
# ---------------------------------------------------------------------------

def _bare_start(text: str, pos: int) -> bool:
    ch = text[pos]
    if ch in _BARE_CHARS:
        return True
    if ch == "-":
        return not text.startswith(" ", pos + 1)
    return ch.isidentifier()


def _bare_continue(ch: str) -> bool:
    return ch in _BARE_CHARS or ch in "-'" or ("a" + ch).isidentifier()


def match_bare_literal(text: str, pos: int = 0) -> int:
    """Return the end of the bare literal starting at *pos*, or -1."""
    if pos >= len(text) or not _bare_start(text, pos):
        return -1
    end = pos + 1
    while end < len(text) and _bare_continue(text[end]):
        end += 1
    return end


def is_bare_literal(text: str) -> bool:
    """True if *text* can be written without quotes."""
    return match_bare_literal(text) == len(text)


def _location(text: str, pos: int) -> tuple[int, int]:
    line = text.count("\n", 0, pos) + 1
    column = pos - (text.rfind("\n", 0, pos) + 1) + 1
    return line, column


# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------

class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.depth = 0
        # Farthest position any rule failed at, and what it wanted there
        self.fail_pos = -1
        self.expected: set[str] = set()

    # -- Failure bookkeeping ------------------------------------------------

    def fail(self, pos: int, what: str) -> None:
        if pos > self.fail_pos:
            self.fail_pos = pos
            self.expected = {what}
        elif pos == self.fail_pos:
            self.expected.add(what)
        return None

    def error(self) -> ParseError:
        pos = max(self.fail_pos, 0)
        line, column = _location(self.text, pos)
        return ParseError(line, column, tuple(sorted(self.expected)), pos)

    @contextmanager
    def nested(self, pos: int, levels: int = 1) -> Iterator[None]:
        if self.depth + levels > MAX_DEPTH:
            line, column = _location(self.text, pos)
            raise ParseError(line, column, (f"at most {MAX_DEPTH} levels of nesting",), pos)
        self.depth += levels
        try:
            yield
        finally:
            self.depth -= levels

    # -- Lexical primitives -------------------------------------------------

    def lit(self, pos: int, token: str) -> Optional[int]:
        if self.text.startswith(token, pos):
            return pos + len(token)
        return self.fail(pos, f'"{token}"')

    def ws(self, pos: int) -> int:
        text = self.text
        while pos < len(text) and text[pos] in " \t":
            pos += 1
        return pos

    def at_line_break(self, pos: int) -> bool:
        return self.text.startswith("\n", pos) or self.text.startswith("\r\n", pos)

    def line_break(self, pos: int) -> Optional[int]:
        if self.text.startswith("\n", pos):
            return pos + 1
        if self.text.startswith("\r\n", pos):
            return pos + 2
        return self.fail(pos, "line break")

    def end_of_input(self, pos: int) -> Optional[int]:
        if pos >= len(self.text):
            return pos
        return self.fail(pos, "end of input")

    def comment(self, pos: int) -> Optional[int]:
        """``;`` up to, not including, the line break."""
        if not self.text.startswith(";", pos):
            return self.fail(pos, '";"')
        end = self.text.find("\n", pos)
        if end == -1:
            return len(self.text)
        if self.text[end - 1] == "\r":
            end -= 1
        return end

    def rest_of_line(self, pos: int) -> int:
        """Trailing whitespace and an optional comment."""
        pos = self.ws(pos)
        end = self.comment(pos)
        return pos if end is None else end

    def separator(self, pos: int) -> Optional[int]:
        """One or more blank or comment-only lines, or the end of input."""
        end = self.line_break(self.rest_of_line(pos))
        if end is None:
            return self.end_of_input(self.rest_of_line(pos))
        while True:
            nxt = self.line_break(self.rest_of_line(end))
            if nxt is None:
                break
            end = nxt
        last = self.end_of_input(self.rest_of_line(end))
        return end if last is None else last

    def indent(self, pos: int, level: int) -> Optional[int]:
        if self.text.startswith(" " * level, pos):
            return pos + level
        return self.fail(pos, f"{level} spaces of indentation")

    # -- Scalars --------------------------------------------------------------

    def bare_literal(self, pos: int) -> Match[str]:
        end = match_bare_literal(self.text, pos)
        if end < 0:
            return self.fail(pos, "bare literal")
        return self.text[pos:end], end

    def quoted_literal(self, pos: int) -> Match[str]:
        start = self.lit(pos, "'")
        if start is None:
            return None
        end = start
        while end < len(self.text) and self.text[end] != "'" and not self.at_line_break(end):
            end += 1
        close = self.lit(end, "'")
        if close is None:
            return None
        return self.text[start:end], close

    def hex_digits(self, pos: int, least: int, most: int) -> Match[str]:
        end = pos
        while end - pos < most and end < len(self.text) and self.text[end] in _HEX_DIGITS:
            end += 1
        if end - pos < least:
            return self.fail(end, "hex digit")
        return self.text[pos:end], end

    def code_point(self, match: Match[str]) -> Match[str]:
        if match is None:
            return None
        digits, end = match
        cp = int(digits, 16)
        if cp > 0x10FFFF or 0xD800 <= cp <= 0xDFFF:
            return self.fail(end, "valid Unicode char")
        return chr(cp), end

    def escape(self, pos: int) -> Match[str]:
        if not self.text.startswith("\\", pos):
            return None
        pos += 1
        ch = self.text[pos:pos + 1]
        if ch and ch in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[ch], pos + 1
        if ch == "x":
            return self.code_point(self.hex_digits(pos + 1, 2, 2))
        if ch == "u":
            if not self.text.startswith("{", pos + 1):
                return self.code_point(self.hex_digits(pos + 1, 4, 4))
            match = self.hex_digits(pos + 2, 1, 8)
            if match is None:
                return None
            end = self.lit(match[1], "}")
            if end is None:
                return None
            return self.code_point((match[0], end))
        if ch == "U":
            return self.code_point(self.hex_digits(pos + 1, 8, 8))
        return self.fail(pos, "escape sequence")

    def continuation(self, pos: int) -> int:
        """Skip a backslash line continuation and the next line's indentation."""
        if not self.text.startswith("\\", pos):
            return pos
        end = self.comment(pos + 1)
        end = self.line_break(pos + 1 if end is None else end)
        if end is None:
            return pos
        return self.ws(end)

    def escaped_string(self, pos: int) -> Match[str]:
        pos = self.lit(pos, '"')
        if pos is None:
            return None
        text = self.text
        pos = self.continuation(pos)
        chars: list[str] = []
        while True:
            match = self.escape(pos)
            if match is not None:
                ch, pos = match
            elif pos < len(text) and text[pos] not in '\\"' and not self.at_line_break(pos):
                ch = text[pos]
                pos += 1
            else:
                break
            chars.append(ch)
            pos = self.continuation(pos)
        end = self.lit(pos, '"')
        if end is None:
            return None
        return "".join(chars), end

    def scalar(self, pos: int) -> Match[str]:
        return self.bare_literal(pos) or self.quoted_literal(pos) or self.escaped_string(pos)

    # -- Inline forms -------------------------------------------------------

    def comma(self, pos: int) -> Optional[int]:
        end = self.lit(self.ws(pos), ",")
        if end is None:
            return None
        return self.ws(end)

    def delimited(self, pos: int, element: Callable[[int], Match[T]]) -> tuple[list[T], int]:
        """Comma-separated elements, trailing comma allowed, possibly none."""
        match = element(pos)
        if match is None:
            return [], pos
        item, pos = match
        items = [item]
        while True:
            after_comma = self.comma(pos)
            if after_comma is None:
                break
            match = element(after_comma)
            if match is None:
                return items, after_comma
            item, pos = match
            items.append(item)
        return items, pos

    def inline_list(self, pos: int) -> Match[Value]:
        start = self.lit(pos, "[")
        if start is None:
            return None
        with self.nested(pos):
            items, end = self.delimited(self.ws(start), self.inline_value)
        end = self.lit(self.ws(end), "]")
        if end is None:
            return None
        return VList(items), end

    def inline_entry(self, pos: int) -> Match[tuple[str, Value]]:
        key = self.key(pos)
        if key is None:
            return None
        value = self.inline_value(self.ws(key[1]))
        if value is None:
            return None
        return (key[0], value[0]), value[1]

    def inline_dict(self, pos: int) -> Match[Value]:
        start = self.lit(pos, "{")
        if start is None:
            return None
        with self.nested(pos):
            pairs, end = self.delimited(self.ws(start), self.inline_entry)
        end = self.lit(self.ws(end), "}")
        if end is None:
            return None
        return VDict.from_pairs(pairs), end

    def inline_scalar(self, pos: int) -> Match[Value]:
        match = self.scalar(pos)
        if match is None:
            return None
        return VText(match[0]), match[1]

    def inline_value(self, pos: int) -> Match[Value]:
        return self.inline_list(pos) or self.inline_dict(pos) or self.inline_scalar(pos)

    # -- Block forms ----------------------------------------------------------

    def siblings(self, pos: int, level: int, entry: Callable[[int, int], Match[T]]) -> Match[list[T]]:
        """One or more entries, each further one on its own line at *level*."""
        match = entry(pos, level)
        if match is None:
            return None
        item, end = match
        items = [item]
        while True:
            start = self.separator(end)
            if start is None:
                break
            start = self.indent(start, level)
            if start is None:
                break
            match = entry(start, level)
            if match is None:
                break
            item, end = match
            items.append(item)
        return items, end

    def list_entry(self, pos: int, level: int) -> Match[Value]:
        start = self.lit(pos, "- ")
        if start is None:
            return None
        with self.nested(pos):
            return self.value(start, level + 2)

    def block_list(self, pos: int, level: int) -> Match[Value]:
        match = self.siblings(pos, level, self.list_entry)
        if match is None:
            return None
        return VList(match[0]), match[1]

    def key(self, pos: int) -> Match[str]:
        match = self.scalar(pos)
        if match is None:
            return None
        end = self.lit(self.ws(match[1]), ":")
        if end is None:
            return None
        return match[0], end

    def dict_value(self, pos: int, level: int) -> Match[Value]:
        """Value after ``key:``: a block on the following lines, or inline."""
        start = self.separator(pos)
        if start is not None:
            # A list may sit at the key's own level; anything else is nested
            aligned = self.indent(start, level)
            if aligned is not None:
                match = self.block_list(aligned, level)
                if match is not None:
                    return match
            deeper = self.indent(start, level + 2)
            if deeper is not None:
                match = self.block_value(deeper, level + 2)
                if match is not None:
                    return match
        return self.inline_value(self.ws(pos))

    def dict_entry(self, pos: int, level: int) -> Match[tuple[str, Value]]:
        """``a: b: c: value`` → ``a`` mapped to ``{b: {c: value}}``."""
        match = self.key(pos)
        if match is None:
            return None
        keys = [match[0]]
        end = match[1]
        while True:
            match = self.key(self.ws(end))
            if match is None:
                break
            keys.append(match[0])
            end = match[1]
        with self.nested(pos, len(keys)):
            match = self.dict_value(end, level)
        if match is None:
            return None
        value, end = match
        key = keys.pop()
        for outer in reversed(keys):
            value = VDict({key: value})
            key = outer
        return (key, value), end

    def block_dict(self, pos: int, level: int) -> Match[Value]:
        match = self.siblings(pos, level, self.dict_entry)
        if match is None:
            return None
        return VDict.from_pairs(match[0]), match[1]

    def block_value(self, pos: int, level: int) -> Match[Value]:
        return self.block_list(pos, level) or self.block_dict(pos, level)

    def value(self, pos: int, level: int) -> Match[Value]:
        # Block forms first, so a scalar is never read as the start of one
        return self.block_value(pos, level) or self.inline_value(pos)

    # -- Document -------------------------------------------------------------

    def document(self) -> Value:
        start = self.separator(0)
        match = self.value(0 if start is None else start, 0)
        if match is not None:
            value, end = match
            end = self.separator(end)
            if end is not None:
                if end == len(self.text):
                    return value
                self.fail(end, "end of input")
        raise self.error()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse(text: str) -> Value:
    """Parse a SYML document.

    Leading and trailing blank or comment-only lines are ignored. Raises
    :class:`~syml.errors.ParseError` when *text* does not match the grammar;
    no partial value is ever returned.
    """
    return _Parser(text).document()
