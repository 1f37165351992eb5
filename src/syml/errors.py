"""Exception types raised by the SYML library."""

from __future__ import annotations


class SYMLError(Exception):
    """Base class for every error raised by the library."""


class ParseError(SYMLError, ValueError):
    """Input text does not match the grammar.

    ``line`` and ``column`` are 1-based; ``offset`` is the 0-based index into
    the source text. ``expected`` lists the tokens that would have been
    accepted at that point.
    """

    def __init__(self, line: int, column: int, expected: tuple[str, ...], offset: int = 0) -> None:
        self.line = line
        self.column = column
        self.offset = offset
        self.expected = expected
        super().__init__(f"line {line} column {column}: expected {self.expected_text}")

    @property
    def expected_text(self) -> str:
        if len(self.expected) == 1:
            return self.expected[0]
        return "one of " + ", ".join(self.expected)


class TypeMismatch(SYMLError, TypeError):
    """A typed view was requested from a value of another variant.

    The original value is kept untouched in ``value``.
    """

    def __init__(self, value: object, expected: str) -> None:
        self.value = value
        self.expected = expected
        super().__init__(f"expected {expected}, got {type(value).__name__}")


class ScalarParseError(SYMLError, ValueError):
    """A scalar could not be converted to a typed Python value."""


class NotAScalar(ScalarParseError):
    def __init__(self, value: object, target: str) -> None:
        self.value = value
        self.target = target
        super().__init__(f"cannot read {target} from {type(value).__name__}: not a scalar")


class MalformedScalar(ScalarParseError):
    def __init__(self, text: str, target: str) -> None:
        self.text = text
        self.target = target
        super().__init__(f"invalid {target} literal: {text!r}")
