"""Value types for SYML."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Union


@dataclass
class VText:
    value: str

    def __str__(self) -> str:
        return self.value

    def is_empty(self) -> bool:
        return not self.value


@dataclass
class VList:
    items: list["Value"] = field(default_factory=list)

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"

    def is_empty(self) -> bool:
        return not self.items


@dataclass
class VDict:
    """Ordered mapping of unique keys.

    Build from possibly repeated keys with :meth:`from_pairs`; the first
    occurrence of a key wins and later ones are dropped.
    """

    entries: dict[str, "Value"] = field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, object]]) -> "VDict":
        entries: dict[str, Value] = {}
        for key, value in pairs:
            if not isinstance(key, str):
                raise TypeError(f"SYML keys must be str, not {type(key).__name__}")
            if key not in entries:
                entries[key] = to_value(value)
        return cls(entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VDict):
            return NotImplemented
        return list(self.entries.items()) == list(other.entries.items())

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.entries.items()) + "}"

    def is_empty(self) -> bool:
        return not self.entries


Value = Union[VText, VList, VDict]


def to_value(obj: object) -> Value:
    """Build a Value from plain Python data.

    - Values are returned as-is
    - ``str`` → VText
    - Mappings → VDict (keys must be strings)
    - Other iterables (list, tuple, generators, …) → VList
    """
    if isinstance(obj, (VText, VList, VDict)):
        return obj
    if isinstance(obj, str):
        return VText(obj)
    if isinstance(obj, Mapping):
        return VDict.from_pairs(obj.items())
    if isinstance(obj, Iterable):
        return VList([to_value(item) for item in obj])
    raise TypeError(f"cannot build a SYML value from {type(obj).__name__}")


def to_python(value: Value) -> str | list | dict:
    """Inverse of :func:`to_value`: plain ``str`` / ``list`` / ``dict``."""
    if isinstance(value, VText):
        return value.value
    if isinstance(value, VList):
        return [to_python(v) for v in value.items]
    return {k: to_python(v) for k, v in value.entries.items()}
