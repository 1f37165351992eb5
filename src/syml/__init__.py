"""SYML: parser and serializer for an indentation-based config format."""

__version__ = "0.1.0"

from .accessors import (
    as_dict,
    as_list,
    as_text,
    is_dict,
    is_list,
    is_text,
    parse_bool,
    parse_char,
    parse_float,
    parse_int,
)
from .api import dump, dumps, load, loads
from .errors import (
    MalformedScalar,
    NotAScalar,
    ParseError,
    ScalarParseError,
    SYMLError,
    TypeMismatch,
)
from .parser import MAX_DEPTH, is_bare_literal, parse
from .serializer import serialize, serialize_compact, to_string
from .values import Value, VDict, VList, VText, to_python, to_value

__all__ = [
    "parse",
    "serialize",
    "serialize_compact",
    "to_string",
    "load",
    "loads",
    "dump",
    "dumps",
    "Value",
    "VText",
    "VList",
    "VDict",
    "to_value",
    "to_python",
    "is_text",
    "is_list",
    "is_dict",
    "as_text",
    "as_list",
    "as_dict",
    "parse_int",
    "parse_float",
    "parse_bool",
    "parse_char",
    "is_bare_literal",
    "MAX_DEPTH",
    "SYMLError",
    "ParseError",
    "TypeMismatch",
    "ScalarParseError",
    "NotAScalar",
    "MalformedScalar",
]
