"""Command-line converters between SYML and JSON.

Provides the ``syml2json`` and ``json2syml`` entry points. Both take the same
arguments::

    syml2json [<FILE | - | -h | --help> [%] [-n] [-b] [-N] [-w]]

Exit codes: 0 on success, the OS error number (or 2) when the input cannot
be read, 2 for an unknown argument, 3 when the input does not parse.
"""

from __future__ import annotations

import json
import math
import sys
from dataclasses import dataclass
from typing import IO

from . import __version__
from .convert import from_json_data, to_json_data
from .errors import ParseError
from .parser import parse
from .serializer import serialize, serialize_compact


SYML2JSON_HELP = """\
USAGE: syml2json [<FILE | -h | --help> [%] [-n] [-b] [-N] [-w]]
convert SYML to JSON

FILE: source file
    no given this arg or value is `-`, it from stdin

%:
    is long output
-n: convert number-like strings to JSON numbers
-b: convert `true` / `false` to JSON booleans
-N: convert `null` to JSON null
-w: all of -n -b -N
"""

JSON2SYML_HELP = """\
USAGE: json2syml [<FILE | -h | --help> [%]]
convert JSON to SYML

FILE: source file
    no given this arg or value is `-`, it from stdin

%:
    is long output
"""


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------

@dataclass
class Config:
    src: str = ""
    long_output: bool = False
    convert_number: bool = False
    convert_boolean: bool = False
    convert_null: bool = False


class _Exit(Exception):
    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code


def read_input(
    help_text: str,
    argv: list[str],
    stdin: IO[str],
    stdout: IO[str],
    stderr: IO[str],
) -> Config:
    """Parse *argv* (without the program name) and read the source text."""
    config = Config()
    args = iter(argv)
    source = next(args, None)

    if source in ("-h", "--help"):
        print(f"utils from syml@{__version__}", file=stdout)
        print(help_text, file=stdout)
        raise _Exit(0)

    # The source is opened before the flags are checked and read after
    fh = stdin
    if source is not None and source != "-":
        try:
            fh = open(source, encoding="utf-8")
        except OSError as exc:
            _read_error(exc, stderr)

    try:
        for arg in args:
            if arg == "%":
                config.long_output = True
            elif arg == "-n":
                config.convert_number = True
            elif arg == "-b":
                config.convert_boolean = True
            elif arg == "-N":
                config.convert_null = True
            elif arg == "-w":
                config.convert_number = config.convert_boolean = config.convert_null = True
            else:
                print(f"Error: Extra arg: {arg}", file=stderr)
                raise _Exit(2)

        try:
            config.src = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            _read_error(exc, stderr)
    finally:
        if fh is not stdin:
            fh.close()
    return config


def _read_error(exc: Exception, stderr: IO[str]) -> None:
    print(f"Read input error: {exc}", file=stderr)
    raise _Exit(getattr(exc, "errno", None) or 2) from exc


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(text: str) -> float:
    number = float(text)
    if math.isinf(number):
        raise ValueError(f"number out of range: {text}")
    return number


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def syml2json(
    argv: list[str] | None = None,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
    stderr: IO[str] | None = None,
) -> int:
    """Convert SYML to JSON. Returns the process exit code."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    try:
        config = read_input(SYML2JSON_HELP, sys.argv[1:] if argv is None else argv, stdin, stdout, stderr)
    except _Exit as exc:
        return exc.code

    try:
        value = parse(config.src)
    except ParseError as exc:
        print(f"ParseError: in line {exc.line} col {exc.column}", file=stderr)
        print(f"  expected: {exc.expected_text}", file=stderr)
        return 3

    data = to_json_data(
        value,
        numbers=config.convert_number,
        booleans=config.convert_boolean,
        null=config.convert_null,
    )
    if config.long_output:
        print(json.dumps(data, ensure_ascii=False, indent=2), file=stdout)
    else:
        print(json.dumps(data, ensure_ascii=False, separators=(",", ":")), file=stdout)
    return 0


def json2syml(
    argv: list[str] | None = None,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
    stderr: IO[str] | None = None,
) -> int:
    """Convert JSON to SYML. Returns the process exit code."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    try:
        config = read_input(JSON2SYML_HELP, sys.argv[1:] if argv is None else argv, stdin, stdout, stderr)
    except _Exit as exc:
        return exc.code

    try:
        data = json.loads(config.src, parse_float=_finite_float, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        print(f"ParseError: in line {exc.lineno} col {exc.colno}", file=stderr)
        print(f"  err: {exc.msg}", file=stderr)
        return 3
    except ValueError as exc:
        print(f"ParseError: {exc}", file=stderr)
        return 3

    value = from_json_data(data)
    if config.long_output:
        serialize(value, stdout.write)
    else:
        serialize_compact(value, stdout.write)
    print(file=stdout)
    return 0


# ---------------------------------------------------------------------------
# Console script entry points
# ---------------------------------------------------------------------------

def syml2json_main() -> None:
    """``syml2json`` console script."""
    sys.exit(syml2json())


def json2syml_main() -> None:
    """``json2syml`` console script."""
    sys.exit(json2syml())


if __name__ == "__main__":
    syml2json_main()
