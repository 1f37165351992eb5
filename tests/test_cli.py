"""Tests for the syml2json / json2syml commands."""

import errno
import io
import json

from syml.cli import Config, json2syml, read_input, syml2json, SYML2JSON_HELP


def run(command, argv, stdin=""):
    out = io.StringIO()
    err = io.StringIO()
    code = command(argv, io.StringIO(stdin), out, err)
    return code, out.getvalue(), err.getvalue()


# ---------------------------------------------------------------------------
# read_input
# ---------------------------------------------------------------------------

def test_read_input_stdin():
    config = read_input(SYML2JSON_HELP, [], io.StringIO("a"), io.StringIO(), io.StringIO())
    assert config == Config(src="a")

def test_read_input_dash_is_stdin():
    config = read_input(SYML2JSON_HELP, ["-", "%"], io.StringIO("a"), io.StringIO(), io.StringIO())
    assert config.src == "a"
    assert config.long_output

def test_read_input_flags():
    config = read_input(SYML2JSON_HELP, ["-", "-n", "-N"], io.StringIO(""), io.StringIO(), io.StringIO())
    assert config.convert_number
    assert config.convert_null
    assert not config.convert_boolean

def test_read_input_all_flags():
    config = read_input(SYML2JSON_HELP, ["-", "-w"], io.StringIO(""), io.StringIO(), io.StringIO())
    assert config.convert_number and config.convert_boolean and config.convert_null


# ---------------------------------------------------------------------------
# syml2json
# ---------------------------------------------------------------------------

def test_syml2json_compact():
    code, out, err = run(syml2json, [], "a: 1\nb:\n- x\n- 名前\n")
    assert code == 0
    assert out == '{"a":"1","b":["x","名前"]}\n'
    assert err == ""

def test_syml2json_long():
    code, out, _ = run(syml2json, ["-", "%"], "a: 1")
    assert code == 0
    assert out == '{\n  "a": "1"\n}\n'

def test_syml2json_conversions():
    code, out, _ = run(syml2json, ["-", "-w"], "[1, true, null, x]")
    assert code == 0
    assert json.loads(out) == [1, True, None, "x"]

def test_syml2json_from_file(tmp_path):
    path = tmp_path / "in.syml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    code, out, _ = run(syml2json, [str(path)])
    assert code == 0
    assert out == '["1","2"]\n'

def test_syml2json_parse_error():
    code, out, err = run(syml2json, [], "{a:1")
    assert code == 3
    assert out == ""
    assert "ParseError: in line 1 col 5" in err
    assert "expected:" in err

def test_syml2json_missing_file(tmp_path):
    code, _, err = run(syml2json, [str(tmp_path / "missing.syml")])
    assert code != 0
    assert "Read input error" in err

def test_syml2json_extra_arg():
    code, _, err = run(syml2json, ["-", "--bogus"], "a")
    assert code == 2
    assert "Error: Extra arg: --bogus" in err

def test_syml2json_missing_file_reported_before_extra_arg(tmp_path):
    code, _, err = run(syml2json, [str(tmp_path / "missing.syml"), "--bogus"])
    assert code == errno.ENOENT
    assert "Read input error" in err
    assert "Extra arg" not in err

def test_syml2json_extra_arg_after_file(tmp_path):
    path = tmp_path / "in.syml"
    path.write_text("a: 1", encoding="utf-8")
    code, out, err = run(syml2json, [str(path), "--bogus"])
    assert code == 2
    assert out == ""
    assert "Error: Extra arg: --bogus" in err

def test_syml2json_help():
    code, out, _ = run(syml2json, ["--help"])
    assert code == 0
    assert "utils from syml@" in out
    assert "USAGE: syml2json" in out

def test_syml2json_short_help():
    code, out, _ = run(syml2json, ["-h"])
    assert code == 0
    assert "convert SYML to JSON" in out


# ---------------------------------------------------------------------------
# json2syml
# ---------------------------------------------------------------------------

def test_json2syml_compact():
    code, out, _ = run(json2syml, [], '{"a": [1, true, null], "b c": ""}')
    assert code == 0
    assert out == "{a:[1,true,null],'b c':''}\n"

def test_json2syml_long():
    code, out, _ = run(json2syml, ["-", "%"], '{"a": {"x": 1}, "l": [[1, 2]]}')
    assert code == 0
    assert out == "a:\n  x: 1\nl:\n- - 1\n  - 2\n"

def test_json2syml_parse_error():
    code, _, err = run(json2syml, [], '{"a": }')
    assert code == 3
    assert "ParseError: in line 1 col 7" in err

def test_json2syml_rejects_non_json_constants():
    for src in ("[NaN]", "Infinity", '{"a": -Infinity}'):
        code, out, err = run(json2syml, [], src)
        assert code == 3, src
        assert out == ""
        assert "ParseError" in err

def test_json2syml_rejects_out_of_range_number():
    code, out, err = run(json2syml, [], "[1e400]")
    assert code == 3
    assert out == ""
    assert "out of range" in err

def test_json2syml_help():
    code, out, _ = run(json2syml, ["-h"])
    assert code == 0
    assert "USAGE: json2syml" in out


# ---------------------------------------------------------------------------
# Round trip through both commands
# ---------------------------------------------------------------------------

def test_commands_roundtrip():
    src = "name: demo\nitems:\n- a: 1\n  b: 'two words'\n- \"tab\\there\"\n"
    _, as_json, _ = run(syml2json, [], src)
    _, back, _ = run(json2syml, ["-", "%"], as_json)
    _, again, _ = run(syml2json, [], back)
    assert json.loads(again) == json.loads(as_json)
