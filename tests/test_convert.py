"""Tests for JSON conversion."""

import pytest

from syml import VDict, VList, VText, parse, to_value
from syml.convert import from_json_data, text_to_json, to_json_data


# ---------------------------------------------------------------------------
# text_to_json
# ---------------------------------------------------------------------------

def test_text_stays_string_by_default():
    assert text_to_json("12") == "12"
    assert text_to_json("true") == "true"
    assert text_to_json("null") == "null"

def test_numbers():
    assert text_to_json("12", numbers=True) == 12
    assert text_to_json("-1.5e3", numbers=True) == -1500.0
    assert text_to_json("0", numbers=True) == 0

def test_non_json_numbers_stay_strings():
    for text in ("012", "+1", ".5", "1.", "inf", "0x1f", "1_000"):
        assert text_to_json(text, numbers=True) == text, text

def test_overflowing_number_stays_string():
    assert text_to_json("1e999", numbers=True) == "1e999"

def test_booleans():
    assert text_to_json("true", booleans=True) is True
    assert text_to_json("false", booleans=True) is False
    assert text_to_json("True", booleans=True) == "True"

def test_null():
    assert text_to_json("null", null=True) is None
    assert text_to_json("nil", null=True) == "nil"

def test_flags_only_affect_their_kind():
    assert text_to_json("null", numbers=True, booleans=True) == "null"
    assert text_to_json("1", booleans=True, null=True) == "1"


# ---------------------------------------------------------------------------
# to_json_data
# ---------------------------------------------------------------------------

def test_to_json_data():
    value = parse("name: syml\nport: 8080\ndebug: true\nextra: null\ntags:\n- a\n- 1")
    assert to_json_data(value) == {
        "name": "syml",
        "port": "8080",
        "debug": "true",
        "extra": "null",
        "tags": ["a", "1"],
    }

def test_to_json_data_with_flags():
    value = parse("port: 8080\ndebug: true\nextra: null\ntags:\n- a\n- 1")
    data = to_json_data(value, numbers=True, booleans=True, null=True)
    assert data == {"port": 8080, "debug": True, "extra": None, "tags": ["a", 1]}

def test_to_json_data_keys_are_never_converted():
    data = to_json_data(parse("{1:true}"), numbers=True, booleans=True)
    assert data == {"1": True}


# ---------------------------------------------------------------------------
# from_json_data
# ---------------------------------------------------------------------------

def test_from_json_scalars():
    assert from_json_data(None) == VText("null")
    assert from_json_data(True) == VText("true")
    assert from_json_data(False) == VText("false")
    assert from_json_data(3) == VText("3")
    assert from_json_data(2.5) == VText("2.5")
    assert from_json_data("x") == VText("x")

def test_from_json_containers():
    value = from_json_data({"a": [1, None], "b": {}})
    assert value == VDict({"a": VList([VText("1"), VText("null")]), "b": VDict()})

def test_from_json_keeps_key_order():
    assert list(from_json_data({"z": 1, "a": 2}).entries) == ["z", "a"]

def test_from_json_rejects_other_types():
    with pytest.raises(TypeError):
        from_json_data(object())

def test_json_roundtrip():
    data = {"a": ["1", {"b": ""}], "c": []}
    assert to_json_data(from_json_data(data)) == data
    assert from_json_data(data) == to_value(data)
