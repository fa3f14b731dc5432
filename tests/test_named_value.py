from __future__ import annotations

import pytest

from pykeyconf import NamedValue
from pykeyconf.errors import ArgumentError, ConfigurationSchemaError, ParseError


def test_new_value_holds_default_and_is_unset():
    nv = NamedValue("port", value_type=int)
    assert nv.values == [0]
    assert nv.value == 0
    assert nv.is_value_set is False
    assert nv.is_name_visible is True


def test_explicit_value_is_set_and_infers_type():
    nv = NamedValue("port", 8080)
    assert nv.is_value_set
    assert nv.value_type is int
    nv.parse_string("9090")
    assert nv.value == 9090


def test_add_parsed_string_fills_primary_then_appends():
    nv = NamedValue("items", value_type=str, is_name_visible=False)
    nv.add_parsed_string("a")
    assert nv.values == ["a"]
    nv.add_parsed_string("b")
    nv.add_parsed_string("c")
    assert nv.values == ["a", "b", "c"]
    assert nv.value == "a"


def test_parse_string_overwrites_primary_only():
    nv = NamedValue("n", value_type=int)
    nv.add_parsed_string("1")
    nv.add_parsed_string("2")
    nv.parse_string("5")
    assert nv.values == [5, 2]


def test_reset_value_truncates_to_default():
    nv = NamedValue("n", value_type=int, default=3)
    nv.add_value(10)
    nv.add_value(11)
    nv.reset_value()
    assert nv.values == [3]
    assert not nv.is_value_set


def test_values_never_empty():
    nv = NamedValue("n", 1)
    nv.values = []
    assert nv.values == [0]
    assert not nv.is_value_set


def test_values_copy_does_not_alias():
    nv = NamedValue("n", 1)
    nv.values.append(2)
    assert nv.values == [1]


def test_name_is_required_and_read_only():
    with pytest.raises(ArgumentError):
        NamedValue(None)
    nv = NamedValue("n")
    with pytest.raises(AttributeError):
        nv.name = "other"  # type: ignore[misc]


def test_malformed_literal_propagates():
    nv = NamedValue("port", value_type=int)
    with pytest.raises(ParseError):
        nv.parse_string("eighty")
    assert not nv.is_value_set


def test_unsupported_type_fails_only_when_parsing():
    nv = NamedValue("items", [1, 2])
    assert nv.to_string() == "[1, 2]"
    with pytest.raises(ConfigurationSchemaError):
        nv.parse_string("[3]")


def test_custom_parser_callable():
    nv = NamedValue("csv", value_type=list, parser=lambda raw: raw.split(","))
    nv.parse_string("a,b")
    assert nv.value == ["a", "b"]


def test_to_string_uses_null_value():
    nv = NamedValue("host", None, value_type=str, null_value="localhost")
    assert nv.to_string() == "localhost"
    assert NamedValue("host", None, value_type=str).to_string() == ""
    assert NamedValue("flag", True).to_string() == "true"
