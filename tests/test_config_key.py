from __future__ import annotations

import pytest

from enum import Enum
from uuid import UUID

from pykeyconf import CustomConfigKey, KeySchema
from pykeyconf.errors import ArgumentError, DuplicateValueError, TypeConflictError


def test_add_and_lookup():
    key = CustomConfigKey("Server")
    key.add("Host", "localhost")
    key.add("Port", 8080)
    assert key.count == 2
    assert len(key) == 2
    assert key["Port"] == 8080
    assert key.contains_value("Host")
    assert not key.contains_value("host")
    assert [nv.name for nv in key] == ["Host", "Port"]


def test_add_duplicate_raises():
    key = CustomConfigKey("Server")
    key.add("Port", 1)
    with pytest.raises(DuplicateValueError):
        key.add("Port", 2)
    assert key["Port"] == 1


def test_add_hidden_value():
    key = CustomConfigKey("Flags")
    nv = key.add("unnamed0", "verbose", is_name_visible=False)
    assert nv.is_name_visible is False


def test_add_or_update_creates_and_replaces():
    key = CustomConfigKey("Server")
    key.add_or_update("Port", 1)
    key.add_or_update("Port", "eighty")
    assert key["Port"] == "eighty"


def test_add_or_update_guards_type_change():
    key = CustomConfigKey("Server")
    key.add("Port", 1)
    with pytest.raises(TypeConflictError):
        key.add_or_update("Port", "eighty", throw_on_type_change=True)
    assert key["Port"] == 1
    key.add_or_update("Port", 2, throw_on_type_change=True)
    assert key["Port"] == 2


def test_add_or_update_rejects_none_name():
    with pytest.raises(ArgumentError):
        CustomConfigKey("k").add_or_update(None, 1)


def test_set_item_marks_value_set():
    key = CustomConfigKey("Server")
    key.add("Port", 1)
    key["Port"] = 2
    assert key.values["Port"].value == 2
    with pytest.raises(KeyError):
        key["Missing"] = 3


def test_try_get_value_never_raises():
    key = CustomConfigKey("Server")
    key.add("Port", 8080)
    assert key.try_get_value("Port") == (True, 8080)
    assert key.try_get_value("Port", int) == (True, 8080)
    assert key.try_get_value("Missing") == (False, None)
    assert key.try_get_value("Missing", int) == (False, 0)
    assert key.try_get_value("Port", str) == (False, None)
    assert key.try_get_value("Port", "not-a-type") == (False, None)


class Level(Enum):
    LOW = 1
    HIGH = 2


@pytest.mark.parametrize(
    "data, value_type, expected",
    [
        (8080, "ushort", (True, 8080)),
        (8080, "int32", (True, 8080)),
        ("8080", "ushort", (False, 0)),
        ("x", "char", (True, "x")),
        (UUID(int=1), "guid", (True, UUID(int=1))),
        ("abc", "guid", (False, None)),
        ("text", "object", (True, "text")),
        (8080, int | None, (True, 8080)),
        (None, int | None, (True, None)),
        ("8080", int | None, (False, None)),
        (Level.HIGH, Level, (True, Level.HIGH)),
        (2, Level, (False, Level.LOW)),
        (8080, ["not", "a", "type"], (False, None)),
    ],
)
def test_try_get_value_request_types(data, value_type, expected):
    key = CustomConfigKey("Server")
    key.add("Port", data)
    assert key.try_get_value("Port", value_type) == expected


def test_try_get_value_with_declared_tag():
    key = KeySchema("Server").field("Port", "ushort").build()
    assert key.try_get_value("Port", "ushort") == (True, 0)
    key["Port"] = 8080
    assert key.try_get_value("Port", "ushort") == (True, 8080)
    assert key.try_get_value("Missing", "ushort") == (False, 0)


def test_remove():
    key = CustomConfigKey("Server")
    key.add("Port", 1)
    assert key.remove("Port") is True
    assert key.remove("Port") is False
    assert key.count == 0


def test_name_validation():
    with pytest.raises(ArgumentError):
        CustomConfigKey(None)
    key = CustomConfigKey("a")
    key.name = "b"
    assert key.name == "b"
    with pytest.raises(ArgumentError):
        key.name = None


def test_values_view_is_read_only():
    key = CustomConfigKey("k")
    key.add("a", 1)
    with pytest.raises(TypeError):
        key.values["b"] = None  # type: ignore[index]


def test_default_value_lookup():
    key = CustomConfigKey("Flags")
    assert key.default_value() is None
    key.add("values", "x", is_name_visible=False)
    key.default_value_name = "values"
    assert key.default_value() is key.values["values"]
