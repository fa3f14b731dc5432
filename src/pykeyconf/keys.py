from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .errors import ArgumentError, DuplicateValueError, TypeConflictError
from .parsers import default_for, is_instance
from .values import NamedValue


class ConfigKey:
    """A named group of :class:`NamedValue` objects.

    ``default_value_name`` optionally names the value that receives
    positional (un-named) lines when the key is loaded from storage.
    """

    def __init__(self, name: str, default_value_name: str | None = None) -> None:
        if name is None:
            raise ArgumentError("key name cannot be None")
        self._name = name
        self._values: dict[str, NamedValue] = {}
        self.default_value_name = default_value_name

    @property
    def name(self) -> str:
        return self._name

    @property
    def values(self) -> Mapping[str, NamedValue]:
        return MappingProxyType(self._values)

    @property
    def count(self) -> int:
        return len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[NamedValue]:
        return iter(list(self._values.values()))

    def __getitem__(self, value_name: str) -> Any:
        return self._values[value_name].value

    def __setitem__(self, value_name: str, data: Any) -> None:
        self._values[value_name].value = data

    def contains_value(self, value_name: str) -> bool:
        return value_name in self._values

    def default_value(self) -> NamedValue | None:
        """Return the positional target value, if the key declares one."""
        if self.default_value_name is None:
            return None
        return self._values.get(self.default_value_name)

    def try_get_value(self, value_name: str, value_type: object = None) -> tuple[bool, Any]:
        """Return ``(True, data)`` for *value_name* or ``(False, zero)``.

        When *value_type* is given (a type, type tag or ``X | None``) the data
        must be a value of it.
        ``zero`` is the zero value of *value_type* (``None`` if untyped).
        This never raises.
        """
        zero = default_for(value_type)
        named = self._values.get(value_name)
        if named is None:
            return False, zero
        data = named.value
        if value_type is not None and not is_instance(data, value_type):
            return False, zero
        return True, data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, values={list(self._values)!r})"


class CustomConfigKey(ConfigKey):
    """Free-form key whose values are added and removed at runtime."""

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        if name is None:
            raise ArgumentError("key name cannot be None")
        self._name = name

    def add(self, value_name: str, data: Any, is_name_visible: bool = True) -> NamedValue:
        """Add a new value; raise :class:`DuplicateValueError` if it exists."""
        named = NamedValue(value_name, data, is_name_visible=is_name_visible)
        self.add_value(named)
        return named

    def add_value(self, named: NamedValue) -> None:
        if named.name in self._values:
            raise DuplicateValueError(f"value {named.name!r} already exists in {self._name!r}")
        self._values[named.name] = named

    def add_or_update(
        self,
        value_name: str,
        data: Any,
        throw_on_type_change: bool = False,
        is_name_visible: bool = True,
    ) -> NamedValue:
        """Add *value_name*, or replace it if it already exists.

        With *throw_on_type_change* a replacement whose type differs from
        the stored data raises :class:`TypeConflictError`.
        """
        if value_name is None:
            raise ArgumentError("value name cannot be None")
        current = self._values.get(value_name)
        if (
            current is not None
            and throw_on_type_change
            and type(current.value) is not type(data)
        ):
            raise TypeConflictError(
                f"{value_name!r}: {type(data).__name__} replaces "
                f"{type(current.value).__name__}"
            )
        named = NamedValue(value_name, data, is_name_visible=is_name_visible)
        self._values[value_name] = named
        return named

    def remove(self, value_name: str) -> bool:
        return self._values.pop(value_name, None) is not None
