"""Declarative schemas for configuration keys.

A schema lists the values a key is expected to carry, their types and how
they are written.  It is declared once, usually at import time::

    SERVER = (
        KeySchema("Server")
        .field("Host", str, default="localhost")
        .field("Port", int, default=80)
    )
    FLAGS = KeySchema("Flags", default_value_name="values").field(
        "values", str, is_name_visible=False
    )

    schema = Configuration(SERVER.build(), FLAGS.build())
    provider.load(schema)

Each :meth:`KeySchema.build` call returns a fresh :class:`SchemaConfigKey`
so one schema can back several independent configurations.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from .errors import ArgumentError, ConfigurationSchemaError, DuplicateValueError
from .keys import ConfigKey
from .parsers import Parser, is_supported
from .values import NamedValue


@dataclass(frozen=True)
class FieldSpec:
    """Specification for a single value of a schema key."""

    name: str
    value_type: object = str
    default: Any = None
    is_name_visible: bool = True
    parser: Parser | Callable[[str], Any] | None = None
    null_value: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ArgumentError("field name cannot be empty")
        if self.parser is None and not is_supported(self.value_type):
            raise ConfigurationSchemaError(
                f"field {self.name!r}: unsupported type {self.value_type!r}"
            )

    def create_value(self) -> NamedValue:
        # a None default falls back to the zero value of the type
        extra = {} if self.default is None else {"default": self.default}
        return NamedValue(
            self.name,
            value_type=self.value_type,
            is_name_visible=self.is_name_visible,
            parser=self.parser,
            null_value=self.null_value,
            **extra,
        )


class SchemaConfigKey(ConfigKey):
    """Key with a fixed set of values declared by :class:`FieldSpec` objects.

    Values cannot be added or removed.  All values start unset, holding
    their field default.
    """

    def __init__(
        self,
        name: str,
        fields: Iterable[FieldSpec],
        default_value_name: str | None = None,
    ) -> None:
        super().__init__(name, default_value_name)
        self._fields: dict[str, FieldSpec] = {}
        for spec in fields:
            if spec.name in self._fields:
                raise DuplicateValueError(f"field {spec.name!r} declared twice in {name!r}")
            self._fields[spec.name] = spec
        if default_value_name is not None and default_value_name not in self._fields:
            raise ConfigurationSchemaError(
                f"default value {default_value_name!r} is not a field of {name!r}"
            )
        for spec in self._fields.values():
            self._values[spec.name] = spec.create_value()

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return tuple(self._fields.values())

    def reset(self) -> None:
        """Reset every value to its field default."""
        for named in self._values.values():
            named.reset_value()


class KeySchema:
    """Builder collecting :class:`FieldSpec` objects for one key."""

    def __init__(self, name: str, default_value_name: str | None = None) -> None:
        if not name:
            raise ArgumentError("key name cannot be empty")
        self.name = name
        self.default_value_name = default_value_name
        self._fields: list[FieldSpec] = []

    def field(
        self,
        name: str,
        value_type: object = str,
        *,
        default: Any = None,
        is_name_visible: bool = True,
        parser: Parser | Callable[[str], Any] | None = None,
        null_value: str | None = None,
    ) -> KeySchema:
        self._fields.append(
            FieldSpec(
                name,
                value_type,
                default=default,
                is_name_visible=is_name_visible,
                parser=parser,
                null_value=null_value,
            )
        )
        return self

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return tuple(self._fields)

    def build(self) -> SchemaConfigKey:
        return SchemaConfigKey(self.name, self._fields, self.default_value_name)
