"""String parsers for named values.

A parser converts the literal text found in a storage file into a Python
value of a declared type and serialises it back.  Declared types are either
Python types (``int``, ``bool``, ``Decimal``, an ``Enum`` subclass, ...) or
string tags for the fixed-width and platform types of the storage format
(``"byte"``, ``"ushort"``, ``"guid"``, ...).  ``X | None`` declares an
optional value which parses a missing literal to ``None``.
"""

from __future__ import annotations

import builtins
import importlib
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from urllib.parse import SplitResult, urlsplit
from uuid import UUID

from .errors import ConfigurationSchemaError, ParseError


@runtime_checkable
class Parser(Protocol):
    """Converts storage literals to values and back."""

    def parse(self, raw: str | None) -> Any:
        """Parse *raw* text into a Python value."""

    def serialize(self, value: Any) -> str:
        """Serialise *value* into text for storage."""


@dataclass(frozen=True)
class Conversion:
    """Parse/serialise pair registered for one declared type."""

    parse: Callable[[str], Any]
    serialize: Callable[[Any], str] = str
    default: Any = None
    #: type of the values produced by ``parse``
    python_type: type = object


def _parse_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"invalid boolean: {raw!r}")


def _ranged_int(minimum: int, maximum: int) -> Callable[[str], int]:
    def parse(raw: str) -> int:
        value = int(raw.strip())
        if not minimum <= value <= maximum:
            raise ValueError(f"{value} outside [{minimum}, {maximum}]")
        return value

    return parse


def _parse_char(raw: str) -> str:
    if len(raw) != 1:
        raise ValueError(f"expected a single character, got {raw!r}")
    return raw


def _parse_uri(raw: str) -> SplitResult:
    result = urlsplit(raw.strip())
    if not result.scheme:
        raise ValueError(f"not an absolute URI: {raw!r}")
    return result


def _lookup_type(raw: str) -> type:
    name = raw.strip()
    module_name, _, attr = name.rpartition(".")
    if module_name:
        try:
            obj = getattr(importlib.import_module(module_name), attr, None)
        except ImportError as exc:
            raise ValueError(f"unknown module {module_name!r}") from exc
    else:
        obj = getattr(builtins, name, None)
    if not isinstance(obj, type):
        raise ValueError(f"unknown type {name!r}")
    return obj


def _type_name(value: type) -> str:
    if value.__module__ == "builtins":
        return value.__qualname__
    return f"{value.__module__}.{value.__qualname__}"


def _serialize_bool(value: bool) -> str:
    return "true" if value else "false"


_STRING = Conversion(lambda raw: raw, str, None, str)
_OBJECT = Conversion(lambda raw: raw)
_BOOL = Conversion(_parse_bool, _serialize_bool, False, bool)
_INT = Conversion(lambda raw: int(raw.strip()), str, 0, int)
_FLOAT = Conversion(lambda raw: float(raw.strip()), str, 0.0, float)
_DECIMAL = Conversion(lambda raw: Decimal(raw.strip()), str, Decimal(0), Decimal)
_URI = Conversion(_parse_uri, lambda value: value.geturl(), None, SplitResult)
_DATETIME = Conversion(
    lambda raw: datetime.fromisoformat(raw.strip()), lambda value: value.isoformat(), None, datetime
)
_GUID = Conversion(lambda raw: UUID(raw.strip()), str, None, UUID)
_TYPE = Conversion(_lookup_type, _type_name, None, type)

CONVERSIONS: dict[object, Conversion] = {
    object: _OBJECT,
    str: _STRING,
    bool: _BOOL,
    int: _INT,
    float: _FLOAT,
    Decimal: _DECIMAL,
    SplitResult: _URI,
    datetime: _DATETIME,
    UUID: _GUID,
    type: _TYPE,
    "object": _OBJECT,
    "string": _STRING,
    "bool": _BOOL,
    "byte": Conversion(_ranged_int(0, 2**8 - 1), str, 0, int),
    "sbyte": Conversion(_ranged_int(-(2**7), 2**7 - 1), str, 0, int),
    "short": Conversion(_ranged_int(-(2**15), 2**15 - 1), str, 0, int),
    "ushort": Conversion(_ranged_int(0, 2**16 - 1), str, 0, int),
    "int32": Conversion(_ranged_int(-(2**31), 2**31 - 1), str, 0, int),
    "uint": Conversion(_ranged_int(0, 2**32 - 1), str, 0, int),
    "long": Conversion(_ranged_int(-(2**63), 2**63 - 1), str, 0, int),
    "ulong": Conversion(_ranged_int(0, 2**64 - 1), str, 0, int),
    "int": _INT,
    "char": Conversion(_parse_char, str, None, str),
    "decimal": _DECIMAL,
    "double": _FLOAT,
    "float": _FLOAT,
    "uri": _URI,
    "datetime": _DATETIME,
    "guid": _GUID,
    "type": _TYPE,
}


def _enum_conversion(enum_type: type[Enum]) -> Conversion:
    def parse(raw: str) -> Enum:
        text = raw.strip()
        for member in enum_type:
            if member.name.lower() == text.lower():
                return member
        try:
            return enum_type(int(text))
        except ValueError:
            raise ValueError(f"{text!r} is not a member of {enum_type.__name__}") from None

    members = list(enum_type)
    return Conversion(
        parse, lambda value: value.name, members[0] if members else None, enum_type
    )


def optional_inner(value_type: object) -> object | None:
    """Return ``X`` for ``X | None`` / ``Optional[X]``, else ``None``."""
    origin = typing.get_origin(value_type)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(value_type) if a is not type(None)]
        if len(args) == 1 and len(typing.get_args(value_type)) == 2:
            return args[0]
    return None


def describe_type(value_type: object) -> str:
    if isinstance(value_type, str):
        return value_type
    return getattr(value_type, "__name__", repr(value_type))


def _resolve(value_type: object) -> Conversion:
    if isinstance(value_type, type) and issubclass(value_type, Enum):
        return _enum_conversion(value_type)
    try:
        return CONVERSIONS[value_type]
    except (KeyError, TypeError):
        raise ConfigurationSchemaError(
            f"unsupported type for parsing: {describe_type(value_type)}"
        ) from None


class DefaultTypeParser:
    """Parser for the built-in conversions of a declared type."""

    def __init__(self, value_type: object) -> None:
        self.value_type = value_type
        self._conversion = _resolve(value_type)

    def parse(self, raw: str | None) -> Any:
        if raw is None:
            raise ParseError(f"cannot parse None as {describe_type(self.value_type)}")
        try:
            return self._conversion.parse(raw)
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise ParseError(
                f"cannot parse {raw!r} as {describe_type(self.value_type)}: {exc}"
            ) from exc

    def serialize(self, value: Any) -> str:
        return self._conversion.serialize(value)

    @property
    def default(self) -> Any:
        return self._conversion.default

    def __repr__(self) -> str:
        return f"DefaultTypeParser({describe_type(self.value_type)})"


class OptionalParser:
    """Wraps a parser so that ``None`` parses to ``None``."""

    def __init__(self, inner: Parser) -> None:
        self.inner = inner

    def parse(self, raw: str | None) -> Any:
        if raw is None:
            return None
        return self.inner.parse(raw)

    def serialize(self, value: Any) -> str:
        if value is None:
            return ""
        return self.inner.serialize(value)

    def __repr__(self) -> str:
        return f"OptionalParser({self.inner!r})"


class FunctionParser:
    """Adapts a plain ``str -> value`` callable to the :class:`Parser` protocol."""

    def __init__(
        self,
        func: Callable[[str], Any],
        serialize: Callable[[Any], str] = str,
    ) -> None:
        self._func = func
        self._serialize = serialize

    def parse(self, raw: str | None) -> Any:
        if raw is None:
            raise ParseError("cannot parse None")
        try:
            return self._func(raw)
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise ParseError(f"cannot parse {raw!r}: {exc}") from exc

    def serialize(self, value: Any) -> str:
        return self._serialize(value)


def parser_for(value_type: object) -> Parser:
    """Return the default parser for *value_type*.

    :class:`~pykeyconf.errors.ConfigurationSchemaError` is raised when the
    type has no built-in conversion.
    """
    inner = optional_inner(value_type)
    if inner is not None:
        return OptionalParser(DefaultTypeParser(inner))
    return DefaultTypeParser(value_type)


def as_parser(obj: Parser | Callable[[str], Any]) -> Parser:
    if isinstance(obj, Parser):
        return obj
    if callable(obj):
        return FunctionParser(obj)
    raise ConfigurationSchemaError(f"not a parser: {obj!r}")


def is_supported(value_type: object) -> bool:
    inner = optional_inner(value_type)
    try:
        _resolve(inner if inner is not None else value_type)
    except ConfigurationSchemaError:
        return False
    return True


def default_for(value_type: object) -> Any:
    """Return the zero value of *value_type* (``None`` when it has none)."""
    if value_type is None or optional_inner(value_type) is not None:
        return None
    try:
        return _resolve(value_type).default
    except ConfigurationSchemaError:
        return None


def is_instance(data: Any, value_type: object) -> bool:
    """Return whether *data* is a value of the declared *value_type*.

    Type tags are checked against the Python type their conversion produces,
    so ``is_instance(8080, "ushort")`` holds.  Unknown types give ``False``.
    """
    inner = optional_inner(value_type)
    if inner is not None:
        return data is None or is_instance(data, inner)
    if isinstance(value_type, str):
        try:
            value_type = _resolve(value_type).python_type
        except ConfigurationSchemaError:
            return False
    if not isinstance(value_type, type):
        return False
    return isinstance(data, value_type)
