from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .errors import ArgumentError
from .parsers import Parser, as_parser, default_for, is_supported, parser_for

_UNSET: Any = object()


class NamedValue:
    """A typed, named, ordered multi-value slot.

    ``values`` always holds at least one entry.  ``value`` is the primary
    entry (``values[0]``).  Until the primary entry has been assigned,
    appending a value fills the primary slot instead of growing the list,
    which is how repeated positional lines accumulate into one ordered
    value.

    Parameters
    ----------
    name:
        Name of the value inside its key.  Cannot be changed afterwards.
    value:
        Initial data.  When given the value counts as set.
    value_type:
        Declared type or type tag used to pick the default parser.  Defaults
        to the type of *value*, or ``str`` when no value is given.
    default:
        Data of the primary slot while the value is unset and after
        :meth:`reset_value`.  Defaults to the zero value of *value_type*.
    is_name_visible:
        When ``False`` the name is not written to storage and every entry is
        written as a bare line.
    parser:
        Parser (or ``str -> value`` callable) overriding the default parser.
    null_value:
        Literal written to storage when an entry is ``None``.
    """

    def __init__(
        self,
        name: str,
        value: Any = _UNSET,
        *,
        value_type: object = None,
        default: Any = _UNSET,
        is_name_visible: bool = True,
        parser: Parser | Callable[[str], Any] | None = None,
        null_value: str | None = None,
    ) -> None:
        if name is None:
            raise ArgumentError("value name cannot be None")
        self._name = name
        if value_type is None:
            if value is not _UNSET and value is not None:
                value_type = type(value)
            else:
                value_type = str
        self.value_type = value_type
        self._parser: Parser | None = as_parser(parser) if parser is not None else None
        self._default = default_for(value_type) if default is _UNSET else default
        self.is_name_visible = is_name_visible
        self.null_value = null_value
        if value is _UNSET:
            self._values: list[Any] = [self._default]
            self.is_value_set = False
        else:
            self._values = [value]
            self.is_value_set = True

    @property
    def name(self) -> str:
        return self._name

    @property
    def parser(self) -> Parser:
        """Parser for the declared type, resolved on first use.

        :class:`~pykeyconf.errors.ConfigurationSchemaError` is raised when
        no parser was given and the declared type has no default parser.
        """
        if self._parser is None:
            self._parser = parser_for(self.value_type)
        return self._parser

    @parser.setter
    def parser(self, parser: Parser | Callable[[str], Any]) -> None:
        self._parser = as_parser(parser)

    @property
    def value(self) -> Any:
        return self._values[0]

    @value.setter
    def value(self, data: Any) -> None:
        self._values[0] = data
        self.is_value_set = True

    @property
    def values(self) -> list[Any]:
        """Copy of every entry, primary first."""
        return list(self._values)

    @values.setter
    def values(self, data: Sequence[Any]) -> None:
        entries = list(data)
        if not entries:
            self.reset_value()
            return
        self._values = entries
        self.is_value_set = True

    @property
    def default(self) -> Any:
        return self._default

    def __len__(self) -> int:
        return len(self._values)

    def _parse(self, raw: str | None) -> Any:
        if self.null_value is not None and raw == self.null_value:
            return None
        return self.parser.parse(raw)

    def parse_string(self, raw: str | None) -> None:
        """Parse *raw* and overwrite the primary entry.

        A literal equal to ``null_value`` is stored as ``None``.
        """
        self.value = self._parse(raw)

    def add_value(self, data: Any) -> None:
        """Fill the primary entry if unset, otherwise append *data*."""
        if self.is_value_set:
            self._values.append(data)
        else:
            self.value = data

    def add_parsed_string(self, raw: str | None) -> None:
        """Parse *raw* and accumulate it with :meth:`add_value`."""
        self.add_value(self._parse(raw))

    def reset_value(self) -> None:
        """Truncate to a single default entry and mark the value unset."""
        self._values = [self._default]
        self.is_value_set = False

    def to_string(self, data: Any = _UNSET) -> str:
        """Return the storage literal for *data* (the primary entry by default)."""
        if data is _UNSET:
            data = self.value
        if data is None:
            return self.null_value if self.null_value is not None else ""
        if self._parser is None and not is_supported(self.value_type):
            return str(data)
        return self.parser.serialize(data)

    def __repr__(self) -> str:
        if len(self._values) == 1:
            return f"NamedValue({self._name!r}, {self.value!r})"
        return f"NamedValue({self._name!r}, values={self._values!r})"
