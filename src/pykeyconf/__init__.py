from .configuration import Configuration
from .errors import (
    ArgumentError,
    ConfigError,
    ConfigurationSchemaError,
    DisposedError,
    DuplicateKeyError,
    DuplicateValueError,
    InvalidOperationError,
    InvalidPathError,
    ParseError,
    ReadOnlyError,
    TypeConflictError,
)
from .keys import ConfigKey, CustomConfigKey
from .parsers import DefaultTypeParser, OptionalParser, Parser, parser_for
from .schema import FieldSpec, KeySchema, SchemaConfigKey
from .storage import IniStorageProvider, StorageProvider, get_provider_for_path
from .values import NamedValue


__all__ = [
    "Configuration",
    "ConfigKey",
    "CustomConfigKey",
    "SchemaConfigKey",
    "KeySchema",
    "FieldSpec",
    "NamedValue",
    "Parser",
    "DefaultTypeParser",
    "OptionalParser",
    "parser_for",
    "StorageProvider",
    "IniStorageProvider",
    "get_provider_for_path",
    "ConfigError",
    "ParseError",
    "ConfigurationSchemaError",
    "DuplicateKeyError",
    "DuplicateValueError",
    "TypeConflictError",
    "ArgumentError",
    "DisposedError",
    "ReadOnlyError",
    "InvalidPathError",
    "InvalidOperationError",
]
