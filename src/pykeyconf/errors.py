class ConfigError(Exception):
    """Base class for pykeyconf errors."""


class ParseError(ConfigError, ValueError):
    """Raised when a literal cannot be converted to its declared type."""


class ConfigurationSchemaError(ConfigError, TypeError):
    """Raised when a declared value type or key schema is unsupported."""


class DuplicateKeyError(ConfigError, KeyError):
    """Raised when adding a key whose name already exists."""


class DuplicateValueError(ConfigError, KeyError):
    """Raised when adding a value whose name already exists in its key."""


class TypeConflictError(ConfigError, TypeError):
    """Raised when a guarded update would change a value's type."""


class ArgumentError(ConfigError, ValueError):
    """Raised for invalid arguments such as a missing name or a rename."""


class DisposedError(ConfigError, RuntimeError):
    """Raised when a closed storage provider is used."""


class ReadOnlyError(ConfigError, PermissionError):
    """Raised when attempting to write through a read-only provider."""


class InvalidPathError(ConfigError, ValueError):
    """Raised when a storage path contains invalid characters."""


class InvalidOperationError(ConfigError, RuntimeError):
    """Raised when an operation is not valid for the provider's state."""
