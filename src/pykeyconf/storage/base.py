from __future__ import annotations

from abc import ABC, abstractmethod

from ..configuration import Configuration
from ..errors import DisposedError, ReadOnlyError


class StorageProvider(ABC):
    """Abstract storage for a :class:`Configuration`.

    A provider moves from *unopened* to *open* on its first read or write and
    to *disposed* on :meth:`close`, after which every operation raises
    :class:`DisposedError`.  Providers are not thread safe.
    """

    suffixes: tuple[str, ...] = ()

    def __init__(self, *, read_only: bool = False) -> None:
        self._read_only = read_only
        self._disposed = False

    @property
    def is_read_only(self) -> bool:
        return self._read_only

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @abstractmethod
    def load(self, configuration: Configuration | None = None) -> Configuration:
        """Read storage into a configuration.

        Without *configuration* a new free-form configuration is built from
        everything in storage.  Otherwise only keys and values already
        declared in *configuration* are filled and it is returned.
        """

    @abstractmethod
    def update(self, configuration: Configuration, add_missing_keys: bool = False) -> None:
        """Write known values back into storage, keeping everything else."""

    @abstractmethod
    def save(self, configuration: Configuration) -> None:
        """Replace the storage content with *configuration*."""

    def close(self) -> None:
        if not self._disposed:
            try:
                self._release()
            finally:
                self._disposed = True

    @abstractmethod
    def _release(self) -> None:
        """Release the backing resource; called once."""

    def __enter__(self):
        self._throw_if_disposed()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _throw_if_disposed(self) -> None:
        if self._disposed:
            raise DisposedError(f"{type(self).__name__} is closed")

    def _throw_if_read_only(self) -> None:
        self._throw_if_disposed()
        if self._read_only:
            raise ReadOnlyError(f"{type(self).__name__} was opened read-only")
