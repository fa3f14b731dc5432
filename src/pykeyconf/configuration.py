from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import overload

from .errors import ArgumentError, DuplicateKeyError
from .keys import ConfigKey


class Configuration:
    """Ordered, name-indexed collection of :class:`ConfigKey` objects.

    Keys can be addressed by position (``cfg[0]``) or by name
    (``cfg["Server"]``).  Both views are kept in step by every mutation and
    the positional order is the order used when saving.
    """

    def __init__(self, *keys: ConfigKey | Iterable[ConfigKey]) -> None:
        self._keys: list[ConfigKey] = []
        self._by_name: dict[str, ConfigKey] = {}
        for item in keys:
            if isinstance(item, ConfigKey):
                self.add(item)
            else:
                for key in item:
                    self.add(key)

    # ----- sizing and iteration -----

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def count(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[ConfigKey]:
        return iter(list(self._keys))

    def names(self) -> list[str]:
        return [key.name for key in self._keys]

    def keys(self) -> list[ConfigKey]:
        return list(self._keys)

    # ----- lookup -----

    @overload
    def __getitem__(self, index: int) -> ConfigKey: ...

    @overload
    def __getitem__(self, name: str) -> ConfigKey: ...

    def __getitem__(self, item: int | str) -> ConfigKey:
        if isinstance(item, str):
            return self._by_name[item]
        return self._keys[item]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._by_name
        if isinstance(item, ConfigKey):
            return self._by_name.get(item.name) is item
        return False

    def contains_key(self, name: str) -> bool:
        return name in self._by_name

    def get(self, name: str, default: ConfigKey | None = None) -> ConfigKey | None:
        return self._by_name.get(name, default)

    def try_get_key(self, name: str) -> tuple[bool, ConfigKey | None]:
        key = self._by_name.get(name)
        return key is not None, key

    def index(self, key: ConfigKey | str) -> int:
        if isinstance(key, str):
            key = self._by_name[key]
        for i, existing in enumerate(self._keys):
            if existing is key:
                return i
        raise ValueError(f"{key!r} is not in configuration")

    # ----- mutation -----

    def __setitem__(self, item: int | str, key: ConfigKey) -> None:
        if isinstance(item, str):
            if key.name != item:
                raise ArgumentError(
                    f"replacement key {key.name!r} must keep the name {item!r}"
                )
            index = self.index(item)
            self._keys[index] = key
            self._by_name[item] = key
            return
        current = self._keys[item]
        if key.name != current.name:
            if key.name in self._by_name:
                raise DuplicateKeyError(f"key {key.name!r} already exists")
            del self._by_name[current.name]
        self._keys[item] = key
        self._by_name[key.name] = key

    def insert(self, index: int, key: ConfigKey) -> None:
        self._check_new(key)
        self._keys.insert(index, key)
        self._by_name[key.name] = key

    def add(self, key: ConfigKey) -> None:
        self._check_new(key)
        self._keys.append(key)
        self._by_name[key.name] = key

    append = add

    def remove_at(self, index: int) -> ConfigKey:
        key = self._keys.pop(index)
        del self._by_name[key.name]
        return key

    def remove(self, item: ConfigKey | str) -> bool:
        """Remove a key by name or identity; return whether it was present."""
        if isinstance(item, str):
            key = self._by_name.get(item)
        else:
            key = item if self._by_name.get(item.name) is item else None
        if key is None:
            return False
        self.remove_at(self.index(key))
        return True

    def __delitem__(self, item: int | str) -> None:
        if isinstance(item, str):
            if item not in self._by_name:
                raise KeyError(item)
            self.remove(item)
        else:
            self.remove_at(item)

    def clear(self) -> None:
        self._keys.clear()
        self._by_name.clear()

    def _check_new(self, key: ConfigKey) -> None:
        if not isinstance(key, ConfigKey):
            raise ArgumentError(f"expected a ConfigKey, got {type(key).__name__}")
        if key.name in self._by_name:
            raise DuplicateKeyError(f"key {key.name!r} already exists")

    def __repr__(self) -> str:
        return f"Configuration({self.names()!r})"
