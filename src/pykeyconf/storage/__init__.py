"""Storage provider registry and factory."""
from __future__ import annotations

import os
from pathlib import Path

from .base import StorageProvider

_REGISTRY: dict[str, type[StorageProvider]] = {}


def register_provider(provider: type[StorageProvider]) -> type[StorageProvider]:
    """Register a provider class by its file suffixes; usable as a decorator."""
    for suf in provider.suffixes:
        _REGISTRY[suf] = provider
    return provider


def get_provider_for_path(
    path: str | os.PathLike[str], read_only: bool = False
) -> StorageProvider:
    suffix = Path(path).suffix.lower()
    provider_cls = _REGISTRY.get(suffix)
    if provider_cls is None:
        raise ValueError(f"No storage provider for {suffix or path!r}")
    return provider_cls(path, read_only=read_only)  # type: ignore[call-arg]


# register default providers
from .ini_provider import IniStorageProvider  # noqa: E402

__all__ = [
    "StorageProvider",
    "IniStorageProvider",
    "register_provider",
    "get_provider_for_path",
]
