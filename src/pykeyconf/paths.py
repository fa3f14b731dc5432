from __future__ import annotations

import os
import re
from pathlib import Path, PurePath, PureWindowsPath

from platformdirs import user_config_dir as _uc

from .errors import InvalidPathError

# Characters Windows refuses in a path component, plus ASCII control codes
_WINDOWS_INVALID_RX = re.compile(r'[<>:"|?*\x00-\x1f]')


def _app_name(default: str) -> str:
    return os.getenv("PYKEYCONF_APP_NAME", default)


def user_config_dir(app_name: str = "pykeyconf") -> Path:
    app = _app_name(app_name)
    return Path(_uc(appname=app)).resolve()


def user_config_file(app_name: str = "pykeyconf", filename: str = "settings.ini") -> Path:
    """Return the per-user configuration file for *app_name*.

    The directory is not created.
    """
    return user_config_dir(app_name) / filename


def validate_path(path: str | os.PathLike[str], *, windows: bool | None = None) -> Path:
    """Return *path* as a :class:`Path` or raise :class:`InvalidPathError`.

    NUL is rejected everywhere.  Under Windows rules each component is also
    checked against the reserved characters ``<>:"|?*`` and control codes;
    the colon of a drive letter is allowed.
    """
    if windows is None:
        windows = os.name == "nt"
    raw = os.fspath(path)
    if not isinstance(raw, str) or raw.strip() == "":
        raise InvalidPathError(f"invalid path: {raw!r}")
    if "\x00" in raw:
        raise InvalidPathError(f"path contains NUL: {raw!r}")
    if windows:
        pure: PurePath = PureWindowsPath(raw)
        parts = pure.parts[1:] if pure.anchor else pure.parts
        for part in parts:
            if _WINDOWS_INVALID_RX.search(part):
                raise InvalidPathError(f"invalid character in path component {part!r}")
    if Path(raw).name == "":
        raise InvalidPathError(f"path has no file name: {raw!r}")
    return Path(raw)
