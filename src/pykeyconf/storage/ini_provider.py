"""Line-oriented INI storage.

The format is a sequence of ``[Section]`` headers, each followed by value
lines.  A value line is either ``name=literal`` or a bare literal, which is
*positional* and belongs to the key's default value.  Blank lines and lines
starting with ``#`` are comments.  There is no escaping: ``=`` or ``]``
inside a literal is not supported.

:meth:`IniStorageProvider.update` rewrites only the value lines it
recognises and copies every other byte of the file unchanged.  Both
:meth:`~IniStorageProvider.update` and :meth:`~IniStorageProvider.save`
write a uniquely named temporary file next to the target and swap it into
place, so the target is either fully replaced or left untouched.  Where the
swap is refused the temporary file is copied over the target instead; that
fallback rewrites the target in place and gives no such guarantee.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TextIO

from ..configuration import Configuration
from ..errors import InvalidOperationError
from ..keys import ConfigKey, CustomConfigKey
from ..paths import validate_path
from ..values import NamedValue
from . import register_provider
from .base import StorageProvider

logger = logging.getLogger(__name__)

UNNAMED_NAME = "unnamed"
COMMENT_START = "#"
KEY_START = "["
KEY_END = "]"
NAME_VAL_SEPARATOR = "="


def _split_ending(raw: str) -> tuple[str, str]:
    content = raw.rstrip("\r\n")
    return content, raw[len(content):]


def _is_ignored(line: str) -> bool:
    return line == "" or line.startswith(COMMENT_START)


def _key_name(line: str) -> str | None:
    """Return the section name of a ``[name]`` header line, else ``None``."""
    if line.startswith(KEY_START) and line.endswith(KEY_END) and len(line) > 2:
        name = line[1:-1].strip()
        if name:
            return name
    return None


def _split_value(line: str) -> tuple[str | None, str]:
    """Split a value line into ``(name, literal)``.

    Positional lines (no separator, or a blank name) give ``(None, line)``.
    """
    name, sep, literal = line.partition(NAME_VAL_SEPARATOR)
    if not sep or not name.strip():
        return None, line
    return name.strip(), literal.strip()


def _value_lines(named: NamedValue) -> list[str]:
    if named.is_name_visible:
        return [f"{named.name}{NAME_VAL_SEPARATOR}{named.to_string()}"]
    if not named.is_value_set:
        return []
    return [named.to_string(entry) for entry in named.values if entry is not None]


@register_provider
class IniStorageProvider(StorageProvider):
    """Storage provider for section/line INI files.

    Parameters
    ----------
    path:
        File backing the provider.  In read-write mode it is created on first
        access if missing.
    read_only:
        Forbid :meth:`update` and :meth:`save`.  The file must already exist.
    encoding:
        Text encoding of the file.
    newline:
        Line ending used for lines written by :meth:`save` and for keys
        appended by :meth:`update`.
    """

    suffixes = (".ini", ".cfg", ".conf")

    def __init__(
        self,
        path: str | os.PathLike[str],
        read_only: bool = False,
        *,
        encoding: str = "utf-8",
        newline: str = "\n",
    ) -> None:
        super().__init__(read_only=read_only)
        self._stream: TextIO | None = None
        self._unnamed_index = 0
        self.path = validate_path(path)
        if read_only and not self.path.is_file():
            raise InvalidOperationError(f"cannot open missing file read-only: {self.path}")
        self.encoding = encoding
        self.newline = newline

    # ----- stream handling -----

    def _get_stream(self) -> TextIO:
        self._throw_if_disposed()
        if self._stream is None:
            if self.is_read_only:
                self._stream = self.path.open("r", encoding=self.encoding, newline="")
            else:
                if not self.path.exists():
                    self.path.parent.mkdir(parents=True, exist_ok=True)
                    self.path.touch()
                self._stream = self.path.open("r+", encoding=self.encoding, newline="")
            logger.debug("Opened %s (read_only=%s)", self.path, self.is_read_only)
        return self._stream

    def _read_lines(self) -> list[str]:
        stream = self._get_stream()
        stream.seek(0)
        return stream.readlines()

    def _close_stream(self) -> None:
        if self._stream is not None:
            stream, self._stream = self._stream, None
            stream.close()

    def _release(self) -> None:
        self._close_stream()
        logger.debug("Closed %s", self.path)

    def __del__(self) -> None:
        if getattr(self, "_stream", None) is not None and not self._disposed:
            self.close()

    # ----- loading -----

    def load(self, configuration: Configuration | None = None) -> Configuration:
        self._throw_if_disposed()
        lines = self._read_lines()
        if configuration is None:
            result = self._load_free_form(lines)
        else:
            result = self._load_schema(lines, configuration)
        logger.debug("Loaded %d keys from %s", len(result), self.path)
        return result

    def _next_unnamed(self, key: ConfigKey) -> str:
        while True:
            name = f"{UNNAMED_NAME}{self._unnamed_index}"
            self._unnamed_index += 1
            if not key.contains_value(name):
                return name

    def _load_free_form(self, lines: Sequence[str]) -> Configuration:
        conf = Configuration()
        current: CustomConfigKey | None = None
        self._unnamed_index = 0
        for raw in lines:
            line = raw.strip()
            if _is_ignored(line):
                continue
            key_name = _key_name(line)
            if key_name is not None:
                current = conf.get(key_name)  # type: ignore[assignment]
                if current is None:
                    current = CustomConfigKey(key_name)
                    conf.add(current)
                continue
            if current is None:
                continue
            value_name, literal = _split_value(line)
            if value_name is None:
                current.add(self._next_unnamed(current), line, is_name_visible=False)
            else:
                current.add_or_update(value_name, literal)
        return conf

    def _load_schema(self, lines: Sequence[str], configuration: Configuration) -> Configuration:
        current: ConfigKey | None = None
        entered: set[str] = set()
        for raw in lines:
            line = raw.strip()
            if _is_ignored(line):
                continue
            key_name = _key_name(line)
            if key_name is not None:
                current = configuration.get(key_name)
                if current is not None and key_name not in entered:
                    # positional entries are rebuilt from the file on every pass
                    entered.add(key_name)
                    target = current.default_value()
                    if target is not None:
                        target.reset_value()
                continue
            if current is None:
                continue
            value_name, literal = _split_value(line)
            target = current.default_value()
            if value_name is None:
                if target is not None:
                    target.add_parsed_string(line)
            elif current.contains_value(value_name):
                current.values[value_name].parse_string(literal)
        return configuration

    # ----- writing -----

    def update(self, configuration: Configuration, add_missing_keys: bool = False) -> None:
        self._throw_if_read_only()
        lines = self._read_lines()
        seen: set[str] = set()
        positions: dict[str, int] = {}
        current: ConfigKey | None = None
        output: list[str] = []
        replaced = 0
        for raw in lines:
            content, ending = _split_ending(raw)
            line = content.strip()
            if not _is_ignored(line):
                key_name = _key_name(line)
                if key_name is not None:
                    current = configuration.get(key_name)
                    if current is not None:
                        seen.add(key_name)
                elif current is not None:
                    replacement = self._replacement(current, line, positions)
                    if replacement is not None:
                        content = replacement
                        replaced += 1
            output.append(content + ending)

        missing = (
            [key for key in configuration if key.name not in seen] if add_missing_keys else []
        )

        def write(fh: TextIO) -> None:
            fh.writelines(output)
            if missing and output and not output[-1].endswith(("\n", "\r")):
                fh.write(self.newline)
            for key in missing:
                self._write_key(fh, key)

        self._replace_file(write)
        logger.debug(
            "Updated %s: %d lines rewritten, %d keys appended",
            self.path,
            replaced,
            len(missing),
        )

    def _replacement(
        self, key: ConfigKey, line: str, positions: dict[str, int]
    ) -> str | None:
        value_name, _ = _split_value(line)
        if value_name is not None:
            named = key.values.get(value_name)
            if named is None:
                return None
            return f"{named.name}{NAME_VAL_SEPARATOR}{named.to_string()}"
        target = key.default_value()
        if target is None:
            return None
        index = positions.get(key.name, 0)
        positions[key.name] = index + 1
        if not target.is_value_set or index >= len(target):
            return None
        entry = target.values[index]
        if entry is None:
            return None
        return target.to_string(entry)

    def save(self, configuration: Configuration) -> None:
        self._throw_if_read_only()

        def write(fh: TextIO) -> None:
            for key in configuration:
                self._write_key(fh, key)
            fh.write(self.newline)

        self._replace_file(write)
        logger.debug("Saved %d keys to %s", len(configuration), self.path)

    def _write_key(self, fh: TextIO, key: ConfigKey) -> None:
        nl = self.newline
        fh.write(nl)
        fh.write(f"{KEY_START}{key.name}{KEY_END}{nl}")
        fh.write(nl)
        for named in key:
            for line in _value_lines(named):
                fh.write(line + nl)

    def _replace_file(self, write: Callable[[TextIO], None]) -> None:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=self.encoding,
            newline="",
            dir=self.path.parent,
            prefix=self.path.name + ".",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp = Path(fh.name)
            try:
                write(fh)
            except BaseException:
                fh.close()
                tmp.unlink(missing_ok=True)
                raise
        if self.path.exists():
            shutil.copymode(self.path, tmp)
        # the open handle would block the swap on some platforms
        self._close_stream()
        try:
            tmp.replace(self.path)
        except OSError as exc:
            logger.warning("Could not replace %s atomically (%s); copying", self.path, exc)
            try:
                shutil.copyfile(tmp, self.path)
            finally:
                tmp.unlink(missing_ok=True)

    def __repr__(self) -> str:
        return f"IniStorageProvider({str(self.path)!r}, read_only={self.is_read_only})"
