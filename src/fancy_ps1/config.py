"""
Loading of the ``key = value`` configuration file.

The configuration is read once, when the prompt is set up at the start of a
shell session; it is never reloaded automatically.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
import logging
import os
from pathlib import Path
from typing import Any
from .errors import MalformedConfig

log = logging.getLogger(__name__)

APP_NAME = "fancy-ps1"

CONFIG_NAME = f"{APP_NAME}.config"

SYSTEM_CONFIG_PATH = Path("/etc", APP_NAME, CONFIG_NAME)


@dataclass(frozen=True)
class Configuration:
    font_color_user: str = "white"
    background_user: str = "blue"
    texteffect_user: str = "bold"

    font_color_host: str = "white"
    background_host: str = "light-blue"
    texteffect_host: str = "bold"

    font_color_pwd: str = "dark-gray"
    background_pwd: str = "white"
    texteffect_pwd: str = "bold"

    font_color_git: str = "white"
    background_git: str = "dark-gray"
    texteffect_git: str = "bold"

    font_color_input: str = "cyan"
    background_input: str = "none"
    texteffect_input: str = "bold"

    #: The glyph drawn between two segments
    separator_char: str = "\uE0B0"

    #: Print an empty line before each prompt
    enable_vertical_padding: bool = True

    show_user: bool = True
    show_host: bool = True
    show_pwd: bool = True
    show_git: bool = True

    #: Maximum display length of the working directory before it is shortened
    max_pwd_length: int = 20

    def style_names(self, segment: str) -> tuple[str, str, str]:
        """
        Return the configured ``(font color, background, text effect)`` names
        for the segment with the given key suffix (``"user"``, ``"host"``,
        ``"pwd"``, ``"git"``, or ``"input"``)
        """
        return (
            getattr(self, f"font_color_{segment}"),
            getattr(self, f"background_{segment}"),
            getattr(self, f"texteffect_{segment}"),
        )

    def shows(self, segment: str) -> bool:
        return bool(getattr(self, f"show_{segment}", True))


FIELD_TYPES: dict[str, Any] = {f.name: f.type for f in fields(Configuration)}

TRUE_VALUES = {"true", "yes", "on", "1"}
FALSE_VALUES = {"false", "no", "off", "0"}


def config_paths() -> list[Path]:
    """
    Return the candidate configuration files in order of precedence: the
    user's file, then the system-wide file
    """
    return [Path.home() / ".config" / APP_NAME / CONFIG_NAME, SYSTEM_CONFIG_PATH]


def find_config() -> Path | None:
    """Return the first configuration file that exists, if any"""
    for p in config_paths():
        if p.is_file():
            return p
    return None


def load_config(path: str | os.PathLike[str]) -> Configuration:
    """
    Read the configuration file at ``path`` and return its settings merged
    over the defaults.  A missing file yields the defaults.  Lines that
    cannot be parsed are logged & skipped.

    :raises MalformedConfig: if the file exists but cannot be read or decoded
    """
    try:
        with open(path, encoding="utf-8") as fp:
            lines = fp.read().splitlines()
    except FileNotFoundError:
        log.debug("No configuration file at %s; using defaults", path)
        return Configuration()
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedConfig(os.fspath(path), str(e))
    log.debug("Loading configuration from %s", path)
    settings: dict[str, Any] = {}
    for lineno, line in enumerate(lines, start=1):
        try:
            parsed = parse_line(line)
            if parsed is None:
                continue
            key, value = parsed
            if key not in FIELD_TYPES:
                log.debug("%s:%d: Ignoring unknown key %r", path, lineno, key)
                continue
            settings[key] = convert(key, value)
        except ValueError as e:
            log.warning("%s", MalformedConfig(os.fspath(path), str(e), lineno))
    return replace(Configuration(), **settings)


def load_user_config(path: str | os.PathLike[str] | None = None) -> Configuration:
    """
    Load the configuration from ``path`` or, if that is `None`, from the first
    existing file returned by `config_paths()`.  If there is no such file or
    it cannot be read, the defaults are returned.
    """
    if path is None:
        path = find_config()
        if path is None:
            log.debug("No configuration file found; using defaults")
            return Configuration()
    try:
        return load_config(path)
    except MalformedConfig as e:
        log.warning("%s; using default configuration", e)
        return Configuration()


def parse_line(line: str) -> tuple[str, str] | None:
    """
    Split a ``key = value`` line into its key and value, removing any
    surrounding quotes from the value.  Blank lines and comments yield `None`.

    :raises ValueError: if the line is not of the form ``key = value``
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    key, eq, value = line.partition("=")
    key = key.strip()
    if not eq or not key:
        raise ValueError(f"Expected 'key = value', got {line!r}")
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    return (key, value)


def convert(key: str, value: str) -> Any:
    ftype = FIELD_TYPES[key]
    if ftype in (bool, "bool"):
        v = value.lower()
        if v in TRUE_VALUES:
            return True
        elif v in FALSE_VALUES:
            return False
        else:
            raise ValueError(f"{key}: Invalid boolean {value!r}")
    elif ftype in (int, "int"):
        try:
            n = int(value)
        except ValueError:
            raise ValueError(f"{key}: Invalid integer {value!r}") from None
        if n < 1:
            raise ValueError(f"{key}: Value must be positive, got {n}")
        return n
    elif key == "separator_char" and len(value) != 1:
        raise ValueError(f"{key}: Expected a single character, got {value!r}")
    else:
        return value
