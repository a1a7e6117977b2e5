"""Reading and writing configuration files.

The file format resembles INI or git's own config format:

    key_3 = valuec

    [ section_a ]
        key_1 = value
        key_2 = valueb

    [ section.subsection ]
        key_2 = value

    []
        key_4 = valued

Leading and trailing whitespace around section names, property names and
values is ignored. An empty section header (``[]``) returns to the root.
Section names are dotted config keys. Property names and values may be
quoted; a quoted property name stays part of the key, while a quoted value
is unquoted and has its backslash escapes removed. Defining the same
property twice is a syntax error.
"""

from __future__ import annotations

import os
from typing import TextIO

from gitchat.config_data import ConfigData, DuplicateConfigKeyError
from gitchat.config_defaults import is_recognized_config_key
from gitchat.config_key import (
    InvalidConfigKeyError,
    escape_component,
    is_valid_config_key,
    unescape,
)
from gitchat.node_visitor import walk_nodes

_WHITESPACE = " \t\n\r\v\f"
_QUOTES = "'\""


class ConfigSyntaxError(ValueError):
    """Raised when a config file cannot be parsed."""


def _trim(text: str) -> str:
    return text.strip(_WHITESPACE)


def _is_printable(text: str) -> bool:
    return all(" " <= char <= "~" for char in text)


def _extract_section_key(line: str) -> str | None:
    """Return the section key of a ``[ section ]`` line, or None if not a section."""
    text = _trim(line)
    if len(text) < 2 or text[0] != "[" or text[-1] != "]":
        return None

    key = _trim(text[1:-1])
    if key and not is_valid_config_key(key):
        return None
    return key


def _extract_property(line: str) -> tuple[str, str] | None:
    """Split a ``<prop> = <value>`` line, or return None if it is not one."""
    text = _trim(line)
    if not _is_printable(text):
        return None

    if text and text[0] in _QUOTES:
        quote = text[0]
        pos = 1
        while pos < len(text) and text[pos] != quote:
            if text[pos] == "\\":
                pos += 1
            pos += 1
        if pos >= len(text):
            return None
        prop_end = pos + 1
    else:
        prop_end = text.find("=")
        if prop_end < 0:
            return None

    prop = _trim(text[:prop_end])
    rest = _trim(text[prop_end:])
    if not rest.startswith("="):
        return None

    rest = _trim(rest[1:])
    if rest and rest[0] in _QUOTES:
        if rest[-1] != rest[0]:
            return None
        value = unescape(rest[1:-1])
    else:
        value = rest
    return prop, value


def parse_config(config: ConfigData, path: str | os.PathLike[str]) -> None:
    """Parse the config file at ``path`` into ``config``.

    Raises OSError if the file cannot be read and ConfigSyntaxError if it
    cannot be parsed.
    """
    with open(path, encoding="utf-8", newline="") as stream:
        parse_config_stream(config, stream)


def parse_config_stream(config: ConfigData, stream: TextIO) -> None:
    """Parse config text read from ``stream`` into ``config``.

    Raises ConfigSyntaxError on a malformed line, an invalid key or a
    property defined more than once.
    """
    section = ""
    for raw_line in stream.read().split("\n"):
        line = _trim(raw_line)
        if not line:
            continue

        section_key = _extract_section_key(line)
        if section_key is not None:
            section = section_key
            continue

        prop = _extract_property(line)
        if prop is None:
            raise ConfigSyntaxError(f"invalid line '{line}'")

        name, value = prop
        key = f"{section}.{name}" if section else name
        try:
            config.insert(key, value)
        except InvalidConfigKeyError as err:
            raise ConfigSyntaxError(f"invalid key '{key}'") from err
        except DuplicateConfigKeyError as err:
            raise ConfigSyntaxError(
                f"property with key '{key}' already exists"
            ) from err


def write_config(config: ConfigData, path: str | os.PathLike[str]) -> None:
    """Write ``config`` to the file at ``path``, replacing its contents.

    A new file is created readable and writable by its owner only.
    """
    fd = os.open(path, os.O_TRUNC | os.O_WRONLY | os.O_CREAT, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8", newline="") as stream:
        write_config_stream(config, stream)


def write_config_stream(config: ConfigData, stream: TextIO) -> None:
    """Serialize ``config`` to ``stream``.

    Every node holding properties is written as a section heading followed
    by its indented properties; properties of the root node come without a
    heading. Raises InvalidConfigKeyError if a section path cannot form a key.
    """
    for node in walk_nodes(config):
        if not node.entries:
            continue

        section_key = node.section_key()
        indent = ""
        if section_key:
            stream.write(f"[ {section_key} ]\n")
            indent = "\t"

        for prop, value in node.entries.items():
            stream.write(
                f"{indent}{escape_component(prop)} = {escape_component(value)}\n"
            )


def _has_only_recognized_keys(config: ConfigData) -> int:
    for node in walk_nodes(config):
        if not node.entries:
            continue

        try:
            section_key = node.section_key()
        except InvalidConfigKeyError:
            return -1

        for prop in node.entries:
            name = escape_component(prop)
            key = f"{section_key}.{name}" if section_key else name
            if not is_recognized_config_key(key):
                return 2
    return 0


def is_config_invalid(path: str | os.PathLike[str], recognized_keys_only: bool) -> int:
    """Check whether the config file at ``path`` is usable.

    Returns -1 if the file cannot be read or parsed, 2 if
    ``recognized_keys_only`` is set and the file holds a key the
    application does not recognize, and 0 otherwise.
    """
    config = ConfigData()
    try:
        parse_config(config, path)
    except (OSError, ConfigSyntaxError, UnicodeDecodeError):
        return -1

    if recognized_keys_only:
        return _has_only_recognized_keys(config)
    return 0