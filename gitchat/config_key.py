"""Validation, splitting and joining of dotted configuration keys.

A key is a sequence of period-delimited components. Unquoted components
consist of ASCII letters, digits and underscores. A component surrounded in
double quotes may hold any printable character; within it, double quotes and
backslashes are escaped as ``\\"`` and ``\\\\``.
"""

from __future__ import annotations

from collections.abc import Iterable


class InvalidConfigKeyError(ValueError):
    """Raised when a config key or a list of key components is malformed."""


def _is_printable(char: str) -> bool:
    return " " <= char <= "~"


def _is_word_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == "_")


def _component_end(key: str, start: int) -> int | None:
    """Return the index just past the component starting at ``start``.

    Returns None if the component is malformed. The returned index points at
    a period or at the end of the key.
    """
    if start >= len(key):
        return None

    if key[start] == '"':
        pos = start + 1
        while pos < len(key) and key[pos] != '"':
            if not _is_printable(key[pos]):
                return None
            if key[pos] == "\\":
                pos += 1
            pos += 1
        if pos >= len(key):
            return None
        pos += 1
    else:
        pos = start
        while pos < len(key) and key[pos] != ".":
            if not _is_word_char(key[pos]):
                return None
            pos += 1

    if pos < len(key) and key[pos] != ".":
        return None
    return pos


def _component_spans(key: str) -> list[tuple[int, int]]:
    """Return the (start, end) span of every component of a valid key."""
    if not isinstance(key, str) or not key:
        raise InvalidConfigKeyError(f"invalid config key {key!r}")

    spans = []
    start = 0
    while start < len(key):
        end = _component_end(key, start)
        if end is None or end == start:
            raise InvalidConfigKeyError(f"invalid config key {key!r}")
        if end < len(key) and end + 1 == len(key):
            raise InvalidConfigKeyError(f"invalid config key {key!r}: trailing period")
        spans.append((start, end))
        start = end + 1 if end < len(key) else end
    return spans


def is_valid_config_key(key: str) -> bool:
    """Return True if ``key`` is a well-formed config key."""
    try:
        _component_spans(key)
    except InvalidConfigKeyError:
        return False
    return True


def isolate_config_key_components(key: str) -> list[str]:
    """Split a key into its components, unquoting and unescaping each."""
    components = []
    for start, end in _component_spans(key):
        if key[start] == '"':
            start += 1
            end -= 1
        components.append(unescape(key[start:end]))
    return components


def merge_config_key_components(components: Iterable[str]) -> str:
    """Join key components into a single key, quoting them where needed."""
    parts = [escape_component(component) for component in components]
    if not parts:
        raise InvalidConfigKeyError("no key components given")

    key = ".".join(parts)
    if not is_valid_config_key(key):
        raise InvalidConfigKeyError(f"invalid config key components {parts!r}")
    return key


def escape_component(text: str) -> str:
    """Quote ``text`` if it holds anything but letters, digits or underscores."""
    if all(_is_word_char(char) for char in text):
        return text

    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def unescape(text: str) -> str:
    """Remove backslash escapes, keeping the character after each backslash."""
    out = []
    chars = iter(text)
    for char in chars:
        if char == "\\":
            char = next(chars, "")
        out.append(char)
    return "".join(out)