"""Default values of the configuration keys the application recognizes."""

from __future__ import annotations

from gitchat.config_key import InvalidConfigKeyError, isolate_config_key_components

_CONFIG_DEFAULTS: tuple[tuple[str, str], ...] = (
    ("channel.*.name", ""),
    ("channel.*.createdby", ""),
    ("channel.*.description", ""),
)


def _key_matches_pattern(pattern: str, key: str) -> bool:
    """Return True if ``key`` matches ``pattern``.

    Each '*' component of the pattern matches exactly one key component.
    """
    try:
        key_components = isolate_config_key_components(key)
    except InvalidConfigKeyError:
        return False

    pattern_components = pattern.split(".")
    if len(pattern_components) != len(key_components):
        return False

    return all(
        expected == "*" or expected == actual
        for expected, actual in zip(pattern_components, key_components)
    )


def get_default_config_value(key: str) -> str | None:
    """Return the default value for ``key``, or None if it is not recognized."""
    for pattern, default in _CONFIG_DEFAULTS:
        if _key_matches_pattern(pattern, key):
            return default
    return None


def is_recognized_config_key(key: str) -> bool:
    """Return True if ``key`` is a key known to the application."""
    return get_default_config_value(key) is not None