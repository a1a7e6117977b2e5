"""Hierarchical storage of configuration key-value pairs.

Keys address properties through nested sections: the key ``a.b.c`` names
the property ``c`` in subsection ``b`` of section ``a``. Each node of the
tree holds its own properties, in insertion order, and its subsections.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from gitchat.config_key import (
    InvalidConfigKeyError,
    isolate_config_key_components,
    merge_config_key_components,
)


class DuplicateConfigKeyError(KeyError):
    """Raised when inserting a property that already exists."""


class MissingConfigKeyError(KeyError):
    """Raised when updating or deleting a property that does not exist."""


def _validated_components(components: Iterable[str]) -> list[str]:
    """Return the components as a list, raising if they do not form a valid key."""
    parts = list(components)
    merge_config_key_components(parts)
    return parts


@dataclass(eq=False)
class ConfigData:
    """A node in the configuration tree; the root node has no section name."""

    section: str | None = None
    parent: ConfigData | None = field(default=None, repr=False)
    subsections: list[ConfigData] = field(default_factory=list)
    entries: dict[str, str] = field(default_factory=dict)

    def _lookup_section(self, path: list[str], create: bool) -> ConfigData | None:
        current = self
        for name in path:
            child = next((s for s in current.subsections if s.section == name), None)
            if child is None:
                if not create:
                    return None
                child = ConfigData(section=name, parent=current)
                current.subsections.append(child)
            current = child
        return current

    def _split(self, components: list[str]) -> tuple[str, list[str]]:
        return components[-1], components[:-1]

    def _insert(self, components: list[str], value: str) -> None:
        prop, path = self._split(components)
        node = self._lookup_section(path, create=True)
        if prop in node.entries:
            raise DuplicateConfigKeyError(
                merge_config_key_components(components)
            )
        node.entries[prop] = value

    def _update(self, components: list[str], value: str) -> None:
        prop, path = self._split(components)
        node = self._lookup_section(path, create=False)
        if node is None or prop not in node.entries:
            raise MissingConfigKeyError(merge_config_key_components(components))
        node.entries[prop] = value

    def _delete(self, components: list[str]) -> None:
        prop, path = self._split(components)
        node = self._lookup_section(path, create=False)
        if node is None or prop not in node.entries:
            raise MissingConfigKeyError(merge_config_key_components(components))
        del node.entries[prop]

    def _find(self, components: list[str]) -> str | None:
        prop, path = self._split(components)
        node = self._lookup_section(path, create=False)
        if node is None:
            return None
        return node.entries.get(prop)

    def insert(self, key: str, value: str) -> None:
        """Insert a value at ``key``, creating missing sections.

        Raises InvalidConfigKeyError for a malformed key and
        DuplicateConfigKeyError if the property already exists.
        """
        self._insert(isolate_config_key_components(key), value)

    def insert_components(self, components: Iterable[str], value: str) -> None:
        """Insert a value at the key made of the given unescaped components."""
        self._insert(_validated_components(components), value)

    def update(self, key: str, value: str) -> None:
        """Replace the value at ``key``.

        Raises InvalidConfigKeyError for a malformed key and
        MissingConfigKeyError if the property does not exist.
        """
        self._update(isolate_config_key_components(key), value)

    def update_components(self, components: Iterable[str], value: str) -> None:
        """Replace the value at the key made of the given components."""
        self._update(_validated_components(components), value)

    def delete(self, key: str) -> None:
        """Remove the property at ``key``.

        Raises InvalidConfigKeyError for a malformed key and
        MissingConfigKeyError if the property does not exist.
        """
        self._delete(isolate_config_key_components(key))

    def delete_components(self, components: Iterable[str]) -> None:
        """Remove the property at the key made of the given components."""
        self._delete(_validated_components(components))

    def find(self, key: str) -> str | None:
        """Return the value at ``key``, or None if the key is invalid or absent."""
        try:
            components = isolate_config_key_components(key)
        except InvalidConfigKeyError:
            return None
        return self._find(components)

    def find_components(self, components: Iterable[str]) -> str | None:
        """Return the value at the key made of the given components, or None."""
        try:
            parts = _validated_components(components)
        except InvalidConfigKeyError:
            return None
        return self._find(parts)

    def section_key(self) -> str:
        """Return the dotted key of this node's section; empty for the root.

        Raises InvalidConfigKeyError if the section names cannot form a key.
        """
        sections = []
        node: ConfigData | None = self
        while node is not None:
            if node.section is not None:
                sections.append(node.section)
            node = node.parent
        if not sections:
            return ""
        sections.reverse()
        return merge_config_key_components(sections)