"""Depth-first traversal of a configuration tree."""

from __future__ import annotations

from collections.abc import Iterator

from gitchat.config_data import ConfigData


def walk_nodes(config: ConfigData) -> Iterator[ConfigData]:
    """Yield every node of the tree in pre-order, starting with the root.

    Subsections are visited in the order they were created. Changing the
    tree during traversal gives undefined results.
    """
    if config.parent is not None:
        raise ValueError("node traversal must start at the root node")

    stack = [config]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.subsections))