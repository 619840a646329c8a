"""Key path resolution and tree walking.

This module is internal and may change at any time.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Tuple

from ._tree import CallTree, Node
from .exceptions import InvalidPathError, PathIncompleteError, PathNotFoundError
from .types import Callback, KeyPath

SEPARATOR = "."


def resolve_path(path: KeyPath) -> Tuple[str, ...]:
    """Turn a key path into a tuple of string keys.

    A string is split on dots. Any other sequence is taken as explicit keys,
    each converted with ``str``, so keys containing dots can still be
    addressed. Other scalars are converted with ``str`` and then split.

    Raises:
        InvalidPathError: The path is empty or has an empty segment.
    """
    keys: Tuple[str, ...]
    if isinstance(path, str):
        keys = tuple(path.split(SEPARATOR))
    elif isinstance(path, Sequence) and not isinstance(path, (bytes, bytearray)):
        keys = tuple(str(key) for key in path)
    else:
        keys = tuple(str(path).split(SEPARATOR))
    if not keys or not all(keys):
        raise InvalidPathError(path)
    return keys


def lookup(tree: CallTree, keys: Tuple[str, ...]) -> Node:
    """Walk ``tree`` along ``keys`` and return the node found.

    Raises:
        PathNotFoundError: A key is absent, or the walk reached a callback
            before the path ended.
    """
    node: Any = tree
    for key in keys:
        if not isinstance(node, CallTree) or key not in node:
            raise PathNotFoundError(key, keys, tree)
        node = node[key]
    return node


def lookup_callback(tree: CallTree, keys: Tuple[str, ...]) -> Callback:
    """Like :py:func:`lookup` but require the node to be a callback.

    Raises:
        PathNotFoundError: See :py:func:`lookup`.
        PathIncompleteError: The path ends at a nested tree.
    """
    node = lookup(tree, keys)
    if isinstance(node, CallTree):
        raise PathIncompleteError(keys, tree)
    return node
