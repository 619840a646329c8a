"""Immutable call tree storage.

This module is internal and may change at any time.
"""

from __future__ import annotations

import warnings
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Sequence, Tuple, Union

from .exceptions import CallTreeWarning, InvalidCallbackError
from .types import Callback

Node = Union["CallTree", Callback]
"""A call tree value: a nested tree or a terminal callback."""


def validate_callback(value: Any, path: Tuple[str, ...] = ()) -> None:
    """Raise :py:class:`InvalidCallbackError` unless ``value`` can be a leaf."""
    if value is None or isinstance(value, Mapping) or not callable(value):
        raise InvalidCallbackError(value, path)


def _check_leaf(value: Any, path: Tuple[str, ...], strict: bool) -> None:
    if value is not None and callable(value):
        return
    if strict:
        raise InvalidCallbackError(value, path)
    warnings.warn(
        f"Callback tree value at {'.'.join(path)!r} is not callable: {value!r}",
        CallTreeWarning,
        stacklevel=2,
    )


class CallTree(Mapping):
    """Read-only mapping from method name to callback or nested call tree.

    Trees are never changed after construction. Write operations
    (:py:meth:`set_in`, :py:meth:`merged`) return a new tree that shares every
    untouched branch with the old one, so a tree obtained earlier stays a
    valid snapshot.
    """

    __slots__ = ("_nodes",)

    _nodes: Dict[str, Node]

    def __init__(self, nodes: Optional[Mapping[str, Node]] = None) -> None:
        """Create a tree from already normalized nodes.

        Most callers want :py:meth:`build`, which normalizes keys and nested
        mappings.
        """
        object.__setattr__(self, "_nodes", dict(nodes or {}))

    @classmethod
    def build(
        cls,
        mapping: Mapping[Any, Any],
        *,
        strict: bool = False,
        check: bool = True,
        _path: Tuple[str, ...] = (),
    ) -> CallTree:
        """Normalize a nested mapping into a call tree.

        Every key at every depth is converted with ``str``. Every mapping value
        becomes a nested tree, anything else is a callback.

        Args:
            mapping: Nested mapping of method names.
            strict: Raise on invalid leaves instead of warning.
            check: Whether to validate leaves at all.

        Raises:
            TypeError: ``mapping`` is not a mapping.
            InvalidCallbackError: A leaf is not callable and ``strict`` is set.
        """
        if isinstance(mapping, CallTree):
            return mapping
        if not isinstance(mapping, Mapping):
            raise TypeError(
                f"Callback tree must be a mapping, got {type(mapping).__name__}"
            )
        nodes: Dict[str, Node] = {}
        for key, value in mapping.items():
            path = _path + (str(key),)
            if isinstance(value, Mapping):
                nodes[path[-1]] = cls.build(
                    value, strict=strict, check=check, _path=path
                )
            else:
                if check:
                    _check_leaf(value, path, strict)
                nodes[path[-1]] = value
        return cls(nodes)

    def __getitem__(self, key: str) -> Node:
        return self._nodes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"CallTree({self.to_dict()!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested dict copy of this tree."""
        return {
            key: node.to_dict() if isinstance(node, CallTree) else node
            for key, node in self._nodes.items()
        }

    def set_in(self, keys: Sequence[str], node: Node) -> CallTree:
        """Return a new tree with ``node`` placed at ``keys``.

        Missing intermediate trees are created and intermediate callbacks are
        replaced by empty trees. Whatever was at the final key is overwritten.
        """
        head, rest = keys[0], keys[1:]
        nodes = dict(self._nodes)
        if rest:
            child = nodes.get(head)
            if not isinstance(child, CallTree):
                child = CallTree()
            nodes[head] = child.set_in(rest, node)
        else:
            nodes[head] = node
        return CallTree(nodes)

    def merged(self, other: CallTree) -> CallTree:
        """Return a deep merge of ``other`` into this tree.

        Where both sides hold a tree the two are merged recursively, otherwise
        the value from ``other`` wins.
        """
        nodes = dict(self._nodes)
        for key, incoming in other.items():
            existing = nodes.get(key)
            if isinstance(existing, CallTree) and isinstance(incoming, CallTree):
                nodes[key] = existing.merged(incoming)
            else:
                nodes[key] = incoming
        return CallTree(nodes)
