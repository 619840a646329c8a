"""Path based reads and writes on a proxy's call tree.

Every write builds a new tree and re-points the proxy at it in one step, so
a failing call never leaves a partial write behind.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Mapping

from ._path import lookup_callback, resolve_path
from ._tree import CallTree, validate_callback
from .proxy import MockProxy, _repoint, tree_of
from .types import Callback, KeyPath, Observer, Wrapper

logger = logging.getLogger(__name__)


def get(proxy: MockProxy, path: KeyPath) -> Callback:
    """Retrieve the callback at a key path.

    Args:
        proxy: Existing proxy.
        path: Chain of method names, either dot delimited (``"a.b.c"``) or an
            explicit sequence (``["a", "b", "c"]``).

    Returns:
        The callback stored at exactly that path.

    Raises:
        PathNotFoundError: Some part of the path is not in the tree.
        PathIncompleteError: The path ends at a nested tree.
    """
    return lookup_callback(tree_of(proxy), resolve_path(path))


def replace_at(proxy: MockProxy, path: KeyPath, callback: Callback) -> MockProxy:
    """Replace the callback at a key path, only if there was one before.

    No new method chains are created, sort of like ``mkdir`` without ``-p``.

    Raises:
        PathNotFoundError: Some part of the path is not in the tree.
        PathIncompleteError: The path ends at a nested tree.
        InvalidCallbackError: ``callback`` is not a valid callback.
    """
    keys = resolve_path(path)
    tree = tree_of(proxy)
    lookup_callback(tree, keys)
    validate_callback(callback, keys)
    _repoint(proxy, tree.set_in(keys, callback))
    logger.debug("Replaced callback at %s", ".".join(keys))
    return proxy


def set_at(proxy: MockProxy, path: KeyPath, callback: Callback) -> MockProxy:
    """Set the callback at a key path whether or not one was there before.

    Missing method chains are created, sort of like ``mkdir -p``. A callback
    in the middle of the path is replaced by a new nested tree, and a nested
    tree at the end of the path is replaced by ``callback``.

    Raises:
        InvalidCallbackError: ``callback`` is not a valid callback.
    """
    keys = resolve_path(path)
    validate_callback(callback, keys)
    _repoint(proxy, tree_of(proxy).set_in(keys, callback))
    logger.debug("Set callback at %s", ".".join(keys))
    return proxy


def merge(proxy: MockProxy, partial_tree: Mapping[Any, Any]) -> MockProxy:
    """Deep merge a partial call tree into the proxy's tree.

    .. warning::
        Unsafe. Prefer :py:func:`replace_at` or :py:func:`set_at` for a single
        method change, they have clearer intent. Merging does no path
        validation and no type checking, and a value that is not a mapping
        replaces a whole branch.

    Where both the existing and the incoming value at a key are trees they
    are merged recursively, otherwise the incoming value wins.
    """
    incoming = CallTree.build(partial_tree, check=False)
    _repoint(proxy, tree_of(proxy).merged(incoming))
    logger.debug("Merged keys %s into proxy tree", list(incoming))
    return proxy


def observe(proxy: MockProxy, path: KeyPath, observer: Observer) -> MockProxy:
    """Add an observer in front of an existing callback.

    The observer is called with the same arguments as the callback and its
    return value is ignored, so the stubbed result is unchanged. Observing the
    same path again nests: the latest observer runs first, the original
    callback runs last.

    Raises:
        PathNotFoundError: Some part of the path is not in the tree.
        PathIncompleteError: The path ends at a nested tree.
        InvalidCallbackError: ``observer`` is not callable.
    """
    keys = resolve_path(path)
    original = lookup_callback(tree_of(proxy), keys)
    validate_callback(observer, keys)

    def observed(*args: Any, **kwargs: Any) -> Any:
        observer(*args, **kwargs)
        return original(*args, **kwargs)

    functools.update_wrapper(observed, original, updated=())
    replace_at(proxy, keys, observed)
    logger.debug("Added observer at %s", ".".join(keys))
    return proxy


def wrap(proxy: MockProxy, path: KeyPath, wrapper: Wrapper) -> MockProxy:
    """Wrap an existing callback, taking full control of it.

    The wrapper is called as ``wrapper(original, *args, **kwargs)`` and its
    result is what the proxy call returns. It decides whether, when and with
    which arguments ``original`` runs.

    Raises:
        PathNotFoundError: Some part of the path is not in the tree.
        PathIncompleteError: The path ends at a nested tree.
        InvalidCallbackError: ``wrapper`` is not callable.
    """
    keys = resolve_path(path)
    original = lookup_callback(tree_of(proxy), keys)
    validate_callback(wrapper, keys)

    def wrapped(*args: Any, **kwargs: Any) -> Any:
        return wrapper(original, *args, **kwargs)

    functools.update_wrapper(wrapped, original, updated=())
    replace_at(proxy, keys, wrapped)
    logger.debug("Wrapped callback at %s", ".".join(keys))
    return proxy
