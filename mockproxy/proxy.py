"""Dynamically dispatched proxy over a call tree."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ._tree import CallTree, Node
from .config import ProxyConfig
from .exceptions import MissingDefinitionError

logger = logging.getLogger(__name__)


class MockProxy:
    """Stand-in for a real dependency whose method chains are described by a
    tree.

    Each key is a method name. A callback value is returned on attribute
    access, so calling it runs the callback with the call's arguments. A
    mapping value yields a new child proxy over that mapping, so the chain
    can continue::

        email = object()
        proxy = MockProxy(
            {
                "receive_email": lambda message: None,
                "generate_email": {"validate": {"send": lambda to: email}},
            }
        )
        proxy.generate_email().validate().send("to@example.com")  # email

    Calling a proxy returns the proxy itself and ignores the arguments, so
    both ``proxy.a.b.c()`` and ``proxy.a().b().c()`` reach the ``c`` callback.
    Names with no definition raise
    :py:class:`mockproxy.exceptions.MissingDefinitionError`. Nothing is ever
    stubbed automatically.

    The proxy exposes no public attributes of its own since any of them
    would shadow a tree key. It is edited with the module functions
    :py:func:`mockproxy.replace_at`, :py:func:`mockproxy.set_at`,
    :py:func:`mockproxy.merge`, :py:func:`mockproxy.observe` and
    :py:func:`mockproxy.wrap`, which swap the tree for a new one. Child
    proxies and callbacks fetched before an edit keep seeing the old tree.
    """

    __slots__ = ("_mockproxy_tree", "_mockproxy_config")

    _mockproxy_tree: CallTree
    _mockproxy_config: ProxyConfig

    def __init__(
        self, tree: Mapping[Any, Any], *, config: Optional[ProxyConfig] = None
    ) -> None:
        """Create a proxy from a nested mapping of method names.

        Args:
            tree: Nested mapping. Keys are converted to strings, mapping values
                become nested proxies and other values are callbacks.
            config: Settings for this proxy and its children. Defaults to
                :py:meth:`ProxyConfig.default`.

        Raises:
            TypeError: ``tree`` is not a mapping.
            InvalidCallbackError: A leaf is not callable and the config is
                strict.
        """
        if config is None:
            config = ProxyConfig.default()
        object.__setattr__(self, "_mockproxy_config", config)
        object.__setattr__(
            self, "_mockproxy_tree", CallTree.build(tree, strict=config.strict)
        )

    def __getattr__(self, name: str) -> Any:
        # Dunder lookups come from Python itself (copy, pickle, inspect) and
        # must keep their normal meaning. Own slots are never tree keys.
        if (name.startswith("__") and name.endswith("__")) or name in _OWN_SLOTS:
            raise AttributeError(name)
        node = _resolve(self, name)
        if isinstance(node, CallTree):
            return MockProxy(node, config=self._mockproxy_config)
        return node

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(
            f"Cannot set {name!r} on a mock proxy, use set_at or merge instead"
        )

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Cannot delete {name!r} from a mock proxy")

    def __call__(self, *args: Any, **kwargs: Any) -> MockProxy:
        return self

    def __copy__(self) -> MockProxy:
        # Trees are immutable, the copy only needs its own reference
        return MockProxy(self._mockproxy_tree, config=self._mockproxy_config)

    def __repr__(self) -> str:
        return f"MockProxy({self._mockproxy_tree.to_dict()!r})"


_OWN_SLOTS = frozenset(MockProxy.__slots__)


def _resolve(proxy: MockProxy, name: str) -> Node:
    tree = proxy._mockproxy_tree
    if name not in tree:
        logger.debug("No definition for method %r in %r", name, tree)
        raise MissingDefinitionError(name, tree)
    return tree[name]


def _repoint(proxy: MockProxy, tree: CallTree) -> None:
    object.__setattr__(proxy, "_mockproxy_tree", tree)


def tree_of(proxy: MockProxy) -> CallTree:
    """Current call tree of ``proxy``.

    The returned tree is immutable and does not follow later edits.
    """
    return proxy._mockproxy_tree


def invoke(proxy: MockProxy, name: str, *args: Any, **kwargs: Any) -> Any:
    """Call method ``name`` on ``proxy`` explicitly.

    This is the same dispatch as ``getattr(proxy, name)(*args, **kwargs)`` for
    callbacks, without the restriction on dunder names. Use it for keys that
    are not valid identifiers, such as ``"validate!"``.

    Args:
        proxy: Proxy to dispatch on.
        name: Single method name, never a dotted path.
        args: Positional arguments for the callback.
        kwargs: Keyword arguments for the callback.

    Returns:
        The callback's result, or a new child proxy if ``name`` maps to a
        nested tree (the arguments are then ignored).

    Raises:
        MissingDefinitionError: ``name`` is not defined on ``proxy``.
    """
    node = _resolve(proxy, name)
    if isinstance(node, CallTree):
        return MockProxy(node, config=proxy._mockproxy_config)
    return node(*args, **kwargs)
