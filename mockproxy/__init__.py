"""Call-chain proxies for standing in for real dependencies in tests.

Describe what a chain of calls such as ``model.generate_email().validate()
.send(to)`` should do as a tree of method names, without writing a real
implementation of any step. Leaves are callbacks and nested mappings are the
next proxy in the chain. See :py:class:`MockProxy` to build one and the module
functions to read, edit and observe its tree.
"""

from ._mutators import get, merge, observe, replace_at, set_at, wrap
from ._tree import CallTree
from .config import ProxyConfig
from .exceptions import (
    CallTreeWarning,
    InvalidCallbackError,
    InvalidPathError,
    MissingDefinitionError,
    MockProxyError,
    PathIncompleteError,
    PathNotFoundError,
)
from .proxy import MockProxy, invoke, tree_of

__version__ = "0.1.0"

__all__ = [
    "CallTree",
    "CallTreeWarning",
    "InvalidCallbackError",
    "InvalidPathError",
    "MissingDefinitionError",
    "MockProxy",
    "MockProxyError",
    "PathIncompleteError",
    "PathNotFoundError",
    "ProxyConfig",
    "get",
    "invoke",
    "merge",
    "observe",
    "replace_at",
    "set_at",
    "tree_of",
    "wrap",
]
