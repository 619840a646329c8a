"""Common mock proxy exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Tuple

if TYPE_CHECKING:
    from ._tree import CallTree


class MockProxyError(Exception):
    """Base for all mock proxy exceptions."""

    @property
    def cause(self) -> BaseException | None:
        """Cause of the exception.

        This is the same as ``Exception.__cause__``.
        """
        return self.__cause__

    def __str__(self) -> str:
        # KeyError quotes its single argument, the message is kept plain for
        # every subclass.
        return str(self.args[0]) if self.args else ""


class InvalidPathError(MockProxyError, ValueError):
    """Raised when a key path is empty or contains an empty segment."""

    def __init__(self, path: Any) -> None:
        """Initialize an invalid path error."""
        super().__init__(
            f"Invalid key path {path!r}. A key path needs at least one segment "
            "and no segment may be empty"
        )
        self._path = path

    @property
    def path(self) -> Any:
        """Key path as given by the caller."""
        return self._path


class PathNotFoundError(MockProxyError, KeyError):
    """Raised when a key path segment does not exist in the call tree.

    Attributes:
        segment: Key at which the walk stopped.
        path: Full resolved key path.
        tree: Snapshot of the call tree that was walked.
    """

    def __init__(self, segment: str, path: Tuple[str, ...], tree: CallTree) -> None:
        """Initialize a path not found error."""
        super().__init__(
            "The existing callback tree does not contain the full key path "
            f"{'.'.join(path)!r}. Stopped at {segment!r} and the callback tree "
            f"looks like this: {tree!r}"
        )
        self._segment = segment
        self._path = path
        self._tree = tree

    @property
    def segment(self) -> str:
        """Key at which the walk stopped."""
        return self._segment

    @property
    def path(self) -> Tuple[str, ...]:
        """Full resolved key path."""
        return self._path

    @property
    def tree(self) -> CallTree:
        """Snapshot of the call tree that was walked."""
        return self._tree


class PathIncompleteError(MockProxyError, LookupError):
    """Raised when a key path ends at a sub-tree where a callback is required.

    Use :py:func:`mockproxy.set_at` to shorten the tree instead.
    """

    def __init__(self, path: Tuple[str, ...], tree: CallTree) -> None:
        """Initialize a path incomplete error."""
        super().__init__(
            "The existing callback tree contains the full key path "
            f"{'.'.join(path)!r} but continues going (no callback at the exact "
            "key path). If you want to shorten the callback tree, use set_at. "
            f"The callback tree looks like this: {tree!r}"
        )
        self._path = path
        self._tree = tree

    @property
    def path(self) -> Tuple[str, ...]:
        """Full resolved key path."""
        return self._path

    @property
    def tree(self) -> CallTree:
        """Snapshot of the call tree that was walked."""
        return self._tree


class InvalidCallbackError(MockProxyError, TypeError):
    """Raised when a value cannot be used as a callback.

    A callback must be callable, and may be neither ``None`` nor a mapping
    (mappings are always sub-trees).
    """

    def __init__(self, value: Any, path: Tuple[str, ...] = ()) -> None:
        """Initialize an invalid callback error."""
        where = f" at {'.'.join(path)!r}" if path else ""
        super().__init__(
            f"Invalid callback{where}: {value!r}. Expected a callable that is "
            "not None and not a mapping"
        )
        self._value = value
        self._path = path

    @property
    def value(self) -> Any:
        """Rejected value."""
        return self._value

    @property
    def path(self) -> Tuple[str, ...]:
        """Key path the value was meant for, empty if unknown."""
        return self._path


class MissingDefinitionError(MockProxyError, AttributeError):
    """Raised when a proxy is called with a method name absent from its tree.

    Unmapped methods are never stubbed automatically. Every call in the
    expected chain has to be defined.
    """

    def __init__(self, name: str, tree: CallTree) -> None:
        """Initialize a missing definition error."""
        super().__init__(
            f"Missing method {name!r}. Please add this definition to your mock "
            f"proxy. The callback tree looks like this: {tree!r}"
        )
        self._method_name = name
        self._tree = tree

    # AttributeError reserves "name" for its own suggestion machinery.
    @property
    def method_name(self) -> str:
        """Method name that was not found."""
        return self._method_name

    @property
    def tree(self) -> CallTree:
        """Call tree the name was looked up in."""
        return self._tree


class CallTreeWarning(UserWarning):
    """Warning for call tree leaves that are not valid callbacks."""
