"""Advanced types."""

from typing import Any, Callable, Sequence, TypeVar, Union

from typing_extensions import Protocol, TypeAlias

ProtocolReturnType = TypeVar("ProtocolReturnType", covariant=True)

Callback: TypeAlias = Callable[..., Any]
"""Terminal action for one step of a call chain."""

KeyPath: TypeAlias = Union[str, Sequence[Any]]
"""Dot-delimited key path string or explicit sequence of keys."""


class Observer(Protocol):
    """Side-effecting function run ahead of an existing callback."""

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Receive the same arguments as the observed callback."""
        ...


class Wrapper(Protocol[ProtocolReturnType]):
    """Function given full control over an existing callback."""

    def __call__(
        self, __original: Callback, *args: Any, **kwargs: Any
    ) -> ProtocolReturnType:
        """Receive the original callback followed by the call arguments."""
        ...
