from typing import Any, Callable, List, Tuple

import pytest

from mockproxy.config import STRICT_ENV_VAR

Recorded = List[Tuple[str, Tuple[Any, ...], dict]]


@pytest.fixture(autouse=True)
def _clear_strict_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Tests choose strictness explicitly, the outer environment must not leak in
    monkeypatch.delenv(STRICT_ENV_VAR, raising=False)


@pytest.fixture
def calls() -> Recorded:
    return []


@pytest.fixture
def recorder(calls: Recorded) -> Callable[..., Callable[..., Any]]:
    """Build callbacks that append ``(label, args, kwargs)`` to ``calls``."""

    def make(label: str, result: Any = None) -> Callable[..., Any]:
        def callback(*args: Any, **kwargs: Any) -> Any:
            calls.append((label, args, kwargs))
            return result

        return callback

    return make
