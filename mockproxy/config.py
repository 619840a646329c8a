"""Environment-based configuration for mock proxies.

Proxies read their defaults from environment variables so a whole test run
can be switched to strict validation without touching test code::

    MOCKPROXY_STRICT=1 pytest
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from typing_extensions import Self

STRICT_ENV_VAR = "MOCKPROXY_STRICT"

_TRUE_VALUES = frozenset(("1", "true", "yes", "on"))
_FALSE_VALUES = frozenset(("0", "false", "no", "off", ""))


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Environment variable {name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class ProxyConfig:
    """Settings shared by a proxy and every child proxy it hands out.

    Use ``dataclasses.replace`` to derive a variant.
    """

    strict: bool = False
    """If True, invalid leaves raise
    :py:class:`mockproxy.exceptions.InvalidCallbackError` at construction
    instead of emitting a :py:class:`mockproxy.exceptions.CallTreeWarning`.
    """

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Self:
        """Create a config from environment variables.

        Args:
            env: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Config with unset variables left at their defaults.

        Raises:
            ValueError: A variable is set to an unrecognized value.
        """
        if env is None:
            env = os.environ
        raw_strict = env.get(STRICT_ENV_VAR)
        if raw_strict is None:
            return cls()
        return cls(strict=_parse_bool(STRICT_ENV_VAR, raw_strict))

    @classmethod
    def default(cls) -> Self:
        """Config used for proxies built without an explicit one."""
        return cls.from_env()
