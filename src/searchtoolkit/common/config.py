# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

from __future__ import annotations

import os
from dataclasses import dataclass

from searchtoolkit.common.exceptions import SearchToolkitException


CONNECT_TIMEOUT_ENV = "SEARCHTOOLKIT_CONNECT_TIMEOUT"
READ_TIMEOUT_ENV = "SEARCHTOOLKIT_READ_TIMEOUT"
DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_TIMEOUT = 30.0


@dataclass(frozen=True)
class TransportSettings:
    """Timeouts handed to the HTTP client, in seconds."""
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)

    @classmethod
    def from_env(cls, environ=None) -> "TransportSettings":
        environ = os.environ if environ is None else environ
        return cls(
            connect_timeout=_read_seconds(environ, CONNECT_TIMEOUT_ENV, DEFAULT_CONNECT_TIMEOUT),
            read_timeout=_read_seconds(environ, READ_TIMEOUT_ENV, DEFAULT_READ_TIMEOUT),
        )


def _read_seconds(environ, name: str, default: float) -> float:
    raw = str(environ.get(name) or "").strip()
    if not raw:
        return default

    try:
        value = float(raw)
    except ValueError as exc:
        raise SearchToolkitException(
            SearchToolkitException.ErrorType.CONFIG_ERROR,
            f"{name} must be a number of seconds, got '{raw}'"
        ) from exc

    if value <= 0:
        raise SearchToolkitException(
            SearchToolkitException.ErrorType.CONFIG_ERROR,
            f"{name} must be a positive number of seconds"
        )
    return value
