# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

"""
Argument validation shared by every search provider.

Required fields fail the call. Optional fields follow a silent-degrade
policy: a missing, wrong-typed or out-of-range value is dropped (returned as
None) so the provider default applies, and the drop is logged at DEBUG.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from searchtoolkit.common.exceptions import SearchToolkitException


def ensure_arguments(arguments: Any) -> Mapping[str, Any]:
    if arguments is None:
        return {}
    if not isinstance(arguments, Mapping):
        raise SearchToolkitException(
            SearchToolkitException.ErrorType.INVALID_PARAMETER,
            f"Invalid arguments: expected an object, received {_type_name(arguments)}"
        )
    return arguments


def require_string(arguments: Mapping[str, Any], name: str) -> str:
    value = arguments.get(name)
    if value is None:
        raise SearchToolkitException(
            SearchToolkitException.ErrorType.MISSING_PARAMETER,
            f"Missing required parameter: {name} (must be non-empty string)"
        )

    if not isinstance(value, str) or not value:
        received = "empty string" if isinstance(value, str) else _type_name(value)
        raise SearchToolkitException(
            SearchToolkitException.ErrorType.INVALID_PARAMETER,
            f"Invalid required parameter: {name} (must be non-empty string, received {received})"
        )
    return value


def optional_int(arguments: Mapping[str, Any],
                 name: str,
                 minimum: int | None = None,
                 maximum: int | None = None) -> int | None:
    value = arguments.get(name)
    if value is None:
        return None

    # bool is an int subclass, and JSON floats are never accepted as integers
    if isinstance(value, bool) or not isinstance(value, int):
        return _drop(name, f"expected integer, received {_type_name(value)}")

    if not _in_range(value, minimum, maximum):
        return _drop(name, f"{value} outside [{minimum}, {maximum}]")
    return value


def optional_number(arguments: Mapping[str, Any],
                    name: str,
                    minimum: float | None = None,
                    maximum: float | None = None) -> float | None:
    value = arguments.get(name)
    if value is None:
        return None

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _drop(name, f"expected number, received {_type_name(value)}")

    value = float(value)
    if not math.isfinite(value):
        return _drop(name, f"{value} is not a finite number")
    if not _in_range(value, minimum, maximum):
        return _drop(name, f"{value} outside [{minimum}, {maximum}]")
    return value


def optional_choice(arguments: Mapping[str, Any], name: str, choices: tuple[str, ...]) -> str | None:
    value = arguments.get(name)
    if value is None:
        return None

    if not isinstance(value, str):
        return _drop(name, f"expected string, received {_type_name(value)}")
    if value not in choices:
        return _drop(name, f"'{value}' not in {list(choices)}")
    return value


def optional_string(arguments: Mapping[str, Any], name: str, allow_empty: bool = True) -> str | None:
    value = arguments.get(name)
    if value is None:
        return None

    if not isinstance(value, str):
        return _drop(name, f"expected string, received {_type_name(value)}")
    if not value and not allow_empty:
        return _drop(name, "empty string")
    return value


def optional_flag(arguments: Mapping[str, Any], name: str) -> bool | None:
    value = arguments.get(name)
    if value is None:
        return None

    if not isinstance(value, bool):
        return _drop(name, f"expected boolean, received {_type_name(value)}")
    return value


def encode(value: str) -> str:
    """Percent-encode everything except unreserved characters."""
    return quote(value, safe="")


def _in_range(value, minimum, maximum) -> bool:
    # written as inclusive comparisons so NaN never passes
    return (minimum is None or minimum <= value) and (maximum is None or value <= maximum)


def _drop(name: str, reason: str) -> None:
    logging.debug(f"Dropping optional parameter '{name}': {reason}")
    return None


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__
