"""Lazy validation helpers for untyped action parameters."""

from __future__ import annotations

from typing import Any, Mapping

from cfai.exceptions import ActionValidationError

_TRUE_TOKENS = frozenset({"true", "on", "yes", "1"})
_FALSE_TOKENS = frozenset({"false", "off", "no", "0"})


def normalize_token(value: str) -> str:
    return value.strip().lower().replace("-", "_")


def require_str(params: Mapping[str, Any], key: str, context: str) -> str:
    value = params.get(key)
    if value is None:
        raise ActionValidationError(f"{context} is missing required parameter '{key}'")
    if not isinstance(value, str):
        raise ActionValidationError(
            f"{context} parameter '{key}' must be a string, got {type(value).__name__}"
        )
    if not value.strip():
        raise ActionValidationError(f"{context} parameter '{key}' must not be empty")
    return value


def require_value(params: Mapping[str, Any], key: str, context: str) -> Any:
    if key not in params or params[key] is None:
        raise ActionValidationError(f"{context} is missing required parameter '{key}'")
    return params[key]


def optional_str(params: Mapping[str, Any], key: str, context: str) -> str | None:
    value = params.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ActionValidationError(
            f"{context} parameter '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def optional_int(params: Mapping[str, Any], key: str, context: str) -> int | None:
    value = params.get(key)
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool):
        raise ActionValidationError(f"{context} parameter '{key}' must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ActionValidationError(
        f"{context} parameter '{key}' must be an integer, got {value!r}"
    )


def parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
    raise ActionValidationError(f"Cannot interpret '{key}' value as boolean: {value!r}")


def flag(params: Mapping[str, Any], key: str = "enable") -> bool:
    """Boolean switch that defaults to on when the assistant omits it."""
    value = params.get(key)
    if value is None:
        return True
    return parse_bool(value, key)


def optional_bool(params: Mapping[str, Any], key: str) -> bool | None:
    value = params.get(key)
    if value is None:
        return None
    return parse_bool(value, key)


def require_str_list(params: Mapping[str, Any], key: str, context: str) -> list[str]:
    value = params.get(key)
    if value is None:
        raise ActionValidationError(f"{context} is missing required parameter '{key}'")
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ActionValidationError(f"{context} parameter '{key}' must be a list of strings")
    if not value:
        raise ActionValidationError(f"{context} parameter '{key}' must not be empty")
    return list(value)


def on_off(enable: bool) -> str:
    return "enabled" if enable else "disabled"


def require_path_id(params: Mapping[str, Any], key: str, context: str) -> str:
    """A required string that is interpolated into a request path."""
    value = require_str(params, key, context).strip()
    if not value.isprintable() or any(c in value for c in "/?#% "):
        raise ActionValidationError(
            f"{context} parameter '{key}' is not a valid identifier: {value!r}"
        )
    return value
