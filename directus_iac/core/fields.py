"""Field helpers shared by the entity transformers.

Config-side values are three-state: ``UNSET`` (unknown, leave untouched),
``None`` (null / absent) or a concrete value. Outgoing payloads only carry
fields that hold a concrete value, except for nullable fields where ``None``
is sent as an explicit JSON null.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional


class _Unset:
    """Sentinel type for values that are not known yet."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Unset, ())


UNSET: Any = _Unset()


def is_set(value: Any) -> bool:
    """Return True if the value is neither null nor unknown."""
    return value is not None and value is not UNSET


def set_string_field(payload: Dict[str, Any], key: str, value: Any) -> None:
    """Add a string field to the payload if it holds a value."""
    if is_set(value):
        payload[key] = value


def set_nullable_string_field(payload: Dict[str, Any], key: str, value: Any) -> None:
    """Add a string field, sending an explicit null when the value is None.

    Needed for relations that are only detached by writing null
    (a role's parent); an unknown value is still omitted.
    """
    if value is UNSET:
        return
    payload[key] = value


def set_bool_field(payload: Dict[str, Any], key: str, value: Any) -> None:
    """Add a boolean field to the payload if it holds a value."""
    if is_set(value):
        payload[key] = bool(value)


def string_or_none(value: Optional[str]) -> Optional[str]:
    """Map an absent or empty wire string to None."""
    return value or None


def string_list_or_none(items: Optional[Iterable[Any]]) -> Optional[List[str]]:
    """Map an absent or empty wire array to None, otherwise a list of strings."""
    if not items:
        return None
    return [str(item) for item in items]


def split_csv(value: Any) -> List[str]:
    """Split a comma-separated string into trimmed, non-empty entries.

    Example:
        >>> split_csv("10.0.0.0/8, ,192.168.1.0/24")
        ['10.0.0.0/8', '192.168.1.0/24']
    """
    if not is_set(value):
        return []
    return [part.strip() for part in str(value).split(",") if part.strip()]


def join_csv(items: Optional[Iterable[str]]) -> Optional[str]:
    """Join a wire array into a comma-separated string (None when empty)."""
    if not items:
        return None
    return ",".join(items)
