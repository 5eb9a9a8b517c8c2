"""Tolerant accessors for optional JSON fields.

A value whose JSON type does not match the requested type is treated as
absent and the default is returned. Nothing is coerced.
"""

from typing import Any, Optional


def get_obj(obj: Any, key: str) -> dict:
    """Return the nested object at ``key``, or an empty dict."""
    if not isinstance(obj, dict):
        return {}
    value = obj.get(key)
    return value if isinstance(value, dict) else {}


def get_str(obj: Any, key: str, default: Optional[str] = None) -> Optional[str]:
    """Return the string at ``key``, or ``default``."""
    if not isinstance(obj, dict):
        return default
    value = obj.get(key)
    return value if isinstance(value, str) else default


def get_int(obj: Any, key: str, default: Optional[int] = None) -> Optional[int]:
    """Return the integer at ``key``, or ``default``.

    JSON ``true``/``false`` decode to ``bool``, which is an ``int`` subclass
    in Python; they are not accepted as integers. Floats are not truncated.
    """
    if not isinstance(obj, dict):
        return default
    value = obj.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value
