"""
Coercion of loosely typed wire values.

Every function here is total: it never raises and falls back to the supplied
default when the input cannot be interpreted. Applying a function to its own
output returns the same value.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Marker for "no default given" where None is a meaningful default
_EMPTY_LIST = object()


def _to_int(value: Any) -> int:
    """Lenient integer conversion: leading digits of strings, truncated floats, else 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return int(value)
    if isinstance(value, (str, bytes)):
        text = value.decode(errors="ignore") if isinstance(value, bytes) else value
        match = _LEADING_INT.match(text)
        return int(match.group(1)) if match else 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def assure_string(value: Any, default: str | None = None) -> str | None:
    if value is None:
        return default
    return str(value)


def assure_int(value: Any, default: int | None = None) -> int | None:
    if value is None:
        return default
    return _to_int(value)


def assure_positive_int(value: Any, default: int | None = None) -> int | None:
    """Return the value as an int if it is greater than zero, otherwise ``default``."""
    if value is None:
        return default
    number = _to_int(value)
    return number if number > 0 else default


def assure_bool(value: Any) -> bool:
    """Truthiness, with the wire strings ``""`` and ``"0"`` counting as false."""
    if isinstance(value, str):
        return value.strip() not in ("", "0")
    return bool(value)


def assure_array(value: Any, default: Any = _EMPTY_LIST) -> list | Any:
    """Wrap scalars in a list; None gives ``default`` (a fresh empty list if omitted)."""
    if value is None:
        return [] if default is _EMPTY_LIST else default
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def assure_object(value: Any, expected_type: type | tuple[type, ...], default: Any = None) -> Any:
    return value if isinstance(value, expected_type) else default


def constant_values(group: Any) -> list[Any]:
    """Valid values of a constant group: an Enum class, a name->value mapping or an iterable."""
    if isinstance(group, type) and issubclass(group, Enum):
        return [member.value for member in group]
    if isinstance(group, Mapping):
        return list(group.values())
    if isinstance(group, Iterable) and not isinstance(group, (str, bytes)):
        return list(group)
    return []


def _constant_groups(owner: Any) -> Mapping[str, Any]:
    if isinstance(owner, Mapping):
        return owner
    groups = getattr(owner, "constant_groups", None)
    return groups if isinstance(groups, Mapping) else {}


def _same_constant(value: Any, constant: Any) -> bool:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool) or isinstance(constant, bool):
        return value is constant
    if value == constant:
        return True
    # "1" and 1 name the same wire constant
    if isinstance(value, (str, int)) and isinstance(constant, (str, int)):
        return str(value).strip() == str(constant)
    return False


def assure_constant(value: Any, owner: Any, prefix: str, default: Any = None) -> Any:
    """
    Validate ``value`` against the constant group ``prefix`` declared by ``owner``.

    Args:
        value: Candidate value (raw wire value, plain value or Enum member)
        owner: Class or instance exposing ``constant_groups``, or the groups mapping itself
        prefix: Group name, e.g. "TYPE"
        default: Returned when the value is not a member of the group

    Returns:
        The canonical constant value, or ``default``
    """
    group = _constant_groups(owner).get(prefix)
    if group is None:
        return default
    for constant in constant_values(group):
        if _same_constant(value, constant):
            return constant
    return default
