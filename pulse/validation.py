"""Type and range checked option extraction."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pulse.errors import RangeError, TypeMismatchError, TypeRequiredError


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid number option
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_CHECKS: dict[str, Callable[[Any], bool]] = {
    "callable": callable,
    "number": _is_number,
    "integer": _is_integer,
    "boolean": lambda value: isinstance(value, bool),
}


def valid(kind: str, value: Any, required: bool = False, label: str = "argument") -> Any:
    """Return *value* unchanged if it matches *kind*.

    ``None`` counts as absent: it is returned as-is unless *required* is set,
    in which case ``TypeRequiredError`` is raised. A present value of the wrong
    kind raises ``TypeMismatchError``. Both messages name *label* and *kind*.
    """
    check = _CHECKS.get(kind)
    if check is None:
        msg = f"Unknown value kind: {kind!r}"
        raise ValueError(msg)
    if value is None:
        if not required:
            return None
        msg = f"{label} is required and must be of kind '{kind}'"
        raise TypeRequiredError(msg)
    if not check(value):
        msg = f"{label} must be of kind '{kind}', got {type(value).__name__}"
        raise TypeMismatchError(msg)
    return value


def valid_range(
    min_value: float,
    max_value: float,
    value: Any,
    required: bool = False,
    label: str = "argument",
    *,
    inclusive_max: bool = True,
    kind: str = "number",
) -> Any:
    """Validate a number and check it lies within ``[min_value, max_value]``.

    With ``inclusive_max=False`` the upper bound itself is rejected. Pass
    ``kind="integer"`` to also reject non-integral values.
    Returns the value, or ``None`` when it is absent and not required.
    """
    number = valid(kind, value, required, label)
    if number is None:
        return None
    if number < min_value:
        msg = f"{label} must be at least {min_value}, got {number}"
        raise RangeError(msg)
    if number > max_value or (not inclusive_max and number == max_value):
        bound = "at most" if inclusive_max else "less than"
        msg = f"{label} must be {bound} {max_value}, got {number}"
        raise RangeError(msg)
    return number
