"""Field-level parsing helpers used by domain validators."""

import math
from collections.abc import Mapping

from nutriflow.domain.errors import OutOfRange, ValidationError


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def is_blank(value: object) -> bool:
    """Return True for None and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def parse_int(field: str, value: object) -> int | None:
    """Parse a form value into an int, returning None when blank."""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValidationError(field, f"{field} must be a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as exc:
            raise ValidationError(field, f"{field} must be a number") from exc
    else:
        raise ValidationError(field, f"{field} must be a number")
    if not math.isfinite(number):
        raise ValidationError(field, f"{field} must be a number")
    return round_half_up(number)


def parse_float(field: str, value: object) -> float | None:
    """Parse an optional measurement such as weight or height."""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValidationError(field, f"{field} must be a number")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError(field, f"{field} must be a number") from exc
    if not math.isfinite(number):
        raise ValidationError(field, f"{field} must be a number")
    if number < 0:
        raise OutOfRange(field, 0, None)
    return number


def bounded_int(
    candidate: Mapping[str, object],
    field: str,
    maximum: int | None,
    default: int | None = 0,
) -> int | None:
    """Read an int field and enforce 0..maximum."""
    value = parse_int(field, candidate.get(field))
    if value is None:
        return default
    if value < 0 or (maximum is not None and value > maximum):
        raise OutOfRange(field, 0, maximum)
    return value
