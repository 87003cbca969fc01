"""
Optional integer parsing for the numeric production-background fields
(employee count, shifts per day, working days).

Values are parsed once, where they enter the system, so the rest of the code
only ever sees `int` or `None`.
"""
from typing import Optional

from ..exceptions import ValidationError


def parse_optional_int(value, field: str = None) -> Optional[int]:
    """
    "12" -> 12, 12 -> 12, "" / "  " / None -> None.
    Anything else (floats with a fraction, words, negatives) raises ValidationError.
    """
    if value is None:
        return None

    if isinstance(value, bool):
        raise ValidationError("Must be a whole number", field)
    elif isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValidationError("Must be a whole number", field)
        number = int(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        if not text.isdigit():
            raise ValidationError("Must be a whole number", field)
        number = int(text)

    if number < 0:
        raise ValidationError("Must not be negative", field)
    return number


def coerce_optional_int(value) -> Optional[int]:
    """Lenient variant for values copied from stored records: unparseable -> None."""
    try:
        return parse_optional_int(value)
    except ValidationError:
        return None
