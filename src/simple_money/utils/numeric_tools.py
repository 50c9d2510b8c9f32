from __future__ import annotations

from decimal import Decimal
from typing import TypeAlias

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise
    (e.g. `1.29` becomes `Decimal("1.29")`, not its binary expansion).

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.

    Raises:
        decimal.InvalidOperation: If $value is a string that is not a number.
    """
    if isinstance(value, Decimal):
        return value

    return Decimal(str(value))


def is_numeric(value: object) -> bool:
    """Check whether $value is a numeric scalar Money can be combined with.

    `bool` is an `int` subclass but never counts as numeric here.
    """
    if isinstance(value, bool):
        return False

    return isinstance(value, (int, float, Decimal))
