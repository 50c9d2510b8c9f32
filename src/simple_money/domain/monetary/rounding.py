"""Rounding of exact decimal values to integer minor units.

Everything here is pure: functions return the discarded remainder and leave
posting it to an overflow ledger to `MoneyContext`.
"""
from __future__ import annotations

from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    Context,
    Decimal,
)
from enum import Enum
from typing import Callable

from simple_money.domain.monetary.exceptions import InvalidModeError, InvalidRoundingMethodError

# Precision wide enough that add, subtract, multiply and integer division never round.
# Never use it for true division, a non-terminating quotient would not fit.
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

_HALF = Decimal("0.5")


class DisplayMode(Enum):
    """How a plain number maps to Money (and back to a string)."""

    CENTS = "cents"
    DECIMAL = "decimal"

    @classmethod
    def parse(cls, value: DisplayMode | str) -> DisplayMode:
        """Validate $value and return the matching member.

        Raises:
            InvalidModeError: If $value is not a member or member value.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidModeError(f"$mode must be one of {[m.value for m in cls]}, but provided value is: {value!r}") from None


class RoundingMethod(Enum):
    """Strategies for collapsing an exact decimal to an integer."""

    AWAY_FROM_ZERO = "away_from_zero"
    TOWARD_ZERO = "toward_zero"
    NEAREST_UP = "nearest_up"
    NEAREST_DOWN = "nearest_down"
    BANKERS = "bankers"
    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, value: RoundingMethod | str) -> RoundingMethod:
        """Validate $value and return the matching member.

        Raises:
            InvalidRoundingMethodError: If $value is not a member or member value.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidRoundingMethodError(f"$rounding_method must be one of {[m.value for m in cls]}, but provided value is: {value!r}") from None


def _with_rounding(rounding: str) -> Callable[[Decimal], Decimal]:
    def strategy(value: Decimal) -> Decimal:
        return value.to_integral_value(rounding=rounding, context=EXACT_CONTEXT)

    return strategy


def _half_toward_ceiling(value: Decimal) -> Decimal:
    # Ties move toward +inf: 1.5 -> 2, -1.5 -> -1
    return EXACT_CONTEXT.add(value, _HALF).to_integral_value(rounding=ROUND_FLOOR, context=EXACT_CONTEXT)


def _half_toward_floor(value: Decimal) -> Decimal:
    # Ties move toward -inf: 1.5 -> 1, -1.5 -> -2
    return EXACT_CONTEXT.subtract(value, _HALF).to_integral_value(rounding=ROUND_CEILING, context=EXACT_CONTEXT)


_STRATEGIES: dict[RoundingMethod, Callable[[Decimal], Decimal]] = {
    RoundingMethod.AWAY_FROM_ZERO: _with_rounding(ROUND_HALF_UP),
    RoundingMethod.TOWARD_ZERO: _with_rounding(ROUND_DOWN),
    RoundingMethod.NEAREST_UP: _half_toward_ceiling,
    RoundingMethod.NEAREST_DOWN: _half_toward_floor,
    RoundingMethod.BANKERS: _with_rounding(ROUND_HALF_EVEN),
    RoundingMethod.UP: _with_rounding(ROUND_CEILING),
    RoundingMethod.DOWN: _with_rounding(ROUND_FLOOR),
}


def round_to_integer(value: Decimal, method: RoundingMethod) -> tuple[int, Decimal]:
    """Round $value to an integer using $method.

    Args:
        value: Finite exact decimal to round.
        method: Validated rounding method.

    Returns:
        Tuple of the rounded integer and the remainder `value - rounded`.

    Examples:
        >>> round_to_integer(Decimal("1.5"), RoundingMethod.BANKERS)
        (2, Decimal('-0.5'))
        >>> round_to_integer(Decimal("1.29"), RoundingMethod.BANKERS)
        (1, Decimal('0.29'))
    """
    rounded = _STRATEGIES[method](value)
    remainder = EXACT_CONTEXT.subtract(value, rounded)
    return int(rounded), remainder


def floor_divmod(dividend: Decimal, divisor: Decimal) -> tuple[Decimal, Decimal]:
    """Exact division with the quotient rounded toward -inf.

    The remainder carries the sign of $divisor and satisfies
    `dividend == quotient * divisor + remainder`.
    `Decimal`'s own `divmod` truncates toward zero instead.
    """
    quotient, remainder = EXACT_CONTEXT.divmod(dividend, divisor)
    if remainder and (remainder < 0) != (divisor < 0):
        quotient = EXACT_CONTEXT.subtract(quotient, 1)
        remainder = EXACT_CONTEXT.add(remainder, divisor)
    return quotient, remainder


def floor_mod(dividend: Decimal, divisor: Decimal) -> Decimal:
    """Remainder of `floor_divmod`."""
    return floor_divmod(dividend, divisor)[1]
