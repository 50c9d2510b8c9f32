from __future__ import annotations

import logging
from decimal import ROUND_DOWN, Decimal, InvalidOperation

from simple_money.domain.monetary.currency import Currency
from simple_money.domain.monetary.exceptions import CurrencyMismatchError, InvalidArgumentError, TypeMismatchError, UnsupportedSubunitRatioError
from simple_money.domain.monetary.money_context import MoneyContext, get_default_context
from simple_money.domain.monetary.rounding import EXACT_CONTEXT, DisplayMode, RoundingMethod, floor_divmod, floor_mod
from simple_money.utils.numeric_tools import DecimalLike, as_decimal, is_numeric

logger = logging.getLogger(__name__)

# Subunit ratios converted from decimal input by plain scaling
_SCALED_RATIOS = (10, 100, 1000)

Numeric = int | float | Decimal


class Money:
    """Represents a monetary amount as an integer count of minor units (cents).

    Storing cents avoids binary floating point error. Whenever an input or a
    calculation yields a fraction of a cent, it is rounded with the value's
    rounding method and the discarded fraction is added to the overflow ledger
    of the value's `MoneyContext`, so no fractional cent is ever lost silently.

    Instances are immutable; every operation returns a new value carrying the
    left operand's currency, rounding method and context.

    Example:
        >>> Money(1_00).cents
        100
        >>> Money("1.99", mode="decimal").to_string(mode="decimal")
        '1.99'
    """

    __slots__ = ("_cents", "_currency", "_rounding_method", "_context")

    def __init__(
        self,
        amount: DecimalLike = 0,
        *,
        currency: Currency | str | None = None,
        rounding_method: RoundingMethod | str | None = None,
        mode: DisplayMode | str | None = None,
        context: MoneyContext | None = None,
    ):
        """Create Money from $amount.

        Args:
            amount: Value of the new object, read as cents or as a decimal depending on $mode.
            currency: Currency or ISO code; the context's default currency when None.
            rounding_method: Method used whenever this value (or arithmetic on it) yields
                fractional cents; the context's default rounding method when None.
            mode: `cents` or `decimal`; the context's default mode when None.
            context: Context providing defaults and the overflow ledger; the process-wide
                default context when None.

        Raises:
            UnknownCurrencyError: If $currency is not registered.
            InvalidRoundingMethodError: If $rounding_method is not valid.
            InvalidModeError: If $mode is not valid.
            InvalidArgumentError: If $amount is not a finite number.
            UnsupportedSubunitRatioError: If $mode is `decimal` and the currency's subunit
                ratio cannot be converted.
        """
        context = get_default_context() if context is None else context

        # Validate everything before the ledger is touched
        resolved_currency = context.resolve_currency(context.default_currency if currency is None else currency)
        method = context.default_rounding_method if rounding_method is None else RoundingMethod.parse(rounding_method)
        display_mode = context.default_mode if mode is None else DisplayMode.parse(mode)
        value = _amount_to_decimal(amount)

        if display_mode is DisplayMode.CENTS:
            cents = context.round(value, method)
        else:
            cents = _decimal_to_cents(value, resolved_currency, method, context)

        self._cents = cents
        self._currency = resolved_currency
        self._rounding_method = method
        self._context = context

    @classmethod
    def _from_cents(cls, cents: int, template: Money) -> Money:
        # Exact integer results skip rounding and never touch the ledger
        result = cls.__new__(cls)
        result._cents = cents
        result._currency = template._currency
        result._rounding_method = template._rounding_method
        result._context = template._context
        return result

    @property
    def cents(self) -> int:
        """Get the amount in minor units."""
        return self._cents

    @property
    def currency(self) -> Currency:
        """Get the currency the object was created with."""
        return self._currency

    @property
    def rounding_method(self) -> RoundingMethod:
        """Get the rounding method used when calculations yield fractions of a cent."""
        return self._rounding_method

    @property
    def context(self) -> MoneyContext:
        """Get the context whose ledger receives this value's overflow."""
        return self._context

    # region Validation helpers

    def _require_money(self, other: object, operation: str) -> Money:
        # Raise: $other must be Money for this operation
        if not isinstance(other, Money):
            raise TypeMismatchError(f"Cannot call `{operation}` because $other must be Money (got type '{type(other).__name__}')")
        self._require_same_currency(other, operation)
        return other

    def _require_same_currency(self, other: Money, operation: str) -> None:
        # Raise: both operands must share the currency
        if self._currency != other._currency:
            raise CurrencyMismatchError(f"Cannot call `{operation}` because currencies differ: {self._currency.iso_code} and {other._currency.iso_code}")

    @staticmethod
    def _require_numeric(other: object, operation: str) -> Decimal:
        # Raise: $other must be a numeric scalar
        if not is_numeric(other):
            raise TypeMismatchError(f"Cannot call `{operation}` because $other must be numeric (got type '{type(other).__name__}')")
        result = as_decimal(other)
        # Raise: NaN and infinities have no cent value
        if not result.is_finite():
            raise InvalidArgumentError(f"Cannot call `{operation}` because $other must be finite, but provided value is: {other!r}")
        return result

    @staticmethod
    def _require_nonzero(divisor: Decimal | int, operation: str) -> None:
        # Raise: division by zero is checked before any ledger posting
        if divisor == 0:
            raise ZeroDivisionError(f"Cannot call `{operation}` because the divisor is zero")

    # endregion

    # region Arithmetic

    def __add__(self, other: Money) -> Money:
        """Add two Money objects of the same currency (exact)."""
        other = self._require_money(other, "__add__")
        return self._from_cents(self._cents + other._cents, self)

    def __sub__(self, other: Money) -> Money:
        """Subtract two Money objects of the same currency (exact)."""
        other = self._require_money(other, "__sub__")
        return self._from_cents(self._cents - other._cents, self)

    def __mul__(self, other: Numeric) -> Money:
        """Multiply by a number; fractional cents are rounded and posted to overflow.

        Example:
            >>> (Money(2) * 2.1).cents
            4
        """
        factor = self._require_numeric(other, "__mul__")
        product = EXACT_CONTEXT.multiply(Decimal(self._cents), factor)
        return self._from_cents(self._context.round(product, self._rounding_method), self)

    def __rmul__(self, other: Numeric) -> Money:
        """Right multiplication: number * Money."""
        return self.__mul__(other)

    def __truediv__(self, other: Money | Numeric) -> Money | Decimal:
        """Divide by Money (returns a Decimal ratio) or by a number (returns Money).

        Dividing by a number floors the quotient and posts the remainder (in cents)
        to the overflow ledger.

        Example:
            >>> Money(10) / Money(4)
            Decimal('2.5')
            >>> (Money(5) / 2).cents
            2
        """
        if isinstance(other, Money):
            self._require_same_currency(other, "__truediv__")
            self._require_nonzero(other._cents, "__truediv__")
            return Decimal(self._cents) / Decimal(other._cents)

        divisor = self._require_numeric(other, "__truediv__")
        self._require_nonzero(divisor, "__truediv__")
        quotient, remainder = floor_divmod(Decimal(self._cents), divisor)
        self._context.post_overflow(remainder)
        return self._from_cents(int(quotient), self)

    def __mod__(self, other: Money | Numeric) -> Money | Decimal:
        """Modulo by Money (returns a Decimal) or by a number (returns Money).

        The remainder has the divisor's sign. A fractional remainder from a
        numeric divisor is rounded with this value's rounding method.
        """
        if isinstance(other, Money):
            self._require_same_currency(other, "__mod__")
            self._require_nonzero(other._cents, "__mod__")
            return floor_mod(Decimal(self._cents), Decimal(other._cents))

        divisor = self._require_numeric(other, "__mod__")
        self._require_nonzero(divisor, "__mod__")
        remainder = floor_mod(Decimal(self._cents), divisor)
        return self._from_cents(self._context.round(remainder, self._rounding_method), self)

    def __divmod__(self, other: Money | Numeric) -> tuple[Decimal, Money] | tuple[Money, Money]:
        """Floor division returning both quotient and remainder.

        With a Money divisor the quotient is a Decimal integer and the remainder is Money.
        With a numeric divisor both are Money; a fractional remainder is rounded and
        only that rounding is posted to overflow, since the remainder itself is returned.
        """
        if isinstance(other, Money):
            self._require_same_currency(other, "__divmod__")
            self._require_nonzero(other._cents, "__divmod__")
            quotient, remainder = floor_divmod(Decimal(self._cents), Decimal(other._cents))
            return quotient, self._from_cents(int(remainder), self)

        divisor = self._require_numeric(other, "__divmod__")
        self._require_nonzero(divisor, "__divmod__")
        quotient, remainder = floor_divmod(Decimal(self._cents), divisor)
        remainder_cents = self._context.round(remainder, self._rounding_method)
        return self._from_cents(int(quotient), self), self._from_cents(remainder_cents, self)

    def __abs__(self) -> Money:
        return self._from_cents(abs(self._cents), self)

    def __neg__(self) -> Money:
        return self._from_cents(-self._cents, self)

    # endregion

    # region Comparison

    def compare(self, other: Money) -> int:
        """Compare with another Money of the same currency.

        Returns:
            int: -1, 0 or 1 when self is less than, equal to or greater than $other.

        Raises:
            TypeMismatchError: If $other is not Money.
            CurrencyMismatchError: If currencies differ.
        """
        other = self._require_money(other, "compare")
        return (self._cents > other._cents) - (self._cents < other._cents)

    def __eq__(self, other: object) -> bool:
        return self.compare(other) == 0

    def __lt__(self, other: Money) -> bool:
        return self.compare(other) < 0

    def __le__(self, other: Money) -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: Money) -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: Money) -> bool:
        return self.compare(other) >= 0

    def __hash__(self) -> int:
        """Hash based on cents and currency."""
        return hash((self._cents, self._currency))

    # endregion

    # region String representations

    def to_string(self, mode: DisplayMode | str | None = None) -> str:
        """Return cents formatted as a string.

        Args:
            mode: `cents` for the integer cent count, `decimal` for major units with
                the currency's decimal places; the context's default mode when None.

        Raises:
            InvalidModeError: If $mode is not valid.

        Example:
            >>> n = Money(1_00)
            >>> n.to_string(mode="cents")
            '100'
            >>> n.to_string(mode="decimal")
            '1.00'
        """
        display_mode = self._context.default_mode if mode is None else DisplayMode.parse(mode)

        ratio = self._currency.subunit_to_unit
        if display_mode is DisplayMode.CENTS or ratio == 1:
            return str(self._cents)

        places = self._currency.decimal_places
        sign = "-" if self._cents < 0 else ""
        unit, subunit = divmod(abs(self._cents), ratio)
        if places == 0:
            return f"{sign}{unit}"

        subunit_str = ("0" * places + str(subunit))[-places:]
        return f"{sign}{unit}.{subunit_str}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        """Return string like 'Money(100, USD)'."""
        return f"{self.__class__.__name__}({self._cents}, {self._currency.iso_code})"

    @classmethod
    def from_str(cls, value_str: str, context: MoneyContext | None = None) -> Money:
        """Parse Money from a decimal string like '1000.50 USD'.

        Args:
            value_str (str): Amount in major units followed by a currency code.
            context: Context to build the value with; the default context when None.

        Returns:
            Money: Money object.

        Raises:
            InvalidArgumentError: If the string format is invalid.
            UnknownCurrencyError: If the currency code is not registered.
        """
        # Raise: only strings can be parsed
        if not isinstance(value_str, str):
            raise TypeMismatchError(f"$value_str must be a string, but provided value is: {value_str!r}")

        parts = value_str.split()
        if len(parts) != 2:
            raise InvalidArgumentError(f"Value string with $value_str = '{value_str}' must be in format 'value currency_code'")

        value_part, currency_part = parts
        try:
            value = Decimal(value_part)
        except InvalidOperation as e:
            raise InvalidArgumentError(f"Invalid value part '{value_part}' in string '{value_str}'") from e

        return cls(value, currency=currency_part, mode=DisplayMode.DECIMAL, context=context)

    # endregion


def _amount_to_decimal(amount: DecimalLike) -> Decimal:
    # Raise: $amount must be a finite number (or a numeric string)
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal, str)):
        raise InvalidArgumentError(f"Cannot init `Money` because $amount must be a number (got type '{type(amount).__name__}')")
    try:
        value = as_decimal(amount)
    except InvalidOperation as e:
        raise InvalidArgumentError(f"Cannot init `Money` because $amount ({amount!r}) cannot be converted to Decimal") from e
    if not value.is_finite():
        raise InvalidArgumentError(f"Cannot init `Money` because $amount must be finite, but provided value is: {amount!r}")
    return value


def _decimal_to_cents(value: Decimal, currency: Currency, method: RoundingMethod, context: MoneyContext) -> int:
    """Convert a decimal amount in major units to minor units of $currency.

    For a ratio-5 currency the digits after the point are read as tenths and
    added to the whole units times 5, so `1.4` gives 9 minor units and `-1.4`
    gives -9. A fraction of .5 or more carries into the next unit: `1.7` gives
    12 minor units, which formats as `"2.2"`.
    """
    ratio = currency.subunit_to_unit

    if ratio in _SCALED_RATIOS:
        return context.round(EXACT_CONTEXT.multiply(value, ratio), method)

    if ratio == 1:
        return context.round(value, method)

    if ratio == 5:
        # Truncated split keeps the sign on both parts, matching `to_string`.
        # Rounds with the context default, not $method.
        whole = value.to_integral_value(rounding=ROUND_DOWN, context=EXACT_CONTEXT)
        fraction = EXACT_CONTEXT.subtract(value, whole)
        minor = EXACT_CONTEXT.add(EXACT_CONTEXT.multiply(whole, 5), EXACT_CONTEXT.multiply(fraction, 10))
        logger.debug(f"Converting {value} {currency.iso_code} with default rounding method '{context.default_rounding_method.value}'")
        return context.round(minor)

    raise UnsupportedSubunitRatioError(f"Cannot init `Money` from a decimal in {currency.iso_code} because $subunit_to_unit = {ratio} is not supported (supported: 1, 5, 10, 100, 1000)")
