from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from threading import Lock, RLock
from typing import TYPE_CHECKING

from simple_money.domain.monetary.currency import Currency, CurrencyRegistry
from simple_money.domain.monetary.currency_registry import CURRENCIES
from simple_money.domain.monetary.exceptions import InvalidArgumentError, InvalidModeError, InvalidRoundingMethodError
from simple_money.domain.monetary.rounding import EXACT_CONTEXT, DisplayMode, RoundingMethod, round_to_integer
from simple_money.utils.numeric_tools import DecimalLike, as_decimal

if TYPE_CHECKING:
    from simple_money.config import MoneySettings

logger = logging.getLogger(__name__)


class MoneyContext:
    """Defaults and overflow ledger shared by the Money values built with it.

    The overflow ledger is the running total of fractional minor units discarded
    by rounding (`original - rounded` for every rounding). It only changes through
    `round`, `post_overflow` and explicit assignment/reset.

    Defaults are consulted only when a Money is created or formatted without
    explicit options; changing them never affects existing values.

    All mutation goes through one re-entrant lock, so a context can be shared
    between threads without losing ledger postings.
    """

    def __init__(
        self,
        default_mode: DisplayMode | str = DisplayMode.CENTS,
        default_rounding_method: RoundingMethod | str = RoundingMethod.BANKERS,
        default_currency: Currency | str = "USD",
        registry: CurrencyRegistry | None = None,
        overflow: DecimalLike = 0,
    ):
        self._lock = RLock()
        self._registry = CURRENCIES if registry is None else registry
        self._default_mode = DisplayMode.parse(default_mode)
        self._default_rounding_method = RoundingMethod.parse(default_rounding_method)
        self._default_currency = self._registry.resolve(default_currency)
        self._overflow = _to_finite_decimal(overflow, "overflow")

    @classmethod
    def from_settings(cls, settings: MoneySettings, registry: CurrencyRegistry | None = None) -> MoneyContext:
        """Build a context from loaded settings, validating every value."""
        return cls(
            default_mode=settings.default_mode,
            default_rounding_method=settings.default_rounding_method,
            default_currency=settings.default_currency,
            registry=registry,
        )

    # region Defaults

    @property
    def registry(self) -> CurrencyRegistry:
        """Get the registry used to resolve currency identifiers."""
        return self._registry

    @property
    def default_mode(self) -> DisplayMode:
        """Get the mode used when none is given (defaults to `cents`)."""
        return self._default_mode

    @default_mode.setter
    def default_mode(self, mode: DisplayMode | str) -> None:
        parsed = DisplayMode.parse(mode)
        with self._lock:
            self._default_mode = parsed
        logger.debug(f"Default mode set to '{parsed.value}'")

    @property
    def default_rounding_method(self) -> RoundingMethod:
        """Get the rounding method used when none is given (defaults to `bankers`)."""
        return self._default_rounding_method

    @default_rounding_method.setter
    def default_rounding_method(self, rounding_method: RoundingMethod | str) -> None:
        parsed = RoundingMethod.parse(rounding_method)
        with self._lock:
            self._default_rounding_method = parsed
        logger.debug(f"Default rounding method set to '{parsed.value}'")

    @property
    def default_currency(self) -> Currency:
        """Get the currency used when none is given (defaults to USD)."""
        return self._default_currency

    @default_currency.setter
    def default_currency(self, currency: Currency | str) -> None:
        resolved = self._registry.resolve(currency)
        with self._lock:
            self._default_currency = resolved
        logger.debug(f"Default currency set to '{resolved.iso_code}'")

    @staticmethod
    def valid_mode(mode: object) -> bool:
        """Return True if $mode is a valid display mode."""
        try:
            DisplayMode.parse(mode)
        except InvalidModeError:
            return False
        return True

    @staticmethod
    def valid_rounding_method(rounding_method: object) -> bool:
        """Return True if $rounding_method is a valid rounding method."""
        try:
            RoundingMethod.parse(rounding_method)
        except InvalidRoundingMethodError:
            return False
        return True

    def resolve_currency(self, currency: Currency | str) -> Currency:
        """Resolve $currency through this context's registry."""
        return self._registry.resolve(currency)

    # endregion

    # region Overflow ledger

    @property
    def overflow(self) -> Decimal:
        """Get the fractional minor units left over from all roundings."""
        with self._lock:
            return self._overflow

    @overflow.setter
    def overflow(self, value: DecimalLike) -> None:
        new_value = _to_finite_decimal(value, "overflow")
        with self._lock:
            self._overflow = new_value
        logger.debug(f"Overflow set to {new_value}")

    def reset_overflow(self) -> None:
        """Reset the overflow ledger to 0."""
        self.overflow = 0

    def post_overflow(self, amount: Decimal) -> None:
        """Add $amount (in minor units) to the overflow ledger."""
        with self._lock:
            self._overflow = EXACT_CONTEXT.add(self._overflow, amount)

    def round(self, value: DecimalLike, rounding_method: RoundingMethod | str | None = None) -> int:
        """Round $value to an integer and post the discarded fraction to the ledger.

        Args:
            value: Amount in minor units.
            rounding_method: Method to use; the default rounding method when None.

        Returns:
            int: The rounded value.

        Raises:
            InvalidRoundingMethodError: If $rounding_method is not valid.
            InvalidArgumentError: If $value is not a finite number.

        Examples:
            >>> ctx = MoneyContext()
            >>> ctx.round(1.5)
            2
            >>> ctx.overflow
            Decimal('-0.5')
        """
        method = self._default_rounding_method if rounding_method is None else RoundingMethod.parse(rounding_method)
        exact = _to_finite_decimal(value, "value")

        rounded, remainder = round_to_integer(exact, method)
        self.post_overflow(remainder)
        return rounded

    # endregion

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(default_mode={self._default_mode.value}, default_rounding_method={self._default_rounding_method.value}, default_currency={self._default_currency.iso_code}, overflow={self._overflow})"


def _to_finite_decimal(value: DecimalLike, name: str) -> Decimal:
    # Raise: only finite numbers can become minor units
    if isinstance(value, bool):
        raise InvalidArgumentError(f"${name} must be a number, but provided value is: {value!r}")
    try:
        result = as_decimal(value)
    except (ValueError, TypeError, InvalidOperation) as e:
        raise InvalidArgumentError(f"${name} ({value!r}) cannot be converted to Decimal") from e
    if not result.is_finite():
        raise InvalidArgumentError(f"${name} must be finite, but provided value is: {value!r}")
    return result


# region Process-wide default context

_default_context = MoneyContext()
_default_context_lock = Lock()


def get_default_context() -> MoneyContext:
    """Return the context used by Money values built without `context=`."""
    return _default_context


def set_default_context(context: MoneyContext) -> MoneyContext:
    """Install $context as the process-wide default.

    Returns:
        MoneyContext: The previously installed context, so callers can restore it.
    """
    global _default_context

    # Raise: default context must be a MoneyContext
    if not isinstance(context, MoneyContext):
        raise TypeError(f"$context must be a MoneyContext instance, but provided value is: {context}")

    with _default_context_lock:
        previous = _default_context
        _default_context = context
    logger.debug(f"Installed default {context!r}")
    return previous


# endregion
