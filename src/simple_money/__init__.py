__version__ = "0.0.1"

from simple_money.config import MoneySettings, load_settings
from simple_money.domain.monetary.currency import Currency, CurrencyRegistry
from simple_money.domain.monetary.currency_registry import CURRENCIES
from simple_money.domain.monetary.exceptions import (
    CurrencyMismatchError,
    InvalidArgumentError,
    InvalidModeError,
    InvalidRoundingMethodError,
    TypeMismatchError,
    UnknownCurrencyError,
    UnsupportedSubunitRatioError,
)
from simple_money.domain.monetary.money import Money
from simple_money.domain.monetary.money_context import MoneyContext, get_default_context, set_default_context
from simple_money.domain.monetary.rounding import DisplayMode, RoundingMethod

__all__ = [
    "CURRENCIES",
    "Currency",
    "CurrencyMismatchError",
    "CurrencyRegistry",
    "DisplayMode",
    "InvalidArgumentError",
    "InvalidModeError",
    "InvalidRoundingMethodError",
    "Money",
    "MoneyContext",
    "MoneySettings",
    "RoundingMethod",
    "TypeMismatchError",
    "UnknownCurrencyError",
    "UnsupportedSubunitRatioError",
    "get_default_context",
    "load_settings",
    "set_default_context",
]
