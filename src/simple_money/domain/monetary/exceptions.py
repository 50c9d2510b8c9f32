"""Exceptions raised by the monetary domain.

All of them are validation failures: they are raised before any overflow
ledger or default mutation happens, so a rejected call leaves state untouched.
"""


class InvalidArgumentError(ValueError):
    """Base class for every caller-correctable usage error."""


class InvalidModeError(InvalidArgumentError):
    """Raised when a display mode is not one of `cents` or `decimal`."""


class InvalidRoundingMethodError(InvalidArgumentError):
    """Raised when a rounding method is outside the supported set."""


class UnknownCurrencyError(InvalidArgumentError):
    """Raised when a currency identifier does not resolve to a known currency."""


class UnsupportedSubunitRatioError(InvalidArgumentError):
    """Raised when a currency's `subunit_to_unit` cannot be converted from decimal input.

    This is a data error in the currency definition, retrying will not help.
    """


class TypeMismatchError(InvalidArgumentError, TypeError):
    """Raised when an operand has the wrong type for a Money operation."""


class CurrencyMismatchError(InvalidArgumentError):
    """Raised when attempting operations between different currencies."""
