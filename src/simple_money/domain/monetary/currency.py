from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from simple_money.domain.monetary.exceptions import UnknownCurrencyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Currency:
    """Immutable currency definition.

    Records are looked up through a `CurrencyRegistry`, not built per use. Two
    records are equal when all their fields are equal.

    Attributes:
        priority (int): Display/sort hint, lower comes first.
        iso_code (str): ISO 4217 code (e.g. "USD"), always upper case.
        name (str): Full currency name.
        symbol (str): Display symbol (e.g. "$").
        subunit_name (str): Name of the minor unit (e.g. "Cent").
        subunit_to_unit (int): Minor units per major unit (1, 5, 10, 100, 1000).
        decimal_places (int): Fractional digits used when formatting as decimal.
            Derived from $subunit_to_unit when not given.
        symbol_first (bool): Whether the symbol precedes the amount.
        html_entity (str): HTML entity for the symbol.
        decimal_mark (str): Decimal mark used in display.
        thousands_separator (str): Thousands separator used in display.
    """

    priority: int
    iso_code: str
    name: str
    symbol: str
    subunit_name: str
    subunit_to_unit: int
    decimal_places: int | None = None
    symbol_first: bool = True
    html_entity: str = ""
    decimal_mark: str = "."
    thousands_separator: str = ","

    def __post_init__(self):
        # Raise: $iso_code must be a non-empty string, it is the registry key
        if not isinstance(self.iso_code, str) or not self.iso_code.strip():
            raise ValueError(f"$iso_code must be a non-empty string, but provided value is: '{self.iso_code}'")

        # Raise: $subunit_to_unit must be a positive integer
        if isinstance(self.subunit_to_unit, bool) or not isinstance(self.subunit_to_unit, int) or self.subunit_to_unit <= 0:
            raise ValueError(f"$subunit_to_unit must be a positive integer, but provided value is: {self.subunit_to_unit}")

        object.__setattr__(self, "iso_code", self.iso_code.strip().upper())

        if self.decimal_places is None:
            object.__setattr__(self, "decimal_places", derive_decimal_places(self.subunit_to_unit))
        # Raise: explicit $decimal_places must be a non-negative integer
        elif isinstance(self.decimal_places, bool) or not isinstance(self.decimal_places, int) or self.decimal_places < 0:
            raise ValueError(f"$decimal_places must be a non-negative integer, but provided value is: {self.decimal_places}")

    def __str__(self) -> str:
        return self.iso_code


def derive_decimal_places(subunit_to_unit: int) -> int:
    """Number of digits needed to print the largest subunit count.

    Works for ratios that are not powers of ten, e.g. 5 -> 1 (subunits 0..4).

    Examples:
        >>> derive_decimal_places(1)
        0
        >>> derive_decimal_places(5)
        1
        >>> derive_decimal_places(100)
        2
        >>> derive_decimal_places(1000)
        3
    """
    if subunit_to_unit <= 1:
        return 0
    return len(str(subunit_to_unit - 1))


class CurrencyRegistry:
    """Case-insensitive lookup of `Currency` records by ISO code.

    Lookup never mutates a record. Custom definitions can be added with
    `register`.
    """

    def __init__(self, currencies: Iterable[Currency] = ()):
        self._currencies_by_code: dict[str, Currency] = {}
        for currency in currencies:
            self.register(currency)

    def register(self, currency: Currency, overwrite: bool = False) -> None:
        """Register a currency definition.

        Args:
            currency (Currency): The currency to register.
            overwrite (bool): Whether to replace an existing currency with the same code.

        Raises:
            TypeError: If $currency is not a Currency instance.
            ValueError: If the code already exists and $overwrite is False.
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        if currency.iso_code in self._currencies_by_code and not overwrite:
            raise ValueError(f"Currency with code '{currency.iso_code}' already exists in registry. Use overwrite=True to replace it.")

        self._currencies_by_code[currency.iso_code] = currency
        logger.debug(f"Registered currency '{currency.iso_code}' (subunit_to_unit={currency.subunit_to_unit})")

    def resolve(self, identifier: Currency | str) -> Currency:
        """Resolve $identifier to a registered `Currency`.

        Args:
            identifier: A Currency (returned unchanged) or an ISO code in any case.

        Returns:
            Currency: The matching record.

        Raises:
            UnknownCurrencyError: If no record matches $identifier.
        """
        if isinstance(identifier, Currency):
            return identifier

        # Raise: only strings can be looked up by code
        if not isinstance(identifier, str):
            raise UnknownCurrencyError(f"Cannot call `resolve` because $identifier ({identifier!r}) is not a currency code (got type '{type(identifier).__name__}')")

        code = identifier.strip().upper()
        try:
            return self._currencies_by_code[code]
        except KeyError:
            raise UnknownCurrencyError(f"Cannot call `resolve` because currency with code '{code}' is not in the registry") from None

    def __getitem__(self, identifier: Currency | str) -> Currency:
        return self.resolve(identifier)

    def __contains__(self, identifier: object) -> bool:
        if isinstance(identifier, Currency):
            return self._currencies_by_code.get(identifier.iso_code) == identifier
        if isinstance(identifier, str):
            return identifier.strip().upper() in self._currencies_by_code
        return False

    def __iter__(self) -> Iterator[Currency]:
        return iter(sorted(self._currencies_by_code.values(), key=lambda c: (c.priority, c.iso_code)))

    def __len__(self) -> int:
        return len(self._currencies_by_code)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} currencies)"
