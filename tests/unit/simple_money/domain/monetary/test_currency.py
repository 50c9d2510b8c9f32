from dataclasses import FrozenInstanceError

import pytest

from simple_money.domain.monetary.currency import Currency, CurrencyRegistry, derive_decimal_places
from simple_money.domain.monetary.currency_registry import CURRENCIES, EUR, USD
from simple_money.domain.monetary.exceptions import UnknownCurrencyError
from tests.helpers.helper_currency import create_currency, create_registry_with


# region Currency record


def test_usd_record_matches_definition():
    expected = Currency(1, "USD", "United States Dollar", "$", "Cent", 100, 2, True, "$", ".", ",")
    assert CURRENCIES["usd"] == expected


def test_iso_code_is_normalized_to_upper_case():
    assert create_currency("xts").iso_code == "XTS"
    assert create_currency("  xts ").iso_code == "XTS"


@pytest.mark.parametrize("subunit_to_unit, decimal_places", [(1, 0), (5, 1), (10, 1), (100, 2), (1000, 3)])
def test_decimal_places_derived_from_ratio(subunit_to_unit, decimal_places):
    assert derive_decimal_places(subunit_to_unit) == decimal_places
    assert create_currency(subunit_to_unit=subunit_to_unit).decimal_places == decimal_places


def test_explicit_decimal_places_are_kept():
    assert create_currency(subunit_to_unit=100, decimal_places=0).decimal_places == 0


@pytest.mark.parametrize("kwargs", [{"iso_code": ""}, {"subunit_to_unit": 0}, {"subunit_to_unit": -100}, {"decimal_places": -1}])
def test_invalid_record_raises(kwargs):
    with pytest.raises(ValueError):
        create_currency(**kwargs)


def test_record_is_immutable():
    with pytest.raises(FrozenInstanceError):
        USD.iso_code = "EUR"


def test_records_compare_structurally():
    assert create_currency() == create_currency()
    assert create_currency() != create_currency(subunit_to_unit=1000)
    assert hash(create_currency()) == hash(create_currency())
    assert str(EUR) == "EUR"


# endregion

# region Registry lookup


@pytest.mark.parametrize("identifier", ["USD", "usd", "Usd", " USD "])
def test_lookup_is_case_insensitive(identifier):
    assert CURRENCIES[identifier] is USD
    assert CURRENCIES.resolve(identifier) is USD


def test_lookup_returns_currency_argument_unchanged():
    custom = create_currency()
    assert CURRENCIES.resolve(USD) is USD
    assert CURRENCIES.resolve(custom) is custom


def test_unknown_currency_raises():
    with pytest.raises(UnknownCurrencyError):
        CURRENCIES["not_a_real_currency"]

    # Part of the ValueError family like every usage error
    with pytest.raises(ValueError):
        CURRENCIES.resolve("XXX")


def test_non_string_identifier_raises():
    with pytest.raises(UnknownCurrencyError):
        CURRENCIES.resolve(840)


def test_lookup_does_not_mutate_records():
    before = CURRENCIES["EUR"]
    CURRENCIES["eur"]
    assert CURRENCIES["EUR"] == before == EUR


def test_table_covers_every_supported_ratio():
    ratios = {currency.subunit_to_unit for currency in CURRENCIES}
    assert {1, 5, 10, 100, 1000} <= ratios


def test_iteration_is_ordered_by_priority():
    currencies = list(CURRENCIES)
    assert currencies[0] is USD
    assert [c.priority for c in currencies] == sorted(c.priority for c in currencies)
    assert len(CURRENCIES) == len(currencies)


def test_contains():
    assert "usd" in CURRENCIES
    assert USD in CURRENCIES
    assert "XTS" not in CURRENCIES
    assert create_currency() not in CURRENCIES
    assert 840 not in CURRENCIES


# endregion

# region Registration


def test_register_custom_currency():
    custom = create_currency("XTS", subunit_to_unit=3)
    registry = create_registry_with(custom)

    assert registry["xts"] is custom
    assert "XTS" not in CURRENCIES


def test_register_duplicate_requires_overwrite():
    registry = CurrencyRegistry([create_currency()])
    replacement = create_currency(subunit_to_unit=1000)

    with pytest.raises(ValueError):
        registry.register(replacement)

    registry.register(replacement, overwrite=True)
    assert registry["XTS"] is replacement


def test_register_rejects_non_currency():
    with pytest.raises(TypeError):
        CurrencyRegistry().register("USD")


# endregion
