from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from simple_money.config import MoneySettings
from simple_money.domain.monetary.currency_registry import CURRENCIES, EUR, USD
from simple_money.domain.monetary.exceptions import InvalidArgumentError, InvalidModeError, InvalidRoundingMethodError, UnknownCurrencyError
from simple_money.domain.monetary.money_context import MoneyContext, get_default_context, set_default_context
from simple_money.domain.monetary.rounding import DisplayMode, RoundingMethod
from tests.helpers.helper_currency import create_currency, create_registry_with


def test_defaults(context):
    assert context.default_mode is DisplayMode.CENTS
    assert context.default_rounding_method is RoundingMethod.BANKERS
    assert context.default_currency is USD
    assert context.overflow == Decimal("0")
    assert context.registry is CURRENCIES


# region Default mutators


def test_set_default_mode(context):
    context.default_mode = "decimal"
    assert context.default_mode is DisplayMode.DECIMAL

    context.default_mode = DisplayMode.CENTS
    assert context.default_mode is DisplayMode.CENTS


def test_set_invalid_default_mode_leaves_it_unchanged(context):
    with pytest.raises(InvalidModeError):
        context.default_mode = "foo"
    assert context.default_mode is DisplayMode.CENTS


def test_set_default_rounding_method(context):
    context.default_rounding_method = "away_from_zero"
    assert context.default_rounding_method is RoundingMethod.AWAY_FROM_ZERO


def test_set_invalid_default_rounding_method_leaves_it_unchanged(context):
    with pytest.raises(InvalidRoundingMethodError):
        context.default_rounding_method = "foo"
    assert context.default_rounding_method is RoundingMethod.BANKERS


def test_set_default_currency(context):
    context.default_currency = "eur"
    assert context.default_currency is EUR

    context.default_currency = USD
    assert context.default_currency is USD


def test_set_unknown_default_currency_leaves_it_unchanged(context):
    with pytest.raises(UnknownCurrencyError):
        context.default_currency = "not_a_real_currency"
    assert context.default_currency is USD


def test_custom_registry_resolves_custom_currency():
    custom = create_currency()
    context = MoneyContext(default_currency="xts", registry=create_registry_with(custom))
    assert context.default_currency is custom
    assert context.resolve_currency("XTS") is custom


def test_invalid_constructor_arguments_raise():
    with pytest.raises(InvalidModeError):
        MoneyContext(default_mode="foo")
    with pytest.raises(InvalidRoundingMethodError):
        MoneyContext(default_rounding_method="foo")
    with pytest.raises(UnknownCurrencyError):
        MoneyContext(default_currency="not_a_real_currency")


def test_validity_predicates():
    assert MoneyContext.valid_mode("cents")
    assert MoneyContext.valid_mode("decimal")
    assert not MoneyContext.valid_mode("foo")

    for method in ["away_from_zero", "toward_zero", "nearest_up", "nearest_down", "bankers", "up", "down"]:
        assert MoneyContext.valid_rounding_method(method)
    assert not MoneyContext.valid_rounding_method("foo")


# endregion

# region Overflow ledger


def test_set_overflow(context):
    context.overflow = 5
    assert context.overflow == Decimal("5")

    context.overflow = "0.25"
    assert context.overflow == Decimal("0.25")

    context.overflow = 0.1
    assert context.overflow == Decimal("0.1")


def test_set_invalid_overflow_leaves_it_unchanged(context):
    context.overflow = 3
    with pytest.raises(InvalidArgumentError):
        context.overflow = "abc"
    with pytest.raises(InvalidArgumentError):
        context.overflow = "Infinity"
    assert context.overflow == Decimal("3")


def test_reset_overflow(context):
    context.round(Decimal("1.29"))
    assert context.overflow == Decimal("0.29")

    context.reset_overflow()
    assert context.overflow == Decimal("0")


def test_post_overflow_adds(context):
    context.post_overflow(Decimal("0.5"))
    context.post_overflow(Decimal("-0.2"))
    assert context.overflow == Decimal("0.3")


# endregion

# region Rounding


def test_round_uses_default_rounding_method(context):
    assert context.round(1.5) == 2
    assert context.round(2.5) == 2
    assert context.round(-1.5) == -2
    assert context.round(-2.5) == -2


def test_round_uses_changed_default_rounding_method(context):
    context.default_rounding_method = "up"
    assert context.round("1.1") == 2


def test_round_with_given_rounding_method(context):
    assert context.round(1.5, "toward_zero") == 1
    assert context.round(-1.5, RoundingMethod.DOWN) == -2


def test_round_posts_remainder_to_overflow(context):
    context.round(1.5)
    assert context.overflow == Decimal("-0.5")


def test_round_overflow_is_additive(context):
    context.round(Decimal("1.29"))
    context.round(Decimal("2.5"))
    context.round(Decimal("-0.7"), "away_from_zero")
    assert context.overflow == Decimal("0.29") + Decimal("0.5") + Decimal("0.3")


def test_round_with_invalid_method_does_not_touch_overflow(context):
    with pytest.raises(InvalidRoundingMethodError):
        context.round(1.29, "foo")
    assert context.overflow == Decimal("0")


@pytest.mark.parametrize("value", ["NaN", "-Infinity", "abc", True])
def test_round_rejects_non_numbers(context, value):
    with pytest.raises(InvalidArgumentError):
        context.round(value)
    assert context.overflow == Decimal("0")


# endregion

# region Settings and default context


def test_from_settings():
    context = MoneyContext.from_settings(MoneySettings(default_mode="decimal", default_rounding_method="down", default_currency="eur"))
    assert context.default_mode is DisplayMode.DECIMAL
    assert context.default_rounding_method is RoundingMethod.DOWN
    assert context.default_currency is EUR


def test_from_settings_validates():
    with pytest.raises(InvalidRoundingMethodError):
        MoneyContext.from_settings(MoneySettings(default_rounding_method="sideways"))


def test_set_default_context_returns_previous(fresh_default_context):
    replacement = MoneyContext(default_currency="EUR")

    previous = set_default_context(replacement)
    assert previous is fresh_default_context
    assert get_default_context() is replacement


def test_default_context_swaps_are_seen_across_threads(fresh_default_context):
    replacements = [MoneyContext() for _ in range(16)]

    with ThreadPoolExecutor(max_workers=4) as executor:
        previous = list(executor.map(set_default_context, replacements))

    installed = get_default_context()
    assert installed in replacements
    # Every swap returned a distinct earlier context, so none was lost
    assert len({id(p) for p in previous}) == len(previous)
    assert {id(p) for p in previous} | {id(installed)} == {id(c) for c in [fresh_default_context, *replacements]}


def test_set_default_context_rejects_other_types():
    with pytest.raises(TypeError):
        set_default_context("context")


def test_contexts_have_independent_ledgers(context):
    other = MoneyContext()
    context.round(Decimal("0.4"))
    assert context.overflow == Decimal("0.4")
    assert other.overflow == Decimal("0")


# endregion
