import pytest

from simple_money.domain.monetary.money_context import MoneyContext, set_default_context


@pytest.fixture(autouse=True)
def fresh_default_context():
    """Install a fresh default context (cents, bankers, USD, zero overflow) for every test."""
    context = MoneyContext()
    previous = set_default_context(context)
    yield context
    set_default_context(previous)


@pytest.fixture
def context():
    """An isolated context, independent of the process-wide default."""
    return MoneyContext()
