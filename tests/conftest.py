import pytest

from config.settings import Settings
from core.engine import ChargesEngine
from core.models import Instrument, PayerCategory, TransactionInput, TransactionType


@pytest.fixture
def settings():
    """Settings isolated from any local .env file"""
    return Settings(_env_file=None)


@pytest.fixture
def engine(settings):
    return ChargesEngine(settings=settings)


@pytest.fixture
def make_sell():
    """Factory for sell inputs, defaults match the 40,000 equity example"""
    def _make(**overrides):
        fields = dict(
            transaction_type=TransactionType.SELL,
            instrument=Instrument.EQUITY,
            amount=40000.0,
            purchase_cost=30000.0,
            payer_category=PayerCategory.INDIVIDUAL,
            depository_charge=25.0,
            units=10,
        )
        fields.update(overrides)
        return TransactionInput(**fields)
    return _make


@pytest.fixture
def make_buy():
    def _make(**overrides):
        fields = dict(
            transaction_type=TransactionType.BUY,
            instrument=Instrument.EQUITY,
            amount=600000.0,
            depository_charge=25.0,
        )
        fields.update(overrides)
        return TransactionInput(**fields)
    return _make
