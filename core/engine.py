import logging
from typing import Mapping

from config.settings import Settings, config
from core.advisory import is_odd_lot
from core.fees import FeeAggregator
from core.models import ChargeBreakdown, FeeComponents, Instrument, TransactionInput
from core.slabs import RateResolver, SlabTable
from utils.tax_calculator import PenaltyCalculator, TaxCalculator

logger = logging.getLogger(__name__)


class ChargesEngine:
    """
    Stateless charges calculator for a single buy or sell trade.

    Holds only configuration; every compute() call works on its own input
    snapshot, so one instance can be shared between callers.
    """
    def __init__(self, settings: Settings = None, slab_tables: Mapping[Instrument, SlabTable] = None):
        settings = settings or config
        self.settings = settings
        self.rate_resolver = RateResolver(slab_tables)
        self.fee_aggregator = FeeAggregator(regulatory_fee_rate=settings.REGULATORY_FEE_RATE)
        self.tax_calculator = TaxCalculator(
            individual_rate=settings.CGT_RATE_INDIVIDUAL,
            institution_rate=settings.CGT_RATE_INSTITUTION
        )
        self.penalty_calculator = PenaltyCalculator()
        self.min_lot_size = settings.MIN_LOT_SIZE

    def compute(self, txn: TransactionInput) -> ChargeBreakdown:
        """Raises InvalidInput; a negative net amount is a valid result."""
        txn.validate()

        rate = self.rate_resolver.resolve(txn.amount, txn.instrument)
        fees = self.fee_aggregator.aggregate(txn.amount, rate, txn.depository_charge)

        capital_gains_tax = self.tax_calculator.calculate(txn)
        penalty = self.penalty_calculator.calculate(txn)

        total_deductions, net_amount = self.settle(txn, fees, capital_gains_tax, penalty)
        if net_amount < 0:
            logger.warning(f"Charges exceed trade value: net {net_amount:.2f} on amount {txn.amount:.2f}")

        return ChargeBreakdown(
            transaction_type=txn.transaction_type,
            applied_rate=rate,
            brokerage=fees.brokerage,
            regulatory_fee=fees.regulatory_fee,
            depository_charge=fees.depository_charge,
            capital_gains_tax=capital_gains_tax,
            penalty=penalty,
            total_deductions=total_deductions,
            net_amount=net_amount,
            odd_lot_advisory=is_odd_lot(txn.units, self.min_lot_size)
        )

    @staticmethod
    def settle(txn: TransactionInput, fees: FeeComponents, capital_gains_tax: float, penalty: float):
        """
        Sell: seller receives amount minus every charge.
        Buy: buyer pays amount plus brokerage, fee and DP charge (no tax, no penalty).
        """
        if txn.is_sell:
            total_deductions = fees.component_sum + capital_gains_tax + penalty
            return total_deductions, txn.amount - total_deductions

        total_deductions = fees.component_sum
        return total_deductions, txn.amount + total_deductions


_default_engine = None


def compute(txn: TransactionInput) -> ChargeBreakdown:
    """Computes with a shared engine built from the global settings."""
    global _default_engine
    if _default_engine is None:
        _default_engine = ChargesEngine()
    return _default_engine.compute(txn)
