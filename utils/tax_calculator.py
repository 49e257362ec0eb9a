from core.models import InvalidInput, PayerCategory, TransactionInput

class TaxCalculator:
    """
    Capital gains tax on realized profit, sell side only.
    Individuals 5%, institutions 10%.
    """
    def __init__(self, individual_rate: float = 0.05, institution_rate: float = 0.10):
        self.rates = {
            PayerCategory.INDIVIDUAL: individual_rate,
            PayerCategory.INSTITUTION: institution_rate,
        }

    def rate_for(self, payer_category: PayerCategory) -> float:
        return self.rates[payer_category]

    def calculate(self, txn: TransactionInput) -> float:
        if not txn.is_sell:
            return 0.0

        # A loss or break-even sale is not taxed
        profit = max(txn.amount - txn.purchase_cost, 0.0)
        return profit * self.rate_for(txn.payer_category)


class PenaltyCalculator:
    """Optional percentage penalty on the sale amount."""

    def calculate(self, txn: TransactionInput) -> float:
        if not (txn.is_sell and txn.penalty_enabled):
            return 0.0
        if txn.penalty_percent is None or not 0 <= txn.penalty_percent <= 100:
            raise InvalidInput(f"penalty_percent must be within [0, 100] (got {txn.penalty_percent})")
        return txn.amount * (txn.penalty_percent / 100)
