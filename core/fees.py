from core.models import FeeComponents


class FeeAggregator:
    """
    Brokerage + regulatory fee + depository charge.
    The regulatory fee applies uniformly regardless of instrument.
    """
    def __init__(self, regulatory_fee_rate: float = 0.0000015):
        self.regulatory_fee_rate = regulatory_fee_rate

    def aggregate(self, amount: float, applied_rate: float, depository_charge: float) -> FeeComponents:
        # 1. Brokerage (slab rate)
        brokerage = amount * applied_rate

        # 2. Regulatory Fee
        regulatory_fee = amount * self.regulatory_fee_rate

        # 3. Depository Charge (flat, passed through)
        return FeeComponents(
            brokerage=brokerage,
            regulatory_fee=regulatory_fee,
            depository_charge=depository_charge,
        )
