import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from core.models import Instrument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlabTier:
    upper_bound: Optional[float]  # None = unbounded
    rate: float

    @property
    def is_unbounded(self) -> bool:
        return self.upper_bound is None

    def covers(self, amount: float) -> bool:
        return self.is_unbounded or amount <= self.upper_bound


class SlabTable:
    """
    Ordered brokerage tiers for one instrument.

    Finite bounds strictly increase and the last tier is the only unbounded
    one, so every non-negative amount matches exactly one tier.
    """
    def __init__(self, tiers: Iterable[SlabTier]):
        self.tiers: Tuple[SlabTier, ...] = tuple(tiers)
        self._check()

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[Optional[float], float]]) -> "SlabTable":
        return cls(SlabTier(upper_bound=bound, rate=rate) for bound, rate in pairs)

    def _check(self):
        if not self.tiers:
            raise ValueError("slab table needs at least one tier")
        if not self.tiers[-1].is_unbounded:
            raise ValueError("last slab tier must be unbounded")
        if any(t.is_unbounded for t in self.tiers[:-1]):
            raise ValueError("only the last slab tier may be unbounded")

        bounds = [t.upper_bound for t in self.tiers[:-1]]
        for lower, upper in zip(bounds, bounds[1:]):
            if upper <= lower:
                raise ValueError(f"slab thresholds must strictly increase ({lower} -> {upper})")
        for tier in self.tiers:
            if not 0 <= tier.rate <= 1:
                raise ValueError(f"slab rate must be a fraction in [0, 1] (got {tier.rate})")

    def rate_for(self, amount: float) -> float:
        # Linear scan, tables hold a handful of tiers
        for tier in self.tiers:
            if tier.covers(amount):
                return tier.rate
        return self.tiers[-1].rate

    def to_list(self) -> list:
        return [{"upper_bound": t.upper_bound, "rate": t.rate} for t in self.tiers]

    def __iter__(self):
        return iter(self.tiers)

    def __len__(self):
        return len(self.tiers)

    def __eq__(self, other):
        return isinstance(other, SlabTable) and self.tiers == other.tiers

    def __repr__(self):
        return f"SlabTable({list(self.tiers)!r})"


# Brokerage slabs (rates are decimal fractions)
EQUITY_SLABS = SlabTable.from_pairs([
    (50_000, 0.006),
    (500_000, 0.0055),
    (2_000_000, 0.005),
    (10_000_000, 0.0045),
    (None, 0.004),
])

GOVERNMENT_BOND_SLABS = SlabTable.from_pairs([
    (500_000, 0.002),
    (5_000_000, 0.001),
    (None, 0.001),
])

OTHER_SLABS = SlabTable.from_pairs([
    (50_000, 0.0075),
    (5_000_000, 0.006),
    (None, 0.004),
])

DEFAULT_SLAB_TABLES: Dict[Instrument, SlabTable] = {
    Instrument.EQUITY: EQUITY_SLABS,
    Instrument.GOVERNMENT_BOND: GOVERNMENT_BOND_SLABS,
    Instrument.OTHER: OTHER_SLABS,
}


class RateResolver:
    def __init__(self, slab_tables: Mapping[Instrument, SlabTable] = None):
        tables = dict(DEFAULT_SLAB_TABLES)
        if slab_tables:
            tables.update(slab_tables)
        self.slab_tables: Dict[Instrument, SlabTable] = tables

    def table_for(self, instrument: Instrument) -> SlabTable:
        return self.slab_tables[instrument]

    def resolve(self, amount: float, instrument: Instrument) -> float:
        """Brokerage rate of the first tier whose bound is >= amount."""
        rate = self.table_for(instrument).rate_for(amount)
        logger.debug(f"Slab rate for {instrument.value} @ {amount}: {rate}")
        return rate
