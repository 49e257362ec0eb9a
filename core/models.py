import math
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class InvalidInput(ValueError):
    """Raised when a transaction breaks a business rule (never coerced)."""


class TransactionType(str, Enum):
    BUY = "buy"
    SELL = "sell"


class Instrument(str, Enum):
    EQUITY = "equity"
    GOVERNMENT_BOND = "government_bond"
    OTHER = "other"


class PayerCategory(str, Enum):
    INDIVIDUAL = "individual"
    INSTITUTION = "institution"


INSTRUMENT_ALIASES = {"gov_bond": Instrument.GOVERNMENT_BOND}


def coerce_number(value: Any) -> Optional[float]:
    """
    Numeric ingestion policy: None stays None (absent), anything that is not
    a finite number becomes 0.0.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def _parse_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _parse_enum(enum_cls, value, field: str, aliases: Dict[str, Enum] = None):
    if value is None or isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower()
    if aliases and key in aliases:
        return aliases[key]
    try:
        return enum_cls(key)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidInput(f"{field} must be one of: {allowed} (got {value!r})")


@dataclass(frozen=True)
class TransactionInput:
    transaction_type: TransactionType
    instrument: Instrument
    amount: float
    purchase_cost: Optional[float] = None
    payer_category: Optional[PayerCategory] = None
    depository_charge: float = 0.0
    units: int = 0
    penalty_enabled: bool = False
    penalty_percent: Optional[float] = None

    def __post_init__(self):
        # Plain strings from direct construction become their enum members
        object.__setattr__(self, "transaction_type",
                           _parse_enum(TransactionType, self.transaction_type, "transaction_type"))
        object.__setattr__(self, "instrument",
                           _parse_enum(Instrument, self.instrument, "instrument", INSTRUMENT_ALIASES))
        object.__setattr__(self, "payer_category",
                           _parse_enum(PayerCategory, self.payer_category, "payer_category"))

    @property
    def is_sell(self) -> bool:
        return self.transaction_type == TransactionType.SELL

    def validate(self):
        """Raises InvalidInput on the first business-rule violation."""
        if self.amount < 0:
            raise InvalidInput("amount must be non-negative")
        if self.purchase_cost is not None and self.purchase_cost < 0:
            raise InvalidInput("purchase_cost must be non-negative")
        if self.depository_charge < 0:
            raise InvalidInput("depository_charge must be non-negative")
        if self.units < 0:
            raise InvalidInput("units must be non-negative")

        if self.is_sell:
            if self.purchase_cost is None:
                raise InvalidInput("purchase_cost is required for a sell transaction")
            if self.payer_category is None:
                raise InvalidInput("payer_category is required for a sell transaction")

        if self.penalty_enabled:
            if self.penalty_percent is None:
                raise InvalidInput("penalty_percent is required when the penalty is enabled")
            if not 0 <= self.penalty_percent <= 100:
                raise InvalidInput(f"penalty_percent must be within [0, 100] (got {self.penalty_percent})")

    @classmethod
    def from_raw(cls, data: Mapping[str, Any]) -> "TransactionInput":
        """
        Builds an input from loosely typed caller data (form fields, JSON, CLI).

        Enum fields are parsed once here; an unknown value is InvalidInput.
        Numeric fields go through coerce_number, so malformed numbers count
        as 0 while absent ones stay absent for the required-field checks.
        Accepts `is_individual` in place of `payer_category`.
        """
        payer = data.get("payer_category")
        if payer is None and data.get("is_individual") is not None:
            payer = PayerCategory.INDIVIDUAL if _parse_flag(data["is_individual"]) else PayerCategory.INSTITUTION

        transaction_type = _parse_enum(TransactionType, data.get("transaction_type"), "transaction_type")
        if transaction_type is None:
            raise InvalidInput("transaction_type is required")
        instrument = _parse_enum(Instrument, data.get("instrument") or Instrument.EQUITY, "instrument",
                                 INSTRUMENT_ALIASES)

        amount = coerce_number(data.get("amount"))
        depository_charge = coerce_number(data.get("depository_charge"))
        units = coerce_number(data.get("units"))
        if units is not None and not units.is_integer():
            raise InvalidInput(f"units must be a whole number (got {data.get('units')!r})")

        return cls(
            transaction_type=transaction_type,
            instrument=instrument,
            amount=amount or 0.0,
            purchase_cost=coerce_number(data.get("purchase_cost")),
            payer_category=_parse_enum(PayerCategory, payer, "payer_category"),
            depository_charge=depository_charge or 0.0,
            units=int(units or 0),
            penalty_enabled=_parse_flag(data.get("penalty_enabled", False)),
            penalty_percent=coerce_number(data.get("penalty_percent")),
        )


@dataclass(frozen=True)
class FeeComponents:
    brokerage: float
    regulatory_fee: float
    depository_charge: float

    @property
    def component_sum(self) -> float:
        return self.brokerage + self.regulatory_fee + self.depository_charge


@dataclass(frozen=True)
class ChargeBreakdown:
    transaction_type: TransactionType
    applied_rate: float
    brokerage: float
    regulatory_fee: float
    depository_charge: float
    capital_gains_tax: float
    penalty: float
    total_deductions: float
    net_amount: float
    odd_lot_advisory: bool

    @property
    def is_negative_net(self) -> bool:
        return self.net_amount < 0

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["transaction_type"] = self.transaction_type.value
        result["is_negative_net"] = self.is_negative_net
        return result
