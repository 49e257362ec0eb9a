import sys
import json
import math
import argparse
import logging
from typing import List, Optional

from config.settings import config
from config.logger import setup_logger
from core.engine import ChargesEngine
from core.models import ChargeBreakdown, InvalidInput, TransactionInput, TransactionType

logger = logging.getLogger(__name__)


def format_amount(value: float) -> str:
    """Two decimals with thousands separators; non-finite values show as 0.00."""
    if value is None or not math.isfinite(value):
        return "0.00"
    return f"{value:,.2f}"


def render(breakdown: ChargeBreakdown, min_lot_size: int = 10) -> str:
    is_sell = breakdown.transaction_type == TransactionType.SELL
    rows = [
        ("Brokerage Rate", f"{breakdown.applied_rate * 100:.3f}%"),
        ("Brokerage", format_amount(breakdown.brokerage)),
        ("Regulatory Fee", format_amount(breakdown.regulatory_fee)),
        ("DP Charge", format_amount(breakdown.depository_charge)),
    ]
    if is_sell:
        rows.append(("Capital Gains Tax", format_amount(breakdown.capital_gains_tax)))
    if is_sell and breakdown.penalty:
        rows.append(("Penalty", format_amount(breakdown.penalty)))
    rows.append(("Total Deductions" if is_sell else "Total Add-on Costs", format_amount(breakdown.total_deductions)))
    rows.append(("Net Receivable" if is_sell else "Total Payable", format_amount(breakdown.net_amount)))

    width = max(len(label) for label, _ in rows)
    lines = [f"{label.ljust(width)} : {value}" for label, value in rows]

    if breakdown.is_negative_net:
        lines.append("WARNING: charges exceed the transaction amount.")
    if breakdown.odd_lot_advisory:
        lines.append(f"WARNING: odd lot detected, trade in lots of {min_lot_size} units or more.")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    # Defaults reproduce a 40,000 equity sell
    parser = argparse.ArgumentParser(description="Brokerage, fee, DP charge and capital gains tax calculator")
    parser.add_argument("--type", dest="transaction_type", choices=["buy", "sell"], default="sell")
    parser.add_argument("--instrument", default="equity", help="equity, government_bond (gov_bond) or other")
    parser.add_argument("--amount", default="40000", help="Total transaction amount")
    parser.add_argument("--purchase-cost", default="30000", help="Original purchase cost (sell only)")
    parser.add_argument("--payer", dest="payer_category", choices=["individual", "institution"], default="individual")
    parser.add_argument("--dp-charge", dest="depository_charge", default=str(config.DEFAULT_DEPOSITORY_CHARGE))
    parser.add_argument("--units", default="10", help="Units traded (odd-lot warning)")
    parser.add_argument("--penalty", dest="penalty_enabled", action="store_true", help="Apply the sell penalty")
    parser.add_argument("--penalty-percent", default=str(config.DEFAULT_PENALTY_PERCENT))
    parser.add_argument("--json", dest="as_json", action="store_true", help="Print the breakdown as JSON")
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level=args.log_level)

    raw = vars(args).copy()
    as_json = raw.pop("as_json")
    raw.pop("log_level")

    engine = ChargesEngine()
    try:
        txn = TransactionInput.from_raw(raw)
        breakdown = engine.compute(txn)
    except InvalidInput as e:
        logger.debug(f"Rejected input: {raw}")
        print(f"error: {e}", file=sys.stderr)
        return 2

    if as_json:
        print(json.dumps(breakdown.to_dict(), indent=2))
    else:
        print(render(breakdown, engine.min_lot_size))
    return 0


if __name__ == "__main__":
    sys.exit(main())
