from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict

RISK_PERCENT_LIMIT = 5  # max risk per trade, percent of balance
DEFAULT_PIP_VALUE = 10
PIP_SCALE = 0.01  # price units per pip, same for every instrument

# $ per pip per standard lot
PIP_VALUES: Dict[str, float] = {
    "XAUUSD": 1,
    "EURUSD": 10,
    "GBPUSD": 10,
    "USDJPY": 9.1,
}


class RiskLimitExceeded(ValueError):
    pass


class NonFiniteResult(ArithmeticError):
    pass


def round_price(value: float) -> float:
    """Round half-up to 2 decimals on the exact binary value of ``value``."""
    if not math.isfinite(value):
        raise NonFiniteResult(f"Calculation produced a non-finite value ({value})")
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def pip_value(symbol: str) -> float:
    return PIP_VALUES.get(symbol) or DEFAULT_PIP_VALUE


def calculate_lot_size(account_balance: float, risk_percent: float,
                       stop_loss_pips: float, symbol: str) -> float:
    if risk_percent > RISK_PERCENT_LIMIT:
        raise RiskLimitExceeded(f"Risk exceeds {RISK_PERCENT_LIMIT}% limit")
    risk_amount = account_balance * (risk_percent / 100)
    # zero distance raises ZeroDivisionError; callers filter it out
    lot_size = risk_amount / (stop_loss_pips * pip_value(symbol))
    return round_price(lot_size)


def calculate_stop_loss_price(direction: str, current_price: float, stop_loss_pips: float) -> float:
    pip_adjustment = stop_loss_pips * PIP_SCALE
    if direction == "BUY":
        return round_price(current_price - pip_adjustment)
    return round_price(current_price + pip_adjustment)
