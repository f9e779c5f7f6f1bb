from __future__ import annotations

import logging
import random
from decimal import Decimal
from typing import Optional

from engine.risk import calculate_lot_size, calculate_stop_loss_price, round_price
from schemas.trading import OrderPayload, TradeRequest, TradeResult
from services.metaapi_client import BaseTradingService
from settings import Settings

log = logging.getLogger("trade")

DIRECTIONS = ("BUY", "SELL")
ORDER_TYPES = {"BUY": "ORDER_TYPE_BUY", "SELL": "ORDER_TYPE_SELL"}


class InvalidTradeRequest(ValueError):
    pass


class InvalidDirection(InvalidTradeRequest):
    pass


class MissingSizingInput(InvalidTradeRequest):
    pass


class TradeFailed(Exception):
    pass


def validate_trade_request(req: TradeRequest) -> None:
    if req.direction not in DIRECTIONS:
        raise InvalidDirection("Invalid direction (use BUY/SELL)")
    # zero counts as absent
    if not req.lot_size and not (req.risk_percent and req.stop_loss_pips):
        raise MissingSizingInput("Provide either lotSize or riskPercent+stopLossPips")


def _fmt_number(value: float) -> str:
    # shortest round-trip digits, never exponent notation
    return format(Decimal(repr(float(value))).normalize(), "f")


def build_comment(risk_percent: Optional[float], dynamic_sizing: bool) -> str:
    if dynamic_sizing and risk_percent:
        return f"Risk: {_fmt_number(risk_percent)}%"
    return "Risk: Fixed%"


def new_magic() -> int:
    return random.randint(0, 999999)


async def place_trade(req: TradeRequest, service: BaseTradingService, settings: Settings) -> TradeResult:
    """Validate, size, price and submit one market order.

    Raises ``InvalidTradeRequest`` before any remote call, or ``TradeFailed``
    (chained to the cause) when a remote call or a calculation fails. Steps run
    strictly in order and stop at the first failure, so no order is created
    unless every earlier step succeeded.
    """
    validate_trade_request(req)
    direction = req.direction
    symbol = req.symbol or settings.default_symbol
    dynamic_sizing = not req.lot_size

    try:
        if dynamic_sizing:
            account = await service.get_account_information()
            lot_size = calculate_lot_size(account["balance"], req.risk_percent, req.stop_loss_pips, symbol)
        else:
            lot_size = round_price(req.lot_size)

        stop_loss = None
        if req.stop_loss_pips:
            quote = await service.get_symbol_quote(symbol)
            price = quote["ask"] if direction == "BUY" else quote["bid"]
            stop_loss = calculate_stop_loss_price(direction, price, req.stop_loss_pips)

        order = OrderPayload(
            symbol=symbol,
            volume=lot_size,
            type=ORDER_TYPES[direction],
            stop_loss=stop_loss,
            magic=new_magic(),
            comment=build_comment(req.risk_percent, dynamic_sizing),
        )
        log.info("Submitting order %s", order.to_wire())
        result = await service.create_order(order.to_wire())
    except Exception as e:
        raise TradeFailed(f"Trade failed: {e}") from e

    return TradeResult(
        order_id=result.get("id") if isinstance(result, dict) else None,
        symbol=symbol,
        direction=direction,
        lot_size=lot_size,
        stop_loss=stop_loss,
    )
