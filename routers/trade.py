from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends

from routers.deps import ApiError, get_settings, get_trading_service
from schemas.trading import TradeRequest, TradeResponse
from services.metaapi_client import BaseTradingService
from services.trade_service import InvalidTradeRequest, TradeFailed, place_trade
from settings import Settings


router = APIRouter(prefix="/api", tags=["trade"])


@router.post("/trade", response_model=TradeResponse)
async def trade(
    req: Optional[TradeRequest] = Body(None),
    service: BaseTradingService = Depends(get_trading_service),
    settings: Settings = Depends(get_settings),
):
    try:
        result = await place_trade(req or TradeRequest(), service, settings)
    except InvalidTradeRequest as e:
        raise ApiError(400, str(e))
    except TradeFailed as e:
        raise ApiError(500, str(e))
    return TradeResponse(**result.model_dump())
