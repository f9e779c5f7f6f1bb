from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends

from routers.deps import ApiError, get_settings, get_trading_service
from schemas.trading import BalanceResponse, ClosePositionRequest, MessageResponse, PositionsResponse
from services.metaapi_client import BaseTradingService
from settings import Settings


router = APIRouter(prefix="/api", tags=["account"])


@router.get("/balance", response_model=BalanceResponse)
async def balance(service: BaseTradingService = Depends(get_trading_service)):
    try:
        account = await service.get_account_information()
        return BalanceResponse(balance=account.get("balance"), equity=account.get("equity"))
    except Exception as e:
        raise ApiError(500, f"Balance check failed: {e}")


@router.get("/positions", response_model=PositionsResponse)
async def positions(
    symbol: Optional[str] = None,
    service: BaseTradingService = Depends(get_trading_service),
    settings: Settings = Depends(get_settings),
):
    try:
        rows = await service.get_positions()
        symbol_filter = symbol or settings.default_symbol
        return PositionsResponse(positions=[p for p in rows if p.get("symbol") == symbol_filter])
    except Exception as e:
        raise ApiError(500, f"Position fetch failed: {e}")


@router.post("/close-position", response_model=MessageResponse)
async def close_position(
    req: Optional[ClosePositionRequest] = Body(None),
    service: BaseTradingService = Depends(get_trading_service),
):
    position_id = req.position_id if req is not None else None
    if not position_id:
        raise ApiError(400, "Position ID required")
    try:
        await service.close_position(position_id)
        return MessageResponse(message="Position closed")
    except Exception as e:
        raise ApiError(500, f"Close position failed: {e}")
