from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TradeRequest(_CamelModel):
    direction: Optional[str] = None  # BUY/SELL, checked by the trade service
    symbol: Optional[str] = None
    lot_size: Optional[float] = Field(default=None, alias="lotSize")
    risk_percent: Optional[float] = Field(default=None, alias="riskPercent")
    stop_loss_pips: Optional[float] = Field(default=None, alias="stopLossPips")


class ClosePositionRequest(_CamelModel):
    position_id: Optional[Union[str, int]] = Field(default=None, alias="positionId")


class OrderPayload(_CamelModel):
    symbol: str
    volume: float
    type: str
    stop_loss: Optional[float] = Field(default=None, alias="stopLoss")
    magic: int
    comment: str

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TradeResult(_CamelModel):
    order_id: Optional[Any] = Field(default=None, alias="orderId")
    symbol: str
    direction: str
    lot_size: float = Field(alias="lotSize")
    stop_loss: Optional[float] = Field(default=None, alias="stopLoss")


class BalanceResponse(BaseModel):
    success: bool = True
    balance: Optional[float] = None
    equity: Optional[float] = None


class PositionsResponse(BaseModel):
    success: bool = True
    positions: List[Dict[str, Any]] = Field(default_factory=list)


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class TradeResponse(TradeResult):
    success: bool = True
    message: str = "Trade executed"
