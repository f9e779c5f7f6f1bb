"""Shared fixtures: settings, an in-memory trading service and a test client."""

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from server import create_app
from services.metaapi_client import BaseTradingService, UpstreamError
from settings import Settings


class FakeTradingService(BaseTradingService):
    """Records every call; raises ``UpstreamError`` for calls named in ``fail``."""

    def __init__(
        self,
        balance: float = 10000.0,
        equity: float = 10250.0,
        quote: Optional[Dict[str, float]] = None,
        positions: Optional[List[Dict[str, Any]]] = None,
        fail: tuple = (),
    ):
        self.balance = balance
        self.equity = equity
        self.quote = quote or {"bid": 1949.80, "ask": 1950.00}
        self.positions = positions or []
        self.fail = set(fail)
        self.calls: List[tuple] = []
        self.orders: List[Dict[str, Any]] = []

    def _record(self, name: str, *args) -> None:
        self.calls.append((name,) + args)
        if name in self.fail:
            raise UpstreamError("Request failed with status code 503", status_code=503)

    async def get_account_information(self) -> Dict[str, Any]:
        self._record("get_account_information")
        return {"balance": self.balance, "equity": self.equity}

    async def get_positions(self) -> List[Dict[str, Any]]:
        self._record("get_positions")
        return list(self.positions)

    async def close_position(self, position_id) -> None:
        self._record("close_position", position_id)

    async def get_symbol_quote(self, symbol: str) -> Dict[str, Any]:
        self._record("get_symbol_quote", symbol)
        return dict(self.quote, symbol=symbol)

    async def create_order(self, order: Dict[str, Any]) -> Dict[str, Any]:
        self._record("create_order", order)
        self.orders.append(order)
        return {"id": "ord-1001"}

    @property
    def call_names(self) -> List[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def settings():
    return Settings(meta_api_token="test-token", account_id="acc-42", default_symbol="XAUUSD")


@pytest.fixture
def service():
    return FakeTradingService()


@pytest.fixture
def client(settings, service):
    return TestClient(create_app(settings, service))
