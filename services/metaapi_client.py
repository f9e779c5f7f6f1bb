"""
MetaApi cloud REST client.

Thin async wrapper over the handful of trading-account endpoints the gateway
needs: account information, open positions, position close, symbol quote and
order creation. One request per call, bearer auth on every call, no retries.

Docs:
- https://metaapi.cloud/docs/client/restApi/api/
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from settings import Settings

log = logging.getLogger("metaapi")


class UpstreamError(Exception):
    """A MetaApi call failed at the transport or HTTP level."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BaseTradingService:
    async def get_account_information(self) -> Dict[str, Any]:
        raise NotImplementedError

    async def get_positions(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    async def close_position(self, position_id: Union[str, int]) -> None:
        raise NotImplementedError

    async def get_symbol_quote(self, symbol: str) -> Dict[str, Any]:
        raise NotImplementedError

    async def create_order(self, order: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError


class MetaApiClient(BaseTradingService):
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    @property
    def _account_path(self) -> str:
        return f"/v1/trading/accounts/{self.settings.account_id}"

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.settings.meta_api_token}"}

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        headers = self._headers()
        if json is not None:
            headers["Content-Type"] = "application/json"
        try:
            async with httpx.AsyncClient(base_url=self.settings.base_url, transport=self._transport) as client:
                r = await client.request(method, path, json=json, headers=headers)
                r.raise_for_status()
                return r
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            log.warning("%s %s -> %s", method, path, status)
            raise UpstreamError(f"Request failed with status code {status}", status_code=status) from e
        except httpx.HTTPError as e:
            log.warning("%s %s -> %s", method, path, e)
            raise UpstreamError(str(e) or type(e).__name__) from e

    async def get_account_information(self) -> Dict[str, Any]:
        r = await self._request("GET", f"{self._account_path}/account")
        return r.json()

    async def get_positions(self) -> List[Dict[str, Any]]:
        r = await self._request("GET", f"{self._account_path}/positions")
        return r.json() or []

    async def close_position(self, position_id: Union[str, int]) -> None:
        await self._request("DELETE", f"{self._account_path}/positions/{position_id}")

    async def get_symbol_quote(self, symbol: str) -> Dict[str, Any]:
        r = await self._request("GET", f"/v1/market/symbols/{symbol}/quote")
        return r.json()

    async def create_order(self, order: Dict[str, Any]) -> Dict[str, Any]:
        r = await self._request("POST", f"{self._account_path}/orders", json=order)
        return r.json()
