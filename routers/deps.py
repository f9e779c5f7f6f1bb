from __future__ import annotations

from fastapi import Request

from services.metaapi_client import BaseTradingService
from settings import Settings


class ApiError(Exception):
    """Rendered by the server as ``{"success": false, "message": ...}``."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_trading_service(request: Request) -> BaseTradingService:
    return request.app.state.trading_service
