from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routers.account import router as account_router
from routers.deps import ApiError
from routers.meta import router as meta_router
from routers.trade import router as trade_router
from services.metaapi_client import BaseTradingService, MetaApiClient
from settings import Settings, SettingsError

log = logging.getLogger("server")


def _error(status_code: int, message: str) -> JSONResponse:
    if status_code < 500:
        log.warning("Client Error: %s", message)
    else:
        log.error("Server Error: %s", message)
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()) if x != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return _error(400, "Invalid request: " + "; ".join(parts))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error(500, str(exc) or "Internal server error")


def create_app(settings: Optional[Settings] = None, trading_service: Optional[BaseTradingService] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="Trade Gateway API", version="1.0")
    app.state.settings = settings
    app.state.trading_service = trading_service or MetaApiClient(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # dev convenience; narrow in prod
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(meta_router)
    app.include_router(account_router)
    app.include_router(trade_router)
    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
    load_dotenv()
    try:
        settings = Settings.from_env()
    except SettingsError as e:
        log.critical("%s", e)
        sys.exit(1)
    app = create_app(settings)
    log.info("Server running on port %s", settings.port)
    log.info("Trading symbol: %s", settings.default_symbol)
    uvicorn.run(app, host=settings.host, port=settings.port, reload=False)


if __name__ == "__main__":
    main()
