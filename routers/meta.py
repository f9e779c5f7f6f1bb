from __future__ import annotations

from fastapi import APIRouter, Depends

from routers.deps import get_settings
from settings import Settings

router = APIRouter(tags=["meta"])


@router.get("/healthz")
def healthz(settings: Settings = Depends(get_settings)):
    # no upstream call; liveness only
    return {
        "success": True,
        "ok": True,
        "account_id": settings.account_id,
        "default_symbol": settings.default_symbol,
    }
