# addrverify/entrypoints/api/routers/health.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from ....config import Settings
from ....schemas import HealthOut
from ..deps import get_settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health(settings: Settings = Depends(get_settings)) -> HealthOut:
    # never echo the key itself
    return HealthOut(
        status="ok",
        oracle_mode=settings.ORACLE_MODE,
        oracle_configured=settings.oracle_configured(),
    )
