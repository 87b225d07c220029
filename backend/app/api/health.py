from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from fastapi.responses import JSONResponse

from app.core.settings import Settings
from app.core.settings import get_settings


router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(settings: Settings = Depends(get_settings)) -> JSONResponse:
    # Readiness: every lookup needs the Google Maps key.
    key = settings.google_maps_api_key
    if key is None or not key.get_secret_value().strip():
        return JSONResponse(status_code=503, content={"status": "not_ready"})
    return JSONResponse(status_code=200, content={"status": "ready"})
