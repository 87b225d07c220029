from __future__ import annotations

from fastapi import APIRouter

from app.api.directions import router as directions_router
from app.api.encode import router as encode_router
from app.api.health import router as health_router
from app.api.routes import router as routes_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(encode_router)
api_router.include_router(routes_router)
api_router.include_router(directions_router)
