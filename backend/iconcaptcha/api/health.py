"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from iconcaptcha.config import Settings
from iconcaptcha.dependencies import get_settings
from iconcaptcha.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(s: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        crop_height=s.crop_height,
        workers=s.workers,
    )
