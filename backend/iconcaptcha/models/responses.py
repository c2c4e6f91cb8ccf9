"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    crop_height: int = 50
    workers: int = 0


class SolveResponse(BaseModel):
    success: bool
    message: str = ""
    position: int | None = None
    start: int | None = None
    end: int | None = None
    center_x: int | None = None
    center_y: int | None = None
    match_counts: list[int] = Field(default_factory=list)
    processing_time_ms: float = 0.0
