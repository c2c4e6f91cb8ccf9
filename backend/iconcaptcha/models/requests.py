"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SolveRequest(BaseModel):
    image: str = Field(..., description="Base64-encoded captcha image (data URL prefix allowed)")
