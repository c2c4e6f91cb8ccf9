"""Solver error kinds raised by the loader and engine."""

from __future__ import annotations


class SolverError(ValueError):
    """Base class for all solver failures."""


class DecodeError(SolverError):
    """Input could not be turned into an RGBA pixel buffer (bad base64, corrupt container)."""


class EmptySilhouetteError(SolverError):
    """A span's crop region holds no pixel with non-zero alpha."""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(f"No opaque pixel in columns [{start}, {end})")


class MalformedCaptchaError(SolverError):
    """Segmentation produced too few icons to pick an outlier from."""
