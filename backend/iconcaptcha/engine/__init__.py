"""IconCaptcha solving engine."""

from iconcaptcha.engine.config import SolverConfig
from iconcaptcha.engine.context import IconResult, Silhouette, SolveContext, Span
from iconcaptcha.engine.errors import (
    DecodeError,
    EmptySilhouetteError,
    MalformedCaptchaError,
    SolverError,
)
from iconcaptcha.engine.pipeline import Solver, create_solver

__all__ = [
    "SolverConfig",
    "IconResult",
    "Silhouette",
    "SolveContext",
    "Span",
    "DecodeError",
    "EmptySilhouetteError",
    "MalformedCaptchaError",
    "SolverError",
    "Solver",
    "create_solver",
]
