"""FastAPI dependency injection."""

from __future__ import annotations

from iconcaptcha.config import Settings, settings
from iconcaptcha.engine.config import SolverConfig
from iconcaptcha.engine.pipeline import Solver, create_solver


def get_settings() -> Settings:
    return settings


def solver_config_from_settings(s: Settings) -> SolverConfig:
    return SolverConfig(
        crop_height=s.crop_height,
        strict_dimensions=s.strict_dimensions,
        min_icons=s.min_icons,
        workers=s.workers,
    )


def get_solver() -> Solver:
    return create_solver(solver_config_from_settings(get_settings()))
