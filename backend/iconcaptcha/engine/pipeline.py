"""Solver orchestrator — runs segmentation, extraction, scoring and selection in order."""

from __future__ import annotations

import logging
import time

from iconcaptcha.engine.config import SolverConfig
from iconcaptcha.engine.context import IconResult, PixelBuffer, Silhouette, SolveContext, Span
from iconcaptcha.engine.errors import MalformedCaptchaError, SolverError
from iconcaptcha.engine.parallel import MapStrategy, make_map_strategy
from iconcaptcha.engine.segmenter import find_spans, to_icons
from iconcaptcha.engine.selector import count_matches, select_outlier
from iconcaptcha.engine.silhouette import extract_silhouette

logger = logging.getLogger(__name__)


class Solver:
    """Finds the icon without a rotated/mirrored twin in a captcha strip."""

    def __init__(
        self,
        config: SolverConfig | None = None,
        map_fn: MapStrategy | None = None,
    ) -> None:
        self.config = config or SolverConfig()
        self.map_fn = map_fn or make_map_strategy(self.config.workers)

    def run(self, image: PixelBuffer) -> SolveContext:
        """Run every stage on ``image`` and return the populated context.

        Raises:
            MalformedCaptchaError: fewer than ``config.min_icons`` spans.
            EmptySilhouetteError: a span has no opaque pixel in its crop.
        """
        start = time.perf_counter()
        ctx = SolveContext(image=image)

        with self._stage(ctx, "segment"):
            ctx.spans = find_spans(image, self.config.delimiter_colors)
            ctx.icons = to_icons(ctx.spans, ctx.height)

        if ctx.num_icons < self.config.min_icons:
            raise MalformedCaptchaError(
                f"Found {ctx.num_icons} icon(s) in a {ctx.width}x{ctx.height} image; "
                f"need at least {self.config.min_icons}"
            )

        with self._stage(ctx, "extract"):
            ctx.silhouettes = self._extract_all(image, ctx.spans)

        with self._stage(ctx, "match"):
            ctx.match_counts = count_matches(
                ctx.silhouettes,
                strict=self.config.strict_dimensions,
                map_fn=self.map_fn,
            )

        ctx.outlier = select_outlier(ctx.icons, ctx.match_counts)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Solved: %d icons, counts=%s, outlier=#%d in %.1fms",
            ctx.num_icons,
            ctx.match_counts,
            ctx.outlier.position,
            total,
        )
        return ctx

    def solve(self, image: PixelBuffer) -> IconResult:
        ctx = self.run(image)
        if ctx.outlier is None:
            raise SolverError("No outlier selected")
        return ctx.outlier

    def _extract_all(self, image: PixelBuffer, spans: list[Span]) -> list[Silhouette]:
        crop_height = self.config.crop_height
        return self.map_fn(lambda span: extract_silhouette(image, span, crop_height), spans)

    def _stage(self, ctx: SolveContext, name: str) -> "_StageTimer":
        return _StageTimer(ctx, name)


class _StageTimer:
    def __init__(self, ctx: SolveContext, name: str) -> None:
        self.ctx = ctx
        self.name = name
        self.t0 = 0.0

    def __enter__(self) -> "_StageTimer":
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        elapsed = (time.perf_counter() - self.t0) * 1000
        self.ctx.timings[self.name] = round(elapsed, 3)
        if exc is None:
            logger.debug("  %s completed in %.1fms", self.name, elapsed)
        else:
            logger.debug("  %s FAILED after %.1fms: %s", self.name, elapsed, exc)


def create_solver(config: SolverConfig | None = None) -> Solver:
    """Factory function for creating a solver instance."""
    return Solver(config=config)
