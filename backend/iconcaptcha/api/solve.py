"""POST /api/solve — locate the outlier icon in a captcha image."""

from __future__ import annotations

import asyncio
import logging
import time

from fastapi import APIRouter, Depends, Request

from iconcaptcha.dependencies import get_solver
from iconcaptcha.engine.context import PixelBuffer
from iconcaptcha.engine.errors import DecodeError, SolverError
from iconcaptcha.engine.pipeline import Solver
from iconcaptcha.models.requests import SolveRequest
from iconcaptcha.models.responses import SolveResponse
from iconcaptcha.utils.image_io import load_from_base64, load_from_bytes

logger = logging.getLogger(__name__)

router = APIRouter()


async def _solve(image: PixelBuffer, solver: Solver, start: float) -> SolveResponse:
    loop = asyncio.get_running_loop()
    try:
        # CPU-bound; keep the event loop free
        ctx = await loop.run_in_executor(None, solver.run, image)
    except SolverError as e:
        logger.warning("Solve failed: %s", e)
        return SolveResponse(success=False, message=str(e))

    elapsed = (time.perf_counter() - start) * 1000
    return SolveResponse(
        success=True,
        **ctx.outlier.to_dict(),
        match_counts=ctx.match_counts,
        processing_time_ms=round(elapsed, 1),
    )


@router.post("/solve", response_model=SolveResponse)
async def solve(req: SolveRequest, solver: Solver = Depends(get_solver)) -> SolveResponse:
    start = time.perf_counter()
    try:
        image = load_from_base64(req.image)
    except DecodeError as e:
        logger.warning("Rejected image: %s", e)
        return SolveResponse(success=False, message="invalid image")
    return await _solve(image, solver, start)


@router.post("/solve/raw", response_model=SolveResponse)
async def solve_raw(request: Request, solver: Solver = Depends(get_solver)) -> SolveResponse:
    start = time.perf_counter()
    try:
        image = load_from_bytes(await request.body())
    except DecodeError as e:
        logger.warning("Rejected image: %s", e)
        return SolveResponse(success=False, message="invalid image")
    return await _solve(image, solver, start)
