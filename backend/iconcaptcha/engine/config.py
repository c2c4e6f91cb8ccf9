"""Solver configuration -- knobs tied to the captcha image format."""

from __future__ import annotations

from dataclasses import dataclass

# Row-0 colors that mark a column as an icon delimiter
DELIMITER_GRAY = (64, 64, 64)
DELIMITER_LIGHT = (240, 240, 240)


@dataclass
class SolverConfig:
    """Controls segmentation, extraction and matching."""

    # Fixed row-height of the icon artwork; crops are [0, crop_height)
    crop_height: int = 50

    # RGB values (alpha ignored) that identify a delimiter column
    delimiter_colors: tuple[tuple[int, int, int], ...] = (DELIMITER_GRAY, DELIMITER_LIGHT)

    # False: compare alpha streams truncated to the shorter silhouette.
    # True: silhouettes with different shapes never match.
    strict_dimensions: bool = False

    # Fewer spans than this is a malformed captcha (0 or 1 delimiter column)
    min_icons: int = 3

    # Worker threads for extraction and match counting; 0 or 1 = sequential
    workers: int = 0
