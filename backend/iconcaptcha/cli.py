"""Command-line entry point.

    iconcaptcha --img=<base64>      prints "x: <center_x>, y: <center_y>"
    iconcaptcha --file captcha.png  same, reading the image from disk
    iconcaptcha --dir captchas/     one "Icon { ... }" line per .png, in file-name order

Exit status: 0 on success, 1 when an image cannot be decoded or solved,
2 for bad arguments.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from iconcaptcha.config import settings
from iconcaptcha.dependencies import solver_config_from_settings
from iconcaptcha.engine.errors import SolverError
from iconcaptcha.engine.pipeline import Solver
from iconcaptcha.utils.image_io import load_from_base64, load_image, save_image

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iconcaptcha",
        description="Find the icon without a rotated or mirrored twin in an IconCaptcha image",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--img", help="Base64-encoded captcha image")
    source.add_argument("--file", type=Path, help="Captcha image file")
    source.add_argument("--dir", type=Path, help="Folder of .png captchas to solve in name order")
    parser.add_argument("--save", type=Path, help="Also write the decoded captcha to this path")
    parser.add_argument("--workers", type=int, help="Worker threads (0 or 1 = sequential)")
    parser.add_argument("--crop-height", type=int, help="Icon artwork row height in pixels")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Silhouettes of different sizes never match",
    )
    parser.add_argument("--log-level", default="warning", help="Logging level (default: warning)")
    return parser


def _make_solver(args: argparse.Namespace) -> Solver:
    config = solver_config_from_settings(settings)
    if args.workers is not None:
        config = replace(config, workers=args.workers)
    if args.crop_height is not None:
        config = replace(config, crop_height=args.crop_height)
    if args.strict:
        config = replace(config, strict_dimensions=True)
    return Solver(config=config)


def _solve_dir(folder: Path, solver: Solver) -> int:
    if not folder.is_dir():
        logger.warning("Not a directory: %s", folder)
        print(f"error: not a directory: {folder}", file=sys.stderr)
        return 1
    paths = sorted(p for p in folder.iterdir() if p.suffix.lower() == ".png")
    if not paths:
        logger.warning("No .png files in %s", folder)
        print(f"error: no .png files in {folder}", file=sys.stderr)
        return 1

    failed = 0
    for path in paths:
        try:
            icon = solver.solve(load_image(path))
        except SolverError as e:
            failed += 1
            logger.warning("Failed to solve %s: %s", path, e)
            print(f"error: {path.name}: {e}", file=sys.stderr)
            continue
        print(f"{path.name}: {icon}")

    logger.info("Solved %d/%d captchas in %s", len(paths) - failed, len(paths), folder)
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    solver = _make_solver(args)

    if args.dir is not None:
        return _solve_dir(args.dir, solver)

    try:
        image = load_image(args.file) if args.file is not None else load_from_base64(args.img)
        if args.save is not None:
            save_image(image, args.save)
        icon = solver.solve(image)
    except (SolverError, ValueError, OSError) as e:
        logger.warning("Failed to solve captcha: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"x: {icon.center_x}, y: {icon.center_y}")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
