"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import sprite_splitter.config as ss_config
import sprite_splitter.main as ss_main
from sprite_splitter.errors import SpriteSplitterError
from sprite_splitter.grid_planner import ValidationFailure
from sprite_splitter.logging_utils import logger
from sprite_splitter.runtime import archive_output_path, resolve_project_version

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

EXIT_FAILURE = 1
EXIT_INVALID_GRID = 2

_PAIR_PARTS = 2


def _pair(text: str, separator: str = "x") -> tuple[int, int]:
    """Parse ``AxB`` into two positive integers."""
    parts = text.lower().split(separator)
    if len(parts) != _PAIR_PARTS:
        msg = "must look like AxB, e.g., 64x64"
        raise argparse.ArgumentTypeError(msg)
    try:
        first, second = int(parts[0]), int(parts[1])
    except ValueError as exc:
        msg = "both values must be integers"
        raise argparse.ArgumentTypeError(msg) from exc
    if first <= 0 or second <= 0:
        msg = "both values must be positive"
        raise argparse.ArgumentTypeError(msg)
    return first, second


def _hex_color(text: str) -> str:
    try:
        ss_config.parse_hex_color(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return text


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    prog = "sprite-splitter"
    p = argparse.ArgumentParser(
        prog=prog,
        description=(
            "Split a sprite sheet into equally sized frames and package "
            "them as numbered PNGs in a zip archive."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            f"  {prog} hero.png --frame-size 64x64\n"
            f"  {prog} hero.png --grid 2x3 --prefix walk --output out\n"
            f"  {prog} hero.png --grid 4x4 --preview grid.png --dry-run\n\n"
            "Note:\n"
            "  --grid takes ROWSxCOLS. The chosen grid must divide the "
            "image exactly."
        ),
    )
    p.add_argument(
        "image", nargs="?", type=str,
        help="Sprite sheet (PNG, JPEG, BMP, or WEBP)")
    p.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}")

    split = p.add_argument_group("split")
    mode = split.add_mutually_exclusive_group()
    mode.add_argument(
        "--frame-size", type=_pair, metavar="WxH",
        help="Split by frame size in pixels")
    mode.add_argument(
        "--grid", type=_pair, metavar="ROWSxCOLS",
        help="Split by row and column count")

    output = p.add_argument_group("output")
    output.add_argument(
        "--prefix", type=str,
        help="File name prefix (default: the image name without extension)")
    output.add_argument(
        "--output", type=str, help="Directory for the zip archive")
    output.add_argument(
        "--preview", type=Path, metavar="PATH",
        help="Also save the sheet with the grid drawn on it")
    output.add_argument(
        "--line-color", type=_hex_color, metavar="#RRGGBB[AA]",
        help="Preview grid line color")
    output.add_argument(
        "--dry-run", action="store_true",
        help="Plan and preview only; do not write the archive")
    output.add_argument(
        "--store", dest="compression", action="store_const",
        const="stored", help="Write the zip without compression")
    output.add_argument(
        "--strict", dest="on_encode_failure", action="store_const",
        const="abort",
        help="Abort if any frame fails to encode instead of skipping it")
    output.add_argument(
        "--no-progress", dest="progress", action="store_const",
        const=False, help="Hide the progress bar")
    output.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log every cropped frame")

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to config.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit without splitting")

    return p


def cli_overrides(args: argparse.Namespace) -> dict[str, object]:
    """Translate parsed arguments into config field overrides."""
    overrides: dict[str, object] = {
        "prefix": args.prefix,
        "output": args.output,
        "line_color": args.line_color,
        "compression": args.compression,
        "on_encode_failure": args.on_encode_failure,
        "progress": args.progress,
    }
    if args.frame_size is not None:
        overrides["mode"] = "size"
        overrides["frame_width"], overrides["frame_height"] = args.frame_size
    if args.grid is not None:
        overrides["mode"] = "count"
        overrides["rows"], overrides["cols"] = args.grid
    return overrides


def log_parameters(
    image_path: str,
    cfg: ss_config.SpriteSplitterConfig,
    args: argparse.Namespace,
) -> None:
    """Log all user-provided parameters."""
    logger.info("Sprite sheet: %s", image_path)
    if getattr(args, "config", None):
        logger.info("Loaded config from: %s", args.config)
    logger.info("Split Mode: %s", cfg.split.mode)
    if cfg.split.mode == "size":
        logger.info("Frame Size: %sx%s",
                    cfg.split.frame_width, cfg.split.frame_height)
    else:
        logger.info("Rows x Cols: %sx%s", cfg.split.rows, cfg.split.cols)
    logger.info("Prefix: %s", cfg.naming.prefix or "(image name)")
    logger.info("Output Directory: %s", cfg.export.output)
    logger.info("On Encode Failure: %s", cfg.export.on_encode_failure)
    logger.info("Compression: %s", cfg.export.compression)


def run_from_args(args: argparse.Namespace) -> int:
    """Run a split from parsed arguments and return the exit status."""
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    base_cfg: ss_config.SpriteSplitterConfig | None = None
    if args.config:
        base_cfg = ss_config.ConfigLoader.load(args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            return 0

    cfg = ss_config.build_config_from_cli(
        cli_overrides(args), base_config=base_cfg,
    )
    log_parameters(args.image, cfg, args)

    try:
        report = ss_main.split_sheet(
            args.image,
            cfg,
            preview_path=args.preview,
            dry_run=args.dry_run,
        )
    except (SpriteSplitterError, OSError, ValueError) as exc:
        logger.error("%s", exc)
        return EXIT_FAILURE

    if isinstance(report.plan, ValidationFailure):
        logger.error("Grid does not tile the image exactly; nothing exported.")
        return EXIT_INVALID_GRID

    if args.dry_run:
        prefix = cfg.naming.prefix or Path(args.image).stem
        logger.info(
            "Dry run: would write %d frames to %s",
            report.plan.total_frames,
            archive_output_path(Path(cfg.export.output), prefix),
        )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    if not args.validate_config_only and not args.image:
        arg_parser.error("the following arguments are required: image")
    if args.validate_config_only and not args.config:
        arg_parser.error("--validate-config-only requires --config")

    return run_from_args(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
