#!/usr/bin/env python3
"""
Command-line processing of calibration map tables.

Loads a CSV or Excel table, optionally fills blank cells and smooths the
values, then writes the result and/or prints per-cell gradient colors.

Usage:
    calmap INPUT [-o OUTPUT] [--fill-blanks] [--smooth METHOD]
                 [--window N] [--sigma S] [--with-headings MODE]
                 [--skip-headings] [--colors [SCHEME]] [--config PATH]

Options:
    --fill-blanks     Fill blank cells before any smoothing
    --smooth          moving-average, gaussian or bilinear
    --window          Moving-average window size (default from config)
    --sigma           Gaussian sigma (default from config)
    --with-headings   row, column or both
    --skip-headings   Leave heading cells out of all processing
    --colors          Print background/text colors (optionally naming a scheme)
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .coloring import ColorScheme, compute_grid_colors, get_color_scheme
from .data_input import Mask, coerce_sigma, coerce_window_size, load_table, save_table
from .exceptions import CalmapError
from .smoothing import SmoothingMethod, SmoothingRequest, auto_fill_blanks, smooth_grid
from .utils.config import AppConfig, load_config
from .utils.logging_config import log_execution_time, setup_logging

logger = logging.getLogger(__name__)

SMOOTHING_CHOICES = {
    "moving-average": SmoothingMethod.MOVING_AVERAGE,
    "gaussian": SmoothingMethod.GAUSSIAN,
    "bilinear": SmoothingMethod.BILINEAR,
}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="calmap",
        description="Smooth, fill and color calibration map tables.",
    )
    parser.add_argument("input", help="Input table (.csv, .xlsx, .xls)")
    parser.add_argument("-o", "--output", help="Output table (.csv, .xlsx)")
    parser.add_argument(
        "--fill-blanks",
        action="store_true",
        help="Fill blank cells from their nearest numeric neighbors",
    )
    parser.add_argument(
        "--smooth",
        choices=sorted(SMOOTHING_CHOICES),
        help="Smoothing method to apply",
    )
    parser.add_argument("--window", help="Moving-average window size")
    parser.add_argument("--sigma", help="Gaussian sigma")
    parser.add_argument(
        "--with-headings",
        choices=["row", "column", "both"],
        help="Which heading the table has",
    )
    parser.add_argument(
        "--skip-headings",
        action="store_true",
        default=None,
        help="Exclude heading cells from processing",
    )
    parser.add_argument(
        "--colors",
        nargs="?",
        const=True,
        metavar="SCHEME",
        help="Print cell colors (scheme from config when omitted)",
    )
    parser.add_argument("--config", help="Path to YAML configuration file")
    return parser


def _smoothing_request(args: argparse.Namespace, config: AppConfig, mask: Mask) -> SmoothingRequest:
    """Build the smoothing request from arguments and configuration."""
    method = SMOOTHING_CHOICES[args.smooth]
    parameter = None
    if method is SmoothingMethod.MOVING_AVERAGE:
        parameter = coerce_window_size(args.window, default=config.window_size)
    elif method is SmoothingMethod.GAUSSIAN:
        parameter = coerce_sigma(args.sigma, default=config.sigma)
    return SmoothingRequest(method=method, parameter=parameter, mask=mask)


def _print_colors(grid: List[List[str]], mask: Mask, scheme: ColorScheme) -> None:
    """Print one line per colored cell: row, column, value, background, text."""
    colors = compute_grid_colors(grid, mask, scheme)
    for i, row in enumerate(colors):
        for j, cell_colors in enumerate(row):
            if cell_colors is None:
                continue
            print(
                f"{i}\t{j}\t{grid[i][j]}\t"
                f"{cell_colors.background_hex}\t{cell_colors.text}"
            )


@log_execution_time(logger)
def process_table(args: argparse.Namespace, config: AppConfig) -> List[List[str]]:
    """
    Run the requested operations on a table file.

    Args:
        args: Parsed command-line arguments
        config: Application configuration supplying defaults

    Returns:
        Processed grid
    """
    with_headings = args.with_headings or config.with_headings
    skip_headings = config.skip_headings if args.skip_headings is None else args.skip_headings
    mask = Mask.from_headings(with_headings, skip_headings)
    scheme = None
    if args.colors:
        scheme = get_color_scheme(config.color_scheme if args.colors is True else args.colors)

    grid = load_table(args.input)
    logger.info(f"Loaded {args.input} ({len(grid)} rows)")

    if args.fill_blanks:
        grid = auto_fill_blanks(grid, mask)

    if args.smooth:
        request = _smoothing_request(args, config, mask)
        logger.info(f"Applying {request.method.value} smoothing")
        grid = smooth_grid(grid, request)

    if args.output:
        save_table(grid, args.output)
        logger.info(f"Wrote {args.output}")

    if scheme is not None:
        _print_colors(grid, mask, scheme)

    return grid


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Command-line entry point.

    Args:
        argv: Arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    setup_logging(
        log_level=config.logging.level,
        log_file=config.logging.file,
        log_format=config.logging.format,
    )

    try:
        process_table(args, config)
    except (CalmapError, OSError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
