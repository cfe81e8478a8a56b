#!/usr/bin/env python3
"""
pencel.py
Pixelize images into a grid of pencil swatches picked from a two-tone palette.

Usage:
  python pencel.py INPUT [--palette FILE] --width W --height H --kernel bilinear
                   --metric [redmean|euclidean|lab|ciede2000] [--output PNG | --outdir DIR]
                   [--cell N] [--no-colour] [--usage] [--workers N] [--jobs N] [--debug]

Input:
  Any Pillow-readable image, or a folder of them. Alpha is dropped.

Output:
  The swatch grid printed with 24-bit ANSI colours. With --output (single file)
  or --outdir, also a PNG where each swatch is CELL x CELL pixels.

Notes:
  Palette files hold '<name> <heavy-hex> <light-hex>' per line.
  Without --palette the built-in palette from pencel_map.palette_data is used.
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from pencel_map.constants import (
    DEFAULT_CELL_PX,
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    DEFAULT_KERNEL,
    DEFAULT_METRIC,
    IMAGE_EXTENSIONS,
)
from pencel_map.core_types import PencilInfo
from pencel_map.errors import PencelError
from pencel_map.image_io import save_grid_png
from pencel_map.kernels import KernelType, kernel_from_name
from pencel_map.metrics import metric_names
from pencel_map.palette_data import build_palette, load_palette
from pencel_map.pipeline import PencilGrid, pencilize_file
from pencel_map.render import format_grid, format_palette_listing, swatch_usage_report
from pencel_map.utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

# CLI args


def _default_workers() -> int:
    """Leave a few cores free for the system; returns a sensible worker count."""
    n = os.cpu_count() or 4
    reserve = 1 if n <= 6 else 2 if n <= 12 else 3
    return max(1, n - reserve)


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        palette: optional Path to a palette file
        width, height: grid size
        kernel: kernel name
        metric: distance metric name
        output: optional PNG path (single file)
        outdir: optional folder for PNGs
        cell: PNG swatch size in pixels
        no_colour: plain glyphs instead of ANSI colours
        usage: print per-tone usage counts
        workers: internal threads for resampling and matching
        jobs: files processed in parallel (folder mode)
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="pencel",
        description="Pixelize image(s) into pencil swatches from a two-tone palette.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument("--palette", type=Path, default=None, help="Palette file")
    parser.add_argument("--width", type=int, default=DEFAULT_GRID_WIDTH, help="Grid width")
    parser.add_argument(
        "--height", type=int, default=DEFAULT_GRID_HEIGHT, help="Grid height"
    )
    parser.add_argument(
        "--kernel",
        choices=[k.value for k in KernelType if k is not KernelType.UNKNOWN],
        default=DEFAULT_KERNEL,
        help="Resampling kernel. Only bilinear is implemented.",
    )
    parser.add_argument(
        "--metric", choices=metric_names(), default=DEFAULT_METRIC, help="Colour metric"
    )
    parser.add_argument("--output", type=Path, default=None, help="PNG output (single file)")
    parser.add_argument("--outdir", type=Path, default=None, help="PNG output directory")
    parser.add_argument(
        "--cell", type=int, default=DEFAULT_CELL_PX, help="PNG swatch size in pixels"
    )
    parser.add_argument(
        "--no-colour", action="store_true", help="Plain HH/LL glyphs, no ANSI colours"
    )
    parser.add_argument("--usage", action="store_true", help="Print tone usage counts")
    parser.add_argument(
        "--workers", type=int, default=_default_workers(), help="Internal workers"
    )
    parser.add_argument("--jobs", type=int, default=1, help="Files processed in parallel")
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


# Per-file processing


def _pencilize_one(
    src_path: Path, palette: List[PencilInfo], args: argparse.Namespace
) -> Tuple[Optional[PencilGrid], Optional[PencelError], float]:
    """Decode -> resample -> match. Returns (grid, error, seconds); prints nothing."""
    t_start = time.perf_counter()
    try:
        grid = pencilize_file(
            src_path,
            palette,
            width=args.width,
            height=args.height,
            kernel=kernel_from_name(args.kernel),
            metric=args.metric,
            workers=args.workers,
        )
    except PencelError as e:
        return None, e, time.perf_counter() - t_start
    return grid, None, time.perf_counter() - t_start


def _report_single_image(
    src_path: Path,
    out_path: Optional[Path],
    palette: List[PencilInfo],
    args: argparse.Namespace,
    grid: PencilGrid,
    map_secs: float,
) -> None:
    """Print the grid, optional usage counts, and write the optional PNG."""
    for row in format_grid(
        grid.matches, grid.width, grid.height, palette, use_colour=not args.no_colour
    ):
        log(row)

    if args.usage:
        log("Tones used:")
        for name, tone, count in swatch_usage_report(grid.matches, palette):
            log(f"  {name} ({tone}): {count:,}")

    if out_path is not None:
        written = save_grid_png(
            out_path, grid.matches, grid.width, grid.height, palette, cell=args.cell
        )
        log(f"Wrote {written.name} | grid={grid.width}x{grid.height} | cell={args.cell}px")

    if args.debug:
        mean_dist = sum(m.distance for m in grid.matches) / len(grid.matches)
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Source", src_path.name),
                    ("Grid", f"{grid.width}x{grid.height}"),
                    ("Mean distance", float(mean_dist)),
                    ("Map", format_seconds_compact(map_secs)),
                ]
            )
        )


def _output_path_for(src_path: Path, args: argparse.Namespace) -> Optional[Path]:
    if args.outdir is not None:
        return args.outdir / f"{src_path.stem}_pencel.png"
    return args.output


def _load_palette(args: argparse.Namespace) -> List[PencilInfo]:
    if args.palette is None:
        return build_palette()
    return load_palette(args.palette)


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point. Returns the process exit status.

    Handles a single file or a folder. Folders honour --jobs for the mapping
    work; reports are printed afterwards in file name order.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    print_config_line(
        "run",
        [
            ("Grid", f"{args.width}x{args.height}"),
            ("Kernel", args.kernel),
            ("Metric", args.metric),
            ("Workers", args.workers),
        ],
        debug=False,
    )

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2

    try:
        palette = _load_palette(args)
    except PencelError as e:
        error(str(e))
        return 2

    if args.debug:
        debug_log("Importing palette:")
        for line in format_palette_listing(palette, use_colour=not args.no_colour):
            debug_log(f"  {line}")

    if args.outdir is not None:
        args.outdir.mkdir(parents=True, exist_ok=True)

    if src.is_dir():
        if args.output is not None:
            warn("--output applies to single files; use --outdir for folders")
            args.output = None
        files = sorted(
            (
                p
                for p in src.iterdir()
                if p.is_file()
                and p.suffix.lower() in IMAGE_EXTENSIONS
                and not p.stem.endswith("_pencel")
            ),
            key=lambda p: p.name.lower(),
        )
        if args.debug:
            debug_log(key_value_pairs_to_string([("Images", len(files)), ("Jobs", args.jobs)]))
    else:
        files = [src]

    if args.jobs > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            results = list(ex.map(lambda p: _pencilize_one(p, palette, args), files))
    else:
        results = [_pencilize_one(p, palette, args) for p in files]

    status = 0
    for path, (grid, err, secs) in zip(files, results):
        print_banner(path.name)
        if grid is None:
            error(str(err))
            status = 2
            continue
        try:
            _report_single_image(path, _output_path_for(path, args), palette, args, grid, secs)
        except PencelError as e:
            error(str(e))
            status = 2
    return status


if __name__ == "__main__":
    sys.exit(main())
