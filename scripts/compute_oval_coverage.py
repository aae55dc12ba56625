#!/usr/bin/env python3
"""Oval coverage oracle CLI for visual validation.

Computes the theoretical boundary pixels of one oval (inline bounding box) or
of every case of a suite file, and writes diagnostic outputs.

Usage:
    # Single oval, unbounded clip
    python scripts/compute_oval_coverage.py --x 0 --y 0 --x_span 11 --y_span 6

    # With a clip rectangle and per-sample tracing
    python scripts/compute_oval_coverage.py --x 0 --y 0 --x_span 11 --y_span 6 \
        --clip 0,0,6,6 --trace

    # Every case of a suite
    python scripts/compute_oval_coverage.py --suite configs/oracle_suite.v1.yaml \
        --output_dir outputs/oracle

Outputs (per case, under output_dir/<name>/):
    - pixels.yaml: sorted [x, y] list
    - grid.png: magnified grid, covered cells in green, center in red
    - metadata.yaml: box, clip, model, pixel count, hash, timing, suite file hash
The ASCII grid is printed to stdout.
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.coverage_oracle import grid_render
from src.coverage_oracle.ellipse_model import EllipseModel, is_degenerate
from src.coverage_oracle.footprint import is_8_connected
from src.coverage_oracle.geometry import ClipRect
from src.coverage_oracle.oracle import compute_oval_boundary_pixels
from src.utils import fs, hashing, logging_config, validators

logger = logging_config.get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Compute theoretical oval boundary pixels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument(
        '--suite',
        type=str,
        help='Path to an oval_oracle_suite.v1 YAML file'
    )
    input_group.add_argument(
        '--x_span',
        type=int,
        help='Bounding box width in pixels (inline mode)'
    )

    parser.add_argument('--x', type=int, default=0, help='Bounding box left column, default: 0')
    parser.add_argument('--y', type=int, default=0, help='Bounding box top row, default: 0')
    parser.add_argument('--y_span', type=int, help='Bounding box height in pixels (inline mode)')
    parser.add_argument(
        '--clip',
        type=parse_clip,
        default=None,
        help='Clip rectangle X,Y,W,H (inline mode), default: unbounded'
    )
    parser.add_argument(
        '--name',
        type=str,
        default='inline',
        help='Case name used for the output subdirectory, default: inline'
    )

    parser.add_argument(
        '--output_dir',
        type=str,
        default='outputs/oracle',
        help='Output directory, default: outputs/oracle'
    )
    parser.add_argument(
        '--cell_span',
        type=int,
        default=40,
        help='Grid cell size in image pixels, default: 40'
    )
    parser.add_argument(
        '--no_png',
        action='store_true',
        help='Skip grid PNG generation'
    )

    parser.add_argument(
        '--trace',
        action='store_true',
        help='Log per-sample diagnostics at DEBUG level'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)
    if args.x_span is not None and args.y_span is None:
        parser.error("--y_span is required with --x_span")
    return args


def parse_clip(text: str) -> ClipRect:
    """argparse type for 'X,Y,W,H' clip rectangles.

    Raises
    ------
    argparse.ArgumentTypeError
        If the text is not four integers or a span is negative
    """
    parts = text.split(',')
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(f"clip must be X,Y,W,H, got: {text!r}")
    try:
        x, y, w, h = (int(p) for p in parts)
        return ClipRect(x, y, w, h)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid clip {text!r}: {e}") from e


def inline_case(args) -> validators.OvalCaseV1:
    clip = args.clip
    return validators.OvalCaseV1(
        name=args.name,
        x=args.x,
        y=args.y,
        x_span=args.x_span,
        y_span=args.y_span,
        clip=None if clip is None else validators.RectV1(
            x=clip.x, y=clip.y, x_span=clip.x_span, y_span=clip.y_span
        ),
    )


def process_case(
    case: validators.OvalCaseV1,
    output_dir: Path,
    cell_span: int,
    write_png: bool,
    trace: bool,
    suite_sha256: Optional[str] = None
) -> int:
    """Run one case, write its outputs, print the ASCII grid; returns pixel count."""
    clip = None if case.clip is None else ClipRect(
        case.clip.x, case.clip.y, case.clip.x_span, case.clip.y_span
    )

    t0 = time.time()
    pixels = compute_oval_boundary_pixels(
        clip, case.x, case.y, case.x_span, case.y_span,
        trace=logger.debug if trace else None
    )
    elapsed = time.time() - t0

    case_dir = fs.ensure_dir(output_dir / case.name)
    sorted_pixels = sorted(pixels, key=lambda p: (p[1], p[0]))
    fs.atomic_yaml_dump(
        {'pixels': [[int(p[0]), int(p[1])] for p in sorted_pixels]},
        case_dir / "pixels.yaml"
    )

    metadata = {
        'name': case.name,
        'bbox': {'x': case.x, 'y': case.y, 'x_span': case.x_span, 'y_span': case.y_span},
        'clip': None if clip is None else {
            'x': clip.x, 'y': clip.y, 'x_span': clip.x_span, 'y_span': clip.y_span
        },
        'pixel_count': len(pixels),
        'connected': is_8_connected(pixels),
        'sha256': hashing.hash_pixel_set(pixels),
        'elapsed_s': round(elapsed, 6),
    }
    if suite_sha256 is not None:
        metadata['suite_sha256'] = suite_sha256

    center = None
    if not is_degenerate(case.x_span, case.y_span):
        model = EllipseModel.from_bbox(case.x, case.y, case.x_span, case.y_span)
        metadata['model'] = {'cx': model.cx, 'cy': model.cy, 'rx': model.rx, 'ry': model.ry}
        center = (model.cx, model.cy)

    fs.atomic_yaml_dump(metadata, case_dir / "metadata.yaml")

    if case.x_span > 0 and case.y_span > 0:
        bbox = ClipRect(case.x, case.y, case.x_span, case.y_span)
        if write_png:
            grid_render.save_grid_png(pixels, bbox, case_dir / "grid.png", cell_span, center)
        print(f"# {case.name} ({len(pixels)} pixels)")
        print(grid_render.format_ascii(pixels, bbox))

    logger.info(
        "Case %s: %d pixels in %.3f s → %s", case.name, len(pixels), elapsed, case_dir
    )
    return len(pixels)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    suite_sha256 = None
    if args.suite:
        suite = validators.load_oracle_suite(args.suite)
        cases = suite.cases
        log_kwargs = suite.logging.setup_kwargs()
        suite_sha256 = hashing.sha256_file(args.suite)
    else:
        cases = [inline_case(args)]
        log_kwargs = validators.LoggingV1().setup_kwargs()
    if args.verbose or args.trace:
        log_kwargs['log_level'] = "DEBUG"

    logging_config.setup_logging(**log_kwargs, context={"app": "oracle"})
    logging_config.install_excepthook()

    output_dir = fs.ensure_dir(args.output_dir)
    for case in cases:
        process_case(
            case, output_dir, args.cell_span, not args.no_png, args.trace, suite_sha256
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
