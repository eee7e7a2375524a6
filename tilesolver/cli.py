# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Command Line Entry Point

Usage:
  Solve:
    tilesolver shuffle.jpg --rows 4 --cols 4 --wm 6 --hm 4 --beam 1200 \\
        --dump-map mapping.txt --out solved.png

  Rebuild from mapping:
    tilesolver shuffle.jpg --rows 4 --cols 4 --wm 6 --hm 4 \\
        --map mapping.txt --out solved.png

Unset options fall back to TILESOLVER_* environment variables, then to
built-in defaults. The default beam width is 1200 for grids of up to 16
tiles and 5000 above that.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from tilesolver.config import SolverConfig, get_settings
from tilesolver.core.errors import TileSolverError
from tilesolver.core.pipeline import run
from tilesolver.utils.logger import configure_logging, get_logger

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilesolver",
        description="Reassemble an image cut into a shuffled grid of tiles (no rotation).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("image", type=Path, help="Shuffled JPEG or PNG image")
    parser.add_argument("--rows", type=int, help="Grid rows")
    parser.add_argument("--cols", type=int, help="Grid columns")
    parser.add_argument("--wm", type=int, help="Width margin trimmed per cell (px)")
    parser.add_argument("--hm", type=int, help="Height margin trimmed per cell (px)")
    parser.add_argument("--beam", type=int, help="Beam width")
    parser.add_argument(
        "--cand", type=int,
        help="Keep only the N cheapest candidates per state before pruning",
    )
    parser.add_argument("--band", type=int, help="Border strip depth (px)")
    parser.add_argument("--step", type=int, help="Sampling stride along borders")
    parser.add_argument(
        "--max-tiles", type=int, help="Refuse grids with more tiles than this"
    )
    parser.add_argument("--map", type=Path, help="Rebuild from this mapping file")
    parser.add_argument("--dump-map", type=Path, help="Write the solved mapping here")
    parser.add_argument(
        "--out", type=Path, default=Path("solved.png"), help="Output PNG path"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log verbosity",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    try:
        config = SolverConfig.from_settings(
            settings,
            rows=args.rows,
            cols=args.cols,
            width_margin=args.wm,
            height_margin=args.hm,
            band=args.band,
            step=args.step,
            beam_width=args.beam,
            candidate_limit=args.cand,
            max_tiles=args.max_tiles,
        )
        run(
            args.image,
            config,
            out_path=args.out,
            mapping_path=args.map,
            dump_path=args.dump_map,
        )
    except (TileSolverError, ValueError) as exc:
        log.error("tilesolver_failed", error=str(exc), exc_type=type(exc).__name__)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"saved: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
