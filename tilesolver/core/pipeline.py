# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Pipeline Orchestrator
Wires all modules in dependency order and logs each stage.

Solve flow:
  1. Validation  — decode and check the input image
  2. Extraction  — grid geometry + tile cutting
  3. Capacity    — fail fast before any O(N²) work
  4. Scoring     — right/down cost tables
  5. Search      — beam search over permutations

Rebuild flow (known mapping):
  1. Validation
  2. Extraction
  3. Mapping     — read and validate the mapping file

Either result is then rendered, and a solved mapping optionally
dumped after the image is saved. Every failure propagates to the
caller; nothing is left on disk for a failed run.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import structlog

from tilesolver.config import SolverConfig
from tilesolver.core.errors import OutputWriteError
from tilesolver.models.assignment import Assignment, CostTable
from tilesolver.models.tile import TileSet
from tilesolver.modules.extraction import GridGeometry, compute_grid_geometry, cut_tiles
from tilesolver.modules.mapping import read_mapping_file, write_mapping_file
from tilesolver.modules.preprocessing import validate_image_file
from tilesolver.modules.rendering import render_assignment, save_render
from tilesolver.modules.scoring import compute_cost_tables
from tilesolver.modules.search import assignment_cost, check_capacity, solve
from tilesolver.utils.logger import get_logger

log = get_logger(__name__)


@dataclass
class SolveResult:
    """Everything a caller needs after a solve or rebuild."""
    geometry: GridGeometry
    tiles: TileSet
    assignment: Assignment
    cost_table: CostTable | None = None


def _load_tiles(image_path: Path, config: SolverConfig) -> tuple[GridGeometry, TileSet]:
    log.info("stage_start", stage="validation")
    image = validate_image_file(
        image_path, label="shuffled image", grid_shape=config.grid_shape
    )
    log.info("stage_complete", stage="validation", shape=image.shape)

    log.info("stage_start", stage="extraction")
    geometry = compute_grid_geometry(
        image.shape,
        config.rows,
        config.cols,
        config.width_margin,
        config.height_margin,
    )
    tiles = cut_tiles(image, geometry)
    log.info("stage_complete", stage="extraction", n_tiles=tiles.n)
    return geometry, tiles


def solve_tiles(tiles: TileSet, config: SolverConfig) -> tuple[CostTable, Assignment]:
    """Score and search an already extracted tile set."""
    check_capacity(tiles.n, config.search)

    log.info("stage_start", stage="scoring")
    cost_table = compute_cost_tables(tiles, config.scoring)
    log.info("stage_complete", stage="scoring")

    log.info("stage_start", stage="search")
    assignment = solve(cost_table, tiles.n, config.cols, config.search)
    log.info("stage_complete", stage="search", cost=assignment.cost)
    return cost_table, assignment


def solve_image(image_path: Path, config: SolverConfig) -> SolveResult:
    """
    Cut the shuffled image into tiles and search for the best arrangement.

    Raises:
        ImageValidationError, DegenerateGeometryError, CapacityExceededError
    """
    check_capacity(config.n_tiles, config.search)
    geometry, tiles = _load_tiles(Path(image_path), config)
    cost_table, assignment = solve_tiles(tiles, config)
    return SolveResult(
        geometry=geometry,
        tiles=tiles,
        assignment=assignment,
        cost_table=cost_table,
    )


def rebuild_from_mapping(
    image_path: Path,
    mapping_path: Path,
    config: SolverConfig,
    score: bool = False,
) -> SolveResult:
    """
    Cut the shuffled image and apply a known mapping instead of searching.
    With score=True the mapping's border cost is computed and reported.

    Raises:
        ImageValidationError, DegenerateGeometryError, InvalidMappingError
    """
    geometry, tiles = _load_tiles(Path(image_path), config)

    log.info("stage_start", stage="mapping")
    permutation = read_mapping_file(Path(mapping_path), tiles.n)
    log.info("stage_complete", stage="mapping")

    cost_table = None
    cost = None
    if score:
        cost_table = compute_cost_tables(tiles, config.scoring)
        cost = assignment_cost(cost_table, permutation, config.cols)

    assignment = Assignment(
        permutation=permutation,
        grid_shape=config.grid_shape,
        cost=cost,
    )
    return SolveResult(
        geometry=geometry,
        tiles=tiles,
        assignment=assignment,
        cost_table=cost_table,
    )


def run(
    image_path: Path,
    config: SolverConfig,
    out_path: Path,
    mapping_path: Path | None = None,
    dump_path: Path | None = None,
) -> SolveResult:
    """
    Full command flow: solve (or rebuild from a mapping), render and save
    the reassembled image, then optionally dump the solved mapping.
    """
    structlog.contextvars.bind_contextvars(image=str(image_path))
    try:
        log.info(
            "pipeline_start",
            grid_shape=config.grid_shape,
            mode="rebuild" if mapping_path else "solve",
        )

        if mapping_path is not None:
            result = rebuild_from_mapping(image_path, mapping_path, config)
        else:
            result = solve_image(image_path, config)

        log.info("stage_start", stage="rendering")
        rendered: np.ndarray = render_assignment(
            result.tiles, result.assignment.permutation, config.cols
        )
        save_render(rendered, Path(out_path))
        log.info("stage_complete", stage="rendering")

        # The dump is written last so a failed render leaves no mapping behind
        if mapping_path is None and dump_path is not None:
            try:
                write_mapping_file(
                    result.assignment.permutation,
                    Path(dump_path),
                    config.rows,
                    config.cols,
                )
            except OutputWriteError:
                Path(out_path).unlink(missing_ok=True)
                raise

        log.info("pipeline_complete", out=str(out_path))
        return result
    except Exception as exc:
        log.error(
            "pipeline_fatal_error",
            error=f"{type(exc).__name__}: {exc}",
            traceback=traceback.format_exc(),
        )
        raise
    finally:
        structlog.contextvars.clear_contextvars()
