# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Edge Compatibility Scorer
Builds the right/down cost tables consumed by the beam search.

For every ordered pair (i, j), i != j:

  right[i, j] = Σ_y Σ_k Σ_c |tile_i[y, W-1-k, c] - tile_j[y, k, c]|
  down[i, j]  = Σ_x Σ_k Σ_c |tile_i[H-1-k, x, c] - tile_j[k, x, c]|

with y (resp. x) running over 0, step, 2·step, ... and k over [0, band).
Column W-1-k of tile i is compared with column k of tile j, so the strip
is mirrored around the shared border. Only the three colour channels
are scored; alpha is ignored.

Strips are extracted once per tile and the inner loop runs as one numpy
broadcast per source tile: O(N²·(H/step)·band) work, O(N·(H/step)·band)
extra memory.
"""

from __future__ import annotations

import numpy as np

from tilesolver.config import ScoringParams
from tilesolver.core.errors import DegenerateGeometryError
from tilesolver.models.assignment import SENTINEL_COST, CostTable
from tilesolver.models.tile import TileSet
from tilesolver.utils.logger import get_logger

log = get_logger(__name__)


def validate_sampling(
    tile_height: int,
    tile_width: int,
    params: ScoringParams,
) -> None:
    """
    Reject band/step values that leave a border comparison with no
    valid samples.

    A step larger than the tile is allowed: offset 0 is always sampled,
    so one row or column still contributes.

    Raises:
        DegenerateGeometryError
    """
    if params.band < 1:
        raise DegenerateGeometryError(f"band must be >= 1, got {params.band}")
    if params.step < 1:
        raise DegenerateGeometryError(f"step must be >= 1, got {params.step}")
    if params.band > tile_width or params.band > tile_height:
        raise DegenerateGeometryError(
            f"band {params.band} exceeds tile size {tile_width}x{tile_height}"
        )


def extract_border_strips(
    stack: np.ndarray,
    params: ScoringParams,
) -> dict[str, np.ndarray]:
    """
    Cut the four sampled border strips from an (N, H, W, C) tile stack.

    Returns a dict of int32 arrays keyed by side:
        'right':  (N, H/step, band, 3) — column W-1-k at index k
        'left':   (N, H/step, band, 3) — column k at index k
        'bottom': (N, W/step, band, 3) — row H-1-k at index k
        'top':    (N, W/step, band, 3) — row k at index k
    """
    band, step = params.band, params.step
    rgb = stack[..., :3].astype(np.int32)
    _, h, w, _ = rgb.shape

    # Columns W-1, W-2, ..., W-band
    right = rgb[:, ::step, w - band:, :][:, :, ::-1, :]
    left = rgb[:, ::step, :band, :]
    # Rows H-1, H-2, ..., H-band, transposed to (N, x, k, C)
    bottom = rgb[:, h - band:, ::step, :][:, ::-1, :, :].transpose(0, 2, 1, 3)
    top = rgb[:, :band, ::step, :].transpose(0, 2, 1, 3)

    return {
        "right": np.ascontiguousarray(right),
        "left": np.ascontiguousarray(left),
        "bottom": np.ascontiguousarray(bottom),
        "top": np.ascontiguousarray(top),
    }


def _pairwise_strip_cost(
    source: np.ndarray,
    target: np.ndarray,
    sentinel: float,
) -> np.ndarray:
    """
    cost[i, j] = Σ |source[i] - target[j]| over all strip samples.
    Diagonal is overwritten with the sentinel.
    """
    n = source.shape[0]
    cost = np.empty((n, n), dtype=np.float64)
    for i in range(n):
        diff = np.abs(target - source[i][np.newaxis])
        cost[i] = diff.reshape(n, -1).sum(axis=1, dtype=np.int64)
    np.fill_diagonal(cost, sentinel)
    return cost


def compute_cost_tables(
    tiles: TileSet,
    params: ScoringParams,
) -> CostTable:
    """
    Compute the right and down cost tables for a tile set.

    Args:
        tiles:  TileSet of N equally sized tiles
        params: Border band depth and sampling stride

    Returns:
        CostTable with read-only (N, N) right/down matrices and the
        sentinel on both diagonals.

    Raises:
        DegenerateGeometryError: if band/step leave no samples.
    """
    h, w, _ = tiles.tile_shape
    validate_sampling(h, w, params)

    strips = extract_border_strips(tiles.stack(), params)
    right = _pairwise_strip_cost(strips["right"], strips["left"], SENTINEL_COST)
    down = _pairwise_strip_cost(strips["bottom"], strips["top"], SENTINEL_COST)

    off_diag = ~np.eye(tiles.n, dtype=bool)
    log.info(
        "cost_tables_built",
        n_tiles=tiles.n,
        tile_size=(w, h),
        band=params.band,
        step=params.step,
        right_samples=int(strips["right"][0].size // 3),
        down_samples=int(strips["bottom"][0].size // 3),
        mean_right=round(float(right[off_diag].mean()), 2) if tiles.n > 1 else 0.0,
        mean_down=round(float(down[off_diag].mean()), 2) if tiles.n > 1 else 0.0,
    )

    return CostTable(right=right, down=down, sentinel=SENTINEL_COST)
