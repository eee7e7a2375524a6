# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Beam Search Assigner
Fills the grid one position at a time in row-major order, keeping only
the cheapest partial assignments after each position.

Algorithm:
  1. Start from a single empty state (cost 0, nothing placed)
  2. For position p, extend every retained state with every unused tile t:
       + right[placed[p-1], t]     if p is not in the first column
       + down[placed[p-cols], t]   if p is not in the first row
  3. Optionally keep only each state's candidate_limit cheapest tiles
  4. Stable-sort all successors by accumulated cost, keep beam_width
  5. After position N-1 the cheapest state is the answer

The beam is held as three arrays rather than per-state objects:
  costs  (B,)       accumulated cost
  placed (B, p)     tiles placed so far, in position order
  used   (B, N)     boolean used-set, one flag per tile

Successors are enumerated state-major then by ascending tile index and
sorted with a stable sort, so ties always resolve the same way and the
result is fully deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tilesolver.config import SearchParams
from tilesolver.core.errors import CapacityExceededError
from tilesolver.models.assignment import Assignment, CostTable
from tilesolver.utils.logger import get_logger

log = get_logger(__name__)


@dataclass
class Beam:
    """Population of partial assignments retained after one step."""
    costs: np.ndarray    # (B,) float64
    placed: np.ndarray   # (B, p) int64
    used: np.ndarray     # (B, N) bool

    @classmethod
    def initial(cls, n: int) -> Beam:
        return cls(
            costs=np.zeros(1, dtype=np.float64),
            placed=np.empty((1, 0), dtype=np.int64),
            used=np.zeros((1, n), dtype=bool),
        )

    @property
    def size(self) -> int:
        return int(self.costs.shape[0])


def check_capacity(n: int, params: SearchParams) -> None:
    """
    Fail fast when the tile count is outside what the search accepts.

    Raises:
        CapacityExceededError: if n exceeds params.max_tiles
        ValueError:            if n < 1
    """
    if n < 1:
        raise ValueError(f"tile count must be >= 1, got {n}")
    if params.max_tiles is not None and n > params.max_tiles:
        raise CapacityExceededError(
            f"Too many tiles ({n}). Max supported is {params.max_tiles}."
        )


def _incremental_costs(
    beam: Beam,
    pos: int,
    cols: int,
    cost_table: CostTable,
) -> np.ndarray:
    """
    (B, N) matrix of the cost each tile adds at this position for each
    retained state. Tiles already used by a state are set to +inf.
    """
    n = cost_table.n
    inc = np.zeros((beam.size, n), dtype=np.float64)
    if pos % cols > 0:
        left = beam.placed[:, pos - 1]
        inc += cost_table.right[left]
    if pos >= cols:
        above = beam.placed[:, pos - cols]
        inc += cost_table.down[above]
    inc[beam.used] = np.inf
    return inc


def _apply_candidate_limit(inc: np.ndarray, limit: int) -> np.ndarray:
    """
    Keep only the `limit` cheapest tiles per state (ties to the lower
    tile index); the rest are masked to +inf.
    """
    if limit >= inc.shape[1]:
        return inc
    order = np.argsort(inc, axis=1, kind="stable")
    dropped = order[:, limit:]
    limited = inc.copy()
    np.put_along_axis(limited, dropped, np.inf, axis=1)
    return limited


def _step(
    beam: Beam,
    pos: int,
    cols: int,
    cost_table: CostTable,
    params: SearchParams,
) -> Beam:
    """Expand every retained state by one position and prune."""
    inc = _incremental_costs(beam, pos, cols, cost_table)

    has_neighbour = pos % cols > 0 or pos >= cols
    if params.candidate_limit is not None and has_neighbour:
        inc = _apply_candidate_limit(inc, params.candidate_limit)

    totals = (beam.costs[:, np.newaxis] + inc).ravel()
    # Flattened index = state * N + tile: state-major, tile ascending
    n_valid = int(np.isfinite(totals).sum())
    keep = min(params.beam_width, n_valid)
    order = np.argsort(totals, kind="stable")[:keep]

    n = cost_table.n
    parent = order // n
    tile = order % n

    placed = np.concatenate(
        [beam.placed[parent], tile[:, np.newaxis]], axis=1
    )
    used = beam.used[parent].copy()
    used[np.arange(keep), tile] = True

    return Beam(costs=totals[order], placed=placed, used=used)


def solve(
    cost_table: CostTable,
    n: int,
    cols: int,
    params: SearchParams,
) -> Assignment:
    """
    Find a low-cost permutation of n tiles over a grid with `cols` columns.

    Args:
        cost_table: Pairwise right/down costs for the n tiles
        n:          Number of tiles (= grid positions)
        cols:       Grid width in tiles; must divide n
        params:     Beam width, optional candidate limit and tile ceiling

    Returns:
        Assignment whose permutation contains every tile index exactly
        once, with the accumulated cost of that permutation.

    Raises:
        CapacityExceededError: if n exceeds params.max_tiles
        ValueError:            on inconsistent sizes or beam_width < 1
    """
    check_capacity(n, params)
    if cost_table.n != n:
        raise ValueError(f"cost table is for {cost_table.n} tiles, expected {n}")
    if cols < 1 or n % cols != 0:
        raise ValueError(f"cols={cols} does not divide tile count {n}")
    if params.beam_width < 1:
        raise ValueError(f"beam_width must be >= 1, got {params.beam_width}")
    if params.candidate_limit is not None and params.candidate_limit < 1:
        raise ValueError(
            f"candidate_limit must be >= 1, got {params.candidate_limit}"
        )

    rows = n // cols
    log.info(
        "beam_search_start",
        n_tiles=n,
        grid_shape=(rows, cols),
        beam_width=params.beam_width,
        candidate_limit=params.candidate_limit,
    )

    beam = Beam.initial(n)
    for pos in range(n):
        beam = _step(beam, pos, cols, cost_table, params)
        log.debug(
            "beam_step",
            position=pos,
            retained=beam.size,
            best_cost=float(beam.costs[0]),
        )

    best = [int(t) for t in beam.placed[0]]
    best_cost = float(beam.costs[0])

    log.info(
        "beam_search_complete",
        n_tiles=n,
        best_cost=best_cost,
        final_beam=beam.size,
    )

    return Assignment(
        permutation=best,
        grid_shape=(rows, cols),
        cost=best_cost,
        beam_width=params.beam_width,
    )
