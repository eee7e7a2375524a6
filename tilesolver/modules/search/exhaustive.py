# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Exhaustive Reference Solver
Brute-force enumeration of every permutation. Only practical for tiny
grids (9! = 362 880 permutations), where it gives the exact optimum the
beam search can be checked against.
"""

from __future__ import annotations

import itertools
from collections.abc import Sequence

from tilesolver.core.errors import CapacityExceededError
from tilesolver.models.assignment import Assignment, CostTable
from tilesolver.utils.logger import get_logger

log = get_logger(__name__)

_DEFAULT_MAX_TILES = 9


def assignment_cost(
    cost_table: CostTable,
    permutation: Sequence[int],
    cols: int,
) -> float:
    """
    Total border cost of a complete or partial row-major placement:
    every horizontal neighbour pair via `right`, every vertical pair
    via `down`.
    """
    total = 0.0
    for pos, tile in enumerate(permutation):
        if pos % cols > 0:
            total += float(cost_table.right[permutation[pos - 1], tile])
        if pos >= cols:
            total += float(cost_table.down[permutation[pos - cols], tile])
    return total


def exhaustive_solve(
    cost_table: CostTable,
    cols: int,
    max_tiles: int = _DEFAULT_MAX_TILES,
) -> Assignment:
    """
    Return the globally optimal assignment by trying every permutation.
    Permutations are visited in lexicographic order; the first minimum
    wins.

    Raises:
        CapacityExceededError: if the tile count exceeds max_tiles
        ValueError:            if cols does not divide the tile count
    """
    n = cost_table.n
    if n > max_tiles:
        raise CapacityExceededError(
            f"Exhaustive search over {n} tiles exceeds limit of {max_tiles}"
        )
    if cols < 1 or n % cols != 0:
        raise ValueError(f"cols={cols} does not divide tile count {n}")

    best_perm: tuple[int, ...] | None = None
    best_cost = float("inf")
    n_evaluated = 0

    for perm in itertools.permutations(range(n)):
        n_evaluated += 1
        cost = assignment_cost(cost_table, perm, cols)
        if cost < best_cost:
            best_cost = cost
            best_perm = perm

    log.info(
        "exhaustive_search_complete",
        n_tiles=n,
        permutations=n_evaluated,
        best_cost=best_cost,
    )

    return Assignment(
        permutation=list(best_perm),
        grid_shape=(n // cols, cols),
        cost=best_cost,
    )
