# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Assignment Search Module
Public API for the beam search and the exhaustive reference solver.
"""

from tilesolver.modules.search.beam_search import (
    Beam,
    check_capacity,
    solve,
)
from tilesolver.modules.search.exhaustive import (
    assignment_cost,
    exhaustive_solve,
)

__all__ = [
    # Beam search
    "Beam",
    "check_capacity",
    "solve",
    # Exhaustive
    "assignment_cost",
    "exhaustive_solve",
]
