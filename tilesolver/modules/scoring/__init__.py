# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Edge Scoring Module
Public API for the pairwise border cost tables.
"""

from tilesolver.modules.scoring.edge_scorer import (
    compute_cost_tables,
    extract_border_strips,
    validate_sampling,
)

__all__ = [
    "compute_cost_tables",
    "extract_border_strips",
    "validate_sampling",
]
