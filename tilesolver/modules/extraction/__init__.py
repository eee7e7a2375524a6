# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Tile Extraction Module
Public API for grid geometry and tile cutting.
"""

from tilesolver.modules.extraction.grid_geometry import (
    CellBox,
    GridGeometry,
    compute_grid_geometry,
)
from tilesolver.modules.extraction.tile_cutter import cut_tiles

__all__ = [
    # Geometry
    "CellBox",
    "GridGeometry",
    "compute_grid_geometry",
    # Cutting
    "cut_tiles",
]
