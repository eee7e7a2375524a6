# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Tile Cutter
Cuts the shuffled image into a TileSet, one tile per grid cell in
row-major order. Each trimmed cell is resampled to the common tile size
from GridGeometry so every tile has identical dimensions.
"""

from __future__ import annotations

import numpy as np

from tilesolver.models.tile import Tile, TileSet
from tilesolver.modules.extraction.grid_geometry import GridGeometry
from tilesolver.utils.image_utils import resample
from tilesolver.utils.logger import get_logger

log = get_logger(__name__)


def cut_tiles(image: np.ndarray, geometry: GridGeometry) -> TileSet:
    """
    Extract all tiles from the image.

    Args:
        image:    BGR / BGRA uint8 array the geometry was computed for
        geometry: Cell layout and common tile size

    Returns:
        TileSet with tile i taken from grid cell (i // cols, i % cols).

    Raises:
        DegenerateGeometryError: if a cell is empty after trimming
        ValueError:              if the image does not match the geometry
    """
    h, w = image.shape[:2]
    if (w, h) != geometry.image_size:
        raise ValueError(
            f"image is {w}x{h}, geometry was computed for "
            f"{geometry.image_size[0]}x{geometry.image_size[1]}"
        )

    tiles: list[Tile] = []
    for r in range(geometry.rows):
        for c in range(geometry.cols):
            box = geometry.cell_box(r, c)
            crop = image[box.y:box.y + box.h, box.x:box.x + box.w]
            pixels = resample(crop, geometry.tile_w, geometry.tile_h)
            tiles.append(Tile(index=len(tiles), pixels=pixels))

    log.info(
        "tiles_cut",
        n_tiles=len(tiles),
        grid_shape=(geometry.rows, geometry.cols),
        tile_size=(geometry.tile_w, geometry.tile_h),
        channels=tiles[0].channels,
    )
    return TileSet(tiles=tiles)
