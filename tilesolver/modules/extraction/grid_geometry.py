# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Grid Geometry
Computes where the rows×cols cells of the shuffled image lie and the
common tile size every cell is resampled to.

Cell boundaries are rounded per boundary, not accumulated, so no drift
builds up across the grid:

    xs[c] = round(c · W / cols)      c = 0..cols
    ys[r] = round(r · H / rows)      r = 0..rows

Cells can therefore differ by one pixel. Each cell is trimmed by the
width/height margins (half on each side) to drop seam lines, and the
common tile size is the smallest trimmed cell:

    tile_w = max(1, min(cell widths)  - width_margin)
    tile_h = max(1, min(cell heights) - height_margin)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from tilesolver.core.errors import DegenerateGeometryError
from tilesolver.utils.logger import get_logger

log = get_logger(__name__)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


@dataclass(frozen=True)
class CellBox:
    """Source rectangle of one trimmed cell, in image pixel coordinates."""
    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True)
class GridGeometry:
    """Cell layout of the shuffled image."""
    rows: int
    cols: int
    image_size: tuple[int, int]      # (W, H)
    xs: tuple[int, ...]              # cols + 1 column boundaries
    ys: tuple[int, ...]              # rows + 1 row boundaries
    width_margin: int
    height_margin: int
    tile_w: int
    tile_h: int

    @property
    def n_tiles(self) -> int:
        return self.rows * self.cols

    def cell_box(self, row: int, col: int) -> CellBox:
        """
        Trimmed source rectangle for a cell. Raises
        DegenerateGeometryError if the margins consume the whole cell.
        """
        x0, y0 = self.xs[col], self.ys[row]
        cw = self.xs[col + 1] - x0
        ch = self.ys[row + 1] - y0
        sw = cw - self.width_margin
        sh = ch - self.height_margin
        if sw <= 0 or sh <= 0:
            raise DegenerateGeometryError(
                f"cell ({row},{col}) of {cw}x{ch}px is empty after trimming "
                f"margins {self.width_margin}x{self.height_margin}"
            )
        return CellBox(
            x=x0 + self.width_margin // 2,
            y=y0 + self.height_margin // 2,
            w=sw,
            h=sh,
        )


def compute_grid_geometry(
    image_shape: tuple[int, ...],
    rows: int,
    cols: int,
    width_margin: int = 0,
    height_margin: int = 0,
) -> GridGeometry:
    """
    Compute cell boundaries and the common trimmed tile size.

    Args:
        image_shape:   Image array shape, (H, W) or (H, W, C)
        rows, cols:    Grid dimensions
        width_margin:  Pixels trimmed from each cell's width
        height_margin: Pixels trimmed from each cell's height

    Raises:
        ValueError: on non-positive grid dimensions or negative margins
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"grid must be at least 1x1, got {rows}x{cols}")
    if width_margin < 0 or height_margin < 0:
        raise ValueError(
            f"margins must be >= 0, got {width_margin}x{height_margin}"
        )

    h, w = int(image_shape[0]), int(image_shape[1])
    xs = tuple(_round_half_up(c * w / cols) for c in range(cols + 1))
    ys = tuple(_round_half_up(r * h / rows) for r in range(rows + 1))

    min_w = min(xs[c + 1] - xs[c] for c in range(cols))
    min_h = min(ys[r + 1] - ys[r] for r in range(rows))

    geometry = GridGeometry(
        rows=rows,
        cols=cols,
        image_size=(w, h),
        xs=xs,
        ys=ys,
        width_margin=width_margin,
        height_margin=height_margin,
        tile_w=max(1, min_w - width_margin),
        tile_h=max(1, min_h - height_margin),
    )

    log.debug(
        "grid_geometry_computed",
        image_size=(w, h),
        grid_shape=(rows, cols),
        tile_size=(geometry.tile_w, geometry.tile_h),
    )
    return geometry
