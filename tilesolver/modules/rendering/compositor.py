# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Compositor
Renders a permutation back into a single bitmap: grid position p
receives tile permutation[p] at cell (p // cols, p % cols).
The canvas is tile_w·cols × tile_h·rows with the tiles' channel count.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np

from tilesolver.models.tile import TileSet
from tilesolver.modules.mapping.codec import validate_permutation
from tilesolver.utils.image_utils import save_png
from tilesolver.utils.logger import get_logger

log = get_logger(__name__)


def render_assignment(
    tiles: TileSet,
    permutation: Sequence[int],
    cols: int,
) -> np.ndarray:
    """
    Composite tiles into the solved image.

    Raises:
        InvalidMappingError: if permutation is not a permutation of the tiles
        ValueError:          if cols does not divide the tile count
    """
    n = tiles.n
    if cols < 1 or n % cols != 0:
        raise ValueError(f"cols={cols} does not divide tile count {n}")
    perm = validate_permutation(permutation, n)

    rows = n // cols
    th, tw, ch = tiles.tile_shape
    canvas = np.zeros((th * rows, tw * cols, ch), dtype=np.uint8)

    for pos, tile_idx in enumerate(perm):
        r, c = divmod(pos, cols)
        canvas[r * th:(r + 1) * th, c * tw:(c + 1) * tw] = tiles[tile_idx].pixels

    return canvas


def save_render(image: np.ndarray, path: Path) -> Path:
    """Write the rendered image as PNG."""
    out = save_png(image, path)
    h, w = image.shape[:2]
    log.info("render_saved", path=str(out), size=(w, h))
    return out
