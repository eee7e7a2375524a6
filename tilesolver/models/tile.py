# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Tile Models
Pydantic models for the shuffled tiles cut from the input image.
Pixel data is stored as read-only BGR / BGRA uint8 numpy arrays.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Tile(BaseModel):
    """
    One fixed-size tile. The pixel buffer is frozen on construction
    and only referenced, never copied, by the scorer and compositor.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    index: int = Field(..., ge=0, description="Position of the tile in the shuffled grid")
    # BGR or BGRA uint8 array (H×W×3 or H×W×4)
    pixels: Any = Field(..., description="np.ndarray uint8 pixel buffer")

    @field_validator("pixels")
    @classmethod
    def _check_pixels(cls, v: Any) -> np.ndarray:
        arr = np.asarray(v)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"tile pixels must be (H, W, 3|4), got {arr.shape}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise ValueError(f"tile pixels must be non-empty, got {arr.shape}")
        if arr.dtype != np.uint8:
            if arr.dtype.kind not in "biuf":
                raise ValueError(f"tile pixels must be numeric, got {arr.dtype}")
            if not np.all((arr >= 0) & (arr <= 255)):
                raise ValueError("tile pixel values must lie in 0..255")
        arr = np.ascontiguousarray(arr, dtype=np.uint8)
        if arr is v:
            arr = arr.copy()
        arr.flags.writeable = False
        return arr

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def channels(self) -> int:
        return int(self.pixels.shape[2])


class TileSet(BaseModel):
    """
    Ordered collection of equally sized tiles, tile i at index i.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    tiles: list[Tile] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_uniform(self) -> TileSet:
        first = self.tiles[0].pixels.shape
        for pos, tile in enumerate(self.tiles):
            if tile.index != pos:
                raise ValueError(f"tile at position {pos} has index {tile.index}")
            if tile.pixels.shape != first:
                raise ValueError(
                    f"tile {pos} has shape {tile.pixels.shape}, expected {first}"
                )
        return self

    @classmethod
    def from_arrays(cls, arrays: list[np.ndarray]) -> TileSet:
        return cls(tiles=[Tile(index=i, pixels=a) for i, a in enumerate(arrays)])

    @property
    def n(self) -> int:
        return len(self.tiles)

    @property
    def tile_shape(self) -> tuple[int, int, int]:
        """(height, width, channels) shared by every tile."""
        h, w, c = self.tiles[0].pixels.shape
        return int(h), int(w), int(c)

    def stack(self) -> np.ndarray:
        """Return all tiles as one read-only (N, H, W, C) array."""
        arr = np.stack([t.pixels for t in self.tiles])
        arr.flags.writeable = False
        return arr

    def __len__(self) -> int:
        return self.n

    def __getitem__(self, index: int) -> Tile:
        return self.tiles[index]
