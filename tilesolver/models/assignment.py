# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Cost Table and Assignment Models
CostTable holds the pairwise border costs produced by the edge scorer.
Assignment is the solver's answer: a permutation mapping each grid
position (row-major) to a tile index, plus the cost it was found at.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

# Cost assigned to a tile bordering itself. Far above any real cost:
# the worst possible border is 765 per sampled pixel.
SENTINEL_COST = 1e15


class CostTable(BaseModel):
    """
    Two square float64 matrices:
      right[i, j] — cost of tile j sitting immediately right of tile i
      down[i, j]  — cost of tile j sitting directly below tile i
    Diagonals carry the sentinel. Both arrays are read-only copies of
    what the caller passed in.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    right: Any = Field(..., description="np.ndarray (N, N) float64")
    down: Any = Field(..., description="np.ndarray (N, N) float64")
    sentinel: float = SENTINEL_COST

    @field_validator("right", "down")
    @classmethod
    def _freeze_copy(cls, v: Any, info: ValidationInfo) -> np.ndarray:
        if not isinstance(v, np.ndarray) or v.ndim != 2:
            raise ValueError(f"{info.field_name} must be a 2-D numpy array")
        if v.shape[0] != v.shape[1]:
            raise ValueError(f"{info.field_name} must be square, got {v.shape}")
        arr = v.copy()
        arr.flags.writeable = False
        return arr

    @model_validator(mode="after")
    def _check_sizes(self) -> CostTable:
        if self.right.shape != self.down.shape:
            raise ValueError(
                f"right {self.right.shape} and down {self.down.shape} differ"
            )
        return self

    @property
    def n(self) -> int:
        return int(self.right.shape[0])


class Assignment(BaseModel):
    """Result of a solve: a permutation of tile indices over the grid."""

    permutation: list[int]
    grid_shape: tuple[int, int] = Field(..., description="(n_rows, n_cols)")
    cost: float | None = Field(None, description="Total border cost, if scored")
    beam_width: int | None = Field(None, description="Beam width used, if searched")

    @property
    def n_rows(self) -> int:
        return self.grid_shape[0]

    @property
    def n_cols(self) -> int:
        return self.grid_shape[1]

    def rows(self) -> list[list[int]]:
        """Split the permutation into grid rows."""
        c = self.n_cols
        return [self.permutation[r * c:(r + 1) * c] for r in range(self.n_rows)]

    def tile_at(self, row: int, col: int) -> int:
        return self.permutation[row * self.n_cols + col]
