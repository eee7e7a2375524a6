# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Application Configuration
Process-wide defaults are loaded from environment variables (prefix
TILESOLVER_) or a local .env file. Each solve receives its own frozen
SolverConfig built from those defaults, so the scorer and the search
never read shared mutable state.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TILESOLVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ─── Grid ────────────────────────────────────────────────────────────────
    rows: int = 4
    cols: int = 4
    # Pixels trimmed from each cell (split evenly across both sides) to
    # drop seam lines and compression bleed around the cut
    width_margin: int = 6
    height_margin: int = 4

    # ─── Edge Scoring ────────────────────────────────────────────────────────
    band: int = 3
    step: int = 2

    # ─── Beam Search ─────────────────────────────────────────────────────────
    beam_width_small: int = 1200
    beam_width_large: int = 5000
    # Grids with at most this many tiles use beam_width_small
    small_grid_max_tiles: int = 16
    # Per-state candidate pre-filter. None disables it.
    candidate_limit: int | None = None
    # Hard ceiling on tile count. None means unbounded.
    max_tiles: int | None = None

    # ─── Logging ─────────────────────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ─── Derived helpers ─────────────────────────────────────────────────────
    def default_beam_width(self, n_tiles: int) -> int:
        if n_tiles <= self.small_grid_max_tiles:
            return self.beam_width_small
        return self.beam_width_large


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached singleton Settings instance."""
    return Settings()


# ─── Per-solve immutable configuration ───────────────────────────────────────

class ScoringParams(BaseModel):
    """Border sampling parameters for the edge scorer."""
    model_config = ConfigDict(frozen=True)

    band: int = Field(3, description="Depth in pixels of the compared border strip")
    step: int = Field(2, description="Sampling stride along the border")


class SearchParams(BaseModel):
    """Beam search parameters."""
    model_config = ConfigDict(frozen=True)

    beam_width: int = Field(1200, description="States retained after each pruning step")
    candidate_limit: int | None = Field(
        None, description="Cheapest candidates kept per state before pruning"
    )
    max_tiles: int | None = Field(None, description="Optional tile count ceiling")


class SolverConfig(BaseModel):
    """
    Complete, immutable description of one solve.
    Geometry fields drive tile extraction; scoring and search are
    handed to their components unchanged.
    """
    model_config = ConfigDict(frozen=True)

    rows: int = Field(..., ge=1)
    cols: int = Field(..., ge=1)
    width_margin: int = Field(0, ge=0)
    height_margin: int = Field(0, ge=0)
    scoring: ScoringParams = Field(default_factory=ScoringParams)
    search: SearchParams = Field(default_factory=SearchParams)

    @property
    def n_tiles(self) -> int:
        return self.rows * self.cols

    @property
    def grid_shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        rows: int | None = None,
        cols: int | None = None,
        width_margin: int | None = None,
        height_margin: int | None = None,
        band: int | None = None,
        step: int | None = None,
        beam_width: int | None = None,
        candidate_limit: int | None = None,
        max_tiles: int | None = None,
    ) -> SolverConfig:
        """
        Build a SolverConfig from Settings defaults, applying any explicit
        overrides. The beam width falls back to the small/large default
        for the resulting grid size.
        """
        s = settings or get_settings()
        rows = s.rows if rows is None else rows
        cols = s.cols if cols is None else cols
        if beam_width is None:
            beam_width = s.default_beam_width(rows * cols)

        return cls(
            rows=rows,
            cols=cols,
            width_margin=s.width_margin if width_margin is None else width_margin,
            height_margin=s.height_margin if height_margin is None else height_margin,
            scoring=ScoringParams(
                band=s.band if band is None else band,
                step=s.step if step is None else step,
            ),
            search=SearchParams(
                beam_width=beam_width,
                candidate_limit=(
                    s.candidate_limit if candidate_limit is None else candidate_limit
                ),
                max_tiles=s.max_tiles if max_tiles is None else max_tiles,
            ),
        )
