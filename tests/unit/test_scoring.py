# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
Edge scorer tests.
All tests use small synthetic tiles built in memory — no image files.
"""

import numpy as np
import pytest

from tilesolver.config import ScoringParams
from tilesolver.models.tile import TileSet


# ─── Helpers ─────────────────────────────────────────────────────────────────

def _solid(h: int, w: int, color: tuple, channels: int = 3) -> np.ndarray:
    img = np.zeros((h, w, channels), dtype=np.uint8)
    img[:] = color
    return img


def _random_tiles(n: int, h: int, w: int, seed: int = 0) -> TileSet:
    rng = np.random.default_rng(seed)
    return TileSet.from_arrays(
        [rng.integers(0, 256, size=(h, w, 3), dtype=np.uint8) for _ in range(n)]
    )


def _naive_right(a: np.ndarray, b: np.ndarray, band: int, step: int) -> int:
    h, w = a.shape[:2]
    total = 0
    for y in range(0, h, step):
        for k in range(band):
            for c in range(3):
                total += abs(int(a[y, w - 1 - k, c]) - int(b[y, k, c]))
    return total


def _naive_down(a: np.ndarray, b: np.ndarray, band: int, step: int) -> int:
    h, w = a.shape[:2]
    total = 0
    for x in range(0, w, step):
        for k in range(band):
            for c in range(3):
                total += abs(int(a[h - 1 - k, x, c]) - int(b[k, x, c]))
    return total


# ─── Table structure ─────────────────────────────────────────────────────────

def test_diagonal_is_sentinel_and_off_diagonal_finite():
    from tilesolver.models.assignment import SENTINEL_COST
    from tilesolver.modules.scoring.edge_scorer import compute_cost_tables

    tiles = _random_tiles(5, 6, 7)
    table = compute_cost_tables(tiles, ScoringParams(band=2, step=2))

    assert table.n == 5
    off = ~np.eye(5, dtype=bool)
    for matrix in (table.right, table.down):
        assert np.all(np.diag(matrix) == SENTINEL_COST)
        assert np.all(np.isfinite(matrix[off]))
        assert np.all(matrix[off] >= 0)
        assert np.all(matrix[off] < SENTINEL_COST)


def test_cost_tables_are_read_only():
    from tilesolver.modules.scoring.edge_scorer import compute_cost_tables

    table = compute_cost_tables(_random_tiles(3, 4, 4), ScoringParams(band=1, step=1))
    with pytest.raises(ValueError):
        table.right[0, 1] = 0.0
    with pytest.raises(ValueError):
        table.down[1, 0] = 0.0


# ─── Values ──────────────────────────────────────────────────────────────────

def test_solid_tiles_known_cost():
    from tilesolver.modules.scoring.edge_scorer import compute_cost_tables

    tiles = TileSet.from_arrays([
        _solid(4, 4, (10, 20, 30)),
        _solid(4, 4, (13, 20, 30)),
    ])
    table = compute_cost_tables(tiles, ScoringParams(band=1, step=1))

    # 4 sampled rows × 1 band × |10 - 13|
    assert table.right[0, 1] == 12
    assert table.right[1, 0] == 12
    assert table.down[0, 1] == 12
    assert table.down[1, 0] == 12


def test_matches_naive_reference():
    from tilesolver.modules.scoring.edge_scorer import compute_cost_tables

    tiles = _random_tiles(4, 7, 9, seed=3)
    band, step = 2, 3
    table = compute_cost_tables(tiles, ScoringParams(band=band, step=step))

    for i in range(4):
        for j in range(4):
            if i == j:
                continue
            a, b = tiles[i].pixels, tiles[j].pixels
            assert table.right[i, j] == _naive_right(a, b, band, step)
            assert table.down[i, j] == _naive_down(a, b, band, step)


def test_costs_are_asymmetric():
    from tilesolver.modules.scoring.edge_scorer import compute_cost_tables

    # Tile 0: black left column, white everywhere else
    a = _solid(4, 4, (255, 255, 255))
    a[:, 0] = 0
    b = _solid(4, 4, (255, 255, 255))
    tiles = TileSet.from_arrays([a, b])

    table = compute_cost_tables(tiles, ScoringParams(band=1, step=1))
    # a's right column is white, b's left column is white
    assert table.right[0, 1] == 0
    # b's right column is white, a's left column is black
    assert table.right[1, 0] == 4 * 3 * 255


def test_alpha_channel_not_scored():
    from tilesolver.modules.scoring.edge_scorer import compute_cost_tables

    rgb = _random_tiles(3, 5, 5, seed=7)
    rgba_arrays = []
    for k, tile in enumerate(rgb.tiles):
        alpha = np.full((5, 5, 1), 40 * k, dtype=np.uint8)
        rgba_arrays.append(np.concatenate([tile.pixels, alpha], axis=2))
    rgba = TileSet.from_arrays(rgba_arrays)

    params = ScoringParams(band=2, step=1)
    t_rgb = compute_cost_tables(rgb, params)
    t_rgba = compute_cost_tables(rgba, params)

    assert np.array_equal(t_rgb.right, t_rgba.right)
    assert np.array_equal(t_rgb.down, t_rgba.down)


def test_step_larger_than_tile_samples_first_line_only():
    from tilesolver.modules.scoring.edge_scorer import compute_cost_tables

    a = _solid(4, 4, (0, 0, 0))
    b = _solid(4, 4, (0, 0, 0))
    b[0, :] = (1, 1, 1)   # top row
    b[:, 0] = (1, 1, 1)   # left column
    tiles = TileSet.from_arrays([a, b])

    table = compute_cost_tables(tiles, ScoringParams(band=1, step=10))
    # Only y=0 / x=0 sampled: one pixel × 3 channels × 1
    assert table.right[0, 1] == 3
    assert table.down[0, 1] == 3


def test_band_spanning_whole_tile_allowed():
    from tilesolver.modules.scoring.edge_scorer import compute_cost_tables

    tiles = _random_tiles(3, 3, 3, seed=11)
    table = compute_cost_tables(tiles, ScoringParams(band=3, step=1))
    a, b = tiles[0].pixels, tiles[1].pixels
    assert table.right[0, 1] == _naive_right(a, b, 3, 1)


def test_input_tiles_unchanged():
    from tilesolver.modules.scoring.edge_scorer import compute_cost_tables

    tiles = _random_tiles(3, 6, 6, seed=5)
    before = tiles.stack().copy()
    compute_cost_tables(tiles, ScoringParams(band=2, step=2))
    assert np.array_equal(tiles.stack(), before)


# ─── Degenerate geometry ─────────────────────────────────────────────────────

@pytest.mark.parametrize("band,step", [(0, 1), (1, 0), (-1, 2), (5, 1)])
def test_degenerate_sampling_rejected(band, step):
    from tilesolver.core.errors import DegenerateGeometryError
    from tilesolver.modules.scoring.edge_scorer import compute_cost_tables

    tiles = _random_tiles(2, 4, 4)
    with pytest.raises(DegenerateGeometryError):
        compute_cost_tables(tiles, ScoringParams(band=band, step=step))


def test_band_exceeding_height_only_rejected():
    from tilesolver.core.errors import DegenerateGeometryError
    from tilesolver.modules.scoring.edge_scorer import validate_sampling

    # Wide, short tiles: band fits horizontally but not vertically
    with pytest.raises(DegenerateGeometryError, match="exceeds tile size"):
        validate_sampling(2, 10, ScoringParams(band=3, step=1))
    validate_sampling(3, 10, ScoringParams(band=3, step=1))


def test_border_strip_shapes():
    from tilesolver.modules.scoring.edge_scorer import extract_border_strips

    stack = _random_tiles(2, 6, 8).stack()
    strips = extract_border_strips(stack, ScoringParams(band=2, step=2))

    assert strips["right"].shape == (2, 3, 2, 3)
    assert strips["left"].shape == (2, 3, 2, 3)
    assert strips["bottom"].shape == (2, 4, 2, 3)
    assert strips["top"].shape == (2, 4, 2, 3)
    # Index k of the right strip is column W-1-k
    assert np.array_equal(strips["right"][0, :, 0], stack[0, ::2, 7, :3])
    assert np.array_equal(strips["right"][0, :, 1], stack[0, ::2, 6, :3])
