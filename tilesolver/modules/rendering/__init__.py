# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Rendering Module
Public API for compositing a permutation into the solved image.
"""

from tilesolver.modules.rendering.compositor import (
    render_assignment,
    save_render,
)

__all__ = [
    "render_assignment",
    "save_render",
]
