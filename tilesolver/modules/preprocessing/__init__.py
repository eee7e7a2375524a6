# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Preprocessing Module
Public API for input image validation.
"""

from tilesolver.modules.preprocessing.validator import (
    validate_image_bytes,
    validate_image_file,
)

__all__ = [
    "validate_image_bytes",
    "validate_image_file",
]
