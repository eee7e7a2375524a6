# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Mapping Codec Module
Public API for reading, writing and validating mapping files.
"""

from tilesolver.modules.mapping.codec import (
    format_mapping,
    parse_mapping,
    read_mapping_file,
    validate_permutation,
    write_mapping_file,
)

__all__ = [
    "format_mapping",
    "parse_mapping",
    "read_mapping_file",
    "validate_permutation",
    "write_mapping_file",
]
