# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Error Types
Every failure the solver reports is a TileSolverError. Input errors also
subclass ValueError and output errors subclass OSError, so callers can
catch the matching builtin type.

None of these are retryable: the solve is a deterministic offline
computation, so the same input always fails the same way.
"""


class TileSolverError(Exception):
    """Base class for all solver failures."""


class CapacityExceededError(TileSolverError, ValueError):
    """Raised when the tile count exceeds the configured limit."""


class InvalidMappingError(TileSolverError, ValueError):
    """Raised when a mapping has the wrong size or is not a permutation."""


class DegenerateGeometryError(TileSolverError, ValueError):
    """Raised when tile geometry or border sampling leaves nothing to compare."""


class ImageValidationError(TileSolverError, ValueError):
    """Raised when an input image is missing, unsupported or undecodable."""


class OutputWriteError(TileSolverError, OSError):
    """Raised when a rendered image or mapping file cannot be written."""
