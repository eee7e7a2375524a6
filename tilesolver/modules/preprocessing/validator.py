# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Image Validator
Validates the shuffled input image before tiles are cut from it.
Checks format, image decodability and that the image is large enough
to hold the requested grid.

Raises ImageValidationError (subclass of ValueError) on any failure.
"""

from pathlib import Path

import numpy as np

from tilesolver.core.errors import ImageValidationError
from tilesolver.utils.image_utils import decode_image
from tilesolver.utils.logger import get_logger

log = get_logger(__name__)

# Supported formats by magic bytes (first few bytes of file)
_MAGIC_BYTES: dict[str, bytes] = {
    "jpeg": b"\xff\xd8\xff",
    "png":  b"\x89PNG",
}


def _detect_format(data: bytes) -> str | None:
    """
    Detect image format from magic bytes.
    Returns format string ('jpeg', 'png') or None if unrecognised.
    """
    if data[:3] == _MAGIC_BYTES["jpeg"]:
        return "jpeg"
    if data[:4] == _MAGIC_BYTES["png"]:
        return "png"
    return None


def validate_image_bytes(
    data: bytes,
    label: str = "image",
    grid_shape: tuple[int, int] | None = None,
) -> np.ndarray:
    """
    Validate raw image bytes and return a decoded BGR / BGRA array.

    Checks performed (in order):
      1. Non-empty bytes
      2. Magic byte format detection (JPEG / PNG only)
      3. OpenCV decodability
      4. If grid_shape is given, at least one pixel per grid cell

    Args:
        data:       Raw bytes read from disk.
        label:      Human-readable label used in error messages.
        grid_shape: Optional (rows, cols) the image will be cut into.

    Returns:
        Decoded uint8 numpy array (H × W × 3 or H × W × 4).

    Raises:
        ImageValidationError: On any validation failure.
    """
    # 1. Non-empty
    if not data:
        raise ImageValidationError(f"The {label} file is empty.")

    # 2. Magic bytes format check
    fmt = _detect_format(data)
    if fmt is None:
        raise ImageValidationError(
            f"The {label} file format is not supported. "
            "Please supply a JPEG or PNG image."
        )

    # 3. OpenCV decodability
    try:
        img = decode_image(data)
    except ValueError:
        raise ImageValidationError(
            f"The {label} file could not be decoded. "
            "The file may be corrupted or truncated."
        ) from None

    h, w = img.shape[:2]

    # 4. Room for the grid
    if grid_shape is not None:
        rows, cols = grid_shape
        if h < rows or w < cols:
            raise ImageValidationError(
                f"The {label} resolution ({w}×{h}px) is too small for a "
                f"{rows}×{cols} grid."
            )

    log.debug(
        "image_validated",
        label=label,
        format=fmt,
        shape=img.shape,
        size_kb=round(len(data) / 1024, 1),
    )
    return img


def validate_image_file(
    path: Path,
    label: str = "image",
    grid_shape: tuple[int, int] | None = None,
) -> np.ndarray:
    """
    Read a file from disk and validate it.

    Raises:
        ImageValidationError: If the file does not exist or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise ImageValidationError(
            f"The {label} file was not found at path: {path}"
        )
    if not path.is_file():
        raise ImageValidationError(
            f"The {label} path does not point to a file: {path}"
        )

    data = path.read_bytes()
    return validate_image_bytes(data, label=label, grid_shape=grid_shape)
