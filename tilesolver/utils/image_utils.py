# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Image I/O Utilities
All internal processing uses BGR (or BGRA) uint8 numpy arrays, the
OpenCV convention. Alpha is kept end to end so PNG transparency
survives a solve.
"""

from pathlib import Path

import cv2
import numpy as np

from tilesolver.core.errors import OutputWriteError


# ─── Load / Save ─────────────────────────────────────────────────────────────

def decode_image(data: np.ndarray | bytes) -> np.ndarray:
    """Decode encoded image bytes to a BGR / BGRA uint8 array."""
    arr = np.frombuffer(data, dtype=np.uint8) if isinstance(data, bytes) else data
    img = cv2.imdecode(arr, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ValueError("Could not decode image data.")
    return to_bgr_uint8(img)


def to_bgr_uint8(img: np.ndarray) -> np.ndarray:
    """Normalise any decoded image to 3- or 4-channel uint8."""
    if img.dtype == np.uint16:
        img = (img // 257).astype(np.uint8)
    elif img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)

    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    if img.shape[2] == 1:
        return cv2.cvtColor(img[:, :, 0], cv2.COLOR_GRAY2BGR)
    return img


def save_png(img: np.ndarray, path: Path) -> Path:
    """
    Save a BGR / BGRA array as PNG (lossless, alpha preserved).
    Creates parent directories if they don't exist.
    """
    path = Path(path)
    success, buf = cv2.imencode(".png", img)
    if not success:
        raise RuntimeError(f"Failed to encode image to PNG: {path}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        buf.tofile(str(path))
    except OSError as exc:
        raise OutputWriteError(f"cannot write image {path}: {exc}") from exc
    return path


# ─── Resize ──────────────────────────────────────────────────────────────────

def resample(img: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Resize to exactly width×height. Area interpolation is used so
    downscaling averages source pixels; a same-size request is a copy.
    """
    h, w = img.shape[:2]
    if (w, h) == (width, height):
        return img.copy()
    return cv2.resize(img, (width, height), interpolation=cv2.INTER_AREA)
