# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Mapping Text Codec
Reads and writes the plain-text mapping format:

    # optional comment
    3,0,1,2
    7,4,5,6   # trailing comments are fine too

One line per grid row, comma-separated tile indices in row-major order.
On read, comments are stripped and values may be separated by commas or
any whitespace; only the flattened sequence matters. It must hold
exactly N integers forming a permutation of 0..N-1.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from tilesolver.core.errors import InvalidMappingError, OutputWriteError
from tilesolver.utils.logger import get_logger

log = get_logger(__name__)

_COMMENT_RE = re.compile(r"#.*")
_SEPARATOR_RE = re.compile(r"[,\s]+")


def validate_permutation(values: Sequence[int], n: int) -> list[int]:
    """
    Check that values is a permutation of 0..n-1.

    Raises:
        InvalidMappingError: on size mismatch, duplicates or gaps
    """
    values = list(values)
    if len(values) != n:
        raise InvalidMappingError(
            f"mapping size mismatch: expected {n} values, got {len(values)}"
        )
    if sorted(values) != list(range(n)):
        raise InvalidMappingError(
            f"mapping must be a permutation of 0..{n - 1}"
        )
    return values


def parse_mapping(text: str, n: int) -> list[int]:
    """
    Parse mapping text into a validated permutation of length n.

    Raises:
        InvalidMappingError: if a token is not an integer or the values
                             are not a permutation of 0..n-1
    """
    stripped = _COMMENT_RE.sub("", text)
    tokens = [t for t in _SEPARATOR_RE.split(stripped) if t]

    values: list[int] = []
    for token in tokens:
        try:
            values.append(int(token))
        except ValueError:
            raise InvalidMappingError(
                f"mapping value is not an integer: {token!r}"
            ) from None

    return validate_permutation(values, n)


def format_mapping(permutation: Sequence[int], rows: int, cols: int) -> str:
    """Render a permutation as `rows` lines of `cols` comma-separated ints."""
    values = validate_permutation(permutation, rows * cols)
    lines = [
        ",".join(str(v) for v in values[r * cols:(r + 1) * cols])
        for r in range(rows)
    ]
    return "\n".join(lines) + "\n"


def read_mapping_file(path: Path, n: int) -> list[int]:
    """
    Read and validate a mapping file.

    Raises:
        InvalidMappingError: if the file cannot be read or is invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidMappingError(f"cannot read mapping {path}: {e}") from e

    mapping = parse_mapping(text, n)
    log.info("mapping_loaded", path=str(path), n_tiles=n)
    return mapping


def write_mapping_file(
    permutation: Sequence[int],
    path: Path,
    rows: int,
    cols: int,
) -> Path:
    """Write a permutation in mapping text format. Creates parent dirs."""
    path = Path(path)
    text = format_mapping(permutation, rows, cols)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(f"cannot write mapping {path}: {exc}") from exc
    log.info("mapping_saved", path=str(path), grid_shape=(rows, cols))
    return path
