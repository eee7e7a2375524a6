# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
Mapping codec tests.
Covers parsing, validation, formatting and file round trips.
"""

import pytest


# ─── Parsing ─────────────────────────────────────────────────────────────────

def test_parse_basic_grid():
    from tilesolver.modules.mapping.codec import parse_mapping

    assert parse_mapping("3,0\n1,2\n", 4) == [3, 0, 1, 2]


def test_parse_strips_comments_and_whitespace():
    from tilesolver.modules.mapping.codec import parse_mapping

    text = (
        "# solved mapping\n"
        "  2, 0 ,1   # first row\n"
        "\n"
        "5,\t3,4\n"
    )
    assert parse_mapping(text, 6) == [2, 0, 1, 5, 3, 4]


def test_parse_ignores_row_layout():
    from tilesolver.modules.mapping.codec import parse_mapping

    assert parse_mapping("1 0 3 2", 4) == [1, 0, 3, 2]


def test_parse_size_mismatch_rejected():
    from tilesolver.core.errors import InvalidMappingError
    from tilesolver.modules.mapping.codec import parse_mapping

    with pytest.raises(InvalidMappingError, match="size mismatch"):
        parse_mapping("0,1,2", 4)


def test_parse_duplicate_rejected():
    from tilesolver.core.errors import InvalidMappingError
    from tilesolver.modules.mapping.codec import parse_mapping

    with pytest.raises(InvalidMappingError, match="permutation"):
        parse_mapping("0,1,2,2", 4)


def test_parse_out_of_range_rejected():
    from tilesolver.core.errors import InvalidMappingError
    from tilesolver.modules.mapping.codec import parse_mapping

    with pytest.raises(InvalidMappingError):
        parse_mapping("1,2,3,4", 4)


def test_parse_non_integer_rejected():
    from tilesolver.core.errors import InvalidMappingError
    from tilesolver.modules.mapping.codec import parse_mapping

    with pytest.raises(InvalidMappingError, match="not an integer"):
        parse_mapping("0,1,x,3", 4)


def test_parse_empty_text_rejected():
    from tilesolver.core.errors import InvalidMappingError
    from tilesolver.modules.mapping.codec import parse_mapping

    with pytest.raises(InvalidMappingError, match="size mismatch"):
        parse_mapping("# nothing here\n", 4)


def test_invalid_mapping_is_value_error():
    from tilesolver.core.errors import InvalidMappingError
    from tilesolver.modules.mapping.codec import validate_permutation

    with pytest.raises(ValueError):
        validate_permutation([0, 0], 2)
    assert issubclass(InvalidMappingError, ValueError)


# ─── Formatting ──────────────────────────────────────────────────────────────

def test_format_rows_and_cols():
    from tilesolver.modules.mapping.codec import format_mapping

    assert format_mapping([5, 4, 3, 2, 1, 0], rows=2, cols=3) == "5,4,3\n2,1,0\n"


def test_format_rejects_invalid_permutation():
    from tilesolver.core.errors import InvalidMappingError
    from tilesolver.modules.mapping.codec import format_mapping

    with pytest.raises(InvalidMappingError):
        format_mapping([0, 1, 1, 3], rows=2, cols=2)


def test_round_trip():
    from tilesolver.modules.mapping.codec import format_mapping, parse_mapping

    perm = [7, 2, 9, 0, 11, 4, 1, 10, 3, 8, 6, 5]
    assert parse_mapping(format_mapping(perm, rows=3, cols=4), 12) == perm


# ─── Files ───────────────────────────────────────────────────────────────────

def test_file_round_trip(tmp_path):
    from tilesolver.modules.mapping.codec import read_mapping_file, write_mapping_file

    perm = [3, 1, 0, 2]
    path = write_mapping_file(perm, tmp_path / "maps" / "mapping.txt", rows=2, cols=2)

    assert path.read_text(encoding="utf-8") == "3,1\n0,2\n"
    assert read_mapping_file(path, 4) == perm


def test_read_missing_file_rejected(tmp_path):
    from tilesolver.core.errors import InvalidMappingError
    from tilesolver.modules.mapping.codec import read_mapping_file

    with pytest.raises(InvalidMappingError, match="cannot read mapping"):
        read_mapping_file(tmp_path / "absent.txt", 4)


def test_write_unwritable_path_rejected(tmp_path):
    from tilesolver.core.errors import OutputWriteError
    from tilesolver.modules.mapping.codec import write_mapping_file

    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(OutputWriteError, match="cannot write mapping"):
        write_mapping_file([0, 1], blocker / "mapping.txt", rows=1, cols=2)
    with pytest.raises(OSError):
        write_mapping_file([0, 1], blocker / "mapping.txt", rows=1, cols=2)
