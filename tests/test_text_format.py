"""Tests for plain-text matrix and DH table exchange."""

import math

import jax.numpy as jnp
import numpy as np
import pytest

from rigid_kinematics.chain import forward_kinematics
from rigid_kinematics.core import DHRow
from rigid_kinematics.io import (
    TextFormatError,
    format_dh_table,
    format_matrix,
    parse_dh_table,
    parse_numbers,
    parse_pose_matrix,
    parse_rotation_matrix,
)


def test_parse_numbers_mixed_separators():
    text = "1, 2;3:4\t5\n{6} 7.5  -8e-1"
    assert parse_numbers(text) == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.5, -0.8]


def test_parse_numbers_rejects_non_numeric():
    with pytest.raises(TextFormatError, match="Invalid numbers detected"):
        parse_numbers("1 2 x")
    with pytest.raises(TextFormatError, match="Invalid numbers detected"):
        parse_numbers("1 nan 3")


def test_parse_numbers_count_mismatch():
    with pytest.raises(TextFormatError, match="Expected 9 numbers, found 8"):
        parse_numbers("1 2 3 4 5 6 7 8", 9)


def test_text_format_error_is_value_error():
    with pytest.raises(ValueError):
        parse_pose_matrix("1 2 3")


def test_parse_rotation_matrix_braces():
    R = parse_rotation_matrix("{{0, -1, 0}, {1, 0, 0}, {0, 0, 1}}")
    expected = jnp.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
    np.testing.assert_allclose(R, expected)


def test_parse_pose_matrix_row_major():
    text = """
    1 0 0 0.5
    0 1 0 -2
    0 0 1 3
    0 0 0 1
    """
    T = parse_pose_matrix(text)
    assert T.shape == (4, 4)
    np.testing.assert_allclose(T[:3, 3], jnp.array([0.5, -2.0, 3.0]))
    np.testing.assert_allclose(T[3], jnp.array([0.0, 0.0, 0.0, 1.0]))


def test_parse_dh_table_skips_blank_lines():
    rows = parse_dh_table("0 1.5708 0 0\n\n0.4318, 0, 0, 0\n")
    assert len(rows) == 2
    assert (rows[1].a, rows[1].alpha, rows[1].d, rows[1].theta) == (0.4318, 0.0, 0.0, 0.0)
    assert rows[0].id != rows[1].id


def test_parse_dh_table_reports_line():
    with pytest.raises(TextFormatError, match="Line 2: Expected 4 numbers, found 3"):
        parse_dh_table("0 0 0 0\n1 2 3")


def test_parsed_dh_table_drives_forward_kinematics():
    rows = parse_dh_table("1 0 0 0\n1 0 0 0")
    result = forward_kinematics(rows)
    np.testing.assert_allclose(result.final[:3, 3], jnp.array([2.0, 0.0, 0.0]), atol=1e-12)


def test_format_matrix():
    assert format_matrix(jnp.eye(2), precision=1) == "1.0\t0.0\n0.0\t1.0"
    assert format_matrix(jnp.array([1.23456, -2.0])) == "1.235\t-2.000"


def test_format_matrix_parses_back():
    T = jnp.array([
        [0.0, -1.0, 0.0, 0.25],
        [1.0, 0.0, 0.0, -0.5],
        [0.0, 0.0, 1.0, 1.0],
        [0.0, 0.0, 0.0, 1.0],
    ])
    np.testing.assert_allclose(parse_pose_matrix(format_matrix(T)), T)


def test_format_dh_table():
    rows = (DHRow(a=0.0, alpha=math.pi / 2, d=0.0, theta=0.0), DHRow(a=0.4318, alpha=0.0, d=0.0, theta=0.0))
    text = format_dh_table(rows)
    assert text.splitlines()[0] == "0.0000\t1.5708\t0.0000\t0.0000"

    parsed = parse_dh_table(text)
    assert [row.a for row in parsed] == [0.0, 0.4318]
