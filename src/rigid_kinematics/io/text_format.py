"""Plain-text import and export of matrices and DH tables.

Numbers are read as tokens separated by whitespace, commas, semicolons,
colons or curly braces, so rows pasted from spreadsheets, MATLAB or C
initializers all parse. Matrices are read row-major.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

import jax
import jax.numpy as jnp
import numpy as np

from rigid_kinematics.core.dh import DHRow

Array = jax.Array

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\s,;:{}]+")


class TextFormatError(ValueError):
    """Raised when text does not hold the expected numbers."""


def parse_numbers(text: str, count: Optional[int] = None) -> List[float]:
    """Split text into floats, optionally checking how many there are.

    Args:
        text: Delimiter-separated numbers.
        count: Expected number of values, or None for any.

    Returns:
        The parsed values in reading order.
    """
    tokens = [token for token in _SEPARATORS.split(text.strip()) if token]
    try:
        numbers = [float(token) for token in tokens]
    except ValueError:
        logger.warning("Rejected numeric text %r", text)
        raise TextFormatError("Invalid numbers detected") from None

    if any(np.isnan(numbers)):
        logger.warning("Rejected numeric text %r", text)
        raise TextFormatError("Invalid numbers detected")

    if count is not None and len(numbers) != count:
        logger.warning("Expected %d numbers, found %d", count, len(numbers))
        raise TextFormatError(f"Expected {count} numbers, found {len(numbers)}")

    return numbers


def parse_rotation_matrix(text: str) -> Array:
    """Parse 9 row-major numbers into a (3, 3) matrix."""
    return jnp.asarray(parse_numbers(text, 9), dtype=jnp.result_type(float)).reshape(3, 3)


def parse_pose_matrix(text: str) -> Array:
    """Parse 16 row-major numbers into a (4, 4) matrix."""
    return jnp.asarray(parse_numbers(text, 16), dtype=jnp.result_type(float)).reshape(4, 4)


def parse_dh_table(text: str) -> Tuple[DHRow, ...]:
    """Parse one `a alpha d theta` row per non-blank line into DH rows."""
    rows = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            a, alpha, d, theta = parse_numbers(line, 4)
        except TextFormatError as e:
            raise TextFormatError(f"Line {line_number}: {e}") from None
        rows.append(DHRow(a=a, alpha=alpha, d=d, theta=theta))
    return tuple(rows)


def format_matrix(matrix: Array, precision: int = 3) -> str:
    """One tab-separated row per line, fixed precision."""
    matrix = np.asarray(matrix)
    return "\n".join(
        "\t".join(f"{value:.{precision}f}" for value in row)
        for row in np.atleast_2d(matrix)
    )


def format_dh_table(rows: Iterable[DHRow], precision: int = 4) -> str:
    """Inverse of `parse_dh_table`."""
    return "\n".join(
        "\t".join(f"{value:.{precision}f}" for value in (row.a, row.alpha, row.d, row.theta))
        for row in rows
    )
