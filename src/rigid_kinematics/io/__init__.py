"""I/O utilities for exchanging matrices and DH tables as plain text.

This module provides parsing of delimiter-separated numeric rows into the
arrays and records used by the rest of the library, and the matching
text export.
"""

from .text_format import (
    TextFormatError,
    format_dh_table,
    format_matrix,
    parse_dh_table,
    parse_numbers,
    parse_pose_matrix,
    parse_rotation_matrix,
)

__all__ = [
    "TextFormatError",
    "format_dh_table",
    "format_matrix",
    "parse_dh_table",
    "parse_numbers",
    "parse_pose_matrix",
    "parse_rotation_matrix",
]
