"""Geometry helpers for MagicaVoxel scenes: rotations, transforms and tree sizing."""

from __future__ import annotations

from typing import Sequence, Tuple

__all__ = [
    "IDENTITY",
    "Matrix3",
    "Vector3",
    "model_size_to_tree_size",
    "parse_rotation_matrix",
    "transformed",
    "multiply",
]

Matrix3 = Tuple[Tuple[int, int, int], Tuple[int, int, int], Tuple[int, int, int]]
Vector3 = Tuple[int, int, int]

IDENTITY: Matrix3 = ((1, 0, 0), (0, 1, 0), (0, 0, 1))


def model_size_to_tree_size(model_size: Sequence[int], brick_dimension: int) -> int:
    """Give the size of a tree which fits a model of the given extent.

    The result is the smallest ``4 ** n * brick_dimension`` (``n >= 0``) that is
    at least the largest component of ``model_size``.
    """
    if brick_dimension <= 0:
        raise ValueError("brick dimension must be positive")
    x, y, z = model_size
    extent = max(x, y, z)
    exponent = 0
    while 4**exponent * brick_dimension < extent:
        exponent += 1
    return 4**exponent * brick_dimension


def parse_rotation_matrix(b: int) -> Matrix3:
    """Decode a MagicaVoxel rotation byte into a row-major 3x3 matrix.

    Bits 0-1 give the column of the non-zero entry in the first row, bits 2-3
    the one in the second row; the third row takes the remaining column. Bits
    4, 5 and 6 make the entry of the first, second and third row negative.
    """
    if isinstance(b, bool) or not isinstance(b, int):
        raise TypeError(f"rotation must be an integer, not {type(b).__name__}")
    if not 0 <= b <= 0xFF:
        raise ValueError(f"rotation must be a byte, got {b}")

    first = b & 0x3
    second = (b >> 2) & 0x3
    third = ~(first ^ second) & 0x3
    if max(first, second, third) >= 3 or len({first, second, third}) != 3:
        raise ValueError(f"byte {b} does not encode a rotation matrix")

    columns = (first, second, third)
    signs = tuple(-1 if b & flag else 1 for flag in (0x10, 0x20, 0x40))
    return tuple(
        tuple(sign if col == column else 0 for col in range(3))
        for column, sign in zip(columns, signs)
    )  # type: ignore[return-value]


def transformed(vector: Sequence[int], matrix: Matrix3) -> Vector3:
    """Multiply ``matrix`` by the column ``vector``."""
    x, y, z = vector
    return tuple(row[0] * x + row[1] * y + row[2] * z for row in matrix)  # type: ignore[return-value]


def multiply(left: Matrix3, right: Matrix3) -> Matrix3:
    """Return the matrix product ``left @ right``."""
    columns = list(zip(*right))
    return tuple(
        tuple(sum(a * c for a, c in zip(row, column)) for column in columns)
        for row in left
    )  # type: ignore[return-value]