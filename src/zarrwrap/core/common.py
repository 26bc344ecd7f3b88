from __future__ import annotations

import functools
import math
import operator
from collections.abc import Iterable, Sequence
from typing import Final, Literal

import numpy as np
import numpy.typing as npt

from zarrwrap.errors import ShapeOverflowError, TileRangeError

ChunkCoords = tuple[int, ...]
ShapeLike = Iterable[int] | int
MemoryOrder = Literal["C", "F"]

INT32_MIN: Final = -(2**31)
INT32_MAX: Final = 2**31 - 1


def product(tup: tuple[int, ...]) -> int:
    return functools.reduce(operator.mul, tup, 1)


def ceildiv(a: float, b: float) -> int:
    if a == 0:
        return 0
    return math.ceil(a / b)


def parse_shapelike(data: ShapeLike) -> tuple[int, ...]:
    if isinstance(data, int):
        if data < 0:
            raise ValueError(f"Expected a non-negative integer. Got {data} instead")
        return (data,)
    try:
        data_tuple = tuple(data)
    except TypeError as e:
        msg = f"Expected an integer or an iterable of integers. Got {data} instead."
        raise TypeError(msg) from e

    if not all(isinstance(v, int | np.integer) for v in data_tuple):
        msg = f"Expected an iterable of integers. Got {data} instead."
        raise TypeError(msg)
    if not all(v > -1 for v in data_tuple):
        msg = f"Expected all values to be non-negative. Got {data} instead."
        raise ValueError(msg)
    return tuple(int(v) for v in data_tuple)


def _check_int32(value: int, dim: int) -> int:
    if not INT32_MIN <= value <= INT32_MAX:
        raise ShapeOverflowError(value, dim, INT32_MIN, INT32_MAX)
    return value


def widen_coords(coords: Iterable[int]) -> npt.NDArray[np.int64]:
    """
    Widen a sequence of 32-bit coordinates to the 64-bit coordinates used by v3 arrays.

    Every value is preserved exactly, so ``narrow_coords(widen_coords(c)) == tuple(c)``.

    Parameters
    ----------
    coords : Iterable[int]
        Shape or offset, one integer per dimension.

    Returns
    -------
    numpy.ndarray
        One-dimensional ``int64`` array with the same values.

    Raises
    ------
    ShapeOverflowError
        If a value does not fit in a signed 32-bit integer.
    """
    values = tuple(_check_int32(operator.index(v), dim) for dim, v in enumerate(coords))
    return np.array(values, dtype=np.int64)


def narrow_coords(coords: Iterable[int]) -> ChunkCoords:
    """
    Narrow a sequence of 64-bit coordinates to plain integers in the signed 32-bit range.

    Raises
    ------
    ShapeOverflowError
        If a value does not fit in a signed 32-bit integer.
    """
    return tuple(_check_int32(operator.index(v), dim) for dim, v in enumerate(coords))


def check_region(
    shape: Sequence[int], offset: Sequence[int], array_shape: Sequence[int]
) -> tuple[ChunkCoords, ChunkCoords]:
    """
    Check that the tile described by ``shape`` and ``offset`` lies within ``array_shape``.

    Returns the normalized ``(shape, offset)`` pair as tuples of ``int``.
    """
    shape_parsed = tuple(operator.index(s) for s in shape)
    offset_parsed = tuple(operator.index(o) for o in offset)
    array_shape = tuple(array_shape)
    if len(shape_parsed) != len(array_shape) or len(offset_parsed) != len(array_shape):
        msg = (
            f"Tile shape {shape_parsed} and offset {offset_parsed} must have the same number "
            f"of dimensions as the array ({len(array_shape)})."
        )
        raise TileRangeError(msg)
    for s, o, dim_len in zip(shape_parsed, offset_parsed, array_shape, strict=True):
        if s < 0 or o < 0 or o + s > dim_len:
            raise TileRangeError(shape_parsed, offset_parsed, array_shape)
    return shape_parsed, offset_parsed
