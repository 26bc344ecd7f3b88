from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt

from zarrwrap.abc.backend import V2ArrayLike, V3ArrayLike
from zarrwrap.core.common import (
    ChunkCoords,
    check_region,
    narrow_coords,
    parse_shapelike,
    product,
    widen_coords,
)
from zarrwrap.core.config import config, parse_indexing_order
from zarrwrap.core.dtype import (
    NumericType,
    parse_numeric_type,
    v2_dtype_to_numeric_type,
    v3_data_type_to_numeric_type,
)
from zarrwrap.errors import (
    ArrayIOError,
    BaseWrapperError,
    DataTypeMismatchError,
    TileRangeError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

__all__ = ["ArrayWrapper"]

logger = getLogger(__name__)


@dataclass(frozen=True)
class _V2Binding:
    array: V2ArrayLike


@dataclass(frozen=True)
class _V3Binding:
    array: V3ArrayLike


_Binding = _V2Binding | _V3Binding


@contextmanager
def _translate_backend_errors(operation: str, wrapper: ArrayWrapper) -> Iterator[None]:
    """Re-raise any exception coming out of a backend call as a zarrwrap error."""
    try:
        yield
    except BaseWrapperError:
        raise
    except IndexError as e:
        msg = f"Backend rejected {operation} region of {wrapper!r}: {e}"
        raise TileRangeError(msg) from e
    except TypeError as e:
        msg = f"Backend rejected {operation} buffer for {wrapper!r}: {e}"
        raise DataTypeMismatchError(msg) from e
    except Exception as e:
        raise ArrayIOError(operation, wrapper, e) from e


def _check_buffer(buf: npt.NDArray[Any], shape: ChunkCoords) -> NumericType:
    # only the eight supported element types are accepted as buffers
    buffer_type = NumericType.from_numpy(buf.dtype)
    if buf.size != product(shape):
        msg = f"Buffer holds {buf.size} elements, tile with shape {shape} requires {product(shape)}."
        raise TileRangeError(msg)
    return buffer_type


def _same_layout(a: NumericType, b: NumericType) -> bool:
    # signedness may differ, the bytes are reinterpreted
    return a.byte_count == b.byte_count and a.is_float == b.is_float


def _unpack_region(region: npt.NDArray[Any], out: npt.NDArray[Any]) -> None:
    # reinterpret the raw bytes of the region as the dtype of ``out``
    raw = np.ascontiguousarray(region).reshape(-1).view(np.uint8)
    dtype = out.dtype.newbyteorder(region.dtype.byteorder)
    count = min(out.size, raw.nbytes // dtype.itemsize)
    if count:
        out.flat[:count] = np.frombuffer(raw, dtype=dtype, count=count)


def _typed_view(
    data: npt.NDArray[Any], shape: ChunkCoords, declared: NumericType
) -> npt.NDArray[Any]:
    # the bytes of ``data`` read as ``declared``, converted to native byte order
    dtype = declared.to_numpy().newbyteorder(data.dtype.byteorder)
    view = np.ascontiguousarray(data).reshape(-1).view(dtype).reshape(shape)
    return view.astype(declared.to_numpy(), copy=False)


@dataclass(frozen=True)
class ArrayWrapper:
    """
    A single interface over an open v2 or v3 array.

    Callers can query geometry and element type and read or write tiles without knowing
    which storage format backs the array. Create instances with ``ArrayWrapper.from_v2`` or
    ``ArrayWrapper.from_v3``; the wrapped array can not be changed afterwards.

    The wrapper keeps a reference to the backend array but does not own it: the array must
    stay open for as long as the wrapper is in use.
    """

    _binding: _Binding
    _data_type: NumericType = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        match self._binding:
            case _V2Binding(array=array):
                data_type = v2_dtype_to_numeric_type(array.dtype)
                ndim, chunks_ndim = len(array.shape), len(array.chunks)
            case _V3Binding(array=array):
                data_type = v3_data_type_to_numeric_type(array.metadata.data_type)
                ndim, chunks_ndim = len(array.metadata.shape), len(array.metadata.chunk_shape)
            case _:
                raise TypeError(f"Expected a v2 or v3 array binding. Got {self._binding!r}.")
        if ndim != chunks_ndim:
            msg = f"Array has {ndim} dimensions but its chunk shape has {chunks_ndim}."
            raise ValueError(msg)
        object.__setattr__(self, "_data_type", data_type)

    @classmethod
    def from_v2(cls, array: V2ArrayLike) -> ArrayWrapper:
        """Wrap an open v2 array."""
        return cls(_V2Binding(array))

    @classmethod
    def from_v3(cls, array: V3ArrayLike) -> ArrayWrapper:
        """Wrap an open v3 array."""
        return cls(_V3Binding(array))

    def is_v3(self) -> bool:
        return isinstance(self._binding, _V3Binding)

    @property
    def _extent(self) -> ChunkCoords:
        match self._binding:
            case _V2Binding(array=array):
                return tuple(int(s) for s in array.shape)
            case _V3Binding(array=array):
                return tuple(int(s) for s in array.metadata.shape)

    @property
    def shape(self) -> ChunkCoords:
        """
        Shape of the wrapped array.

        Raises
        ------
        ShapeOverflowError
            If a dimension of a v3 array does not fit in a signed 32-bit integer.
        """
        match self._binding:
            case _V2Binding(array=array):
                return tuple(array.shape)
            case _V3Binding(array=array):
                return narrow_coords(array.metadata.shape)

    @property
    def chunks(self) -> ChunkCoords:
        match self._binding:
            case _V2Binding(array=array):
                return tuple(int(c) for c in array.chunks)
            case _V3Binding(array=array):
                return tuple(int(c) for c in array.metadata.chunk_shape)

    @property
    def data_type(self) -> NumericType:
        return self._data_type

    @property
    def dtype(self) -> np.dtype[Any]:
        return self._data_type.to_numpy()

    @property
    def ndim(self) -> int:
        return len(self._extent)

    def get_shape(self) -> ChunkCoords:
        return self.shape

    def get_chunks(self) -> ChunkCoords:
        return self.chunks

    def get_data_type(self) -> NumericType:
        return self.data_type

    def empty_tile(self, shape: Sequence[int]) -> npt.NDArray[Any]:
        """Allocate an uninitialized buffer for a tile of this array."""
        order = parse_indexing_order(config.get("array.order"))
        return np.empty(parse_shapelike(shape), dtype=self.dtype, order=order)

    def read(
        self, out: npt.NDArray[Any], shape: Sequence[int], offset: Sequence[int]
    ) -> npt.NDArray[Any]:
        """
        Read the tile of the array with the given ``shape`` at ``offset`` into ``out``.

        Parameters
        ----------
        out : numpy.ndarray
            Writable buffer of exactly ``product(shape)`` elements. Its element width and
            kind must match the array, integer signedness may differ.
        shape : Sequence[int]
            Extent of the tile, one value per dimension.
        offset : Sequence[int]
            Origin of the tile, one value per dimension.

        Returns
        -------
        numpy.ndarray
            ``out``, filled in row-major order.

        Raises
        ------
        TileRangeError
            If the tile does not fit in the array, or ``out`` has the wrong size.
        DataTypeMismatchError
            If the element width or kind of ``out`` differs from the array's.
        ArrayIOError
            If the backend fails to materialize the region.
        """
        shape, offset = check_region(shape, offset, self._extent)
        if not _same_layout(_check_buffer(out, shape), self._data_type):
            msg = (
                f"Buffer data type {out.dtype.str!r} does not match array data type "
                f"{self._data_type.value!r}."
            )
            raise DataTypeMismatchError(msg)
        match self._binding:
            case _V2Binding(array=array):
                with _translate_backend_errors("read", self):
                    array.read(out, shape, offset)
            case _V3Binding(array=array):
                shape_v3, offset_v3 = widen_coords(shape), widen_coords(offset)
                logger.debug("reading shape %s at offset %s from v3 array %r", shape, offset, array)
                with _translate_backend_errors("read", self):
                    region = np.asarray(array.read(shape_v3, offset_v3))
                if region.shape != shape:
                    logger.debug(
                        "  requested shape: %s, returned shape: %s", shape, region.shape
                    )
                    if not config.get("read.allow_partial"):
                        msg = (
                            f"Requested tile with shape {shape} at offset {offset} but the "
                            f"backend returned a region with shape {region.shape}."
                        )
                        raise TileRangeError(msg)
                _unpack_region(region, out)
        return out

    def read_tile(self, shape: Sequence[int], offset: Sequence[int]) -> npt.NDArray[Any]:
        """Read a tile into a newly allocated buffer of the array's element type."""
        return self.read(self.empty_tile(shape), shape, offset)

    def write(
        self,
        data: npt.ArrayLike,
        shape: Sequence[int],
        offset: Sequence[int],
        data_type: NumericType | str,
    ) -> None:
        """
        Write ``data`` as the tile of the array with the given ``shape`` at ``offset``.

        Parameters
        ----------
        data : array-like
            Exactly ``product(shape)`` elements.
        shape : Sequence[int]
            Extent of the tile, one value per dimension.
        offset : Sequence[int]
            Origin of the tile, one value per dimension.
        data_type : NumericType or str
            The type the bytes of ``data`` represent. This tells signed and unsigned
            integers of the same width apart.

        Raises
        ------
        TileRangeError
            If the tile does not fit in the array, or ``data`` has the wrong size.
        DataTypeMismatchError
            If ``data_type`` is not the array's type, or ``data`` has a different element
            width or kind.
        ArrayIOError
            If the backend fails to store the region.
        """
        shape, offset = check_region(shape, offset, self._extent)
        declared = parse_numeric_type(data_type)
        if declared is not self._data_type:
            raise DataTypeMismatchError(declared.value, "array data type", self._data_type.value)
        data = np.asarray(data)
        if not _same_layout(_check_buffer(data, shape), declared):
            raise DataTypeMismatchError(declared.value, "buffer data type", data.dtype.str)
        match self._binding:
            case _V2Binding(array=array):
                with _translate_backend_errors("write", self):
                    array.write(data, shape, offset)
            case _V3Binding(array=array):
                view = _typed_view(data, shape, declared)
                offset_v3 = widen_coords(offset)
                logger.debug("writing %s tile to v3 array %r at offset %s", shape, array, offset)
                with _translate_backend_errors("write", self):
                    array.write(offset_v3, view)

    def __repr__(self) -> str:
        fmt = "v3" if self.is_v3() else "v2"
        return (
            f"<ArrayWrapper {fmt} shape={self._extent} chunks={self.chunks} "
            f"data_type={self._data_type.value}>"
        )
