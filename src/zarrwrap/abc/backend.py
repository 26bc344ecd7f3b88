from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    import numpy as np
    import numpy.typing as npt

__all__ = ["V2ArrayLike", "V3ArrayLike", "V3MetadataLike"]


@runtime_checkable
class V2ArrayLike(Protocol):
    """
    Protocol for an open v2 array.

    Shapes and offsets are sequences of plain integers. ``read`` fills a caller supplied
    buffer and ``write`` consumes one; both operate on ``product(shape)`` elements.
    """

    @property
    def shape(self) -> tuple[int, ...]: ...

    @property
    def chunks(self) -> tuple[int, ...]: ...

    @property
    def dtype(self) -> str | np.dtype[Any]:
        """Native type tag, a numpy type string such as ``"<u2"``."""
        ...

    def read(self, out: npt.NDArray[Any], shape: Sequence[int], offset: Sequence[int]) -> None: ...

    def write(
        self, data: npt.NDArray[Any], shape: Sequence[int], offset: Sequence[int]
    ) -> None: ...


@runtime_checkable
class V3MetadataLike(Protocol):
    """Protocol for the metadata of a v3 array. ``shape`` holds 64-bit integers."""

    @property
    def shape(self) -> npt.NDArray[np.int64] | tuple[int, ...]: ...

    @property
    def chunk_shape(self) -> tuple[int, ...]: ...

    @property
    def data_type(self) -> Any:
        """Native type tag, a data type name such as ``"float32"`` or an enum member."""
        ...


@runtime_checkable
class V3ArrayLike(Protocol):
    """
    Protocol for an open v3 array.

    Coordinates are one-dimensional ``int64`` arrays. ``read`` materializes a region and
    returns it as a new array, ``write`` stores a typed array at an offset.
    """

    @property
    def metadata(self) -> V3MetadataLike: ...

    def read(
        self, shape: npt.NDArray[np.int64], offset: npt.NDArray[np.int64]
    ) -> npt.NDArray[Any]: ...

    def write(self, offset: npt.NDArray[np.int64], array: npt.NDArray[Any]) -> None: ...
