from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import pytest

from zarrwrap import ArrayWrapper, NumericType
from zarrwrap.core.config import config
from zarrwrap.testing import V2MemoryArray, V3MemoryArray

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

    from zarrwrap.core.common import ChunkCoords

ZarrFormat = Literal[2, 3]


@pytest.fixture(autouse=True)
def reset_config() -> Generator[None, None, None]:
    config.reset()
    yield
    config.reset()


def create_backend(
    zarr_format: ZarrFormat,
    shape: ChunkCoords,
    chunks: ChunkCoords,
    data_type: NumericType,
) -> V2MemoryArray | V3MemoryArray:
    if zarr_format == 2:
        return V2MemoryArray(
            shape=shape, chunks=chunks, dtype=data_type.to_numpy().newbyteorder("<")
        )
    return V3MemoryArray(shape=shape, chunk_shape=chunks, data_type=data_type.value)


def wrap(array: V2MemoryArray | V3MemoryArray) -> ArrayWrapper:
    if isinstance(array, V3MemoryArray):
        return ArrayWrapper.from_v3(array)
    return ArrayWrapper.from_v2(array)


@pytest.fixture(params=[2, 3], ids=["v2", "v3"])
def zarr_format(request: pytest.FixtureRequest) -> ZarrFormat:
    return request.param


@pytest.fixture
def wrapper_factory(zarr_format: ZarrFormat) -> Callable[..., ArrayWrapper]:
    def factory(
        shape: ChunkCoords = (4, 4),
        chunks: ChunkCoords = (2, 2),
        data_type: NumericType = NumericType.float32,
    ) -> ArrayWrapper:
        return wrap(create_backend(zarr_format, shape, chunks, data_type))

    return factory
