from __future__ import annotations

import numpy as np
import pytest

from zarrwrap.core.dtype import (
    NumericType,
    parse_numeric_type,
    v2_dtype_to_numeric_type,
    v3_data_type_to_numeric_type,
)
from zarrwrap.errors import UnsupportedDataTypeError
from zarrwrap.testing import DataType

V2_TYPES = [
    ("<f8", NumericType.float64),
    ("<f4", NumericType.float32),
    ("<i4", NumericType.int32),
    ("<u4", NumericType.uint32),
    ("<i2", NumericType.int16),
    ("<u2", NumericType.uint16),
    ("|i1", NumericType.int8),
    ("|u1", NumericType.uint8),
]


@pytest.mark.parametrize(("typestr", "expected"), V2_TYPES)
def test_v2_dtype_to_numeric_type(typestr: str, expected: NumericType) -> None:
    assert v2_dtype_to_numeric_type(typestr) is expected
    assert v2_dtype_to_numeric_type(np.dtype(typestr)) is expected


@pytest.mark.parametrize(("typestr", "expected"), V2_TYPES)
def test_v2_dtype_ignores_byte_order(typestr: str, expected: NumericType) -> None:
    big_endian = np.dtype(typestr).newbyteorder(">").str
    assert v2_dtype_to_numeric_type(big_endian) is expected


@pytest.mark.parametrize("typestr", ["<i8", "<u8", "|b1", "<c16", "<f2", "|S4", "<M8[ns]"])
def test_v2_dtype_unsupported(typestr: str) -> None:
    with pytest.raises(UnsupportedDataTypeError, match="Unsupported v2 data type") as exc_info:
        v2_dtype_to_numeric_type(typestr)
    assert exc_info.value.data_type == np.dtype(typestr).str


def test_v2_dtype_not_understood() -> None:
    with pytest.raises(UnsupportedDataTypeError, match="'nonsense'"):
        v2_dtype_to_numeric_type("nonsense")


@pytest.mark.parametrize("numeric_type", list(NumericType))
def test_v3_data_type_to_numeric_type(numeric_type: NumericType) -> None:
    assert v3_data_type_to_numeric_type(numeric_type.value) is numeric_type
    assert v3_data_type_to_numeric_type(DataType(numeric_type.value)) is numeric_type


@pytest.mark.parametrize("data_type", [DataType.bool, DataType.int64, DataType.uint64])
def test_v3_data_type_unsupported(data_type: DataType) -> None:
    with pytest.raises(UnsupportedDataTypeError, match="Unsupported v3 data type") as exc_info:
        v3_data_type_to_numeric_type(data_type)
    assert exc_info.value.data_type == data_type.value


@pytest.mark.parametrize("numeric_type", list(NumericType))
def test_numeric_type_numpy(numeric_type: NumericType) -> None:
    dtype = numeric_type.to_numpy()
    assert dtype.itemsize == numeric_type.byte_count
    assert dtype.isnative
    assert NumericType.from_numpy(dtype) is numeric_type
    assert (dtype.kind == "f") == numeric_type.is_float
    assert (dtype.kind != "u") == numeric_type.is_signed


def test_numeric_type_from_numpy_unsupported() -> None:
    with pytest.raises(UnsupportedDataTypeError, match="Unsupported numpy data type"):
        NumericType.from_numpy("i8")


def test_parse_numeric_type() -> None:
    assert parse_numeric_type("uint16") is NumericType.uint16
    assert parse_numeric_type(NumericType.int8) is NumericType.int8
    with pytest.raises(UnsupportedDataTypeError):
        parse_numeric_type("complex64")
