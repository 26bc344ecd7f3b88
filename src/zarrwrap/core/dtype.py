from __future__ import annotations

from enum import Enum
from typing import Any, Final

import numpy as np
import numpy.typing as npt

from zarrwrap.errors import UnsupportedDataTypeError

__all__ = [
    "NumericType",
    "parse_numeric_type",
    "v2_dtype_to_numeric_type",
    "v3_data_type_to_numeric_type",
]


class NumericType(Enum):
    """The numeric element types shared by every array, whatever its storage format."""

    float64 = "float64"
    float32 = "float32"
    int32 = "int32"
    uint32 = "uint32"
    int16 = "int16"
    uint16 = "uint16"
    int8 = "int8"
    uint8 = "uint8"

    @property
    def byte_count(self) -> int:
        return _BYTE_COUNTS[self]

    @property
    def is_signed(self) -> bool:
        return not self.value.startswith("uint")

    @property
    def is_float(self) -> bool:
        return self.value.startswith("float")

    def to_numpy_shortname(self) -> str:
        return _NUMPY_SHORTNAMES[self]

    def to_numpy(self) -> np.dtype[Any]:
        """Native byte order numpy dtype for this type."""
        return np.dtype(self.to_numpy_shortname())

    @classmethod
    def from_numpy(cls, dtype: npt.DTypeLike) -> NumericType:
        dtype = np.dtype(dtype)
        try:
            return _V2_TYPESTRS[dtype.str[1:]]
        except KeyError:
            raise UnsupportedDataTypeError("numpy", dtype.str) from None


_BYTE_COUNTS: Final = {
    NumericType.float64: 8,
    NumericType.float32: 4,
    NumericType.int32: 4,
    NumericType.uint32: 4,
    NumericType.int16: 2,
    NumericType.uint16: 2,
    NumericType.int8: 1,
    NumericType.uint8: 1,
}

_NUMPY_SHORTNAMES: Final = {
    NumericType.float64: "f8",
    NumericType.float32: "f4",
    NumericType.int32: "i4",
    NumericType.uint32: "u4",
    NumericType.int16: "i2",
    NumericType.uint16: "u2",
    NumericType.int8: "i1",
    NumericType.uint8: "u1",
}

# v2 type strings without their byte order character
_V2_TYPESTRS: Final = {name: t for t, name in _NUMPY_SHORTNAMES.items()}


def parse_numeric_type(data: NumericType | str) -> NumericType:
    if isinstance(data, NumericType):
        return data
    try:
        return NumericType(data)
    except ValueError:
        raise UnsupportedDataTypeError("numeric", data) from None


def v2_dtype_to_numeric_type(dtype: npt.DTypeLike) -> NumericType:
    """
    Map the native type of a v2 array (a numpy type string such as ``"<f8"``) to a
    ``NumericType``. Byte order is ignored.

    Raises
    ------
    UnsupportedDataTypeError
        For any type outside ``f8, f4, i4, u4, i2, u2, i1, u1``.
    """
    if isinstance(dtype, str) and len(dtype) == 3 and dtype[0] in "<>|=":
        typestr = dtype
    else:
        try:
            typestr = np.dtype(dtype).str
        except TypeError:
            raise UnsupportedDataTypeError("v2", dtype) from None
    try:
        return _V2_TYPESTRS[typestr[1:]]
    except KeyError:
        raise UnsupportedDataTypeError("v2", typestr) from None


def v3_data_type_to_numeric_type(data_type: Any) -> NumericType:
    """
    Map the native type of a v3 array to a ``NumericType``.

    ``data_type`` is either a data type name such as ``"float32"`` or an enum member whose
    value is such a name.
    """
    name = getattr(data_type, "value", data_type)
    try:
        return NumericType(name)
    except ValueError:
        raise UnsupportedDataTypeError("v3", name) from None
