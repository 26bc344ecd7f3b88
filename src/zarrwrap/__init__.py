from zarrwrap._version import version as __version__
from zarrwrap.core.common import narrow_coords, widen_coords
from zarrwrap.core.config import config
from zarrwrap.core.dtype import NumericType
from zarrwrap.core.wrapper import ArrayWrapper
from zarrwrap.errors import (
    ArrayIOError,
    DataTypeMismatchError,
    ShapeOverflowError,
    TileRangeError,
    UnsupportedDataTypeError,
)

__all__ = [
    "ArrayIOError",
    "ArrayWrapper",
    "DataTypeMismatchError",
    "NumericType",
    "ShapeOverflowError",
    "TileRangeError",
    "UnsupportedDataTypeError",
    "__version__",
    "config",
    "narrow_coords",
    "widen_coords",
]
