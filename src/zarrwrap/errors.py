__all__ = [
    "ArrayIOError",
    "BaseWrapperError",
    "DataTypeMismatchError",
    "ShapeOverflowError",
    "TileRangeError",
    "UnsupportedDataTypeError",
]


class BaseWrapperError(Exception):
    """
    Base error which all zarrwrap errors are sub-classed from.
    """

    _msg: str = "{}"

    def __init__(self, *args: object) -> None:
        """
        If a single argument is passed, treat it as a pre-formatted message.

        If multiple arguments are passed, they are used as arguments for the template string
        class variable ``_msg``.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))


class UnsupportedDataTypeError(BaseWrapperError, ValueError):
    """
    Raised when a backend reports a native data type with no counterpart in ``NumericType``.
    """

    _msg = "Unsupported {} data type: {!r}"

    def __init__(self, *args: object) -> None:
        super().__init__(*args)
        self.data_type = args[-1]


class ShapeOverflowError(BaseWrapperError, OverflowError):
    """
    Raised when a coordinate does not fit in a signed 32-bit integer.
    """

    _msg = "Value {} at dimension {} is outside the 32-bit integer range [{}, {}]"


class TileRangeError(BaseWrapperError, IndexError):
    """
    Raised when a tile shape/offset falls outside the extent of an array.
    """

    _msg = "Tile with shape {} at offset {} does not fit in array with shape {}"


class DataTypeMismatchError(BaseWrapperError, TypeError):
    """
    Raised when the declared data type of a write disagrees with the array or the buffer.
    """

    _msg = "Declared data type {!r} does not match {} {!r}"


class ArrayIOError(BaseWrapperError, OSError):
    """
    Raised when the backend fails to read or write a region.
    """

    _msg = "Failed to {} region of {}: {}"
