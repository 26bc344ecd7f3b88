from zarrwrap.testing.v2 import V2MemoryArray
from zarrwrap.testing.v3 import ArrayV3Metadata, DataType, V3MemoryArray

__all__ = ["ArrayV3Metadata", "DataType", "V2MemoryArray", "V3MemoryArray"]
