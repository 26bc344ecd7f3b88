from zarrwrap.abc.backend import V2ArrayLike, V3ArrayLike, V3MetadataLike

__all__ = ["V2ArrayLike", "V3ArrayLike", "V3MetadataLike"]
