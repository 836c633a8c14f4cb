"""Desktop recording building blocks: YUV conversion, cache specs files, Ogg Skeleton packets, shortcuts and recording areas."""

__version__ = "0.1.0"
__all__ = ["yuv", "types", "specsfile", "skeleton", "shortcuts", "window"]