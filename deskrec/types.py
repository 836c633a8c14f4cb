"""Geometry, display and frame-header records shared across the recorder."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar, Tuple

_SHORT_MIN, _SHORT_MAX = -32768, 32767
_USHORT_MAX = 65535
_MAX_GRAB_MASKS = 4


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle with the value ranges of an X rectangle."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if not (_SHORT_MIN <= self.x <= _SHORT_MAX and _SHORT_MIN <= self.y <= _SHORT_MAX):
            raise ValueError(f"rectangle origin out of range: ({self.x}, {self.y})")
        if not (0 <= self.width <= _USHORT_MAX and 0 <= self.height <= _USHORT_MAX):
            raise ValueError(f"rectangle size out of range: {self.width}x{self.height}")

    @property
    def right(self) -> int:
        """The x coordinate just past the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """The y coordinate just past the bottom edge."""
        return self.y + self.height

    def contains(self, other: "Rect") -> bool:
        """Whether ``other`` lies entirely inside this rectangle."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


@dataclass(frozen=True)
class DisplaySpecs:
    """Basic facts about the display being recorded, used for validity checks."""

    width: int
    height: int
    root: int = 0
    screen: int = 0
    depth: int = 24


@dataclass(frozen=True)
class BRWindow:
    """The recorded window: its own rectangle and the recorded area in screen space."""

    winrect: Rect
    rrect: Rect
    windowid: int


@dataclass(frozen=True)
class HotKey:
    """A grabbed key and the modifier masks that, with it, make up a shortcut."""

    masks: Tuple[int, ...]
    key: int

    def __post_init__(self) -> None:
        if len(self.masks) > _MAX_GRAB_MASKS:
            raise ValueError(f"at most {_MAX_GRAB_MASKS} modifier masks are allowed")

    @property
    def modnum(self) -> int:
        """The number of modifier masks to check on key presses."""
        return len(self.masks)


@dataclass(frozen=True)
class FrameHeader:
    """Header written before every cached frame, in the host's byte order."""

    PREFIX: ClassVar[bytes] = b"FRAM"
    _FORMAT: ClassVar[struct.Struct] = struct.Struct("=4s4I")
    SIZE: ClassVar[int] = _FORMAT.size

    capture_frameno: int
    ynum: int = 0
    unum: int = 0
    vnum: int = 0
    frame_prefix: bytes = field(default=b"FRAM")

    def pack(self) -> bytes:
        """Serialise the header to its fixed-size binary form."""
        return self._FORMAT.pack(
            self.frame_prefix, self.capture_frameno, self.ynum, self.unum, self.vnum
        )

    @classmethod
    def unpack(cls, data: bytes) -> "FrameHeader":
        """Read a header from exactly ``SIZE`` bytes."""
        if len(data) != cls.SIZE:
            raise ValueError(f"frame header must be {cls.SIZE} bytes, got {len(data)}")
        prefix, frameno, ynum, unum, vnum = cls._FORMAT.unpack(data)
        if prefix != cls.PREFIX:
            raise ValueError(f"bad frame prefix: {prefix!r}")
        return cls(capture_frameno=frameno, ynum=ynum, unum=unum, vnum=vnum, frame_prefix=prefix)