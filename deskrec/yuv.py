"""Conversion of captured RGB pixel data into planar YUV 4:2:0 buffers."""

from __future__ import annotations

import math
import struct
import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Optional, Sequence, Tuple

# Width in pixels of the square blocks the planes are split into for caching.
Y_UNIT_WIDTH = 0x0010
UV_UNIT_WIDTH = 0x0008

# Cursor images from XFixes arrive as one unsigned long per pixel.
ULONG_SIZE = struct.calcsize("L")

if sys.byteorder == "little":
    ABYTE, RBYTE, GBYTE, BBYTE = 3, 2, 1, 0
else:
    ABYTE, RBYTE, GBYTE, BBYTE = 0, 1, 2, 3

R16_MASK = 0xF800
G16_MASK = 0x07E0
B16_MASK = 0x001F

_MASKS32 = (0x00FF0000, 0x0000FF00, 0x000000FF)
_MASKS16 = (R16_MASK, G16_MASK, B16_MASK)

_UCHAR_MAX = 255


class Sampling(IntEnum):
    """How chroma is taken from each 2x2 block of pixels."""

    DISCARD = 0  # keep only the top-left pixel of the block
    AVERAGE = 1  # average all four pixels


@dataclass(frozen=True)
class ColorTables:
    """Per-channel lookup tables for RGB to YCbCr conversion (BT.601)."""

    yr: Tuple[int, ...]
    yg: Tuple[int, ...]
    yb: Tuple[int, ...]
    ur: Tuple[int, ...]
    ug: Tuple[int, ...]
    ubvr: Tuple[int, ...]
    vg: Tuple[int, ...]
    vb: Tuple[int, ...]

    def luma(self, r: int, g: int, b: int) -> int:
        return (self.yr[r] + self.yg[g] + self.yb[b]) & 0xFF

    def chroma_u(self, r: int, g: int, b: int) -> int:
        return (self.ur[r] + self.ug[g] + self.ubvr[b]) & 0xFF

    def chroma_v(self, r: int, g: int, b: int) -> int:
        return (self.ubvr[r] + self.vg[g] + self.vb[b]) & 0xFF


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _roundf(value: float) -> int:
    magnitude = math.floor(abs(value) + 0.5)
    return int(magnitude) if value >= 0 else -int(magnitude)


def _to_uchar(value: float) -> int:
    return _roundf(value) & 0xFF


def make_matrices() -> ColorTables:
    """Build the lookup tables, assuming 8-bit precision and single floats."""
    y_scale, y_offset = _f32(219.0), _f32(16.0)
    c_scale, c_offset = _f32(224.0), _f32(128.0)
    rgb_scale = _f32(255.0)

    r = _f32(0.299)
    b = _f32(0.114)
    g = _f32(1.0 - r - b)

    yr = _f32(_f32(r * y_scale) / rgb_scale)
    yg = _f32(_f32(g * y_scale) / rgb_scale)
    yb = _f32(_f32(b * y_scale) / rgb_scale)
    ur = _f32((-0.5 * r / _f32(1 - b)) * c_scale / rgb_scale)
    ug = _f32((-0.5 * g / _f32(1 - b)) * c_scale / rgb_scale)
    ub = _f32(0.5 * c_scale / rgb_scale)
    vg = _f32((-0.5 * g / _f32(1 - r)) * c_scale / rgb_scale)
    vb = _f32((-0.5 * b / _f32(1 - r)) * c_scale / rgb_scale)

    steps = range(256)
    return ColorTables(
        yr=tuple(_to_uchar(_f32(y_offset + _f32(yr * i))) for i in steps),
        yg=tuple(_to_uchar(_f32(yg * i)) for i in steps),
        yb=tuple(_to_uchar(_f32(yb * i)) for i in steps),
        ur=tuple(_to_uchar(_f32(c_offset + _f32(ur * i))) for i in steps),
        ug=tuple(_to_uchar(_f32(ug * i)) for i in steps),
        ubvr=tuple(_to_uchar(_f32(ub * i)) for i in steps),
        vg=tuple(_to_uchar(_f32(vg * i)) for i in steps),
        vb=tuple(_to_uchar(_f32(c_offset + _f32(vb * i))) for i in steps),
    )


_TABLES = make_matrices()


def rgb_from_32(value: int) -> Tuple[int, int, int]:
    """Split a 24/32-bit pixel value into its red, green and blue bytes."""
    return (value & 0x00FF0000) >> 16, (value & 0x0000FF00) >> 8, value & 0x000000FF


def rgb_from_16(value: int) -> Tuple[int, int, int]:
    """Split a 5-6-5 pixel value into red, green and blue scaled to 8 bits."""
    return (
        ((value & R16_MASK) >> 11) * 8,
        ((value & G16_MASK) >> 5) * 4,
        (value & B16_MASK) * 8,
    )


@dataclass
class YuvBuffer:
    """Planar 4:2:0 image: a full-size Y plane and half-size U and V planes."""

    y_width: int
    y_height: int
    y_stride: int = field(init=False)
    uv_width: int = field(init=False)
    uv_height: int = field(init=False)
    uv_stride: int = field(init=False)
    y: bytearray = field(init=False, repr=False)
    u: bytearray = field(init=False, repr=False)
    v: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.y_width <= 0 or self.y_height <= 0:
            raise ValueError("buffer dimensions must be positive")
        self.y_stride = self.y_width
        self.uv_width = self.y_width // 2
        self.uv_height = self.y_height // 2
        self.uv_stride = self.uv_width
        self.y = bytearray(self.y_stride * self.y_height)
        self.u = bytearray(self.uv_stride * self.uv_height)
        self.v = bytearray(self.uv_stride * self.uv_height)


class BlockMap:
    """Flags for the square blocks of a plane that changed since the last frame."""

    def __init__(self, width: int, height: int, unit: int = Y_UNIT_WIDTH) -> None:
        if width <= 0 or height <= 0 or unit <= 0:
            raise ValueError("block map dimensions must be positive")
        self.width = width
        self.height = height
        self.unit = unit
        size = ((height - 1) // unit) * (width // unit) + (width - 1) // unit + 1
        self.flags = bytearray(size)

    def _index(self, x: int, y: int) -> int:
        return (y // self.unit) * (self.width // self.unit) + x // self.unit

    def mark(self, x: int, y: int) -> None:
        """Flag the block holding pixel (x, y) as changed."""
        self.flags[self._index(x, y)] = 1

    def clear(self) -> None:
        """Reset every block to unchanged."""
        self.flags[:] = bytes(len(self.flags))

    def __contains__(self, point: Tuple[int, int]) -> bool:
        x, y = point
        return bool(self.flags[self._index(x, y)])


def _pixels(data, fmt: str, count: int) -> Sequence[int]:
    view = memoryview(data).cast("B").cast(fmt)
    if len(view) < count:
        raise ValueError(f"pixel data holds {len(view)} pixels, {count} needed")
    return view


def _average(values: Sequence[int], masks: Sequence[int]) -> int:
    return sum(((sum(v & m for v in values)) // 4) & m for m in masks)


def _fill_y(yuv, pix, back, x, y, width, height, split, tables, yblocks) -> None:
    for k in range(height):
        row = (y + k) * yuv.y_stride + x
        for i in range(width):
            pos = k * width + i
            value = pix[pos]
            if back is not None:
                if value == back[pos]:
                    continue
                yblocks.mark(x + i, y + k)
            yuv.y[row + i] = tables.luma(*split(value))


def _fill_uv(
    yuv, pix, back, x, y, width, height, average, split, masks, tables, ublocks, vblocks
) -> None:
    for k in range(0, height - height % 2, 2):
        row = ((y >> 1) + k // 2) * yuv.uv_stride + (x >> 1)
        for i in range(0, width - width % 2, 2):
            base = k * width + i
            quad = (base, base + 1, base + width, base + width + 1) if average else (base,)
            if back is not None:
                if all(pix[q] == back[q] for q in quad):
                    continue
                ublocks.mark(x + i, y + k)
                vblocks.mark(x + i, y + k)
            value = _average([pix[q] for q in quad], masks) if average else pix[base]
            rgb = split(value)
            idx = row + i // 2
            yuv.u[idx] = tables.chroma_u(*rgb)
            yuv.v[idx] = tables.chroma_v(*rgb)


def update_yuv_buffer(
    yuv: YuvBuffer,
    data,
    data_back,
    x: int,
    y: int,
    width: int,
    height: int,
    sampling,
    depth: int,
    blocks: Optional[Sequence[BlockMap]] = None,
) -> None:
    """Convert a width x height region of RGB pixels into ``yuv`` at (x, y).

    When ``data_back`` (the previous frame of the region) is given, only
    changed pixels are converted and the blocks they fall in are marked in
    ``blocks``, a sequence of the Y, U and V block maps.
    """
    if depth in (24, 32):
        fmt, split, masks = "I", rgb_from_32, _MASKS32
    elif depth == 16:
        fmt, split, masks = "H", rgb_from_16, _MASKS16
    else:
        raise ValueError(f"unsupported colour depth: {depth}")

    count = width * height
    pix = _pixels(data, fmt, count)
    average = Sampling(sampling) == Sampling.AVERAGE

    if data_back is None:
        back = None
        yblocks = ublocks = vblocks = None
    else:
        if blocks is None:
            raise ValueError("block maps are required when comparing with a back buffer")
        yblocks, ublocks, vblocks = blocks
        back = _pixels(data_back, fmt, count)

    _fill_y(yuv, pix, back, x, y, width, height, split, _TABLES, yblocks)
    _fill_uv(
        yuv, pix, back, x, y, width, height, average, split, masks, _TABLES, ublocks, vblocks
    )


def dummy_pointer_to_yuv(
    yuv: YuvBuffer,
    data,
    x: int,
    y: int,
    width: int,
    height: int,
    x_offset: int,
    y_offset: int,
    no_pixel: int,
) -> None:
    """Draw the 16-pixel-wide built-in pointer image onto ``yuv`` at (x, y)."""
    t = _TABLES
    x_2, y_2 = x // 2, y // 2
    uv_line = yuv.y_width // 2
    for k in range(y_offset, y_offset + height):
        for i in range(x_offset, x_offset + width):
            j = (k * 16 + i) * 4
            if data[j] == no_pixel:
                continue
            yuv.y[x + (i - x_offset) + ((k - y_offset) + y) * yuv.y_width] = t.luma(
                data[j + RBYTE], data[j + GBYTE], data[j + BBYTE]
            )
            if k % 2 and i % 2:
                src = (k * width + i) * 4
                rgb = (data[src + RBYTE], data[src + GBYTE], data[src + BBYTE])
                idx = x_2 + (i - x_offset) // 2 + ((k - y_offset) // 2 + y_2) * uv_line
                yuv.u[idx] = t.chroma_u(*rgb)
                yuv.v[idx] = t.chroma_v(*rgb)


def _avg_4_pixels(data, line: int, k: int, i: int, offset: int) -> int:
    s = ULONG_SIZE
    return (
        data[(k * line + i) * s + offset]
        + data[((k - 1) * line + i) * s + offset]
        + data[(k * line + i - 1) * s + offset]
        + data[((k - 1) * line + i - 1) * s + offset]
    ) >> 2


def _blend(old: int, new: int, alpha: int) -> int:
    return (old * (_UCHAR_MAX - alpha) + new * alpha) // _UCHAR_MAX


def xfixes_pointer_to_yuv(
    yuv: YuvBuffer,
    data,
    x: int,
    y: int,
    width: int,
    height: int,
    x_offset: int,
    y_offset: int,
    column_discard_stride: int,
) -> None:
    """Alpha-blend an XFixes cursor image (one unsigned long per pixel) onto ``yuv``."""
    t = _TABLES
    s = ULONG_SIZE
    line = width + column_discard_stride
    x_2, y_2 = x // 2, y // 2
    for k in range(y_offset, y_offset + height):
        for i in range(x_offset, x_offset + width):
            j = (k * line + i) * s
            y_idx = x + (i - x_offset) + (k + y - y_offset) * yuv.y_width
            luma = t.yr[data[j + RBYTE]] + t.yg[data[j + GBYTE]] + t.yb[data[j + BBYTE]]
            yuv.y[y_idx] = _blend(yuv.y[y_idx], luma % 256, data[j + ABYTE])

            if k % 2 and i % 2:
                idx = x_2 + (i - x_offset) // 2 + ((k - y_offset) // 2 + y_2) * yuv.uv_width
                a = _avg_4_pixels(data, line, k, i, ABYTE)
                r = _avg_4_pixels(data, line, k, i, RBYTE)
                g = _avg_4_pixels(data, line, k, i, GBYTE)
                b = _avg_4_pixels(data, line, k, i, BBYTE)
                u_new = (t.ur[r] + t.ug[g] + t.ubvr[b]) % 256
                v_new = (t.ubvr[r] + t.vg[g] + t.vb[b]) % 256
                yuv.u[idx] = _blend(yuv.u[idx], u_new, a)
                yuv.v[idx] = _blend(yuv.v[idx], v_new, a)