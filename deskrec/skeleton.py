"""Ogg Skeleton header packets: the fishead and fisbone records."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar

SKELETON_VERSION_MAJOR = 3
SKELETON_VERSION_MINOR = 0
FISHEAD_IDENTIFIER = b"fishead\x00"
FISBONE_IDENTIFIER = b"fisbone\x00"
FISHEAD_SIZE = 64
FISBONE_SIZE = 52
FISBONE_MESSAGE_HEADER_OFFSET = 44
UTC_SIZE = 20


class SkeletonError(ValueError):
    """Raised when a skeleton packet cannot be decoded."""


@dataclass
class FisheadPacket:
    """The fishead packet that opens a skeleton bitstream."""

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<8sHHqqqq20s")

    ptime_n: int = 0
    ptime_d: int = 1000
    btime_n: int = 0
    btime_d: int = 1000
    version_major: int = SKELETON_VERSION_MAJOR
    version_minor: int = SKELETON_VERSION_MINOR
    utc: bytes = bytes(UTC_SIZE)

    def to_bytes(self) -> bytes:
        """Encode the packet; the version written is always this module's own."""
        # The UTC field is always written as zeros.
        return self._FORMAT.pack(
            FISHEAD_IDENTIFIER,
            SKELETON_VERSION_MAJOR,
            SKELETON_VERSION_MINOR,
            self.ptime_n,
            self.ptime_d,
            self.btime_n,
            self.btime_d,
            bytes(UTC_SIZE),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "FisheadPacket":
        """Decode a fishead packet body."""
        data = bytes(data)
        if data[:8] != FISHEAD_IDENTIFIER:
            raise SkeletonError("not a fishead packet")
        if len(data) < FISHEAD_SIZE:
            raise SkeletonError(
                f"fishead packet must be {FISHEAD_SIZE} bytes, got {len(data)}"
            )
        _, major, minor, ptime_n, ptime_d, btime_n, btime_d, utc = cls._FORMAT.unpack(
            data[:FISHEAD_SIZE]
        )
        return cls(
            ptime_n=ptime_n,
            ptime_d=ptime_d,
            btime_n=btime_n,
            btime_d=btime_d,
            version_major=major,
            version_minor=minor,
            utc=utc,
        )


@dataclass
class FisbonePacket:
    """A fisbone packet describing one logical stream of the presentation."""

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<8sIIIqqqIB3x")

    serial_no: int = 0
    nr_header_packet: int = 0
    granule_rate_n: int = 0
    granule_rate_d: int = 1
    start_granule: int = 0
    preroll: int = 0
    granule_shift: int = 0
    message_header_fields: bytes = field(default=b"")

    def add_message_header_field(self, key: str, value: str) -> None:
        """Append a ``key: value`` message header line."""
        self.message_header_fields += f"{key}: {value}\r\n".encode("utf-8")

    @property
    def current_header_size(self) -> int:
        """Total size in bytes of the message header fields."""
        return len(self.message_header_fields)

    def to_bytes(self) -> bytes:
        """Encode the packet with its message header fields appended."""
        head = self._FORMAT.pack(
            FISBONE_IDENTIFIER,
            FISBONE_MESSAGE_HEADER_OFFSET,
            self.serial_no,
            self.nr_header_packet,
            self.granule_rate_n,
            self.granule_rate_d,
            self.start_granule,
            self.preroll,
            self.granule_shift,
        )
        return head + self.message_header_fields

    @classmethod
    def from_bytes(cls, data: bytes) -> "FisbonePacket":
        """Decode a fisbone packet body."""
        data = bytes(data)
        if data[:8] != FISBONE_IDENTIFIER:
            raise SkeletonError("not a fisbone packet")
        if len(data) < FISBONE_SIZE:
            raise SkeletonError(
                f"fisbone packet must be at least {FISBONE_SIZE} bytes, got {len(data)}"
            )
        (
            _,
            _offset,
            serial_no,
            nr_header_packet,
            rate_n,
            rate_d,
            start_granule,
            preroll,
            shift,
        ) = cls._FORMAT.unpack(data[:FISBONE_SIZE])
        return cls(
            serial_no=serial_no,
            nr_header_packet=nr_header_packet,
            granule_rate_n=rate_n,
            granule_rate_d=rate_d,
            start_granule=start_granule,
            preroll=preroll,
            granule_shift=shift,
            message_header_fields=data[FISBONE_SIZE:],
        )


def write_ogg_page(header: bytes, body: bytes, out: BinaryIO) -> int:
    """Write an Ogg page's header and body; return the number of bytes written.

    The body is written only if some of the header was.
    """
    written = out.write(header) or 0
    if written > 0:
        written += out.write(body) or 0
    return written