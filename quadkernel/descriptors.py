"""Segment descriptors and the global descriptor table of a flat 32-bit memory model."""

from __future__ import annotations

import struct

_MASK32 = 0xFFFFFFFF
_LAYOUT = struct.Struct("<HHBBBB")

DESCRIPTOR_SIZE = _LAYOUT.size
CODE_ACCESS = 0x9A
DATA_ACCESS = 0x92
SEGMENT_LIMIT = 64 * 1024 * 1024


class SegmentDescriptor:
    """An eight-byte x86 segment descriptor."""

    __slots__ = ("_raw",)

    def __init__(self, base: int, limit: int, access: int) -> None:
        base &= _MASK32
        limit &= _MASK32
        if limit <= 65536:
            flags = 0x40
        else:
            # Large limits are stored in 4 KiB pages.
            if (limit & 0xFFF) != 0xFFF:
                limit = (limit >> 12) - 1
            else:
                limit >>= 12
            flags = 0xC0
        flags |= (limit >> 16) & 0xF
        self._raw = _LAYOUT.pack(
            limit & 0xFFFF,
            base & 0xFFFF,
            (base >> 16) & 0xFF,
            access & 0xFF,
            flags,
            (base >> 24) & 0xFF,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> SegmentDescriptor:
        """Build a descriptor from its eight encoded bytes."""
        raw = bytes(data)
        if len(raw) != DESCRIPTOR_SIZE:
            raise ValueError(
                f"a segment descriptor is {DESCRIPTOR_SIZE} bytes, got {len(raw)}"
            )
        descriptor = cls.__new__(cls)
        descriptor._raw = raw
        return descriptor

    def to_bytes(self) -> bytes:
        """Return the descriptor as it is laid out in memory."""
        return self._raw

    @property
    def access(self) -> int:
        return self._raw[5]

    @property
    def flags(self) -> int:
        return self._raw[6]

    def base(self) -> int:
        """Return the 32-bit segment base."""
        _, base_lo, base_hi, _, _, base_vhi = _LAYOUT.unpack(self._raw)
        return (base_vhi << 24) | (base_hi << 16) | base_lo

    def limit(self) -> int:
        """Return the segment limit as decoded from the descriptor."""
        limit_lo, _, _, _, flags, _ = _LAYOUT.unpack(self._raw)
        result = ((flags & 0xF) << 16) | limit_lo
        # Page scaling is selected by the lowest bit of the flags byte.
        if flags & 0x01:
            result = ((result << 12) | 0xFFF) & _MASK32
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SegmentDescriptor):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"SegmentDescriptor.from_bytes({self._raw!r})"


class GlobalDescriptorTable:
    """A table of null, unused, code and data segments covering 64 MiB."""

    def __init__(self) -> None:
        self.null_segment = SegmentDescriptor(0, 0, 0)
        self.unused_segment = SegmentDescriptor(0, 0, 0)
        self.code_segment = SegmentDescriptor(0, SEGMENT_LIMIT, CODE_ACCESS)
        self.data_segment = SegmentDescriptor(0, SEGMENT_LIMIT, DATA_ACCESS)

    def _segments(self) -> tuple[SegmentDescriptor, ...]:
        return (
            self.null_segment,
            self.unused_segment,
            self.code_segment,
            self.data_segment,
        )

    def _selector(self, segment: SegmentDescriptor) -> int:
        index = next(i for i, s in enumerate(self._segments()) if s is segment)
        return index * DESCRIPTOR_SIZE

    def code_segment_selector(self) -> int:
        """Byte offset of the code segment within the table."""
        return self._selector(self.code_segment)

    def data_segment_selector(self) -> int:
        """Byte offset of the data segment within the table."""
        return self._selector(self.data_segment)

    def to_bytes(self) -> bytes:
        """Return the whole table as it is laid out in memory."""
        return b"".join(segment.to_bytes() for segment in self._segments())