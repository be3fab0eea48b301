"""
Addressable byte views with a single upfront bounds check.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]

_BLOCK = struct.Struct("<4Q")
_LONG = struct.Struct("<Q")
_INT = struct.Struct("<I")


class BoundsViolationError(IndexError):
    """Raised when an offset/length pair falls outside a byte view."""


def check_position_indexes(offset: int, length: int, size: int) -> None:
    """Reject negative positions or ranges that run past ``size``."""
    if offset < 0:
        raise BoundsViolationError(f"offset ({offset}) must not be negative")
    if length < 0:
        raise BoundsViolationError(f"length ({length}) must not be negative")
    if offset + length > size:
        raise BoundsViolationError(
            f"offset ({offset}) + length ({length}) exceeds view length ({size})"
        )


@dataclass(frozen=True)
class ByteView:
    """Read-only window over a buffer: base + start address + length."""

    base: memoryview
    address: int
    length: int

    def __post_init__(self) -> None:
        check_position_indexes(self.address, self.length, self.base.nbytes)

    @classmethod
    def wrap(cls, data: BytesLike) -> "ByteView":
        """Build a view over the whole of a bytes-like object."""
        base = memoryview(data)
        if not base.c_contiguous:
            base = memoryview(base.tobytes())
        if base.format != "B" or base.ndim != 1:
            base = base.cast("B")
        return cls(base=base, address=0, length=base.nbytes)

    @classmethod
    def utf8(cls, text: str) -> "ByteView":
        """Build a view over the UTF-8 encoding of ``text``."""
        return cls.wrap(text.encode("utf-8"))

    def __len__(self) -> int:
        return self.length

    def check_position_indexes(self, offset: int, length: int) -> None:
        check_position_indexes(offset, length, self.length)

    def slice(self, offset: int, length: int) -> "ByteView":
        """Return a sub-view sharing this view's base buffer."""
        self.check_position_indexes(offset, length)
        return ByteView(base=self.base, address=self.address + offset, length=length)

    # Unchecked reads; callers validate the range first.
    def get_block(self, position: int) -> tuple[int, int, int, int]:
        """Read four consecutive little-endian 64-bit words."""
        return _BLOCK.unpack_from(self.base, self.address + position)

    def get_long(self, position: int) -> int:
        return _LONG.unpack_from(self.base, self.address + position)[0]

    def get_int(self, position: int) -> int:
        return _INT.unpack_from(self.base, self.address + position)[0]

    def get_byte(self, position: int) -> int:
        return self.base[self.address + position]

    def tobytes(self) -> bytes:
        return self.base[self.address : self.address + self.length].tobytes()
