"""
Seedable 64-bit fingerprints from the xxHash family.

This variant keeps the xxHash32 name but is 64-bit throughout: four 8-byte
lanes per 32-byte block, 64-bit primes and a 64-bit digest. Stored digests
depend on every constant, rotate amount and mixing step below staying
exactly as they are.
"""

from __future__ import annotations

from typing import Optional, Union

from hashing.byte_view import BytesLike, ByteView

MASK64 = 0xFFFFFFFFFFFFFFFF

PRIME_1 = 0x9E3779B185EBCA87
PRIME_2 = 0xC2B2AE3D27D4EB4F
PRIME_3 = 0x165667B19E3779F9
PRIME_4 = 0x85EBCA77C2B2AE63
PRIME_5 = 0x27D4EB2F165667C5

DEFAULT_SEED = 0
SIZE_OF_LONG = 8
BLOCK_SIZE = 32


def _rotl(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (64 - bits))) & MASK64


def _mix(current: int, value: int) -> int:
    return (_rotl((current + value * PRIME_2) & MASK64, 31) * PRIME_1) & MASK64


def _update(hash_value: int, value: int) -> int:
    temp = hash_value ^ _mix(0, value)
    return (temp * PRIME_1 + PRIME_4) & MASK64


def _update_tail_long(hash_value: int, value: int) -> int:
    temp = hash_value ^ _mix(0, value)
    return (_rotl(temp, 27) * PRIME_1 + PRIME_4) & MASK64


def _update_tail_int(hash_value: int, value: int) -> int:
    temp = hash_value ^ ((value * PRIME_1) & MASK64)
    return (_rotl(temp, 23) * PRIME_2 + PRIME_3) & MASK64


def _update_tail_byte(hash_value: int, value: int) -> int:
    temp = hash_value ^ ((value * PRIME_5) & MASK64)
    return (_rotl(temp, 11) * PRIME_1) & MASK64


def _final_shuffle(hash_value: int) -> int:
    hash_value ^= hash_value >> 33
    hash_value = (hash_value * PRIME_2) & MASK64
    hash_value ^= hash_value >> 29
    hash_value = (hash_value * PRIME_3) & MASK64
    hash_value ^= hash_value >> 32
    return hash_value


def hash_bytes(
    data: Union[ByteView, BytesLike],
    seed: int = DEFAULT_SEED,
    offset: int = 0,
    length: Optional[int] = None,
) -> int:
    """Hash ``length`` bytes of ``data`` starting at ``offset``.

    ``length`` defaults to the rest of the view. Raises
    ``BoundsViolationError`` when the range does not fit inside ``data``.
    Negative seeds are taken modulo 2**64, so a signed 64-bit seed gives
    the same digest as its unsigned twin.
    """
    view = data if isinstance(data, ByteView) else ByteView.wrap(data)
    if length is None:
        view.check_position_indexes(offset, 0)
        length = view.length - offset
    view.check_position_indexes(offset, length)

    seed &= MASK64
    position = offset
    end = offset + length

    if length >= BLOCK_SIZE:
        v1 = (seed + PRIME_1 + PRIME_2) & MASK64
        v2 = (seed + PRIME_2) & MASK64
        v3 = seed
        v4 = (seed - PRIME_1) & MASK64

        limit = end - BLOCK_SIZE
        while position <= limit:
            w1, w2, w3, w4 = view.get_block(position)
            v1 = _mix(v1, w1)
            v2 = _mix(v2, w2)
            v3 = _mix(v3, w3)
            v4 = _mix(v4, w4)
            position += BLOCK_SIZE

        hash_value = (_rotl(v1, 1) + _rotl(v2, 7) + _rotl(v3, 12) + _rotl(v4, 18)) & MASK64
        hash_value = _update(hash_value, v1)
        hash_value = _update(hash_value, v2)
        hash_value = _update(hash_value, v3)
        hash_value = _update(hash_value, v4)
    else:
        hash_value = (seed + PRIME_5) & MASK64

    hash_value = (hash_value + length) & MASK64

    while position <= end - 8:
        hash_value = _update_tail_long(hash_value, view.get_long(position))
        position += 8

    if position <= end - 4:
        hash_value = _update_tail_int(hash_value, view.get_int(position))
        position += 4

    while position < end:
        hash_value = _update_tail_byte(hash_value, view.get_byte(position))
        position += 1

    return _final_shuffle(hash_value)


def hash_text(text: str) -> int:
    """Hash the UTF-8 encoding of ``text`` with the default seed."""
    return hash_bytes(ByteView.utf8(text))


def hash_long(value: int) -> int:
    """Hash a single 64-bit value as if it were an 8-byte little-endian buffer."""
    hash_value = DEFAULT_SEED + PRIME_5 + SIZE_OF_LONG
    hash_value = _update_tail_long(hash_value, value & MASK64)
    return _final_shuffle(hash_value)


def hexdigest(digest: int) -> str:
    """Format a digest as 16 lowercase hex characters."""
    return f"{digest & MASK64:016x}"


def to_signed(digest: int) -> int:
    """Reinterpret a digest as a signed 64-bit integer."""
    digest &= MASK64
    return digest - (1 << 64) if digest >= 1 << 63 else digest
