"""
Seedable 64-bit content fingerprints.
"""

from .byte_view import BoundsViolationError, ByteView
from .engine import FingerprintEngine, FingerprintReport, FingerprintResult, FingerprintStats
from .hasher import Hasher
from .xxhash32 import DEFAULT_SEED, hash_bytes, hash_long, hash_text, hexdigest, to_signed

__all__ = [
    "BoundsViolationError",
    "ByteView",
    "DEFAULT_SEED",
    "FingerprintEngine",
    "FingerprintReport",
    "FingerprintResult",
    "FingerprintStats",
    "Hasher",
    "hash_bytes",
    "hash_long",
    "hash_text",
    "hexdigest",
    "to_signed",
]
