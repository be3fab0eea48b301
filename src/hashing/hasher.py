"""
Fingerprint utilities for file content.
"""

from __future__ import annotations

import struct
from pathlib import Path
from typing import TYPE_CHECKING

from hashing.byte_view import BytesLike
from hashing.xxhash32 import DEFAULT_SEED, hash_bytes, hexdigest

if TYPE_CHECKING:
    from config import AppConfig

FULL_HASH = "xxh32_full"
HYBRID_HASH = "xxh32_hybrid"


class Hasher:
    """Compute full or hybrid xxHash32 fingerprints for files."""

    def __init__(self, full_hash_max_bytes: int, hybrid_chunk_bytes: int, seed: int = DEFAULT_SEED) -> None:
        self.full_hash_max_bytes = full_hash_max_bytes
        self.hybrid_chunk_bytes = hybrid_chunk_bytes
        self.seed = seed

    @classmethod
    def from_config(cls, config: "AppConfig") -> "Hasher":
        return cls(
            full_hash_max_bytes=config.get_int("hashing", "full_hash_max_bytes", default=100 * 1024 * 1024),
            hybrid_chunk_bytes=config.get_int("hashing", "hybrid_chunk_bytes", default=1024 * 1024),
            seed=config.get_int("hashing", "seed", default=DEFAULT_SEED),
        )

    def hash_type_for_size(self, size: int) -> str:
        """Return the hash type based on file size."""
        return FULL_HASH if size <= self.full_hash_max_bytes else HYBRID_HASH

    def compute(self, path: Path, size: int, hash_type: str) -> str:
        """Compute the requested hash type for a file."""
        if hash_type == FULL_HASH:
            return self._full(path)
        if hash_type == HYBRID_HASH:
            return self._hybrid(path, size)
        raise ValueError(f"Unsupported hash type: {hash_type}")

    def compute_bytes(self, data: BytesLike) -> str:
        return hexdigest(hash_bytes(data, seed=self.seed))

    def _full(self, path: Path) -> str:
        # Single-shot: the whole file is in memory for one hash call.
        return self.compute_bytes(path.read_bytes())

    def _hybrid(self, path: Path, size: int) -> str:
        """Fingerprint the size plus head, middle and tail segments."""
        chunk = self.hybrid_chunk_bytes
        if size <= chunk * 3:
            return self._full(path)

        buffer = bytearray(struct.pack("<Q", size))
        with path.open("rb") as handle:
            buffer += handle.read(chunk)
            middle_offset = max((size // 2) - (chunk // 2), 0)
            handle.seek(middle_offset)
            buffer += handle.read(chunk)
            tail_offset = max(size - chunk, 0)
            handle.seek(tail_offset)
            buffer += handle.read(chunk)
        return self.compute_bytes(buffer)
