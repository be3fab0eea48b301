import struct
from pathlib import Path

import pytest

from config import AppConfig
from hashing.hasher import FULL_HASH, HYBRID_HASH, Hasher
from hashing.xxhash32 import hash_bytes, hexdigest


def test_full_hash_matches_single_shot_digest(tmp_path: Path) -> None:
    path = tmp_path / "small.txt"
    content = b"hash me"
    path.write_bytes(content)

    hasher = Hasher(full_hash_max_bytes=1024, hybrid_chunk_bytes=4)
    hash_type = hasher.hash_type_for_size(len(content))

    assert hash_type == FULL_HASH
    assert hasher.compute(path, len(content), hash_type) == hexdigest(hash_bytes(content))


def test_hybrid_hash_covers_size_and_segments(tmp_path: Path) -> None:
    path = tmp_path / "large.bin"
    content = bytearray(b"0123456789" * 5)
    path.write_bytes(content)

    hasher = Hasher(full_hash_max_bytes=10, hybrid_chunk_bytes=4)
    hash_type = hasher.hash_type_for_size(len(content))

    assert hash_type == HYBRID_HASH
    original = hasher.compute(path, len(content), hash_type)
    expected = struct.pack("<Q", 50) + bytes(content[:4]) + bytes(content[23:27]) + bytes(content[46:])
    assert original == hexdigest(hash_bytes(expected))

    content[25] ^= 0xFF
    path.write_bytes(content)
    modified = hasher.compute(path, len(content), hash_type)

    assert original != modified


def test_hybrid_falls_back_to_full_for_small_files(tmp_path: Path) -> None:
    path = tmp_path / "tiny.bin"
    path.write_bytes(b"abcdefghij")

    hasher = Hasher(full_hash_max_bytes=1, hybrid_chunk_bytes=4)

    assert hasher.compute(path, 10, HYBRID_HASH) == hexdigest(hash_bytes(b"abcdefghij"))


def test_seed_changes_fingerprint() -> None:
    plain = Hasher(full_hash_max_bytes=1024, hybrid_chunk_bytes=4)
    seeded = Hasher(full_hash_max_bytes=1024, hybrid_chunk_bytes=4, seed=0x2A)

    assert plain.compute_bytes(b"same") != seeded.compute_bytes(b"same")
    assert seeded.compute_bytes(b"same") == hexdigest(hash_bytes(b"same", seed=0x2A))


def test_unknown_hash_type_is_rejected(tmp_path: Path) -> None:
    hasher = Hasher(full_hash_max_bytes=1024, hybrid_chunk_bytes=4)
    with pytest.raises(ValueError):
        hasher.compute(tmp_path / "x", 0, "sha256_full")


def test_from_config_reads_hashing_section() -> None:
    config = AppConfig.from_dict(
        {"hashing": {"seed": "0x2A", "full_hash_max_bytes": 64, "hybrid_chunk_bytes": 8}}
    )
    hasher = Hasher.from_config(config)

    assert hasher.seed == 42
    assert hasher.full_hash_max_bytes == 64
    assert hasher.hybrid_chunk_bytes == 8
