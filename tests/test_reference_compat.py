import random

import pytest
import xxhash

from hashing.xxhash32 import MASK64, hash_bytes, hash_long, hash_text


@pytest.mark.parametrize("length", [0, 1, 3, 4, 5, 8, 15, 16, 31, 32, 33, 63, 64, 65, 127, 1000, 4099])
def test_matches_xxh64_reference(length: int) -> None:
    rng = random.Random(length)
    data = bytes(rng.getrandbits(8) for _ in range(length))
    for seed in (0, 1, 0x9E3779B185EBCA87, MASK64):
        assert hash_bytes(data, seed=seed) == xxhash.xxh64_intdigest(data, seed=seed)


def test_text_and_long_match_xxh64_reference() -> None:
    assert hash_text("content fingerprint") == xxhash.xxh64_intdigest("content fingerprint".encode("utf-8"))
    value = 0xCAFEBABEDEADBEEF
    assert hash_long(value) == xxhash.xxh64_intdigest(value.to_bytes(8, "little"))
