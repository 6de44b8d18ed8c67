"""Half-byte (nibble) paths used as trie keys."""

from typing import Sequence, Tuple


def unpack_nibbles(data: bytes) -> Tuple[int, ...]:
    """Split every byte into its high and low nibble: b'\\x12' -> (1, 2)."""
    nibbles = []
    for byte in data:
        nibbles.append(byte >> 4)
        nibbles.append(byte & 0x0F)
    return tuple(nibbles)


def pack_nibbles(nibbles: Sequence[int]) -> bytes:
    """Inverse of unpack_nibbles. The path must have an even length."""
    if len(nibbles) % 2:
        raise ValueError(f"Cannot pack an odd-length nibble path ({len(nibbles)} nibbles)")
    for nibble in nibbles:
        if not 0 <= nibble <= 0x0F:
            raise ValueError(f"Invalid nibble: {nibble}")
    return bytes(
        (nibbles[i] << 4) | nibbles[i + 1]
        for i in range(0, len(nibbles), 2)
    )
