"""
Keccak-256 as used by Ethereum (original multirate padding, not SHA3-256).

Sponge over a flat 25-lane state, lane (x, y) at index x + 5 * y.
"""

from __future__ import annotations

_MASK64 = (1 << 64) - 1
_RATE = 136  # bytes; 1088-bit rate for a 256-bit digest
_DIGEST_SIZE = 32

_ROUND_CONSTANTS = (
    0x0000000000000001, 0x0000000000008082, 0x800000000000808A, 0x8000000080008000,
    0x000000000000808B, 0x0000000080000001, 0x8000000080008081, 0x8000000000008009,
    0x000000000000008A, 0x0000000000000088, 0x0000000080008009, 0x000000008000000A,
    0x000000008000808B, 0x800000000000008B, 0x8000000000008089, 0x8000000000008003,
    0x8000000000008002, 0x8000000000000080, 0x000000000000800A, 0x800000008000000A,
    0x8000000080008081, 0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
)  # fmt: skip

# Rotation offsets, flat index x + 5 * y.
_ROTATION_OFFSETS = (
    0, 1, 62, 28, 27,
    36, 44, 6, 55, 20,
    3, 10, 43, 25, 39,
    41, 45, 15, 21, 8,
    18, 2, 61, 56, 14,
)  # fmt: skip

# rho + pi: lane (x, y) moves to (y, 2x + 3y) after rotation.
_PI_STEPS = tuple(
    (x + 5 * y, y + 5 * ((2 * x + 3 * y) % 5), _ROTATION_OFFSETS[x + 5 * y])
    for y in range(5)
    for x in range(5)
)


def _rotl(lane: int, n: int) -> int:
    return ((lane << n) | (lane >> (64 - n))) & _MASK64 if n else lane


def _permute(lanes: list[int]) -> None:
    """Keccak-f[1600], 24 rounds, in place."""
    for rc in _ROUND_CONSTANTS:
        # theta
        col = [
            lanes[x] ^ lanes[x + 5] ^ lanes[x + 10] ^ lanes[x + 15] ^ lanes[x + 20]
            for x in range(5)
        ]
        for x in range(5):
            d = col[(x - 1) % 5] ^ _rotl(col[(x + 1) % 5], 1)
            for y in range(0, 25, 5):
                lanes[x + y] ^= d
        # rho and pi
        b = [0] * 25
        for src, dst, rot in _PI_STEPS:
            b[dst] = _rotl(lanes[src], rot)
        # chi
        for y in range(0, 25, 5):
            row = b[y : y + 5]
            for x in range(5):
                lanes[x + y] = row[x] ^ (~row[(x + 1) % 5] & row[(x + 2) % 5])
        # iota
        lanes[0] ^= rc


class Keccak256:
    """Incremental Keccak-256; ``update`` any number of times, then ``digest``."""

    __slots__ = ("_lanes", "_pending")

    def __init__(self, data: bytes = b"") -> None:
        self._lanes = [0] * 25
        self._pending = bytearray()
        if data:
            self.update(data)

    def _absorb(self, block: bytes | bytearray, lanes: list[int]) -> None:
        for i in range(_RATE // 8):
            lanes[i] ^= int.from_bytes(block[8 * i : 8 * i + 8], "little")
        _permute(lanes)

    def update(self, data: bytes) -> "Keccak256":
        self._pending += data
        full = len(self._pending) - len(self._pending) % _RATE
        for off in range(0, full, _RATE):
            self._absorb(self._pending[off : off + _RATE], self._lanes)
        del self._pending[:full]
        return self

    def digest(self) -> bytes:
        """Digest of everything absorbed so far; the hasher stays usable."""
        block = bytearray(self._pending)
        block += b"\x00" * (_RATE - len(block))
        block[len(self._pending)] ^= 0x01
        block[-1] ^= 0x80
        lanes = list(self._lanes)
        self._absorb(block, lanes)
        # 32 bytes fit in the first four lanes, no second squeeze needed.
        out = b"".join(lane.to_bytes(8, "little") for lane in lanes[:4])
        return out[:_DIGEST_SIZE]

    def hexdigest(self) -> str:
        return self.digest().hex()


def keccak256(data: bytes) -> bytes:
    """
    Keccak-256 hash (256-bit output, multirate padding).

    Args:
        data: Input bytes (any length).

    Returns:
        32-byte digest.
    """
    return Keccak256(bytes(data)).digest()


__all__: tuple[str, ...] = ("Keccak256", "keccak256")
