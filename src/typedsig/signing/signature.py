"""Packed 65-byte ECDSA signatures: r (32) || s (32) || v (1)."""

from __future__ import annotations

from typing import NamedTuple

from ..errors import InvalidComponentLength, InvalidSignatureLength

SIGNATURE_LENGTH = 65


class Signature(NamedTuple):
    r: bytes
    s: bytes
    v: int

    def to_bytes(self) -> bytes:
        return join_signature(self.r, self.s, self.v)

    def hex(self) -> str:
        return "0x" + self.to_bytes().hex()


def split_signature(signature: bytes) -> Signature:
    """
    Split a packed signature into (r, s, v).

    ``v`` is the raw last byte; 0/1 and 27/28 are returned as found.

    Raises:
        InvalidSignatureLength: Input is not exactly 65 bytes (or not bytes at all).
    """
    if not isinstance(signature, (bytes, bytearray)):
        raise InvalidSignatureLength(
            f"signature must be {SIGNATURE_LENGTH} bytes, got {type(signature).__name__}"
        )
    if len(signature) != SIGNATURE_LENGTH:
        raise InvalidSignatureLength(
            f"signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}"
        )
    signature = bytes(signature)
    return Signature(signature[:32], signature[32:64], signature[64])


def join_signature(r: bytes, s: bytes, v: int) -> bytes:
    """
    Pack (r, s, v) into 65 bytes.

    Raises:
        InvalidComponentLength: r or s is not 32 bytes, or v does not fit one byte.
    """
    for label, part in (("r", r), ("s", s)):
        if not isinstance(part, (bytes, bytearray)):
            raise InvalidComponentLength(f"{label} must be bytes, got {type(part).__name__}")
        if len(part) != 32:
            raise InvalidComponentLength(f"{label} must be 32 bytes, got {len(part)}")
    if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 0xFF:
        raise InvalidComponentLength(f"v must be a single byte, got {v!r}")
    return bytes(r) + bytes(s) + bytes([v])


def normalize_v(v: int) -> int:
    """Map a recovery id 0/1 to the Ethereum 27/28 form."""
    if v in (0, 1):
        return v + 27
    if v in (27, 28):
        return v
    raise InvalidComponentLength(f"unexpected recovery identifier {v!r}")


def recovery_id(v: int) -> int:
    """Map 27/28 (or 0/1) to the raw recovery id 0/1."""
    return normalize_v(v) - 27


__all__: tuple[str, ...] = (
    "SIGNATURE_LENGTH",
    "Signature",
    "join_signature",
    "normalize_v",
    "recovery_id",
    "split_signature",
)
