"""
Hex encoding at the API boundary.

Output is always lowercase with an even number of digits. Input may carry an
optional ``0x``/``0X`` prefix but nothing else: no whitespace, no separators,
no odd digit counts.
"""

from __future__ import annotations

import string

from ..errors import HexFormatError
from ..hashes import keccak256

_HEX_DIGITS = frozenset(string.hexdigits)


def strip_hex_prefix(text: str) -> str:
    return text[2:] if text[:2] in ("0x", "0X") else text


def from_hex(text: str) -> bytes:
    """
    Decode a hex string.

    Args:
        text: Hex digits, optionally prefixed with ``0x``.

    Returns:
        Decoded bytes.

    Raises:
        HexFormatError: Odd digit count or any non-hex character.
    """
    if not isinstance(text, str):
        raise HexFormatError(f"expected hex string, got {type(text).__name__}")
    body = strip_hex_prefix(text)
    if len(body) % 2:
        raise HexFormatError(f"odd number of hex digits in {text!r}")
    bad = next((c for c in body if c not in _HEX_DIGITS), None)
    if bad is not None:
        raise HexFormatError(f"invalid hex character {bad!r} in {text!r}")
    return bytes.fromhex(body)


def to_hex(data: bytes, prefix: bool = True) -> str:
    """Lowercase hex of ``data``, ``0x``-prefixed unless ``prefix`` is False."""
    body = bytes(data).hex()
    return "0x" + body if prefix else body


def to_checksum_address(address: bytes | str) -> str:
    """EIP-55 mixed-case form of a 20-byte address."""
    raw = from_hex(address) if isinstance(address, str) else bytes(address)
    if len(raw) != 20:
        raise HexFormatError(f"address must be 20 bytes, got {len(raw)}")
    lower = raw.hex()
    nibbles = keccak256(lower.encode("ascii")).hex()
    return "0x" + "".join(
        c.upper() if int(n, 16) >= 8 else c for c, n in zip(lower, nibbles)
    )


__all__: tuple[str, ...] = (
    "from_hex",
    "strip_hex_prefix",
    "to_checksum_address",
    "to_hex",
)
