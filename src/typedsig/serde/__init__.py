"""Boundary formatting: exact hex strings and checksummed addresses."""

from .hexstr import from_hex, to_checksum_address, to_hex

__all__: tuple[str, ...] = ("from_hex", "to_checksum_address", "to_hex")
