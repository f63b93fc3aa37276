"""Elliptic-curve signer: secp256k1 (Ethereum)."""

from .secp256k1 import (derive_address, privkey_to_pubkey, recover_address,
                        recover_pubkey, sign_digest)

__all__: tuple[str, ...] = (
    "derive_address",
    "privkey_to_pubkey",
    "recover_address",
    "recover_pubkey",
    "sign_digest",
)
