#!/usr/bin/env python3
"""Example: sign an EIP-2612 style Permit and split the signature."""

import logging

from typedsig import (TypedData, derive_address, from_hex,
                      recover_typed_data_signer, sign_typed_data,
                      split_signature, to_checksum_address, to_hex, type_hash)

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

owner_key = from_hex("9e99449797b670840f53a749df174a19772bcd4c6b52e976ab139812d4646f0a")
owner = derive_address(owner_key)
spender = from_hex("0D1d31abea2384b0D5add552E3a9b9F66d57e141")
token = from_hex("f925e7d14E89736700B73CA27ECceeB0A088383f")
print("owner address:", to_checksum_address(owner))
print("spender address:", to_checksum_address(spender))

permit = TypedData.from_dict(
    {
        "types": {
            "EIP712Domain": [
                {"name": "name", "type": "string"},
                {"name": "version", "type": "string"},
                {"name": "chainId", "type": "uint256"},
                {"name": "verifyingContract", "type": "address"},
            ],
            "Permit": [
                {"name": "owner", "type": "address"},
                {"name": "spender", "type": "address"},
                {"name": "value", "type": "uint256"},
                {"name": "nonce", "type": "uint256"},
                {"name": "deadline", "type": "uint256"},
            ],
        },
        "primaryType": "Permit",
        "domain": {
            "name": "Fixed Income Asset Token",
            "version": "1",
            "chainId": "99",
            "verifyingContract": to_hex(token),
        },
        "message": {
            "owner": to_hex(owner),
            "spender": to_hex(spender),
            "value": "0x" + "ff" * 32,
            "nonce": 0,
            "deadline": "0x" + "ff" * 32,
        },
    }
)

print("EIP712Domain hash:", to_hex(permit.domain_separator()))
print("Permit typehash:", to_hex(type_hash(permit.registry, "Permit")))
print("Permit hash:", to_hex(permit.message_hash()))

signature = sign_typed_data(permit, owner_key)
print("signed permit:", to_hex(signature))
r, s, v = split_signature(signature)
print("r:", to_hex(r))
print("s:", to_hex(s))
print("v:", v)
assert recover_typed_data_signer(permit, signature) == owner
