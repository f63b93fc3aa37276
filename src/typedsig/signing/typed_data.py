"""
EIP-712 signing digest: keccak256(0x19 0x01 || domainSeparator || hashStruct(message)).

``TypedData`` wraps the JSON document accepted by eth_signTypedData
(``types``, ``primaryType``, ``domain``, ``message``).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from ..curves import recover_address, sign_digest
from ..errors import SchemaMismatch
from ..hashes import keccak256
from .registry import TypeRegistry
from .struct_encoder import hash_struct
from .values import to_python

logger = logging.getLogger(__name__)

EIP191_PREFIX = b"\x19\x01"
DEFAULT_DOMAIN_TYPE = "EIP712Domain"

# Canonical EIP712Domain fields, in the order they are declared when inferred.
DOMAIN_FIELDS = (
    ("name", "string"),
    ("version", "string"),
    ("chainId", "uint256"),
    ("verifyingContract", "address"),
    ("salt", "bytes32"),
)


def domain_fields_for(domain: Mapping[str, Any]) -> list[dict[str, str]]:
    """EIP712Domain fields for the keys present in ``domain``."""
    known = dict(DOMAIN_FIELDS)
    unknown = [k for k in domain if k not in known]
    if unknown:
        raise SchemaMismatch(f"invalid domain keys {unknown}")
    return [{"name": k, "type": t} for k, t in DOMAIN_FIELDS if k in domain]


def hash_domain(
    registry: TypeRegistry,
    domain: Any,
    domain_type: str = DEFAULT_DOMAIN_TYPE,
) -> bytes:
    """Domain separator: hashStruct(domain_type, domain)."""
    return hash_struct(registry, domain_type, domain)


def signing_digest(
    registry: TypeRegistry,
    domain: Any,
    primary_type: str,
    message: Any,
    domain_type: str = DEFAULT_DOMAIN_TYPE,
) -> bytes:
    """
    The 32-byte digest handed to the signer.

    Args:
        registry: Registry with ``domain_type``, ``primary_type`` and their dependencies.
        domain: Domain record (RecordValue or mapping).
        primary_type: Struct type of ``message``.
        message: Message record.
        domain_type: Name of the domain struct, ``EIP712Domain`` by default.

    Returns:
        keccak256(0x19 || 0x01 || domainSeparator || hashStruct(message)).
    """
    domain_separator = hash_domain(registry, domain, domain_type)
    message_hash = hash_struct(registry, primary_type, message)
    digest = keccak256(EIP191_PREFIX + domain_separator + message_hash)
    logger.debug(
        "EIP-712 digest for %s: domain=%s message=%s digest=%s",
        primary_type,
        domain_separator.hex(),
        message_hash.hex(),
        digest.hex(),
    )
    return digest


@dataclass(frozen=True)
class TypedData:
    """A complete typed-data request: schema, domain, primary type and message."""

    registry: TypeRegistry
    primary_type: str
    domain: Any
    message: Any
    domain_type: str = DEFAULT_DOMAIN_TYPE

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "TypedData":
        """
        Build from an eth_signTypedData document.

        ``EIP712Domain`` is inferred from the domain keys when ``types`` does
        not declare it.
        """
        try:
            types, primary_type = doc["types"], doc["primaryType"]
            domain, message = doc["domain"], doc["message"]
        except KeyError as e:
            raise SchemaMismatch(f"typed data document lacks {e}") from None
        types = dict(types)
        if DEFAULT_DOMAIN_TYPE not in types:
            types[DEFAULT_DOMAIN_TYPE] = domain_fields_for(domain)
        registry = TypeRegistry.from_types(types)
        return cls(registry, primary_type, domain, message)

    @classmethod
    def from_json(cls, text: str) -> "TypedData":
        return cls.from_dict(json.loads(text))

    def domain_separator(self) -> bytes:
        return hash_domain(self.registry, self.domain, self.domain_type)

    def message_hash(self) -> bytes:
        return hash_struct(self.registry, self.primary_type, self.message)

    def digest(self) -> bytes:
        return signing_digest(
            self.registry, self.domain, self.primary_type, self.message, self.domain_type
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "types": self.registry.to_dict(),
            "primaryType": self.primary_type,
            "domain": to_python(self.domain),
            "message": to_python(self.message),
        }


def sign_typed_data(typed_data: TypedData, privkey: bytes) -> bytes:
    """65-byte signature (v in {27, 28}) over ``typed_data.digest()``."""
    return sign_digest(typed_data.digest(), privkey)


def recover_typed_data_signer(typed_data: TypedData, signature: bytes) -> bytes:
    """20-byte address that produced ``signature`` over ``typed_data``."""
    return recover_address(typed_data.digest(), signature)


__all__: tuple[str, ...] = (
    "DEFAULT_DOMAIN_TYPE",
    "DOMAIN_FIELDS",
    "EIP191_PREFIX",
    "TypedData",
    "domain_fields_for",
    "hash_domain",
    "recover_typed_data_signer",
    "sign_typed_data",
    "signing_digest",
)
