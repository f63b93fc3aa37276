"""
EIP-712 typed-data hashing and secp256k1 signatures. Pure Python, no eth_account dependency.
"""

import logging

from .__about__ import __version__
from .curves import (derive_address, privkey_to_pubkey, recover_address,
                     recover_pubkey, sign_digest)
from .errors import (DuplicateType, HexFormatError, InvalidComponentLength,
                     InvalidPrivateKey, InvalidSignatureLength,
                     InvalidTypeDefinition, RecoveryError, RecursiveType,
                     SchemaMismatch, SignerError, SigningError, TypedDataError,
                     UnknownFieldType, UnknownType, ValueTypeMismatch)
from .hashes import keccak256
from .serde import from_hex, to_checksum_address, to_hex
from .signing import (ArrayValue, BoolValue, BytesValue, IntValue, RecordValue,
                      Signature, StringValue, TypedData, TypeField, TypeRef,
                      TypeRegistry, encode_data, encode_type, hash_domain,
                      hash_struct, join_signature, normalize_v,
                      recover_typed_data_signer, recovery_id, sign_typed_data,
                      signing_digest, split_signature, type_hash)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: tuple[str, ...] = (
    # About
    "__version__",
    # Hashes
    "keccak256",
    # Serde
    "from_hex",
    "to_checksum_address",
    "to_hex",
    # Curves: secp256k1 signer
    "derive_address",
    "privkey_to_pubkey",
    "recover_address",
    "recover_pubkey",
    "sign_digest",
    # Signing: EIP-712 typed data
    "ArrayValue",
    "BoolValue",
    "BytesValue",
    "IntValue",
    "RecordValue",
    "StringValue",
    "TypeField",
    "TypeRef",
    "TypeRegistry",
    "TypedData",
    "encode_data",
    "encode_type",
    "hash_domain",
    "hash_struct",
    "recover_typed_data_signer",
    "sign_typed_data",
    "signing_digest",
    "type_hash",
    # Signing: signature codec
    "Signature",
    "join_signature",
    "normalize_v",
    "recovery_id",
    "split_signature",
    # Errors
    "DuplicateType",
    "HexFormatError",
    "InvalidComponentLength",
    "InvalidPrivateKey",
    "InvalidSignatureLength",
    "InvalidTypeDefinition",
    "RecoveryError",
    "RecursiveType",
    "SchemaMismatch",
    "SignerError",
    "SigningError",
    "TypedDataError",
    "UnknownFieldType",
    "UnknownType",
    "ValueTypeMismatch",
)
