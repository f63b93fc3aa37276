"""EIP-712 typed data: type registry, encoders, signing digest, signature codec."""

from .registry import TypeRegistry
from .signature import (Signature, join_signature, normalize_v, recovery_id,
                        split_signature)
from .struct_encoder import encode_data, encode_value, hash_struct
from .type_encoder import encode_type, find_dependencies, type_hash
from .typed_data import (DEFAULT_DOMAIN_TYPE, EIP191_PREFIX, TypedData,
                         hash_domain, recover_typed_data_signer,
                         sign_typed_data, signing_digest)
from .types import TypeDefinition, TypeField, TypeRef
from .values import (ArrayValue, BoolValue, BytesValue, IntValue, RecordValue,
                     StringValue, Value)

__all__: tuple[str, ...] = (
    "DEFAULT_DOMAIN_TYPE",
    "EIP191_PREFIX",
    "ArrayValue",
    "BoolValue",
    "BytesValue",
    "IntValue",
    "RecordValue",
    "Signature",
    "StringValue",
    "TypeDefinition",
    "TypeField",
    "TypeRef",
    "TypeRegistry",
    "TypedData",
    "Value",
    "encode_data",
    "encode_type",
    "encode_value",
    "find_dependencies",
    "hash_domain",
    "hash_struct",
    "join_signature",
    "normalize_v",
    "recover_typed_data_signer",
    "recovery_id",
    "sign_typed_data",
    "signing_digest",
    "split_signature",
    "type_hash",
)
