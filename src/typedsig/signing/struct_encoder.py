"""
EIP-712 ``encodeData`` / ``hashStruct``.

Every field becomes one 32-byte slot: atomic values are padded in place,
dynamic values (bytes, string, arrays) and nested structs are hashed.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..errors import SchemaMismatch, ValueTypeMismatch
from ..hashes import keccak256
from .registry import TypeRegistry
from .type_encoder import type_hash
from .types import Kind, TypeRef
from .values import (ArrayValue, BoolValue, BytesValue, IntValue, RecordValue,
                     StringValue, coerce)

_SLOT = 32


def _expect(value: Any, cls: type, ref: TypeRef, path: str) -> Any:
    if not isinstance(value, cls):
        raise ValueTypeMismatch(
            f"{path}: expected {ref}, got {type(value).__name__}"
        )
    return value.value


def _encode_atomic(ref: TypeRef, value: Any, path: str) -> bytes:
    prim = ref.primitive
    kind = prim.kind
    if kind is Kind.UINT:
        n = _expect(value, IntValue, ref, path)
        if not 0 <= n < 1 << prim.size:
            raise ValueTypeMismatch(f"{path}: {n} out of range for {ref}")
        return n.to_bytes(_SLOT, "big")
    if kind is Kind.INT:
        n = _expect(value, IntValue, ref, path)
        bound = 1 << (prim.size - 1)
        if not -bound <= n < bound:
            raise ValueTypeMismatch(f"{path}: {n} out of range for {ref}")
        return n.to_bytes(_SLOT, "big", signed=True)
    if kind is Kind.BOOL:
        return int(_expect(value, BoolValue, ref, path)).to_bytes(_SLOT, "big")
    if kind is Kind.ADDRESS:
        raw = _expect(value, BytesValue, ref, path)
        if len(raw) != prim.size:
            raise ValueTypeMismatch(f"{path}: address must be 20 bytes, got {len(raw)}")
        return raw.rjust(_SLOT, b"\x00")
    if kind is Kind.FIXED_BYTES:
        raw = _expect(value, BytesValue, ref, path)
        if len(raw) != prim.size:
            raise ValueTypeMismatch(f"{path}: {ref} needs {prim.size} bytes, got {len(raw)}")
        return raw.ljust(_SLOT, b"\x00")
    if kind is Kind.BYTES:
        return keccak256(_expect(value, BytesValue, ref, path))
    # Kind.STRING
    return keccak256(_expect(value, StringValue, ref, path).encode("utf-8"))


def encode_value(
    registry: TypeRegistry, ref: TypeRef, value: Any, path: str = "value"
) -> bytes:
    """
    Encode one value of declared type ``ref`` into its 32-byte slot.

    Raises:
        ValueTypeMismatch: Value shape, width or array length does not fit.
        SchemaMismatch: A nested record has missing or extra fields.
    """
    value = coerce(ref, value, path)
    if ref.is_array:
        items = _expect_array(value, ref, path)
        element = ref.element()
        return keccak256(
            b"".join(
                encode_value(registry, element, item, f"{path}[{i}]")
                for i, item in enumerate(items)
            )
        )
    if ref.is_struct:
        if not isinstance(value, RecordValue):
            raise ValueTypeMismatch(
                f"{path}: expected struct {ref}, got {type(value).__name__}"
            )
        return _hash_record(registry, ref.base, value.fields, path)
    return _encode_atomic(ref, value, path)


def _expect_array(value: Any, ref: TypeRef, path: str) -> tuple:
    if not isinstance(value, ArrayValue):
        raise ValueTypeMismatch(f"{path}: expected {ref}, got {type(value).__name__}")
    if ref.length is not None and len(value.items) != ref.length:
        raise ValueTypeMismatch(
            f"{path}: {ref} needs {ref.length} items, got {len(value.items)}"
        )
    return value.items


def _encode_record(
    registry: TypeRegistry, type_name: str, record: Mapping[str, Any], path: str
) -> bytes:
    definition = registry.resolve(type_name)
    declared = definition.field_names
    missing = [n for n in declared if n not in record]
    extra = sorted(set(record) - set(declared))
    if missing or extra:
        raise SchemaMismatch(
            f"{path}: record does not match {type_name}"
            + (f"; missing {missing}" if missing else "")
            + (f"; undeclared {extra}" if extra else "")
        )
    out = bytearray(type_hash(registry, type_name))
    for field in definition.fields:
        out += encode_value(
            registry, field.type, record[field.name], f"{path}.{field.name}"
        )
    return bytes(out)


def _hash_record(
    registry: TypeRegistry, type_name: str, record: Mapping[str, Any], path: str
) -> bytes:
    return keccak256(_encode_record(registry, type_name, record, path))


def _as_mapping(record: Any, type_name: str) -> Mapping[str, Any]:
    if isinstance(record, RecordValue):
        return record.fields
    if isinstance(record, Mapping):
        return record
    raise ValueTypeMismatch(
        f"{type_name}: expected a record, got {type(record).__name__}"
    )


def encode_data(registry: TypeRegistry, type_name: str, record: Any) -> bytes:
    """typeHash || enc(field1) || enc(field2) ..."""
    registry.validate()
    return _encode_record(
        registry, type_name, _as_mapping(record, type_name), type_name
    )


def hash_struct(registry: TypeRegistry, type_name: str, record: Any) -> bytes:
    """
    EIP-712 ``hashStruct``: keccak256(typeHash || encodeData).

    Args:
        registry: Registry holding ``type_name`` and every type it references.
        type_name: Struct type of ``record``.
        record: RecordValue or mapping of field name to value.

    Returns:
        32-byte struct hash.
    """
    return keccak256(encode_data(registry, type_name, record))


__all__: tuple[str, ...] = ("encode_data", "encode_value", "hash_struct")
