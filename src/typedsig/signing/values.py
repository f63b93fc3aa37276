"""
Typed values checked against declared EIP-712 types before encoding.

Plain Python / JSON values are converted with ``coerce``, guided by the
declared TypeRef, so a hex string becomes bytes only where an address or a
bytes type is expected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Union

from ..errors import HexFormatError, ValueTypeMismatch
from ..serde.hexstr import from_hex
from .types import Kind, TypeRef


def _check_payload(variant: object, payload: Any, expected: type) -> None:
    # bool is an int subclass; keep the two apart in both directions.
    if isinstance(payload, bool) != (expected is bool) or not isinstance(payload, expected):
        raise ValueTypeMismatch(
            f"{type(variant).__name__} cannot hold {type(payload).__name__} {payload!r}"
        )


@dataclass(frozen=True)
class IntValue:
    value: int

    def __post_init__(self) -> None:
        _check_payload(self, self.value, int)


@dataclass(frozen=True)
class BytesValue:
    value: bytes

    def __post_init__(self) -> None:
        if isinstance(self.value, (bytearray, memoryview)):
            object.__setattr__(self, "value", bytes(self.value))
        _check_payload(self, self.value, bytes)


@dataclass(frozen=True)
class StringValue:
    value: str

    def __post_init__(self) -> None:
        _check_payload(self, self.value, str)


@dataclass(frozen=True)
class BoolValue:
    value: bool

    def __post_init__(self) -> None:
        _check_payload(self, self.value, bool)


@dataclass(frozen=True)
class RecordValue:
    fields: Mapping[str, "Value"]

    def __post_init__(self) -> None:
        _check_payload(self, self.fields, Mapping)


@dataclass(frozen=True)
class ArrayValue:
    items: tuple["Value", ...]

    def __post_init__(self) -> None:
        if isinstance(self.items, list):
            object.__setattr__(self, "items", tuple(self.items))
        _check_payload(self, self.items, tuple)


Value = Union[IntValue, BytesValue, StringValue, BoolValue, RecordValue, ArrayValue]

_VALUE_TYPES = (IntValue, BytesValue, StringValue, BoolValue, RecordValue, ArrayValue)
_DECIMAL = re.compile(r"-?[0-9]+")
_HEX_INT = re.compile(r"0[xX][0-9a-fA-F]+")


def _mismatch(path: str, ref: TypeRef, raw: Any) -> ValueTypeMismatch:
    return ValueTypeMismatch(
        f"{path}: expected {ref}, got {type(raw).__name__} {raw!r}"
    )


def _coerce_int(path: str, ref: TypeRef, raw: Any) -> IntValue:
    if isinstance(raw, bool):
        raise _mismatch(path, ref, raw)
    if isinstance(raw, int):
        return IntValue(raw)
    if isinstance(raw, str):
        if _HEX_INT.fullmatch(raw):
            return IntValue(int(raw[2:], 16))
        if _DECIMAL.fullmatch(raw):
            return IntValue(int(raw, 10))
    raise _mismatch(path, ref, raw)


def _coerce_bytes(path: str, ref: TypeRef, raw: Any) -> BytesValue:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return BytesValue(bytes(raw))
    if isinstance(raw, str) and raw[:2] in ("0x", "0X"):
        try:
            return BytesValue(from_hex(raw))
        except HexFormatError as e:
            raise ValueTypeMismatch(f"{path}: {e}") from None
    raise _mismatch(path, ref, raw)


def coerce(ref: TypeRef, raw: Any, path: str = "value") -> Value:
    """
    Convert ``raw`` into the Value variant expected by ``ref``.

    Existing Value instances pass through unchanged; their fit is checked by
    the encoder. Struct records become RecordValue with coerced fields left to
    the encoder, which knows the nested definition.

    Raises:
        ValueTypeMismatch: ``raw`` cannot represent a value of type ``ref``.
    """
    if isinstance(raw, _VALUE_TYPES):
        return raw
    if ref.is_array:
        if isinstance(raw, (list, tuple)):
            element = ref.element()
            return ArrayValue(
                tuple(coerce(element, item, f"{path}[{i}]") for i, item in enumerate(raw))
            )
        raise _mismatch(path, ref, raw)
    prim = ref.primitive
    if prim is None:
        if isinstance(raw, Mapping):
            return RecordValue(dict(raw))
        raise _mismatch(path, ref, raw)
    if prim.kind in (Kind.UINT, Kind.INT):
        return _coerce_int(path, ref, raw)
    if prim.kind in (Kind.ADDRESS, Kind.FIXED_BYTES, Kind.BYTES):
        return _coerce_bytes(path, ref, raw)
    if prim.kind is Kind.STRING and isinstance(raw, str):
        return StringValue(raw)
    if prim.kind is Kind.BOOL and isinstance(raw, bool):
        return BoolValue(raw)
    raise _mismatch(path, ref, raw)


def to_python(value: Value) -> Any:
    """Inverse of ``coerce`` for plain data: bytes stay bytes."""
    if not isinstance(value, _VALUE_TYPES):
        return value
    if isinstance(value, RecordValue):
        return {k: to_python(v) for k, v in value.fields.items()}
    if isinstance(value, ArrayValue):
        return [to_python(v) for v in value.items]
    return value.value


__all__: tuple[str, ...] = (
    "ArrayValue",
    "BoolValue",
    "BytesValue",
    "IntValue",
    "RecordValue",
    "StringValue",
    "Value",
    "coerce",
    "to_python",
)
