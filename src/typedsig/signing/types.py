"""
EIP-712 type references: primitive kinds, struct references, array wrapping.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from ..errors import InvalidTypeDefinition


class Kind(enum.Enum):
    UINT = "uint"
    INT = "int"
    FIXED_BYTES = "bytesN"
    BYTES = "bytes"
    STRING = "string"
    BOOL = "bool"
    ADDRESS = "address"


@dataclass(frozen=True)
class Primitive:
    """Atomic or dynamic EIP-712 type. ``size`` is bits for ints, bytes for bytesN."""

    kind: Kind
    size: int = 0


_IDENT = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_DIMENSION = re.compile(r"\[(\d*)\]")


def _primitive_table() -> dict[str, Primitive]:
    table = {
        "bytes": Primitive(Kind.BYTES),
        "string": Primitive(Kind.STRING),
        "bool": Primitive(Kind.BOOL),
        "address": Primitive(Kind.ADDRESS, 20),
    }
    for bits in range(8, 257, 8):
        table[f"uint{bits}"] = Primitive(Kind.UINT, bits)
        table[f"int{bits}"] = Primitive(Kind.INT, bits)
    for length in range(1, 33):
        table[f"bytes{length}"] = Primitive(Kind.FIXED_BYTES, length)
    return table


PRIMITIVES: Mapping[str, Primitive] = _primitive_table()


def primitive(name: str) -> Optional[Primitive]:
    """The primitive named ``name``, or None for a struct name."""
    return PRIMITIVES.get(name)


@dataclass(frozen=True)
class TypeRef:
    """
    A field type: a base name plus zero or more array dimensions.

    Dimensions are in source order, so ``uint8[2][]`` is a dynamic array whose
    elements are ``uint8[2]``; ``None`` marks a dynamic dimension.
    """

    base: str
    dims: tuple[Optional[int], ...] = ()

    @classmethod
    def parse(cls, text: str) -> "TypeRef":
        if not isinstance(text, str):
            raise InvalidTypeDefinition(f"type must be a string, got {text!r}")
        head = _IDENT.match(text)
        if head is None:
            raise InvalidTypeDefinition(f"malformed type {text!r}")
        dims: list[Optional[int]] = []
        pos = head.end()
        while pos < len(text):
            m = _DIMENSION.match(text, pos)
            if m is None:
                raise InvalidTypeDefinition(f"malformed array suffix in {text!r}")
            digits = m.group(1)
            if digits and (int(digits) == 0 or digits != str(int(digits))):
                raise InvalidTypeDefinition(f"bad array length in {text!r}")
            dims.append(int(digits) if digits else None)
            pos = m.end()
        return cls(head.group(0), tuple(dims))

    @property
    def is_array(self) -> bool:
        return bool(self.dims)

    @property
    def length(self) -> Optional[int]:
        """Length of the outermost array dimension (None when dynamic)."""
        return self.dims[-1]

    def element(self) -> "TypeRef":
        return TypeRef(self.base, self.dims[:-1])

    @property
    def primitive(self) -> Optional[Primitive]:
        return None if self.dims else primitive(self.base)

    @property
    def is_struct(self) -> bool:
        return not self.dims and self.base not in PRIMITIVES

    def __str__(self) -> str:
        return self.base + "".join(
            "[]" if d is None else f"[{d}]" for d in self.dims
        )


@dataclass(frozen=True)
class TypeField:
    name: str
    type: TypeRef

    def __str__(self) -> str:
        return f"{self.type} {self.name}"


FieldSpec = Union[TypeField, tuple, Mapping[str, str]]


def as_field(spec: FieldSpec) -> TypeField:
    """Normalize a TypeField, a (name, type) pair or a {"name", "type"} mapping."""
    if isinstance(spec, TypeField):
        return spec
    if isinstance(spec, Mapping):
        try:
            name, type_ = spec["name"], spec["type"]
        except KeyError as e:
            raise InvalidTypeDefinition(f"field {dict(spec)!r} lacks {e}") from None
    elif isinstance(spec, tuple) and len(spec) == 2:
        name, type_ = spec
    else:
        raise InvalidTypeDefinition(f"cannot interpret field {spec!r}")
    if not isinstance(name, str) or not _IDENT.fullmatch(name):
        raise InvalidTypeDefinition(f"malformed field name {name!r}")
    ref = type_ if isinstance(type_, TypeRef) else TypeRef.parse(type_)
    return TypeField(name, ref)


@dataclass(frozen=True)
class TypeDefinition:
    """A named struct with its fields in declared order."""

    name: str
    fields: tuple[TypeField, ...]

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def signature(self) -> str:
        """``Name(type1 name1,type2 name2)`` for this struct alone."""
        return f"{self.name}({','.join(str(f) for f in self.fields)})"

    def to_list(self) -> list[dict[str, str]]:
        return [{"name": f.name, "type": str(f.type)} for f in self.fields]


def is_identifier(name: str) -> bool:
    return isinstance(name, str) and _IDENT.fullmatch(name) is not None


__all__: tuple[str, ...] = (
    "PRIMITIVES",
    "Kind",
    "Primitive",
    "TypeDefinition",
    "TypeField",
    "TypeRef",
    "as_field",
    "is_identifier",
    "primitive",
)
