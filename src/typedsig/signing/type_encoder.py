"""
EIP-712 ``encodeType`` / ``typeHash``.
"""

from __future__ import annotations

from ..hashes import keccak256
from .registry import TypeRegistry


def find_dependencies(registry: TypeRegistry, type_name: str) -> set[str]:
    """Struct names reachable from ``type_name``, itself included."""
    registry.resolve(type_name)
    found = {type_name}
    pending = [type_name]
    while pending:
        for field in registry.resolve(pending.pop()).fields:
            base = field.type.base
            if base in registry and base not in found:
                found.add(base)
                pending.append(base)
    return found


def encode_type(registry: TypeRegistry, type_name: str) -> str:
    """
    Type signature: the primary struct followed by every referenced struct,
    sorted by name, e.g. ``Mail(Person from,Person to,string contents)Person(string name,address wallet)``.
    """
    registry.validate()
    deps = sorted(find_dependencies(registry, type_name) - {type_name})
    return "".join(
        registry.resolve(name).signature() for name in [type_name, *deps]
    )


def type_hash(registry: TypeRegistry, type_name: str) -> bytes:
    """Keccak-256 of the UTF-8 type signature (cached per registry)."""
    cached = registry.type_hash_cache.get(type_name)
    if cached is None:
        cached = keccak256(encode_type(registry, type_name).encode("utf-8"))
        registry.type_hash_cache[type_name] = cached
    return cached


__all__: tuple[str, ...] = ("encode_type", "find_dependencies", "type_hash")
