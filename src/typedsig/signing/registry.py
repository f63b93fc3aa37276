"""
Registry of named EIP-712 struct types.

Types are registered once, in any order; references between them are checked
by ``validate`` which every hashing entry point calls before encoding.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Mapping

from ..errors import (DuplicateType, InvalidTypeDefinition, RecursiveType,
                      UnknownFieldType, UnknownType)
from .types import (PRIMITIVES, FieldSpec, TypeDefinition, as_field,
                    is_identifier)

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Mapping of struct name to TypeDefinition, in registration order."""

    def __init__(self) -> None:
        self._types: dict[str, TypeDefinition] = {}
        self._validated = False
        # type name -> type hash, filled by type_encoder.type_hash
        self.type_hash_cache: dict[str, bytes] = {}

    @classmethod
    def from_types(
        cls, types: Mapping[str, Iterable[FieldSpec]]
    ) -> "TypeRegistry":
        """Build and validate a registry from a JSON-style ``types`` object."""
        registry = cls()
        for name, fields in types.items():
            registry.register(name, fields)
        registry.validate()
        return registry

    def register(self, name: str, fields: Iterable[FieldSpec]) -> TypeDefinition:
        """
        Add a struct type.

        Args:
            name: Struct name; must be an identifier and not a primitive name.
            fields: Ordered fields as TypeField, (name, type) or {"name", "type"}.

        Returns:
            The stored TypeDefinition.

        Raises:
            DuplicateType: ``name`` is already registered.
            InvalidTypeDefinition: Malformed name, field or duplicate field name.
        """
        if name in self._types:
            raise DuplicateType(f"type {name!r} already registered")
        if not is_identifier(name) or name in PRIMITIVES:
            raise InvalidTypeDefinition(f"invalid struct name {name!r}")
        parsed = tuple(as_field(f) for f in fields)
        seen: set[str] = set()
        for field in parsed:
            if field.name in seen:
                raise InvalidTypeDefinition(
                    f"field {field.name!r} declared twice in {name!r}"
                )
            seen.add(field.name)
        definition = TypeDefinition(name, parsed)
        self._types[name] = definition
        self._validated = False
        self.type_hash_cache.clear()
        return definition

    def resolve(self, name: str) -> TypeDefinition:
        try:
            return self._types[name]
        except KeyError:
            raise UnknownType(f"type {name!r} not in registry") from None

    def validate(self) -> None:
        """
        Check that every field type resolves and that no struct contains
        itself except through an array.

        Raises:
            UnknownFieldType: A field names an unregistered, non-primitive type.
            RecursiveType: A struct cycle without an array in between.
        """
        if self._validated:
            return
        for definition in self._types.values():
            for field in definition.fields:
                base = field.type.base
                if base not in PRIMITIVES and base not in self._types:
                    raise UnknownFieldType(
                        f"{definition.name}.{field.name} has unknown type "
                        f"{str(field.type)!r}"
                    )
        self._check_cycles()
        self._validated = True
        logger.debug("Validated %d struct types", len(self._types))

    def _check_cycles(self) -> None:
        # Only direct (non-array) struct fields can make a value infinitely deep.
        edges = {
            name: [f.type.base for f in d.fields if f.type.is_struct]
            for name, d in self._types.items()
        }
        done: set[str] = set()
        for root in edges:
            if root in done:
                continue
            path: list[str] = []
            stack = [(root, iter(edges[root]))]
            path.append(root)
            while stack:
                node, children = stack[-1]
                child = next(children, None)
                if child is None:
                    stack.pop()
                    path.pop()
                    done.add(node)
                elif child in path:
                    cycle = path[path.index(child):] + [child]
                    raise RecursiveType(
                        "struct cycle without array: " + " -> ".join(cycle)
                    )
                elif child not in done:
                    path.append(child)
                    stack.append((child, iter(edges[child])))

    def names(self) -> tuple[str, ...]:
        return tuple(self._types)

    def to_dict(self) -> dict[str, list[dict[str, str]]]:
        return {name: d.to_list() for name, d in self._types.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[TypeDefinition]:
        return iter(self._types.values())

    def __repr__(self) -> str:
        return f"TypeRegistry({list(self._types)!r})"


__all__: tuple[str, ...] = ("TypeRegistry",)
