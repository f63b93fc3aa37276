"""TypeRegistry and TypeRef parsing."""

import pytest

from typedsig import (DuplicateType, InvalidTypeDefinition, RecursiveType,
                      TypeField, TypeRef, TypeRegistry, UnknownFieldType,
                      UnknownType, hash_struct)


def test_typeref_parse_primitive() -> None:
    ref = TypeRef.parse("uint256")
    assert ref.base == "uint256" and ref.dims == ()
    assert ref.primitive is not None and ref.primitive.size == 256
    assert not ref.is_struct


def test_typeref_parse_arrays() -> None:
    ref = TypeRef.parse("uint8[2][]")
    assert ref.dims == (2, None)
    assert ref.length is None
    assert ref.element() == TypeRef("uint8", (2,))
    assert ref.element().length == 2
    assert str(ref) == "uint8[2][]"


@pytest.mark.parametrize("text", ["", "uint256[", "Person[x]", "Person[0]", "Person[01]", "1abc", "a b"])
def test_typeref_parse_rejects(text: str) -> None:
    with pytest.raises(InvalidTypeDefinition):
        TypeRef.parse(text)


def test_register_accepts_field_shapes() -> None:
    registry = TypeRegistry()
    definition = registry.register(
        "Mixed",
        [
            TypeField("a", TypeRef.parse("uint8")),
            ("b", "string"),
            {"name": "c", "type": "bytes32"},
        ],
    )
    assert definition.field_names == ("a", "b", "c")
    assert definition.signature() == "Mixed(uint8 a,string b,bytes32 c)"
    assert registry.resolve("Mixed") is definition


def test_register_preserves_field_order() -> None:
    registry = TypeRegistry()
    registry.register("Z", [("zeta", "uint8"), ("alpha", "uint8")])
    assert registry.resolve("Z").signature() == "Z(uint8 zeta,uint8 alpha)"


def test_register_duplicate_type() -> None:
    registry = TypeRegistry()
    registry.register("A", [("x", "uint8")])
    with pytest.raises(DuplicateType):
        registry.register("A", [("y", "uint8")])


@pytest.mark.parametrize("name", ["uint256", "address", "9Lives", ""])
def test_register_rejects_bad_names(name: str) -> None:
    with pytest.raises(InvalidTypeDefinition):
        TypeRegistry().register(name, [("x", "uint8")])


def test_register_rejects_duplicate_field() -> None:
    with pytest.raises(InvalidTypeDefinition):
        TypeRegistry().register("A", [("x", "uint8"), ("x", "string")])


def test_resolve_unknown() -> None:
    with pytest.raises(UnknownType):
        TypeRegistry().resolve("Nope")


def test_forward_references_resolve_lazily() -> None:
    registry = TypeRegistry()
    registry.register("Outer", [("inner", "Inner")])
    registry.register("Inner", [("x", "uint8")])
    registry.validate()
    assert registry.names() == ("Outer", "Inner")


def test_unknown_field_type_fails_before_hashing() -> None:
    registry = TypeRegistry()
    registry.register("Outer", [("inner", "Missing[]")])
    with pytest.raises(UnknownFieldType):
        registry.validate()
    with pytest.raises(UnknownFieldType):
        hash_struct(registry, "Outer", {"inner": []})


def test_uint_without_width_is_unknown() -> None:
    with pytest.raises(UnknownFieldType):
        TypeRegistry.from_types({"A": [{"name": "x", "type": "uint"}]})


def test_direct_cycle_rejected() -> None:
    with pytest.raises(RecursiveType):
        TypeRegistry.from_types(
            {
                "A": [{"name": "b", "type": "B"}],
                "B": [{"name": "a", "type": "A"}],
            }
        )
    with pytest.raises(RecursiveType):
        TypeRegistry.from_types({"Self": [{"name": "me", "type": "Self"}]})


def test_cycle_through_array_allowed() -> None:
    registry = TypeRegistry.from_types(
        {"Node": [{"name": "value", "type": "uint8"}, {"name": "children", "type": "Node[]"}]}
    )
    assert "Node" in registry


def test_register_after_validate_revalidates() -> None:
    registry = TypeRegistry.from_types({"A": [{"name": "x", "type": "uint8"}]})
    registry.register("B", [("c", "C")])
    with pytest.raises(UnknownFieldType):
        registry.validate()


def test_to_dict_round_trips_types() -> None:
    types = {
        "Mail": [{"name": "from", "type": "Person"}, {"name": "tags", "type": "string[]"}],
        "Person": [{"name": "name", "type": "string"}],
    }
    assert TypeRegistry.from_types(types).to_dict() == types
