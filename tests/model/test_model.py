# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the type expression model and declaration entities."""

import pytest
from pydantic import ValidationError

from typealgebra.model import (
    ClassKind,
    ClassLikeDescriptor,
    DeclarationOrigin,
    DeclarationUnit,
    IntersectionType,
    MethodSignature,
    NamedType,
    Refinement,
    TypeDeclaration,
    UnionType,
    format_type,
    intersection,
    named,
    union,
)

# ###############
# Named Types
# ###############


def test_named_defaults_to_global_namespace() -> None:
    ref = named("int")
    assert ref.name == "int"
    assert ref.namespace == ""
    assert ref.kind == "named"


def test_named_rejects_empty_name() -> None:
    with pytest.raises(ValidationError):
        NamedType(name="")


def test_named_rejects_bare_separator() -> None:
    with pytest.raises(ValidationError):
        NamedType(name="\\")


def test_named_types_are_immutable() -> None:
    ref = named("int")
    with pytest.raises(ValidationError):
        ref.name = "string"  # type: ignore[misc]


# ###############
# Unions
# ###############


def test_union_flattens_nested_unions() -> None:
    inner = union(named("a"), named("b"))
    outer = union(inner, named("c"))
    assert isinstance(outer, UnionType)
    assert outer.operands == (named("a"), named("b"), named("c"))


def test_union_deduplicates_and_orders() -> None:
    assert union(named("b"), named("a"), named("b")) == union(named("a"), named("b"))


def test_union_of_single_operand_collapses() -> None:
    assert union(named("int"), named("int")) == named("int")


def test_union_without_operands_is_rejected() -> None:
    with pytest.raises(ValueError):
        union()


def test_union_model_needs_two_distinct_operands() -> None:
    with pytest.raises(ValidationError):
        UnionType(operands=(named("a"), named("a")))


# ###############
# Intersections
# ###############


def test_intersection_flattens_plain_nested_intersections() -> None:
    expr = intersection(intersection(named("a"), named("b")), named("c"))
    assert isinstance(expr, IntersectionType)
    assert expr.operands == (named("a"), named("b"), named("c"))


def test_refined_intersection_is_not_flattened() -> None:
    refined = intersection(named("a"), named("b"), refinement=Refinement(name="positive"))
    expr = intersection(refined, named("c"))
    assert isinstance(expr, IntersectionType)
    assert refined in expr.operands


def test_refined_intersection_may_have_a_single_operand() -> None:
    expr = intersection(named("int"), refinement=Refinement(name="positive"))
    assert isinstance(expr, IntersectionType)
    assert expr.operands == (named("int"),)


def test_plain_intersection_needs_two_operands() -> None:
    with pytest.raises(ValidationError):
        IntersectionType(operands=(named("a"),))


def test_native_intersection_allows_no_operands() -> None:
    expr = IntersectionType(operands=(), native=True)
    assert expr.operands == ()


def test_native_intersection_rejects_refinement() -> None:
    with pytest.raises(ValidationError):
        IntersectionType(operands=(), native=True, refinement=Refinement(name="x"))


def test_operand_order_does_not_affect_equality() -> None:
    left = intersection(named("a"), union(named("b"), named("c")))
    right = intersection(union(named("c"), named("b")), named("a"))
    assert left == right
    assert hash(left) == hash(right)


def test_refinement_predicate_is_excluded_from_dump() -> None:
    refinement = Refinement(name="positive", check=lambda v: v > 0)
    assert refinement.model_dump() == {"name": "positive"}
    assert refinement.check is not None
    assert refinement.check(3)


# ###############
# Formatting
# ###############


def test_format_union_and_intersection() -> None:
    expr = union(named("null"), intersection(named("A"), union(named("B"), named("C"))))
    assert format_type(expr) == "A & (B | C) | null"


def test_format_refined_and_native() -> None:
    refined = intersection(named("int"), refinement=Refinement(name="positive"))
    assert format_type(refined) == "(int where positive)"
    assert format_type(IntersectionType(operands=(named("mixed"),), native=True)) == "native(mixed)"


# ###############
# Entities
# ###############


def test_declaration_accepts_any_expression_body() -> None:
    decl = TypeDeclaration(qualified_name="App\\Id", namespace="App", body=union(named("int"), named("string")))
    assert decl.origin is DeclarationOrigin.EXPLICIT
    assert isinstance(decl.body, UnionType)


def test_declaration_body_can_be_validated_from_data() -> None:
    operands = [{"kind": "named", "name": "int"}, {"kind": "named", "name": "string"}]
    decl = TypeDeclaration.model_validate({"qualified_name": "Id", "body": {"kind": "union", "operands": operands}})
    assert decl.body == union(named("int"), named("string"))


def test_class_kind_selects_origin() -> None:
    assert ClassKind.CLASS.origin is DeclarationOrigin.IMPLICIT_FROM_CLASS
    assert ClassKind.INTERFACE.origin is DeclarationOrigin.IMPLICIT_FROM_INTERFACE
    assert ClassKind.TRAIT.origin is DeclarationOrigin.IMPLICIT_FROM_TRAIT_USE


def test_origin_is_class_like() -> None:
    assert DeclarationOrigin.IMPLICIT_FROM_TRAIT_USE.is_class_like
    assert not DeclarationOrigin.EXPLICIT.is_class_like
    assert not DeclarationOrigin.BUILT_IN.is_class_like


def test_descriptor_defaults() -> None:
    descriptor = ClassLikeDescriptor(qualified_name="App\\User")
    assert descriptor.parent is None
    assert descriptor.implemented_interfaces == frozenset()
    assert descriptor.kind is ClassKind.CLASS


def test_method_signature_defaults_to_no_parameters() -> None:
    sig = MethodSignature(owner_type_name="A", method_name="run", return_type=named("mixed"))
    assert sig.parameters == ()


def test_declaration_unit_defaults() -> None:
    unit = DeclarationUnit()
    assert unit.namespace == ""
    assert unit.imports == []
    assert unit.types == {}
    assert unit.classes == []
