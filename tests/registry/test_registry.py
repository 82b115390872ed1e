# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the type registry, its built-in seed and qualified-name helpers."""

import threading

import pytest

from typealgebra.model import (
    ClassKind,
    ClassLikeDescriptor,
    DeclarationOrigin,
    IntersectionType,
    intersection,
    named,
    union,
)
from typealgebra.registry import (
    BUILTIN_HIERARCHY,
    CyclicAlias,
    DuplicateDeclaration,
    RegistryBuilder,
    RegistryHandle,
    TypeRegistry,
    UnknownType,
    implicit_body,
)
from typealgebra.registry.names import absolute, is_absolute, namespace_of, qualify, short_name

# ###############
# Test Helpers
# ###############


def _builder_with_id() -> RegistryBuilder:
    builder = RegistryBuilder()
    builder.declare("Id", union(named("int"), named("string")), namespace="App")
    return builder


# ###############
# Qualified Names
# ###############


class TestNames:
    def test_qualify_relative_name(self) -> None:
        assert qualify("User", "App\\Models") == "App\\Models\\User"

    def test_qualify_absolute_name_ignores_namespace(self) -> None:
        assert qualify("\\Lib\\Shape", "App") == "Lib\\Shape"

    def test_qualify_without_namespace(self) -> None:
        assert qualify("User") == "User"

    def test_absolute_strips_leading_separator(self) -> None:
        assert is_absolute("\\App")
        assert absolute("\\App\\User") == "App\\User"

    def test_namespace_and_short_name(self) -> None:
        assert namespace_of("App\\Models\\User") == "App\\Models"
        assert namespace_of("User") == ""
        assert short_name("\\App\\Models\\User") == "User"


# ###############
# Built-in Seed
# ###############


class TestBuiltins:
    def test_builder_is_seeded(self) -> None:
        builder = RegistryBuilder()
        for name in BUILTIN_HIERARCHY:
            decl = builder.resolve(name)
            assert decl.origin is DeclarationOrigin.BUILT_IN

    def test_mixed_is_a_native_intersection_without_operands(self) -> None:
        body = RegistryBuilder().resolve("mixed").body
        assert isinstance(body, IntersectionType)
        assert body.native
        assert body.operands == ()

    def test_int_is_below_scalar(self) -> None:
        body = RegistryBuilder().resolve("int").body
        assert isinstance(body, IntersectionType)
        assert body.operands == (named("scalar"),)

    def test_unseeded_builder_is_empty(self) -> None:
        assert len(RegistryBuilder(seed=False)) == 0


# ###############
# Declarations
# ###############


class TestDeclare:
    def test_declare_qualifies_name(self) -> None:
        decl = _builder_with_id().resolve("App\\Id")
        assert decl.qualified_name == "App\\Id"
        assert decl.namespace == "App"
        assert decl.origin is DeclarationOrigin.EXPLICIT

    def test_duplicate_declaration_keeps_first(self) -> None:
        builder = _builder_with_id()
        with pytest.raises(DuplicateDeclaration) as exc_info:
            builder.declare("Id", named("float"), namespace="App")
        assert exc_info.value.name == "App\\Id"
        assert builder.resolve("App\\Id").body == union(named("int"), named("string"))

    def test_same_short_name_in_other_namespace_is_allowed(self) -> None:
        builder = _builder_with_id()
        builder.declare("Id", named("int"), namespace="Lib")
        assert builder.resolve("Id", "Lib").body == named("int")

    def test_builtin_names_cannot_be_redeclared(self) -> None:
        with pytest.raises(DuplicateDeclaration):
            RegistryBuilder().declare("int", named("string"))


class TestDeclareImplicit:
    def test_body_is_intersection_with_object(self) -> None:
        descriptor = ClassLikeDescriptor(
            qualified_name="App\\User",
            parent="App\\Base",
            implemented_interfaces=frozenset({"App\\Countable"}),
            used_traits=frozenset({"App\\Stamps"}),
        )
        expected = intersection(named("App\\Base"), named("App\\Countable"), named("App\\Stamps"), named("object"))
        assert implicit_body(descriptor) == expected

    def test_class_without_supertypes_is_object(self) -> None:
        assert implicit_body(ClassLikeDescriptor(qualified_name="Plain")) == named("object")

    def test_origin_follows_kind(self) -> None:
        builder = RegistryBuilder()
        decl = builder.declare_implicit(ClassLikeDescriptor(qualified_name="Countable", kind=ClassKind.INTERFACE))
        assert decl.origin is DeclarationOrigin.IMPLICIT_FROM_INTERFACE

    def test_identical_redeclaration_is_idempotent(self) -> None:
        builder = RegistryBuilder()
        descriptor = ClassLikeDescriptor(qualified_name="App\\User", parent="App\\Base")
        first = builder.declare_implicit(descriptor)
        assert builder.declare_implicit(descriptor) is first

    def test_conflicting_redeclaration_is_rejected(self) -> None:
        builder = RegistryBuilder()
        builder.declare_implicit(ClassLikeDescriptor(qualified_name="App\\User"))
        with pytest.raises(DuplicateDeclaration):
            builder.declare_implicit(ClassLikeDescriptor(qualified_name="App\\User", parent="App\\Base"))


# ###############
# Resolution and Aliases
# ###############


class TestResolve:
    def test_relative_lookup_from_namespace(self) -> None:
        assert _builder_with_id().resolve("Id", "App").qualified_name == "App\\Id"

    def test_fully_qualified_lookup_wins(self) -> None:
        builder = _builder_with_id()
        builder.declare("App\\Id", named("int"), namespace="App")
        assert builder.resolve("App\\Id", "App").qualified_name == "App\\Id"
        assert builder.resolve("App\\Id", "App").body == union(named("int"), named("string"))

    def test_absolute_name_is_not_qualified(self) -> None:
        builder = _builder_with_id()
        with pytest.raises(UnknownType):
            builder.resolve("\\Id", "App")

    def test_unknown_name(self) -> None:
        with pytest.raises(UnknownType) as exc_info:
            RegistryBuilder().resolve("Missing", "App")
        assert exc_info.value.name == "Missing"
        assert exc_info.value.namespace == "App"

    def test_names_are_case_sensitive(self) -> None:
        with pytest.raises(UnknownType):
            RegistryBuilder().resolve("Int")


class TestImportAlias:
    def test_alias_resolves_to_same_declaration(self) -> None:
        builder = _builder_with_id()
        target = builder.import_alias("App\\Id", "Ident", "Web")
        assert builder.resolve("Ident", "Web") is target
        assert builder.resolve("Web\\Ident") is builder.resolve("App\\Id")

    def test_alias_of_alias(self) -> None:
        builder = _builder_with_id()
        builder.import_alias("App\\Id", "Ident", "Web")
        builder.import_alias("Web\\Ident", "Key", "Api")
        assert builder.resolve("Key", "Api").qualified_name == "App\\Id"

    def test_unknown_source(self) -> None:
        with pytest.raises(UnknownType):
            RegistryBuilder().import_alias("Nope", "Alias")

    def test_alias_clashing_with_declaration(self) -> None:
        builder = _builder_with_id()
        builder.declare("Ident", named("int"), namespace="Web")
        with pytest.raises(DuplicateDeclaration):
            builder.import_alias("App\\Id", "Ident", "Web")

    def test_cyclic_alias_chain(self) -> None:
        registry = TypeRegistry([], {"A": "B", "B": "A"})
        with pytest.raises(CyclicAlias) as exc_info:
            registry.resolve("A")
        assert exc_info.value.chain == ["A", "B", "A"]

    def test_dangling_alias(self) -> None:
        registry = TypeRegistry([], {"A": "Gone"})
        with pytest.raises(UnknownType):
            registry.resolve("A")

    def test_declarations_shadow_aliases(self) -> None:
        builder = _builder_with_id()
        builder.import_alias("App\\Id", "Key", "Web")
        builder.declare("Key", named("float"))
        assert builder.resolve("Key", "Web").qualified_name == "Key"


# ###############
# Snapshots
# ###############


class TestSnapshots:
    def test_build_returns_independent_snapshot(self) -> None:
        builder = _builder_with_id()
        registry = builder.build()
        builder.declare("Later", named("int"))
        assert "Later" in builder
        assert "Later" not in registry

    def test_snapshot_contents(self) -> None:
        builder = _builder_with_id()
        builder.import_alias("App\\Id", "Ident", "Web")
        registry = builder.build()
        assert len(registry) == len(BUILTIN_HIERARCHY) + 1
        assert "App\\Id" in list(registry)
        assert registry.aliases() == {"Web\\Ident": "App\\Id"}
        assert registry.get("\\App\\Id") is not None
        assert registry.get("Web\\Ident") is None
        assert registry.is_bound("Web\\Ident")

    def test_to_builder_is_copy_on_write(self) -> None:
        registry = _builder_with_id().build()
        builder = registry.to_builder()
        builder.declare("Extra", named("int"))
        rebuilt = builder.build()
        assert "Extra" in rebuilt
        assert "Extra" not in registry
        assert rebuilt.resolve("App\\Id") is registry.resolve("App\\Id")

    def test_handle_swap_returns_previous(self) -> None:
        first = _builder_with_id().build()
        second = first.to_builder().build()
        handle = RegistryHandle(first)
        assert handle.current is first
        assert handle.swap(second) is first
        assert handle.current is second

    def test_concurrent_readers_see_a_complete_snapshot(self) -> None:
        first = _builder_with_id().build()
        builder = first.to_builder()
        builder.declare("Extra", named("int"))
        second = builder.build()
        handle = RegistryHandle(first)
        seen: list[int] = []

        def reader() -> None:
            for _ in range(200):
                seen.append(len(handle.current))

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        handle.swap(second)
        for thread in threads:
            thread.join()
        assert set(seen) <= {len(first), len(second)}
