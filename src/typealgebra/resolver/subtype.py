# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Subtype decisions over canonical (DNF) forms."""

from __future__ import annotations

from typealgebra.model.entities import TypeDeclaration
from typealgebra.model.types import NamedType, TypeExpr, intersection, named, union
from typealgebra.registry.builtins import MIXED
from typealgebra.registry.errors import TypeAlgebraError, UnknownType, UnresolvedReference
from typealgebra.registry.registry import RegistryView
from typealgebra.resolver.canonical import DEFAULT_MAX_DEPTH, Canonicalizer, Dnf, subsumes

# ###############
# Public Interface
# ###############


class SubtypeResolver:
    """Answers subtype queries against one registry, caching canonical forms.

    Intended for immutable snapshots; a resolver over a builder must not be
    reused after the builder changes.

    Args:
        registry: The registry to resolve names in.
        max_depth: Maximum nesting of named expansions.
    """

    def __init__(self, registry: RegistryView, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._registry = registry
        self._canonicalizer = Canonicalizer(registry, max_depth=max_depth)

    @property
    def registry(self) -> RegistryView:
        return self._registry

    def dnf(self, expr: TypeExpr) -> Dnf:
        """Return the canonical clause set of *expr*.

        Raises:
            UnresolvedReference: If a named leaf cannot be resolved.
            CyclicAlias: If resolving a leaf runs into an alias cycle.
            CyclicDefinition: If a referenced body is not grounded.
        """
        return self._canonicalizer.expression(expr)

    def declaration_dnf(self, decl: TypeDeclaration) -> Dnf:
        """Return the canonical clause set of a declaration (its own atom included)."""
        return self._canonicalizer.declaration(decl)

    def canonicalize(self, expr: TypeExpr) -> TypeExpr:
        """Return *expr* rewritten as a union of intersections of atoms."""
        terms = [
            intersection(*(named(atom) for atom in sorted(clause))) if clause else named(MIXED)
            for clause in self.dnf(expr)
        ]
        return union(*terms)

    def is_subtype(self, sub: TypeExpr, sup: TypeExpr) -> bool:
        """Return True if every value of *sub* is a value of *sup*.

        ``mixed`` is accepted as a supertype without expanding *sub*; the
        names *sub* mentions must still resolve.
        """
        if self._is_mixed(sup):
            self._require_resolvable(sub)
            return True
        return subsumes(self.dnf(sub), self.dnf(sup))

    def is_equivalent(self, left: TypeExpr, right: TypeExpr) -> bool:
        """Return True if the two expressions are mutual subtypes."""
        return self.is_subtype(left, right) and self.is_subtype(right, left)

    def _is_mixed(self, expr: TypeExpr) -> bool:
        if not isinstance(expr, NamedType):
            return False
        try:
            decl = self._registry.resolve(expr.name, expr.namespace)
        except TypeAlgebraError:
            # Left for dnf() to report as an unresolved reference.
            return False
        return decl.qualified_name == MIXED

    def _require_resolvable(self, expr: TypeExpr) -> None:
        if isinstance(expr, NamedType):
            try:
                self._registry.resolve(expr.name, expr.namespace)
            except UnknownType as exc:
                raise UnresolvedReference(expr.name, expr.namespace) from exc
            return
        for operand in expr.operands:
            self._require_resolvable(operand)


def is_subtype(registry: RegistryView, sub: TypeExpr, sup: TypeExpr, *, max_depth: int = DEFAULT_MAX_DEPTH) -> bool:
    """Return True if *sub* is a subtype of *sup* in *registry*.

    Raises:
        UnresolvedReference: If a named leaf cannot be resolved.
        CyclicAlias: If resolving a leaf runs into an alias cycle.
        CyclicDefinition: If a referenced body is not grounded.
    """
    return SubtypeResolver(registry, max_depth=max_depth).is_subtype(sub, sup)
