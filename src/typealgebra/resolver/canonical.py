# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Canonicalization of type expressions into disjunctive normal form.

A canonical form is a set of *clauses*; each clause is the set of atomic
leaves (built-ins and class-like names) that a value must carry at once. The
whole set is the union of its clauses.

Expansion substitutes declaration bodies for named references. Built-ins
and class-like declarations are nominal: their own name is an atom of every
clause they produce. Explicit ``type`` declarations are transparent.

A name that is met again while it is being expanded contributes no clauses
if only unions lie between the two occurrences (``type X = X | Y`` means
``Y``). Any other re-entry, or a root expansion that ends up with no clauses
at all, is a :class:`~typealgebra.registry.errors.CyclicDefinition`.
"""

from __future__ import annotations

import logging
from itertools import product

from typealgebra.model.entities import DeclarationOrigin, TypeDeclaration
from typealgebra.model.types import IntersectionType, NamedType, TypeExpr, UnionType
from typealgebra.registry.errors import CyclicDefinition, UnknownType, UnresolvedReference
from typealgebra.registry.registry import RegistryView

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

Clause = frozenset[str]
Dnf = frozenset[Clause]

DEFAULT_MAX_DEPTH = 64

# The empty union (no value) and the empty intersection (no constraint).
BOTTOM: Dnf = frozenset()
TOP: Dnf = frozenset({frozenset()})


def dnf_union(*operands: Dnf) -> Dnf:
    """Return the union of canonical forms."""
    return absorb(frozenset().union(*operands))


def dnf_intersection(*operands: Dnf) -> Dnf:
    """Return the intersection of canonical forms (pairwise clause product)."""
    result = TOP
    for operand in operands:
        result = absorb(frozenset(left | right for left, right in product(result, operand)))
    return result


def absorb(dnf: Dnf) -> Dnf:
    """Drop clauses that are strict supersets of another clause.

    A more specific clause adds no alternatives to a union that already
    contains a less specific one.
    """
    return frozenset(clause for clause in dnf if not any(other < clause for other in dnf))


def subsumes(narrow: Dnf, wide: Dnf) -> bool:
    """Return True if every clause of *narrow* satisfies some clause of *wide*."""
    return all(any(w <= n for w in wide) for n in narrow)


class Canonicalizer:
    """Expands type expressions against a registry, caching root expansions.

    Args:
        registry: The registry (builder or snapshot) to resolve names in.
        max_depth: Maximum nesting of named expansions before giving up.
    """

    def __init__(self, registry: RegistryView, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._registry = registry
        self._max_depth = max_depth
        self._cache: dict[str, Dnf] = {}

    def expression(self, expr: TypeExpr) -> Dnf:
        """Return the canonical form of an arbitrary expression."""
        return self._expand(expr, (), frozenset())

    def declaration(self, decl: TypeDeclaration) -> Dnf:
        """Return the canonical form of a declaration.

        Raises:
            CyclicDefinition: If the body is not grounded.
            UnresolvedReference: If a reference in the body is unknown.
        """
        name = decl.qualified_name
        cached = self._cache.get(name)
        if cached is not None:
            return cached
        dnf = self._expand_declaration(decl, (name,), frozenset({name}))
        if not dnf:
            raise CyclicDefinition(name, [name], "without a grounding alternative")
        self._cache[name] = dnf
        return dnf

    # ------------------------------------------------------------------
    # Expansion
    # ------------------------------------------------------------------

    def _expand(self, expr: TypeExpr, stack: tuple[str, ...], guarded: frozenset[str], namespace: str = "") -> Dnf:
        """Expand *expr*.

        Args:
            stack: Names currently being expanded, outermost first.
            guarded: The subset of *stack* reachable from here through unions only.
            namespace: Namespace of the enclosing declaration, used for references
                that carry none of their own.
        """
        if isinstance(expr, NamedType):
            return self._expand_named(expr, stack, guarded, namespace)
        if isinstance(expr, UnionType):
            return dnf_union(*(self._expand(op, stack, guarded, namespace) for op in expr.operands))
        # Refinements do not take part in structural comparison.
        return dnf_intersection(*(self._expand(op, stack, frozenset(), namespace) for op in expr.operands))

    def _expand_named(self, ref: NamedType, stack: tuple[str, ...], guarded: frozenset[str], namespace: str) -> Dnf:
        scope = ref.namespace or namespace
        try:
            decl = self._registry.resolve(ref.name, scope)
        except UnknownType as exc:
            raise UnresolvedReference(ref.name, scope) from exc

        name = decl.qualified_name
        if name in stack:
            if name in guarded:
                logger.debug("Guarded self-reference to '%s' contributes no alternatives", name)
                return BOTTOM
            raise CyclicDefinition(stack[0], [*stack, name])

        cached = self._cache.get(name)
        if cached is not None:
            return cached
        if not stack:
            return self.declaration(decl)
        if len(stack) >= self._max_depth:
            raise CyclicDefinition(
                stack[0], [*stack, name], f"exceeds the maximum expansion depth of {self._max_depth}"
            )
        return self._expand_declaration(decl, (*stack, name), guarded | {name})

    def _expand_declaration(self, decl: TypeDeclaration, stack: tuple[str, ...], guarded: frozenset[str]) -> Dnf:
        body = decl.body
        if decl.origin is DeclarationOrigin.EXPLICIT:
            return self._expand(body, stack, guarded, decl.namespace)

        own: Dnf = frozenset({frozenset({decl.qualified_name})})
        if isinstance(body, IntersectionType) and body.native:
            supertypes = [self._expand(op, stack, frozenset(), decl.namespace) for op in body.operands]
            return dnf_intersection(own, *supertypes)
        return dnf_intersection(own, self._expand(body, stack, frozenset(), decl.namespace))
