# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Runtime classification of values against refinement-bearing types.

This is the only place refinement predicates are executed. Structural
membership is decided by the subtype resolver using the value's runtime type
name; predicates then narrow intersections further. A predicate that raises
(or was never bound) counts as not matching and is reported back to the
caller in :attr:`Classification.failures`.
"""

from __future__ import annotations

import inspect
import io
import logging
from collections.abc import Callable
from dataclasses import dataclass

from typealgebra.model.entities import DeclarationOrigin
from typealgebra.model.types import NamedType, Refinement, TypeExpr, UnionType, named
from typealgebra.registry.errors import RefinementPredicateFailed, UnknownType, UnresolvedReference
from typealgebra.registry.registry import RegistryView
from typealgebra.resolver.subtype import SubtypeResolver

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

# Instances (or their classes) may name their host-language type through this attribute.
HOST_TYPE_ATTRIBUTE = "__host_type__"


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying a value.

    Attributes:
        matched: Whether the value belongs to the type.
        failures: Predicates that raised or were unbound; each counted as a
            non-match for its intersection.
    """

    matched: bool
    failures: tuple[RefinementPredicateFailed, ...] = ()


def runtime_type_name(value: object) -> str:
    """Return the host type name observed for a Python value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple, dict)):
        return "array"
    if isinstance(value, io.IOBase):
        return "resource"
    host_type = getattr(value, HOST_TYPE_ATTRIBUTE, None)
    if isinstance(host_type, str):
        return host_type
    if inspect.isroutine(value):
        return "callable"
    return "object"


def classify(
    registry: RegistryView | SubtypeResolver,
    value: object,
    expr: TypeExpr,
    *,
    type_of: Callable[[object], str] = runtime_type_name,
) -> Classification:
    """Classify *value* against *expr*.

    Args:
        registry: Registry to resolve names in, or a resolver to reuse its cache.
        value: The runtime value.
        expr: The type to test membership in.
        type_of: Maps a value to the qualified name of its runtime type.

    Returns:
        A :class:`Classification`; predicate failures are recorded, not raised.

    Raises:
        UnresolvedReference: If *expr* or the value's type name is unknown.
    """
    resolver = registry if isinstance(registry, SubtypeResolver) else SubtypeResolver(registry)
    evaluator = _Evaluator(resolver, value, type_of(value))
    matched = evaluator.matches(expr, frozenset())
    return Classification(matched=matched, failures=tuple(evaluator.failures))


def classifies(
    registry: RegistryView | SubtypeResolver,
    value: object,
    expr: TypeExpr,
    *,
    type_of: Callable[[object], str] = runtime_type_name,
) -> bool:
    """Return True if *value* belongs to *expr*.

    A predicate that raised or was unbound counts as a non-match for its
    intersection, so a value accepted by another alternative still yields True.

    Raises:
        RefinementPredicateFailed: If the value matched nothing and a predicate
            raised or was unbound; use :func:`classify` to get every failure.
        UnresolvedReference: If *expr* or the value's type name is unknown.
    """
    result = classify(registry, value, expr, type_of=type_of)
    if not result.matched and result.failures:
        raise result.failures[0]
    return result.matched


# ################
# Implementation
# ################


class _Evaluator:
    """Walks a type expression for a single value."""

    def __init__(self, resolver: SubtypeResolver, value: object, type_name: str) -> None:
        self._resolver = resolver
        self._value = value
        self._value_type = named("\\" + type_name.lstrip("\\"))
        self.failures: list[RefinementPredicateFailed] = []

    def matches(self, expr: TypeExpr, visiting: frozenset[str], namespace: str = "") -> bool:
        if isinstance(expr, NamedType):
            return self._matches_named(expr, visiting, namespace)
        if isinstance(expr, UnionType):
            return any(self.matches(op, visiting, namespace) for op in expr.operands)
        if not all(self.matches(op, visiting, namespace) for op in expr.operands):
            return False
        if expr.refinement is None:
            return True
        return self._run(expr.refinement)

    def _matches_named(self, ref: NamedType, visiting: frozenset[str], namespace: str) -> bool:
        scope = ref.namespace or namespace
        try:
            decl = self._resolver.registry.resolve(ref.name, scope)
        except UnknownType as exc:
            raise UnresolvedReference(ref.name, scope) from exc
        if decl.origin is not DeclarationOrigin.EXPLICIT:
            return self._resolver.is_subtype(self._value_type, named("\\" + decl.qualified_name))
        # Explicit bodies are walked so that their refinements run.
        if decl.qualified_name in visiting:
            return False
        return self.matches(decl.body, visiting | {decl.qualified_name}, decl.namespace)

    def _run(self, refinement: Refinement) -> bool:
        if refinement.check is None:
            self._fail(refinement, "predicate is not bound")
            return False
        try:
            return bool(refinement.check(self._value))
        except Exception as exc:
            failure = self._fail(refinement, f"{type(exc).__name__}: {exc}")
            failure.__cause__ = exc
            return False

    def _fail(self, refinement: Refinement, reason: str) -> RefinementPredicateFailed:
        failure = RefinementPredicateFailed(refinement.name, self._value, reason)
        logger.warning("%s", failure)
        self.failures.append(failure)
        return failure
