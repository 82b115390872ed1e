# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type expression algebra: named references, unions and intersections."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class Refinement(BaseModel):
    """An opaque runtime predicate attached to an intersection.

    The predicate itself is never inspected by the static algebra and is
    excluded from serialization; ``name`` identifies it in diagnostics and
    registry snapshots.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    check: Callable[[Any], bool] | None = _Field(default=None, exclude=True, repr=False)


class NamedType(BaseModel):
    """Reference to a declared type or a built-in leaf.

    Attributes:
        name: The name as written. A leading ``\\`` marks an absolute name.
        namespace: The namespace the reference was written in, used for
            relative lookup.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["named"] = "named"
    name: str
    namespace: str = ""

    @field_validator("name")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip("\\"):
            raise ValueError("a named type needs a non-empty name")
        return value


class UnionType(BaseModel):
    """Logical OR over at least two distinct operands."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["union"] = "union"
    operands: tuple[TypeExpr, ...]

    @field_validator("operands")
    @classmethod
    def _normalize(cls, operands: tuple[TypeExpr, ...]) -> tuple[TypeExpr, ...]:
        normalized = _canonical_order(_flatten_union(operands))
        if len(normalized) < 2:
            raise ValueError("a union needs at least two distinct operands")
        return normalized


class IntersectionType(BaseModel):
    """Logical AND over its operands, optionally narrowed by a refinement.

    A *native* intersection marks a built-in atomic leaf: its operands are the
    leaf's direct supertypes and it is never decomposed further.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["intersection"] = "intersection"
    operands: tuple[TypeExpr, ...]
    refinement: Refinement | None = None
    native: bool = False

    @field_validator("operands")
    @classmethod
    def _normalize(cls, operands: tuple[TypeExpr, ...]) -> tuple[TypeExpr, ...]:
        return _canonical_order(_flatten_intersection(operands))

    @model_validator(mode="after")
    def _check_arity(self) -> IntersectionType:
        if self.native:
            if self.refinement is not None:
                raise ValueError("a native intersection cannot carry a refinement")
            return self
        minimum = 1 if self.refinement is not None else 2
        if len(self.operands) < minimum:
            raise ValueError(f"an intersection needs at least {minimum} distinct operand(s)")
        return self


# A type expression: one of the named, union, or intersection forms.
TypeExpr = Annotated[
    NamedType | UnionType | IntersectionType,
    _Field(discriminator="kind"),
]


def named(name: str, namespace: str = "") -> NamedType:
    """Create a reference to *name* as written in *namespace*."""
    return NamedType(name=name, namespace=namespace)


def union(*operands: TypeExpr) -> TypeExpr:
    """Build a normalized union; a single distinct operand collapses to itself.

    Raises:
        ValueError: If no operands are given.
    """
    flat = _canonical_order(_flatten_union(operands))
    if not flat:
        raise ValueError("a union needs at least one operand")
    if len(flat) == 1:
        return flat[0]
    return UnionType(operands=flat)


def intersection(*operands: TypeExpr, refinement: Refinement | None = None) -> TypeExpr:
    """Build a normalized intersection; a single unrefined operand collapses to itself.

    Raises:
        ValueError: If no operands are given.
    """
    flat = _canonical_order(_flatten_intersection(operands))
    if not flat:
        raise ValueError("an intersection needs at least one operand")
    if len(flat) == 1 and refinement is None:
        return flat[0]
    return IntersectionType(operands=flat, refinement=refinement)


def format_type(expr: TypeExpr) -> str:
    """Render a type expression in the ``A | B & C`` surface form."""
    if isinstance(expr, NamedType):
        return expr.name
    if isinstance(expr, UnionType):
        return " | ".join(format_type(op) for op in expr.operands)
    parts = [f"({format_type(op)})" if isinstance(op, UnionType) else format_type(op) for op in expr.operands]
    text = " & ".join(parts)
    if expr.native:
        return f"native({text})"
    if expr.refinement is not None:
        return f"({text} where {expr.refinement.name})"
    return text


# ################
# Implementation
# ################


def _flatten_union(operands: Iterable[TypeExpr]) -> list[TypeExpr]:
    flat: list[TypeExpr] = []
    for op in operands:
        if isinstance(op, UnionType):
            flat.extend(op.operands)
        else:
            flat.append(op)
    return flat


def _flatten_intersection(operands: Iterable[TypeExpr]) -> list[TypeExpr]:
    # Refined and native intersections keep their own node.
    flat: list[TypeExpr] = []
    for op in operands:
        if isinstance(op, IntersectionType) and op.refinement is None and not op.native:
            flat.extend(op.operands)
        else:
            flat.append(op)
    return flat


def _canonical_order(operands: list[TypeExpr]) -> tuple[TypeExpr, ...]:
    """Deduplicate operands and sort them into a deterministic order."""
    return tuple(sorted(set(operands), key=lambda op: (format_type(op), repr(op))))


# Resolve forward references for models that use TypeExpr.
UnionType.model_rebuild()
IntersectionType.model_rebuild()
