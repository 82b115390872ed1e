# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Method override compatibility: contravariant parameters, covariant returns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from typealgebra.model.entities import MethodSignature
from typealgebra.model.types import format_type
from typealgebra.registry.registry import RegistryView
from typealgebra.resolver.canonical import DEFAULT_MAX_DEPTH
from typealgebra.resolver.subtype import SubtypeResolver

# ###############
# Public Interface
# ###############


class ViolationKind(Enum):
    """The rule an overriding method broke."""

    PARAMETER_NOT_WIDENED = "parameter-not-widened"
    RETURN_TYPE_NOT_NARROWED = "return-type-not-narrowed"


@dataclass(frozen=True)
class VarianceViolation:
    """An incompatibility between an overridden and an overriding method.

    Attributes:
        kind: Which rule was broken.
        position: Zero-based parameter position for parameter violations.
        message: Human-readable description of the violation.
    """

    kind: ViolationKind
    position: int | None
    message: str


def check_override(
    registry: RegistryView | SubtypeResolver,
    parent: MethodSignature,
    child: MethodSignature,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[VarianceViolation]:
    """Check that *child* may override *parent*.

    Each parameter of *child* must be a supertype of the parameter at the same
    position in *parent*, and the return type of *child* must be a subtype of
    the return type of *parent*. Arity is expected to be validated by the
    caller; only positions present in both signatures are compared.

    Args:
        registry: Registry to resolve names in, or a resolver to reuse its cache.
        parent: The overridden method.
        child: The overriding method.
        max_depth: Expansion depth limit when a registry is passed.

    Returns:
        A list of :class:`VarianceViolation` values; empty when the override
        is compatible.

    Raises:
        UnresolvedReference: If a type in either signature cannot be resolved.
        CyclicDefinition: If a referenced type body is not grounded.
    """
    resolver = registry if isinstance(registry, SubtypeResolver) else SubtypeResolver(registry, max_depth=max_depth)
    violations: list[VarianceViolation] = []
    label = f"{child.owner_type_name}::{child.method_name}()"
    overridden = f"{parent.owner_type_name}::{parent.method_name}()"

    for position, (parent_param, child_param) in enumerate(zip(parent.parameters, child.parameters)):
        if not resolver.is_subtype(parent_param, child_param):
            violations.append(
                VarianceViolation(
                    ViolationKind.PARAMETER_NOT_WIDENED,
                    position,
                    f"{label}: parameter #{position} type '{format_type(child_param)}'"
                    f" does not accept '{format_type(parent_param)}' as declared by {overridden}",
                )
            )

    if not resolver.is_subtype(child.return_type, parent.return_type):
        violations.append(
            VarianceViolation(
                ViolationKind.RETURN_TYPE_NOT_NARROWED,
                None,
                f"{label}: return type '{format_type(child.return_type)}'"
                f" is not a subtype of '{format_type(parent.return_type)}' as declared by {overridden}",
            )
        )

    return violations
