# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type registry, built-in seed and error taxonomy."""

from typealgebra.registry.builtins import BUILTIN_HIERARCHY, MIXED, OBJECT, builtin_declarations
from typealgebra.registry.errors import (
    CyclicAlias,
    CyclicDefinition,
    DuplicateDeclaration,
    RefinementPredicateFailed,
    TypeAlgebraError,
    UnknownType,
    UnresolvedReference,
)
from typealgebra.registry.registry import RegistryBuilder, RegistryHandle, RegistryView, TypeRegistry, implicit_body

__all__ = [
    "BUILTIN_HIERARCHY",
    "MIXED",
    "OBJECT",
    "builtin_declarations",
    "TypeAlgebraError",
    "DuplicateDeclaration",
    "UnknownType",
    "UnresolvedReference",
    "CyclicAlias",
    "CyclicDefinition",
    "RefinementPredicateFailed",
    "RegistryView",
    "RegistryBuilder",
    "TypeRegistry",
    "RegistryHandle",
    "implicit_body",
]
