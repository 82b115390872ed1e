# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type expression model and declaration entities."""

from typealgebra.model.entities import (
    ClassDef,
    ClassKind,
    ClassLikeDescriptor,
    DeclarationOrigin,
    DeclarationUnit,
    ImportDef,
    MethodDef,
    MethodSignature,
    TypeDeclaration,
)
from typealgebra.model.types import (
    IntersectionType,
    NamedType,
    Refinement,
    TypeExpr,
    UnionType,
    format_type,
    intersection,
    named,
    union,
)

__all__ = [
    # Type expressions
    "NamedType",
    "UnionType",
    "IntersectionType",
    "Refinement",
    "TypeExpr",
    "named",
    "union",
    "intersection",
    "format_type",
    # Entities
    "DeclarationOrigin",
    "ClassKind",
    "TypeDeclaration",
    "ClassLikeDescriptor",
    "MethodSignature",
    "MethodDef",
    "ClassDef",
    "ImportDef",
    "DeclarationUnit",
]
