# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""The built-in type lattice every registry starts from."""

from __future__ import annotations

from typealgebra.model.entities import DeclarationOrigin, TypeDeclaration
from typealgebra.model.types import IntersectionType, named

# ###############
# Public Interface
# ###############

MIXED = "mixed"
OBJECT = "object"

# Each built-in leaf mapped to its direct supertypes, parents before children.
BUILTIN_HIERARCHY: dict[str, tuple[str, ...]] = {
    MIXED: (),
    OBJECT: (MIXED,),
    "scalar": (MIXED,),
    "resource": (MIXED,),
    "array": (MIXED,),
    "callable": (MIXED,),
    "null": (MIXED,),
    "string": ("scalar",),
    "int": ("scalar",),
    "float": ("scalar",),
    "bool": ("scalar",),
}


def native_body(supertypes: tuple[str, ...]) -> IntersectionType:
    """Return the atomic-leaf body of a built-in with the given direct supertypes."""
    return IntersectionType(operands=tuple(named(s) for s in supertypes), native=True)


def builtin_declarations() -> list[TypeDeclaration]:
    """Return the seed declarations, in dependency order."""
    return [
        TypeDeclaration(
            qualified_name=name,
            body=native_body(supertypes),
            origin=DeclarationOrigin.BUILT_IN,
        )
        for name, supertypes in BUILTIN_HIERARCHY.items()
    ]
