# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declarations, class-like descriptors, method signatures and declaration units."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from typealgebra.model.types import TypeExpr

# ###############
# Public Interface
# ###############


class DeclarationOrigin(Enum):
    """Where a registry declaration came from."""

    EXPLICIT = "explicit"
    IMPLICIT_FROM_CLASS = "class"
    IMPLICIT_FROM_INTERFACE = "interface"
    IMPLICIT_FROM_TRAIT_USE = "trait"
    BUILT_IN = "builtin"

    @property
    def is_class_like(self) -> bool:
        """Return True for origins synthesized from class-like declarations."""
        return self in _CLASS_LIKE_ORIGINS


class ClassKind(Enum):
    """The flavour of a class-like declaration."""

    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"

    @property
    def origin(self) -> DeclarationOrigin:
        """The declaration origin used for the implicit type of this kind."""
        return _KIND_ORIGINS[self]


class TypeDeclaration(BaseModel):
    """A named type expression bound in the registry.

    Attributes:
        qualified_name: Fully qualified name, e.g. ``App\\Models\\User``.
        namespace: The namespace part of the qualified name (may be empty).
        body: The declared type expression.
        origin: How the declaration was produced.
    """

    model_config = ConfigDict(frozen=True)

    qualified_name: str
    namespace: str = ""
    body: TypeExpr
    origin: DeclarationOrigin = DeclarationOrigin.EXPLICIT


class ClassLikeDescriptor(BaseModel):
    """Structure of a class, interface or trait as supplied by a declaration loader.

    All names are expected to be fully qualified.
    """

    model_config = ConfigDict(frozen=True)

    qualified_name: str
    parent: str | None = None
    implemented_interfaces: frozenset[str] = frozenset()
    used_traits: frozenset[str] = frozenset()
    kind: ClassKind = ClassKind.CLASS


class MethodSignature(BaseModel):
    """A method's parameter and return types, as input to override checking."""

    model_config = ConfigDict(frozen=True)

    owner_type_name: str
    method_name: str
    parameters: tuple[TypeExpr, ...] = ()
    return_type: TypeExpr


class MethodDef(BaseModel):
    """A method declared by a class in a declaration unit."""

    name: str
    parameters: list[str] = _Field(default_factory=list)
    returns: str = "mixed"


class ClassDef(BaseModel):
    """A class, interface or trait declared in a declaration unit."""

    name: str
    kind: ClassKind = ClassKind.CLASS
    parent: str | None = None
    interfaces: list[str] = _Field(default_factory=list)
    traits: list[str] = _Field(default_factory=list)
    methods: list[MethodDef] = _Field(default_factory=list)


class ImportDef(BaseModel):
    """An import directive binding *source* under *alias* in the unit namespace."""

    source: str
    alias: str | None = None


class DeclarationUnit(BaseModel):
    """Top-level model for the parsed contents of a single declaration file."""

    namespace: str = ""
    imports: list[ImportDef] = _Field(default_factory=list)
    types: dict[str, str] = _Field(default_factory=dict)
    classes: list[ClassDef] = _Field(default_factory=list)
    source_path: str = ""


# ################
# Implementation
# ################

_CLASS_LIKE_ORIGINS = frozenset(
    {
        DeclarationOrigin.IMPLICIT_FROM_CLASS,
        DeclarationOrigin.IMPLICIT_FROM_INTERFACE,
        DeclarationOrigin.IMPLICIT_FROM_TRAIT_USE,
    }
)

_KIND_ORIGINS = {
    ClassKind.CLASS: DeclarationOrigin.IMPLICIT_FROM_CLASS,
    ClassKind.INTERFACE: DeclarationOrigin.IMPLICIT_FROM_INTERFACE,
    ClassKind.TRAIT: DeclarationOrigin.IMPLICIT_FROM_TRAIT_USE,
}
