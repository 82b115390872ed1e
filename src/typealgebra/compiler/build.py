# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Registry construction from declaration units.

:func:`compile_units` loads and analyzes unit files, failing fast on any
structural problem. :func:`build_registry` then feeds the units to a
:class:`~typealgebra.registry.registry.RegistryBuilder`:

1. class-like declarations are turned into descriptors and declared
   implicitly;
2. explicit types are parsed and declared;
3. imports are applied in repeated passes, so an import may name an alias
   introduced by another import regardless of file order.

A declaration that fails is reported as a :class:`BuildError` and skipped;
the remaining declarations are still registered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from typealgebra.compiler.semantic_analysis import analyze
from typealgebra.compiler.units import (
    UnitError,
    class_qualified_name,
    import_alias_name,
    load_unit,
    qualify_class_name,
)
from typealgebra.model.entities import (
    ClassDef,
    ClassLikeDescriptor,
    DeclarationUnit,
    ImportDef,
    MethodDef,
    MethodSignature,
)
from typealgebra.parser.lexer import LexerError
from typealgebra.parser.parser import ParseError, parse_type
from typealgebra.registry.errors import DuplicateDeclaration, TypeAlgebraError, UnknownType
from typealgebra.registry.registry import RegistryBuilder, TypeRegistry

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when declaration units cannot be loaded or are structurally invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class BuildError:
    """A declaration or import that could not be registered.

    Attributes:
        message: Human-readable description of the error.
        source: The unit the declaration came from.
    """

    message: str
    source: str = ""


@dataclass
class BuildResult:
    """Outcome of building a registry.

    Attributes:
        registry: The snapshot holding every declaration that succeeded.
        errors: Declarations and imports that were skipped.
    """

    registry: TypeRegistry
    errors: list[BuildError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any declaration was skipped."""
        return len(self.errors) > 0


def compile_units(files: list[Path]) -> list[DeclarationUnit]:
    """Load and analyze declaration unit files.

    Args:
        files: Paths to ``*.types.yaml`` files.

    Returns:
        The parsed units, in the order given.

    Raises:
        CompilerError: If a file cannot be loaded or has semantic errors.
    """
    units: list[DeclarationUnit] = []
    for path in files:
        try:
            unit = load_unit(path)
        except UnitError as exc:
            raise CompilerError(str(exc)) from exc
        errors = analyze(unit)
        if errors:
            error_lines = "\n".join(f"  {e.message}" for e in errors)
            raise CompilerError(f"Semantic errors in '{path}':\n{error_lines}")
        units.append(unit)
    return units


def build_registry(units: list[DeclarationUnit], *, builder: RegistryBuilder | None = None) -> BuildResult:
    """Register the declarations of *units* and return an immutable snapshot.

    Args:
        units: Parsed (and analyzed) declaration units.
        builder: Builder to add to; a freshly seeded one by default. Pass
            ``registry.to_builder()`` for a copy-on-write rebuild.
    """
    builder = builder if builder is not None else RegistryBuilder()
    errors: list[BuildError] = []

    for unit in units:
        for class_def in unit.classes:
            descriptor = class_descriptor(class_def, unit)
            try:
                builder.declare_implicit(descriptor)
            except DuplicateDeclaration as exc:
                errors.append(BuildError(str(exc), unit.source_path))

    for unit in units:
        for name, source in unit.types.items():
            try:
                builder.declare(name, parse_type(source, unit.namespace), namespace=unit.namespace)
            except (LexerError, ParseError) as exc:
                errors.append(BuildError(f"Invalid type expression for '{name}': {exc}", unit.source_path))
            except DuplicateDeclaration as exc:
                errors.append(BuildError(str(exc), unit.source_path))

    errors.extend(_apply_imports(builder, units))

    registry = builder.build()
    logger.info("Built registry with %d declarations (%d skipped)", len(registry), len(errors))
    return BuildResult(registry=registry, errors=errors)


def class_descriptor(class_def: ClassDef, unit: DeclarationUnit) -> ClassLikeDescriptor:
    """Translate a unit's class-like declaration into a descriptor with qualified names."""
    return ClassLikeDescriptor(
        qualified_name=class_qualified_name(class_def, unit),
        parent=qualify_class_name(class_def.parent, unit) if class_def.parent is not None else None,
        implemented_interfaces=frozenset(qualify_class_name(i, unit) for i in class_def.interfaces),
        used_traits=frozenset(qualify_class_name(t, unit) for t in class_def.traits),
        kind=class_def.kind,
    )


def method_signature(class_def: ClassDef, method: MethodDef, unit: DeclarationUnit) -> MethodSignature:
    """Parse a unit method declaration into a :class:`MethodSignature`.

    Raises:
        LexerError: If a type expression contains invalid characters.
        ParseError: If a type expression is malformed.
    """
    return MethodSignature(
        owner_type_name=class_qualified_name(class_def, unit),
        method_name=method.name,
        parameters=tuple(parse_type(p, unit.namespace) for p in method.parameters),
        return_type=parse_type(method.returns, unit.namespace),
    )


# ################
# Implementation
# ################


def _apply_imports(builder: RegistryBuilder, units: list[DeclarationUnit]) -> list[BuildError]:
    """Apply imports until no further import can be resolved."""
    errors: list[BuildError] = []
    pending: list[tuple[DeclarationUnit, ImportDef]] = [(u, imp) for u in units for imp in u.imports]

    progress = True
    while pending and progress:
        progress = False
        remaining: list[tuple[DeclarationUnit, ImportDef]] = []
        for unit, imp in pending:
            try:
                builder.import_alias(imp.source, import_alias_name(imp), unit.namespace)
                progress = True
            except UnknownType:
                remaining.append((unit, imp))
            except TypeAlgebraError as exc:
                errors.append(BuildError(f"Cannot import '{imp.source}': {exc}", unit.source_path))
                progress = True
        pending = remaining

    for unit, imp in pending:
        errors.append(BuildError(f"Cannot import '{imp.source}': unknown type", unit.source_path))
    return errors
