# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic analysis for parsed declaration units.

Checks the structural correctness of a single unit before it is fed to the
registry: duplicate names, conflicting bindings, unparsable type
expressions and malformed class-like declarations. Cross-unit properties
(duplicate qualified names across files, unresolved references, variance)
are reported by the registry build and by validation.
"""

from __future__ import annotations

from dataclasses import dataclass

from typealgebra.compiler.units import class_qualified_name, import_alias_name, qualify_class_name
from typealgebra.model.entities import ClassDef, ClassKind, DeclarationUnit
from typealgebra.parser.lexer import LexerError
from typealgebra.parser.parser import ParseError, parse_type

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class SemanticError:
    """A structural error detected during semantic analysis.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


def analyze(unit: DeclarationUnit) -> list[SemanticError]:
    """Perform semantic analysis on a parsed declaration unit.

    Checks performed:
    - Duplicate class-like names.
    - Names declared both as an explicit type and as a class-like declaration.
    - Duplicate import aliases, and aliases that clash with local names.
    - Every type expression (explicit types, method parameters and returns)
      must parse.
    - A class-like declaration must not list itself as a supertype, nor list
      the same supertype twice.
    - Interfaces may only extend interfaces (no ``parent``, no ``traits``);
      traits have no supertypes.
    - Duplicate method names within a class-like declaration.

    Args:
        unit: The parsed declaration unit.

    Returns:
        A list of :class:`SemanticError` instances. An empty list means no
        semantic errors were found.
    """
    return _SemanticAnalyzer(unit).analyze()


# ################
# Implementation
# ################


class _SemanticAnalyzer:
    """Performs semantic analysis on a single declaration unit."""

    def __init__(self, unit: DeclarationUnit) -> None:
        self._unit = unit

    def analyze(self) -> list[SemanticError]:
        """Run all semantic checks and return collected errors."""
        errors: list[SemanticError] = []
        unit = self._unit

        # 1. Duplicate class-like names.
        errors.extend(
            _check_duplicate_names(
                [c.name for c in unit.classes],
                "Duplicate class-like name '{}'",
            )
        )

        # 2. Types and classes share one name space.
        class_names = {c.name for c in unit.classes}
        for name in sorted(class_names & set(unit.types)):
            errors.append(SemanticError(f"Name '{name}' is declared both as a type and as a class-like"))

        # 3. Import aliases.
        aliases = [import_alias_name(imp) for imp in unit.imports]
        errors.extend(_check_duplicate_names(aliases, "Duplicate import alias '{}'"))
        local_names = class_names | set(unit.types)
        for alias in sorted(set(aliases) & local_names):
            errors.append(SemanticError(f"Import alias '{alias}' conflicts with a local declaration"))

        # 4. Explicit type expressions.
        for name, source in unit.types.items():
            errors.extend(self._check_expression(f"type '{name}'", source))

        # 5. Class-like declarations.
        for class_def in unit.classes:
            errors.extend(self._check_class(class_def))

        return errors

    def _check_class(self, class_def: ClassDef) -> list[SemanticError]:
        errors: list[SemanticError] = []
        ctx = f"{class_def.kind.value} '{class_def.name}'"

        if class_def.kind is ClassKind.INTERFACE:
            if class_def.parent is not None:
                errors.append(SemanticError(f"{ctx}: an interface cannot have a parent class"))
            if class_def.traits:
                errors.append(SemanticError(f"{ctx}: an interface cannot use traits"))
        elif class_def.kind is ClassKind.TRAIT:
            if class_def.parent is not None or class_def.interfaces:
                errors.append(SemanticError(f"{ctx}: a trait cannot have supertypes"))

        own_name = class_qualified_name(class_def, self._unit)
        supertypes = [class_def.parent] if class_def.parent is not None else []
        supertypes += class_def.interfaces + class_def.traits
        qualified = [qualify_class_name(s, self._unit) for s in supertypes]
        if own_name in qualified:
            errors.append(SemanticError(f"{ctx}: cannot list itself as a supertype"))
        errors.extend(_check_duplicate_names(qualified, f"{ctx}: supertype '{{}}' is listed more than once"))

        errors.extend(
            _check_duplicate_names(
                [m.name for m in class_def.methods],
                f"Duplicate method name '{{}}' in {ctx}",
            )
        )
        for method in class_def.methods:
            for position, source in enumerate(method.parameters):
                errors.extend(self._check_expression(f"{ctx}, method '{method.name}' parameter #{position}", source))
            errors.extend(self._check_expression(f"{ctx}, method '{method.name}' return type", method.returns))

        return errors

    def _check_expression(self, ctx: str, source: str) -> list[SemanticError]:
        try:
            parse_type(source, self._unit.namespace)
        except (LexerError, ParseError) as exc:
            return [SemanticError(f"Invalid type expression in {ctx}: {exc}")]
        return []


# ------------------------------------------------------------------
# Module-level helper functions
# ------------------------------------------------------------------


def _check_duplicate_names(names: list[str], fmt: str) -> list[SemanticError]:
    """Return a SemanticError for each name that appears more than once.

    Only one error per unique duplicate name is emitted (even if it appears
    three or more times).  *fmt* must contain a single ``{}`` placeholder
    that will be filled with the duplicate name.
    """
    seen: set[str] = set()
    reported: set[str] = set()
    errors: list[SemanticError] = []
    for name in names:
        if name in seen:
            if name not in reported:
                errors.append(SemanticError(fmt.format(name)))
                reported.add(name)
        else:
            seen.add(name)
    return errors
