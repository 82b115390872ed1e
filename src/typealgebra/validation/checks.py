# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Codebase-wide validation of a built registry.

These checks run after the registry has been built and report every
problem at once instead of stopping at the first one: override checks are
independent per method pair, so a linter can show all of them together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from typealgebra.compiler.build import method_signature
from typealgebra.compiler.units import class_qualified_name, qualify_class_name
from typealgebra.model.entities import ClassDef, DeclarationOrigin, DeclarationUnit, MethodDef, MethodSignature
from typealgebra.parser.lexer import LexerError
from typealgebra.parser.parser import ParseError
from typealgebra.registry.builtins import MIXED
from typealgebra.registry.errors import TypeAlgebraError
from typealgebra.registry.registry import RegistryView
from typealgebra.resolver.canonical import DEFAULT_MAX_DEPTH
from typealgebra.resolver.subtype import SubtypeResolver
from typealgebra.variance.checker import VarianceViolation, check_override

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue detected during validation.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A fatal issue detected during validation.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass(frozen=True)
class OverrideViolation:
    """A variance violation together with the method pair it was found on.

    Attributes:
        child: The overriding method.
        parent: The overridden method.
        violation: The broken rule.
    """

    child: MethodSignature
    parent: MethodSignature
    violation: VarianceViolation


@dataclass
class ValidationResult:
    """Result of running validation checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Fatal errors, including one per override violation.
        violations: The override violations in structured form.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)
    violations: list[OverrideViolation] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal validation errors were found."""
        return len(self.errors) > 0


def validate(
    registry: RegistryView,
    units: list[DeclarationUnit],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ValidationResult:
    """Run all validation checks on a built registry.

    Checks performed:

    1. **Definitions** (error): every non-built-in declaration must
       canonicalize; cyclic definitions, alias cycles and unresolved
       references are reported per declaration.

    2. **Unconstrained types** (warning): explicit types equivalent to
       ``mixed`` accept every value.

    3. **Override arity** (error): an overriding method must declare at least
       as many parameters as the method it overrides.

    4. **Override variance** (error): each method is checked against the
       nearest declaration of the same method along every direct supertype
       (parent, interfaces, traits) declared in *units*.

    Args:
        registry: The registry the units were built into.
        units: The declaration units holding class-like declarations.
        max_depth: Expansion depth limit for canonicalization.

    Returns:
        A :class:`ValidationResult` containing any warnings and errors found.
    """
    resolver = SubtypeResolver(registry, max_depth=max_depth)
    result = ValidationResult()
    _check_definitions(resolver, result)
    _OverrideChecker(resolver, units, result).run()
    logger.debug(
        "Validation finished: %d error(s), %d warning(s), %d override violation(s)",
        len(result.errors),
        len(result.warnings),
        len(result.violations),
    )
    return result


# ################
# Implementation
# ################


def _check_definitions(resolver: SubtypeResolver, result: ValidationResult) -> None:
    for decl in resolver.registry.declarations():
        if decl.origin is DeclarationOrigin.BUILT_IN:
            continue
        try:
            dnf = resolver.declaration_dnf(decl)
        except TypeAlgebraError as exc:
            result.errors.append(ValidationError(f"Type '{decl.qualified_name}': {exc}"))
            continue
        if decl.origin is DeclarationOrigin.EXPLICIT and dnf == frozenset({frozenset({MIXED})}):
            result.warnings.append(
                ValidationWarning(f"Type '{decl.qualified_name}' places no constraint (equivalent to '{MIXED}')")
            )


_ClassEntry = tuple[ClassDef, DeclarationUnit]


class _OverrideChecker:
    """Finds overridden methods and checks each pair."""

    def __init__(self, resolver: SubtypeResolver, units: list[DeclarationUnit], result: ValidationResult) -> None:
        self._resolver = resolver
        self._result = result
        self._classes: dict[str, _ClassEntry] = {}
        for unit in units:
            for class_def in unit.classes:
                self._classes.setdefault(class_qualified_name(class_def, unit), (class_def, unit))

    def run(self) -> None:
        for class_def, unit in self._classes.values():
            for method in class_def.methods:
                self._check_method(class_def, method, unit)

    def _check_method(self, class_def: ClassDef, method: MethodDef, unit: DeclarationUnit) -> None:
        try:
            child = method_signature(class_def, method, unit)
        except (LexerError, ParseError) as exc:
            self._error(f"Invalid signature of {class_qualified_name(class_def, unit)}::{method.name}(): {exc}")
            return
        if not self._check_signature_types(child):
            return

        checked: set[str] = set()
        for supertype in _direct_supertypes(class_def, unit):
            found = self._find_method(supertype, method.name, set())
            if found is None:
                continue
            owner_def, owner_method, owner_unit = found
            owner_name = class_qualified_name(owner_def, owner_unit)
            if owner_name in checked:
                continue
            checked.add(owner_name)
            try:
                parent = method_signature(owner_def, owner_method, owner_unit)
            except (LexerError, ParseError):
                # Reported when the owner's own methods are checked.
                continue
            self._check_pair(parent, child)

    def _check_signature_types(self, signature: MethodSignature) -> bool:
        """Report every parameter or return type that does not resolve; return True if all do."""
        label = f"{signature.owner_type_name}::{signature.method_name}()"
        ok = True
        for expr in [*signature.parameters, signature.return_type]:
            try:
                self._resolver.dnf(expr)
            except TypeAlgebraError as exc:
                self._error(f"{label}: {exc}")
                ok = False
        return ok

    def _check_pair(self, parent: MethodSignature, child: MethodSignature) -> None:
        label = f"{child.owner_type_name}::{child.method_name}()"
        if len(child.parameters) < len(parent.parameters):
            self._error(
                f"{label}: declares {len(child.parameters)} parameter(s) but overrides"
                f" {parent.owner_type_name}::{parent.method_name}() which declares {len(parent.parameters)}"
            )
            return
        try:
            violations = check_override(self._resolver, parent, child)
        except TypeAlgebraError as exc:
            self._error(f"{label}: cannot check override of {parent.owner_type_name}: {exc}")
            return
        for violation in violations:
            self._result.violations.append(OverrideViolation(child=child, parent=parent, violation=violation))
            self._error(violation.message)

    def _find_method(
        self, class_name: str, method_name: str, visited: set[str]
    ) -> tuple[ClassDef, MethodDef, DeclarationUnit] | None:
        """Return the nearest declaration of *method_name* in *class_name* or its supertypes."""
        if class_name in visited or class_name not in self._classes:
            return None
        visited.add(class_name)
        class_def, unit = self._classes[class_name]
        for method in class_def.methods:
            if method.name == method_name:
                return class_def, method, unit
        for supertype in _direct_supertypes(class_def, unit):
            found = self._find_method(supertype, method_name, visited)
            if found is not None:
                return found
        return None

    def _error(self, message: str) -> None:
        self._result.errors.append(ValidationError(message))


def _direct_supertypes(class_def: ClassDef, unit: DeclarationUnit) -> list[str]:
    """Return the qualified parent, interfaces and traits, in that order."""
    names = [class_def.parent] if class_def.parent is not None else []
    names += class_def.interfaces + class_def.traits
    return [qualify_class_name(name, unit) for name in names]
