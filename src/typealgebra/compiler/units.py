# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML loader for declaration units (``*.types.yaml`` files).

A unit declares one namespace's explicit types, class-like declarations and
imports::

    namespace: App\\Models
    imports:
      - source: Lib\\Shape
    types:
      Id: int | string
    classes:
      - name: User
        parent: \\App\\Base
        methods:
          - name: find
            parameters: [Id]
            returns: "?User"
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from typealgebra.model.entities import ClassDef, DeclarationUnit, ImportDef
from typealgebra.registry.names import SEPARATOR, absolute, is_absolute, qualify, short_name

# ###############
# Public Interface
# ###############

UNIT_SUFFIX = ".types.yaml"


class UnitError(Exception):
    """Raised when a declaration unit cannot be read or does not match the schema."""


def load_unit(path: Path) -> DeclarationUnit:
    """Load and validate a declaration unit file.

    Raises:
        UnitError: If the file cannot be read or its content is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise UnitError(f"Declaration file not found: {path}") from None
    except OSError as exc:
        raise UnitError(f"Cannot read declaration file: {exc}") from exc

    return parse_unit(text, source_label=str(path))


def parse_unit(text: str, source_label: str = "<string>") -> DeclarationUnit:
    """Parse declaration unit YAML text.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages and
            recorded as the unit's ``source_path``.

    Raises:
        UnitError: If the YAML is invalid or does not match the unit schema.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise UnitError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise UnitError(f"{source_label}: a declaration unit must be a YAML mapping")

    try:
        unit = DeclarationUnit.model_validate({**data, "source_path": source_label})
    except ValidationError as exc:
        raise UnitError(f"{source_label}: {_first_problem(exc)}") from exc
    return unit.model_copy(update={"namespace": absolute(unit.namespace)})


def import_alias_name(imp: ImportDef) -> str:
    """Return the name an import binds: its explicit alias or the source's short name."""
    return imp.alias or short_name(imp.source)


def qualify_class_name(name: str, unit: DeclarationUnit) -> str:
    """Qualify a class-like name as written in *unit*.

    A leading ``\\`` is absolute; a bare name matching an import alias maps to
    the import's source; anything else is relative to the unit namespace.
    """
    if is_absolute(name):
        return absolute(name)
    if SEPARATOR not in name:
        for imp in unit.imports:
            if import_alias_name(imp) == name:
                return absolute(imp.source)
    return qualify(name, unit.namespace)


def class_qualified_name(class_def: ClassDef, unit: DeclarationUnit) -> str:
    """Return the qualified name a class declared in *unit* is registered under."""
    return qualify(class_def.name, unit.namespace)


# ################
# Implementation
# ################


def _first_problem(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]
