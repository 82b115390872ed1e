# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for loading declaration units from YAML."""

from pathlib import Path

import pytest

from typealgebra.compiler.units import (
    UnitError,
    class_qualified_name,
    import_alias_name,
    load_unit,
    parse_unit,
    qualify_class_name,
)
from typealgebra.model import ClassKind, ImportDef

# ###############
# Normal Cases
# ###############


def test_full_unit_is_parsed() -> None:
    unit = parse_unit(
        """\
namespace: App\\Models
imports:
  - source: Lib\\Shape
  - source: Lib\\Color
    alias: Colour
types:
  Id: int | string
  Scalarish: "?scalar"
classes:
  - name: User
    kind: class
    parent: \\App\\Base
    interfaces: [Countable]
    methods:
      - name: find
        parameters: [Id]
        returns: "?User"
  - name: Countable
    kind: interface
""",
        source_label="models.types.yaml",
    )
    assert unit.namespace == "App\\Models"
    assert unit.source_path == "models.types.yaml"
    assert [imp.source for imp in unit.imports] == ["Lib\\Shape", "Lib\\Color"]
    assert unit.types == {"Id": "int | string", "Scalarish": "?scalar"}
    user = unit.classes[0]
    assert user.kind is ClassKind.CLASS
    assert user.parent == "\\App\\Base"
    assert user.methods[0].parameters == ["Id"]
    assert user.methods[0].returns == "?User"
    assert unit.classes[1].kind is ClassKind.INTERFACE


def test_empty_document_is_an_empty_unit() -> None:
    unit = parse_unit("")
    assert unit.namespace == ""
    assert unit.types == {}


def test_leading_separator_of_namespace_is_dropped() -> None:
    assert parse_unit("namespace: \\App\n").namespace == "App"


def test_method_return_defaults_to_mixed() -> None:
    unit = parse_unit("classes:\n  - name: A\n    methods:\n      - name: run\n")
    assert unit.classes[0].methods[0].returns == "mixed"


def test_load_unit_from_file(tmp_path: Path) -> None:
    path = tmp_path / "a.types.yaml"
    path.write_text("types:\n  Id: int\n", encoding="utf-8")
    unit = load_unit(path)
    assert unit.types == {"Id": "int"}
    assert unit.source_path == str(path)


# ###############
# Errors
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(UnitError, match="not found"):
        load_unit(tmp_path / "missing.types.yaml")


def test_invalid_yaml() -> None:
    with pytest.raises(UnitError, match="Invalid YAML"):
        parse_unit("types: [unclosed", source_label="bad.yaml")


def test_non_mapping_document() -> None:
    with pytest.raises(UnitError, match="must be a YAML mapping"):
        parse_unit("- a\n- b\n")


def test_schema_violation_names_the_location() -> None:
    with pytest.raises(UnitError) as exc_info:
        parse_unit("classes:\n  - kind: class\n", source_label="x.yaml")
    assert "x.yaml" in str(exc_info.value)
    assert "classes.0.name" in str(exc_info.value)


def test_unknown_class_kind() -> None:
    with pytest.raises(UnitError, match="kind"):
        parse_unit("classes:\n  - name: A\n    kind: enum\n")


# ###############
# Name Qualification
# ###############


def test_import_alias_defaults_to_short_name() -> None:
    assert import_alias_name(ImportDef(source="Lib\\Shapes\\Shape")) == "Shape"
    assert import_alias_name(ImportDef(source="Lib\\Shape", alias="Form")) == "Form"


def test_qualify_class_name() -> None:
    unit = parse_unit("namespace: App\nimports:\n  - source: Lib\\Shape\n")
    assert qualify_class_name("\\Other\\Thing", unit) == "Other\\Thing"
    assert qualify_class_name("Shape", unit) == "Lib\\Shape"
    assert qualify_class_name("User", unit) == "App\\User"
    assert qualify_class_name("Sub\\User", unit) == "App\\Sub\\User"


def test_class_qualified_name() -> None:
    unit = parse_unit("namespace: App\nclasses:\n  - name: User\n")
    assert class_qualified_name(unit.classes[0], unit) == "App\\User"
