# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the typealgebra CLI entry point."""

import json
import sys
from pathlib import Path

import pytest

from typealgebra.cli.main import main
from typealgebra.compiler import read_artifact

# ###############
# Test Helpers
# ###############

_UNIT = """\
namespace: App
types:
  Id: int | string
classes:
  - name: Repository
    kind: interface
    methods:
      - name: find
        parameters: [Id]
        returns: "?Repository"
  - name: Users
    interfaces: [Repository]
    methods:
      - name: find
        parameters: [scalar]
        returns: Users
"""


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    """Run the CLI with *args* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["typealgebra", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    code = exc_info.value.code
    assert isinstance(code, int)
    return code


def _workspace(tmp_path: Path, unit: str = _UNIT, config: str = "build-directory: build\n") -> Path:
    (tmp_path / ".typealgebra-workspace.yaml").write_text(config, encoding="utf-8")
    (tmp_path / "app.types.yaml").write_text(unit, encoding="utf-8")
    return tmp_path


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- init tests --------


def test_init_creates_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "init", str(tmp_path)) == 0
    content = (tmp_path / ".typealgebra-workspace.yaml").read_text()
    assert "build-directory: .typealgebra-build" in content


def test_init_default_directory_uses_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "init") == 0
    assert (tmp_path / ".typealgebra-workspace.yaml").exists()


def test_init_fails_if_workspace_already_exists(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".typealgebra-workspace.yaml").write_text("build-directory: b\n")
    assert _run(monkeypatch, "init", str(tmp_path)) == 1


def test_init_fails_if_directory_does_not_exist(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "init", str(tmp_path / "nonexistent")) == 1


# -------- check tests --------


def test_check_without_workspace(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    assert "typealgebra init" in capsys.readouterr().err


def test_check_with_invalid_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".typealgebra-workspace.yaml").write_text("sources: []\n")
    assert _run(monkeypatch, "check", str(tmp_path)) == 1


def test_check_with_no_files(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".typealgebra-workspace.yaml").write_text("build-directory: build\n")
    assert _run(monkeypatch, "check", str(tmp_path)) == 0
    assert "No declaration files found" in capsys.readouterr().out


def test_check_clean_workspace_writes_snapshot(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "check", str(tmp_path)) == 0
    assert "No issues found" in capsys.readouterr().out
    registry = read_artifact(tmp_path / "build" / "registry.typealgebra.json")
    assert "App\\Users" in registry


def test_check_reports_override_violation(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path, _UNIT.replace("parameters: [scalar]", "parameters: [int]"))
    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    assert "App\\Users::find(): parameter #0" in capsys.readouterr().err


def test_check_reports_semantic_errors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path, "types:\n  A: int |\n")
    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    assert "Semantic errors in" in capsys.readouterr().err


def test_check_reports_build_errors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path, "imports:\n  - source: Nope\\Thing\n")
    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    assert "Cannot import 'Nope\\Thing'" in capsys.readouterr().err


def test_check_warnings_pass_by_default(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path, "types:\n  Anything: mixed\n")
    assert _run(monkeypatch, "check", str(tmp_path)) == 0
    assert "Warning: Type 'Anything' places no constraint" in capsys.readouterr().out


def test_check_fail_on_warnings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _workspace(tmp_path, "types:\n  Anything: mixed\n", "build-directory: build\nfail-on-warnings: true\n")
    assert _run(monkeypatch, "check", str(tmp_path)) == 1


# -------- query tests --------


def test_subtype_true(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "subtype", "int", "Id", "--namespace", "App", "--directory", str(tmp_path)) == 0
    assert capsys.readouterr().out.strip() == "true"


def test_subtype_false(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "subtype", "App\\Id", "int", "--directory", str(tmp_path)) == 1
    assert capsys.readouterr().out.strip() == "false"


def test_subtype_with_expressions(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _workspace(tmp_path)
    args = ["subtype", "Users", "?Repository & object", "--namespace", "App", "--directory", str(tmp_path)]
    assert _run(monkeypatch, *args) == 0


def test_subtype_invalid_expression(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "subtype", "int |", "int", "--directory", str(tmp_path)) == 1
    assert "Error:" in capsys.readouterr().err


def test_subtype_unknown_name(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "subtype", "int", "Nope", "--directory", str(tmp_path)) == 1
    assert "Unresolved type reference 'Nope'" in capsys.readouterr().err


def test_resolve_prints_declaration(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "resolve", "Id", "--namespace", "App", "--directory", str(tmp_path)) == 0
    out = capsys.readouterr().out
    assert "name:      App\\Id" in out
    assert "origin:    explicit" in out
    assert "body:      int | string" in out


def test_resolve_unknown(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "resolve", "Nope", "--directory", str(tmp_path)) == 1


def test_dump_prints_snapshot(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "dump", str(tmp_path)) == 0
    data = json.loads(capsys.readouterr().out)
    assert "App\\Users" in [d["name"] for d in data["declarations"]]


def test_verbose_flag_is_accepted(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "--verbose", "check", str(tmp_path)) == 0
