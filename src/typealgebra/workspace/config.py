# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the typealgebra workspace configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from typealgebra.compiler.units import UNIT_SUFFIX
from typealgebra.resolver.canonical import DEFAULT_MAX_DEPTH

# ###############
# Public Interface
# ###############

CONFIG_FILENAME = ".typealgebra-workspace.yaml"
DEFAULT_BUILD_DIRECTORY = ".typealgebra-build"
DEFAULT_SOURCES = ["**/*" + UNIT_SUFFIX]


class WorkspaceConfigError(Exception):
    """Raised when a workspace configuration file is invalid or cannot be loaded."""


@dataclass
class WorkspaceConfig:
    """The parsed configuration for a typealgebra workspace.

    Attributes:
        build_directory: Relative path (from the workspace root) for the registry snapshot.
        max_expansion_depth: Expansion depth limit used when canonicalizing types.
        sources: Glob patterns (relative to the workspace root) selecting unit files.
        fail_on_warnings: Treat validation warnings as errors.
    """

    build_directory: str
    max_expansion_depth: int = DEFAULT_MAX_DEPTH
    sources: list[str] = field(default_factory=lambda: list(DEFAULT_SOURCES))
    fail_on_warnings: bool = False

    def discover_units(self, root: Path) -> list[Path]:
        """Return the unit files under *root* matched by :attr:`sources`, sorted and unique.

        Files inside the build directory are never returned.
        """
        build_dir = (root / self.build_directory).resolve()
        found: set[Path] = set()
        for pattern in self.sources:
            for path in root.glob(pattern):
                if path.is_file() and not path.resolve().is_relative_to(build_dir):
                    found.add(path)
        return sorted(found)


def load_workspace_config(path: Path) -> WorkspaceConfig:
    """Load and parse a typealgebra workspace configuration file.

    Args:
        path: Path to the `.typealgebra-workspace.yaml` file.

    Returns:
        A WorkspaceConfig instance populated from the file.

    Raises:
        WorkspaceConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise WorkspaceConfigError(f"Workspace config file not found: {path}") from None
    except OSError as exc:
        raise WorkspaceConfigError(f"Cannot read workspace config file: {exc}") from exc

    return _parse_workspace_config(text, source_label=str(path))


def default_config_text(build_directory: str = DEFAULT_BUILD_DIRECTORY) -> str:
    """Return the YAML text written by ``typealgebra init``."""
    return yaml.safe_dump(
        {
            "build-directory": build_directory,
            "max-expansion-depth": DEFAULT_MAX_DEPTH,
            "sources": list(DEFAULT_SOURCES),
            "fail-on-warnings": False,
        },
        sort_keys=False,
    )


# ################
# Implementation
# ################


def _parse_workspace_config(text: str, source_label: str = "<string>") -> WorkspaceConfig:
    """Parse workspace config YAML text into a WorkspaceConfig.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Returns:
        A WorkspaceConfig instance.

    Raises:
        WorkspaceConfigError: If the YAML is invalid or a field is missing or malformed.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WorkspaceConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise WorkspaceConfigError(f"{source_label}: workspace config must be a YAML mapping")

    build_directory = _require_string(data, "build-directory", source_label)

    max_depth = data.get("max-expansion-depth", DEFAULT_MAX_DEPTH)
    # bool is a subclass of int and is rejected explicitly.
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise WorkspaceConfigError(f"{source_label}: 'max-expansion-depth' must be a positive integer")

    sources = list(DEFAULT_SOURCES)
    if "sources" in data:
        raw_sources = data["sources"]
        if not isinstance(raw_sources, list) or not all(isinstance(s, str) for s in raw_sources):
            raise WorkspaceConfigError(f"{source_label}: 'sources' must be a list of strings")
        sources = raw_sources

    fail_on_warnings = data.get("fail-on-warnings", False)
    if not isinstance(fail_on_warnings, bool):
        raise WorkspaceConfigError(f"{source_label}: 'fail-on-warnings' must be a boolean")

    return WorkspaceConfig(
        build_directory=build_directory,
        max_expansion_depth=max_depth,
        sources=sources,
        fail_on_warnings=fail_on_warnings,
    )


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a required string field from a mapping, raising WorkspaceConfigError if missing."""
    if key not in mapping:
        raise WorkspaceConfigError(f"{source_label}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str):
        raise WorkspaceConfigError(f"{source_label}: '{key}' must be a string")
    return value
