# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declaration unit loading, semantic analysis, registry build and snapshots."""

from typealgebra.compiler.artifact import (
    ARTIFACT_SUFFIX,
    REGISTRY_ARTIFACT_NAME,
    deserialize,
    read_artifact,
    serialize,
    write_artifact,
)
from typealgebra.compiler.build import (
    BuildError,
    BuildResult,
    CompilerError,
    build_registry,
    class_descriptor,
    compile_units,
    method_signature,
)
from typealgebra.compiler.semantic_analysis import SemanticError, analyze
from typealgebra.compiler.units import UNIT_SUFFIX, UnitError, load_unit, parse_unit

__all__ = [
    "load_unit",
    "parse_unit",
    "UnitError",
    "UNIT_SUFFIX",
    "analyze",
    "SemanticError",
    "compile_units",
    "build_registry",
    "class_descriptor",
    "method_signature",
    "BuildError",
    "BuildResult",
    "CompilerError",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
    "REGISTRY_ARTIFACT_NAME",
]
