# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of registry snapshots.

Snapshots are stored as compact JSON so a tool can cache a built registry
across invocations. The ``qualified name -> declaration`` mapping (built-ins
included) and the alias table are stored verbatim. Refinement predicates are
code and cannot be stored: only their names are kept, and callers rebind
them on load through the *predicates* mapping.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from typealgebra.model.entities import DeclarationOrigin, TypeDeclaration
from typealgebra.model.types import IntersectionType, NamedType, Refinement, TypeExpr, UnionType
from typealgebra.registry.registry import RegistryView, TypeRegistry

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".typealgebra.json"
REGISTRY_ARTIFACT_NAME = "registry" + ARTIFACT_SUFFIX

Predicates = Mapping[str, Callable[[Any], bool]]


def serialize(registry: RegistryView) -> str:
    """Serialize a registry to a compact JSON string."""
    return json.dumps(_registry_to_dict(registry), separators=(",", ":"))


def deserialize(data: str, *, predicates: Predicates | None = None) -> TypeRegistry:
    """Deserialize a registry snapshot from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.
        predicates: Callables to rebind to refinements by name. Refinements
            without a match are loaded unbound.

    Returns:
        The reconstructed :class:`TypeRegistry`.

    Raises:
        ValueError: If the artifact format version is not recognised.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return _registry_from_dict(obj, predicates or {})


def write_artifact(registry: RegistryView, path: Path) -> None:
    """Write a registry snapshot to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(registry), encoding="utf-8")


def read_artifact(path: Path, *, predicates: Predicates | None = None) -> TypeRegistry:
    """Read and deserialize a registry snapshot from *path*."""
    return deserialize(path.read_text(encoding="utf-8"), predicates=predicates)


# ################
# Implementation
# ################


def _registry_to_dict(registry: RegistryView) -> dict[str, Any]:
    return {
        "v": ARTIFACT_FORMAT_VERSION,
        "declarations": [_declaration_to_dict(d) for d in registry.declarations()],
        "aliases": registry.aliases(),
    }


def _registry_from_dict(obj: dict[str, Any], predicates: Predicates) -> TypeRegistry:
    return TypeRegistry(
        [_declaration_from_dict(d, predicates) for d in obj.get("declarations", [])],
        obj.get("aliases", {}),
    )


def _declaration_to_dict(decl: TypeDeclaration) -> dict[str, Any]:
    d: dict[str, Any] = {
        "name": decl.qualified_name,
        "origin": decl.origin.value,
        "body": _expr_to_dict(decl.body),
    }
    if decl.namespace:
        d["ns"] = decl.namespace
    return d


def _declaration_from_dict(obj: dict[str, Any], predicates: Predicates) -> TypeDeclaration:
    return TypeDeclaration(
        qualified_name=obj["name"],
        namespace=obj.get("ns", ""),
        body=_expr_from_dict(obj["body"], predicates),
        origin=DeclarationOrigin(obj["origin"]),
    )


def _expr_to_dict(expr: TypeExpr) -> dict[str, Any]:
    """Encode a TypeExpr as a tagged dict with compact keys."""
    if isinstance(expr, NamedType):
        d: dict[str, Any] = {"k": "n", "n": expr.name}
        if expr.namespace:
            d["ns"] = expr.namespace
        return d
    if isinstance(expr, UnionType):
        return {"k": "u", "o": [_expr_to_dict(op) for op in expr.operands]}
    d = {"k": "i", "o": [_expr_to_dict(op) for op in expr.operands]}
    if expr.refinement is not None:
        d["r"] = expr.refinement.name
    if expr.native:
        d["native"] = True
    return d


def _expr_from_dict(obj: dict[str, Any], predicates: Predicates) -> TypeExpr:
    """Decode a TypeExpr from a tagged dict."""
    kind = obj["k"]
    if kind == "n":
        return NamedType(name=obj["n"], namespace=obj.get("ns", ""))
    operands = tuple(_expr_from_dict(op, predicates) for op in obj["o"])
    if kind == "u":
        return UnionType(operands=operands)
    if kind == "i":
        refinement = None
        if "r" in obj:
            refinement = Refinement(name=obj["r"], check=predicates.get(obj["r"]))
        return IntersectionType(operands=operands, refinement=refinement, native=obj.get("native", False))
    raise ValueError(f"Unknown type expression kind: {kind!r}")
