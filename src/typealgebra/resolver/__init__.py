# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Canonicalization and subtype resolution."""

from typealgebra.resolver.canonical import (
    BOTTOM,
    DEFAULT_MAX_DEPTH,
    TOP,
    Canonicalizer,
    Clause,
    Dnf,
    absorb,
    dnf_intersection,
    dnf_union,
    subsumes,
)
from typealgebra.resolver.subtype import SubtypeResolver, is_subtype

__all__ = [
    "Clause",
    "Dnf",
    "TOP",
    "BOTTOM",
    "DEFAULT_MAX_DEPTH",
    "absorb",
    "dnf_union",
    "dnf_intersection",
    "subsumes",
    "Canonicalizer",
    "SubtypeResolver",
    "is_subtype",
]
