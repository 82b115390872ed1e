# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Runtime refinement evaluation."""

from typealgebra.refinement.evaluator import (
    HOST_TYPE_ATTRIBUTE,
    Classification,
    classifies,
    classify,
    runtime_type_name,
)

__all__ = [
    "HOST_TYPE_ATTRIBUTE",
    "Classification",
    "classify",
    "classifies",
    "runtime_type_name",
]
