# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Override variance checking."""

from typealgebra.variance.checker import VarianceViolation, ViolationKind, check_override

__all__ = [
    "VarianceViolation",
    "ViolationKind",
    "check_override",
]
