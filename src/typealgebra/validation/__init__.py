# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Codebase-wide checks over a built registry."""

from typealgebra.validation.checks import (
    OverrideViolation,
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)

__all__ = [
    "validate",
    "ValidationResult",
    "ValidationError",
    "ValidationWarning",
    "OverrideViolation",
]
