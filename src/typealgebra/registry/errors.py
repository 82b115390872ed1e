# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy for registry construction, resolution and evaluation.

All errors are recoverable and scoped to a single declaration or query; none
of them leave a registry in a partially updated state.
"""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class TypeAlgebraError(Exception):
    """Base class for all engine errors."""


class DuplicateDeclaration(TypeAlgebraError):
    """Raised when a qualified name is already bound in its namespace.

    Attributes:
        name: The qualified name that was already bound.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Type '{name}' is already declared")
        self.name = name


class UnknownType(TypeAlgebraError):
    """Raised when a name cannot be found in the registry.

    Attributes:
        name: The name as looked up.
        namespace: The namespace the lookup was relative to.
    """

    def __init__(self, name: str, namespace: str = "") -> None:
        where = f" from namespace '{namespace}'" if namespace else ""
        super().__init__(f"Unknown type '{name}'{where}")
        self.name = name
        self.namespace = namespace


class UnresolvedReference(TypeAlgebraError):
    """Raised when a named leaf of a type expression cannot be resolved.

    Attributes:
        name: The unresolved reference.
        namespace: The namespace the reference was written in.
    """

    def __init__(self, name: str, namespace: str = "") -> None:
        where = f" in namespace '{namespace}'" if namespace else ""
        super().__init__(f"Unresolved type reference '{name}'{where}")
        self.name = name
        self.namespace = namespace


class CyclicAlias(TypeAlgebraError):
    """Raised when an alias chain loops back on itself.

    Attributes:
        chain: The aliases visited, ending with the repeated one.
    """

    def __init__(self, chain: list[str]) -> None:
        super().__init__(f"Cyclic alias chain: {' -> '.join(chain)}")
        self.chain = chain


class CyclicDefinition(TypeAlgebraError):
    """Raised when a type body refers to itself without a grounding alternative.

    Attributes:
        name: The declaration whose expansion failed.
        path: The names being expanded when the cycle was found.
    """

    def __init__(self, name: str, path: list[str], reason: str = "") -> None:
        detail = reason or f"via {' -> '.join(path)}"
        super().__init__(f"Cyclic definition of type '{name}' {detail}")
        self.name = name
        self.path = path


class RefinementPredicateFailed(TypeAlgebraError):
    """Raised or recorded when a refinement predicate could not be evaluated.

    Attributes:
        refinement: Name of the refinement predicate.
        value: The value being classified.
    """

    def __init__(self, refinement: str, value: object, reason: str) -> None:
        super().__init__(f"Refinement '{refinement}' failed for {value!r}: {reason}")
        self.refinement = refinement
        self.value = value
