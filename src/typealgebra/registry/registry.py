# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Namespace-aware registry of named type expressions.

A :class:`RegistryBuilder` collects explicit declarations, implicit
class-like declarations and import aliases. :meth:`RegistryBuilder.build`
freezes the result into a :class:`TypeRegistry` snapshot that is safe to
query from any number of threads. Rebuilds are copy-on-write: start from
:meth:`TypeRegistry.to_builder`, build a new snapshot and publish it through
a :class:`RegistryHandle`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from typealgebra.model.entities import ClassLikeDescriptor, DeclarationOrigin, TypeDeclaration
from typealgebra.model.types import TypeExpr, intersection, named
from typealgebra.registry.builtins import OBJECT, builtin_declarations
from typealgebra.registry.errors import CyclicAlias, DuplicateDeclaration, UnknownType
from typealgebra.registry.names import absolute, is_absolute, namespace_of, qualify

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def implicit_body(descriptor: ClassLikeDescriptor) -> TypeExpr:
    """Return the synthesized type of a class-like declaration.

    The type is the intersection of the parent, the implemented interfaces,
    the used traits and the universal ``object`` leaf.
    """
    operands: list[TypeExpr] = []
    if descriptor.parent:
        operands.append(named(absolute(descriptor.parent)))
    operands.extend(named(absolute(i)) for i in descriptor.implemented_interfaces)
    operands.extend(named(absolute(t)) for t in descriptor.used_traits)
    operands.append(named(OBJECT))
    return intersection(*operands)


class RegistryView:
    """Read-only lookups shared by builders and snapshots."""

    _declarations: Mapping[str, TypeDeclaration]
    _aliases: Mapping[str, str]

    def resolve(self, name: str, from_namespace: str = "") -> TypeDeclaration:
        """Look up *name* as written in *from_namespace*.

        The name is tried fully qualified first, then relative to
        *from_namespace*; if neither is a declaration, the same keys are tried
        as aliases and the alias chain is followed to its declaration.

        Raises:
            UnknownType: If the name is bound nowhere or an alias dangles.
            CyclicAlias: If an alias chain loops.
        """
        return self._follow(self._match(name, from_namespace))

    def get(self, qualified_name: str) -> TypeDeclaration | None:
        """Return the declaration bound to exactly *qualified_name*, if any."""
        return self._declarations.get(absolute(qualified_name))

    def is_bound(self, qualified_name: str) -> bool:
        """Return True if *qualified_name* names a declaration or an alias."""
        key = absolute(qualified_name)
        return key in self._declarations or key in self._aliases

    def declarations(self) -> list[TypeDeclaration]:
        """Return all declarations in registration order."""
        return list(self._declarations.values())

    def aliases(self) -> dict[str, str]:
        """Return a copy of the alias table (qualified alias -> target)."""
        return dict(self._aliases)

    def __contains__(self, qualified_name: object) -> bool:
        return isinstance(qualified_name, str) and self.is_bound(qualified_name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._declarations)

    def __len__(self) -> int:
        return len(self._declarations)

    def _match(self, name: str, from_namespace: str) -> str:
        keys = [absolute(name)]
        if from_namespace and not is_absolute(name):
            keys.append(qualify(name, from_namespace))
        for key in keys:
            if key in self._declarations:
                return key
        for key in keys:
            if key in self._aliases:
                return key
        raise UnknownType(name, from_namespace)

    def _follow(self, key: str) -> TypeDeclaration:
        chain: list[str] = []
        while key not in self._declarations:
            if key in chain:
                raise CyclicAlias([*chain, key])
            chain.append(key)
            target = self._aliases.get(key)
            if target is None:
                raise UnknownType(key)
            key = target
        return self._declarations[key]


class RegistryBuilder(RegistryView):
    """Mutable registry under construction.

    Args:
        seed: Pre-load the built-in hierarchy (``mixed``, ``object``,
            ``scalar`` ...). Only snapshots being copied skip the seed.
    """

    def __init__(self, *, seed: bool = True) -> None:
        self._declarations: dict[str, TypeDeclaration] = {}
        self._aliases: dict[str, str] = {}
        if seed:
            for decl in builtin_declarations():
                self._declarations[decl.qualified_name] = decl

    def declare(
        self,
        name: str,
        body: TypeExpr,
        *,
        namespace: str = "",
        origin: DeclarationOrigin = DeclarationOrigin.EXPLICIT,
    ) -> TypeDeclaration:
        """Bind *name* (relative to *namespace*) to *body*.

        Raises:
            DuplicateDeclaration: If the qualified name is already bound.
        """
        qualified_name = qualify(name, namespace)
        if self.is_bound(qualified_name):
            raise DuplicateDeclaration(qualified_name)
        decl = TypeDeclaration(
            qualified_name=qualified_name,
            namespace=namespace_of(qualified_name),
            body=body,
            origin=origin,
        )
        self._declarations[qualified_name] = decl
        logger.debug("Declared %s type '%s'", origin.value, qualified_name)
        return decl

    def declare_implicit(self, descriptor: ClassLikeDescriptor) -> TypeDeclaration:
        """Declare the type synthesized from a class, interface or trait.

        Re-declaring an unchanged descriptor returns the existing declaration.

        Raises:
            DuplicateDeclaration: If the name is bound to anything else.
        """
        qualified_name = absolute(descriptor.qualified_name)
        body = implicit_body(descriptor)
        origin = descriptor.kind.origin
        existing = self._declarations.get(qualified_name)
        if existing is not None and existing.body == body and existing.origin is origin:
            return existing
        return self.declare(qualified_name, body, origin=origin)

    def import_alias(self, source_name: str, alias_name: str, into_namespace: str = "") -> TypeDeclaration:
        """Make *source_name* visible as *alias_name* in *into_namespace*.

        The alias is a reference: it resolves to the very declaration the
        source resolves to.

        Returns:
            The declaration the alias resolves to.

        Raises:
            UnknownType: If *source_name* does not resolve.
            DuplicateDeclaration: If *alias_name* is already bound in
                *into_namespace*.
        """
        target_key = self._match(source_name, into_namespace)
        decl = self._follow(target_key)
        alias_key = qualify(alias_name, into_namespace)
        if self.is_bound(alias_key):
            raise DuplicateDeclaration(alias_key)
        self._aliases[alias_key] = target_key
        logger.debug("Aliased '%s' -> '%s'", alias_key, target_key)
        return decl

    def build(self) -> TypeRegistry:
        """Freeze the current contents into an immutable snapshot."""
        registry = TypeRegistry(self._declarations.values(), self._aliases)
        logger.debug("Built registry snapshot with %d declarations and %d aliases", len(registry), len(self._aliases))
        return registry


class TypeRegistry(RegistryView):
    """Immutable registry snapshot.

    Args:
        declarations: Declarations to include; keys are their qualified names.
        aliases: Alias table mapping qualified aliases to their targets.
    """

    def __init__(self, declarations: Iterable[TypeDeclaration], aliases: Mapping[str, str] | None = None) -> None:
        self._declarations = MappingProxyType({d.qualified_name: d for d in declarations})
        self._aliases = MappingProxyType(dict(aliases or {}))

    def to_builder(self) -> RegistryBuilder:
        """Start a copy-on-write rebuild seeded with this snapshot's contents."""
        builder = RegistryBuilder(seed=False)
        builder._declarations.update(self._declarations)
        builder._aliases.update(self._aliases)
        return builder


class RegistryHandle:
    """Holds the current registry snapshot and swaps it atomically."""

    def __init__(self, registry: TypeRegistry) -> None:
        self._registry = registry
        self._lock = threading.Lock()

    @property
    def current(self) -> TypeRegistry:
        """The snapshot new queries should use."""
        with self._lock:
            return self._registry

    def swap(self, registry: TypeRegistry) -> TypeRegistry:
        """Publish *registry* and return the snapshot it replaces."""
        with self._lock:
            previous, self._registry = self._registry, registry
        logger.debug("Swapped registry snapshot (%d -> %d declarations)", len(previous), len(registry))
        return previous
