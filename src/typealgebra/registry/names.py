# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Helpers for backslash-separated qualified names."""

# ###############
# Public Interface
# ###############

SEPARATOR = "\\"


def is_absolute(name: str) -> bool:
    """Return True if *name* is written with a leading separator."""
    return name.startswith(SEPARATOR)


def absolute(name: str) -> str:
    """Strip a leading separator, e.g. ``\\App\\User`` -> ``App\\User``."""
    return name.lstrip(SEPARATOR)


def qualify(name: str, namespace: str = "") -> str:
    """Qualify *name* relative to *namespace* unless it is already absolute."""
    if is_absolute(name) or not namespace:
        return absolute(name)
    return f"{absolute(namespace)}{SEPARATOR}{name}"


def namespace_of(qualified_name: str) -> str:
    """Return the namespace part of a qualified name (empty for global names)."""
    head, _, _ = absolute(qualified_name).rpartition(SEPARATOR)
    return head


def short_name(qualified_name: str) -> str:
    """Return the last segment of a qualified name."""
    return absolute(qualified_name).rpartition(SEPARATOR)[2]
