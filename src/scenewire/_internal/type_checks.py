from __future__ import annotations

import abc
import types
import typing
from typing import Any, TypeGuard

from scenewire.markers import DependencyProvider

_NON_CAPABILITY_BASES: frozenset[Any] = frozenset(
    {
        object,
        abc.ABC,
        typing.Generic,
        typing.Protocol,
        DependencyProvider,
    },
)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def capabilities_of(concrete_type: type[Any]) -> tuple[type[Any], ...]:
    """Return the capability keys an instance of ``concrete_type`` satisfies.

    Capabilities are every class of the MRO except the type itself and the
    typing/ABC plumbing bases. ABCs, ``Protocol`` subclasses and plain base
    classes are all included, nearest first.

    Args:
        concrete_type: Runtime class whose bases should be listed.

    """
    return tuple(
        base for base in concrete_type.__mro__[1:] if base not in _NON_CAPABILITY_BASES
    )


def describe_key(key: Any) -> str:
    """Return a short human-readable name for a resolution key."""
    return getattr(key, "__qualname__", None) or repr(key)


def is_provider_type(candidate: object) -> bool:
    """Return true when candidate exposes the provider capability."""
    return is_runtime_class(candidate) and issubclass(candidate, DependencyProvider)


__all__ = ["capabilities_of", "describe_key", "is_provider_type", "is_runtime_class"]
