from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from scenewire._internal.plans import InjectionPlan, ProvideMethod
from scenewire._internal.type_checks import capabilities_of, describe_key
from scenewire.exceptions import SceneWireProviderContractError
from scenewire.markers import is_component_key
from scenewire.registry import Registry

logger = logging.getLogger(__name__)


def register_provider(
    provider: Any,
    plan: InjectionPlan,
    registry: Registry,
    inject: Callable[[Any], None],
) -> list[Any]:
    """Run every ``@provide`` method of ``provider`` and register the results.

    Each produced value is injected before it is inserted, so no consumer can
    observe a provided instance with unset injection points. Values are
    registered first-writer-wins under their registration keys.

    Args:
        provider: ``DependencyProvider`` instance.
        plan: Cached plan of ``type(provider)``; provide-methods are already
            ordered by priority.
        registry: Registry receiving the produced values.
        inject: Injection pass bound to the scope that owns ``registry``.

    Returns:
        The produced values, in invocation order.

    Raises:
        SceneWireProviderContractError: If a provide-method returns ``None``.

    """
    produced: list[Any] = []
    for method in plan.provide_methods:
        value = getattr(provider, method.name)()
        if value is None:
            raise SceneWireProviderContractError(plan.owner, method.provides, method.name)

        inject(value)

        for key in registration_keys(method, value):
            registry.try_register(key, value)
        logger.debug(
            "Registered %s from %s.%s",
            describe_key(method.provides or type(value)),
            plan.owner.__qualname__,
            method.name,
        )
        produced.append(value)
    return produced


def registration_keys(method: ProvideMethod, value: Any) -> list[Any]:
    """Return the keys a provided value is registered under, in order.

    The declared return annotation comes first, followed by the concrete type
    and its capabilities. Component-annotated declarations register only the
    component key.
    """
    if method.provides is not None and is_component_key(method.provides):
        return [method.provides]

    keys: list[Any] = []
    if method.provides is not None:
        keys.append(method.provides)
    concrete_type = type(value)
    for key in (concrete_type, *capabilities_of(concrete_type)):
        if key not in keys:
            keys.append(key)
    return keys


def self_registration_keys(instance: Any) -> list[Any]:
    """Return the keys a scope member registers itself under."""
    concrete_type = type(instance)
    return [concrete_type, *capabilities_of(concrete_type)]


__all__ = ["register_provider", "registration_keys", "self_registration_keys"]
