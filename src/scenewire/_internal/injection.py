from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from scenewire._internal.plans import InjectionPlan, InjectionPoint, MemberKind
from scenewire._internal.type_checks import describe_key
from scenewire.exceptions import (
    SceneWireDependencyNotResolvedError,
    SceneWireNonWritableMemberError,
)
from scenewire.policies import InjectionPolicy

logger = logging.getLogger(__name__)

ResolveFunction = Callable[[Any], Any]
"""Callable returning the instance for a key, or ``None`` when absent."""


def inject_instance(
    instance: Any,
    resolve: ResolveFunction,
    plan: InjectionPlan,
    policy: InjectionPolicy,
) -> None:
    """Fill every injection point of ``instance`` described by ``plan``.

    Fields are assigned first, then properties, then ``@inject`` methods are
    called. A method is only called when every one of its parameters resolved.

    Args:
        instance: Object to mutate in place.
        resolve: Lookup bound to the active scope chain.
        plan: Cached description of ``type(instance)``.
        policy: Failure policy for unresolved or non-writable members.

    Raises:
        SceneWireDependencyNotResolvedError: Under the strict policy, when a
            key cannot be resolved.
        SceneWireNonWritableMemberError: Under the strict policy, when a member
            rejects assignment.

    """
    for point in plan.points:
        if point.kind is MemberKind.METHOD:
            _inject_method(instance, resolve, plan, point, policy)
        else:
            _inject_member(instance, resolve, plan, point, policy)


def _inject_member(
    instance: Any,
    resolve: ResolveFunction,
    plan: InjectionPlan,
    point: InjectionPoint,
    policy: InjectionPolicy,
) -> None:
    if not point.writable:
        _handle_failure(
            SceneWireNonWritableMemberError(point.provides, plan.owner, point.name),
            policy,
        )
        return

    resolved = resolve(point.provides)
    if resolved is None:
        _handle_failure(
            SceneWireDependencyNotResolvedError(point.provides, plan.owner, point.name),
            policy,
        )
        return

    try:
        setattr(instance, point.name, resolved)
    except AttributeError as error:
        # Frozen dataclasses raise FrozenInstanceError, an AttributeError subclass.
        failure = SceneWireNonWritableMemberError(point.provides, plan.owner, point.name)
        if policy is InjectionPolicy.STRICT:
            raise failure from error
        _handle_failure(failure, policy)
        return

    logger.debug(
        "Injected %s into %s.%s",
        describe_key(point.provides),
        plan.owner.__qualname__,
        point.name,
    )


def _inject_method(
    instance: Any,
    resolve: ResolveFunction,
    plan: InjectionPlan,
    point: InjectionPoint,
    policy: InjectionPolicy,
) -> None:
    arguments: dict[str, Any] = {}
    for parameter in point.parameters:
        resolved = resolve(parameter.provides)
        if resolved is None:
            _handle_failure(
                SceneWireDependencyNotResolvedError(
                    parameter.provides,
                    plan.owner,
                    f"{point.name}({parameter.name})",
                ),
                policy,
                consequence="skipping the call",
            )
            return
        arguments[parameter.name] = resolved

    getattr(instance, point.name)(**arguments)
    logger.debug("Called %s.%s with injected arguments", plan.owner.__qualname__, point.name)


def _handle_failure(
    failure: SceneWireDependencyNotResolvedError,
    policy: InjectionPolicy,
    consequence: str = "leaving it unset",
) -> None:
    if policy is InjectionPolicy.STRICT:
        raise failure
    logger.warning("%s; %s", failure, consequence)
