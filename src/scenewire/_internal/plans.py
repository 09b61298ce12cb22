from __future__ import annotations

import inspect
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, get_type_hints

from scenewire._internal.type_checks import is_provider_type
from scenewire.exceptions import SceneWireInjectionPlanError, SceneWireInvalidProviderError
from scenewire.markers import (
    INJECT_ATTR,
    PROVIDE_ATTR,
    InjectedProperty,
    ProvideSpec,
    is_inject_annotation,
    normalize_key,
)

_INJECT_ANNOTATION_HINT = "Inject["


class MemberKind(str, Enum):
    """Kind of member an injection point assigns or calls."""

    FIELD = "field"
    PROPERTY = "property"
    METHOD = "method"


_KIND_ORDER = {MemberKind.FIELD: 0, MemberKind.PROPERTY: 1, MemberKind.METHOD: 2}


@dataclass(frozen=True, slots=True)
class InjectionParameter:
    """A single parameter of an ``@inject`` method."""

    name: str
    provides: Any


@dataclass(frozen=True, slots=True)
class InjectionPoint:
    """Describe one member that receives dependencies.

    ``provides`` is the resolution key for fields and properties; methods
    carry one key per parameter in ``parameters`` instead.
    """

    name: str
    kind: MemberKind
    provides: Any = None
    parameters: tuple[InjectionParameter, ...] = ()
    writable: bool = True


@dataclass(frozen=True, slots=True)
class ProvideMethod:
    """Describe one ``@provide`` factory of a provider type.

    ``provides`` is ``None`` when the method has no return annotation; the
    produced value's concrete type is used as the key in that case.
    """

    name: str
    provides: Any
    priority: int
    order: int


@dataclass(frozen=True, slots=True)
class InjectionPlan:
    """Immutable table of everything SceneWire does with instances of a type."""

    owner: type[Any]
    points: tuple[InjectionPoint, ...] = ()
    provide_methods: tuple[ProvideMethod, ...] = ()
    is_provider: bool = False

    @property
    def is_injectable(self) -> bool:
        return bool(self.points) or self.is_provider


@dataclass
class InjectionPlanExtractor:
    """Build and cache ``InjectionPlan`` objects per type.

    Member discovery walks the MRO once per type; later lookups return the
    cached plan, so marker inspection never happens per instance.
    """

    _plans: dict[type[Any], InjectionPlan] = field(default_factory=dict)

    def get_plan(self, owner: type[Any]) -> InjectionPlan:
        """Return the cached plan for ``owner``, building it on first use.

        Args:
            owner: Concrete class to describe.

        Raises:
            SceneWireInjectionPlanError: If an injection point cannot be typed.
            SceneWireInvalidProviderError: If a provide-method is malformed.

        """
        cached = self._plans.get(owner)
        if cached is not None:
            return cached

        plan = self._build_plan(owner)
        self._plans[owner] = plan
        return plan

    def _build_plan(self, owner: type[Any]) -> InjectionPlan:
        members = _collect_class_members(owner)
        points = [
            *self._extract_fields(owner, members),
            *self._extract_properties(owner, members),
            *self._extract_methods(owner, members),
        ]
        points.sort(key=lambda point: _KIND_ORDER[point.kind])

        is_provider = is_provider_type(owner)
        provide_methods = self._extract_provide_methods(owner, members) if is_provider else []
        provide_methods.sort(key=lambda method: (-method.priority, method.order))

        return InjectionPlan(
            owner=owner,
            points=tuple(points),
            provide_methods=tuple(provide_methods),
            is_provider=is_provider,
        )

    def _extract_fields(
        self,
        owner: type[Any],
        members: dict[str, Any],
    ) -> list[InjectionPoint]:
        annotations: dict[str, Any] = {}
        for klass in reversed(owner.__mro__):
            if klass is object:
                continue
            annotations.update(_get_class_annotations(owner, klass))

        return [
            InjectionPoint(
                name=name,
                kind=MemberKind.FIELD,
                provides=normalize_key(annotation),
            )
            for name, annotation in annotations.items()
            if is_inject_annotation(annotation) and not _is_callable_member(members.get(name))
        ]

    def _extract_properties(
        self,
        owner: type[Any],
        members: dict[str, Any],
    ) -> list[InjectionPoint]:
        points: list[InjectionPoint] = []
        for name, member in members.items():
            if not isinstance(member, InjectedProperty):
                continue
            if member.fget is None:
                msg = f"injected property {name!r} has no getter to read its type from"
                raise SceneWireInjectionPlanError(owner, msg)
            return_hint = _get_hints(owner, member.fget).get("return")
            if return_hint is None:
                msg = f"injected property {name!r} getter has no return annotation"
                raise SceneWireInjectionPlanError(owner, msg)
            points.append(
                InjectionPoint(
                    name=name,
                    kind=MemberKind.PROPERTY,
                    provides=normalize_key(return_hint),
                    writable=member.fset is not None,
                ),
            )
        return points

    def _extract_methods(
        self,
        owner: type[Any],
        members: dict[str, Any],
    ) -> list[InjectionPoint]:
        points: list[InjectionPoint] = []
        for name, member in members.items():
            if isinstance(member, staticmethod | classmethod):
                if getattr(member.__func__, INJECT_ATTR, False):
                    msg = f"@inject method {name!r} must be an instance method"
                    raise SceneWireInjectionPlanError(owner, msg)
                continue
            if not inspect.isfunction(member) or not getattr(member, INJECT_ATTR, False):
                continue
            points.append(
                InjectionPoint(
                    name=name,
                    kind=MemberKind.METHOD,
                    parameters=self._extract_parameters(owner, name, member),
                ),
            )
        return points

    def _extract_parameters(
        self,
        owner: type[Any],
        name: str,
        method: Callable[..., Any],
    ) -> tuple[InjectionParameter, ...]:
        hints = _get_hints(owner, method)
        parameters: list[InjectionParameter] = []
        for parameter in _explicit_parameters(method):
            if parameter.kind in (
                inspect.Parameter.VAR_POSITIONAL,
                inspect.Parameter.VAR_KEYWORD,
            ):
                msg = f"@inject method {name!r} cannot take *args or **kwargs"
                raise SceneWireInjectionPlanError(owner, msg)
            if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                msg = f"@inject method {name!r} parameter {parameter.name!r} is positional-only"
                raise SceneWireInjectionPlanError(owner, msg)
            hint = hints.get(parameter.name)
            if hint is None:
                msg = f"@inject method {name!r} parameter {parameter.name!r} has no annotation"
                raise SceneWireInjectionPlanError(owner, msg)
            parameters.append(
                InjectionParameter(name=parameter.name, provides=normalize_key(hint)),
            )
        return tuple(parameters)

    def _extract_provide_methods(
        self,
        owner: type[Any],
        members: dict[str, Any],
    ) -> list[ProvideMethod]:
        provide_methods: list[ProvideMethod] = []
        for order, (name, member) in enumerate(members.items()):
            if isinstance(member, staticmethod | classmethod):
                if getattr(member.__func__, PROVIDE_ATTR, None) is not None:
                    msg = (
                        f"@provide method {owner.__qualname__}.{name} must be an instance method"
                    )
                    raise SceneWireInvalidProviderError(msg)
                continue
            spec: ProvideSpec | None = getattr(member, PROVIDE_ATTR, None)
            if spec is None or not inspect.isfunction(member):
                continue

            required = [
                parameter.name
                for parameter in _explicit_parameters(member)
                if parameter.default is inspect.Parameter.empty
                and parameter.kind
                not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
            ]
            if required:
                msg = (
                    f"@provide method {owner.__qualname__}.{name} must be callable without "
                    f"arguments, got required parameters {required}"
                )
                raise SceneWireInvalidProviderError(msg)

            return_hint = _get_hints(owner, member).get("return")
            if return_hint is type(None):
                msg = f"@provide method {owner.__qualname__}.{name} is annotated to return None"
                raise SceneWireInvalidProviderError(msg)

            provide_methods.append(
                ProvideMethod(
                    name=name,
                    provides=None if return_hint is None else normalize_key(return_hint),
                    priority=spec.priority,
                    order=order,
                ),
            )
        return provide_methods


def _collect_class_members(owner: type[Any]) -> dict[str, Any]:
    members: dict[str, Any] = {}
    for klass in reversed(owner.__mro__):
        if klass is object:
            continue
        members.update(vars(klass))
    return members


def _get_class_annotations(owner: type[Any], klass: type[Any]) -> dict[str, Any]:
    module = sys.modules.get(klass.__module__)
    globalns = vars(module) if module is not None else {}
    localns = dict(vars(klass))

    annotations: dict[str, Any] = {}
    for name, raw in inspect.get_annotations(klass).items():
        if not isinstance(raw, str):
            annotations[name] = raw
            continue
        try:
            annotations[name] = eval(raw, globalns, localns)  # noqa: S307
        except (AttributeError, NameError, SyntaxError, TypeError) as error:
            if _INJECT_ANNOTATION_HINT in raw:
                msg = f"annotation of {name!r} cannot be evaluated: {error}"
                raise SceneWireInjectionPlanError(owner, msg) from error
            # Names imported only for type checkers never become injection points.
            continue
    return annotations


def _get_hints(owner: type[Any], func: Callable[..., Any]) -> dict[str, Any]:
    try:
        return get_type_hints(func, include_extras=True)
    except (NameError, TypeError) as error:
        raise SceneWireInjectionPlanError(owner, error) from error


def _explicit_parameters(func: Callable[..., Any]) -> list[inspect.Parameter]:
    # Instance methods receive the owner as their first positional parameter.
    return list(inspect.signature(func).parameters.values())[1:]


def _is_callable_member(member: Any) -> bool:
    return isinstance(member, property | staticmethod | classmethod) or inspect.isfunction(member)


__all__ = [
    "InjectionParameter",
    "InjectionPlan",
    "InjectionPlanExtractor",
    "InjectionPoint",
    "MemberKind",
    "ProvideMethod",
]
