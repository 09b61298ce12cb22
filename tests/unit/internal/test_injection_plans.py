from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

import pytest

from scenewire._internal.plans import (
    InjectionParameter,
    InjectionPlanExtractor,
    InjectionPoint,
    MemberKind,
)
from scenewire.exceptions import SceneWireInjectionPlanError, SceneWireInvalidProviderError
from scenewire.markers import Component, DependencyProvider, Inject, inject, provide

if TYPE_CHECKING:
    from decimal import Decimal


class Logger:
    pass


class AudioBus:
    pass


class Plain:
    name: str = "plain"

    def update(self) -> None: ...


class Player:
    logger: Inject[Logger]
    score: int = 0

    @inject
    @property
    def audio(self) -> AudioBus:
        return self._audio

    @audio.setter
    def audio(self, value: AudioBus) -> None:
        self._audio = value

    @inject
    def bind(self, logger: Logger, audio: AudioBus) -> None:
        self.bound = (logger, audio)


class Scoreboard:
    logger: Inject[Logger]
    score: Decimal | None = None


class Boss(Player):
    minimap: Inject[Annotated[AudioBus, Component("minimap")]]


class ReadOnly:
    @inject
    @property
    def logger(self) -> Logger:
        return Logger()


class Services(DependencyProvider):
    @provide
    def logger(self) -> Logger:
        return Logger()

    @provide(priority=10)
    def audio(self) -> AudioBus:
        return AudioBus()

    @provide
    def untyped(self):  # noqa: ANN202
        return object()


@pytest.fixture()
def extractor() -> InjectionPlanExtractor:
    return InjectionPlanExtractor()


def test_plain_type_has_empty_plan(extractor: InjectionPlanExtractor) -> None:
    plan = extractor.get_plan(Plain)

    assert plan.points == ()
    assert plan.provide_methods == ()
    assert plan.is_injectable is False


def test_plan_lists_fields_then_properties_then_methods(
    extractor: InjectionPlanExtractor,
) -> None:
    plan = extractor.get_plan(Player)

    assert plan.points == (
        InjectionPoint(name="logger", kind=MemberKind.FIELD, provides=Logger),
        InjectionPoint(name="audio", kind=MemberKind.PROPERTY, provides=AudioBus),
        InjectionPoint(
            name="bind",
            kind=MemberKind.METHOD,
            parameters=(
                InjectionParameter(name="logger", provides=Logger),
                InjectionParameter(name="audio", provides=AudioBus),
            ),
        ),
    )
    assert plan.is_injectable is True


def test_plan_includes_inherited_points_and_component_keys(
    extractor: InjectionPlanExtractor,
) -> None:
    plan = extractor.get_plan(Boss)

    fields = {point.name: point.provides for point in plan.points if point.kind is MemberKind.FIELD}
    assert fields == {
        "logger": Logger,
        "minimap": Annotated[AudioBus, Component("minimap")],
    }
    assert [point.name for point in plan.points if point.kind is MemberKind.METHOD] == ["bind"]


def test_property_without_setter_is_marked_not_writable(
    extractor: InjectionPlanExtractor,
) -> None:
    (point,) = extractor.get_plan(ReadOnly).points

    assert point.kind is MemberKind.PROPERTY
    assert point.writable is False


def test_provide_methods_are_ordered_by_priority_then_declaration(
    extractor: InjectionPlanExtractor,
) -> None:
    plan = extractor.get_plan(Services)

    assert [method.name for method in plan.provide_methods] == ["audio", "logger", "untyped"]
    assert [method.provides for method in plan.provide_methods] == [AudioBus, Logger, None]
    assert plan.is_provider is True
    assert plan.is_injectable is True


def test_plans_are_cached_per_type(extractor: InjectionPlanExtractor) -> None:
    assert extractor.get_plan(Player) is extractor.get_plan(Player)


def test_provide_method_with_required_parameters_is_rejected(
    extractor: InjectionPlanExtractor,
) -> None:
    class NeedsArguments(DependencyProvider):
        @provide
        def logger(self, name: str) -> Logger:
            return Logger()

    with pytest.raises(SceneWireInvalidProviderError, match="required parameters"):
        extractor.get_plan(NeedsArguments)


def test_provide_method_with_defaults_is_accepted(extractor: InjectionPlanExtractor) -> None:
    class WithDefaults(DependencyProvider):
        @provide
        def logger(self, name: str = "game") -> Logger:
            return Logger()

    (method,) = extractor.get_plan(WithDefaults).provide_methods
    assert method.provides is Logger


def test_static_provide_method_is_rejected(extractor: InjectionPlanExtractor) -> None:
    class StaticProvider(DependencyProvider):
        @staticmethod
        @provide
        def logger() -> Logger:
            return Logger()

    with pytest.raises(SceneWireInvalidProviderError, match="instance method"):
        extractor.get_plan(StaticProvider)


def test_provide_method_returning_none_annotation_is_rejected(
    extractor: InjectionPlanExtractor,
) -> None:
    class NoneProvider(DependencyProvider):
        @provide
        def nothing(self) -> None:
            return None

    with pytest.raises(SceneWireInvalidProviderError, match="return None"):
        extractor.get_plan(NoneProvider)


def test_inject_method_parameter_without_annotation_is_rejected(
    extractor: InjectionPlanExtractor,
) -> None:
    class Untyped:
        @inject
        def bind(self, logger) -> None:  # noqa: ANN001
            self.logger = logger

    with pytest.raises(SceneWireInjectionPlanError, match="has no annotation"):
        extractor.get_plan(Untyped)


def test_unresolvable_inject_annotation_is_rejected(extractor: InjectionPlanExtractor) -> None:
    class Broken:
        logger: Inject[MissingLogger]  # type: ignore[name-defined]  # noqa: F821

    with pytest.raises(SceneWireInjectionPlanError, match="Broken"):
        extractor.get_plan(Broken)


def test_unresolvable_plain_annotation_is_ignored(extractor: InjectionPlanExtractor) -> None:
    class TypeCheckingOnly:
        helper: MissingHelper  # type: ignore[name-defined]  # noqa: F821

    assert extractor.get_plan(TypeCheckingOnly).points == ()


def test_type_checking_only_annotation_next_to_inject_field_is_ignored(
    extractor: InjectionPlanExtractor,
) -> None:
    plan = extractor.get_plan(Scoreboard)

    assert plan.points == (InjectionPoint(name="logger", kind=MemberKind.FIELD, provides=Logger),)
