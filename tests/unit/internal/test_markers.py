from __future__ import annotations

from typing import Annotated, Protocol, TypeAlias, get_args, get_origin

from scenewire.markers import (
    INJECT_ATTR,
    PROVIDE_ATTR,
    Component,
    Inject,
    InjectedProperty,
    InjectMarker,
    ProvideSpec,
    inject,
    is_component_key,
    is_inject_annotation,
    normalize_key,
    provide,
)


class Camera(Protocol):
    def render(self) -> str: ...


MainCamera: TypeAlias = Annotated[Camera, Component("main")]


def test_component_marker_is_value_based_and_hashable() -> None:
    marker = Component("main")

    assert marker.value == "main"
    assert marker == Component("main")
    assert marker != Component("minimap")

    mapping = {marker: "camera"}
    assert mapping[Component("main")] == "camera"


def test_inject_wraps_dependency_with_inject_marker() -> None:
    dependency = Inject[Camera]

    assert get_origin(dependency) is Annotated
    annotation_args = get_args(dependency)
    assert annotation_args[0] is Camera
    assert isinstance(annotation_args[1], InjectMarker)


def test_inject_preserves_component_marker_metadata_when_nested() -> None:
    dependency = Inject[MainCamera]

    annotation_args = get_args(dependency)
    assert annotation_args[0] is Camera
    assert annotation_args[1] == Component("main")
    assert isinstance(annotation_args[2], InjectMarker)


def test_is_inject_annotation_detects_marker_only() -> None:
    assert is_inject_annotation(Inject[Camera]) is True
    assert is_inject_annotation(Camera) is False
    assert is_inject_annotation(MainCamera) is False


def test_normalize_key_strips_inject_marker_and_keeps_components() -> None:
    assert normalize_key(Inject[Camera]) is Camera
    assert normalize_key(Inject[MainCamera]) == MainCamera
    assert normalize_key(Annotated[Camera, "docs only"]) is Camera
    assert normalize_key(int) is int


def test_is_component_key() -> None:
    assert is_component_key(MainCamera) is True
    assert is_component_key(Annotated[Camera, "docs only"]) is False
    assert is_component_key(Camera) is False


def test_inject_tags_functions_in_place() -> None:
    def bind(self: object, camera: Camera) -> None: ...

    decorated = inject(bind)

    assert decorated is bind
    assert getattr(bind, INJECT_ATTR) is True


def test_inject_converts_property_and_keeps_type_through_setter() -> None:
    class Holder:
        @inject
        @property
        def camera(self) -> Camera:
            return self._camera

        @camera.setter
        def camera(self, value: Camera) -> None:
            self._camera = value

    member = vars(Holder)["camera"]

    assert isinstance(member, InjectedProperty)
    assert member.fset is not None


def test_provide_supports_bare_and_parametrized_forms() -> None:
    def first(self: object) -> Camera: ...

    def second(self: object) -> Camera: ...

    provide(first)
    provide(priority=5)(second)

    assert getattr(first, PROVIDE_ATTR) == ProvideSpec(priority=0)
    assert getattr(second, PROVIDE_ATTR) == ProvideSpec(priority=5)
