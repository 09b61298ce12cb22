from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Annotated, Any, NamedTuple, TypeVar, Union, get_args, get_origin, overload

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])
_ANNOTATED_MARKER_MIN_ARGS = 2

INJECT_ATTR = "__scenewire_inject__"
PROVIDE_ATTR = "__scenewire_provide__"


class Component(NamedTuple):
    """Differentiate multiple registrations for the same base type.

    Attach ``Component`` metadata to ``typing.Annotated`` so SceneWire treats
    each annotated key as distinct at runtime.

    Examples:
        .. code-block:: python

            from typing import Annotated, TypeAlias


            class Camera: ...


            MainCamera: TypeAlias = Annotated[Camera, Component("main")]
            MinimapCamera: TypeAlias = Annotated[Camera, Component("minimap")]

    """

    value: Any


class InjectMarker:
    """A marker used to indicate a field should be injected by a scope."""


class ProvideSpec(NamedTuple):
    """Metadata attached to a ``@provide`` method."""

    priority: int = 0


class DependencyProvider:
    """Mark a class as a provider of dependencies.

    Subclasses expose ``@provide`` methods whose return values are registered
    as singletons when a scope initializes. Providers are always classified as
    injectable, so they may also declare ``Inject[...]`` members of their own.

    Within one ``Scope.initialize`` call providers are registered in descending
    ``provider_priority`` and, for equal priorities, in enumeration order.

    Examples:
        .. code-block:: python

            class CoreServices(DependencyProvider):
                @provide
                def logger(self) -> Logger:
                    return Logger("game")

    """

    provider_priority: int = 0


if TYPE_CHECKING:
    Inject = Union[T, T]  # noqa: UP007,PYI016
    """Mark a class attribute for scope-driven injection.

    At runtime ``Inject[T]`` becomes ``Annotated[T, InjectMarker()]``.
    """

else:

    class Inject:
        """Mark a class attribute for scope-driven injection.

        At runtime ``Inject[T]`` resolves to ``Annotated[T, InjectMarker()]``.

        Examples:
            .. code-block:: python

                class Hud:
                    logger: Inject[Logger]
                    camera: Inject[Annotated[Camera, Component("main")]]

        """

        def __class_getitem__(cls, item: T) -> Annotated[T, InjectMarker]:
            if get_origin(item) is Annotated:
                args = get_args(item)
                inner = args[0]
                metadata = args[1:]
                return _build_annotated((inner, *metadata, InjectMarker()))
            return _build_annotated((item, InjectMarker()))


class InjectedProperty(property):
    """A ``property`` whose value is assigned by a scope.

    The dependency key is the return annotation of the getter. ``.setter`` and
    ``.deleter`` keep the injected marker because ``property`` copies itself
    through ``type(self)``.
    """


@overload
def inject(member: property) -> InjectedProperty: ...


@overload
def inject(member: F) -> F: ...


def inject(member: Any) -> Any:
    """Mark a method or property for injection.

    Methods are called once per injection pass with every parameter resolved
    by its annotation. Properties are assigned through their setter, and the
    key is the getter's return annotation.

    Args:
        member: A function defined in a class body or a ``property``.

    Returns:
        The same function tagged for injection, or an ``InjectedProperty``.

    Examples:
        .. code-block:: python

            class Enemy:
                @inject
                def bind(self, audio: AudioBus, logger: Logger) -> None:
                    self.audio = audio
                    self.logger = logger

                @inject
                @property
                def target(self) -> Player:
                    return self._target

                @target.setter
                def target(self, value: Player) -> None:
                    self._target = value

    """
    if isinstance(member, property):
        return InjectedProperty(member.fget, member.fset, member.fdel, member.__doc__)
    setattr(member, INJECT_ATTR, True)
    return member


@overload
def provide(method: F, /) -> F: ...


@overload
def provide(*, priority: int = 0) -> Callable[[F], F]: ...


def provide(method: Any = None, /, *, priority: int = 0) -> Any:
    """Mark a ``DependencyProvider`` method as a dependency factory.

    The method is called once, with no arguments, when the owning scope
    initializes. Its return annotation is the primary key the value is
    registered under. Higher ``priority`` methods of the same provider run
    first.

    Args:
        method: Decorated method when used as ``@provide``.
        priority: Ordering hint among the methods of one provider.

    Returns:
        The method tagged with provide metadata, or a decorator doing so.

    """

    def decorator(func: F) -> F:
        setattr(func, PROVIDE_ATTR, ProvideSpec(priority=priority))
        return func

    if method is None:
        return decorator
    return decorator(method)


def is_inject_annotation(annotation: Any) -> bool:
    """Return True when annotation is Annotated[..., InjectMarker()]."""
    if get_origin(annotation) is not Annotated:
        return False
    annotation_args = get_args(annotation)
    if len(annotation_args) < _ANNOTATED_MARKER_MIN_ARGS:
        return False
    return any(isinstance(item, InjectMarker) for item in annotation_args[1:])


def normalize_key(annotation: Any) -> Any:
    """Return the resolution key for an annotation.

    Only ``Component`` metadata is part of a key; any other ``Annotated``
    metadata, including ``InjectMarker``, is dropped.
    """
    if get_origin(annotation) is not Annotated:
        return annotation
    annotation_args = get_args(annotation)
    inner = annotation_args[0]
    components = tuple(item for item in annotation_args[1:] if isinstance(item, Component))
    if not components:
        return inner
    return _build_annotated((inner, *components))


def is_component_key(key: Any) -> bool:
    """Return True when key is an ``Annotated`` token carrying a ``Component``."""
    if get_origin(key) is not Annotated:
        return False
    return any(isinstance(item, Component) for item in get_args(key)[1:])


def _build_annotated(params: tuple[object, ...]) -> Any:
    """Return Annotated[...] with a pre-built params tuple (Py 3.10+ compatible)."""
    try:
        return Annotated.__class_getitem__(params)  # type: ignore[attr-defined]
    except AttributeError:
        return Annotated.__getitem__(params)  # type: ignore[attr-defined]
