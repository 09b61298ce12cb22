from __future__ import annotations

import logging
from collections.abc import Iterable
from types import TracebackType
from typing import Any, ClassVar, TypeVar, overload

from typing_extensions import Self

from scenewire._internal.classifier import InjectableTypeClassifier
from scenewire._internal.injection import inject_instance
from scenewire._internal.plans import InjectionPlanExtractor
from scenewire._internal.providers import register_provider, self_registration_keys
from scenewire._internal.settings import SettingsLoader
from scenewire.exceptions import SceneWireInvalidScopeError, SceneWireScopeStateError
from scenewire.markers import DependencyProvider, normalize_key
from scenewire.policies import InjectionPolicy
from scenewire.registry import Registry

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Scope:
    """Own one registry and run injection against it.

    ``Scope`` holds the behavior shared by ``GlobalScope`` and ``LocalScope``:
    read-through resolution to an optional parent, the injection pass, the
    provider registration protocol and the four-step initialization.

    Do not instantiate this class directly; create a ``GlobalScope`` once at
    application start and ``LocalScope`` objects under it.
    """

    SELF_REGISTERS_MEMBERS: ClassVar[bool] = False

    def __init__(
        self,
        *,
        name: str,
        parent: Scope | None,
        policy: InjectionPolicy,
        extractor: InjectionPlanExtractor,
        classifier: InjectableTypeClassifier,
    ) -> None:
        self.name = name
        self._parent = parent
        self._policy = policy
        self._extractor = extractor
        self._classifier = classifier
        self._registry = Registry(name=name)
        self._initialized = False
        self._closed = False

    @property
    def parent(self) -> Scope | None:
        return self._parent

    @property
    def policy(self) -> InjectionPolicy:
        return self._policy

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def is_closed(self) -> bool:
        return self._closed

    @overload
    def resolve(self, key: type[T]) -> T | None: ...

    @overload
    def resolve(self, key: Any) -> Any | None: ...

    def resolve(self, key: Any) -> Any | None:
        """Return the instance registered for ``key`` in this scope chain.

        The scope's own registry is checked first, then the parent scope.
        Absence is a normal outcome and is reported as ``None``.

        Args:
            key: Type, protocol, or ``Annotated[..., Component(...)]`` token.
                ``Inject[...]`` wrappers are accepted and unwrapped.

        Raises:
            SceneWireScopeStateError: If the scope is closed.

        """
        self._ensure_open()
        key = normalize_key(key)
        instance = self._registry.resolve(key)
        if instance is not None:
            return instance
        if self._parent is not None:
            return self._parent.resolve(key)
        return None

    def inject(self, instance: T) -> T:
        """Fill the injection points of ``instance`` from this scope chain.

        Objects without injection points are left untouched. The classification
        snapshot is not consulted; use ``is_injectable`` first when only
        classified objects should be visited.

        Args:
            instance: Object to mutate in place.

        Returns:
            The same ``instance``, for chaining.

        Raises:
            SceneWireDependencyNotResolvedError: Under the strict policy, when
                a dependency is missing from the scope chain.
            SceneWireNonWritableMemberError: Under the strict policy, when an
                injection point cannot be assigned.
            SceneWireScopeStateError: If the scope is closed.

        """
        self._ensure_open()
        plan = self._extractor.get_plan(type(instance))
        inject_instance(instance, self.resolve, plan, self._policy)
        return instance

    def register_provider(self, provider: DependencyProvider) -> list[Any]:
        """Register the values of every ``@provide`` method of ``provider``.

        Args:
            provider: Provider instance whose factories run exactly once.

        Returns:
            The produced values, in invocation order.

        Raises:
            SceneWireProviderContractError: If a provide-method returns ``None``.
            SceneWireScopeStateError: If the scope is closed.

        """
        self._ensure_open()
        plan = self._extractor.get_plan(type(provider))
        return register_provider(provider, plan, self._registry, self.inject)

    def register_instance(self, instance: Any) -> bool:
        """Register ``instance`` under its own type and every capability it has.

        Returns:
            ``True`` when the instance took the key of its concrete type.

        """
        self._ensure_open()
        registered = [
            self._registry.try_register(key, instance) for key in self_registration_keys(instance)
        ]
        return registered[0]

    def is_injectable(self, instance: Any) -> bool:
        """Return whether ``initialize`` would run the injection pass on ``instance``."""
        return self._classifier.is_injectable_type(type(instance))

    def initialize(self, members: Iterable[Any]) -> None:
        """Populate this scope from the objects of its domain and inject them.

        Steps run in a fixed order over the deduplicated members:

        1. classify member types;
        2. register every provider, higher ``provider_priority`` first;
        3. self-register every member (local scopes only);
        4. inject every member whose type is injectable.

        Registration completes before any injection, so members can depend on
        each other regardless of enumeration order.

        The scope counts as initialized from the moment this call starts. When
        a step raises, registrations made so far stay in place and a second
        call is rejected, so providers never run twice for one scope.

        Args:
            members: Flat iterable of domain objects; ``None`` entries and
                repeated objects are ignored.

        Raises:
            SceneWireDependencyNotResolvedError: Under the strict policy, when a
                member or provided value has an unresolvable injection point.
            SceneWireProviderContractError: If a provide-method returns ``None``.
            SceneWireScopeStateError: If the scope was already initialized or
                is closed.

        """
        self._ensure_open()
        if self._initialized:
            msg = f"Scope {self.name!r} is already initialized."
            raise SceneWireScopeStateError(msg)
        self._initialized = True

        unique_members = _deduplicate(members)
        injectable_types = self._classifier.injectable_among(
            {type(member) for member in unique_members},
        )

        providers = [member for member in unique_members if isinstance(member, DependencyProvider)]
        providers.sort(key=lambda provider: -provider.provider_priority)
        for provider in providers:
            self.register_provider(provider)

        if self.SELF_REGISTERS_MEMBERS:
            for member in unique_members:
                self.register_instance(member)

        injected = 0
        for member in unique_members:
            if type(member) in injectable_types:
                self.inject(member)
                injected += 1

        logger.debug(
            "Initialized scope %r: %d member(s), %d provider(s), %d injected",
            self.name,
            len(unique_members),
            len(providers),
            injected,
        )

    def _ensure_open(self) -> None:
        if self._closed:
            msg = f"Scope {self.name!r} is closed."
            raise SceneWireScopeStateError(msg)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, registered={len(self._registry)})"


class GlobalScope(Scope):
    """Process-wide scope that every local scope falls back to.

    Create it once at application start and pass it to each ``LocalScope``.
    Configuration given here (failure policy and classification universe) is
    shared by the whole system.

    Examples:
        .. code-block:: python

            global_scope = GlobalScope()
            global_scope.initialize([CoreServices(), GameSettingsMenu()])

            with global_scope.local_scope("level-1") as level:
                level.initialize(level_objects)

    """

    def __init__(
        self,
        *,
        policy: InjectionPolicy | str = InjectionPolicy.STRICT,
        candidate_types: Iterable[type[Any]] | None = None,
        autoregister_settings: bool = False,
        name: str = "global",
    ) -> None:
        """Initialize the global scope and the shared classification state.

        Args:
            policy: Failure policy applied by this scope and every local scope
                under it. Accepts ``InjectionPolicy`` or its string value.
            candidate_types: Fixed classification universe. When omitted, each
                type is classified the first time a scope sees it.
            autoregister_settings: Build Pydantic settings classes from the
                environment on a resolution miss and keep them as singletons.
                Off by default, so resolution stays a pure lookup. A settings
                class that fails validation resolves to ``None``.
            name: Name used in log records and errors.

        """
        extractor = InjectionPlanExtractor()
        super().__init__(
            name=name,
            parent=None,
            policy=InjectionPolicy(policy),
            extractor=extractor,
            classifier=InjectableTypeClassifier(extractor, candidate_types),
        )
        self._settings_loader = SettingsLoader() if autoregister_settings else None

    @property
    def classifier(self) -> InjectableTypeClassifier:
        return self._classifier

    @property
    def extractor(self) -> InjectionPlanExtractor:
        return self._extractor

    def resolve(self, key: Any) -> Any | None:
        instance = super().resolve(key)
        if instance is not None or self._settings_loader is None:
            return instance

        key = normalize_key(key)
        if not self._settings_loader.accepts(key):
            return None
        settings = self._settings_loader.load(key)
        if settings is None:
            return None
        self._registry.try_register(key, settings)
        logger.debug("Registered settings %s from the environment", key.__qualname__)
        return settings

    def local_scope(self, name: str = "local") -> LocalScope:
        """Return a new ``LocalScope`` that falls back to this scope."""
        return LocalScope(self, name=name)


class LocalScope(Scope):
    """Scope of one domain (for example a scene) layered over the global scope.

    Members self-register during initialization, so objects of the same domain
    can depend on each other. Lookups that miss locally fall back to the
    global scope and never to sibling local scopes. Leaving the ``with`` block
    closes the scope and drops its registrations.
    """

    SELF_REGISTERS_MEMBERS: ClassVar[bool] = True

    def __init__(self, parent: GlobalScope, *, name: str = "local") -> None:
        if not isinstance(parent, GlobalScope):
            msg = (
                f"LocalScope parent must be a GlobalScope, got {type(parent).__name__}; "
                "local scopes never fall back to each other."
            )
            raise SceneWireInvalidScopeError(msg)
        super().__init__(
            name=name,
            parent=parent,
            policy=parent.policy,
            extractor=parent.extractor,
            classifier=parent.classifier,
        )

    def close(self) -> None:
        """Drop every registration; later use raises ``SceneWireScopeStateError``."""
        if self._closed:
            return
        self._registry.clear()
        self._closed = True
        logger.debug("Closed scope %r", self.name)

    def __enter__(self) -> Self:
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


def _deduplicate(members: Iterable[Any]) -> list[Any]:
    seen: set[int] = set()
    unique: list[Any] = []
    for member in members:
        if member is None or id(member) in seen:
            continue
        seen.add(id(member))
        unique.append(member)
    return unique


__all__ = ["GlobalScope", "LocalScope", "Scope"]
