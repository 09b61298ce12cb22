from __future__ import annotations

from typing import Any

from scenewire._internal.type_checks import describe_key


class SceneWireError(Exception):
    """Represent a base class for all SceneWire-specific failures.

    Catch this type when you want to handle any SceneWire error path without
    matching each concrete exception class individually.
    """


class SceneWireInvalidProviderError(SceneWireError):
    """Signal a malformed ``@provide`` method.

    Raised while building the injection plan of a ``DependencyProvider``
    subclass, for example when a provide-method declares parameters besides
    ``self`` or is a static/class method.

    Typical fix is turning the factory into a zero-argument instance method and
    moving its collaborators to ``Inject[...]`` members of the provided value.
    """


class SceneWireInjectionPlanError(SceneWireError):
    """Signal that injection points of a type cannot be described.

    Raised when annotations of an injection point cannot be evaluated (for
    example a forward reference that never becomes importable) or when an
    ``@inject`` method parameter has no annotation.

    This error is independent of the configured ``InjectionPolicy``: a type
    whose dependencies cannot be named is a configuration bug.
    """

    def __init__(self, owner: type[Any], error: Exception | str) -> None:
        self.owner = owner
        self.error = error
        super().__init__(f"Cannot build injection plan for {owner.__qualname__}: {error}")


class SceneWireProviderContractError(SceneWireError):
    """Signal that a provide-method returned ``None``.

    A provider that promises a type must deliver it. Raised by
    ``Scope.register_provider`` and aborts the registration pass of that
    provider.
    """

    def __init__(self, provider_type: type[Any], provides: Any, method_name: str) -> None:
        self.provider_type = provider_type
        self.provides = provides
        self.method_name = method_name
        super().__init__(
            f"Provider {provider_type.__qualname__}.{method_name}() returned None "
            f"for {describe_key(provides)}",
        )


class SceneWireDependencyNotResolvedError(SceneWireError):
    """Signal that an injection point could not be satisfied.

    Raised by ``Scope.inject`` and ``Scope.initialize`` under
    ``InjectionPolicy.STRICT`` when a key is absent from the whole scope chain.

    Typical fixes include adding a ``@provide`` method for the key, placing an
    object of that type in the same local scope, or switching the system to
    ``InjectionPolicy.LENIENT`` when the dependency is optional.
    """

    def __init__(self, key: Any, owner: type[Any], member: str) -> None:
        self.key = key
        self.owner = owner
        self.member = member
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Failed to inject {describe_key(self.key)} into "
            f"{self.owner.__qualname__}.{self.member}: dependency is not registered"
        )


class SceneWireNonWritableMemberError(SceneWireDependencyNotResolvedError):
    """Signal an injection point that cannot be assigned.

    Raised under ``InjectionPolicy.STRICT`` for an injected property without a
    setter or for a field whose assignment is rejected (for example on a frozen
    dataclass).
    """

    def _build_message(self) -> str:
        return (
            f"Member {self.owner.__qualname__}.{self.member} is not writable; "
            f"cannot inject {describe_key(self.key)}"
        )


class SceneWireInvalidScopeError(SceneWireError):
    """Signal an invalid scope composition.

    Raised when a ``LocalScope`` is constructed with a parent that is not a
    ``GlobalScope``. Local scopes fall back to the global scope only and never
    to sibling local scopes.
    """


class SceneWireScopeStateError(SceneWireError):
    """Signal use of a scope in the wrong lifecycle state.

    Raised when ``initialize`` is called twice on the same scope or when a
    closed ``LocalScope`` is used.
    """
