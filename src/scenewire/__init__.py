from scenewire._internal.classifier import candidate_types_from
from scenewire.auto_injector import InjectionMode, SceneNode, auto_inject
from scenewire.exceptions import (
    SceneWireDependencyNotResolvedError,
    SceneWireError,
    SceneWireInjectionPlanError,
    SceneWireInvalidProviderError,
    SceneWireInvalidScopeError,
    SceneWireNonWritableMemberError,
    SceneWireProviderContractError,
    SceneWireScopeStateError,
)
from scenewire.markers import Component, DependencyProvider, Inject, inject, provide
from scenewire.policies import InjectionPolicy
from scenewire.registry import Registry
from scenewire.scope import GlobalScope, LocalScope, Scope

__all__ = [
    "Component",
    "DependencyProvider",
    "GlobalScope",
    "Inject",
    "InjectionMode",
    "InjectionPolicy",
    "LocalScope",
    "Registry",
    "SceneNode",
    "SceneWireDependencyNotResolvedError",
    "SceneWireError",
    "SceneWireInjectionPlanError",
    "SceneWireInvalidProviderError",
    "SceneWireInvalidScopeError",
    "SceneWireNonWritableMemberError",
    "SceneWireProviderContractError",
    "SceneWireScopeStateError",
    "Scope",
    "auto_inject",
    "candidate_types_from",
    "inject",
    "provide",
]
