"""Shared pytest fixtures for scenewire tests."""

import pytest

from scenewire.integrations.pytest_plugin import (  # noqa: F401
    scenewire_global_scope,
    scenewire_local_scope,
)
from scenewire.policies import InjectionPolicy
from scenewire.scope import GlobalScope


@pytest.fixture()
def global_scope() -> GlobalScope:
    """Global scope with the strict failure policy."""
    return GlobalScope(policy=InjectionPolicy.STRICT)


@pytest.fixture()
def lenient_global_scope() -> GlobalScope:
    """Global scope with the lenient failure policy."""
    return GlobalScope(policy=InjectionPolicy.LENIENT)
