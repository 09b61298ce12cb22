from __future__ import annotations

from collections.abc import Iterator

import pytest

from scenewire.policies import InjectionPolicy
from scenewire.scope import GlobalScope, LocalScope


@pytest.fixture()
def scenewire_global_scope() -> GlobalScope:
    """Create a per-test global scope with the strict failure policy.

    Override this fixture in a test suite to change the policy or pin the
    classification universe.

    Returns:
        A new, uninitialized ``GlobalScope``.

    """
    return GlobalScope(policy=InjectionPolicy.STRICT)


@pytest.fixture()
def scenewire_local_scope(scenewire_global_scope: GlobalScope) -> Iterator[LocalScope]:
    """Yield a local scope under ``scenewire_global_scope``.

    The scope is closed at teardown, so registrations never leak between
    tests.

    Yields:
        A new, uninitialized ``LocalScope``.

    """
    with scenewire_global_scope.local_scope(name="test") as scope:
        yield scope
