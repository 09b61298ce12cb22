from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from scenewire._internal.plans import InjectionPlanExtractor
from scenewire._internal.type_checks import is_runtime_class

logger = logging.getLogger(__name__)


class InjectableTypeClassifier:
    """Decide which types the injection pass visits during scope initialization.

    A type is injectable when it has at least one injection point or exposes
    the provider capability. Every decision is a one-time snapshot: once a
    type has been classified, the answer never changes for the lifetime of the
    classifier, even if the class is mutated afterwards.

    With an explicit ``candidate_types`` universe the set is computed once, on
    first use, and types outside the universe are never injectable. Without
    one, each concrete type is classified the first time a scope asks about it.
    """

    def __init__(
        self,
        extractor: InjectionPlanExtractor,
        candidate_types: Iterable[type[Any]] | None = None,
    ) -> None:
        self._extractor = extractor
        self._candidate_types = None if candidate_types is None else tuple(candidate_types)
        self._injectable_types: frozenset[type[Any]] | None = None
        self._decisions: dict[type[Any], bool] = {}

    @property
    def has_fixed_universe(self) -> bool:
        return self._candidate_types is not None

    def compute(self, candidate_types: Iterable[type[Any]] | None = None) -> frozenset[type[Any]]:
        """Return the injectable subset of the candidate universe.

        The first call fixes the result; later calls return the cached set
        without looking at their argument again.

        Args:
            candidate_types: Universe to classify on the first call. Defaults to
                the universe given at construction, or to the types classified
                so far when there is none.

        """
        if self._injectable_types is not None:
            return self._injectable_types

        if candidate_types is None:
            candidate_types = (
                self._candidate_types
                if self._candidate_types is not None
                else tuple(self._decisions)
            )

        self._injectable_types = frozenset(
            candidate for candidate in candidate_types if self._classify(candidate)
        )
        logger.debug(
            "Classified %d injectable type(s)",
            len(self._injectable_types),
        )
        return self._injectable_types

    def is_injectable_type(self, candidate: type[Any]) -> bool:
        """Return whether ``candidate`` is injectable under this classifier's snapshot."""
        if self._candidate_types is not None:
            return candidate in self.compute()
        return self._classify(candidate)

    def injectable_among(self, types: Iterable[type[Any]]) -> frozenset[type[Any]]:
        """Return the injectable subset of ``types`` under this classifier's snapshot."""
        return frozenset(candidate for candidate in types if self.is_injectable_type(candidate))

    def _classify(self, candidate: type[Any]) -> bool:
        decision = self._decisions.get(candidate)
        if decision is not None:
            return decision
        decision = is_runtime_class(candidate) and self._extractor.get_plan(candidate).is_injectable
        self._decisions[candidate] = decision
        return decision


def candidate_types_from(base: type[Any]) -> frozenset[type[Any]]:
    """Return ``base`` and all of its transitive subclasses.

    This is the closest Python counterpart of "every loaded component type":
    pass the result as ``candidate_types`` to pin the classification universe.

    Args:
        base: Root class of the host's component hierarchy.

    """
    found: set[type[Any]] = set()
    pending = [base]
    while pending:
        current = pending.pop()
        if current in found:
            continue
        found.add(current)
        pending.extend(current.__subclasses__())
    return frozenset(found)


__all__ = ["InjectableTypeClassifier", "candidate_types_from"]
