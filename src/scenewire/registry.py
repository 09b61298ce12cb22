from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from scenewire._internal.type_checks import describe_key

logger = logging.getLogger(__name__)


class Registry:
    """Map resolution keys to the single instance used for each key.

    Registration is first-writer-wins: once a key holds a value, later writes
    for that key are rejected and reported through a ``WARNING`` log record.
    The registry references instances, it does not own their lifetime.

    Examples:
        .. code-block:: python

            registry = Registry(name="level-1")
            registry.try_register(Logger, Logger("game"))  # True
            registry.try_register(Logger, Logger("other"))  # False, logged
            registry.resolve(Logger).name  # "game"

    """

    def __init__(self, name: str = "registry") -> None:
        self.name = name
        self._instances: dict[Any, Any] = {}

    def try_register(self, key: Any, instance: Any) -> bool:
        """Insert ``instance`` under ``key`` when the key is still free.

        Re-registering the very same instance under a key it already holds is
        a silent no-op; any other duplicate is logged.

        Args:
            key: Resolution key (type, protocol, or component token).
            instance: Value to bind. ``None`` is rejected, since it means absent.

        Returns:
            ``True`` when the instance was inserted, ``False`` otherwise.

        """
        if instance is None:
            logger.warning("%s: refusing to register None for %s", self.name, describe_key(key))
            return False

        existing = self._instances.get(key)
        if existing is not None:
            if existing is not instance:
                logger.warning(
                    "%s: %s already registered with %s; ignoring duplicate %s",
                    self.name,
                    describe_key(key),
                    type(existing).__qualname__,
                    type(instance).__qualname__,
                )
            return False

        self._instances[key] = instance
        return True

    def resolve(self, key: Any) -> Any | None:
        """Return the instance bound to ``key`` or ``None`` when absent."""
        return self._instances.get(key)

    def keys(self) -> Iterator[Any]:
        """Iterate over a snapshot of the registered keys in insertion order."""
        return iter(tuple(self._instances))

    def clear(self) -> None:
        """Drop every registration."""
        self._instances.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def __repr__(self) -> str:
        return f"Registry(name={self.name!r}, size={len(self._instances)})"


__all__ = ["Registry"]
