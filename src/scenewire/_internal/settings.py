from __future__ import annotations

import importlib
import logging
import warnings
from typing import Any

from scenewire._internal.type_checks import is_runtime_class

logger = logging.getLogger(__name__)

_SETTINGS_MODULES = ("pydantic_settings", "pydantic.v1")
_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def discover_settings_bases(
    module_names: tuple[str, ...] = _SETTINGS_MODULES,
) -> tuple[type[Any], ...]:
    """Return the ``BaseSettings`` classes importable from ``module_names``.

    Modules that are not installed, or that expose no ``BaseSettings`` class,
    are skipped.
    """
    bases: list[type[Any]] = []
    for module_name in module_names:
        with warnings.catch_warnings():
            warnings.filterwarnings(
                "ignore",
                message=_PYDANTIC_V1_WARNING_PATTERN,
                category=UserWarning,
            )
            try:
                module = importlib.import_module(module_name)
            except ImportError:
                continue
        base = getattr(module, "BaseSettings", None)
        if isinstance(base, type) and base not in bases:
            bases.append(base)
    return tuple(bases)


def is_pydantic_settings_subclass(candidate: object, bases: tuple[type[Any], ...]) -> bool:
    """Return whether ``candidate`` is a concrete subclass of one of ``bases``."""
    if not is_runtime_class(candidate) or candidate in bases:
        return False
    try:
        return issubclass(candidate, bases)
    except TypeError:
        return False


class SettingsLoader:
    """Build Pydantic settings singletons for a ``GlobalScope`` on demand.

    A settings class is constructed with no arguments, so its values come
    from the environment. Validation failures are logged and reported as
    absence, which lets the scope's failure policy decide what happens to the
    member that asked for it.
    """

    def __init__(self, bases: tuple[type[Any], ...] | None = None) -> None:
        self._bases = bases

    @property
    def bases(self) -> tuple[type[Any], ...]:
        if self._bases is None:
            self._bases = discover_settings_bases()
        return self._bases

    def accepts(self, key: Any) -> bool:
        return is_pydantic_settings_subclass(key, self.bases)

    def load(self, settings_type: type[Any]) -> Any | None:
        """Return a new ``settings_type`` instance, or ``None`` when it fails validation."""
        try:
            return settings_type()
        except ValueError as error:
            # Pydantic's ValidationError subclasses ValueError in v1 and v2.
            logger.warning(
                "Cannot build settings %s from the environment: %s",
                settings_type.__qualname__,
                error,
            )
            return None


__all__ = ["SettingsLoader", "discover_settings_bases", "is_pydantic_settings_subclass"]
