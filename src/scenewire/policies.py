from __future__ import annotations

from enum import Enum


class InjectionPolicy(str, Enum):
    """Select how the injection pass reacts to unsatisfiable injection points.

    One policy is configured on the ``GlobalScope`` and shared by every local
    scope created under it, so fields, properties and methods of the whole
    system fail the same way.
    """

    STRICT = "strict"
    """Raise ``SceneWireDependencyNotResolvedError`` (or its non-writable variant)
    and abort the pass for the object."""

    LENIENT = "lenient"
    """Log a warning, leave the member at its current value and continue.
    ``@inject`` methods with an unresolved parameter are not called."""
