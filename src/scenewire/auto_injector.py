from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum
from typing import Any, Protocol

from scenewire.scope import Scope


class InjectionMode(str, Enum):
    """Select which components of a spawned node ``auto_inject`` visits."""

    SINGLE = "single"
    """Inject only the first component of the node."""

    OBJECT = "object"
    """Inject every component of the node."""

    RECURSIVE = "recursive"
    """Inject every component of the node and of all its descendants."""


class SceneNode(Protocol):
    """Host object owning components and child nodes."""

    @property
    def components(self) -> Sequence[Any]: ...

    @property
    def children(self) -> Sequence[SceneNode]: ...


def auto_inject(
    scope: Scope,
    node: SceneNode,
    mode: InjectionMode | str = InjectionMode.SINGLE,
) -> list[Any]:
    """Inject components of a node created after its scope initialized.

    Objects spawned at runtime miss the initialization pass of their scope;
    call this right after creating them. Components whose type is not
    injectable are skipped, matching what ``Scope.initialize`` does.

    Args:
        scope: Scope to resolve dependencies from.
        node: Freshly created host node.
        mode: Which components to visit.

    Returns:
        The components that went through the injection pass.

    Examples:
        .. code-block:: python

            enemy = spawn_enemy(level_root)
            auto_inject(level_scope, enemy, InjectionMode.RECURSIVE)

    """
    injected: list[Any] = []
    for component in _iter_components(node, InjectionMode(mode)):
        if component is None or not scope.is_injectable(component):
            continue
        scope.inject(component)
        injected.append(component)
    return injected


def _iter_components(node: SceneNode, mode: InjectionMode) -> Iterator[Any]:
    if mode is InjectionMode.SINGLE:
        yield from node.components[:1]
        return

    yield from node.components
    if mode is InjectionMode.RECURSIVE:
        for child in node.children:
            yield from _iter_components(child, mode)


__all__ = ["InjectionMode", "SceneNode", "auto_inject"]
