"""Auto injection: wire objects created after their scope initialized.

``auto_inject`` visits the first component of a node, every component of it,
or every component of the node and its descendants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from scenewire import GlobalScope, Inject, InjectionMode, auto_inject, inject


class Logger:
    pass


class Weapon:
    logger: Inject[Logger]


class Muzzle:
    def __init__(self) -> None:
        self.bound = False

    @inject
    def bind(self, logger: Logger) -> None:
        self.bound = True


@dataclass
class Node:
    components: list[Any] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)


def spawn_gun() -> Node:
    return Node(components=[Weapon()], children=[Node(components=[Muzzle()])])


def main() -> None:
    global_scope = GlobalScope()
    global_scope.registry.try_register(Logger, Logger())

    with global_scope.local_scope("level") as level:
        level.initialize([])

        single = auto_inject(level, spawn_gun())
        print(f"single={len(single)}")  # => single=1

        gun = spawn_gun()
        recursive = auto_inject(level, gun, InjectionMode.RECURSIVE)
        muzzle = gun.children[0].components[0]
        print(f"recursive={len(recursive)}")  # => recursive=2
        print(f"muzzle_bound={muzzle.bound}")  # => muzzle_bound=True


if __name__ == "__main__":
    main()
