"""Quickstart: mark members with ``Inject`` and let the scope fill them.

A provider registers shared services in the global scope. Every other object
declares what it needs and receives it during ``initialize``.
"""

from __future__ import annotations

from scenewire import DependencyProvider, GlobalScope, Inject, provide


class Logger:
    def __init__(self) -> None:
        self.prefix = "[game]"


class CoreServices(DependencyProvider):
    @provide
    def provide_logger(self) -> Logger:
        return Logger()


class Hud:
    logger: Inject[Logger]


class Tree:
    pass


def main() -> None:
    global_scope = GlobalScope()
    hud = Hud()
    tree = Tree()

    global_scope.initialize([CoreServices(), hud, tree])

    print(f"hud_prefix={hud.logger.prefix}")  # => hud_prefix=[game]
    print(f"same_logger={hud.logger is global_scope.resolve(Logger)}")  # => same_logger=True
    print(f"tree_injectable={global_scope.is_injectable(tree)}")  # => tree_injectable=False


if __name__ == "__main__":
    main()
