"""Local scopes: objects of one scene wire to each other and to global services.

Members of a local scope register themselves under their own type and every
base class, so they can depend on each other in any order. Lookups that miss
locally fall back to the global scope, never to a sibling scope.
"""

from __future__ import annotations

import abc

from scenewire import DependencyProvider, GlobalScope, Inject, provide


class Logger:
    pass


class Damageable(abc.ABC):
    @abc.abstractmethod
    def damage(self, amount: int) -> None: ...


class CoreServices(DependencyProvider):
    @provide
    def provide_logger(self) -> Logger:
        return Logger()


class Player(Damageable):
    enemy: Inject[Enemy]
    logger: Inject[Logger]

    def __init__(self) -> None:
        self.health = 100

    def damage(self, amount: int) -> None:
        self.health -= amount


class Enemy:
    target: Inject[Damageable]

    def attack(self) -> None:
        self.target.damage(30)


def main() -> None:
    global_scope = GlobalScope()
    global_scope.initialize([CoreServices()])

    enemy = Enemy()
    player = Player()
    with global_scope.local_scope("level-1") as level:
        level.initialize([enemy, player])
        enemy.attack()

        print(f"health={player.health}")  # => health=70
        print(f"enemy_wired={player.enemy is enemy}")  # => enemy_wired=True
        print(f"global_logger={player.logger is global_scope.resolve(Logger)}")  # => global_logger=True

        sibling = global_scope.local_scope("level-2")
        print(f"sibling_sees_player={sibling.resolve(Player) is not None}")  # => sibling_sees_player=False

    print(f"closed={level.is_closed}")  # => closed=True


if __name__ == "__main__":
    main()
