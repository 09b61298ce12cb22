"""Tests for injecting objects spawned after scope initialization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from scenewire.auto_injector import InjectionMode, auto_inject
from scenewire.markers import Inject
from scenewire.scope import GlobalScope, LocalScope


class Logger:
    pass


class Weapon:
    logger: Inject[Logger]


class Armor:
    logger: Inject[Logger]


class Decoration:
    pass


@dataclass
class Node:
    components: list[Any] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)


@pytest.fixture()
def logger() -> Logger:
    return Logger()


@pytest.fixture()
def level(global_scope: GlobalScope, logger: Logger) -> LocalScope:
    global_scope.registry.try_register(Logger, logger)
    level = global_scope.local_scope("level")
    level.initialize([])
    return level


def _spawn() -> tuple[Node, Weapon, Armor, Weapon]:
    first = Weapon()
    second = Armor()
    nested = Weapon()
    node = Node(
        components=[first, Decoration(), second],
        children=[Node(children=[Node(components=[None, nested])])],
    )
    return node, first, second, nested


def test_single_mode_injects_first_component_only(level: LocalScope, logger: Logger) -> None:
    node, first, second, nested = _spawn()

    injected = auto_inject(level, node)

    assert injected == [first]
    assert first.logger is logger
    assert not hasattr(second, "logger")
    assert not hasattr(nested, "logger")


def test_object_mode_injects_every_injectable_component(level: LocalScope) -> None:
    node, first, second, nested = _spawn()

    injected = auto_inject(level, node, InjectionMode.OBJECT)

    assert injected == [first, second]
    assert not hasattr(nested, "logger")


def test_recursive_mode_walks_descendants(level: LocalScope, logger: Logger) -> None:
    node, first, second, nested = _spawn()

    injected = auto_inject(level, node, "recursive")

    assert injected == [first, second, nested]
    assert nested.logger is logger


def test_single_mode_skips_non_injectable_first_component(level: LocalScope) -> None:
    node = Node(components=[Decoration(), Weapon()])

    assert auto_inject(level, node) == []


def test_empty_node_injects_nothing(level: LocalScope) -> None:
    assert auto_inject(level, Node(), InjectionMode.RECURSIVE) == []
