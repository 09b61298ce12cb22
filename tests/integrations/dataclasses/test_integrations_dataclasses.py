"""Tests for injecting into dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

from scenewire.markers import DependencyProvider, Inject, provide
from scenewire.scope import GlobalScope


class Logger:
    pass


@dataclass
class HealthBar:
    max_health: int = 100
    logger: Inject[Logger] = field(init=False, repr=False)


@dataclass(slots=True)
class SlottedHealthBar:
    logger: Inject[Logger] = field(init=False)


@dataclass
class Inventory:
    capacity: int
    logger: Inject[Logger] = field(init=False)


class InventoryProvider(DependencyProvider):
    @provide
    def provide_inventory(self) -> Inventory:
        return Inventory(capacity=12)


class LoggingProvider(DependencyProvider):
    provider_priority = 10

    def __init__(self) -> None:
        self.logger = Logger()

    @provide
    def provide_logger(self) -> Logger:
        return self.logger


class TestDataclassInjection:
    def test_init_false_field_is_injected(self, global_scope: GlobalScope) -> None:
        services = LoggingProvider()
        global_scope.register_provider(services)

        bar = global_scope.inject(HealthBar())

        assert bar.logger is services.logger
        assert bar.max_health == 100

    def test_slotted_dataclass_field_is_injected(self, global_scope: GlobalScope) -> None:
        services = LoggingProvider()
        global_scope.register_provider(services)

        bar = global_scope.inject(SlottedHealthBar())

        assert bar.logger is services.logger

    def test_provider_priority_orders_dependent_providers(
        self,
        global_scope: GlobalScope,
    ) -> None:
        services = LoggingProvider()

        global_scope.initialize([InventoryProvider(), services])

        inventory = global_scope.resolve(Inventory)
        assert inventory is not None
        assert inventory.capacity == 12
        assert inventory.logger is services.logger
