"""Providers: factories that run once and register what they return.

A provided value is registered under its declared return type, its concrete
type and its base classes. It is injected before it is registered, and
``Component`` markers keep several values of the same type apart.
"""

from __future__ import annotations

from typing import Annotated

from scenewire import Component, DependencyProvider, GlobalScope, Inject, provide


class Clock:
    def __init__(self) -> None:
        self.ticks = 0


class Renderer:
    clock: Inject[Clock]


class VulkanRenderer(Renderer):
    pass


class Camera:
    def __init__(self, name: str) -> None:
        self.name = name


MainCamera = Annotated[Camera, Component("main")]
MinimapCamera = Annotated[Camera, Component("minimap")]


class TimeServices(DependencyProvider):
    provider_priority = 10

    @provide
    def provide_clock(self) -> Clock:
        return Clock()


class RenderServices(DependencyProvider):
    @provide
    def provide_renderer(self) -> Renderer:
        return VulkanRenderer()

    @provide
    def main_camera(self) -> MainCamera:
        return Camera("main")

    @provide(priority=5)
    def minimap_camera(self) -> MinimapCamera:
        return Camera("minimap")


class Minimap:
    camera: Inject[MinimapCamera]
    renderer: Inject[Renderer]


def main() -> None:
    global_scope = GlobalScope()
    minimap = Minimap()

    global_scope.initialize([RenderServices(), TimeServices(), minimap])

    renderer = global_scope.resolve(VulkanRenderer)
    print(f"renderer={type(minimap.renderer).__name__}")  # => renderer=VulkanRenderer
    print(f"concrete_key={renderer is minimap.renderer}")  # => concrete_key=True
    print(f"clock_injected={renderer.clock is global_scope.resolve(Clock)}")  # => clock_injected=True
    print(f"camera={minimap.camera.name}")  # => camera=minimap
    print(f"plain_camera={global_scope.resolve(Camera)}")  # => plain_camera=None


if __name__ == "__main__":
    main()
