from __future__ import annotations

import importlib
import inspect
from typing import Any

import pytest

import scenewire

_MODULES_DECLARING_ALL = (
    "scenewire._internal.classifier",
    "scenewire._internal.plans",
    "scenewire._internal.settings",
    "scenewire._internal.type_checks",
    "scenewire.auto_injector",
    "scenewire.registry",
    "scenewire.scope",
)


def _undocumented_methods(cls: type[Any]) -> list[str]:
    missing: list[str] = []
    for name, member in sorted(vars(cls).items()):
        if name.startswith("_"):
            continue
        func = member.__func__ if isinstance(member, staticmethod | classmethod) else member
        if inspect.isfunction(func) and not inspect.getdoc(getattr(cls, name)):
            missing.append(f"{cls.__name__}.{name}")
    return missing


@pytest.mark.parametrize("export_name", sorted(scenewire.__all__))
def test_exported_object_and_its_public_methods_are_documented(export_name: str) -> None:
    exported = getattr(scenewire, export_name)

    assert inspect.getdoc(exported), f"{export_name} has no docstring"
    if inspect.isclass(exported):
        assert _undocumented_methods(exported) == []


@pytest.mark.parametrize("module_name", _MODULES_DECLARING_ALL)
def test_module_all_names_exist(module_name: str) -> None:
    module = importlib.import_module(module_name)

    missing = [name for name in module.__all__ if not hasattr(module, name)]

    assert missing == []
