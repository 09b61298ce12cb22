"""Errors: strict scopes fail loudly, lenient scopes log and continue.

The strict policy is the default. A lenient scope leaves unresolved members
unset and reports them as warnings on the ``scenewire`` logger.
"""

from __future__ import annotations

import logging

from scenewire import (
    GlobalScope,
    Inject,
    InjectionPolicy,
    SceneWireDependencyNotResolvedError,
)


class Logger:
    pass


class Hud:
    logger: Inject[Logger]


def main() -> None:
    try:
        GlobalScope().initialize([Hud()])
    except SceneWireDependencyNotResolvedError as error:
        print(type(error).__name__)  # => SceneWireDependencyNotResolvedError
        print(f"member={error.owner.__name__}.{error.member}")  # => member=Hud.logger

    logging.getLogger("scenewire").setLevel(logging.ERROR)
    hud = Hud()
    GlobalScope(policy=InjectionPolicy.LENIENT).initialize([hud])
    print(f"lenient_has_logger={hasattr(hud, 'logger')}")  # => lenient_has_logger=False


if __name__ == "__main__":
    main()
