from __future__ import annotations

from collections.abc import Callable

from ..models.scenario import Scenario

ScenarioFactory = Callable[[], Scenario]

_REG: dict[str, ScenarioFactory] = {}


def register_scenario(name: str, factory: ScenarioFactory) -> ScenarioFactory:
    _REG[name] = factory
    return factory


def get_scenario(name: str) -> Scenario:
    if name not in _REG:
        raise KeyError(f"Unknown scenario: {name}")
    return _REG[name]()


def list_scenarios() -> list[str]:
    return sorted(_REG)
