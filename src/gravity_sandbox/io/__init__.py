"""Scenario I/O."""

from .scenario import (  # noqa: F401
    ScenarioDefinition,
    default_scenario,
    load_scenario,
    save_scenario,
    scenario_to_runtime,
)
