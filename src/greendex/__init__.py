"""Greendex - CO2 footprint calculation for Erasmus+ mobility participants."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "EmissionCalculation",
    "ParticipantAnswers",
    "ProjectActivity",
    "StepImpact",
    "calculate_emissions",
    "calculate_step_impact",
    "summarize_participants",
]

if TYPE_CHECKING:
    from .aggregators import summarize_participants
    from .calculator import calculate_emissions
    from .impact import calculate_step_impact
    from .models import EmissionCalculation, StepImpact
    from .schemas import ParticipantAnswers, ProjectActivity


def __getattr__(name: str) -> Any:
    """Lazily import submodules on first attribute access."""

    module_map = {
        "EmissionCalculation": "models",
        "ParticipantAnswers": "schemas",
        "ProjectActivity": "schemas",
        "StepImpact": "models",
        "calculate_emissions": "calculator",
        "calculate_step_impact": "impact",
        "summarize_participants": "aggregators",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
