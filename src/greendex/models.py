"""Result models produced by the Greendex calculator."""

from __future__ import annotations

from dataclasses import dataclass
from math import ceil
from typing import TypedDict

from greendex.factors import TREE_ABSORPTION_KG

__all__ = [
    "EmissionBreakdownDict",
    "EmissionCalculation",
    "EmissionCalculationDict",
    "StepImpact",
]


class EmissionCalculationDict(TypedDict):
    """camelCase mapping consumed by the questionnaire front end."""

    transportCO2: float
    accommodationCO2: float
    foodCO2: float
    projectActivitiesCO2: float
    totalCO2: float
    treesNeeded: int


class EmissionBreakdownDict(TypedDict):
    """Per-category kilograms of CO₂ for summary displays."""

    transport: float
    accommodation: float
    food: float
    projectActivities: float


@dataclass(frozen=True, slots=True)
class EmissionCalculation:
    """CO₂ breakdown of one participant, in kilograms.

    Instances are derived values and are never persisted. ``total_co2`` is the
    plain sum of the four components and ``trees_needed`` the number of trees
    whose annual absorption offsets it.
    """

    transport_co2: float
    accommodation_co2: float
    food_co2: float
    project_activities_co2: float
    total_co2: float
    trees_needed: int

    @property
    def breakdown(self) -> EmissionBreakdownDict:
        """Return the component values keyed by category."""

        return {
            "transport": self.transport_co2,
            "accommodation": self.accommodation_co2,
            "food": self.food_co2,
            "projectActivities": self.project_activities_co2,
        }

    def to_dict(self) -> EmissionCalculationDict:
        """Return the camelCase shape used by display components."""

        return {
            "transportCO2": float(self.transport_co2),
            "accommodationCO2": float(self.accommodation_co2),
            "foodCO2": float(self.food_co2),
            "projectActivitiesCO2": float(self.project_activities_co2),
            "totalCO2": float(self.total_co2),
            "treesNeeded": int(self.trees_needed),
        }


@dataclass(frozen=True, slots=True)
class StepImpact:
    """Change in total CO₂ caused by answering one questionnaire step."""

    step_key: str
    step_value: object
    previous_co2: float
    new_co2: float

    @property
    def impact(self) -> float:
        return self.new_co2 - self.previous_co2

    @property
    def trees_needed(self) -> int:
        """Trees needed to offset the total after this answer."""

        return ceil(self.new_co2 / TREE_ABSORPTION_KG)

    def to_dict(self) -> dict[str, object]:
        return {
            "stepKey": self.step_key,
            "stepValue": self.step_value,
            "previousCO2": self.previous_co2,
            "newCO2": self.new_co2,
            "impact": self.impact,
            "treesNeeded": self.trees_needed,
        }
