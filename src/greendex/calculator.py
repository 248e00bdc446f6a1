"""Deterministic CO₂ calculations for Greendex participants.

All functions are pure: they read their arguments, consult the constant
tables in :mod:`greendex.factors` and return plain numbers. Missing or
unusable inputs never raise; they simply contribute nothing, which lets the
questionnaire recalculate after every single answer.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Final

from greendex.factors import (
    ACCOMMODATION_FACTORS,
    FOOD_FACTORS,
    MAX_DISTANCE_KM,
    ROUND_TRIP_MULTIPLIER,
    TRANSPORT_FACTORS,
    TREE_ABSORPTION_KG,
    ActivityType,
    TransportMode,
    electricity_factor,
    occupancy_factor,
)
from greendex.models import EmissionCalculation
from greendex.schemas import (
    ParticipantAnswers,
    ProjectActivity,
    coerce_activities,
    coerce_answers,
)

__all__ = [
    "AnswersInput",
    "ActivitiesInput",
    "calculate_accommodation_co2",
    "calculate_activity_co2",
    "calculate_emissions",
    "calculate_food_co2",
    "calculate_project_activities_co2",
    "calculate_transport_co2",
    "parse_distance",
    "trees_needed",
]

AnswersInput = ParticipantAnswers | Mapping[str, object] | None
ActivitiesInput = Iterable[ProjectActivity | Mapping[str, object]] | None

_DISTANCE_MODES: Final[tuple[tuple[str, TransportMode], ...]] = (
    ("flight_km", "flight"),
    ("boat_km", "boat"),
    ("train_km", "train"),
    ("bus_km", "bus"),
)

# Project-level car legs carry no engine type and use the conventional factor.
_ACTIVITY_MODES: Final[dict[ActivityType, TransportMode]] = {
    "boat": "boat",
    "bus": "bus",
    "train": "train",
    "car": "car",
}


def calculate_transport_co2(answers: AnswersInput) -> float:
    """Calculate round-trip travel emissions to and from the project.

    Args:
        answers: Participant answers. Distances describe the one-way journey
            to the project.

    Returns:
        Kilograms of CO₂ for the outbound and the symmetric return journey.
        Car emissions are shared between the car's passengers.
    """

    record = coerce_answers(answers)
    one_way = 0.0

    for field, mode in _DISTANCE_MODES:
        distance_km = getattr(record, field)
        if distance_km:
            one_way += distance_km * TRANSPORT_FACTORS[mode]

    if record.car_km:
        car_factor = (
            TRANSPORT_FACTORS["electricCar"]
            if record.car_type == "electric"
            else TRANSPORT_FACTORS["car"]
        )
        passengers = max(record.car_passengers or 1.0, 1.0)
        one_way += (record.car_km * car_factor) / passengers

    return one_way * ROUND_TRIP_MULTIPLIER


def calculate_accommodation_co2(answers: AnswersInput) -> float:
    """Calculate accommodation emissions for the whole stay.

    Requires both ``days`` and ``accommodation_category``; room sharing and
    green electricity reduce the per-night baseline when answered.
    """

    record = coerce_answers(answers)
    if not record.days or record.accommodation_category is None:
        return 0.0

    base_factor = ACCOMMODATION_FACTORS[record.accommodation_category]
    return (
        record.days
        * base_factor
        * occupancy_factor(record.room_occupancy)
        * electricity_factor(record.electricity)
    )


def calculate_food_co2(answers: AnswersInput) -> float:
    """Calculate food emissions from stay length and meat-eating frequency."""

    record = coerce_answers(answers)
    if not record.days or record.food is None:
        return 0.0
    return record.days * FOOD_FACTORS[record.food]


def parse_distance(value: object) -> float | None:
    """Parse a stored project distance.

    Args:
        value: Raw distance, typically a float or a numeric string.

    Returns:
        The distance in kilometres, or ``None`` when the value is missing,
        not numeric, not strictly positive or above
        :data:`~greendex.factors.MAX_DISTANCE_KM`.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        distance = float(value)
    except (ValueError, OverflowError):
        return None
    if not 0 < distance <= MAX_DISTANCE_KM:
        return None
    return distance


def calculate_activity_co2(activity: ProjectActivity) -> float:
    """Return the emissions of one project activity, ``0.0`` when unusable."""

    distance_km = parse_distance(activity.distance_km)
    if distance_km is None:
        return 0.0
    return distance_km * TRANSPORT_FACTORS[_ACTIVITY_MODES[activity.activity_type]]


def calculate_project_activities_co2(activities: ActivitiesInput) -> float:
    """Calculate the shared baseline emissions of a project's activities.

    Project distances are already aggregate figures: they are neither doubled
    for a return trip nor divided between passengers.

    Args:
        activities: Project activities, or ``None`` for a project without any.

    Returns:
        Kilograms of CO₂. The result does not depend on activity order.
    """

    return math.fsum(
        calculate_activity_co2(activity) for activity in coerce_activities(activities)
    )


def trees_needed(total_co2: float, absorption_kg: float = TREE_ABSORPTION_KG) -> int:
    """Return how many trees offset ``total_co2`` kilograms of CO₂.

    Args:
        total_co2: Emissions to offset in kilograms.
        absorption_kg: CO₂ absorbed by one tree. Defaults to the annual
            absorption used for participant footprints.

    Returns:
        The smallest whole number of trees; ``0`` for zero emissions.
    """

    if absorption_kg <= 0:
        raise ValueError("absorption_kg must be positive")
    return math.ceil(total_co2 / absorption_kg)


def calculate_emissions(
    answers: AnswersInput,
    project_activities: ActivitiesInput = None,
) -> EmissionCalculation:
    """Calculate the full CO₂ breakdown for a participant.

    Args:
        answers: Partial participant answers, as a model or a raw mapping.
            Absent fields contribute nothing.
        project_activities: Optional shared project activities added as a
            baseline to every participant.

    Returns:
        The :class:`~greendex.models.EmissionCalculation` for the inputs.
    """

    record = coerce_answers(answers)

    transport_co2 = calculate_transport_co2(record)
    accommodation_co2 = calculate_accommodation_co2(record)
    food_co2 = calculate_food_co2(record)
    project_activities_co2 = calculate_project_activities_co2(project_activities)

    total_co2 = transport_co2 + accommodation_co2 + food_co2 + project_activities_co2

    return EmissionCalculation(
        transport_co2=transport_co2,
        accommodation_co2=accommodation_co2,
        food_co2=food_co2,
        project_activities_co2=project_activities_co2,
        total_co2=total_co2,
        trees_needed=trees_needed(total_co2),
    )
