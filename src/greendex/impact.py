"""Before/after helpers that measure the effect of a single answer.

The calculator has no notion of which answer changed. These helpers run it
twice, once with the answer removed and once with it present, and report the
difference to the questionnaire.
"""

from __future__ import annotations

import logging
from typing import Final

from greendex.calculator import ActivitiesInput, AnswersInput, calculate_emissions
from greendex.models import EmissionCalculation, StepImpact
from greendex.schemas import ParticipantAnswers, coerce_answers

__all__ = [
    "IMPACT_STEPS",
    "calculate_step_impact",
    "emissions_before_step",
    "fields_for_step",
    "should_show_impact",
]

LOGGER = logging.getLogger(__name__)

IMPACT_STEPS: Final[tuple[str, ...]] = (
    "flightKm",
    "boatKm",
    "trainKm",
    "busKm",
    "carKm",
    "carPassengers",
    "electricity",
    "food",
)

_SKIP_WHEN_ZERO: Final[frozenset[str]] = frozenset(
    {"flightKm", "boatKm", "trainKm", "busKm"}
)

# Electricity is the last accommodation question; its impact covers the stay.
_STEP_FIELD_GROUPS: Final[dict[str, tuple[str, ...]]] = {
    "electricity": ("accommodationCategory", "roomOccupancy", "electricity"),
}


def fields_for_step(step_key: str) -> tuple[str, ...]:
    """Return the answers cleared when measuring the impact of ``step_key``."""

    return _STEP_FIELD_GROUPS.get(step_key, (step_key,))


def should_show_impact(answers: AnswersInput, step_key: str | None) -> bool:
    """Decide whether answering ``step_key`` warrants impact feedback.

    Args:
        answers: Answers including the one just given.
        step_key: camelCase key of the answered step, or ``None`` for steps
            without an answer field.

    Returns:
        ``True`` for impact-relevant steps, except zero-distance transport
        answers and passenger counts without any car travel.
    """

    if not step_key or step_key not in IMPACT_STEPS:
        return False

    record = coerce_answers(answers)
    if step_key in _SKIP_WHEN_ZERO and not record.value_of(step_key):
        return False
    if step_key == "carPassengers" and not record.car_km:
        return False
    return True


def calculate_step_impact(
    answers: AnswersInput,
    step_key: str,
    project_activities: ActivitiesInput = None,
) -> StepImpact:
    """Measure how much the answer to ``step_key`` changed the total.

    Args:
        answers: Answers including the one just given.
        step_key: camelCase key (or attribute name) of the answered step.
        project_activities: Optional project activities; they appear on both
            sides of the comparison.

    Returns:
        A :class:`~greendex.models.StepImpact` with the totals before and
        after the answer.
    """

    record = coerce_answers(answers)
    activities = tuple(project_activities) if project_activities is not None else None

    previous = calculate_emissions(record.without(*fields_for_step(step_key)), activities)
    current = calculate_emissions(record, activities)

    impact = StepImpact(
        step_key=step_key,
        step_value=record.value_of(step_key),
        previous_co2=previous.total_co2,
        new_co2=current.total_co2,
    )
    LOGGER.debug("Step %s changed total CO2 by %.3f kg", step_key, impact.impact)
    return impact


def emissions_before_step(
    answers: AnswersInput,
    step_key: str | None,
    project_activities: ActivitiesInput = None,
) -> EmissionCalculation:
    """Return the running breakdown shown while ``step_key`` is still open."""

    record: ParticipantAnswers = coerce_answers(answers)
    if step_key:
        record = record.without(step_key)
    return calculate_emissions(record, project_activities)
