"""Step order and navigation rules of the participant questionnaire."""

from __future__ import annotations

from typing import Final

from greendex.calculator import AnswersInput
from greendex.schemas import ParticipantAnswers, coerce_answers

__all__ = [
    "STEP_KEYS",
    "TOTAL_STEPS",
    "can_proceed",
    "display_step",
    "next_step",
    "previous_step",
    "step_key",
]

# Steps 0 and 1 (welcome, participant info) have no single answer field.
STEP_KEYS: Final[tuple[str | None, ...]] = (
    None,
    None,
    "days",
    "accommodationCategory",
    "roomOccupancy",
    "electricity",
    "food",
    "flightKm",
    "boatKm",
    "trainKm",
    "busKm",
    "carKm",
    "carType",
    "carPassengers",
    "age",
    "gender",
)
TOTAL_STEPS: Final[int] = len(STEP_KEYS)

_CAR_DISTANCE_STEP: Final[int] = STEP_KEYS.index("carKm")
_AGE_STEP: Final[int] = STEP_KEYS.index("age")
_DISTANCE_STEPS: Final[frozenset[str]] = frozenset(
    {"flightKm", "boatKm", "trainKm", "busKm", "carKm"}
)
_CHOICE_STEPS: Final[frozenset[str]] = frozenset(
    {"accommodationCategory", "roomOccupancy", "electricity", "food", "carType", "gender"}
)


def step_key(index: int) -> str | None:
    """Return the answer key collected at step ``index``, if any."""

    if 0 <= index < TOTAL_STEPS:
        return STEP_KEYS[index]
    return None


def _skips_car_steps(record: ParticipantAnswers) -> bool:
    return not record.car_km


def next_step(index: int, answers: AnswersInput) -> int | None:
    """Return the step following ``index``.

    The car type and passenger questions are skipped when the participant
    did not travel by car. ``None`` means the questionnaire is complete.
    """

    record = coerce_answers(answers)
    if index == _CAR_DISTANCE_STEP and _skips_car_steps(record):
        return _AGE_STEP
    if index >= TOTAL_STEPS - 1:
        return None
    return index + 1


def previous_step(index: int, answers: AnswersInput) -> int:
    """Return the step before ``index``, mirroring the car-step skip."""

    record = coerce_answers(answers)
    if index == _AGE_STEP and _skips_car_steps(record):
        return _CAR_DISTANCE_STEP
    return max(index - 1, 0)


def display_step(index: int, answers: AnswersInput) -> int:
    """Return the step number shown to the participant.

    When the two car questions were skipped the age step is displayed as
    step 12 so that the numbering stays continuous.
    """

    record = coerce_answers(answers)
    if index == _AGE_STEP and _skips_car_steps(record):
        return _AGE_STEP - 2
    return index


def can_proceed(index: int, answers: AnswersInput) -> bool:
    """Return ``True`` when the answer required by step ``index`` is valid."""

    record = coerce_answers(answers)
    if index == 0:
        return True
    if index == 1:
        return all(
            value is not None and value.strip()
            for value in (record.first_name, record.country, record.email)
        )

    key = step_key(index)
    if key is None:
        return False
    value = record.value_of(key)
    if key in _CHOICE_STEPS:
        return value is not None
    if not isinstance(value, (int, float)):
        return False
    if key in _DISTANCE_STEPS:
        return value >= 0
    if key == "carPassengers":
        return value >= 1
    return value > 0
