"""Reporting helpers separate from the core calculation."""

from __future__ import annotations

import logging
import math
from typing import Literal

from greendex.calculator import AnswersInput
from greendex.models import EmissionCalculation
from greendex.schemas import coerce_answers

__all__ = [
    "ImpactSeverity",
    "build_submission_record",
    "classify_impact",
    "log_submission",
]

LOGGER = logging.getLogger(__name__)

ImpactSeverity = Literal["low", "moderate", "high", "severe"]


def build_submission_record(
    answers: AnswersInput, emissions: EmissionCalculation
) -> dict[str, object]:
    """Combine the final answers and their results into one payload.

    Args:
        answers: Completed questionnaire answers.
        emissions: Result of :func:`greendex.calculator.calculate_emissions`
            for those answers.

    Returns:
        JSON-ready mapping with the answers, the full calculation and a short
        summary for display.
    """

    record = coerce_answers(answers)
    return {
        "answers": record.model_dump_json_ready(),
        "emissions": emissions.to_dict(),
        "summary": {
            "totalCO2": emissions.total_co2,
            "treesNeeded": emissions.trees_needed,
            "breakdown": dict(emissions.breakdown),
        },
    }


def log_submission(
    answers: AnswersInput, emissions: EmissionCalculation
) -> dict[str, object]:
    """Log a completed questionnaire.

    Submissions are not stored; the record is emitted on the module logger
    and returned to the caller.
    """

    submission = build_submission_record(answers, emissions)
    LOGGER.info(
        "Participant questionnaire complete: %.3f kg CO2, %d trees",
        emissions.total_co2,
        emissions.trees_needed,
        extra={"submission": submission},
    )
    return submission


def classify_impact(impact_kg: float) -> ImpactSeverity:
    """Classify the CO₂ added by a single answer.

    Args:
        impact_kg: Change in total emissions in kilograms.

    Returns:
        ``"low"`` below 1 kg, ``"moderate"`` below 20 kg, ``"high"`` below
        100 kg and ``"severe"`` otherwise.

    Raises:
        ValueError: If ``impact_kg`` is NaN.
    """

    if math.isnan(impact_kg):
        raise ValueError("impact_kg must be a number")
    if impact_kg < 1:
        return "low"
    if impact_kg < 20:
        return "moderate"
    if impact_kg < 100:
        return "high"
    return "severe"
