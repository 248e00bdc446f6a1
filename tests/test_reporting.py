"""Tests for submission reporting and impact classification."""

import logging
import math

import pytest

from greendex.calculator import calculate_emissions
from greendex.reporting import build_submission_record, classify_impact, log_submission


def test_build_submission_record(complete_answers):
    """The record bundles answers, results and a display summary."""
    emissions = calculate_emissions(complete_answers)
    record = build_submission_record(complete_answers, emissions)

    assert record["answers"]["firstName"] == "Ana"
    assert record["answers"]["flightKm"] == 500.0
    assert record["emissions"] == emissions.to_dict()
    summary = record["summary"]
    assert summary["treesNeeded"] == 13
    assert summary["totalCO2"] == pytest.approx(267.8625)
    assert summary["breakdown"]["transport"] == pytest.approx(255.0)
    assert summary["breakdown"]["projectActivities"] == 0.0


def test_log_submission_emits_record(caplog, complete_answers):
    """Submissions are logged instead of persisted."""
    emissions = calculate_emissions(complete_answers)
    with caplog.at_level(logging.INFO, logger="greendex.reporting"):
        record = log_submission(complete_answers, emissions)

    assert "Participant questionnaire complete" in caplog.text
    assert caplog.records[-1].submission == record


@pytest.mark.parametrize(
    ("impact", "expected"),
    [
        (-3.0, "low"),
        (0.5, "low"),
        (1.0, "moderate"),
        (19.9, "moderate"),
        (20.0, "high"),
        (99.9, "high"),
        (100.0, "severe"),
        (math.inf, "severe"),
    ],
)
def test_classify_impact(impact, expected):
    """Severity thresholds at 1, 20 and 100 kg."""
    assert classify_impact(impact) == expected


def test_classify_impact_rejects_nan():
    """NaN impacts are a programming error."""
    with pytest.raises(ValueError, match="must be a number"):
        classify_impact(math.nan)
