"""Tests for the before/after impact helpers."""

import pytest

from greendex.calculator import calculate_emissions
from greendex.impact import (
    IMPACT_STEPS,
    calculate_step_impact,
    emissions_before_step,
    fields_for_step,
    should_show_impact,
)


@pytest.mark.parametrize("step", ["flightKm", "boatKm", "trainKm", "busKm"])
def test_zero_distance_steps_show_no_impact(step):
    """Answering zero kilometres skips the impact feedback."""
    assert not should_show_impact({step: 0}, step)
    assert not should_show_impact({}, step)
    assert should_show_impact({step: 10}, step)


def test_passengers_impact_requires_car_travel():
    """The passenger step only matters when the participant drove."""
    assert not should_show_impact({"carPassengers": 3, "carKm": 0}, "carPassengers")
    assert should_show_impact({"carPassengers": 3, "carKm": 50}, "carPassengers")


def test_non_impact_steps():
    """Steps outside the impact list never show feedback."""
    assert not should_show_impact({"days": 3}, "days")
    assert not should_show_impact({}, None)
    assert "days" not in IMPACT_STEPS
    assert should_show_impact({"food": "never"}, "food")
    assert should_show_impact({"carKm": 0}, "carKm")


def test_electricity_step_covers_the_whole_stay():
    """The electricity step reports the full accommodation emissions."""
    answers = {
        "days": 7,
        "accommodationCategory": "Hostel",
        "roomOccupancy": "2 people",
        "electricity": "green energy",
        "food": "sometimes",
    }
    impact = calculate_step_impact(answers, "electricity")

    assert fields_for_step("electricity") == (
        "accommodationCategory",
        "roomOccupancy",
        "electricity",
    )
    assert impact.previous_co2 == pytest.approx(28.0)
    assert impact.new_co2 == pytest.approx(37.45)
    assert impact.impact == pytest.approx(9.45)
    assert impact.step_value == "green energy"


def test_single_field_step_impact():
    """Other steps remove only their own answer."""
    answers = {"days": 7, "food": "sometimes", "flightKm": 100}
    impact = calculate_step_impact(answers, "flightKm")

    assert fields_for_step("flightKm") == ("flightKm",)
    assert impact.previous_co2 == pytest.approx(28.0)
    assert impact.impact == pytest.approx(51.0)
    assert impact.step_value == 100.0
    assert impact.trees_needed == 4


def test_project_activities_do_not_change_the_impact(project_activities):
    """Shared activities appear on both sides of the comparison."""
    answers = {"days": 7, "food": "every day"}
    with_activities = calculate_step_impact(answers, "food", project_activities)
    without_activities = calculate_step_impact(answers, "food")

    assert with_activities.impact == pytest.approx(without_activities.impact)
    assert with_activities.new_co2 > without_activities.new_co2


def test_step_impact_to_dict():
    """The dictionary form mirrors the questionnaire's impact payload."""
    payload = calculate_step_impact({"busKm": 100}, "busKm").to_dict()
    assert payload["stepKey"] == "busKm"
    assert payload["previousCO2"] == 0.0
    assert payload["impact"] == pytest.approx(17.8)
    assert payload["treesNeeded"] == 1


def test_emissions_before_step_removes_open_answer():
    """The running total excludes the answer of the current step."""
    answers = {"days": 7, "food": "sometimes", "trainKm": 100}
    before = emissions_before_step(answers, "trainKm")

    assert before.transport_co2 == 0.0
    assert before.food_co2 == pytest.approx(28.0)
    assert emissions_before_step(answers, None) == calculate_emissions(answers)
