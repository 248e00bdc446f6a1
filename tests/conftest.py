"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)


@pytest.fixture
def complete_answers() -> dict[str, object]:
    """Answers of a participant who finished the questionnaire."""

    return {
        "firstName": "Ana",
        "country": "Portugal",
        "email": "ana@example.org",
        "days": 7,
        "accommodationCategory": "Camping",
        "roomOccupancy": "4+ people",
        "electricity": "green energy",
        "food": "never",
        "flightKm": 500,
        "boatKm": 0,
        "trainKm": 0,
        "busKm": 0,
        "carKm": 0,
        "carPassengers": 1,
        "age": 24,
        "gender": "Female",
    }


@pytest.fixture
def project_activities() -> list[dict[str, object]]:
    """Project activities as stored by the project database."""

    return [
        {"id": "a1", "activityType": "bus", "distanceKm": "120.5"},
        {"id": "a2", "activityType": "train", "distanceKm": 300},
        {"id": "a3", "activityType": "car", "distanceKm": "40"},
        {"id": "a4", "activityType": "boat", "distanceKm": "not a number"},
    ]
