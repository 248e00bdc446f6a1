"""Example script walking through a participant questionnaire session."""

from __future__ import annotations

import argparse
import json

from greendex.calculator import calculate_emissions
from greendex.impact import calculate_step_impact, should_show_impact
from greendex.questionnaire import next_step, step_key
from greendex.reporting import classify_impact, log_submission

_SAMPLE_ANSWERS: dict[str, object] = {
    "firstName": "Sam",
    "country": "Belgium",
    "email": "sam@example.org",
    "days": 10,
    "accommodationCategory": "Hostel",
    "roomOccupancy": "3 people",
    "electricity": "could not find out",
    "food": "rarely",
    "flightKm": 0,
    "boatKm": 0,
    "trainKm": 1200,
    "busKm": 80,
    "carKm": 0,
    "age": 22,
    "gender": "Other / Prefer not to say",
}


def main(argv: list[str] | None = None) -> int:
    """Replay a questionnaire one answer at a time."""
    parser = argparse.ArgumentParser(
        description="Replay a sample Greendex questionnaire and print live feedback."
    )
    parser.add_argument(
        "--project-bus-km",
        type=float,
        default=0.0,
        help="Optional shared bus distance configured on the project.",
    )
    args = parser.parse_args(argv)

    activities = (
        [{"activityType": "bus", "distanceKm": args.project_bus_km}]
        if args.project_bus_km > 0
        else []
    )

    answers: dict[str, object] = {}
    step: int | None = 0
    while step is not None:
        key = step_key(step)
        if key is None:
            for name in ("firstName", "country", "email"):
                answers[name] = _SAMPLE_ANSWERS[name]
        else:
            answers[key] = _SAMPLE_ANSWERS.get(key)
            if should_show_impact(answers, key):
                impact = calculate_step_impact(answers, key, activities)
                print(
                    f"{key:>22}: +{impact.impact:7.2f} kg "
                    f"({classify_impact(impact.impact)}), total {impact.new_co2:.2f} kg"
                )
        step = next_step(step, answers)

    emissions = calculate_emissions(answers, activities)
    print(json.dumps(log_submission(answers, emissions)["summary"], indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover - example entry point
    raise SystemExit(main())
