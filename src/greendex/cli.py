"""Command-line utilities for greendex."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from greendex.aggregators import rank_participants, summarize_participants
from greendex.calculator import calculate_emissions
from greendex.impact import calculate_step_impact, should_show_impact
from greendex.logging_pipeline import configure_logging, shutdown_listeners
from greendex.reporting import classify_impact, log_submission
from greendex.schemas import ParticipantAnswers, ProjectActivity
from greendex.settings import GreendexSettings, get_settings
from greendex.sources import (
    load_answers,
    load_document,
    load_participants,
    load_project_activities,
    parse_document,
)

LOGGER = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _read_stdin() -> str | None:
    """Read a JSON payload from stdin if available."""
    try:
        if sys.stdin and not sys.stdin.isatty():
            return sys.stdin.read()
    except OSError as e:
        print(f"Error reading stdin: {e}", file=sys.stderr)
    return None


def _load_answers(path: str | None) -> ParticipantAnswers:
    """Load answers from a file or stdin."""
    if path:
        return load_answers(load_document(path))
    stdin_payload = _read_stdin()
    if stdin_payload:
        return load_answers(parse_document(stdin_payload))
    raise ValueError("No input provided. Use --answers or pipe JSON via stdin.")


def _load_activities(
    path: str | None, settings: GreendexSettings
) -> tuple[ProjectActivity, ...]:
    """Load project activities from ``path`` or the configured default file."""
    source = path or settings.activities_file
    if not source:
        return ()
    return load_project_activities(load_document(source))


def _emit(payload: object) -> None:
    print(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))


def _run_calculate(args: argparse.Namespace, settings: GreendexSettings) -> int:
    answers = _load_answers(args.answers)
    activities = _load_activities(args.activities, settings)
    emissions = calculate_emissions(answers, activities)
    LOGGER.debug("Calculated emissions: %s", emissions)
    _emit(emissions.to_dict())
    return 0


def _run_impact(args: argparse.Namespace, settings: GreendexSettings) -> int:
    if ParticipantAnswers.field_name(args.step) is None:
        raise ValueError(f"Unknown questionnaire step: {args.step}")
    answers = _load_answers(args.answers)
    activities = _load_activities(args.activities, settings)
    impact = calculate_step_impact(answers, args.step, activities)
    payload = impact.to_dict()
    payload["showImpact"] = should_show_impact(answers, args.step)
    payload["severity"] = classify_impact(impact.impact)
    _emit(payload)
    return 0


def _run_stats(args: argparse.Namespace, settings: GreendexSettings) -> int:
    participants = load_participants(load_document(args.participants))
    leaderboard = [
        {
            "rank": entry.rank,
            "id": entry.participant.id,
            "name": entry.participant.name,
            "country": entry.participant.country,
            "totalCO2": entry.total_co2,
        }
        for entry in rank_participants(participants)
    ]
    _emit({"stats": summarize_participants(participants), "leaderboard": leaderboard})
    return 0


def _run_submit(args: argparse.Namespace, settings: GreendexSettings) -> int:
    answers = _load_answers(args.answers)
    activities = _load_activities(args.activities, settings)
    emissions = calculate_emissions(answers, activities)
    _emit(log_submission(answers, emissions))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="greendex",
        description="Calculate Greendex CO2 footprints for project participants.",
    )
    parser.add_argument("--log-level", choices=_LOG_LEVELS, help="Logging level.")
    parser.add_argument(
        "--log-format", choices=("json", "text"), help="Log record format."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_answer_options(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--answers",
            "-a",
            help="Path to a JSON/YAML answers file. If omitted, reads from stdin.",
        )
        subparser.add_argument(
            "--activities",
            help="Path to a JSON/YAML file with the project's activities.",
        )

    calculate = subparsers.add_parser(
        "calculate", help="Print the emissions breakdown for a set of answers."
    )
    add_answer_options(calculate)
    calculate.set_defaults(handler=_run_calculate)

    impact = subparsers.add_parser(
        "impact", help="Print the CO2 added by answering one questionnaire step."
    )
    impact.add_argument("--step", "-s", required=True, help="Step key, e.g. food.")
    add_answer_options(impact)
    impact.set_defaults(handler=_run_impact)

    stats = subparsers.add_parser(
        "stats", help="Summarise participant travel for a project."
    )
    stats.add_argument(
        "--participants",
        "-p",
        required=True,
        help="Path to a JSON/YAML file listing participants and activities.",
    )
    stats.set_defaults(handler=_run_stats)

    submit = subparsers.add_parser(
        "submit", help="Log and print the final questionnaire submission."
    )
    add_answer_options(submit)
    submit.set_defaults(handler=_run_submit)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the greendex command line."""
    parser = _build_parser()

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    settings = get_settings()
    overrides: dict[str, object] = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.log_format:
        overrides["log_format"] = args.log_format
    if overrides:
        settings = settings.model_copy(update=overrides)

    package_logger = logging.getLogger("greendex")
    listener = configure_logging(package_logger, settings)
    try:
        return int(args.handler(args, settings))
    except (ValueError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        shutdown_listeners([listener], package_logger)


if __name__ == "__main__":
    raise SystemExit(main())
