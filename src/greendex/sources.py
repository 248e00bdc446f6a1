"""Loading answers, activities and participants from JSON or YAML files."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import cast

import yaml

from greendex.aggregators import ParticipantTotals
from greendex.schemas import (
    ParticipantAnswers,
    ProjectActivity,
    coerce_activities,
    coerce_answers,
)

__all__ = [
    "load_answers",
    "load_document",
    "load_participants",
    "load_project_activities",
    "parse_document",
]

_YAML_SUFFIXES: frozenset[str] = frozenset({".yml", ".yaml"})


def parse_document(text: str, *, yaml_syntax: bool = False) -> object:
    """Parse a JSON (or YAML) document.

    Args:
        text: Raw document text.
        yaml_syntax: Parse with :func:`yaml.safe_load` instead of JSON.

    Returns:
        The decoded Python object.

    Raises:
        ValueError: If the document cannot be parsed.
    """

    if yaml_syntax:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML document: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON document: {exc.msg}") from exc


def load_document(path: str | Path) -> object:
    """Load a JSON or YAML file, choosing the parser by suffix.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file cannot be parsed.
    """

    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8")
    return parse_document(text, yaml_syntax=file_path.suffix.lower() in _YAML_SUFFIXES)


def _normalize_mapping(value: object, *, what: str) -> dict[str, object]:
    """Restrict a decoded object to a ``dict[str, object]``.

    Raises:
        ValueError: If ``value`` is not a mapping.
    """

    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be an object at the top level.")
    value_map = cast(Mapping[object, object], value)
    return {str(key): item for key, item in value_map.items()}


def _extract_list(value: object, key: str, *, what: str) -> list[object]:
    """Accept either a bare list or an object wrapping the list under ``key``."""

    if isinstance(value, Mapping):
        value = value.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a list or an object with a '{key}' list.")
    return cast(list[object], value)


def load_answers(document: object) -> ParticipantAnswers:
    """Build lenient :class:`ParticipantAnswers` from a decoded document."""

    return coerce_answers(_normalize_mapping(document, what="Answers"))


def load_project_activities(document: object) -> tuple[ProjectActivity, ...]:
    """Build project activities from a decoded document.

    Entries that are not usable activities are skipped.
    """

    items = _extract_list(document, "activities", what="Project activities")
    return coerce_activities(
        cast(Mapping[str, object], item) for item in items if isinstance(item, Mapping)
    )


def load_participants(document: object) -> list[ParticipantTotals]:
    """Build participants from a decoded document.

    Raises:
        ValueError: If an entry is not an object or lacks ``id``/``name``.
    """

    items = _extract_list(document, "participants", what="Participants")
    participants: list[ParticipantTotals] = []
    for item in items:
        participants.append(
            ParticipantTotals.from_mapping(_normalize_mapping(item, what="Participant"))
        )
    return participants
