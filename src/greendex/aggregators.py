"""Aggregation helpers for project-wide Greendex statistics.

The utilities in this module favour deterministic aggregation and predictable
output shapes: every activity type is always present in a breakdown, and
empty inputs produce zeroed summaries rather than errors.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TypedDict

from greendex.calculator import calculate_activity_co2, parse_distance, trees_needed
from greendex.factors import (
    ACTIVITY_TYPE_OPTIONS,
    LIFETIME_TREE_ABSORPTION_KG,
    ActivityType,
)
from greendex.schemas import ProjectActivity, coerce_activities

__all__ = [
    "ParticipantTotals",
    "ProjectStats",
    "RankedParticipant",
    "TypeBreakdown",
    "breakdown_by_type",
    "rank_participants",
    "summarize_participants",
]


class TypeBreakdown(TypedDict):
    """Distance, emissions and trip count for one activity type."""

    distance: float
    co2: float
    count: int


class ProjectStats(TypedDict):
    """Schema for the live project overview."""

    total_participants: int
    total_co2: float
    average_co2: float
    breakdown_by_type: dict[ActivityType, TypeBreakdown]
    trees_needed: int


@dataclass(frozen=True, slots=True)
class ParticipantTotals:
    """Travel logged by one participant of a project."""

    id: str
    name: str
    country: str | None = None
    activities: tuple[ProjectActivity, ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> ParticipantTotals:
        """Build a participant from a raw mapping.

        Args:
            data: Mapping with ``id``, ``name``, optional ``country`` and an
                optional ``activities`` list of activity mappings.

        Returns:
            The parsed participant. Unusable activities are dropped.

        Raises:
            ValueError: If ``id`` or ``name`` is missing.
        """

        identifier = data.get("id")
        name = data.get("name")
        if identifier is None or name is None:
            raise ValueError("Participant entries require 'id' and 'name'.")
        country = data.get("country")
        raw_activities = data.get("activities")
        activities = (
            coerce_activities(raw_activities)
            if isinstance(raw_activities, list)
            else ()
        )
        return cls(
            id=str(identifier),
            name=str(name),
            country=str(country) if country is not None else None,
            activities=activities,
        )

    @property
    def total_co2(self) -> float:
        return math.fsum(calculate_activity_co2(item) for item in self.activities)


@dataclass(frozen=True, slots=True)
class RankedParticipant:
    """Leaderboard entry; rank 1 has the lowest footprint."""

    rank: int
    participant: ParticipantTotals
    total_co2: float


def breakdown_by_type(
    activities: Iterable[ProjectActivity | Mapping[str, object]],
) -> dict[ActivityType, TypeBreakdown]:
    """Group activities by transport type.

    Args:
        activities: Activities to aggregate. Entries whose distance cannot be
            used are ignored, as in the emissions calculation.

    Returns:
        Mapping containing every activity type, including unused ones.
    """

    summary: dict[ActivityType, TypeBreakdown] = {
        activity_type: TypeBreakdown(distance=0.0, co2=0.0, count=0)
        for activity_type in ACTIVITY_TYPE_OPTIONS
    }
    for activity in coerce_activities(activities):
        distance_km = parse_distance(activity.distance_km)
        if distance_km is None:
            continue
        bucket = summary[activity.activity_type]
        bucket["distance"] += distance_km
        bucket["co2"] += calculate_activity_co2(activity)
        bucket["count"] += 1
    return summary


def summarize_participants(participants: Iterable[ParticipantTotals]) -> ProjectStats:
    """Summarise the travel of all participants of a project.

    Args:
        participants: Participants with their logged activities.

    Returns:
        :class:`ProjectStats` with totals, the per-participant average, a
        per-type breakdown and the trees needed over a tree's lifetime.
    """

    items = list(participants)
    totals = [participant.total_co2 for participant in items]
    total_co2 = math.fsum(totals)
    average_co2 = total_co2 / len(items) if items else 0.0

    return ProjectStats(
        total_participants=len(items),
        total_co2=total_co2,
        average_co2=average_co2,
        breakdown_by_type=breakdown_by_type(
            activity for participant in items for activity in participant.activities
        ),
        trees_needed=trees_needed(total_co2, LIFETIME_TREE_ABSORPTION_KG),
    )


def rank_participants(
    participants: Iterable[ParticipantTotals],
) -> list[RankedParticipant]:
    """Order participants from lowest to highest footprint.

    Ties keep their input order.
    """

    scored = [(participant.total_co2, participant) for participant in participants]
    scored.sort(key=lambda item: item[0])
    return [
        RankedParticipant(rank=index, participant=participant, total_co2=total)
        for index, (total, participant) in enumerate(scored, start=1)
    ]
