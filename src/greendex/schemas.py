"""Pydantic models describing the calculator inputs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from greendex.factors import (
    CONVENTIONAL_CAR_LABEL,
    MAX_DISTANCE_KM,
    MAX_STAY_DAYS,
    AccommodationCategory,
    ActivityType,
    CarType,
    ElectricityType,
    FoodFrequency,
    Gender,
    RoomOccupancy,
)

__all__ = [
    "ParticipantAnswers",
    "ProjectActivity",
    "coerce_activities",
    "coerce_answers",
]

LOGGER = logging.getLogger(__name__)


class ParticipantAnswers(BaseModel):
    """Partial questionnaire answers of a single participant.

    Every field is optional because the questionnaire fills the record one
    step at a time. Fields accept both their snake_case name and the
    camelCase key used by the questionnaire front end.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    first_name: str | None = Field(default=None, alias="firstName")
    country: str | None = Field(default=None, alias="country")
    email: str | None = Field(default=None, alias="email")

    days: float | None = Field(
        default=None,
        ge=0.0,
        le=MAX_STAY_DAYS,
        allow_inf_nan=False,
        alias="days",
        description="Length of the stay in nights.",
    )
    accommodation_category: AccommodationCategory | None = Field(
        default=None, alias="accommodationCategory"
    )
    room_occupancy: RoomOccupancy | None = Field(default=None, alias="roomOccupancy")
    electricity: ElectricityType | None = Field(default=None, alias="electricity")
    food: FoodFrequency | None = Field(
        default=None,
        alias="food",
        description="How often the participant eats meat.",
    )

    flight_km: float | None = Field(
        default=None,
        ge=0.0,
        le=MAX_DISTANCE_KM,
        allow_inf_nan=False,
        alias="flightKm",
    )
    boat_km: float | None = Field(
        default=None,
        ge=0.0,
        le=MAX_DISTANCE_KM,
        allow_inf_nan=False,
        alias="boatKm",
    )
    train_km: float | None = Field(
        default=None,
        ge=0.0,
        le=MAX_DISTANCE_KM,
        allow_inf_nan=False,
        alias="trainKm",
    )
    bus_km: float | None = Field(
        default=None,
        ge=0.0,
        le=MAX_DISTANCE_KM,
        allow_inf_nan=False,
        alias="busKm",
    )
    car_km: float | None = Field(
        default=None,
        ge=0.0,
        le=MAX_DISTANCE_KM,
        allow_inf_nan=False,
        alias="carKm",
    )
    car_type: CarType | None = Field(default=None, alias="carType")
    car_passengers: float | None = Field(
        default=None,
        ge=1.0,
        allow_inf_nan=False,
        alias="carPassengers",
        description="People sharing the car, the participant included.",
    )

    age: int | None = Field(default=None, ge=0, alias="age")
    gender: Gender | None = Field(default=None, alias="gender")

    @field_validator("car_type", mode="before")
    @classmethod
    def _normalise_car_type(cls, value: object) -> object:
        """Map the questionnaire's long combustion label to ``conventional``."""

        if value == CONVENTIONAL_CAR_LABEL:
            return "conventional"
        return value

    @classmethod
    def field_name(cls, key: str) -> str | None:
        """Resolve ``key`` (attribute name or alias) to the attribute name."""

        if key in cls.model_fields:
            return key
        for name, info in cls.model_fields.items():
            if info.alias == key:
                return name
        return None

    def without(self, *keys: str) -> ParticipantAnswers:
        """Return a copy with the given answers cleared.

        Args:
            keys: Attribute names or camelCase aliases. Unknown keys are
                ignored.

        Returns:
            A new record; the original is left untouched.
        """

        update: dict[str, object] = {}
        for key in keys:
            name = self.field_name(key)
            if name is not None:
                update[name] = None
        if not update:
            return self
        return self.model_copy(update=update)

    def value_of(self, key: str) -> object:
        """Return the answer stored under an attribute name or alias."""

        name = self.field_name(key)
        if name is None:
            return None
        return getattr(self, name)

    def model_dump_json_ready(self) -> dict[str, object]:
        """Return the answered fields keyed by their camelCase aliases."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ProjectActivity(BaseModel):
    """Shared travel leg configured on a project.

    ``distance_km`` is kept as received because project records store it as a
    numeric string; the calculator parses it and skips unusable values.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str | int | None = Field(default=None, alias="id")
    activity_type: ActivityType = Field(..., alias="activityType")
    distance_km: float | str | None = Field(default=None, alias="distanceKm")

    def model_dump_json_ready(self) -> dict[str, object]:
        """Return a JSON-serialisable payload keyed by camelCase aliases."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def coerce_answers(
    value: ParticipantAnswers | Mapping[str, object] | None,
) -> ParticipantAnswers:
    """Build answers from a raw mapping, dropping fields that fail validation.

    Args:
        value: Existing answers, a raw mapping using either key style, or
            ``None``.

    Returns:
        A :class:`ParticipantAnswers` instance. Invalid fields are logged at
        debug level and treated as unanswered.
    """

    if value is None:
        return ParticipantAnswers()
    if isinstance(value, ParticipantAnswers):
        return value

    raw = {str(key): item for key, item in value.items()}
    try:
        return ParticipantAnswers.model_validate(raw)
    except ValidationError as exc:
        rejected: set[str] = set()
        for error in exc.errors():
            if not error["loc"]:
                continue
            name = ParticipantAnswers.field_name(str(error["loc"][0]))
            if name is not None:
                rejected.add(name)
        LOGGER.debug("Ignoring invalid answers: %s", sorted(rejected))
        cleaned = {
            key: item
            for key, item in raw.items()
            if ParticipantAnswers.field_name(key) not in rejected
        }
        return ParticipantAnswers.model_validate(cleaned)


def coerce_activities(
    activities: Iterable[ProjectActivity | Mapping[str, object]] | None,
) -> tuple[ProjectActivity, ...]:
    """Validate project activities, skipping entries that cannot be used.

    Args:
        activities: Activity models or raw mappings, or ``None``.

    Returns:
        Tuple of validated activities in their original order.
    """

    if activities is None:
        return ()

    validated: list[ProjectActivity] = []
    for index, item in enumerate(activities):
        if isinstance(item, ProjectActivity):
            validated.append(item)
            continue
        if not isinstance(item, Mapping):
            LOGGER.debug("Skipping project activity %d: not a mapping", index)
            continue
        try:
            validated.append(ProjectActivity.model_validate(dict(item)))
        except ValidationError as exc:
            LOGGER.debug(
                "Skipping project activity %d: %d validation error(s)",
                index,
                exc.error_count(),
            )
    return tuple(validated)
