"""Emission factor tables for the Greendex participant questionnaire.

Every table in this module is part of the public contract of the calculator:
values are kilograms of CO₂ and are never adjusted at runtime. Option sets
are expressed as ``Literal`` aliases so that pydantic can validate them and
type checkers can flag unhandled labels.
"""

from __future__ import annotations

from typing import Final, Literal, get_args

__all__ = [
    "ACCOMMODATION_FACTORS",
    "ACCOMMODATION_OPTIONS",
    "ACTIVITY_TYPE_OPTIONS",
    "AccommodationCategory",
    "ActivityType",
    "CAR_TYPE_OPTIONS",
    "CONVENTIONAL_CAR_LABEL",
    "CarType",
    "ELECTRICITY_OPTIONS",
    "ElectricityType",
    "FOOD_FACTORS",
    "FOOD_OPTIONS",
    "FoodFrequency",
    "GENDER_OPTIONS",
    "GREEN_ENERGY_FACTOR",
    "Gender",
    "LIFETIME_TREE_ABSORPTION_KG",
    "MAX_DISTANCE_KM",
    "MAX_STAY_DAYS",
    "OCCUPANCY_FACTORS",
    "ROOM_OCCUPANCY_OPTIONS",
    "ROUND_TRIP_MULTIPLIER",
    "RoomOccupancy",
    "TRANSPORT_FACTORS",
    "TREE_ABSORPTION_KG",
    "TransportMode",
    "electricity_factor",
    "occupancy_factor",
]

AccommodationCategory = Literal[
    "Camping",
    "Hostel",
    "3★ Hotel",
    "4★ Hotel",
    "5★ Hotel",
    "Apartment",
    "Friends/Family",
]
RoomOccupancy = Literal["alone", "2 people", "3 people", "4+ people"]
ElectricityType = Literal["green energy", "conventional energy", "could not find out"]
FoodFrequency = Literal["never", "rarely", "sometimes", "almost every day", "every day"]
CarType = Literal["conventional", "electric"]
Gender = Literal["Female", "Male", "Other / Prefer not to say"]
ActivityType = Literal["boat", "bus", "train", "car"]
TransportMode = Literal["flight", "car", "boat", "bus", "electricCar", "train"]

ACCOMMODATION_OPTIONS: Final[tuple[AccommodationCategory, ...]] = get_args(
    AccommodationCategory
)
ROOM_OCCUPANCY_OPTIONS: Final[tuple[RoomOccupancy, ...]] = get_args(RoomOccupancy)
ELECTRICITY_OPTIONS: Final[tuple[ElectricityType, ...]] = get_args(ElectricityType)
FOOD_OPTIONS: Final[tuple[FoodFrequency, ...]] = get_args(FoodFrequency)
CAR_TYPE_OPTIONS: Final[tuple[CarType, ...]] = get_args(CarType)
GENDER_OPTIONS: Final[tuple[Gender, ...]] = get_args(Gender)
ACTIVITY_TYPE_OPTIONS: Final[tuple[ActivityType, ...]] = get_args(ActivityType)

# Label shown by the questionnaire for combustion cars.
CONVENTIONAL_CAR_LABEL: Final[str] = "conventional (diesel, petrol, gas…)"

# kg CO₂ per person per km, one way.
TRANSPORT_FACTORS: Final[dict[TransportMode, float]] = {
    "flight": 0.255,
    "car": 0.192,
    "boat": 0.115,
    "bus": 0.089,
    "electricCar": 0.053,
    "train": 0.041,
}

# kg CO₂ per night, single occupancy, conventional energy.
ACCOMMODATION_FACTORS: Final[dict[AccommodationCategory, float]] = {
    "Camping": 1.5,
    "Hostel": 3.0,
    "3★ Hotel": 5.0,
    "4★ Hotel": 7.5,
    "5★ Hotel": 10.0,
    "Apartment": 4.0,
    "Friends/Family": 2.0,
}

# kg CO₂ per day by meat-eating frequency.
FOOD_FACTORS: Final[dict[FoodFrequency, float]] = {
    "never": 1.5,
    "rarely": 2.5,
    "sometimes": 4.0,
    "almost every day": 5.5,
    "every day": 7.0,
}

OCCUPANCY_FACTORS: Final[dict[RoomOccupancy, float]] = {
    "alone": 1.0,
    "2 people": 0.6,
    "3 people": 0.4,
    "4+ people": 0.3,
}

GREEN_ENERGY_FACTOR: Final[float] = 0.75
ROUND_TRIP_MULTIPLIER: Final[float] = 2.0

# Annual absorption of one tree, used for per-participant offsets.
TREE_ABSORPTION_KG: Final[float] = 22.0
# Lifetime absorption of one tree (~45 years), used for project-wide totals.
LIFETIME_TREE_ABSORPTION_KG: Final[float] = 1000.0

# Upper bounds for numeric answers; larger values are treated as unanswered
# so that totals stay finite.
MAX_DISTANCE_KM: Final[float] = 1_000_000.0
MAX_STAY_DAYS: Final[float] = 36_500.0


def occupancy_factor(room_occupancy: RoomOccupancy | None) -> float:
    """Return the sharing discount for a room, ``1.0`` when unanswered."""

    if room_occupancy is None:
        return 1.0
    return OCCUPANCY_FACTORS.get(room_occupancy, 1.0)


def electricity_factor(electricity: ElectricityType | None) -> float:
    """Return the electricity multiplier; only green energy is discounted."""

    return GREEN_ENERGY_FACTOR if electricity == "green energy" else 1.0
