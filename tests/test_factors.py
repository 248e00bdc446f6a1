"""Tests pinning the published emission factor tables."""

from greendex.factors import (
    ACCOMMODATION_FACTORS,
    ACCOMMODATION_OPTIONS,
    FOOD_FACTORS,
    OCCUPANCY_FACTORS,
    TRANSPORT_FACTORS,
    TREE_ABSORPTION_KG,
    electricity_factor,
    occupancy_factor,
)


def test_transport_factors():
    """Test transport emission factors."""
    assert TRANSPORT_FACTORS == {
        "flight": 0.255,
        "car": 0.192,
        "boat": 0.115,
        "bus": 0.089,
        "electricCar": 0.053,
        "train": 0.041,
    }


def test_accommodation_factors_cover_all_categories():
    """Every accommodation option has a factor."""
    assert set(ACCOMMODATION_FACTORS) == set(ACCOMMODATION_OPTIONS)
    assert ACCOMMODATION_FACTORS["Camping"] == 1.5
    assert ACCOMMODATION_FACTORS["3★ Hotel"] == 5.0
    assert ACCOMMODATION_FACTORS["5★ Hotel"] == 10.0
    assert ACCOMMODATION_FACTORS["Friends/Family"] == 2.0


def test_food_and_occupancy_factors():
    """Food and room-sharing tables."""
    assert FOOD_FACTORS["never"] == 1.5
    assert FOOD_FACTORS["every day"] == 7.0
    assert OCCUPANCY_FACTORS["4+ people"] == 0.3
    assert TREE_ABSORPTION_KG == 22.0


def test_multiplier_helpers():
    """Unanswered or non-green answers leave emissions unchanged."""
    assert occupancy_factor(None) == 1.0
    assert occupancy_factor("3 people") == 0.4
    assert electricity_factor("green energy") == 0.75
    assert electricity_factor("could not find out") == 1.0
    assert electricity_factor(None) == 1.0
