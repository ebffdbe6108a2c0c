"""Tests for the time-of-day environmental context."""

import pytest

from query_footprint.estimation.context import (
    DEFAULT_TIME_WINDOWS,
    TimeWindow,
    environmental_context,
)


@pytest.mark.parametrize("hour", [10, 13, 16])
def test_solar_peak_hours(hour):
    context = environmental_context(hour)
    assert context.label == "Lower (Solar Peak)"
    assert context.multiplier == 0.8
    assert context.description == "Solar energy is more available now"


@pytest.mark.parametrize("hour", [18, 20, 22])
def test_peak_demand_hours(hour):
    context = environmental_context(hour)
    assert context.label == "Higher (Peak Demand)"
    assert context.multiplier == 1.3
    assert context.description == "Peak energy demand period"


@pytest.mark.parametrize("hour", [0, 5, 9, 17, 23])
def test_other_hours_are_medium(hour):
    context = environmental_context(hour)
    assert context.label == "Medium"
    assert context.multiplier == 1.0
    assert context.description == "Standard grid mix"


@pytest.mark.parametrize("hour", [-1, 24, 99, -500])
def test_out_of_range_hours_fall_back_to_medium(hour):
    context = environmental_context(hour)
    assert context.label == "Medium"
    assert context.multiplier == 1.0
    assert context.hour == hour


def test_every_hour_maps_to_exactly_one_bucket():
    multipliers = [environmental_context(hour).multiplier for hour in range(24)]
    assert multipliers.count(0.8) == 7
    assert multipliers.count(1.3) == 5
    assert multipliers.count(1.0) == 12


def test_default_windows_do_not_overlap():
    solar, demand = DEFAULT_TIME_WINDOWS
    assert not solar.overlaps(demand)


def test_custom_windows():
    windows = (
        TimeWindow(
            start_hour=0,
            end_hour=3,
            label="Lower (Solar Peak)",
            multiplier=0.5,
            description="Night surplus",
        ),
    )
    assert environmental_context(2, windows).multiplier == 0.5
    assert environmental_context(4, windows).label == "Medium"
