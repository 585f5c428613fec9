"""Tests for the shared tool operations."""

from __future__ import annotations

import random

from ggvercel.tools.operations import (
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
    WEATHER_CONDITIONS,
    get_weather,
    list_models,
    roll_dice,
)


class TestRollDice:
    def test_value_within_bounds_for_every_valid_side_count(self) -> None:
        rng = random.Random(1234)
        for sides in range(2, 101):
            for _ in range(20):
                assert 1 <= roll_dice(sides, rng) <= sides

    def test_reaches_both_ends(self) -> None:
        rng = random.Random(0)
        seen = {roll_dice(2, rng) for _ in range(200)}
        assert seen == {1, 2}

    def test_default_rng(self) -> None:
        assert 1 <= roll_dice(6) <= 6


class TestGetWeather:
    def test_temperature_and_condition_bounds(self) -> None:
        rng = random.Random(99)
        for _ in range(500):
            weather = get_weather("Berlin", rng)
            assert weather.location == "Berlin"
            assert weather.condition in WEATHER_CONDITIONS
            assert isinstance(weather.temperature, int)
            assert MIN_TEMPERATURE <= weather.temperature <= MAX_TEMPERATURE

    def test_five_conditions(self) -> None:
        assert len(WEATHER_CONDITIONS) == 5


class TestListModels:
    def test_featured_only(self, catalog) -> None:
        assert len(list_models(catalog, featured_only=True)) == 6
        assert len(list_models(catalog)) == 9
