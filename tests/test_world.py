"""Tests for the world layer: locations, field buffers and weather."""

from __future__ import annotations

import numpy as np
import pytest

from sealife.species.descriptors import (
    ALGAE,
    BARRACUDA,
    GOLDFISH,
    PARROTFISH,
    SHARK,
    TUNA,
)
from sealife.species.organism import Animal, Plant
from sealife.world.field import Field
from sealife.world.location import Location
from sealife.world.weather import Condition, Weather


def _animal(species, row, col, **kwargs) -> Animal:
    return Animal(species=species, location=Location(row, col), **kwargs)


class TestLocation:
    """Location value semantics."""

    def test_equal_by_value(self) -> None:
        assert Location(2, 3) == Location(2, 3)
        assert hash(Location(2, 3)) == hash(Location(2, 3))

    def test_offset(self) -> None:
        assert Location(2, 3).offset(-1, 1) == Location(1, 4)

    def test_frozen(self) -> None:
        loc = Location(0, 0)
        with pytest.raises(AttributeError):
            loc.row = 5  # type: ignore[misc]


class TestFieldPlacement:
    """Placing, evicting and looking up organisms."""

    def test_new_field_is_empty(self, small_field: Field) -> None:
        assert small_field.organisms == []
        assert small_field.get_organism_at(Location(3, 3)) is None

    def test_place_and_get(self, small_field: Field) -> None:
        fish = _animal(TUNA, 1, 2)
        small_field.place_organism(fish, Location(1, 2))
        assert small_field.get_organism_at(Location(1, 2)) is fish
        assert small_field.organisms == [fish]

    def test_place_evicts_previous_occupant(self, small_field: Field) -> None:
        first = _animal(TUNA, 1, 1)
        second = _animal(SHARK, 1, 1)
        small_field.place_organism(first, Location(1, 1))
        small_field.place_organism(second, Location(1, 1))
        assert small_field.get_organism_at(Location(1, 1)) is second
        assert small_field.organisms == [second]

    def test_out_of_bounds_raises(self, small_field: Field) -> None:
        with pytest.raises(IndexError):
            small_field.get_organism_at(Location(8, 0))
        with pytest.raises(IndexError):
            small_field.get_organism_at(Location(0, -1))

    def test_dead_occupant_counts_as_free(self, small_field: Field) -> None:
        fish = _animal(TUNA, 0, 0)
        small_field.place_organism(fish, Location(0, 0))
        assert not small_field.is_free(Location(0, 0))
        fish.set_dead()
        assert small_field.is_free(Location(0, 0))

    def test_clear(self, small_field: Field) -> None:
        small_field.place_organism(_animal(TUNA, 0, 0), Location(0, 0))
        small_field.clear()
        assert small_field.organisms == []
        assert small_field.get_organism_at(Location(0, 0)) is None


class TestAdjacency:
    """Shuffled Moore neighbourhoods."""

    def test_interior_has_eight_neighbours(self, small_field: Field) -> None:
        centre = Location(4, 4)
        adjacent = small_field.get_adjacent_locations(centre)
        assert len(adjacent) == 8
        assert centre not in adjacent
        for loc in adjacent:
            assert abs(loc.row - 4) <= 1 and abs(loc.col - 4) <= 1

    def test_corner_has_three_neighbours(self, small_field: Field) -> None:
        adjacent = small_field.get_adjacent_locations(Location(0, 0))
        assert set(adjacent) == {Location(0, 1), Location(1, 0), Location(1, 1)}

    def test_edge_has_five_neighbours(self, small_field: Field) -> None:
        assert len(small_field.get_adjacent_locations(Location(0, 4))) == 5

    def test_shuffle_is_reproducible_from_seed(self) -> None:
        a = Field(depth=5, width=5, rng=np.random.default_rng(seed=1))
        b = Field(depth=5, width=5, rng=np.random.default_rng(seed=1))
        for _ in range(5):
            assert a.get_adjacent_locations(
                Location(2, 2)
            ) == b.get_adjacent_locations(Location(2, 2))

    def test_order_varies_between_calls(self, small_field: Field) -> None:
        orders = {
            tuple(small_field.get_adjacent_locations(Location(4, 4)))
            for _ in range(20)
        }
        assert len(orders) > 1

    def test_free_adjacent_excludes_live_occupants(self, small_field: Field) -> None:
        small_field.place_organism(_animal(TUNA, 3, 3), Location(3, 3))
        dead = _animal(TUNA, 3, 4)
        small_field.place_organism(dead, Location(3, 4))
        dead.set_dead()
        free = small_field.get_free_adjacent_locations(Location(4, 4))
        assert Location(3, 3) not in free
        assert Location(3, 4) in free
        assert len(free) == 7

    def test_free_locations_row_major(self) -> None:
        field = Field(depth=2, width=2, rng=np.random.default_rng(0))
        field.place_organism(_animal(TUNA, 0, 1), Location(0, 1))
        assert field.get_free_locations() == [
            Location(0, 0),
            Location(1, 0),
            Location(1, 1),
        ]


class TestFieldStats:
    """Per-species counts and viability."""

    def test_required_species_reported_at_zero(self, small_field: Field) -> None:
        stats = small_field.field_stats()
        assert stats == {
            "Goldfish": 0,
            "Barracuda": 0,
            "Shark": 0,
            "Tuna": 0,
            "Parrotfish": 0,
        }

    def test_counts_only_live_organisms(self, small_field: Field) -> None:
        small_field.place_organism(_animal(TUNA, 0, 0), Location(0, 0))
        dead = _animal(TUNA, 0, 1)
        small_field.place_organism(dead, Location(0, 1))
        dead.set_dead()
        small_field.place_organism(
            Plant(species=ALGAE, location=Location(1, 1)), Location(1, 1)
        )
        stats = small_field.field_stats()
        assert stats["Tuna"] == 1
        assert stats["Algae"] == 1
        assert "Seaweed" not in stats

    def test_viable_needs_every_required_species(self, small_field: Field) -> None:
        species = [GOLDFISH, BARRACUDA, SHARK, TUNA, PARROTFISH]
        animals = []
        for col, s in enumerate(species):
            fish = _animal(s, 0, col)
            small_field.place_organism(fish, Location(0, col))
            animals.append(fish)
        assert small_field.is_viable()

        animals[0].set_dead()
        assert not small_field.is_viable()

    def test_empty_field_not_viable(self, small_field: Field) -> None:
        assert not small_field.is_viable()


class TestWeather:
    """Random weather transitions."""

    def test_starts_sunny(self) -> None:
        assert Weather().condition is Condition.SUNNY

    def test_never_changes_at_zero_probability(self, rng) -> None:
        weather = Weather(change_probability=0.0)
        for _ in range(200):
            weather.update(rng)
        assert weather.condition is Condition.SUNNY

    def test_resamples_every_tick_at_probability_one(self, rng) -> None:
        weather = Weather(change_probability=1.0)
        seen = set()
        for _ in range(200):
            weather.update(rng)
            seen.add(weather.condition)
        assert seen == set(Condition)

    def test_reset(self, rng) -> None:
        weather = Weather(condition=Condition.FOGGY)
        weather.reset()
        assert weather.condition is Condition.SUNNY
