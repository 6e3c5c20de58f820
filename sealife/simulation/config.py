"""Config — load simulation parameters from YAML files.

All tunable constants (field size, seed, creation probabilities, growth
and infection rates, species parameter tables) live in YAML and are
parsed into a typed dataclass here.  Species tables are only overridden
where the YAML says so; everything else keeps the built-in defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from sealife.species.descriptors import SpeciesDescriptor, build_species_table


def _default_creation_probabilities() -> dict[str, float]:
    return {
        "Shark": 0.025,
        "Barracuda": 0.025,
        "Tuna": 0.15,
        "Goldfish": 0.01,
        "Parrotfish": 0.01,
        "Algae": 0.02,
        "Seaweed": 0.02,
    }


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        depth: Number of grid rows.
        width: Number of grid columns.
        creation_probabilities: Per-species chance of seeding each cell.
            Tried in order; the first success claims the cell.
        plant_growth_rate: Maximum new plants created per tick.
        infection_probability: Spontaneous infection chance per animal
            per tick.
        spread_probability: Chance an infected animal infects each
            uninfected neighbour per tick.
        weather_change_probability: Chance per tick of re-sampling the
            weather.
        species: Per-species parameter overrides, e.g.
            ``{"Shark": {"max_age": 120}}``.
    """

    seed: int = 42
    depth: int = 80
    width: int = 120

    creation_probabilities: dict[str, float] = field(
        default_factory=_default_creation_probabilities,
    )

    # Global events
    plant_growth_rate: int = 20
    infection_probability: float = 0.001
    spread_probability: float = 0.05
    weather_change_probability: float = 0.1

    species: dict[str, dict[str, Any]] = field(default_factory=dict)

    def species_table(self) -> dict[str, SpeciesDescriptor]:
        """Return the species descriptors with this config's overrides.

        Raises:
            ValueError: If an override names an unknown species or
                parameter.
        """
        return build_species_table(self.species)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        probabilities = _default_creation_probabilities()
        probabilities.update(data.get("creation_probabilities") or {})

        return cls(
            seed=data.get("seed", cls.seed),
            depth=data.get("depth", cls.depth),
            width=data.get("width", cls.width),
            creation_probabilities=probabilities,
            plant_growth_rate=data.get(
                "plant_growth_rate",
                cls.plant_growth_rate,
            ),
            infection_probability=data.get(
                "infection_probability",
                cls.infection_probability,
            ),
            spread_probability=data.get(
                "spread_probability",
                cls.spread_probability,
            ),
            weather_change_probability=data.get(
                "weather_change_probability",
                cls.weather_change_probability,
            ),
            species=data.get("species") or {},
        )
