"""Normalized catalog records.

All numeric fields hold numbers only; the catalog's "unknown" sentinel and
unparsable strings never survive normalization.
"""

from dataclasses import asdict, dataclass
from typing import Any

Number = int | float


@dataclass(frozen=True)
class Planet:
    """A planet from the people/planets catalog."""

    name: str
    rotation_period: Number = 0
    orbital_period: Number = 0
    diameter: Number = 0
    surface_water: Number = 0
    population: Number = 0
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Compact shape used in prompts (no URL)."""
        data = asdict(self)
        del data["url"]
        return data

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Planet":
        return cls(**{k: v for k, v in raw.items() if k in cls.__dataclass_fields__})


@dataclass(frozen=True)
class Character:
    """A character from the people/planets catalog.

    Attributes:
        homeworld: Reference URL of the home planet, or the planet's name
            once resolved
    """

    name: str
    height: Number = 0
    mass: Number = 0
    homeworld: str = ""
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        del data["url"]
        return data

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Character":
        return cls(**{k: v for k, v in raw.items() if k in cls.__dataclass_fields__})


@dataclass(frozen=True)
class Creature:
    """A creature (Pokémon) from the creature catalog."""

    name: str
    base_experience: Number = 0
    height: Number = 0
    weight: Number = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Creature":
        return cls(**{k: v for k, v in raw.items() if k in cls.__dataclass_fields__})
