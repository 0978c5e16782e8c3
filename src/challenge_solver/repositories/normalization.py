"""Normalization of raw catalog records into numeric-typed entities.

Two validation modes:

- ``COERCE``: every record is kept; sentinel or unparsable numbers become 0
- ``STRICT``: a record with any sentinel or unparsable required field is
  dropped and the rejection is logged
"""

import logging
import math
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from challenge_solver.entities import Character, Creature, Planet

logger = logging.getLogger(__name__)

T = TypeVar("T")

SENTINELS = {"unknown", "n/a", "none", ""}

PLANET_FIELDS = ("rotation_period", "orbital_period", "diameter", "surface_water", "population")
CHARACTER_FIELDS = ("height", "mass")
CREATURE_FIELDS = ("base_experience", "height", "weight")


class ValidationMode(str, Enum):
    COERCE = "coerce"
    STRICT = "strict"


def to_number(value: Any) -> int | float | None:
    """Parse a catalog field into a number.

    Thousands separators and surrounding whitespace are ignored; integral
    values come back as ``int``.

    Returns:
        The number, or None for sentinels, booleans, non-finite and
        unparsable input
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip().replace(",", "").lower()
        if text in SENTINELS:
            return None
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None

    if isinstance(number, float):
        if not math.isfinite(number):
            return None
        if number.is_integer():
            return int(number)
    return number


def _normalize(
    raw: dict[str, Any],
    fields: tuple[str, ...],
    mode: ValidationMode,
    build: Callable[..., T],
    kind: str,
    **extra: Any,
) -> T | None:
    numbers: dict[str, int | float] = {}
    for name in fields:
        number = to_number(raw.get(name))
        if number is None:
            if mode is ValidationMode.STRICT:
                logger.info("Rejected %s %r: invalid %s=%r", kind, raw.get("name"), name, raw.get(name))
                return None
            number = 0
        numbers[name] = number

    return build(name=str(raw.get("name", "")), **numbers, **extra)


def normalize_planet(raw: dict[str, Any], mode: ValidationMode = ValidationMode.COERCE) -> Planet | None:
    return _normalize(raw, PLANET_FIELDS, mode, Planet, "planet", url=str(raw.get("url", "")))


def normalize_character(
    raw: dict[str, Any], mode: ValidationMode = ValidationMode.COERCE
) -> Character | None:
    return _normalize(
        raw,
        CHARACTER_FIELDS,
        mode,
        Character,
        "character",
        homeworld=str(raw.get("homeworld") or ""),
        url=str(raw.get("url", "")),
    )


def normalize_creature(raw: dict[str, Any], mode: ValidationMode = ValidationMode.COERCE) -> Creature | None:
    return _normalize(raw, CREATURE_FIELDS, mode, Creature, "creature")
