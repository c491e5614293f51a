"""
models.py
=========
Payload handed to the visualizer by the astrology engine.

Wire format is camelCase (houseNumber, isRetrograde, ...); attributes are
snake_case. Models are frozen: a new payload means a full re-layout.

Signs are not checked here. An unknown planet sign is reported by the layout
engine, an unknown ascendant sign by the sign rotation.
"""

from typing import Any, List, Optional, Sequence, Tuple

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from .errors import Diagnostic, LayoutError, LayoutErrorKind
from .zodiac import degree_in_sign

log = structlog.get_logger(__name__)


class _Payload(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class PlanetPlacement(_Payload):
    planet:        str
    degree:        float         = 0.0     # absolute sidereal longitude
    sign:          Optional[str]
    house:         int           = Field(1, ge=1, le=12)
    color:         Optional[str] = None
    is_retrograde: bool          = False

    @property
    def degree_in_sign(self) -> float:
        return degree_in_sign(self.degree)


class HouseDefinition(_Payload):
    house_number: int           = Field(..., ge=1, le=12)
    sign:         Optional[str]
    start_degree: float         = 0.0
    lord:         str           = ""
    meaning:      str           = ""


class AspectDefinition(_Payload):
    from_planet: str
    to_planet:   str
    aspect_type: str
    orb:         float = 0.0
    strength:    str   = ""


class ChartVisualizationData(_Payload):
    planets: Tuple[PlanetPlacement, ...]  = ()
    houses:  Tuple[HouseDefinition, ...]  = ()
    aspects: Tuple[AspectDefinition, ...] = ()

    @model_validator(mode="after")
    def _unique_house_numbers(self):
        numbers = [h.house_number for h in self.houses]
        duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate houseNumber values: {duplicates}")
        return self

    def ascendant_house(self) -> Optional[HouseDefinition]:
        for house in self.houses:
            if house.house_number == 1:
                return house
        return None

    def planet(self, name: str) -> Optional[PlanetPlacement]:
        for p in self.planets:
            if p.planet == name:
                return p
        return None

    @classmethod
    def from_payload(cls, payload: Any) -> Tuple["ChartVisualizationData", Tuple[Diagnostic, ...]]:
        """
        Parse a wire payload entry by entry.

        A malformed planet is dropped and reported as an orphan. A malformed
        house other than house 1, or a malformed aspect, is dropped and logged;
        the sign rotation never reads them. A malformed house 1 raises
        LayoutError(INVALID_ASCENDANT). A payload of the wrong shape, or with
        duplicate house numbers, raises ValidationError.

        Returns (data, diagnostics).
        """
        if not isinstance(payload, dict):
            return cls.model_validate(payload), ()

        planets: List[PlanetPlacement] = []
        diagnostics: List[Diagnostic] = []
        for raw in _entries(payload, "planets"):
            try:
                planets.append(PlanetPlacement.model_validate(raw))
            except ValidationError as e:
                name = raw.get("planet") if isinstance(raw, dict) else None
                log.warning("orphan_planet", planet=name, errors=e.error_count())
                diagnostics.append(Diagnostic(
                    LayoutErrorKind.ORPHAN_PLANET,
                    f"{name or 'Planet entry'} is malformed; not placed",
                    {"planet": name, "errors": e.error_count()},
                ))

        houses: List[HouseDefinition] = []
        for raw in _entries(payload, "houses"):
            try:
                houses.append(HouseDefinition.model_validate(raw))
            except ValidationError as e:
                number = _house_number(raw)
                if number == 1:
                    raise LayoutError(
                        LayoutErrorKind.INVALID_ASCENDANT,
                        "House 1 is malformed; the ascendant cannot be determined",
                        house=1, errors=e.error_count(),
                    ) from e
                log.warning("malformed_house", house=number, errors=e.error_count())

        aspects: List[AspectDefinition] = []
        for raw in _entries(payload, "aspects"):
            try:
                aspects.append(AspectDefinition.model_validate(raw))
            except ValidationError as e:
                log.warning("malformed_aspect", errors=e.error_count())

        data = cls(planets=planets, houses=houses, aspects=aspects)
        return data, tuple(diagnostics)


def _entries(payload: dict, key: str) -> Sequence[Any]:
    value = payload.get(key) or ()
    if not isinstance(value, (list, tuple)):
        # wrong shape: let pydantic report it
        ChartVisualizationData.model_validate({key: value})
    return value


def _house_number(raw: Any) -> Optional[Any]:
    if not isinstance(raw, dict):
        return None
    return raw.get("houseNumber", raw.get("house_number"))
