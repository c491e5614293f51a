"""
payload.py
==========
Builds the visualizer payload from a kundali chart dict.

Expected input (the shape produced by the kundali engine):

    {
      "lagna":  {"sign": "Sagittarius", "sidereal_longitude": 264.9, ...},
      "planets": {"Sun": {"sidereal_longitude": 92.4, "sign": "Cancer",
                          "house": 8, "is_retrograde": False}, ...},
      "houses":  [{"house": 1, "sign": "Sagittarius",
                   "sidereal_longitude": 264.9}, ...],
    }

Lords come from the sign-rulership table, meanings from the house themes.
If "houses" is missing, whole-sign houses are derived from the lagna sign.
"""

from typing import Iterable, List, Optional

from ..core.models import (
    AspectDefinition, ChartVisualizationData, HouseDefinition, PlanetPlacement,
)
from ..core.zodiac import (
    HOUSE_THEMES, PLANET_COLORS, SIGN_LORDS, SIGNS, sign_from_longitude,
)


def _planet_placements(planets: dict) -> List[PlanetPlacement]:
    placements = []
    for name, p in planets.items():
        lon = p.get("sidereal_longitude", p.get("degree", 0.0))
        placements.append(PlanetPlacement(
            planet=name,
            degree=lon,
            sign=p.get("sign") or sign_from_longitude(lon),
            house=p.get("house", 1),
            color=PLANET_COLORS.get(name),
            is_retrograde=bool(p.get("is_retrograde", False)),
        ))
    return placements


def _house_definition(number: int, sign: str, start: float) -> HouseDefinition:
    return HouseDefinition(
        house_number=number,
        sign=sign,
        start_degree=round(start, 4),
        lord=SIGN_LORDS.get(sign, "Unknown"),
        meaning=", ".join(HOUSE_THEMES[number]),
    )


def whole_sign_houses(lagna_sign: str) -> List[HouseDefinition]:
    """Twelve whole-sign houses starting at the lagna sign."""
    start = SIGNS.index(lagna_sign)
    houses = []
    for i in range(12):
        idx = (start + i) % 12
        houses.append(_house_definition(i + 1, SIGNS[idx], idx * 30.0))
    return houses


def build_visualization_data(
    chart: dict,
    aspects: Optional[Iterable[dict]] = None,
) -> ChartVisualizationData:
    """
    Convert a kundali chart dict to ChartVisualizationData.

    Args:
        chart: kundali output (see module docstring)
        aspects: optional aspect dicts, camelCase or snake_case keys

    Raises:
        ValueError: if neither houses nor a recognised lagna sign is present
    """
    planets = _planet_placements(chart.get("planets", {}))

    if chart.get("houses"):
        houses = [
            _house_definition(h["house"], h["sign"],
                              h.get("sidereal_longitude", 0.0))
            for h in chart["houses"]
        ]
    else:
        lagna_sign = chart.get("lagna", {}).get("sign")
        if lagna_sign not in SIGNS:
            raise ValueError(f"Chart has no houses and no usable lagna sign: {lagna_sign!r}")
        houses = whole_sign_houses(lagna_sign)

    return ChartVisualizationData(
        planets=planets,
        houses=houses,
        aspects=[AspectDefinition.model_validate(a) for a in (aspects or [])],
    )
