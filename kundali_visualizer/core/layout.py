"""
layout.py
=========
Chart Layout Engine for the North Indian (diamond) rasi chart.

In a North Indian chart the houses never move: house 1 is always the
top-centre cell. The signs rotate through the houses starting from the
ascendant (Lagna), i.e. whole-sign houses:

    house N holds SIGNS[(lagna_index + N - 1) % 12]

Planets are placed by their sign, not by the house number carried in the
payload, so the drawing always agrees with the rotated sign sequence.

Everything here is pure: same payload in, same geometry out.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import structlog

from .errors import Diagnostic, LayoutError, LayoutErrorKind
from .models import ChartVisualizationData, PlanetPlacement
from .zodiac import SIGNS, is_valid_sign

log = structlog.get_logger(__name__)

Point = Tuple[float, float]

# ---------------------------------------------------------------------------
# Frozen house table
# ---------------------------------------------------------------------------
# house -> (dx, dy, extent), all in multiples of `size` from the chart centre.
# Hand-authored against the reference diagram; do not derive or "fix".
HOUSE_OFFSETS: Dict[int, Tuple[float, float, float]] = {
    12: (-1.5, -1.5, 0.8),
    1:  ( 0.0, -1.5, 0.8),
    2:  ( 1.5, -1.5, 0.8),
    11: (-1.5,  0.0, 0.8),
    3:  ( 1.5,  0.0, 0.8),
    10: (-1.5,  1.5, 0.8),
    9:  ( 0.0,  1.5, 0.8),
    8:  ( 1.5,  1.5, 0.8),
    4:  (-0.5, -0.5, 0.6),
    5:  ( 0.5, -0.5, 0.6),
    6:  ( 0.5,  0.5, 0.6),
    7:  (-0.5,  0.5, 0.6),
}

# Vertical placement of stacked planets inside a cell
PLANET_FIRST_OFFSET = 15.0
PLANET_STACK_STEP   = 15.0


@dataclass(frozen=True)
class HouseCell:
    house:  int
    x:      float       # label anchor (cell centre)
    y:      float
    width:  float
    height: float


@dataclass(frozen=True)
class PlanetSlot:
    planet:      PlanetPlacement
    house:       int      # recomputed from sign
    stack_index: int      # position among planets of the same sign
    x:           float
    y:           float


@dataclass(frozen=True)
class ChartLayout:
    ascendant:   str
    chart_signs: Tuple[str, ...]
    cells:       Tuple[HouseCell, ...]
    slots:       Tuple[PlanetSlot, ...]
    diagnostics: Tuple[Diagnostic, ...]
    center:      Point
    size:        float

    def cell_for(self, house: int) -> HouseCell:
        return self.cells[house - 1]

    def sign_of(self, house: int) -> str:
        return self.chart_signs[house - 1]

    def slots_in(self, house: int) -> List[PlanetSlot]:
        return [s for s in self.slots if s.house == house]

    def to_dict(self) -> dict:
        return {
            "ascendant": self.ascendant,
            "chart_signs": list(self.chart_signs),
            "center": {"x": self.center[0], "y": self.center[1]},
            "size": self.size,
            "houses": [
                {
                    "house": c.house,
                    "sign": self.sign_of(c.house),
                    "x": c.x, "y": c.y,
                    "width": c.width, "height": c.height,
                }
                for c in self.cells
            ],
            "planets": [
                {
                    "planet": s.planet.planet,
                    "sign": s.planet.sign,
                    "house": s.house,
                    "payload_house": s.planet.house,
                    "stack_index": s.stack_index,
                    "x": s.x, "y": s.y,
                    "is_retrograde": s.planet.is_retrograde,
                }
                for s in self.slots
            ],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


# ---------------------------------------------------------------------------
# Sign rotation
# ---------------------------------------------------------------------------

def compute_sign_rotation(ascendant_sign: str) -> Tuple[str, ...]:
    """
    Signs occupying houses 1..12 for the given ascendant.

    Exact, case-sensitive match against SIGNS. An unknown ascendant cannot
    anchor the chart and raises LayoutError(INVALID_ASCENDANT).
    """
    if not is_valid_sign(ascendant_sign):
        raise LayoutError(
            LayoutErrorKind.INVALID_ASCENDANT,
            f"Unrecognised ascendant sign: {ascendant_sign!r}",
            ascendant=ascendant_sign,
        )
    start = SIGNS.index(ascendant_sign)
    return tuple(SIGNS[(start + i) % 12] for i in range(12))


# ---------------------------------------------------------------------------
# Fixed geometry
# ---------------------------------------------------------------------------

def compute_house_geometry(width: float = 600, height: float = 600,
                           size: float = 120) -> Tuple[HouseCell, ...]:
    """Twelve house cells, ordered by house number 1..12."""
    cx, cy = width / 2, height / 2
    cells = []
    for house in range(1, 13):
        dx, dy, extent = HOUSE_OFFSETS[house]
        cells.append(HouseCell(
            house=house,
            x=cx + dx * size,
            y=cy + dy * size,
            width=size * extent,
            height=size * extent,
        ))
    return tuple(cells)


def diamond_outline(width: float = 600, height: float = 600,
                    size: float = 120) -> Tuple[Point, ...]:
    cx, cy = width / 2, height / 2
    return (
        (cx, cy - size * 2),
        (cx + size * 2, cy),
        (cx, cy + size * 2),
        (cx - size * 2, cy),
    )


def division_lines(width: float = 600, height: float = 600,
                   size: float = 120) -> Tuple[Tuple[Point, Point], ...]:
    cx, cy = width / 2, height / 2
    return (
        ((cx - size * 2, cy - size), (cx + size * 2, cy - size)),
        ((cx - size * 2, cy + size), (cx + size * 2, cy + size)),
        ((cx - size, cy - size * 2), (cx - size, cy + size * 2)),
        ((cx + size, cy - size * 2), (cx + size, cy + size * 2)),
        ((cx - size, cy), (cx + size, cy)),
        ((cx, cy - size), (cx, cy + size)),
    )


# ---------------------------------------------------------------------------
# Planet placement
# ---------------------------------------------------------------------------

def assign_planets_to_houses(
    planets: Iterable[PlanetPlacement],
    chart_signs: Tuple[str, ...],
    cells: Optional[Tuple[HouseCell, ...]] = None,
) -> Tuple[Tuple[PlanetSlot, ...], Tuple[Diagnostic, ...]]:
    """
    Place each planet in the cell of the house its sign occupies.

    Planets sharing a sign are stacked downwards in input order. A planet
    whose sign is not in `chart_signs` is dropped and reported; this
    function never raises for bad planet data.

    Returns (slots, diagnostics).
    """
    if cells is None:
        cells = compute_house_geometry()

    by_sign: Dict[str, List[PlanetPlacement]] = {}
    diagnostics: List[Diagnostic] = []

    for planet in planets:
        if planet.sign not in chart_signs:
            diag = Diagnostic(
                LayoutErrorKind.ORPHAN_PLANET,
                f"{planet.planet} has unrecognised sign {planet.sign!r}; not placed",
                {"planet": planet.planet, "sign": planet.sign},
            )
            log.warning("orphan_planet", planet=planet.planet, sign=planet.sign)
            diagnostics.append(diag)
            continue
        by_sign.setdefault(planet.sign, []).append(planet)

    slots: List[PlanetSlot] = []
    for sign, group in by_sign.items():
        house = chart_signs.index(sign) + 1
        cell = cells[house - 1]
        for i, planet in enumerate(group):
            slots.append(PlanetSlot(
                planet=planet,
                house=house,
                stack_index=i,
                x=cell.x,
                y=cell.y + PLANET_FIRST_OFFSET + i * PLANET_STACK_STEP,
            ))

    return tuple(slots), tuple(diagnostics)


# ---------------------------------------------------------------------------
# Full pipeline
# ---------------------------------------------------------------------------

def layout_chart(data: ChartVisualizationData, width: float = 600,
                 height: float = 600, size: float = 120) -> ChartLayout:
    """
    Payload -> draw-ready geometry.

    Raises LayoutError(EMPTY_PAYLOAD) when there are no houses and
    LayoutError(INVALID_ASCENDANT) when house 1 is missing or its sign is
    not one of the twelve.
    """
    if data is None or not data.houses:
        raise LayoutError(LayoutErrorKind.EMPTY_PAYLOAD, "Payload has no houses")

    lagna = data.ascendant_house()
    if lagna is None:
        raise LayoutError(
            LayoutErrorKind.INVALID_ASCENDANT,
            "House 1 is missing; the ascendant cannot be determined",
        )

    chart_signs = compute_sign_rotation(lagna.sign)
    cells = compute_house_geometry(width, height, size)
    slots, diagnostics = assign_planets_to_houses(data.planets, chart_signs, cells)

    for house in data.houses:
        expected = chart_signs[house.house_number - 1]
        if house.sign != expected:
            # Payload houses are informational; the rotation wins.
            log.info("house_sign_mismatch", house=house.house_number,
                     payload_sign=house.sign, chart_sign=expected)

    return ChartLayout(
        ascendant=lagna.sign,
        chart_signs=chart_signs,
        cells=cells,
        slots=slots,
        diagnostics=diagnostics,
        center=(width / 2, height / 2),
        size=size,
    )
