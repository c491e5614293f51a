# Kundali Visualizer - Core modules
from .zodiac import SIGNS, PLANETS, SIGN_LORDS, HOUSE_THEMES
from .models import ChartVisualizationData, PlanetPlacement, HouseDefinition, AspectDefinition
from .errors import LayoutError, LayoutErrorKind, Diagnostic
from .layout import (
    compute_sign_rotation, compute_house_geometry, assign_planets_to_houses,
    layout_chart, ChartLayout, HouseCell, PlanetSlot,
)

__all__ = [
    "SIGNS", "PLANETS", "SIGN_LORDS", "HOUSE_THEMES",
    "ChartVisualizationData", "PlanetPlacement", "HouseDefinition", "AspectDefinition",
    "LayoutError", "LayoutErrorKind", "Diagnostic",
    "compute_sign_rotation", "compute_house_geometry", "assign_planets_to_houses",
    "layout_chart", "ChartLayout", "HouseCell", "PlanetSlot",
]
