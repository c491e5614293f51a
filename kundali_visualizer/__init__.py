"""
Kundali Visualizer
==================
North Indian (diamond) birth-chart layout and interactive rendering.

Quick start:
    from kundali_visualizer import ChartVisualizer, HostDocument

    viz = ChartVisualizer().mount(HostDocument())
    viz.draw({
        "planets": [{"planet": "Mars", "degree": 222.5, "sign": "Scorpio",
                     "house": 4, "isRetrograde": False}],
        "houses":  [{"houseNumber": 1, "sign": "Leo"}],
    })
    svg = viz.to_svg()
"""

from .core.errors import Diagnostic, LayoutError, LayoutErrorKind
from .core.layout import (
    assign_planets_to_houses, compute_house_geometry, compute_sign_rotation,
    layout_chart,
)
from .core.models import (
    AspectDefinition, ChartVisualizationData, HouseDefinition, PlanetPlacement,
)
from .tools.payload import build_visualization_data
from .tools.renderer import ChartVisualizer, render_html, render_svg
from .tools.tooltip import HostDocument

__version__ = "1.0.0"
__all__ = [
    "ChartVisualizationData", "PlanetPlacement", "HouseDefinition", "AspectDefinition",
    "compute_sign_rotation", "compute_house_geometry", "assign_planets_to_houses",
    "layout_chart",
    "ChartVisualizer", "HostDocument", "render_svg", "render_html",
    "build_visualization_data",
    "LayoutError", "LayoutErrorKind", "Diagnostic",
]
