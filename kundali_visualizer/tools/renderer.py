"""
renderer.py
===========
Interactive renderer for the North Indian chart.

Turns a ChartLayout into a flat scene (polygons, lines, text), keeps the
hover state of planet labels, and exports the scene as SVG (svgwrite) or as
a self-contained HTML page whose script reproduces the tooltip behaviour in
a browser.

Usage:
    from kundali_visualizer import ChartVisualizer, HostDocument

    viz = ChartVisualizer()
    viz.mount(HostDocument())
    viz.draw(payload)          # payload: ChartVisualizationData or dict
    svg = viz.to_svg()
    viz.unmount()

Every draw is a full redraw. A payload that cannot be laid out leaves the
scene empty; draw() returns False and records one diagnostic instead of
raising.
"""

import html
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

import structlog
import svgwrite
from pydantic import ValidationError

from ..core.config import CHART_STYLE, Settings, settings as default_settings
from ..core.errors import Diagnostic, LayoutError, LayoutErrorKind
from ..core.layout import ChartLayout, diamond_outline, division_lines, layout_chart
from ..core.models import ChartVisualizationData, PlanetPlacement
from ..core.zodiac import abbreviation
from .tooltip import (
    HostDocument, acquire_tooltip, find_tooltip, hide_tooltip, remove_tooltips,
    reset_tooltip, show_tooltip, TOOLTIP_MARKER,
)

log = structlog.get_logger(__name__)

RETROGRADE_DX = 20
RETROGRADE_DY = -2
HOUSE_NUMBER_DY = -20
SIGN_LABEL_DY = -5
# Rough advance width of one Arial glyph, as a fraction of font size
GLYPH_WIDTH = 0.6


@dataclass(eq=False)
class SceneNode:
    kind:    str                                  # polygon | line | text
    role:    str                                  # title, frame, house-number, sign, planet, ...
    points:  Tuple[Tuple[float, float], ...] = ()
    text:    str                              = ""
    style:   Dict[str, Any]                   = field(default_factory=dict)
    node_id: Optional[str]                    = None
    house:   Optional[int]                    = None
    planet:  Optional[PlanetPlacement]        = None

    @property
    def x(self) -> float:
        return self.points[0][0]

    @property
    def y(self) -> float:
        return self.points[0][1]

    @property
    def interactive(self) -> bool:
        return self.role == "planet"

    def bbox(self) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom) of a middle-anchored text node."""
        size = self.style.get("font_size", 12)
        half = GLYPH_WIDTH * size * len(self.text) / 2
        return (self.x - half, self.y - size, self.x + half, self.y)


def _text(role: str, x: float, y: float, text: str, **style) -> SceneNode:
    return SceneNode("text", role, points=((x, y),), text=text, style=style)


class ChartVisualizer:
    """One chart instance embedded in a host document."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.document: Optional[HostDocument] = None
        self.scene: List[SceneNode] = []
        self.layout: Optional[ChartLayout] = None
        self.diagnostics: List[Diagnostic] = []
        self.hovered: Optional[str] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self, document: HostDocument) -> "ChartVisualizer":
        if self.document is not None and self.document is not document:
            self.unmount()
        self.document = document
        if self not in document.mounted:
            document.mounted.append(self)
        return self

    def unmount(self):
        if self.document is None:
            return
        if self.hovered is not None:
            tooltip = find_tooltip(self.document)
            if tooltip is not None:
                hide_tooltip(tooltip)
        self.document.mounted.remove(self)
        if not self.document.mounted:
            remove_tooltips(self.document)
        self.document = None
        self._clear()

    def _clear(self):
        self.scene = []
        self.layout = None
        self.hovered = None

    # ------------------------------------------------------------------
    # Draw phase
    # ------------------------------------------------------------------

    def draw(self, data: Union[ChartVisualizationData, dict, None]) -> bool:
        """Full redraw. Returns False (blank chart) when the payload can't be laid out."""
        self._clear()
        self.diagnostics = []
        if self.document is not None:
            remove_tooltips(self.document)

        try:
            if isinstance(data, dict):
                data, dropped = ChartVisualizationData.from_payload(data)
                self.diagnostics.extend(dropped)
            layout = layout_chart(
                data,
                width=self.settings.CHART_WIDTH,
                height=self.settings.CHART_HEIGHT,
                size=self.settings.CHART_SIZE,
            )
        except ValidationError as e:
            self._degrade(Diagnostic(
                LayoutErrorKind.EMPTY_PAYLOAD,
                "Payload failed validation",
                {"errors": e.error_count()},
            ), event="invalid_payload")
            return False
        except LayoutError as e:
            self._degrade(e.diagnostic, event=_EVENTS[e.kind])
            return False

        if self.document is not None:
            reset_tooltip(self.document)
        self.layout = layout
        self.diagnostics.extend(layout.diagnostics)
        self.scene = self._build_scene(layout, data)
        log.debug("chart_drawn", ascendant=layout.ascendant,
                  planets=len(layout.slots), skipped=len(layout.diagnostics))
        return True

    def _degrade(self, diagnostic: Diagnostic, event: str):
        self.diagnostics = [diagnostic]
        log.warning(event, kind=diagnostic.kind.value,
                    message=diagnostic.message, **diagnostic.context)

    def _build_scene(self, layout: ChartLayout,
                     data: ChartVisualizationData) -> List[SceneNode]:
        s = self.settings
        fonts, colors = CHART_STYLE["font_size"], CHART_STYLE["colors"]
        family = CHART_STYLE["font_family"]
        w, h, size = s.CHART_WIDTH, s.CHART_HEIGHT, s.CHART_SIZE
        cx, _ = layout.center
        scene: List[SceneNode] = []

        scene.append(SceneNode(
            "polygon", "frame", points=diamond_outline(w, h, size),
            style={"fill": "none", "stroke": colors["border"],
                   "stroke_width": CHART_STYLE["stroke_width"]},
        ))
        for start, end in division_lines(w, h, size):
            scene.append(SceneNode(
                "line", "division", points=(start, end),
                style={"stroke": colors["inner_lines"],
                       "stroke_width": CHART_STYLE["inner_stroke_width"]},
            ))

        scene.append(_text("title", cx, 25, s.CHART_TITLE,
                           text_anchor="middle", font_family=family,
                           font_size=fonts["title"], font_weight="bold",
                           fill=colors["border"]))

        for cell in layout.cells:
            number = _text("house-number", cell.x, cell.y + HOUSE_NUMBER_DY,
                           str(cell.house), text_anchor="middle",
                           font_family=family, font_size=fonts["house_number"],
                           font_weight="bold", fill=colors["house_number"])
            sign = _text("sign", cell.x, cell.y + SIGN_LABEL_DY,
                         abbreviation(layout.sign_of(cell.house)),
                         text_anchor="middle", font_family=family,
                         font_size=fonts["sign"], fill=colors["sign"])
            number.house = sign.house = cell.house
            scene.extend([number, sign])

        for slot in layout.slots:
            p = slot.planet
            label = _text("planet", slot.x, slot.y, abbreviation(p.planet),
                          text_anchor="middle", font_family=family,
                          font_size=fonts["planet"], font_weight="normal",
                          fill=p.color or colors["planet"], cursor="pointer")
            label.node_id = f"planet-{p.planet.lower()}-{slot.house}-{slot.stack_index}"
            label.house, label.planet = slot.house, p
            scene.append(label)

            if p.is_retrograde:
                marker = _text("retrograde", slot.x + RETROGRADE_DX,
                               slot.y + RETROGRADE_DY, "R",
                               font_family=family, font_size=fonts["retrograde"],
                               font_weight="bold", fill=colors["retrograde"])
                marker.house, marker.planet = slot.house, p
                scene.append(marker)

        if s.SHOW_ASPECTS:
            scene.extend(self._aspect_lines(layout, data))

        if s.CHART_FOOTER:
            scene.append(_text("footer", cx, h - 10, s.CHART_FOOTER,
                               text_anchor="middle", font_family=family,
                               font_size=fonts["footer"], fill=colors["sign"]))
        return scene

    def _aspect_lines(self, layout: ChartLayout,
                      data: ChartVisualizationData) -> List[SceneNode]:
        colors = CHART_STYLE["colors"]
        houses = {s.planet.planet: s.house for s in layout.slots}
        lines = []
        for aspect in data.aspects:
            a, b = houses.get(aspect.from_planet), houses.get(aspect.to_planet)
            if a is None or b is None:
                continue
            ca, cb = layout.cell_for(a), layout.cell_for(b)
            strong = aspect.strength == "strong"
            lines.append(SceneNode(
                "line", "aspect", points=((ca.x, ca.y), (cb.x, cb.y)),
                style={
                    "stroke": colors["aspect_strong" if strong else "aspect_weak"],
                    "stroke_width": 2 if strong else 1,
                    "opacity": 0.6,
                    "stroke_dasharray": "" if aspect.aspect_type == "conjunction" else "5,5",
                },
            ))
        return lines

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def nodes(self, role: str) -> List[SceneNode]:
        return [n for n in self.scene if n.role == role]

    def node(self, node_id: str) -> Optional[SceneNode]:
        for n in self.scene:
            if n.node_id == node_id:
                return n
        return None

    def hit_test(self, x: float, y: float) -> Optional[SceneNode]:
        """Topmost planet label under the point, if any."""
        for n in reversed(self.scene):
            if not n.interactive:
                continue
            left, top, right, bottom = n.bbox()
            if left <= x <= right and top <= y <= bottom:
                return n
        return None

    # ------------------------------------------------------------------
    # Pointer interaction
    # ------------------------------------------------------------------

    def pointer_enter(self, node_id: str, page_x: float, page_y: float) -> bool:
        node = self.node(node_id)
        if node is None or not node.interactive or self.document is None:
            return False
        node.style["font_weight"] = "bold"
        self.hovered = node_id
        show_tooltip(acquire_tooltip(self.document), node.planet, page_x, page_y,
                     self.settings.TOOLTIP_OFFSET_X, self.settings.TOOLTIP_OFFSET_Y)
        return True

    def pointer_leave(self, node_id: str):
        node = self.node(node_id)
        if node is not None:
            node.style["font_weight"] = "normal"
        if self.hovered == node_id:
            self.hovered = None
        if self.document is not None:
            tooltip = find_tooltip(self.document)
            if tooltip is not None:
                hide_tooltip(tooltip)

    def pointer_move(self, x: float, y: float,
                     page_x: Optional[float] = None,
                     page_y: Optional[float] = None) -> Optional[SceneNode]:
        """Dispatch enter/leave from a pointer position in chart coordinates."""
        hit = self.hit_test(x, y)
        hit_id = hit.node_id if hit is not None else None
        if hit_id != self.hovered:
            if self.hovered is not None:
                self.pointer_leave(self.hovered)
            if hit_id is not None:
                self.pointer_enter(hit_id,
                                   x if page_x is None else page_x,
                                   y if page_y is None else page_y)
        return hit

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_svg(self) -> str:
        s = self.settings
        dwg = svgwrite.Drawing(size=(s.CHART_WIDTH, s.CHART_HEIGHT), debug=False)
        dwg.viewbox(0, 0, s.CHART_WIDTH, s.CHART_HEIGHT)
        dwg.add(dwg.rect((0, 0), (s.CHART_WIDTH, s.CHART_HEIGHT),
                         fill=CHART_STYLE["background"]))

        for n in self.scene:
            if n.kind == "polygon":
                el = dwg.polygon(points=n.points, **n.style)
            elif n.kind == "line":
                style = {k: v for k, v in n.style.items() if v != ""}
                el = dwg.line(start=n.points[0], end=n.points[1], **style)
            else:
                el = dwg.text(n.text, insert=n.points[0], **n.style)
            el["class"] = f"chart-{n.role}"
            if n.interactive:
                el["id"] = n.node_id
                el["data-tooltip"] = json.dumps(_tooltip_payload(n.planet))
            dwg.add(el)
        return dwg.tostring()

    def to_html(self) -> str:
        s = self.settings
        return _HTML_TEMPLATE.format(
            title=html.escape(s.CHART_TITLE),
            width=s.CHART_WIDTH,
            svg=self.to_svg(),
            marker=TOOLTIP_MARKER,
            dx=s.TOOLTIP_OFFSET_X,
            dy=s.TOOLTIP_OFFSET_Y,
        )


_EVENTS = {
    LayoutErrorKind.INVALID_ASCENDANT: "invalid_ascendant",
    LayoutErrorKind.EMPTY_PAYLOAD:     "empty_payload",
    LayoutErrorKind.ORPHAN_PLANET:     "orphan_planet",
}


def _tooltip_payload(planet: PlanetPlacement) -> dict:
    return {
        "planet": planet.planet,
        "degree": round(planet.degree_in_sign, 2),
        "sign": planet.sign,
        "house": planet.house,
        "isRetrograde": planet.is_retrograde,
    }


def render_svg(data: Union[ChartVisualizationData, dict],
               settings: Optional[Settings] = None) -> str:
    """One-shot render without a host document."""
    viz = ChartVisualizer(settings)
    viz.draw(data)
    return viz.to_svg()


def render_html(data: Union[ChartVisualizationData, dict],
                settings: Optional[Settings] = None) -> str:
    viz = ChartVisualizer(settings)
    viz.draw(data)
    return viz.to_html()


_HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
  .kundali-chart {{ max-width: {width}px; margin: 0 auto; }}
  .kundali-chart svg {{ width: 100%; height: auto; }}
  .{marker} {{
    position: absolute; z-index: 10; padding: 8px 12px; max-width: 200px;
    background: #0f172a; color: #fff; font: 13px Arial, sans-serif;
    border-radius: 6px; pointer-events: none; visibility: hidden;
  }}
  .{marker} .name {{ font-weight: bold; color: #bfdbfe; }}
  .{marker} .retro {{ color: #fca5a5; }}
</style>
</head>
<body>
<div class="kundali-chart">
{svg}
</div>
<script>
(function () {{
  var MARKER = "{marker}";
  document.querySelectorAll("." + MARKER).forEach(function (n) {{ n.remove(); }});
  function tooltip() {{
    var t = document.querySelector("." + MARKER);
    if (!t) {{
      t = document.createElement("div");
      t.className = MARKER;
      document.body.appendChild(t);
    }}
    return t;
  }}
  tooltip();
  document.querySelectorAll(".chart-planet").forEach(function (label) {{
    var p = JSON.parse(label.getAttribute("data-tooltip"));
    label.addEventListener("mouseover", function (ev) {{
      label.setAttribute("font-weight", "bold");
      var t = tooltip();
      t.innerHTML = '<div class="name"></div><div></div><div></div>';
      t.children[0].textContent = p.planet;
      t.children[1].textContent = p.degree.toFixed(2) + "\\u00b0 in " + p.sign;
      t.children[2].textContent = "House " + p.house;
      if (p.isRetrograde) {{
        var r = document.createElement("div");
        r.className = "retro";
        r.textContent = "Retrograde Motion";
        t.appendChild(r);
      }}
      t.style.left = (ev.pageX + {dx}) + "px";
      t.style.top = (ev.pageY + {dy}) + "px";
      t.style.visibility = "visible";
    }});
    label.addEventListener("mouseout", function () {{
      label.setAttribute("font-weight", "normal");
      tooltip().style.visibility = "hidden";
    }});
  }});
  window.addEventListener("pagehide", function () {{
    document.querySelectorAll("." + MARKER).forEach(function (n) {{ n.remove(); }});
  }});
}})();
</script>
</body>
</html>
"""
