"""
tooltip.py
==========
Host page model and the shared chart tooltip.

The tooltip is a single node appended to the host document's body, found
by its marker class. Every chart drawn into the same document shares it:

  * draw      -> remove any stale marker node, append a fresh hidden one
  * hover     -> fill + show (recreated lazily if another chart removed it)
  * leave     -> hide, node stays in the document
  * unmount   -> remove, once no other chart is mounted on the document

HostDocument/HostElement are a minimal in-memory stand-in for the browser
DOM; `renderer.to_html()` ships the same behaviour as a script.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import structlog

from ..core.models import PlanetPlacement

log = structlog.get_logger(__name__)

TOOLTIP_MARKER = "kundali-chart-tooltip"


@dataclass(eq=False)
class HostElement:
    tag:      str
    classes:  List[str]            = field(default_factory=list)
    style:    Dict[str, str]       = field(default_factory=dict)
    lines:    List[str]            = field(default_factory=list)
    children: List["HostElement"]  = field(default_factory=list)
    parent:   Optional["HostElement"] = None

    def append(self, child: "HostElement") -> "HostElement":
        child.parent = self
        self.children.append(child)
        return child

    def remove(self):
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    @property
    def attached(self) -> bool:
        return self.parent is not None

    @property
    def visible(self) -> bool:
        return self.style.get("visibility") == "visible"

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class HostDocument:
    """The page a chart is embedded in."""

    def __init__(self):
        self.body = HostElement("body")
        self.mounted: List[object] = []

    def find_by_class(self, cls: str) -> List[HostElement]:
        found, stack = [], list(self.body.children)
        while stack:
            el = stack.pop()
            if cls in el.classes:
                found.append(el)
            stack.extend(el.children)
        return found


# ---------------------------------------------------------------------------
# Singleton lifecycle
# ---------------------------------------------------------------------------

def _new_tooltip() -> HostElement:
    return HostElement(
        "div",
        classes=[TOOLTIP_MARKER],
        style={
            "position": "absolute",
            "visibility": "hidden",
            "pointer-events": "none",
            "max-width": "200px",
        },
    )


def find_tooltip(document: HostDocument) -> Optional[HostElement]:
    nodes = document.find_by_class(TOOLTIP_MARKER)
    return nodes[0] if nodes else None


def remove_tooltips(document: HostDocument) -> int:
    """Remove every tooltip node in the document; returns how many."""
    nodes = document.find_by_class(TOOLTIP_MARKER)
    for node in nodes:
        node.remove()
    return len(nodes)


def reset_tooltip(document: HostDocument) -> HostElement:
    """Remove-then-create: the document ends up with exactly one hidden tooltip."""
    stale = remove_tooltips(document)
    if stale:
        log.debug("tooltip_replaced", removed=stale)
    return document.body.append(_new_tooltip())


def acquire_tooltip(document: HostDocument) -> HostElement:
    """Existing tooltip, or a new one if none is attached."""
    return find_tooltip(document) or document.body.append(_new_tooltip())


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

def tooltip_lines(planet: PlanetPlacement) -> List[str]:
    lines = [
        planet.planet,
        f"{planet.degree_in_sign:.2f}° in {planet.sign}",
        f"House {planet.house}",
    ]
    if planet.is_retrograde:
        lines.append("Retrograde Motion")
    return lines


def show_tooltip(tooltip: HostElement, planet: PlanetPlacement,
                 page_x: float, page_y: float,
                 offset_x: float = 10, offset_y: float = -10):
    # Not clamped to the viewport.
    tooltip.lines = tooltip_lines(planet)
    tooltip.style["left"] = f"{page_x + offset_x}px"
    tooltip.style["top"] = f"{page_y + offset_y}px"
    tooltip.style["visibility"] = "visible"


def hide_tooltip(tooltip: HostElement):
    tooltip.style["visibility"] = "hidden"
