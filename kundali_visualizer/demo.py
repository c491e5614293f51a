"""
demo.py
=======
Demonstration of the Kundali Visualizer.
Run: python -m kundali_visualizer.demo

Lays out a sample birth chart, prints the house/planet placement and writes
the SVG and the interactive HTML page to the current directory.
"""

from pathlib import Path

from kundali_visualizer import ChartVisualizer, HostDocument, build_visualization_data
from kundali_visualizer.core.config import settings
from kundali_visualizer.core.logging import setup_logging

# Birth: 1988-07-18 18:46 IST, New Delhi (sidereal, Lahiri)
SAMPLE_CHART = {
    "lagna": {"sign": "Sagittarius", "sidereal_longitude": 264.9},
    "planets": {
        "Sun":     {"sidereal_longitude": 92.40,  "sign": "Cancer",      "house": 8, "is_retrograde": False},
        "Moon":    {"sidereal_longitude": 143.47, "sign": "Leo",         "house": 9, "is_retrograde": False},
        "Mercury": {"sidereal_longitude": 75.98,  "sign": "Gemini",      "house": 7, "is_retrograde": False},
        "Venus":   {"sidereal_longitude": 53.60,  "sign": "Taurus",      "house": 6, "is_retrograde": False},
        "Mars":    {"sidereal_longitude": 338.38, "sign": "Pisces",      "house": 4, "is_retrograde": False},
        "Jupiter": {"sidereal_longitude": 35.68,  "sign": "Taurus",      "house": 6, "is_retrograde": False},
        "Saturn":  {"sidereal_longitude": 243.60, "sign": "Sagittarius", "house": 1, "is_retrograde": True},
        "Rahu":    {"sidereal_longitude": 322.88, "sign": "Aquarius",    "house": 3, "is_retrograde": True},
        "Ketu":    {"sidereal_longitude": 142.88, "sign": "Leo",         "house": 9, "is_retrograde": True},
    },
}


def print_section(title: str):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def run_demo(out_dir: Path = Path(".")):
    setup_logging(settings.LOG_LEVEL)

    print("=" * 60)
    print("   KUNDALI VISUALIZER — SAMPLE NORTH INDIAN CHART")
    print("=" * 60)

    data = build_visualization_data(SAMPLE_CHART)
    viz = ChartVisualizer().mount(HostDocument())
    if not viz.draw(data):
        for diag in viz.diagnostics:
            print(f"  ✗ {diag.kind.value}: {diag.message}")
        return

    layout = viz.layout
    print_section(f"HOUSES  (Lagna: {layout.ascendant})")
    print(f"  {'House':<8} {'Sign':<14} {'Lord':<10} {'Occupants'}")
    print(f"  {'─'*8} {'─'*14} {'─'*10} {'─'*24}")
    lords = {h.house_number: h.lord for h in data.houses}
    for cell in layout.cells:
        occupants = ", ".join(
            s.planet.planet + (" ℞" if s.planet.is_retrograde else "")
            for s in layout.slots_in(cell.house)
        )
        print(f"  H{cell.house:<7} {layout.sign_of(cell.house):<14} "
              f"{lords.get(cell.house, ''):<10} {occupants}")

    print_section("HOVER PREVIEW")
    first = viz.nodes("planet")[0]
    viz.pointer_enter(first.node_id, 420, 180)
    tooltip = viz.document.body.children[0]
    for line in tooltip.lines:
        print(f"  {line}")
    viz.pointer_leave(first.node_id)

    svg_path = out_dir / "kundali_chart.svg"
    html_path = out_dir / "kundali_chart.html"
    svg_path.write_text(viz.to_svg(), encoding="utf-8")
    html_path.write_text(viz.to_html(), encoding="utf-8")
    viz.unmount()

    print_section("OUTPUT")
    print(f"  SVG  : {svg_path}")
    print(f"  HTML : {html_path}")
    print()


if __name__ == "__main__":
    run_demo()
