"""
pdf_report.py
=============
Generates a printable birth-chart PDF from a ChartVisualizationData payload.
Uses ReportLab for PDF generation; the chart diagram is the renderer's
scene transcribed to reportlab.graphics shapes.

Install: pip install reportlab
"""

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.lib.colors import HexColor, toColor
from reportlab.graphics.shapes import Drawing, Group, Line, Polygon, String
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, HRFlowable,
)
from reportlab.lib.enums import TA_CENTER, TA_LEFT
import io
from datetime import datetime
from xml.sax.saxutils import escape

from kundali_visualizer.core.models import ChartVisualizationData
from kundali_visualizer.core.zodiac import PLANETS, dms
from kundali_visualizer.tools.renderer import ChartVisualizer

# ── Color palette ──────────────────────────────────────────────
VOID      = HexColor("#0B0B0F")
GOLD      = HexColor("#C9A96E")
SURFACE   = HexColor("#1E1C28")
MUTED     = HexColor("#6E6A7C")
WHITE     = HexColor("#FFFFFF")

DIAGRAM_WIDTH = 15 * cm

_TABLE_STYLE = [
    ("FONTNAME",    (0,0), (-1,0),  "Helvetica-Bold"),
    ("FONTNAME",    (0,1), (-1,-1), "Helvetica"),
    ("FONTSIZE",    (0,0), (-1,-1), 8.5),
    ("BACKGROUND",  (0,0), (-1,0),  SURFACE),
    ("TEXTCOLOR",   (0,0), (-1,0),  GOLD),
    ("ROWBACKGROUNDS",(0,1),(-1,-1),[HexColor("#FAFAFA"), WHITE]),
    ("GRID",        (0,0), (-1,-1), 0.3, HexColor("#DDDDDD")),
    ("TOPPADDING",  (0,0), (-1,-1), 5),
    ("BOTTOMPADDING",(0,0),(-1,-1), 5),
    ("LEFTPADDING", (0,0), (-1,-1), 6),
    ("VALIGN",      (0,0), (-1,-1), "TOP"),
]


def _color(value, default="#2c3e50"):
    return toColor(value or default, toColor(default))


def planet_rows(data: ChartVisualizationData) -> list:
    """Planet table rows, in the usual Sun..Ketu order; other bodies last."""
    def rank(p):
        return PLANETS.index(p.planet) if p.planet in PLANETS else len(PLANETS)

    return [
        [
            p.planet,
            p.sign or "—",
            dms(p.degree_in_sign),
            f"{p.degree:.2f}°",
            f"H{p.house}",
            "℞" if p.is_retrograde else "",
        ]
        for p in sorted(data.planets, key=rank)
    ]


def chart_drawing(viz: ChartVisualizer, width: float = DIAGRAM_WIDTH) -> Drawing:
    """Scene -> reportlab Drawing. SVG y grows downwards, PDF y upwards."""
    w, h = viz.settings.CHART_WIDTH, viz.settings.CHART_HEIGHT
    scale = width / w
    group = Group()

    for n in viz.scene:
        st = n.style
        if n.kind == "polygon":
            flat = []
            for x, y in n.points:
                flat.extend([x, h - y])
            group.add(Polygon(flat, fillColor=None,
                              strokeColor=_color(st.get("stroke")),
                              strokeWidth=st.get("stroke_width", 1)))
        elif n.kind == "line":
            (x1, y1), (x2, y2) = n.points
            line = Line(x1, h - y1, x2, h - y2,
                        strokeColor=_color(st.get("stroke")),
                        strokeWidth=st.get("stroke_width", 1))
            if st.get("stroke_dasharray"):
                line.strokeDashArray = [5, 5]
            group.add(line)
        else:
            bold = st.get("font_weight") == "bold"
            anchor = "middle" if st.get("text_anchor") == "middle" else "start"
            group.add(String(n.x, h - n.y, n.text,
                             fontName="Helvetica-Bold" if bold else "Helvetica",
                             fontSize=st.get("font_size", 10),
                             fillColor=_color(st.get("fill")),
                             textAnchor=anchor))

    group.scale(scale, scale)
    drawing = Drawing(w * scale, h * scale)
    drawing.add(group)
    return drawing


def generate_pdf_report(data: ChartVisualizationData, name: str = "Native") -> bytes:
    """
    Generate a birth-chart PDF report.
    Returns PDF as bytes.
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=2*cm, leftMargin=2*cm,
        topMargin=2*cm, bottomMargin=2*cm,
        title=f"Birth Chart — {name}",
        author="Kundali Chart Visualizer",
    )

    styles = getSampleStyleSheet()
    story = []

    title_style = ParagraphStyle(
        "Title", parent=styles["Normal"],
        fontSize=24, fontName="Helvetica",
        textColor=VOID, alignment=TA_CENTER,
        spaceAfter=6,
    )
    subtitle_style = ParagraphStyle(
        "Subtitle", parent=styles["Normal"],
        fontSize=11, fontName="Helvetica",
        textColor=MUTED, alignment=TA_CENTER,
        spaceAfter=20,
    )
    body_style = ParagraphStyle(
        "Body", parent=styles["Normal"],
        fontSize=9, fontName="Helvetica",
        textColor=VOID, spaceAfter=4, leading=14,
    )
    cell_style = ParagraphStyle(
        "Cell", parent=styles["Normal"],
        fontSize=8, fontName="Helvetica", leading=10,
    )
    disclaimer_style = ParagraphStyle(
        "Disclaimer", parent=styles["Normal"],
        fontSize=7, fontName="Helvetica-Oblique",
        textColor=MUTED, alignment=TA_CENTER,
        spaceBefore=20,
    )

    def gold_bar(text):
        return Table(
            [[Paragraph(text, ParagraphStyle("GoldBar", parent=styles["Normal"],
                fontSize=11, fontName="Helvetica-Bold",
                textColor=WHITE, alignment=TA_LEFT))]],
            colWidths=[17*cm],
            style=TableStyle([
                ("BACKGROUND", (0,0), (-1,-1), VOID),
                ("TOPPADDING",    (0,0), (-1,-1), 8),
                ("BOTTOMPADDING", (0,0), (-1,-1), 8),
                ("LEFTPADDING",   (0,0), (-1,-1), 12),
                ("RIGHTPADDING",  (0,0), (-1,-1), 12),
            ])
        )

    # ── HEADER ────────────────────────────────────────────────
    story.append(Paragraph("☽  KUNDALI", title_style))
    story.append(Paragraph(f"North Indian Birth Chart · {escape(name or 'Native')}", subtitle_style))
    story.append(HRFlowable(width="100%", thickness=0.5, color=GOLD))
    story.append(Spacer(1, 0.4*cm))

    # ── CHART ─────────────────────────────────────────────────
    viz = ChartVisualizer()
    story.append(gold_bar("RASI CHART (D1)"))
    story.append(Spacer(1, 0.3*cm))
    if viz.draw(data):
        story.append(chart_drawing(viz))
        story.append(Paragraph(
            f"<b>Lagna (Ascendant):</b> {viz.layout.ascendant}", body_style))
        for diag in viz.diagnostics:
            story.append(Paragraph(f"Note: {escape(diag.message)}", body_style))
    else:
        story.append(Paragraph(
            "Chart could not be drawn: " +
            "; ".join(escape(d.message) for d in viz.diagnostics), body_style))
    story.append(Spacer(1, 0.5*cm))

    # ── PLANET POSITIONS ──────────────────────────────────────
    story.append(gold_bar("PLANETARY POSITIONS"))
    story.append(Spacer(1, 0.3*cm))

    planet_header = [["Planet", "Sign", "Degree", "Longitude", "House", "Retro"]]
    planet_table = Table(
        planet_header + planet_rows(data),
        colWidths=[3*cm, 3.4*cm, 3.2*cm, 3*cm, 2*cm, 2*cm]
    )
    planet_table.setStyle(TableStyle(_TABLE_STYLE + [
        ("ALIGN", (4,0), (5,-1), "CENTER"),
    ]))
    story.append(planet_table)
    story.append(Spacer(1, 0.5*cm))

    # ── HOUSES ────────────────────────────────────────────────
    if data.houses:
        story.append(gold_bar("HOUSES (BHAVAS)"))
        story.append(Spacer(1, 0.3*cm))
        house_header = [["House", "Sign", "Lord", "Significations"]]
        house_rows = [
            [f"H{h.house_number}", h.sign or "—", h.lord or "—",
             Paragraph(escape(h.meaning) or "—", cell_style)]
            for h in sorted(data.houses, key=lambda h: h.house_number)
        ]
        h_table = Table(house_header + house_rows,
                        colWidths=[1.8*cm, 3.2*cm, 2.8*cm, 8.8*cm])
        h_table.setStyle(TableStyle(_TABLE_STYLE))
        story.append(h_table)
        story.append(Spacer(1, 0.5*cm))

    # ── ASPECTS ───────────────────────────────────────────────
    if data.aspects:
        story.append(gold_bar("ASPECTS"))
        story.append(Spacer(1, 0.3*cm))
        a_rows = [
            [a.from_planet, a.to_planet, a.aspect_type, f"{a.orb:.2f}°", a.strength or "—"]
            for a in data.aspects
        ]
        a_table = Table([["From", "To", "Aspect", "Orb", "Strength"]] + a_rows,
                        colWidths=[3.2*cm, 3.2*cm, 4*cm, 2.8*cm, 3.4*cm])
        a_table.setStyle(TableStyle(_TABLE_STYLE))
        story.append(a_table)
        story.append(Spacer(1, 0.5*cm))

    # ── FOOTER ────────────────────────────────────────────────
    story.append(HRFlowable(width="100%", thickness=0.5, color=GOLD))
    story.append(Paragraph(
        f"Generated by Kundali Chart Visualizer · {datetime.now().strftime('%d %B %Y')} · "
        "Whole-sign houses, North Indian layout",
        disclaimer_style
    ))

    doc.build(story)
    buffer.seek(0)
    return buffer.read()
