"""
Kundali Chart Visualizer — FastAPI Backend v1.0
===============================================
Endpoints:
  POST /api/chart/layout        — Computed North Indian layout (JSON)
  POST /api/chart/svg           — Rendered chart (SVG)
  POST /api/chart/html          — Interactive chart page with hover tooltips
  POST /api/chart/from-kundali  — Kundali chart dict -> visualizer payload
  POST /api/pdf                 — PDF report
  GET  /api/health              — Health check
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response, StreamingResponse
from pydantic import BaseModel, Field
from typing import List, Optional
import io

import structlog

from kundali_visualizer import (
    ChartVisualizationData, ChartVisualizer, LayoutError, build_visualization_data,
    layout_chart, render_html,
)
from kundali_visualizer.core.config import settings
from kundali_visualizer.core.logging import setup_logging
from pdf_report import generate_pdf_report

setup_logging(settings.LOG_LEVEL)
log = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="North Indian birth-chart layout, SVG/HTML rendering and PDF reports",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Models ─────────────────────────────────────────────

class KundaliPayloadRequest(BaseModel):
    chart:   dict
    aspects: List[dict] = Field(default_factory=list)


class PDFRequest(BaseModel):
    data: ChartVisualizationData
    name: Optional[str] = "Native"


# ── Endpoints ──────────────────────────────────────────────────

@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "endpoints": [
            "POST /api/chart/layout",
            "POST /api/chart/svg",
            "POST /api/chart/html",
            "POST /api/chart/from-kundali",
            "POST /api/pdf",
        ],
    }


@app.post("/api/chart/layout")
def layout_endpoint(data: ChartVisualizationData):
    try:
        layout = layout_chart(
            data,
            width=settings.CHART_WIDTH,
            height=settings.CHART_HEIGHT,
            size=settings.CHART_SIZE,
        )
    except LayoutError as e:
        log.warning("layout_rejected", kind=e.kind.value, message=str(e))
        return {"success": True, "rendered": False,
                "diagnostics": [e.diagnostic.to_dict()]}
    return {"success": True, "rendered": True, "layout": layout.to_dict()}


@app.post("/api/chart/svg")
def svg_endpoint(data: ChartVisualizationData):
    viz = ChartVisualizer()
    rendered = viz.draw(data)
    return Response(
        content=viz.to_svg(),
        media_type="image/svg+xml",
        headers={"X-Chart-Rendered": "true" if rendered else "false"},
    )


@app.post("/api/chart/html", response_class=HTMLResponse)
def html_endpoint(data: ChartVisualizationData):
    return HTMLResponse(render_html(data))


@app.post("/api/chart/from-kundali")
def from_kundali_endpoint(req: KundaliPayloadRequest):
    try:
        payload = build_visualization_data(req.chart, req.aspects)
        return {"success": True, "data": payload.model_dump(by_alias=True)}
    except Exception as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/api/pdf")
def pdf_endpoint(req: PDFRequest):
    try:
        pdf_bytes = generate_pdf_report(req.data, req.name)
        return StreamingResponse(
            io.BytesIO(pdf_bytes),
            media_type="application/pdf",
            headers={
                "Content-Disposition": f"attachment; filename=kundali_{req.name}.pdf"
            },
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
