"""
test_api.py
===========
HTTP surface: layout JSON, SVG/HTML rendering, kundali adapter and PDF.

Run with: python -m pytest kundali_visualizer -v
"""

import pytest
from fastapi.testclient import TestClient

from main import app
from pdf_report import generate_pdf_report, planet_rows
from kundali_visualizer import ChartVisualizationData
from kundali_visualizer.core.zodiac import SIGNS
from kundali_visualizer.tools.tooltip import TOOLTIP_MARKER


client = TestClient(app)


def _payload(ascendant="Leo", planets=None):
    start = SIGNS.index(ascendant) if ascendant in SIGNS else 0
    houses = [{"houseNumber": 1, "sign": ascendant}] + [
        {"houseNumber": i + 1, "sign": SIGNS[(start + i) % 12]} for i in range(1, 12)
    ]
    if planets is None:
        planets = [
            {"planet": "Mars", "degree": 222.5, "sign": "Scorpio", "house": 4,
             "isRetrograde": True},
            {"planet": "Sun", "degree": 125.0, "sign": "Leo", "house": 1},
        ]
    return {"planets": planets, "houses": houses, "aspects": []}


def test_health():
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert "POST /api/chart/svg" in body["endpoints"]


def test_layout_endpoint():
    r = client.post("/api/chart/layout", json=_payload())
    assert r.status_code == 200
    body = r.json()
    assert body["rendered"] is True

    layout = body["layout"]
    assert layout["ascendant"] == "Leo"
    assert [h["house"] for h in layout["houses"]] == list(range(1, 13))
    mars = next(p for p in layout["planets"] if p["planet"] == "Mars")
    assert mars["house"] == 4 and mars["stack_index"] == 0


def test_layout_endpoint_reports_bad_ascendant():
    r = client.post("/api/chart/layout", json=_payload("Unknownsign"))
    assert r.status_code == 200
    body = r.json()
    assert body["rendered"] is False
    assert body["diagnostics"][0]["kind"] == "InvalidAscendant"


def test_layout_endpoint_validates_house_numbers():
    payload = _payload()
    payload["houses"][5]["houseNumber"] = 13
    assert client.post("/api/chart/layout", json=payload).status_code == 422


def test_svg_endpoint():
    r = client.post("/api/chart/svg", json=_payload())
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("image/svg+xml")
    assert r.headers["x-chart-rendered"] == "true"
    assert 'id="planet-mars-4-0"' in r.text


def test_svg_endpoint_blank_chart():
    r = client.post("/api/chart/svg", json=_payload("Unknownsign"))
    assert r.status_code == 200
    assert r.headers["x-chart-rendered"] == "false"
    assert "<text" not in r.text


def test_html_endpoint():
    r = client.post("/api/chart/html", json=_payload())
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert TOOLTIP_MARKER in r.text


def test_from_kundali_endpoint():
    r = client.post("/api/chart/from-kundali", json={
        "chart": {
            "lagna": {"sign": "Aries"},
            "planets": {"Moon": {"sidereal_longitude": 33.0, "sign": "Taurus",
                                 "house": 2, "is_retrograde": False}},
        },
    })
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["houses"][0]["houseNumber"] == 1
    assert data["houses"][0]["lord"] == "Mars"
    assert data["planets"][0]["color"] == "#4C78A8"


def test_from_kundali_endpoint_rejects_chart_without_lagna():
    r = client.post("/api/chart/from-kundali", json={"chart": {"planets": {}}})
    assert r.status_code == 400


@pytest.mark.parametrize("ascendant", ["Leo", "Unknownsign"])
def test_pdf_endpoint(ascendant):
    r = client.post("/api/pdf", json={"data": _payload(ascendant), "name": "Test"})
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert r.content.startswith(b"%PDF")


def test_pdf_escapes_free_text():
    payload = _payload(planets=[
        {"planet": "Sun", "sign": "Ophiuchus <13th>", "degree": 10.0},
        {"planet": "Mars", "sign": "Scorpio", "degree": 222.5, "house": 4},
    ])
    payload["houses"][1]["meaning"] = "Wealth <family> & speech"
    data = ChartVisualizationData.model_validate(payload)

    pdf = generate_pdf_report(data, name="A<B & C")
    assert pdf.startswith(b"%PDF")

    r = client.post("/api/pdf", json={"data": payload, "name": "<b>"})
    assert r.status_code == 200


def test_pdf_planet_table_in_traditional_order():
    data = ChartVisualizationData.model_validate(_payload(planets=[
        {"planet": "Ketu", "sign": "Aquarius", "degree": 310.0},
        {"planet": "Chiron", "sign": "Aries", "degree": 5.0},
        {"planet": "Moon", "sign": "Leo", "degree": 130.0},
        {"planet": "Sun", "sign": None, "degree": 125.0},
    ]))
    rows = planet_rows(data)
    assert [r[0] for r in rows] == ["Sun", "Moon", "Ketu", "Chiron"]
    assert rows[0][1] == "—"
    assert rows[1][2] == "10°0'0.0\""
