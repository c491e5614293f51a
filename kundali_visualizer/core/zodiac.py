"""
zodiac.py
=========
Fixed vocabularies shared by the layout engine, renderer and report.

The sign order is significant: house rotation indexes into SIGNS.
"""

from typing import Dict, List

PLANETS = ["Sun","Moon","Mercury","Venus","Mars","Jupiter","Saturn","Rahu","Ketu"]

SIGNS = ["Aries","Taurus","Gemini","Cancer","Leo","Virgo",
         "Libra","Scorpio","Sagittarius","Capricorn","Aquarius","Pisces"]

# Parashari sign rulership
SIGN_LORDS: Dict[str, str] = {
    "Aries": "Mars",      "Taurus": "Venus",     "Gemini": "Mercury",
    "Cancer": "Moon",     "Leo": "Sun",          "Virgo": "Mercury",
    "Libra": "Venus",     "Scorpio": "Mars",     "Sagittarius": "Jupiter",
    "Capricorn": "Saturn", "Aquarius": "Saturn", "Pisces": "Jupiter",
}

HOUSE_THEMES: Dict[int, List[str]] = {
    1:  ["Self", "Personality", "Physical Appearance", "Vitality"],
    2:  ["Wealth", "Family", "Speech", "Values"],
    3:  ["Siblings", "Communication", "Courage", "Short Journeys"],
    4:  ["Home", "Mother", "Comfort", "Real Estate"],
    5:  ["Creativity", "Children", "Romance", "Education"],
    6:  ["Health", "Enemies", "Daily Work", "Service"],
    7:  ["Partnership", "Marriage", "Business", "Contracts"],
    8:  ["Transformation", "Longevity", "Occult", "Research"],
    9:  ["Philosophy", "Spirituality", "Higher Education", "Fortune"],
    10: ["Career", "Reputation", "Status", "Authority"],
    11: ["Friendship", "Wishes", "Gains", "Income"],
    12: ["Spirituality", "Liberation", "Foreign Lands", "Expenses"],
}

PLANET_COLORS: Dict[str, str] = {
    "Sun":     "#E4572E",
    "Moon":    "#4C78A8",
    "Mercury": "#2E8B57",
    "Venus":   "#FF7F0E",
    "Mars":    "#D62728",
    "Jupiter": "#8C564B",
    "Saturn":  "#6A5ACD",
    "Rahu":    "#7F7F7F",
    "Ketu":    "#2B2B2B",
}


def is_valid_sign(sign) -> bool:
    return sign in SIGNS


def abbreviation(name: str) -> str:
    """Two-letter upper-case label used inside the chart (e.g. 'Scorpio' -> 'SC')."""
    return name[:2].upper()


def degree_in_sign(degree: float) -> float:
    """Absolute sidereal longitude -> degree within its sign (0–30)."""
    return degree % 30.0


def dms(degrees: float) -> str:
    """Format decimal degrees as D°M'S\" string."""
    total = round(degrees * 3600, 1)
    d, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    return f"{int(d)}°{int(m)}'{round(s, 1)}\""


def sign_from_longitude(lon: float) -> str:
    return SIGNS[int(lon / 30) % 12]
