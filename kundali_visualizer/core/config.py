"""
config.py
=========
Runtime settings (environment / .env via pydantic-settings) and the
fixed drawing style of the chart.

Resolution order for the env file: ENV_FILE > .env.{APP_ENV} > .env
"""

import os
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

_cwd = Path.cwd()
_env_file_from_env = os.getenv("ENV_FILE")
if _env_file_from_env:
    _ENV_FILE_PATH = _env_file_from_env
else:
    _app_env = os.getenv("APP_ENV", "dev")
    _candidate_specific = _cwd / f".env.{_app_env}"
    _ENV_FILE_PATH = _candidate_specific if _candidate_specific.exists() else _cwd / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    APP_NAME:    str = "Kundali Chart Visualizer API"
    APP_VERSION: str = "1.0.0"
    APP_ENV:     str = "dev"
    LOG_LEVEL:   str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Logical canvas; house offsets are multiples of CHART_SIZE
    CHART_WIDTH:  int = 600
    CHART_HEIGHT: int = 600
    CHART_SIZE:   int = 120
    CHART_TITLE:  str = "Vedic Birth Chart (D1)"
    CHART_FOOTER: str = ""
    SHOW_ASPECTS: bool = False

    # Tooltip position relative to the pointer (page coordinates)
    TOOLTIP_OFFSET_X: int = 10
    TOOLTIP_OFFSET_Y: int = -10


settings = Settings()


CHART_STYLE = {
    "font_family": "Arial, sans-serif",
    "background": "#ffffff",
    "stroke_width": 2,
    "inner_stroke_width": 1,
    "font_size": {
        "title": 18,
        "house_number": 14,
        "sign": 10,
        "planet": 12,
        "retrograde": 8,
        "footer": 10,
    },
    "colors": {
        "border": "#2c3e50",
        "inner_lines": "#34495e",
        "house_number": "#2c3e50",
        "sign": "#7f8c8d",
        "planet": "#2c3e50",
        "retrograde": "#e74c3c",
        "aspect_strong": "#9b59b6",
        "aspect_weak": "#bdc3c7",
    },
}
