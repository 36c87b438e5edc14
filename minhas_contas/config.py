"""Configuration management for Minhas Contas.

This module centralizes all configuration values including paths,
rule thresholds, and environment variable overrides.  A local ``.env``
file is honoured so overrides can live next to the project.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

# Base project root - assumes this file is in minhas_contas/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("MINHAS_CONTAS_DATA_DIR", _PROJECT_ROOT / "data"))
REPORTS_DIR = DATA_DIR / "reports"

# Persisted snapshot of the panel (name, transactions, goals)
DATA_FILE = Path(
    os.getenv("MINHAS_CONTAS_DATA_FILE", DATA_DIR / "finance_data.json")
).resolve()

# UI preferences (colour theme)
PREFERENCES_FILE = DATA_DIR / "preferences.json"

# Domain defaults
DEFAULT_PANEL_NAME = "Meu Painel"
SAVINGS_CATEGORY = "Poupança"
NEW_GOAL_NAME = "Nova Meta"

# Advisory rules
UPCOMING_WINDOW_DAYS = 7
BUDGET_CAUTION_RATIO = 0.8
MIN_SECTIONS_BEFORE_TIPS = 2
ADVISORY_LATENCY_SECONDS = float(os.getenv("MINHAS_CONTAS_ADVISORY_LATENCY", "0.5"))

# Analysis views
HISTORY_MONTHS = 6
SAVINGS_SUGGESTION_PERCENTS: Tuple[float, ...] = (0.05, 0.10, 0.15)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, REPORTS_DIR, DATA_FILE.parent]:
        directory.mkdir(parents=True, exist_ok=True)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for an entry point.

    Args:
        level: Level name such as ``"DEBUG"``.  Defaults to ``$LOG_LEVEL``
            and then ``INFO``.
    """
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
    )
