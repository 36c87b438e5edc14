"""Lightweight persisted UI preferences (colour theme)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .config import PREFERENCES_FILE

logger = logging.getLogger(__name__)

THEMES = ('light', 'dark')


def detect_system_theme() -> str:
    """Base theme Streamlit is configured with, defaulting to light."""
    try:
        import streamlit as st
        base = st.get_option('theme.base')
    except (AttributeError, RuntimeError, ImportError):
        base = None
    return 'dark' if base == 'dark' else 'light'


def _read(target: Path) -> Dict[str, Any]:
    if not target.exists():
        return {}
    try:
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable preferences %s: %s", target, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_theme(path: Optional[Path] = None, fallback: Optional[str] = None) -> str:
    """Stored theme, else ``fallback``, else the system theme."""
    stored = _read(Path(path) if path is not None else PREFERENCES_FILE).get('theme')
    if stored in THEMES:
        return stored
    if fallback in THEMES:
        return fallback
    return detect_system_theme()


def save_theme(theme: str, path: Optional[Path] = None) -> bool:
    if theme not in THEMES:
        raise ValueError(f"Unknown theme: {theme!r}")
    target = Path(path) if path is not None else PREFERENCES_FILE
    data = _read(target)
    data['theme'] = theme
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open('w', encoding='utf-8') as handle:
            json.dump(data, handle, indent=2, sort_keys=True)
    except OSError as exc:
        logger.warning("Failed to save preferences to %s: %s", target, exc)
        return False
    return True
