"""Formatting utilities for currency, dates and text display (pt-BR)."""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

MONTH_ABBREVIATIONS = (
    "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
)


def _brl_number(amount: float) -> str:
    # 1,234.56 -> 1.234,56
    return f"{abs(amount):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")


def format_currency(amount: Union[float, int]) -> str:
    """Format an amount as Brazilian reais.

    Example:
        >>> format_currency(1234.56)
        'R$ 1.234,56'
        >>> format_currency(-10)
        '-R$ 10,00'
    """
    sign = "-" if round(amount, 2) < 0 else ""
    return f"{sign}R$ {_brl_number(amount)}"


def format_signed_amount(amount: float, is_income: bool) -> str:
    """Format a ledger entry with its direction, e.g. ``'- R$ 15,00'``."""
    return f"{'+' if is_income else '-'} R$ {_brl_number(amount)}"


def format_compact_currency(value: float) -> str:
    """Short currency label for metric cards and chart axes."""
    if value >= 1_000_000:
        return f"R$ {value / 1_000_000:.1f}M"
    if value >= 10_000:
        return f"R$ {value / 1000:.0f}K"
    if value >= 1000:
        return f"R$ {value / 1000:.1f}K"
    return f"R$ {value:.0f}"


def format_date(value: Union[date, datetime]) -> str:
    """Format a date as ``dd/mm/yyyy``."""
    return value.strftime("%d/%m/%Y")


def month_label(year: int, month: int) -> str:
    """Short month label such as ``'jun/24'``."""
    return f"{MONTH_ABBREVIATIONS[month - 1]}/{year % 100:02d}"


def escape_for_markdown(text: str) -> str:
    """Escape dollar signs so Streamlit markdown does not start LaTeX math."""
    return text.replace("$", "\\$")
