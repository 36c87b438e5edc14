"""Session state and shared sidebar for the multi-page dashboard.

The panel snapshot lives in ``st.session_state`` for the browser session.
Pages read it with :func:`get_person_data` and replace it wholesale through
:func:`commit`, which also persists it to disk.
"""

from __future__ import annotations

import logging

import streamlit as st

from .analytics import balance
from .formatting import format_currency
from .ledger import rename
from .models import PersonData
from .preferences import load_theme, save_theme
from .storage import load_person_data, save_person_data

logger = logging.getLogger(__name__)

_load_impl = load_person_data
_save_impl = save_person_data
_theme_load_impl = load_theme
_theme_save_impl = save_theme

DARK_THEME_CSS = """
<style>
.stApp {
    background-color: #111827;
    color: #E5E7EB;
}
.stMetric {
    background-color: #1F2937;
    padding: 1rem;
    border-radius: 0.5rem;
}
</style>
"""


def get_person_data() -> PersonData:
    """Current snapshot, loaded from disk on first access in the session."""
    if 'person_data' not in st.session_state:
        st.session_state['person_data'] = _load_impl()
    return st.session_state['person_data']


def commit(new_data: PersonData) -> bool:
    """Replace the session snapshot and save it.

    A failed save keeps the in-memory snapshot and flags the session so the
    sidebar can show a warning.
    """
    st.session_state['person_data'] = new_data
    saved = bool(_save_impl(new_data))
    st.session_state['save_failed'] = not saved
    if not saved:
        logger.warning("Snapshot kept in memory only; local save failed")
    return saved


def get_theme() -> str:
    if 'theme' not in st.session_state:
        st.session_state['theme'] = _theme_load_impl()
    return st.session_state['theme']


def toggle_theme() -> str:
    theme = 'light' if get_theme() == 'dark' else 'dark'
    st.session_state['theme'] = theme
    _theme_save_impl(theme)
    return theme


def apply_theme() -> None:
    """Inject dark styling when the dark theme is active."""
    if get_theme() == 'dark':
        st.markdown(DARK_THEME_CSS, unsafe_allow_html=True)


def _rerun() -> None:
    rerun = getattr(st, 'rerun', None)
    if callable(rerun):
        rerun()
        return
    experimental = getattr(st, 'experimental_rerun', None)
    if callable(experimental):
        experimental()


def render_shared_sidebar() -> PersonData:
    """Render the panel name editor, theme toggle and balance on every page."""
    person_data = get_person_data()
    apply_theme()

    st.sidebar.subheader("🗂️ Painel")
    new_name = st.sidebar.text_input("Nome do Painel", value=person_data.name, key='panel_name')
    if new_name.strip() and new_name != person_data.name:
        person_data = rename(person_data, new_name)
        commit(person_data)

    icon = "☀️" if get_theme() == 'dark' else "🌙"
    if st.sidebar.button(f"{icon} Alternar tema"):
        toggle_theme()
        _rerun()

    st.sidebar.metric("Saldo Atual", format_currency(balance(person_data.transactions)))
    if st.session_state.get('save_failed'):
        st.sidebar.warning("⚠️ Não foi possível salvar os dados localmente.")
    return person_data
