"""Main entry point for the Streamlit multi-page app.

Pages in the pages/ directory are discovered automatically and appear in the
sidebar.
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from minhas_contas.analytics import FinanceAnalytics
from minhas_contas.config import configure_logging, ensure_data_directories
from minhas_contas.session import render_shared_sidebar
from minhas_contas.ui import PanelUI


def main():
    """Render the landing page."""
    configure_logging()
    ensure_data_directories()

    ui = PanelUI(configure_page=True)
    person_data = render_shared_sidebar()

    ui.render_header(person_data)
    ui.render_metric_cards(FinanceAnalytics(person_data))

    st.markdown("---")
    st.markdown(
        "**Por onde começar:**\n\n"
        "- ✏️ **Transações**: registre receitas e despesas, com vencimento opcional\n"
        "- 🎯 **Metas**: crie metas de poupança e faça depósitos\n"
        "- 📊 **Visão Geral**: acompanhe a evolução do saldo e os gastos por categoria\n"
        "- 💡 **Assistente**: receba dicas com base nas suas contas\n"
        "- 📄 **Relatório**: baixe um resumo em PDF"
    )
    if not person_data.transactions:
        st.info("Nenhuma transação ainda. Comece pela página de Transações.")


main()
