"""UI components for the Minhas Contas dashboard.

Forms return plain dicts (or ``None`` when not submitted) and the page
scripts apply them through :mod:`minhas_contas.ledger`, so rendering stays
separate from state changes.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

import streamlit as st
from streamlit.errors import StreamlitAPIException

from .analytics import FinanceAnalytics, NO_TOP_CATEGORY, savings_rate_label
from .formatting import (
    escape_for_markdown,
    format_compact_currency,
    format_currency,
    format_date,
    format_signed_amount,
)
from .models import (
    PersonData,
    SavingsGoal,
    Transaction,
    TransactionType,
    categories_for,
    category_icon,
)
from .savings import GoalDraft, SavingsSuggestion
from .visualization import (
    create_balance_history_chart,
    create_category_donut_chart,
    create_income_expense_chart,
)


class PanelUI:
    """Streamlit components for the panel pages."""

    def __init__(self, *, configure_page: bool = False):
        if configure_page:
            self.setup_page_config()

    def setup_page_config(self, page_title: str = "Minhas Contas", page_icon: str = "💰") -> None:
        """Configure Streamlit page settings; must run before any other element."""
        try:
            st.set_page_config(
                page_title=page_title,
                page_icon=page_icon,
                layout="wide",
                initial_sidebar_state="expanded",
            )
        except StreamlitAPIException:
            # Already configured in this script run.
            pass

    def render_header(self, person_data: PersonData) -> None:
        st.title(f"💰 {person_data.name}")
        st.markdown("Tudo o que você precisa para tomar controle das suas finanças em um só lugar.")

    def render_metric_cards(self, analytics: FinanceAnalytics) -> None:
        """Render balance, income, expense, top category and savings rate."""
        summary = analytics.summary()
        col1, col2, col3, col4, col5 = st.columns(5)

        with col1:
            st.metric(
                "Saldo Atual",
                format_compact_currency(summary['balance']),
                delta="Situação positiva" if summary['balance'] >= 0 else "Atenção necessária",
                delta_color="normal" if summary['balance'] >= 0 else "inverse",
            )
        with col2:
            st.metric("Receitas", format_currency(summary['income']))
        with col3:
            st.metric("Despesas", format_currency(summary['expenses']))
        with col4:
            top = summary['top_category']
            st.metric(
                "Maior Categoria",
                top.category if top != NO_TOP_CATEGORY else "Sem dados",
                delta=format_compact_currency(top.amount) if top.amount > 0 else None,
                delta_color="off",
            )
        with col5:
            rate = summary['savings_rate']
            st.metric("Taxa de Poupança", f"{rate:.1f}%", delta=savings_rate_label(rate), delta_color="off")

        st.caption(
            f"Maior despesa: {format_currency(summary['largest_expense'])} · "
            f"Média mensal de gastos: {format_currency(summary['average_monthly_expense'])}"
        )

    def render_history_charts(self, analytics: FinanceAnalytics) -> None:
        history = analytics.monthly_history()
        col1, col2 = st.columns(2)
        with col1:
            st.plotly_chart(create_balance_history_chart(history), use_container_width=True)
        with col2:
            st.plotly_chart(create_income_expense_chart(history), use_container_width=True)

    def render_category_breakdown(self, analytics: FinanceAnalytics) -> None:
        """Donut chart plus a legend with each category's share."""
        st.subheader("📊 Análise de Despesas")
        breakdown = analytics.category_breakdown()
        if breakdown.empty:
            st.info("Adicione algumas despesas para ver a análise por categoria.")
            return
        col1, col2 = st.columns([2, 1])
        with col1:
            st.plotly_chart(create_category_donut_chart(breakdown), use_container_width=True)
        with col2:
            for _, row in breakdown.iterrows():
                st.markdown(
                    f"{category_icon(row['Category'])} **{row['Category']}**: "
                    f"{escape_for_markdown(format_currency(row['Total_Spent']))} ({row['Share']:.0f}%)"
                )

    def render_add_transaction_form(self) -> Optional[Dict]:
        """Render the new income/expense form."""
        st.subheader("➕ Nova Transação")
        label = st.radio("Tipo", ["Nova Despesa", "Nova Receita"], horizontal=True, key='new_txn_type')
        txn_type = TransactionType.EXPENSE if label == "Nova Despesa" else TransactionType.INCOME

        with st.form("add_transaction_form", clear_on_submit=True):
            description = st.text_input("Descrição", placeholder="Ex: Almoço")
            amount = st.number_input("Valor (R$)", min_value=0.0, step=1.0, format="%.2f")
            category = st.selectbox("Categoria", categories_for(txn_type))
            due_date = None
            if txn_type is TransactionType.EXPENSE:
                has_due_date = st.checkbox("Tem data de vencimento?")
                picked = st.date_input("Vencimento", format="DD/MM/YYYY")
                due_date = picked if has_due_date else None
            submitted = st.form_submit_button("Adicionar")

        if submitted:
            return {
                'description': description,
                'amount': amount,
                'type': txn_type,
                'category': category,
                'due_date': due_date,
            }
        return None

    def render_transaction_row(self, txn: Transaction, today: date) -> Optional[str]:
        """Render one ledger row; returns ``'edit'`` or ``'delete'`` when clicked."""
        col1, col2, col3, col4 = st.columns([6, 2, 1, 1])
        with col1:
            line = f"{category_icon(txn.category)} **{txn.description}** · {txn.category} · {format_date(txn.date)}"
            if txn.due_date:
                line += f" · Vencimento: {format_date(txn.due_date)}"
            if txn.is_overdue(today):
                line += " · :red[**Atrasada**]"
            st.markdown(line)
        with col2:
            color = "green" if txn.is_income else "red"
            st.markdown(f":{color}[{escape_for_markdown(format_signed_amount(txn.amount, txn.is_income))}]")
        with col3:
            if st.button("✏️", key=f"edit_{txn.id}", help="Editar"):
                return 'edit'
        with col4:
            if st.button("🗑️", key=f"delete_{txn.id}", help="Excluir"):
                return 'delete'
        return None

    def render_edit_transaction_form(self, txn: Transaction) -> Optional[Dict]:
        """Full edit of an existing transaction; returns the changed fields."""
        with st.form(f"edit_form_{txn.id}"):
            st.markdown(f"**Editar:** {txn.description}")
            description = st.text_input("Descrição", value=txn.description)
            amount = st.number_input("Valor (R$)", min_value=0.0, value=float(txn.amount), step=1.0, format="%.2f")
            type_label = st.selectbox(
                "Tipo", ["Despesa", "Receita"], index=0 if txn.is_expense else 1,
            )
            txn_type = TransactionType.EXPENSE if type_label == "Despesa" else TransactionType.INCOME
            options = categories_for(txn_type)
            if txn.category not in options:
                options.append(txn.category)
            category = st.selectbox("Categoria", options, index=options.index(txn.category))
            clear_due = st.checkbox("Sem vencimento", value=txn.due_date is None)
            due_date = st.date_input("Vencimento", value=txn.due_date or date.today(), format="DD/MM/YYYY")
            col1, col2 = st.columns(2)
            with col1:
                saved = st.form_submit_button("Salvar")
            with col2:
                cancelled = st.form_submit_button("Cancelar")

        if cancelled:
            return {}
        if saved:
            return {
                'description': description,
                'amount': amount,
                'type': txn_type,
                'category': category,
                'due_date': None if clear_due else due_date,
            }
        return None

    def render_goal(self, goal: SavingsGoal) -> Optional[float]:
        """Render a goal card; returns the deposit amount when submitted."""
        with st.container(border=True):
            col1, col2 = st.columns([3, 1])
            with col1:
                st.markdown(f"🐷 **{goal.name}**")
                st.markdown(
                    f"{escape_for_markdown(format_currency(goal.current_amount))} de "
                    f"{escape_for_markdown(format_currency(goal.target_amount))}"
                )
            with col2:
                st.metric("Progresso", f"{goal.progress:.1f}%")
            st.progress(min(goal.progress / 100, 1.0))
            if goal.achieved:
                st.caption("🎉 Meta alcançada! Parabéns!")

            with st.form(f"deposit_form_{goal.id}", clear_on_submit=True):
                amount = st.number_input("Depositar (R$)", min_value=0.0, step=10.0, format="%.2f")
                if st.form_submit_button("Depositar"):
                    return amount
        return None

    def render_goal_form(self, draft: Optional[GoalDraft] = None) -> Optional[Dict]:
        """Render the new savings goal form, optionally prefilled from a suggestion."""
        st.subheader("🎯 Nova Meta de Poupança")
        with st.form("goal_form", clear_on_submit=True):
            name = st.text_input(
                "Nome da Meta", value=draft.name if draft else "", placeholder="Ex: Férias, Emergência",
            )
            target = st.number_input(
                "Valor Alvo (R$)", min_value=0.0, value=float(draft.target_amount) if draft else 0.0, step=100.0,
            )
            submitted = st.form_submit_button("Criar Meta")

        if submitted:
            return {'name': name, 'target_amount': target}
        return None

    def render_savings_suggestions(
        self,
        suggestions: List[SavingsSuggestion],
        has_goal: bool,
    ) -> Optional[SavingsSuggestion]:
        """Render the quick suggestions; returns the one the user applied."""
        st.markdown("**Sugestões Rápidas**")
        chosen = None
        columns = st.columns(len(suggestions))
        for column, suggestion in zip(columns, suggestions):
            with column:
                st.metric(suggestion.label, format_currency(suggestion.amount))
                st.code(format_currency(suggestion.amount), language=None)
                label = "Aplicar" if has_goal else "Criar Meta"
                if st.button(label, key=f"apply_{suggestion.percent}"):
                    chosen = suggestion
        return chosen

    def render_transaction_table(self, person_data: PersonData) -> None:
        st.dataframe(
            [
                {
                    'Descrição': t.description,
                    'Categoria': t.category,
                    'Vencimento': format_date(t.due_date) if t.due_date else '-',
                    'Valor': format_signed_amount(t.amount, t.is_income),
                }
                for t in person_data.transactions
            ],
            use_container_width=True,
        )
