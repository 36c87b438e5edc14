"""Plotly visualisation helpers for the panel.

Each function accepts a DataFrame produced by :mod:`minhas_contas.analytics`
and returns a ``plotly.graph_objects.Figure`` that Streamlit renders via
``st.plotly_chart``.  Empty input yields a placeholder figure instead of an
error.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .formatting import format_compact_currency
from .models import category_color


def _empty_figure(message: str = "Sem dados para exibir") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=message)
    return fig


def create_balance_history_chart(history: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Line chart of the monthly net balance.

    Parameters
    ----------
    history : pandas.DataFrame
        Output of :func:`minhas_contas.analytics.monthly_balance_history`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Line chart with one point per month.
    """
    if history.empty:
        return _empty_figure()
    fig = px.line(history, x='Month_Label', y='Net', markers=True)
    fig.update_traces(
        line=dict(color='#3B82F6', width=3),
        hovertemplate='%{x}<br>Saldo: R$ %{y:,.2f}<extra></extra>',
    )
    peak = float(history['Net'].abs().max())
    fig.update_layout(
        title=title or "Evolução do Saldo",
        xaxis_title="Mês",
        yaxis_title="Saldo",
        yaxis=dict(tickprefix="R$ "),
    )
    if peak > 0:
        fig.add_annotation(
            text=f"Pico: {format_compact_currency(peak)}",
            xref='paper', yref='paper', x=1, y=1.08, showarrow=False,
        )
    return fig


def create_income_expense_chart(history: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Grouped bars of income and expenses per month."""
    if history.empty:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Bar(name='Receitas', x=history['Month_Label'], y=history['Income'], marker_color='#10B981'))
    fig.add_trace(go.Bar(name='Despesas', x=history['Month_Label'], y=history['Expenses'], marker_color='#EF4444'))
    fig.update_layout(title=title or "Receitas x Despesas", barmode='group', xaxis_title="Mês")
    return fig


def create_category_donut_chart(breakdown: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Donut chart of each category's share of total expenses.

    Parameters
    ----------
    breakdown : pandas.DataFrame
        Output of :func:`minhas_contas.analytics.category_breakdown`.
    title : str, optional
        Chart title.
    """
    if breakdown.empty:
        return _empty_figure("Adicione algumas despesas para ver a análise por categoria")
    colors = [category_color(category) for category in breakdown['Category']]
    fig = go.Figure(
        go.Pie(
            labels=breakdown['Category'],
            values=breakdown['Total_Spent'],
            hole=0.6,
            marker=dict(colors=colors),
            sort=False,
            textinfo='percent',
            hovertemplate='%{label}<br>R$ %{value:,.2f} (%{percent})<extra></extra>',
        )
    )
    fig.update_layout(title=title or "Análise de Despesas")
    return fig
