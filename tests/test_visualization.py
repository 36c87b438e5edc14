from datetime import date, datetime

import pandas as pd

from minhas_contas.analytics import category_breakdown, monthly_balance_history
from minhas_contas.models import Transaction
from minhas_contas.visualization import (
    create_balance_history_chart,
    create_category_donut_chart,
    create_income_expense_chart,
)


def sample_transactions():
    return [
        Transaction.create("Salário", 4000, "income", "Salário", now=datetime(2024, 6, 1)),
        Transaction.create("Aluguel", 1200, "expense", "Moradia", now=datetime(2024, 6, 2)),
        Transaction.create("Mercado", 400, "expense", "Alimentação", now=datetime(2024, 5, 2)),
    ]


def test_balance_history_chart_has_one_point_per_month():
    history = monthly_balance_history(sample_transactions(), reference_date=date(2024, 6, 30))
    fig = create_balance_history_chart(history)
    assert len(fig.data[0].x) == 6
    assert list(fig.data[0].y)[-1] == 2800.0


def test_income_expense_chart_has_two_series():
    history = monthly_balance_history(sample_transactions(), reference_date=date(2024, 6, 30))
    fig = create_income_expense_chart(history)
    assert [trace.name for trace in fig.data] == ["Receitas", "Despesas"]


def test_donut_chart_uses_category_breakdown():
    fig = create_category_donut_chart(category_breakdown(sample_transactions()))
    pie = fig.data[0]
    assert list(pie.labels) == ["Moradia", "Alimentação"]
    assert pie.hole == 0.6


def test_empty_inputs_give_placeholder_figures():
    assert len(create_category_donut_chart(category_breakdown([])).data) == 0
    assert len(create_balance_history_chart(pd.DataFrame()).data) == 0
