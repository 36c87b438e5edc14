from datetime import date, datetime

from minhas_contas.analytics import (
    NO_TOP_CATEGORY,
    FinanceAnalytics,
    average_monthly_expense,
    balance,
    category_breakdown,
    expense_by_category,
    largest_expense,
    monthly_balance_history,
    recent_transactions,
    savings_rate,
    savings_rate_label,
    top_category,
    total_by_type,
)
from minhas_contas.models import PersonData, Transaction, TransactionType


def txn(description, amount, type, category, when, **kwargs):
    return Transaction.create(description, amount, type, category, now=when, **kwargs)


def sample_transactions():
    return [
        txn("Salário", 5000, "income", "Salário", datetime(2024, 6, 1)),
        txn("Aluguel", 1500, "expense", "Moradia", datetime(2024, 6, 2)),
        txn("Mercado", 600, "expense", "Alimentação", datetime(2024, 5, 20)),
        txn("Restaurante", 300, "expense", "Alimentação", datetime(2024, 6, 10)),
        txn("Freela", 800, "income", "Vendas", datetime(2024, 4, 3)),
    ]


def test_totals_and_balance():
    items = sample_transactions()
    assert total_by_type(items, TransactionType.INCOME) == 5800.0
    assert total_by_type(items, TransactionType.EXPENSE) == 2400.0
    assert balance(items) == 3400.0


def test_empty_input_gives_zeroes():
    assert balance([]) == 0.0
    assert expense_by_category([]) == {}
    assert top_category({}) == NO_TOP_CATEGORY
    assert largest_expense([]) == 0.0
    assert category_breakdown([]).empty


def test_expense_by_category_sums_in_first_seen_order():
    totals = expense_by_category(sample_transactions())
    assert list(totals) == ["Moradia", "Alimentação"]
    assert totals["Alimentação"] == 900.0


def test_top_category_prefers_first_on_tie():
    assert top_category({"Lazer": 100.0, "Saúde": 100.0}) == ("Lazer", 100.0)
    assert top_category({"Lazer": 100.0, "Saúde": 150.0}).category == "Saúde"


def test_savings_rate_and_label():
    assert savings_rate(0, 100) == 0.0
    assert savings_rate(1000, 750) == 25.0
    assert savings_rate_label(25.0) == "Excelente!"
    assert savings_rate_label(20.0) == "Bom"
    assert savings_rate_label(10.0) == "Pode melhorar"


def test_monthly_history_covers_six_months_oldest_first():
    history = monthly_balance_history(sample_transactions(), reference_date=date(2024, 6, 15))
    assert list(history['Month_Label']) == ["jan/24", "fev/24", "mar/24", "abr/24", "mai/24", "jun/24"]
    june = history.iloc[-1]
    assert june['Income'] == 5000.0
    assert june['Expenses'] == 1800.0
    assert june['Net'] == 3200.0
    assert history.iloc[0]['Net'] == 0.0


def test_monthly_history_crosses_year_boundary():
    history = monthly_balance_history([], month_count=3, reference_date=date(2024, 1, 10))
    assert list(history['Month_Label']) == ["nov/23", "dez/23", "jan/24"]


def test_largest_and_average_expense():
    items = sample_transactions()
    assert largest_expense(items) == 1500.0
    assert average_monthly_expense(items) == 400.0


def test_recent_transactions_sorted_by_date():
    ordered = recent_transactions(sample_transactions())
    assert [t.description for t in ordered][:2] == ["Restaurante", "Aluguel"]
    assert len(recent_transactions(sample_transactions(), limit=2)) == 2


def test_category_breakdown_shares():
    breakdown = category_breakdown(sample_transactions())
    assert list(breakdown['Category']) == ["Moradia", "Alimentação"]
    assert round(breakdown['Share'].sum(), 6) == 100.0


def test_finance_analytics_summary():
    summary = FinanceAnalytics(PersonData(name="Casa", transactions=tuple(sample_transactions()))).summary()
    assert summary['income'] == 5800.0
    assert summary['expenses'] == 2400.0
    assert summary['balance'] == 3400.0
    assert summary['top_category'].category == "Moradia"
    assert summary['transaction_count'] == 5


def test_aggregates_are_repeatable_and_leave_input_alone():
    items = sample_transactions()
    snapshot = list(items)
    assert balance(items) == balance(items)
    assert expense_by_category(items) == expense_by_category(items)
    assert items == snapshot
