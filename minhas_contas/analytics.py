"""Aggregate figures for the panel.

This module computes the totals, per-category sums, monthly history and
savings rate that feed the overview page, the assistant and the PDF export.
Every function is pure: the same transactions always give the same result
and empty input yields zero-valued results instead of errors.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence

import pandas as pd

from .config import HISTORY_MONTHS
from .formatting import month_label
from .models import PersonData, Transaction, TransactionType

FRAME_COLUMNS = ['ID', 'Description', 'Amount', 'Type', 'Category', 'Date', 'Due Date']


class TopCategory(NamedTuple):
    category: str
    amount: float


NO_TOP_CATEGORY = TopCategory(category='', amount=0.0)


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Build a DataFrame with one row per transaction, in insertion order.

    The column set is fixed so empty ledgers still aggregate cleanly.
    """
    rows = [
        {
            'ID': t.id,
            'Description': t.description,
            'Amount': float(t.amount),
            'Type': t.type.value,
            'Category': t.category,
            'Date': t.date,
            'Due Date': t.due_date,
        }
        for t in transactions
    ]
    frame = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    frame['Amount'] = pd.to_numeric(frame['Amount'], errors='coerce').fillna(0.0).astype(float)
    return frame


def _rows_of_type(frame: pd.DataFrame, txn_type: TransactionType) -> pd.DataFrame:
    return frame[frame['Type'] == TransactionType(txn_type).value]


def total_by_type(transactions: Iterable[Transaction], txn_type: TransactionType) -> float:
    """Sum of amounts for one transaction type; 0 for empty input."""
    frame = transactions_frame(transactions)
    return float(_rows_of_type(frame, txn_type)['Amount'].sum())


def balance(transactions: Iterable[Transaction]) -> float:
    """Income total minus expense total."""
    items = list(transactions)
    return total_by_type(items, TransactionType.INCOME) - total_by_type(items, TransactionType.EXPENSE)


def expense_by_category(transactions: Iterable[Transaction]) -> Dict[str, float]:
    """Summed expense amount per category, keyed in first-appearance order."""
    expenses = _rows_of_type(transactions_frame(transactions), TransactionType.EXPENSE)
    if expenses.empty:
        return {}
    grouped = expenses.groupby('Category', sort=False)['Amount'].sum()
    return {str(category): float(total) for category, total in grouped.items()}


def top_category(by_category: Dict[str, float]) -> TopCategory:
    """Category with the largest total; the first one seen wins ties.

    Returns ``NO_TOP_CATEGORY`` for an empty mapping.
    """
    best: Optional[TopCategory] = None
    for category, amount in by_category.items():
        if best is None or amount > best.amount:
            best = TopCategory(category, float(amount))
    if best is None:
        return NO_TOP_CATEGORY
    return best


def savings_rate(income: float, expense: float) -> float:
    """Share of income kept, in percent; 0 when there is no income."""
    if income <= 0:
        return 0.0
    return (income - expense) / income * 100


def savings_rate_label(rate: float) -> str:
    if rate > 20:
        return "Excelente!"
    if rate > 10:
        return "Bom"
    return "Pode melhorar"


def _shift_month(year: int, month: int, offset: int) -> tuple:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def monthly_balance_history(
    transactions: Iterable[Transaction],
    month_count: int = HISTORY_MONTHS,
    reference_date: Optional[date] = None,
) -> pd.DataFrame:
    """Income, expenses and net for the trailing ``month_count`` calendar months.

    Rows run oldest first and end at the month of ``reference_date``
    (defaults to today).  Months without transactions appear with zero sums.
    """
    reference = reference_date or datetime.now().date()
    frame = transactions_frame(transactions)
    years = frame['Date'].map(lambda d: d.year)
    months = frame['Date'].map(lambda d: d.month)

    rows: List[Dict[str, Any]] = []
    for offset in range(month_count - 1, -1, -1):
        year, month = _shift_month(reference.year, reference.month, -offset)
        in_month = frame[(years == year) & (months == month)]
        income = float(_rows_of_type(in_month, TransactionType.INCOME)['Amount'].sum())
        expenses = float(_rows_of_type(in_month, TransactionType.EXPENSE)['Amount'].sum())
        rows.append({
            'Month_Label': month_label(year, month),
            'Year': year,
            'Month': month,
            'Income': income,
            'Expenses': expenses,
            'Net': income - expenses,
        })
    return pd.DataFrame(rows, columns=['Month_Label', 'Year', 'Month', 'Income', 'Expenses', 'Net'])


def largest_expense(transactions: Iterable[Transaction]) -> float:
    expenses = _rows_of_type(transactions_frame(transactions), TransactionType.EXPENSE)
    if expenses.empty:
        return 0.0
    return float(expenses['Amount'].max())


def average_monthly_expense(transactions: Iterable[Transaction], month_count: int = HISTORY_MONTHS) -> float:
    """Expense total spread over a fixed window of ``month_count`` months."""
    if month_count <= 0:
        return 0.0
    return total_by_type(transactions, TransactionType.EXPENSE) / month_count


def recent_transactions(transactions: Sequence[Transaction], limit: Optional[int] = None) -> List[Transaction]:
    """Transactions newest first, ordered by ``date``.

    Entries sharing a timestamp keep the later-inserted one first.
    """
    indexed = list(enumerate(transactions))
    indexed.sort(key=lambda pair: (pair[1].date, pair[0]), reverse=True)
    ordered = [t for _, t in indexed]
    return ordered[:limit] if limit is not None else ordered


def category_breakdown(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Expense totals per category with each category's share of all spending."""
    totals = expense_by_category(transactions)
    breakdown = pd.DataFrame(
        {'Category': list(totals.keys()), 'Total_Spent': list(totals.values())},
        columns=['Category', 'Total_Spent'],
    )
    grand_total = float(breakdown['Total_Spent'].sum())
    if grand_total > 0:
        breakdown['Share'] = breakdown['Total_Spent'] / grand_total * 100
    else:
        breakdown['Share'] = 0.0
    breakdown = breakdown.sort_values('Total_Spent', ascending=False, kind='stable')
    return breakdown.reset_index(drop=True)


class FinanceAnalytics:
    """Aggregate views over one panel snapshot."""

    def __init__(self, person_data: PersonData):
        self.person_data = person_data
        self.transactions = list(person_data.transactions)

    @property
    def income(self) -> float:
        return total_by_type(self.transactions, TransactionType.INCOME)

    @property
    def expenses(self) -> float:
        return total_by_type(self.transactions, TransactionType.EXPENSE)

    def summary(self) -> Dict[str, Any]:
        """Headline figures for the overview cards and the PDF export."""
        income = self.income
        expenses = self.expenses
        return {
            'income': income,
            'expenses': expenses,
            'balance': income - expenses,
            'savings_rate': savings_rate(income, expenses),
            'top_category': top_category(expense_by_category(self.transactions)),
            'largest_expense': largest_expense(self.transactions),
            'average_monthly_expense': average_monthly_expense(self.transactions),
            'transaction_count': len(self.transactions),
        }

    def monthly_history(self, month_count: int = HISTORY_MONTHS, reference_date: Optional[date] = None) -> pd.DataFrame:
        return monthly_balance_history(self.transactions, month_count, reference_date)

    def category_breakdown(self) -> pd.DataFrame:
        return category_breakdown(self.transactions)

    def recent(self, limit: Optional[int] = None) -> List[Transaction]:
        return recent_transactions(self.transactions, limit)
