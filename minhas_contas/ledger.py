"""Copy-on-write operations on the panel.

Each function takes a :class:`PersonData` snapshot and returns a new one.
The caller replaces its snapshot wholesale and persists it.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Optional

from .config import SAVINGS_CATEGORY
from .models import (
    PersonData,
    RecordNotFoundError,
    SavingsGoal,
    Transaction,
    TransactionType,
    ValidationError,
    validate_amount,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {'description', 'amount', 'type', 'category', 'due_date'}


def _find_transaction(data: PersonData, transaction_id: str) -> Transaction:
    for txn in data.transactions:
        if txn.id == transaction_id:
            return txn
    raise RecordNotFoundError(transaction_id)


def _find_goal(data: PersonData, goal_id: str) -> SavingsGoal:
    for goal in data.savings_goals:
        if goal.id == goal_id:
            return goal
    raise RecordNotFoundError(goal_id)


def add_transaction(
    data: PersonData,
    description: str,
    amount: Any,
    type: Any,
    category: str,
    due_date: Any = None,
    now: Optional[datetime] = None,
) -> PersonData:
    """Append a validated transaction at the end of the ledger."""
    txn = Transaction.create(description, amount, type, category, due_date, now=now)
    logger.info("Added %s transaction id=%s", txn.type.value, txn.id)
    return replace(data, transactions=data.transactions + (txn,))


def update_transaction(data: PersonData, transaction_id: str, **changes: Any) -> PersonData:
    """Edit description, amount, type, category or due date of a transaction.

    The id and creation date never change.  Switching to income drops the
    due date.

    Raises:
        RecordNotFoundError: If no transaction has ``transaction_id``.
        ValidationError: If a field is not editable or the edit is invalid.
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Campos não editáveis: {', '.join(sorted(unknown))}")

    current = _find_transaction(data, transaction_id)
    merged = {
        'description': current.description,
        'amount': current.amount,
        'type': current.type,
        'category': current.category,
        'due_date': current.due_date,
    }
    merged.update(changes)
    updated = Transaction.create(
        merged['description'],
        merged['amount'],
        merged['type'],
        merged['category'],
        merged['due_date'],
        now=current.date,
        id=current.id,
    )
    logger.info("Updated transaction id=%s fields=%s", transaction_id, sorted(changes))
    return replace(
        data,
        transactions=tuple(updated if t.id == transaction_id else t for t in data.transactions),
    )


def delete_transaction(data: PersonData, transaction_id: str) -> PersonData:
    _find_transaction(data, transaction_id)
    logger.info("Deleted transaction id=%s", transaction_id)
    return replace(
        data,
        transactions=tuple(t for t in data.transactions if t.id != transaction_id),
    )


def add_goal(data: PersonData, name: str, target_amount: Any) -> PersonData:
    goal = SavingsGoal.create(name, target_amount)
    logger.info("Added savings goal id=%s", goal.id)
    return replace(data, savings_goals=data.savings_goals + (goal,))


def deposit_to_goal(
    data: PersonData,
    goal_id: str,
    amount: Any,
    now: Optional[datetime] = None,
) -> PersonData:
    """Deposit into a goal and record the matching savings expense.

    The goal grows by exactly ``amount`` and one expense of the same amount
    in the savings category is appended to the ledger.
    """
    value = validate_amount(amount, label="Valor do depósito")
    goal = _find_goal(data, goal_id)
    funded = replace(goal, current_amount=goal.current_amount + value)
    mirror = Transaction.create(
        f"Depósito: {goal.name}",
        value,
        TransactionType.EXPENSE,
        SAVINGS_CATEGORY,
        now=now,
    )
    logger.info("Deposited into goal id=%s transaction id=%s", goal_id, mirror.id)
    return replace(
        data,
        transactions=data.transactions + (mirror,),
        savings_goals=tuple(funded if g.id == goal_id else g for g in data.savings_goals),
    )


def rename(data: PersonData, name: str) -> PersonData:
    """Set the panel's display label."""
    logger.info("Renamed panel")
    return replace(data, name=name)
