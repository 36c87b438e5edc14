"""Quick savings suggestions derived from the current balance."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from .config import NEW_GOAL_NAME, SAVINGS_SUGGESTION_PERCENTS
from .formatting import format_currency
from .ledger import deposit_to_goal
from .models import PersonData


class InvalidInput(ValueError):
    """Raised when suggestions are requested for a non-positive balance."""


@dataclass(frozen=True)
class SavingsSuggestion:
    percent: float
    amount: float

    @property
    def label(self) -> str:
        return f"{round(self.percent * 100)}% do saldo"


@dataclass(frozen=True)
class GoalDraft:
    """Prefilled values for the new-goal form."""

    name: str
    target_amount: int


@dataclass(frozen=True)
class SuggestionOutcome:
    data: PersonData
    goal_draft: Optional[GoalDraft]
    message: str


def suggest_savings(current_balance: float) -> List[SavingsSuggestion]:
    """Return 5%, 10% and 15% of ``current_balance``, in that order.

    Raises:
        InvalidInput: If ``current_balance`` is zero or negative.
    """
    if current_balance <= 0:
        raise InvalidInput(
            "Seu saldo está negativo. Tente equilibrar suas contas antes de poupar."
        )
    return [
        SavingsSuggestion(percent=percent, amount=current_balance * percent)
        for percent in SAVINGS_SUGGESTION_PERCENTS
    ]


def apply_suggestion(
    data: PersonData,
    suggestion: SavingsSuggestion,
    now: Optional[datetime] = None,
) -> SuggestionOutcome:
    """Deposit a suggestion into the first goal, or draft a goal when none exists.

    A suggestion that rounds to zero cents leaves the data unchanged.
    """
    goal = data.first_goal
    if goal is None:
        draft = GoalDraft(name=NEW_GOAL_NAME, target_amount=math.ceil(suggestion.amount))
        return SuggestionOutcome(data=data, goal_draft=draft, message="Crie uma meta para guardar esse valor.")

    amount = round(suggestion.amount, 2)
    if amount <= 0:
        return SuggestionOutcome(data=data, goal_draft=None, message="Valor muito pequeno para depositar.")
    updated = deposit_to_goal(data, goal.id, amount, now=now)
    message = f"Depósito de {format_currency(amount)} adicionado à meta {goal.name}"
    return SuggestionOutcome(data=updated, goal_draft=None, message=message)
