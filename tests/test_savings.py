from datetime import datetime

import pytest

from minhas_contas.ledger import add_goal, add_transaction
from minhas_contas.models import PersonData
from minhas_contas.savings import GoalDraft, InvalidInput, SavingsSuggestion, apply_suggestion, suggest_savings

NOW = datetime(2024, 6, 15, 12, 0)


def test_suggestions_are_five_ten_fifteen_percent():
    suggestions = suggest_savings(1000)
    assert [s.amount for s in suggestions] == pytest.approx([50.0, 100.0, 150.0])
    assert [s.label for s in suggestions] == ["5% do saldo", "10% do saldo", "15% do saldo"]


@pytest.mark.parametrize("balance", [0, -250.0])
def test_non_positive_balance_is_rejected(balance):
    with pytest.raises(InvalidInput):
        suggest_savings(balance)


def test_apply_deposits_rounded_amount_into_first_goal():
    data = add_transaction(PersonData.default(), "Salário", 1234.567, "income", "Salário", now=NOW)
    data = add_goal(add_goal(data, "Reserva", 5000), "Viagem", 3000)
    outcome = apply_suggestion(data, SavingsSuggestion(percent=0.05, amount=61.72835), now=NOW)

    assert outcome.goal_draft is None
    assert outcome.data.savings_goals[0].current_amount == 61.73
    assert outcome.data.savings_goals[1].current_amount == 0.0
    assert outcome.data.transactions[-1].amount == 61.73
    assert outcome.message == "Depósito de R$ 61,73 adicionado à meta Reserva"


def test_apply_without_goal_returns_draft():
    data = add_transaction(PersonData.default(), "Salário", 1000, "income", "Salário", now=NOW)
    outcome = apply_suggestion(data, SavingsSuggestion(percent=0.15, amount=150.2))
    assert outcome.data is data
    assert outcome.goal_draft == GoalDraft(name="Nova Meta", target_amount=151)


def test_apply_tiny_suggestion_leaves_data_unchanged():
    data = add_goal(PersonData.default(), "Reserva", 100)
    data = add_transaction(data, "Troco", 0.05, "income", "Outros", now=NOW)
    outcome = apply_suggestion(data, suggest_savings(0.05)[0], now=NOW)
    assert outcome.data is data
    assert outcome.goal_draft is None
    assert outcome.data.savings_goals[0].current_amount == 0.0
