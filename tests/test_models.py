from datetime import date, datetime, timezone

import pytest

from minhas_contas.models import (
    Category,
    PersonData,
    SavingsGoal,
    Transaction,
    TransactionType,
    ValidationError,
    categories_for,
    category_color,
    category_icon,
    parse_due_date,
    parse_timestamp,
)

NOW = datetime(2024, 6, 15, 10, 30)


def test_create_strips_description_and_keeps_due_date():
    txn = Transaction.create("  Luz  ", 120, "expense", "Contas", "2024-06-20", now=NOW)
    assert txn.description == "Luz"
    assert txn.amount == 120.0
    assert txn.type is TransactionType.EXPENSE
    assert txn.due_date == date(2024, 6, 20)
    assert txn.date == NOW
    assert txn.id.startswith("tx-")


@pytest.mark.parametrize("amount", [0, -5, "abc", None, float("nan"), float("inf")])
def test_create_rejects_bad_amounts(amount):
    with pytest.raises(ValidationError):
        Transaction.create("Almoço", amount, "expense", "Alimentação", now=NOW)


def test_create_rejects_blank_description_and_unknown_type():
    with pytest.raises(ValidationError):
        Transaction.create("   ", 10, "expense", "Outros", now=NOW)
    with pytest.raises(ValidationError):
        Transaction.create("Algo", 10, "transfer", "Outros", now=NOW)


def test_create_rejects_invalid_due_date():
    with pytest.raises(ValidationError):
        Transaction.create("Aluguel", 900, "expense", "Moradia", "31/02/2024", now=NOW)


def test_income_drops_due_date():
    txn = Transaction.create("Salário", 5000, TransactionType.INCOME, "Salário", "2024-06-20", now=NOW)
    assert txn.due_date is None
    assert txn.signed_amount == 5000.0


def test_blank_category_defaults_to_outros():
    txn = Transaction.create("Presente", 50, "expense", "", now=NOW)
    assert txn.category == "Outros"


def test_overdue_only_for_past_due_expenses():
    bill = Transaction.create("Água", 80, "expense", "Contas", date(2024, 6, 10), now=NOW)
    assert bill.is_overdue(date(2024, 6, 15))
    assert not bill.is_overdue(date(2024, 6, 10))


def test_transaction_dict_round_trip_keeps_fields():
    txn = Transaction.create("Internet", 99.9, "expense", "Contas", "2024-07-01", now=NOW, id="tx-1")
    payload = txn.to_dict()
    assert payload["dueDate"] == "2024-07-01"
    assert Transaction.from_dict(payload) == txn


def test_transaction_without_due_date_omits_key():
    payload = Transaction.create("Uber", 25, "expense", "Transporte", now=NOW).to_dict()
    assert "dueDate" not in payload


def test_parse_timestamp_accepts_z_suffix():
    parsed = parse_timestamp("2024-06-15T10:30:00.000Z")
    expected = datetime(2024, 6, 15, 10, 30, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert parsed.tzinfo is None
    assert parsed == expected


def test_parse_due_date_handles_timestamps_and_blanks():
    assert parse_due_date("") is None
    assert parse_due_date(None) is None
    assert parse_due_date("2024-06-20T00:00:00.000Z") == date(2024, 6, 20)


def test_goal_progress_and_remaining():
    goal = SavingsGoal("goal-1", "Férias", 1000.0, 250.0)
    assert goal.progress == 25.0
    assert goal.remaining == 750.0
    assert not goal.achieved
    assert SavingsGoal("goal-2", "Carro", 100.0, 150.0).progress == 150.0


def test_goal_requires_name_and_positive_target():
    with pytest.raises(ValidationError):
        SavingsGoal.create("", 100)
    with pytest.raises(ValidationError):
        SavingsGoal.create("Casa", 0)


def test_goal_from_dict_rejects_negative_current_amount():
    with pytest.raises(ValidationError):
        SavingsGoal.from_dict({"id": "g", "name": "Casa", "targetAmount": 10, "currentAmount": -1})


def test_person_data_defaults():
    data = PersonData.default()
    assert data.name == "Meu Painel"
    assert data.transactions == ()
    assert data.first_goal is None
    assert not data.has_expenses
    assert data.to_dict() == {"name": "Meu Painel", "transactions": [], "savingsGoals": []}


def test_category_lookup_and_styles():
    assert Category.of("Lazer") is Category.LAZER
    assert Category.of("Pets") is Category.CUSTOM
    assert category_icon("Pets") == "📦"
    assert category_color("Moradia").startswith("#")
    assert categories_for(TransactionType.INCOME) == ["Salário", "Investimentos", "Vendas", "Outros"]
    assert "Alimentação" in categories_for("expense")
