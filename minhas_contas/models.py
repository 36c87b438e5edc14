"""Core records of the panel: transactions, savings goals and the root aggregate.

Records are immutable.  Changes go through :mod:`minhas_contas.ledger`, which
returns new values instead of editing in place.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .config import DEFAULT_PANEL_NAME


class ValidationError(ValueError):
    """Raised when user input cannot become a transaction or goal."""


class RecordNotFoundError(KeyError):
    """Raised when an operation references an unknown transaction or goal id."""


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Category(str, Enum):
    """Known category labels plus a ``CUSTOM`` variant for free text."""

    ALIMENTACAO = "Alimentação"
    TRANSPORTE = "Transporte"
    MORADIA = "Moradia"
    LAZER = "Lazer"
    SAUDE = "Saúde"
    EDUCACAO = "Educação"
    CONTAS = "Contas"
    OUTROS = "Outros"
    SALARIO = "Salário"
    INVESTIMENTOS = "Investimentos"
    VENDAS = "Vendas"
    POUPANCA = "Poupança"
    CUSTOM = "custom"

    @classmethod
    def of(cls, label: str) -> "Category":
        try:
            member = cls(label)
        except ValueError:
            return cls.CUSTOM
        return member


INCOME_CATEGORIES = [
    Category.SALARIO.value,
    Category.INVESTIMENTOS.value,
    Category.VENDAS.value,
    Category.OUTROS.value,
]
EXPENSE_CATEGORIES = [
    Category.ALIMENTACAO.value,
    Category.TRANSPORTE.value,
    Category.MORADIA.value,
    Category.LAZER.value,
    Category.SAUDE.value,
    Category.EDUCACAO.value,
    Category.CONTAS.value,
    Category.OUTROS.value,
]

_CATEGORY_STYLE: Dict[Category, Tuple[str, str]] = {
    Category.ALIMENTACAO: ("🍽️", "#EAB308"),
    Category.TRANSPORTE: ("🚌", "#3B82F6"),
    Category.MORADIA: ("🏠", "#F97316"),
    Category.LAZER: ("🎉", "#EC4899"),
    Category.SAUDE: ("🩺", "#EF4444"),
    Category.EDUCACAO: ("📚", "#6366F1"),
    Category.CONTAS: ("🧾", "#06B6D4"),
    Category.SALARIO: ("💼", "#22C55E"),
    Category.INVESTIMENTOS: ("📈", "#14B8A6"),
    Category.VENDAS: ("🏷️", "#A855F7"),
    Category.POUPANCA: ("🐷", "#10B981"),
}
_FALLBACK_STYLE = ("📦", "#6B7280")


def category_icon(label: str) -> str:
    """Return the display emoji for a category label."""
    return _CATEGORY_STYLE.get(Category.of(label), _FALLBACK_STYLE)[0]


def category_color(label: str) -> str:
    """Return the hex colour used for a category in charts."""
    return _CATEGORY_STYLE.get(Category.of(label), _FALLBACK_STYLE)[1]


def categories_for(txn_type: TransactionType) -> list:
    """Suggested categories for the add-transaction form."""
    if TransactionType(txn_type) is TransactionType.INCOME:
        return list(INCOME_CATEGORIES)
    return list(EXPENSE_CATEGORIES)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def _parse_iso(value: Any) -> datetime:
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp, accepting the ``Z`` suffix.

    Offset-aware values are converted to naive local time so every stored
    ``date`` compares with ``datetime.now()``.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        parsed = _parse_iso(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_due_date(value: Any) -> Optional[date]:
    """Parse a due date (``YYYY-MM-DD`` or a full timestamp); blank means none."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) > 10:
        return _parse_iso(text).date()
    return date.fromisoformat(text)


def validate_amount(amount: Any, label: str = "Valor") -> float:
    try:
        value = float(amount)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{label} inválido: {amount!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{label} deve ser maior que zero")
    return value


@dataclass(frozen=True)
class Transaction:
    id: str
    description: str
    amount: float
    type: TransactionType
    category: str
    date: datetime
    due_date: Optional[date] = None

    @classmethod
    def create(
        cls,
        description: str,
        amount: Any,
        type: Any,
        category: str,
        due_date: Any = None,
        *,
        now: Optional[datetime] = None,
        id: Optional[str] = None,
    ) -> "Transaction":
        """Validate form input and build a new transaction.

        Raises:
            ValidationError: If the description is blank, the amount is not a
                positive number or the type is unknown.
        """
        text = (description or "").strip()
        if not text:
            raise ValidationError("Descrição é obrigatória")
        value = validate_amount(amount)
        try:
            txn_type = TransactionType(type)
        except ValueError as exc:
            raise ValidationError(f"Tipo de transação inválido: {type!r}") from exc
        due = None
        if txn_type is TransactionType.EXPENSE:
            try:
                due = parse_due_date(due_date)
            except ValueError as exc:
                raise ValidationError(f"Data de vencimento inválida: {due_date!r}") from exc
        return cls(
            id=id or new_id("tx"),
            description=text,
            amount=value,
            type=txn_type,
            category=(category or Category.OUTROS.value).strip() or Category.OUTROS.value,
            date=parse_timestamp(now) if now is not None else datetime.now(),
            due_date=due,
        )

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    @property
    def signed_amount(self) -> float:
        return self.amount if self.is_income else -self.amount

    def is_overdue(self, today: date) -> bool:
        return self.is_expense and self.due_date is not None and self.due_date < today

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "type": self.type.value,
            "category": self.category,
            "date": self.date.isoformat(),
        }
        if self.due_date is not None:
            payload["dueDate"] = self.due_date.isoformat()
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Transaction":
        """Rebuild a stored transaction, revalidating every field."""
        return cls.create(
            description=payload["description"],
            amount=payload["amount"],
            type=payload["type"],
            category=payload.get("category") or Category.OUTROS.value,
            due_date=payload.get("dueDate"),
            now=parse_timestamp(payload["date"]),
            id=str(payload["id"]),
        )


@dataclass(frozen=True)
class SavingsGoal:
    id: str
    name: str
    target_amount: float
    current_amount: float = 0.0

    @classmethod
    def create(cls, name: str, target_amount: Any, *, id: Optional[str] = None) -> "SavingsGoal":
        text = (name or "").strip()
        if not text:
            raise ValidationError("Nome da meta é obrigatório")
        target = validate_amount(target_amount, label="Valor alvo")
        return cls(id=id or new_id("goal"), name=text, target_amount=target)

    @property
    def progress(self) -> float:
        """Progress as a percentage; may exceed 100."""
        if self.target_amount <= 0:
            return 0.0
        return self.current_amount / self.target_amount * 100

    @property
    def achieved(self) -> bool:
        return self.current_amount >= self.target_amount

    @property
    def remaining(self) -> float:
        return max(self.target_amount - self.current_amount, 0.0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "targetAmount": self.target_amount,
            "currentAmount": self.current_amount,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "SavingsGoal":
        goal = cls.create(payload["name"], payload["targetAmount"], id=str(payload["id"]))
        current = float(payload.get("currentAmount") or 0.0)
        if not math.isfinite(current) or current < 0:
            raise ValidationError("Valor atual da meta inválido")
        return SavingsGoal(goal.id, goal.name, goal.target_amount, current)


@dataclass(frozen=True)
class PersonData:
    """Root aggregate: one panel with its ledger and goals."""

    name: str = DEFAULT_PANEL_NAME
    transactions: Tuple[Transaction, ...] = field(default_factory=tuple)
    savings_goals: Tuple[SavingsGoal, ...] = field(default_factory=tuple)

    @classmethod
    def default(cls) -> "PersonData":
        return cls(name=DEFAULT_PANEL_NAME)

    @property
    def first_goal(self) -> Optional[SavingsGoal]:
        return self.savings_goals[0] if self.savings_goals else None

    @property
    def has_expenses(self) -> bool:
        return any(t.is_expense for t in self.transactions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "transactions": [t.to_dict() for t in self.transactions],
            "savingsGoals": [g.to_dict() for g in self.savings_goals],
        }
