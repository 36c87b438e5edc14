"""Rule-based financial assistant.

The assistant scans a panel snapshot and produces a short markdown report.
Each rule is an independent evaluator that returns an optional
:class:`AdvisorySection`; rendering to text happens afterwards in
:func:`render_section` and :func:`format_report`.  This keeps trigger logic
testable without matching on generated strings.

Rules run in a fixed priority order:

1. overdue bills
2. bills due within the next seven days
3. the category with the highest spending
4. income versus expense commentary
5. general tips, only when fewer than two sections were produced
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from .analytics import expense_by_category, top_category, total_by_type
from .config import (
    ADVISORY_LATENCY_SECONDS,
    BUDGET_CAUTION_RATIO,
    MIN_SECTIONS_BEFORE_TIPS,
    UPCOMING_WINDOW_DAYS,
)
from .formatting import format_currency, format_date
from .models import PersonData, Transaction, TransactionType

SECTION_SEPARATOR = "\n\n---\n\n"

NO_INSIGHTS_MESSAGE = (
    "# Nenhum insight por enquanto\n\n"
    "Adicione algumas transações, especialmente despesas com datas de vencimento, "
    "para receber sugestões personalizadas."
)


class SectionKind(str, Enum):
    OVERDUE_BILLS = "overdue_bills"
    UPCOMING_BILLS = "upcoming_bills"
    TOP_CATEGORY = "top_category"
    NEGATIVE_BALANCE = "negative_balance"
    BUDGET_CAUTION = "budget_caution"
    POSITIVE_BALANCE = "positive_balance"
    GENERAL_TIPS = "general_tips"


@dataclass(frozen=True)
class AdvisorySection:
    kind: SectionKind
    data: Dict[str, Any] = field(default_factory=dict)


def _expenses(person_data: PersonData) -> List[Transaction]:
    return [t for t in person_data.transactions if t.is_expense]


def _by_due_date(bills: List[Transaction]) -> List[Transaction]:
    return sorted(bills, key=lambda t: t.due_date)


def overdue_bills_rule(person_data: PersonData, today: date) -> Optional[AdvisorySection]:
    bills = [t for t in _expenses(person_data) if t.due_date is not None and t.due_date < today]
    if not bills:
        return None
    return AdvisorySection(SectionKind.OVERDUE_BILLS, {'bills': _by_due_date(bills)})


def upcoming_bills_rule(person_data: PersonData, today: date) -> Optional[AdvisorySection]:
    bills = [
        t for t in _expenses(person_data)
        if t.due_date is not None and 0 <= (t.due_date - today).days <= UPCOMING_WINDOW_DAYS
    ]
    if not bills:
        return None
    return AdvisorySection(SectionKind.UPCOMING_BILLS, {'bills': _by_due_date(bills)})


def top_category_rule(person_data: PersonData, today: date) -> Optional[AdvisorySection]:
    if not _expenses(person_data):
        return None
    top = top_category(expense_by_category(person_data.transactions))
    return AdvisorySection(SectionKind.TOP_CATEGORY, {'category': top.category, 'amount': top.amount})


def balance_rule(person_data: PersonData, today: date) -> Optional[AdvisorySection]:
    """Comment on income versus expenses.

    Only one of negative balance, budget caution or positive balance is
    emitted, in that precedence.  Nothing is emitted when both totals are 0.
    """
    income = total_by_type(person_data.transactions, TransactionType.INCOME)
    expense = total_by_type(person_data.transactions, TransactionType.EXPENSE)
    if income <= 0 and expense <= 0:
        return None

    figures = {'income': income, 'expense': expense, 'balance': income - expense}
    if expense > income:
        return AdvisorySection(SectionKind.NEGATIVE_BALANCE, figures)
    if income > 0 and expense > income * BUDGET_CAUTION_RATIO:
        return AdvisorySection(SectionKind.BUDGET_CAUTION, figures)
    if income > 0 and income - expense >= 0:
        return AdvisorySection(SectionKind.POSITIVE_BALANCE, figures)
    return None


RuleFn = Callable[[PersonData, date], Optional[AdvisorySection]]

RULES: Sequence[RuleFn] = (
    overdue_bills_rule,
    upcoming_bills_rule,
    top_category_rule,
    balance_rule,
)


def general_tips_rule(person_data: PersonData, produced: Sequence[AdvisorySection]) -> Optional[AdvisorySection]:
    """Static guidance when the data-driven rules said little."""
    if len(produced) < MIN_SECTIONS_BEFORE_TIPS and person_data.transactions:
        return AdvisorySection(SectionKind.GENERAL_TIPS)
    return None


def evaluate_rules(person_data: PersonData, today: Optional[date] = None) -> List[AdvisorySection]:
    """Run every rule in priority order and return the sections that fired."""
    reference = today or date.today()
    sections: List[AdvisorySection] = []
    for rule in RULES:
        section = rule(person_data, reference)
        if section is not None:
            sections.append(section)
    tips = general_tips_rule(person_data, sections)
    if tips is not None:
        sections.append(tips)
    return sections


def _bill_lines(bills: Sequence[Transaction], verb: str) -> str:
    return "".join(
        f"* {t.description} ({verb} em {format_date(t.due_date)}) - {format_currency(t.amount)}\n"
        for t in bills
    )


def render_section(section: AdvisorySection) -> str:
    """Render one section as markdown."""
    data = section.data
    kind = section.kind

    if kind is SectionKind.OVERDUE_BILLS:
        return (
            "# ⚠️ Contas Atrasadas\n\n"
            "**Atenção:** Você possui contas que já venceram. Pagar contas em atraso pode gerar "
            "multas e juros. Priorize o pagamento delas o mais rápido possível.\n\n"
            "**Contas vencidas:**\n"
            + _bill_lines(data['bills'], "Venceu")
        )

    if kind is SectionKind.UPCOMING_BILLS:
        return (
            "# 🗓️ Contas Próximas do Vencimento\n\n"
            "**Fique de olho!** As seguintes contas vencem em breve. Organize-se para não perder o prazo.\n\n"
            "**Contas a vencer:**\n"
            + _bill_lines(data['bills'], "Vence")
        )

    if kind is SectionKind.TOP_CATEGORY:
        return (
            "# 📊 Análise de Gastos\n\n"
            f"**Onde seu dinheiro está indo?** Sua maior despesa é com **{data['category']}**, "
            f"totalizando **{format_currency(data['amount'])}**.\n\n"
            "* Avalie se é possível reduzir despesas nessa área. Pequenos cortes podem fazer "
            "uma grande diferença no final do mês."
        )

    if kind is SectionKind.NEGATIVE_BALANCE:
        return (
            "# ⚖️ Balanço Mensal\n\n"
            f"**Atenção, saldo negativo!** Suas despesas ({format_currency(data['expense'])}) foram "
            f"maiores que suas receitas ({format_currency(data['income'])}). "
            "É importante reavaliar seus gastos.\n\n"
            "* Reveja seu orçamento e identifique onde pode economizar para reverter essa situação."
        )

    if kind is SectionKind.BUDGET_CAUTION:
        return (
            "# ⚖️ Balanço Mensal\n\n"
            f"**Cuidado com o orçamento!** Suas despesas ({format_currency(data['expense'])}) "
            f"representam mais de 80% da sua receita ({format_currency(data['income'])}). "
            "Isso pode deixar pouco espaço para imprevistos e para poupar.\n\n"
            "* Tente identificar gastos não essenciais que podem ser cortados ou reduzidos."
        )

    if kind is SectionKind.POSITIVE_BALANCE:
        return (
            "# 💰 Saldo Positivo!\n\n"
            f"**Bom trabalho!** Você manteve um saldo positivo de **{format_currency(data['balance'])}**.\n\n"
            "* Considere usar parte desse valor para começar uma reserva de emergência ou para "
            "investir em seus objetivos de longo prazo."
        )

    return (
        "# ✨ Dicas Gerais\n\n"
        "* **Planejamento é tudo:** Crie um orçamento mensal. Defina limites de gastos para cada "
        "categoria e acompanhe seu progresso.\n"
        "* **Reserva de Emergência:** Ter um fundo para cobrir de 3 a 6 meses de despesas essenciais "
        "pode trazer muita tranquilidade. Comece a construir o seu, mesmo que com pouco.\n"
    )


def format_report(sections: Sequence[AdvisorySection]) -> str:
    """Join rendered sections with the separator, or return the no-data message."""
    if not sections:
        return NO_INSIGHTS_MESSAGE
    return SECTION_SEPARATOR.join(render_section(section) for section in sections)


def generate_advisory(person_data: PersonData, today: Optional[date] = None) -> str:
    """Build the assistant report for ``person_data`` as of ``today``."""
    return format_report(evaluate_rules(person_data, today))


def generate_advisory_delayed(
    person_data: PersonData,
    today: Optional[date] = None,
    delay: Optional[float] = None,
) -> str:
    """Same report as :func:`generate_advisory`, after a short pause.

    The pause lets the UI show a working indicator.
    """
    pause = ADVISORY_LATENCY_SECONDS if delay is None else delay
    if pause > 0:
        time.sleep(pause)
    return generate_advisory(person_data, today)
