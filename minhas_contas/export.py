"""PDF summary report of a panel.

The report lists income, expense and balance totals followed by a table of
every transaction.  It only reads the snapshot; nothing here mutates it.
"""

from __future__ import annotations

import io
import logging
import re
from datetime import datetime
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .analytics import FinanceAnalytics
from .formatting import format_currency, format_date, format_signed_amount
from .models import PersonData

logger = logging.getLogger(__name__)

TABLE_HEADER = ['Descrição', 'Categoria', 'Vencimento', 'Valor']
HEADER_COLOR = colors.HexColor('#4A90E2')


class ExportError(RuntimeError):
    """Raised when the PDF report cannot be produced."""


def report_filename(person_data: PersonData) -> str:
    """File name such as ``relatorio_Meu_Painel.pdf``."""
    safe = re.sub(r'[^\w\-]+', '_', person_data.name.strip(), flags=re.UNICODE).strip('_')
    return f"relatorio_{safe or 'painel'}.pdf"


def _table_rows(person_data: PersonData) -> List[List[str]]:
    rows = [list(TABLE_HEADER)]
    for txn in person_data.transactions:
        rows.append([
            txn.description,
            txn.category,
            format_date(txn.due_date) if txn.due_date else '-',
            format_signed_amount(txn.amount, txn.is_income),
        ])
    return rows


def build_pdf_report(person_data: PersonData, generated_at: Optional[datetime] = None) -> bytes:
    """Render the summary report and return the PDF bytes.

    Raises:
        ExportError: If reportlab fails to build the document.
    """
    summary = FinanceAnalytics(person_data).summary()
    stamp = generated_at or datetime.now()
    styles = getSampleStyleSheet()

    story = [
        Paragraph("Relatório Financeiro Pessoal", styles['Title']),
        Paragraph(f"Gerado em {format_date(stamp)}", styles['Normal']),
        Spacer(1, 12),
        Paragraph(f"Relatório de {escape(person_data.name)}", styles['Heading2']),
        Paragraph(f"Total Receitas: {format_currency(summary['income'])}", styles['Normal']),
        Paragraph(f"Total Despesas: {format_currency(summary['expenses'])}", styles['Normal']),
        Paragraph(f"Saldo: {format_currency(summary['balance'])}", styles['Normal']),
        Spacer(1, 12),
    ]

    table = Table(_table_rows(person_data), repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_COLOR),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#F1F5F9')]),
        ('GRID', (0, 0), (-1, -1), 0.25, colors.HexColor('#CBD5E1')),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('ALIGN', (3, 1), (3, -1), 'RIGHT'),
    ]))
    story.append(table)

    buffer = io.BytesIO()
    try:
        doc = SimpleDocTemplate(buffer, pagesize=A4, title=f"Relatório de {person_data.name}")
        doc.build(story)
    except Exception as exc:
        logger.exception("PDF export failed for panel %r", person_data.name)
        raise ExportError("Não foi possível gerar o relatório em PDF") from exc
    return buffer.getvalue()
