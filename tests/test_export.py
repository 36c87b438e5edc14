from datetime import datetime

import pytest

from minhas_contas import export
from minhas_contas.ledger import add_transaction
from minhas_contas.models import PersonData

NOW = datetime(2024, 6, 15, 12, 0)


def sample_panel(name="Meu Painel"):
    data = add_transaction(PersonData(name=name), "Salário", 3000, "income", "Salário", now=NOW)
    return add_transaction(data, "Internet <fibra>", 120, "expense", "Contas", "2024-06-20", now=NOW)


def test_build_pdf_report_returns_pdf_bytes():
    pdf = export.build_pdf_report(sample_panel(), generated_at=NOW)
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 500


def test_empty_panel_still_exports():
    assert export.build_pdf_report(PersonData.default()).startswith(b"%PDF")


def test_table_rows_use_signed_amounts():
    rows = export._table_rows(sample_panel())
    assert rows[0] == ["Descrição", "Categoria", "Vencimento", "Valor"]
    assert rows[1] == ["Salário", "Salário", "-", "+ R$ 3.000,00"]
    assert rows[2] == ["Internet <fibra>", "Contas", "20/06/2024", "- R$ 120,00"]


def test_report_filename():
    assert export.report_filename(PersonData(name="Meu Painel")) == "relatorio_Meu_Painel.pdf"
    assert export.report_filename(PersonData(name="João & Ana")) == "relatorio_João_Ana.pdf"
    assert export.report_filename(PersonData(name="///")) == "relatorio_painel.pdf"


def test_build_failure_raises_export_error(monkeypatch):
    class BrokenDoc:
        def __init__(self, *args, **kwargs):
            pass

        def build(self, story):
            raise OSError("disk full")

    monkeypatch.setattr(export, "SimpleDocTemplate", BrokenDoc)
    with pytest.raises(export.ExportError):
        export.build_pdf_report(sample_panel())
