#!/usr/bin/env python3
"""Print the assistant report for the stored panel, optionally exporting a PDF."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from minhas_contas.advisory import generate_advisory
from minhas_contas.analytics import FinanceAnalytics
from minhas_contas.config import REPORTS_DIR, configure_logging, ensure_data_directories
from minhas_contas.export import ExportError, build_pdf_report, report_filename
from minhas_contas.formatting import format_currency
from minhas_contas.storage import load_person_data

logger = logging.getLogger(__name__)


def main(data_path: Optional[Path] = None, today: Optional[date] = None, pdf: bool = False) -> int:
    person_data = load_person_data(data_path)
    summary = FinanceAnalytics(person_data).summary()

    print(f"Painel: {person_data.name}")
    print(f"Transações: {summary['transaction_count']}  Metas: {len(person_data.savings_goals)}")
    print(f"Saldo: {format_currency(summary['balance'])}")
    print()
    print(generate_advisory(person_data, today))

    if pdf:
        ensure_data_directories()
        target = REPORTS_DIR / report_filename(person_data)
        try:
            target.write_bytes(build_pdf_report(person_data))
        except (ExportError, OSError) as exc:
            logger.error("Could not write report %s: %s", target, exc)
            return 1
        print(f"\nRelatório salvo em {target}")
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show the assistant report for a saved panel.')
    parser.add_argument('--data', type=Path, default=None, help='Snapshot JSON file (defaults to the configured one)')
    parser.add_argument('--today', type=date.fromisoformat, default=None, help='Reference date, YYYY-MM-DD')
    parser.add_argument('--pdf', action='store_true', help='Also write the PDF report to the reports directory')
    parser.add_argument('--log-level', default=None, help='Logging level, e.g. DEBUG')
    args = parser.parse_args()
    configure_logging(args.log_level)
    sys.exit(main(data_path=args.data, today=args.today, pdf=args.pdf))
