"""Persistence of the panel snapshot on local disk.

Loading never fails: a missing, unreadable or malformed file falls back to
the default empty panel.  Saving is best effort and reports failure through
its return value.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DATA_FILE
from .models import PersonData, SavingsGoal, Transaction, ValidationError

logger = logging.getLogger(__name__)


def _parse_records(raw: Any, factory, label: str) -> List[Any]:
    records = []
    if not isinstance(raw, list):
        return records
    for position, payload in enumerate(raw):
        if not isinstance(payload, dict):
            logger.warning("Skipping %s #%d: not an object", label, position)
            continue
        try:
            records.append(factory(payload))
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            logger.warning("Skipping malformed %s #%d: %s", label, position, exc)
    return records


def person_data_from_dict(payload: Any) -> Optional[PersonData]:
    """Rebuild a snapshot, or ``None`` when the document lacks the required shape."""
    if not isinstance(payload, dict):
        return None
    name = payload.get('name')
    transactions = payload.get('transactions')
    if not name or not isinstance(name, str) or not isinstance(transactions, list):
        return None
    return PersonData(
        name=name,
        transactions=tuple(_parse_records(transactions, Transaction.from_dict, 'transaction')),
        savings_goals=tuple(_parse_records(payload.get('savingsGoals'), SavingsGoal.from_dict, 'savings goal')),
    )


def load_person_data(path: Optional[Path] = None) -> PersonData:
    """Load the stored panel, or the default panel when nothing usable is stored."""
    target = Path(path) if path is not None else DATA_FILE
    if not target.exists():
        return PersonData.default()
    try:
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s, starting with an empty panel: %s", target, exc)
        return PersonData.default()

    person_data = person_data_from_dict(data)
    if person_data is None:
        logger.warning("Snapshot %s has an unexpected shape, starting with an empty panel", target)
        return PersonData.default()
    return person_data


def save_person_data(person_data: PersonData, path: Optional[Path] = None) -> bool:
    """Write the full snapshot.

    Returns:
        ``True`` on success, ``False`` when the file could not be written.
    """
    target = Path(path) if path is not None else DATA_FILE
    payload: Dict[str, Any] = person_data.to_dict()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open('w', encoding='utf-8') as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
    except OSError as exc:
        logger.warning("Failed to save panel to %s: %s", target, exc)
        return False
    return True
