from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from cashcast_core.domain.models import CashEvent

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"ID", "label", "value", "date"}


class CsvFileNotFoundError(FileNotFoundError):
    def __init__(self, filename: str | Path):
        super().__init__(f"Cash event CSV not found: {filename}")
        self.filename = str(filename)


class CashEventDecodeError(ValueError):
    def __init__(self, message: str, data: Any = None):
        super().__init__(message)
        self.data = data


def load_cash_events(csv_path: str | Path) -> List[CashEvent]:
    """
    Read cash events from a CSV with ID,label,value,date columns.
    Every cell is trimmed; ID and label must be non-empty, value numeric and
    date parseable. The first bad row aborts the load.
    """
    path = Path(csv_path)
    if not path.exists():
        raise CsvFileNotFoundError(path)

    df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    df.columns = [str(c).strip() for c in df.columns]
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise CashEventDecodeError(f"Missing columns in cash event CSV: {sorted(missing)}")

    events: List[CashEvent] = []
    for _, row in df.iterrows():
        raw = {col: str(row[col]).strip() for col in REQUIRED_COLUMNS}
        events.append(_decode_row(raw))

    logger.debug("Parsed %d cash event(s) from %s", len(events), path)
    return events


def _decode_row(raw: Dict[str, str]) -> CashEvent:
    if not raw["ID"]:
        raise CashEventDecodeError("Cash event ID must not be empty", data=raw)
    if not raw["label"]:
        raise CashEventDecodeError("Cash event label must not be empty", data=raw)

    try:
        value = float(raw["value"])
    except ValueError as exc:
        raise CashEventDecodeError(f"Invalid value {raw['value']!r}", data=raw) from exc

    if not raw["date"]:
        raise CashEventDecodeError("Cash event date must not be empty", data=raw)
    try:
        stamp = pd.to_datetime(raw["date"])
    except (ValueError, TypeError) as exc:
        raise CashEventDecodeError(f"Invalid date {raw['date']!r}", data=raw) from exc

    return CashEvent(id=raw["ID"], label=raw["label"], value=value, date=stamp.date())
