from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any, Dict, Optional

from cashcast_core.domain.models import SimulationOptions

# camelCase spellings used by exported reports and older option files
_ALIASES = {
    "runCount": "run_count",
    "runLength": "run_length",
    "dateVarianceDays": "date_variance_days",
    "valueVariancePct": "value_variance_pct",
    "startingBalance": "starting_balance",
}


def load_simulation_options(path: str | Path) -> SimulationOptions:
    data = _read_json(path)
    return options_from_mapping(data)


def options_from_mapping(data: Dict[str, Any]) -> SimulationOptions:
    values = {_ALIASES.get(key, key): value for key, value in data.items()}
    return SimulationOptions(
        run_count=_as_int(values.get("run_count")),
        run_length=_as_int(values.get("run_length")),
        date_variance_days=_as_int(values.get("date_variance_days")),
        value_variance_pct=_as_float(values.get("value_variance_pct")),
        starting_balance=_as_float(values.get("starting_balance")),
    )


def merge_options(base: SimulationOptions, **overrides: Optional[Any]) -> SimulationOptions:
    """Overlay every override that is not None on top of base."""
    return dataclasses.replace(base, **{k: v for k, v in overrides.items() if v is not None})


def _as_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _as_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
