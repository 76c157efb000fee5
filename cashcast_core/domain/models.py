from __future__ import annotations

import dataclasses
import datetime as dt
from typing import List, Optional


class SimulationConfigError(ValueError):
    """Raised when simulation options cannot produce a meaningful forecast."""


@dataclasses.dataclass(frozen=True)
class CashEvent:
    id: str
    label: str
    value: float
    date: dt.date


@dataclasses.dataclass(frozen=True)
class SimulationOptions:
    run_count: Optional[int] = None
    run_length: Optional[int] = None  # days
    date_variance_days: Optional[int] = None
    value_variance_pct: Optional[float] = None
    starting_balance: Optional[float] = None

    def resolved(self) -> "SimulationOptions":
        """Return a copy where every unset field takes its default."""
        values = {}
        for field in dataclasses.fields(self):
            current = getattr(self, field.name)
            values[field.name] = current if current is not None else getattr(DEFAULT_SIMULATION_OPTIONS, field.name)
        return SimulationOptions(**values)

    def validate(self) -> "SimulationOptions":
        if self.run_count is None or self.run_count <= 0:
            raise SimulationConfigError(f"run_count must be a positive integer, got {self.run_count!r}")
        if self.run_length is None or self.run_length <= 0:
            raise SimulationConfigError(f"run_length must be a positive integer, got {self.run_length!r}")
        if self.date_variance_days is not None and self.date_variance_days < 0:
            raise SimulationConfigError(
                f"date_variance_days must be non-negative, got {self.date_variance_days!r}"
            )
        if self.value_variance_pct is not None and self.value_variance_pct < 0:
            raise SimulationConfigError(
                f"value_variance_pct must be non-negative, got {self.value_variance_pct!r}"
            )
        return self


DEFAULT_SIMULATION_OPTIONS = SimulationOptions(
    run_count=20,
    run_length=60,
    date_variance_days=10,
    value_variance_pct=20.0,
    starting_balance=0.0,
)


@dataclasses.dataclass(frozen=True)
class Prediction:
    run: int
    occurs_on: dt.date
    value: float


@dataclasses.dataclass(frozen=True)
class SimulationRun:
    run_index: int
    predictions: List[Prediction]
    balance_series: List[float]


@dataclasses.dataclass(frozen=True)
class PercentileDay:
    day: int
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float


@dataclasses.dataclass(frozen=True)
class SimulationMeta:
    run_count: int
    run_length: int
    run_date: dt.datetime


@dataclasses.dataclass(frozen=True)
class SimulationReport:
    id: str
    meta: SimulationMeta
    cash_events: List[CashEvent]
    runs: List[SimulationRun]
    forecast: List[PercentileDay]

    def final_day(self) -> Optional[PercentileDay]:
        return self.forecast[-1] if self.forecast else None
