from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, List, Optional

import numpy as np

from cashcast_core.domain.models import Prediction
from cashcast_core.services.predictions import group_by_run

logger = logging.getLogger(__name__)


def days_between(start: dt.date, end: dt.date) -> int:
    """Signed whole days from start to end (negative when end is earlier)."""
    return (end - start).days


def compute_balance_series(
    predictions: Iterable[Prediction],
    run_length: int,
    starting_balance: float = 0.0,
    *,
    today: dt.date,
) -> List[float]:
    """
    Bucket one run's predictions by day offset and cumulate them.
    Offsets outside [0, run_length) fall outside the window and are dropped.
    """
    offsets: List[int] = []
    values: List[float] = []
    dropped = 0
    for prediction in predictions:
        offset = days_between(today, prediction.occurs_on)
        if offset < 0 or offset >= run_length:
            dropped += 1
            continue
        offsets.append(offset)
        values.append(prediction.value)

    deltas = np.zeros(run_length, dtype=float)
    if offsets:
        np.add.at(deltas, np.asarray(offsets, dtype=int), np.asarray(values, dtype=float))
    deltas[0] += starting_balance

    if dropped:
        logger.debug("Dropped %d prediction(s) outside the %d-day window", dropped, run_length)
    return np.cumsum(deltas).tolist()


def aggregate(
    predictions: Iterable[Prediction],
    run_count: int,
    run_length: int,
    starting_balance: float = 0.0,
    *,
    today: Optional[dt.date] = None,
) -> List[List[float]]:
    """One balance series per run index 0..run_count-1, each run_length long."""
    today = today or dt.date.today()
    by_run = group_by_run(predictions)
    return [
        compute_balance_series(by_run.get(run, []), run_length, starting_balance, today=today)
        for run in range(run_count)
    ]
