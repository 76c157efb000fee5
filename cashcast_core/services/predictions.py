from __future__ import annotations

import datetime as dt
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from cashcast_core.domain.models import CashEvent, Prediction
from cashcast_core.services.jitter import jitter_date, jitter_value, seeded_stream

logger = logging.getLogger(__name__)


def stream_key(run: int, event_id: str, seed: Optional[str] = None) -> str:
    if seed is None:
        return f"{run}-{event_id}"
    return f"{seed}-{run}-{event_id}"


def generate_predictions(
    events: Iterable[CashEvent],
    run_count: int,
    date_variance_days: int,
    value_variance_pct: float,
    seed: Optional[str] = None,
    *,
    today: Optional[dt.date] = None,
) -> List[Prediction]:
    """
    One jittered occurrence per (future event, run).
    - Events dated before today never produce predictions.
    - Each (seed, run, event id) draws from its own stream, so output does not
      depend on event order or on which other events/runs are present.
    """
    today = today or dt.date.today()
    predictions: List[Prediction] = []
    skipped = 0

    for event in events:
        if event.date < today:
            skipped += 1
            continue
        for run in range(run_count):
            rng = seeded_stream(stream_key(run, event.id, seed))
            value = jitter_value(event.value, value_variance_pct, rng)
            occurs_on = jitter_date(event.date, date_variance_days, rng)
            predictions.append(Prediction(run=run, occurs_on=occurs_on, value=value))

    if skipped:
        logger.debug("Skipped %d past event(s) before %s", skipped, today.isoformat())
    logger.debug("Generated %d predictions across %d runs", len(predictions), run_count)
    return predictions


def group_by_run(predictions: Iterable[Prediction]) -> Dict[int, List[Prediction]]:
    by_run: Dict[int, List[Prediction]] = defaultdict(list)
    for prediction in predictions:
        by_run[prediction.run].append(prediction)
    return dict(by_run)
