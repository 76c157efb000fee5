from __future__ import annotations

import datetime as dt
import logging
import uuid
from typing import Optional, Sequence

from cashcast_core.domain.models import (
    CashEvent,
    SimulationMeta,
    SimulationOptions,
    SimulationReport,
    SimulationRun,
)
from cashcast_core.services.aggregator import aggregate
from cashcast_core.services.percentiles import reduce_to_percentiles
from cashcast_core.services.predictions import generate_predictions, group_by_run

logger = logging.getLogger(__name__)


def run_simulation(
    events: Sequence[CashEvent],
    options: Optional[SimulationOptions] = None,
    seed: Optional[str] = None,
    *,
    now: Optional[dt.datetime] = None,
) -> SimulationReport:
    """
    Monte Carlo balance forecast:
    - jitter every future event once per run,
    - fold each run into a cumulative daily balance series,
    - reduce the runs into per-day percentile bands.
    """
    opts = (options or SimulationOptions()).resolved().validate()
    now = now or dt.datetime.now(dt.timezone.utc)
    today = now.date()

    logger.info(
        "Simulating %d event(s): runs=%d days=%d date_variance=%d value_variance=%.2f%%",
        len(events),
        opts.run_count,
        opts.run_length,
        opts.date_variance_days,
        opts.value_variance_pct,
    )

    predictions = generate_predictions(
        events,
        opts.run_count,
        opts.date_variance_days,
        opts.value_variance_pct,
        seed,
        today=today,
    )
    series = aggregate(
        predictions,
        opts.run_count,
        opts.run_length,
        opts.starting_balance,
        today=today,
    )
    by_run = group_by_run(predictions)
    runs = [
        SimulationRun(run_index=i, predictions=by_run.get(i, []), balance_series=balance)
        for i, balance in enumerate(series)
    ]
    forecast = reduce_to_percentiles(series)

    return SimulationReport(
        id=str(uuid.uuid4()),
        meta=SimulationMeta(run_count=opts.run_count, run_length=opts.run_length, run_date=now),
        cash_events=list(events),
        runs=runs,
        forecast=forecast,
    )
