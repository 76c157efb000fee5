from __future__ import annotations

import dataclasses
import datetime as dt
import html
import json
import logging
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from cashcast_core.domain.models import (
    CashEvent,
    PercentileDay,
    Prediction,
    SimulationMeta,
    SimulationReport,
    SimulationRun,
)

logger = logging.getLogger(__name__)


class SaveReportError(OSError):
    def __init__(self, location: str | Path, original: BaseException):
        super().__init__(f"Could not write report to {location}: {original}")
        self.location = str(location)
        self.original = original


def report_to_dict(report: SimulationReport) -> Dict[str, Any]:
    return {
        "id": report.id,
        "meta": {
            "runCount": report.meta.run_count,
            "runLength": report.meta.run_length,
            "runDate": report.meta.run_date.isoformat(),
        },
        "cashEvents": [
            {"ID": e.id, "label": e.label, "value": e.value, "date": e.date.isoformat()}
            for e in report.cash_events
        ],
        "runs": [
            {
                "runIndex": run.run_index,
                "predictions": [
                    {"run": p.run, "occursOn": p.occurs_on.isoformat(), "value": p.value}
                    for p in run.predictions
                ],
                "balanceSeries": list(run.balance_series),
            }
            for run in report.runs
        ],
        "forecast": [dataclasses.asdict(day) for day in report.forecast],
    }


def report_from_dict(data: Dict[str, Any]) -> SimulationReport:
    meta = data["meta"]
    return SimulationReport(
        id=data["id"],
        meta=SimulationMeta(
            run_count=int(meta["runCount"]),
            run_length=int(meta["runLength"]),
            run_date=dt.datetime.fromisoformat(meta["runDate"]),
        ),
        cash_events=[
            CashEvent(
                id=e["ID"],
                label=e["label"],
                value=float(e["value"]),
                date=dt.date.fromisoformat(e["date"]),
            )
            for e in data.get("cashEvents", [])
        ],
        runs=[
            SimulationRun(
                run_index=int(run["runIndex"]),
                predictions=[
                    Prediction(
                        run=int(p["run"]),
                        occurs_on=dt.date.fromisoformat(p["occursOn"]),
                        value=float(p["value"]),
                    )
                    for p in run.get("predictions", [])
                ],
                balance_series=[float(v) for v in run["balanceSeries"]],
            )
            for run in data.get("runs", [])
        ],
        forecast=[PercentileDay(**day) for day in data.get("forecast", [])],
    )


def report_filename(report: SimulationReport, suffix: str = ".json") -> str:
    return f"simulation-{report.id}{suffix}"


def save_report(report: SimulationReport, location: str | Path) -> Path:
    payload = json.dumps(report_to_dict(report), indent=2)
    return _write_text(Path(location), payload)


def load_report(path: str | Path) -> SimulationReport:
    with open(path, "r", encoding="utf-8") as f:
        return report_from_dict(json.load(f))


def forecast_frame(report: SimulationReport) -> pd.DataFrame:
    frame = pd.DataFrame(
        [dataclasses.asdict(day) for day in report.forecast],
        columns=["day", "p10", "p25", "p50", "p75", "p90"],
    )
    start = report.meta.run_date.date()
    frame.insert(1, "date", [(start + dt.timedelta(days=int(d))).isoformat() for d in frame["day"]])
    return frame


_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>Simulation Report {report_id}</title>
  </head>
  <body>
    <h1>Simulation Report</h1>
    <ul>
      <li>Report: {report_id}</li>
      <li>Run date: {run_date}</li>
      <li>Runs: {run_count}</li>
      <li>Days: {run_length}</li>
      <li>Cash events: {event_count}</li>
    </ul>
    <h2>Forecast</h2>
    {forecast_table}
    <h2>Raw report</h2>
    <pre>{raw_json}</pre>
  </body>
</html>
"""


def render_report_html(report: SimulationReport) -> str:
    table = forecast_frame(report).to_html(index=False, float_format=lambda v: f"{v:,.2f}")
    return _HTML_TEMPLATE.format(
        report_id=html.escape(report.id),
        run_date=html.escape(report.meta.run_date.isoformat()),
        run_count=report.meta.run_count,
        run_length=report.meta.run_length,
        event_count=len(report.cash_events),
        forecast_table=table,
        raw_json=html.escape(json.dumps(report_to_dict(report), indent=2)),
    )


def save_report_html(rendered: str, location: str | Path) -> Path:
    return _write_text(Path(location), rendered)


def _write_text(path: Path, content: str) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            f.write(content)
    except OSError as exc:
        raise SaveReportError(path, exc) from exc
    logger.debug("Wrote %d bytes to %s", len(content), path)
    return path
