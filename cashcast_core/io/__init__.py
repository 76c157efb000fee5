from cashcast_core.io.events import load_cash_events  # noqa: F401
from cashcast_core.io.config import load_simulation_options  # noqa: F401
from cashcast_core.io.report import (  # noqa: F401
    load_report,
    render_report_html,
    save_report,
    save_report_html,
)

__all__ = [
    "load_cash_events",
    "load_simulation_options",
    "load_report",
    "render_report_html",
    "save_report",
    "save_report_html",
]
