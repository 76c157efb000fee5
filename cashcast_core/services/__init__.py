from cashcast_core.services.aggregator import aggregate  # noqa: F401
from cashcast_core.services.percentiles import reduce_to_percentiles  # noqa: F401
from cashcast_core.services.predictions import generate_predictions  # noqa: F401
from cashcast_core.services.simulation import run_simulation  # noqa: F401

__all__ = [
    "aggregate",
    "generate_predictions",
    "reduce_to_percentiles",
    "run_simulation",
]
