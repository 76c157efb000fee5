from cashcast_core.domain.models import (  # noqa: F401
    DEFAULT_SIMULATION_OPTIONS,
    CashEvent,
    PercentileDay,
    Prediction,
    SimulationConfigError,
    SimulationMeta,
    SimulationOptions,
    SimulationReport,
    SimulationRun,
)

__all__ = [
    "DEFAULT_SIMULATION_OPTIONS",
    "CashEvent",
    "PercentileDay",
    "Prediction",
    "SimulationConfigError",
    "SimulationMeta",
    "SimulationOptions",
    "SimulationReport",
    "SimulationRun",
]
