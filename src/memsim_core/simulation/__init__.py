# src/memsim_core/simulation/__init__.py
from .config import ConfigParsingError, SimulationConfig, parse_simulation_config
from .context import SimulationContext
from .engine import SimulationEngine
from .exceptions import InvalidRunSettingsError
from .execution import simulate
from .results import SimulationResult, SolverResult, SolverStats
from .solver import SolverOptions, clamp_state, solve
from ..signals import SignalParams

__all__ = [
    # Configuration
    "SimulationConfig",
    "SignalParams",
    "SolverOptions",
    "parse_simulation_config",
    "ConfigParsingError",
    # Core services
    "SimulationContext",
    "SimulationEngine",
    "solve",
    "clamp_state",
    "simulate",
    # Results
    "SimulationResult",
    "SolverResult",
    "SolverStats",
    # Exceptions
    "InvalidRunSettingsError",
]
