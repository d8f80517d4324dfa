# src/memsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("MemSim Core package initialized.")

from .units import ureg, pint, Quantity
from .windows import WindowType, create_window_function
from .signals import SignalParams, SignalType, create_signal
from .models import MemristorModel, ParameterInfo, ModelRegistry, create_default_registry
from .simulation import (
    SimulationConfig, SolverOptions, SimulationResult, SolverResult, SolverStats,
    ConfigParsingError, parse_simulation_config, simulate, solve,
)
from .presets import ExperimentPreset, load_presets, get_preset
from .errors import MemSimError, SimulationConfigError, SimulationRunError

__all__ = [
    # Units
    "ureg", "pint", "Quantity",
    # Windows & signals
    "WindowType", "create_window_function",
    "SignalParams", "SignalType", "create_signal",
    # Models
    "MemristorModel", "ParameterInfo", "ModelRegistry", "create_default_registry",
    # Configuration
    "SimulationConfig", "SolverOptions", "ConfigParsingError", "parse_simulation_config",
    # Simulation
    "simulate", "solve",
    "SimulationResult", "SolverResult", "SolverStats",
    # Presets
    "ExperimentPreset", "load_presets", "get_preset",
    # Top-Level Errors (Actionable Diagnostics)
    "MemSimError", "SimulationConfigError", "SimulationRunError",
]
