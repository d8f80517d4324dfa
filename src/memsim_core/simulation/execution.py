# src/memsim_core/simulation/execution.py
"""
Provides `simulate`, the public entry point for running a memristor simulation.

This module is a thin Facade over the internal `SimulationContext` and
`SimulationEngine`. It resolves the model, checks the configuration, builds the
signal and window, runs the engine and converts every failure into one of the
two user-facing errors:

- `SimulationConfigError` for problems detected before integration (unknown
  model, incomplete parameter set, unusable run settings), carrying the
  diagnostic report of the underlying `Diagnosable` error.
- `SimulationRunError` for anything unexpected during the run.

No partial result is ever returned on failure.
"""
import dataclasses
import logging
from typing import Optional

from ..errors import DiagnosableError, SimulationConfigError, SimulationRunError, format_diagnostic_report
from ..models import MissingParameterError, ModelRegistry, create_default_registry
from ..signals import create_signal
from ..windows import create_window_function
from .config import SimulationConfig
from .context import SimulationContext
from .engine import SimulationEngine
from .exceptions import InvalidRunSettingsError
from .results import SimulationResult

logger = logging.getLogger(__name__)


def _build_context(config: SimulationConfig, registry: ModelRegistry) -> SimulationContext:
    model = registry.get(config.model_id)

    missing = model.missing_parameters(config.model_params)
    if missing:
        raise MissingParameterError(model_id=model.model_id, missing=missing)

    if not config.t_max > 0:
        raise InvalidRunSettingsError(
            setting="t_max", value=config.t_max, model_id=model.model_id,
            details=f"The simulated duration must be positive, got {config.t_max} s.",
        )
    if config.num_points < 2:
        raise InvalidRunSettingsError(
            setting="num_points", value=config.num_points, model_id=model.model_id,
            details=f"At least two output points are required, got {config.num_points}.",
        )

    signal = create_signal(config.signal_type, config.signal_params, t_max=config.t_max)
    window = None
    if config.window_type is not None:
        window = create_window_function(config.window_type, p=config.window_p, j=config.window_j)

    return SimulationContext(
        model=model,
        params=config.model_params,
        signal_type=config.signal_type,
        signal=signal,
        window=window,
        x0=config.x0,
        t_max=config.t_max,
        solver_options=dataclasses.replace(config.solver, num_points=config.num_points),
    )


def simulate(config: SimulationConfig, registry: Optional[ModelRegistry] = None) -> SimulationResult:
    """
    Runs one memristor simulation over [0, config.t_max].

    Args:
        config: The run configuration (see `parse_simulation_config` for building
                one from a raw mapping).
        registry: The model registry to resolve `config.model_id` against. A new
                  default registry is created when None.

    Returns:
        A `SimulationResult` with `config.num_points` samples of time, voltage,
        current and state. If the integrator hit its step limit the result is
        still complete; `result.solver_stats.max_steps_exceeded` is set.

    Raises:
        SimulationConfigError: If the model id is unknown, the parameter set is
                               incomplete, or the run settings are unusable.
        SimulationRunError: If the run fails unexpectedly.
    """
    registry = registry if registry is not None else create_default_registry()

    try:
        context = _build_context(config, registry)
    except DiagnosableError as e:
        logger.error(f"Simulation configuration rejected: {e}")
        raise SimulationConfigError(e.get_diagnostic_report()) from e

    try:
        logger.info(
            f"--- Starting simulation: model '{context.model.model_id}', {context.signal_type} signal, "
            f"t_max={context.t_max:.4e} s, {context.solver_options.num_points} points ---"
        )
        result = SimulationEngine(context).run()
        if result.solver_stats.max_steps_exceeded:
            logger.warning(
                f"Simulation of '{context.model.model_id}' is degraded: the integrator hit its step "
                f"limit and the tail of the result holds the last computed state."
            )
        logger.info(
            f"Simulation finished: {result.solver_stats.n_accepted} accepted / "
            f"{result.solver_stats.n_rejected} rejected steps."
        )
        return result

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred during simulation: {e}")
        raise SimulationRunError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred during simulation: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Simulation Error Occurred ({type(e).__name__})",
            details=f"The simulator encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={'model_id': config.model_id, 'signal_type': str(config.signal_type)}
        )
        raise SimulationRunError(report) from e
