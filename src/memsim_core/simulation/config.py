# src/memsim_core/simulation/config.py
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import pint

from ..constants import SIMULATION_DEFAULT_NUM_POINTS
from ..models import ModelRegistry, UnknownModelError, create_default_registry
from ..schema import SIMULATION_SCHEMA, ConfigValidator, format_schema_errors
from ..signals import SignalParams, SignalType
from ..units import to_magnitude
from ..windows import WindowType
from .solver import SolverOptions

logger = logging.getLogger(__name__)


class ConfigParsingError(ValueError):
    """Custom exception for errors during simulation configuration parsing."""
    pass


@dataclass(frozen=True)
class SimulationConfig:
    """
    Everything a single simulation run needs, in canonical SI units.

    Attributes:
        model_id: Id of a model registered in the registry used for the run.
        model_params: Parameter name to value; must cover every declared parameter.
        signal_type: Excitation waveform.
        signal_params: Amplitude and timing of the excitation.
        x0: Initial state. Expected in [0, 1]; clamped by the integrator otherwise.
        t_max: Simulated duration (s); the run covers [0, t_max].
        num_points: Number of output samples. Overrides `solver.num_points`.
        window_type: Window applied by window-aware models, or None for no window.
        window_p: Window exponent p.
        window_j: Anusudha scale j.
        solver: Integrator tolerances and step limit.
    """
    model_id: str
    model_params: Mapping[str, float]
    signal_type: Union[SignalType, str]
    signal_params: SignalParams
    x0: float
    t_max: float
    num_points: int = SIMULATION_DEFAULT_NUM_POINTS
    window_type: Optional[Union[WindowType, str]] = None
    window_p: float = 1
    window_j: float = 1
    solver: SolverOptions = field(default_factory=SolverOptions)

    def __post_init__(self):
        # Snapshot the parameters so a caller mutating its dict cannot affect a run.
        object.__setattr__(self, 'model_params', MappingProxyType(dict(self.model_params)))
        object.__setattr__(self, 'signal_type', SignalType(self.signal_type))
        if self.window_type is not None:
            object.__setattr__(self, 'window_type', WindowType(self.window_type))


def parse_simulation_config(
    raw_config: Mapping[str, Any],
    registry: Optional[ModelRegistry] = None,
) -> SimulationConfig:
    """
    Validates a raw mapping (e.g. loaded from YAML) and builds a `SimulationConfig`.

    Parameters omitted from `model_params` take the model's declared defaults.
    Unit-bearing values may be pint strings ("27 nm", "1 kHz", "40 ms"); bare
    numbers are taken as already expressed in the canonical unit.

    Raises:
        ConfigParsingError: On schema violations, unknown model ids, undeclared
                            parameter names, or unconvertible quantities.
    """
    if not raw_config:
        raise ConfigParsingError("Simulation configuration is missing or empty.")

    validator = ConfigValidator(SIMULATION_SCHEMA)
    if not validator.validate(dict(raw_config)):
        raise ConfigParsingError(
            "Simulation configuration failed schema validation:\n"
            f"{format_schema_errors(validator.errors)}"
        )
    doc = validator.document

    registry = registry if registry is not None else create_default_registry()
    try:
        model = registry.get(doc['model_id'])
    except UnknownModelError as e:
        raise ConfigParsingError(str(e)) from e

    infos = {info.name: info for info in model.parameter_info}
    raw_params: Dict[str, Any] = doc.get('model_params') or {}
    undeclared = sorted(set(raw_params) - set(infos))
    if undeclared:
        raise ConfigParsingError(
            f"Model '{model.model_id}' does not declare parameter(s) {undeclared}. "
            f"Declared parameters: {model.parameter_names}"
        )

    try:
        model_params = model.default_params()
        for name, value in raw_params.items():
            model_params[name] = infos[name].to_magnitude(value)

        raw_signal = doc['signal']
        signal_params = SignalParams(
            vp=to_magnitude(raw_signal['vp'], 'V'),
            vn=_optional_magnitude(raw_signal.get('vn'), 'V'),
            frequency=_optional_magnitude(raw_signal.get('frequency'), 'Hz'),
            period=_optional_magnitude(raw_signal.get('period'), 's'),
        )
        t_max = to_magnitude(doc['t_max'], 's')
    except (KeyError, ValueError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise ConfigParsingError(f"Failed to parse simulation configuration: {e}") from e

    if not t_max > 0:
        raise ConfigParsingError(f"'t_max' must be positive, got {t_max} s.")

    raw_window = doc.get('window')
    raw_solver = doc.get('solver') or {}
    solver_kwargs = {k: raw_solver[k] for k in ('rtol', 'atol', 'max_steps') if k in raw_solver}

    config = SimulationConfig(
        model_id=model.model_id,
        model_params=model_params,
        signal_type=raw_signal['type'],
        signal_params=signal_params,
        x0=float(doc['x0']),
        t_max=t_max,
        num_points=doc.get('num_points', SIMULATION_DEFAULT_NUM_POINTS),
        window_type=raw_window['type'] if raw_window else None,
        window_p=raw_window.get('p', 1) if raw_window else 1,
        window_j=raw_window.get('j', 1) if raw_window else 1,
        solver=SolverOptions(**solver_kwargs),
    )
    logger.debug(f"Parsed simulation configuration for model '{config.model_id}' ({config.signal_type} signal).")
    return config


def _optional_magnitude(value: Any, unit: str) -> Optional[float]:
    return None if value is None else to_magnitude(value, unit)
