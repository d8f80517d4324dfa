# src/memsim_core/simulation/context.py
from dataclasses import dataclass
from typing import Optional

from ..models import MemristorModel, ParamValues
from ..signals import InputSignal, SignalType
from ..windows import WindowFunction
from .solver import SolverOptions


@dataclass(frozen=True)
class SimulationContext:
    """
    An immutable container for the fully resolved inputs of a single run.

    The `simulate` facade builds it from a `SimulationConfig` once the model has
    been looked up, the parameters checked and the signal and window created. It
    is then handed to the stateless `SimulationEngine`, which only reads it.
    """
    model: MemristorModel
    params: ParamValues
    signal_type: SignalType
    signal: InputSignal
    window: Optional[WindowFunction]
    x0: float
    t_max: float
    solver_options: SolverOptions
