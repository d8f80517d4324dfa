# src/memsim_core/simulation/engine.py
"""
Defines the `SimulationEngine`, the stateless service that runs one simulation.

The engine holds no state of its own beyond a reference to its immutable
`SimulationContext`. It closes the model's state equation over the context's
signal, parameters and window, integrates it, and derives the electrical
observables from the sampled state trajectory.
"""
import logging

import numpy as np

from .context import SimulationContext
from .results import SimulationResult
from .solver import solve

logger = logging.getLogger(__name__)


class SimulationEngine:
    """
    Orchestrates a single run: integrate the state, then evaluate V(t) and I(t).
    """
    def __init__(self, context: SimulationContext):
        self.context: SimulationContext = context
        logger.debug(f"SimulationEngine initialized for model '{context.model.model_id}'.")

    def _state_equation(self):
        model = self.context.model
        signal = self.context.signal
        params = self.context.params
        window = self.context.window

        def rhs(t: float, x: float) -> float:
            return model.state_derivative(t, x, signal, params, window)

        return rhs

    def run(self) -> SimulationResult:
        ctx = self.context
        solution = solve(self._state_equation(), (0.0, ctx.t_max), ctx.x0, ctx.solver_options)

        # Observables are evaluated on the whole output grid at once.
        voltage = np.asarray(ctx.signal(solution.t), dtype=float)
        current = np.asarray(ctx.model.current(voltage, solution.y, ctx.params), dtype=float)

        return SimulationResult(
            time=solution.t,
            voltage=voltage,
            current=current,
            state_variable=solution.y,
            solver_stats=solution.stats,
        )
