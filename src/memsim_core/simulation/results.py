# src/memsim_core/simulation/results.py
"""
Formal, immutable data contracts for integrator and simulation output.

The integrator only knows about the state variable; the physical observables
(voltage and current) are added by the simulation engine. Keeping the two
results separate makes that split explicit in the types.
"""
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SolverStats:
    """
    Bookkeeping of a single integration.

    Attributes:
        n_steps: Internal steps attempted (accepted + rejected).
        n_accepted: Steps that passed the error test.
        n_rejected: Steps that were retried with a smaller step size.
        n_rhs_evals: Right-hand-side evaluations, including the initial one.
        max_steps_exceeded: True when the run stopped at the step limit and the
                            tail of the output holds the last accepted state.
    """
    n_steps: int
    n_accepted: int
    n_rejected: int
    n_rhs_evals: int
    max_steps_exceeded: bool


@dataclass(frozen=True)
class SolverResult:
    """
    State trajectory sampled on an even output grid.

    Attributes:
        t: Output times; evenly spaced, with `t[-1]` exactly equal to the end time.
        y: State value at each output time, clamped to [0, 1].
        stats: Diagnostics of the integration.
    """
    t: np.ndarray
    y: np.ndarray
    stats: SolverStats


@dataclass(frozen=True)
class SimulationResult:
    """
    The user-facing result of a memristor simulation.

    All four traces have the same length and are indexed by output sample.

    Attributes:
        time: Output times (s).
        voltage: Applied voltage at each output time (V).
        current: Device current at each output time (A).
        state_variable: Normalised device state at each output time, in [0, 1].
        solver_stats: Diagnostics of the underlying integration. Check
                      `solver_stats.max_steps_exceeded` to detect a run whose tail
                      was held at the last state.
    """
    time: np.ndarray
    voltage: np.ndarray
    current: np.ndarray
    state_variable: np.ndarray
    solver_stats: SolverStats

    def __len__(self) -> int:
        return len(self.time)
