# src/memsim_core/constants.py
import logging

logger = logging.getLogger(__name__)

# --- Physical domain of the state variable ---

#: Lower and upper bound of the normalised state variable x (doped-region width
#: fraction or filament extent). Every stage, accepted step and output sample is
#: clamped to this interval.
STATE_MIN: float = 0.0
STATE_MAX: float = 1.0

# --- Adaptive integrator defaults ---

#: Number of evenly spaced output samples produced by `solve` when not specified.
SOLVER_DEFAULT_NUM_POINTS: int = 2000

#: Relative and absolute tolerances of the embedded error estimate.
SOLVER_DEFAULT_RTOL: float = 1e-8
SOLVER_DEFAULT_ATOL: float = 1e-10

#: Upper bound on internal steps before the run is terminated with held output.
SOLVER_DEFAULT_MAX_STEPS: int = 500_000

#: Step-size bounds and initial step, as fractions of the integration span.
SOLVER_H_MIN_FRACTION: float = 1e-12
SOLVER_H_MAX_FRACTION: float = 0.1
SOLVER_H_INIT_FRACTION: float = 1e-3

#: Step-size controller: safety factor and the clamp on the growth factor.
SOLVER_SAFETY: float = 0.9
SOLVER_MIN_FACTOR: float = 0.2
SOLVER_MAX_FACTOR: float = 5.0

# --- Orchestrator defaults ---

#: Output samples of an interactive `simulate` run (distinct from the solver default).
SIMULATION_DEFAULT_NUM_POINTS: int = 10_000

logger.debug("Defined core constants for the state domain and the adaptive integrator.")
