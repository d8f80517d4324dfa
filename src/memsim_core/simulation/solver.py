# src/memsim_core/simulation/solver.py
"""
Adaptive Dormand-Prince 5(4) integrator for a scalar, bounded state variable.

Solves dx/dt = f(t, x), x(t0) = x0 over [t0, t_end] and samples the solution at
`num_points` evenly spaced times using the method's continuous extension, so the
output grid is independent of the internal step sequence.

The state is a normalised memristor state and must stay inside [0, 1]: it is
clamped before every stage evaluation, after every accepted step and on every
output sample. The embedded error estimate is computed from the unclamped
order-5 solution so clamping never hides a genuinely inaccurate step.
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from ..constants import (
    STATE_MIN, STATE_MAX,
    SOLVER_DEFAULT_NUM_POINTS, SOLVER_DEFAULT_RTOL, SOLVER_DEFAULT_ATOL, SOLVER_DEFAULT_MAX_STEPS,
    SOLVER_H_MIN_FRACTION, SOLVER_H_MAX_FRACTION, SOLVER_H_INIT_FRACTION,
    SOLVER_SAFETY, SOLVER_MIN_FACTOR, SOLVER_MAX_FACTOR,
)
from .results import SolverResult, SolverStats

logger = logging.getLogger(__name__)

RhsFunction = Callable[[float, float], float]

# --- Dormand-Prince tableau ---
C2, C3, C4, C5 = 1 / 5, 3 / 10, 4 / 5, 8 / 9

A21 = 1 / 5
A31, A32 = 3 / 40, 9 / 40
A41, A42, A43 = 44 / 45, -56 / 15, 32 / 9
A51, A52, A53, A54 = 19372 / 6561, -25360 / 2187, 64448 / 6561, -212 / 729
A61, A62, A63, A64, A65 = 9017 / 3168, -355 / 33, 46732 / 5247, 49 / 176, -5103 / 18656

# Order-5 weights (b2 = 0). They are also the last row of the tableau (FSAL).
B1, B3, B4, B5, B6 = 35 / 384, 500 / 1113, 125 / 192, -2187 / 6784, 11 / 84

# Difference between the order-5 and order-4 weights.
E1, E3, E4, E5, E6, E7 = 71 / 57600, -71 / 16695, 71 / 1920, -17253 / 339200, 22 / 525, -1 / 40

# Continuous extension: the weight of stage i at fraction theta is
# theta * (P[i][0] + theta * (P[i][1] + theta * (P[i][2] + theta * P[i][3]))).
# At theta = 1 the rows sum to the order-5 weights (zero for k7).
P1 = (1.0, -8048581381 / 2820520608, 8663915743 / 2820520608, -12715105075 / 11282082432)
P3 = (0.0, 131558114200 / 32700410799, -68118460800 / 10900136933, 87487479700 / 32700410799)
P4 = (0.0, -1754552775 / 470086768, 14199869525 / 1410260304, -10690763975 / 1880347072)
P5 = (0.0, 127303824393 / 49829197408, -318862633887 / 49829197408, 701980252875 / 199316789632)
P6 = (0.0, -282668133 / 205662961, 2019193451 / 616988883, -1453857185 / 822651844)
P7 = (0.0, 40617522 / 29380423, -110615467 / 29380423, 69997945 / 29380423)


@dataclass(frozen=True)
class SolverOptions:
    """
    Tunable settings of the adaptive integrator.

    Attributes:
        num_points: Number of evenly spaced output samples (>= 2).
        rtol: Relative tolerance of the local error control.
        atol: Absolute tolerance of the local error control.
        max_steps: The run takes at most `max_steps` internal steps (accepted +
                   rejected) before the remaining output is held.
    """
    num_points: int = SOLVER_DEFAULT_NUM_POINTS
    rtol: float = SOLVER_DEFAULT_RTOL
    atol: float = SOLVER_DEFAULT_ATOL
    max_steps: int = SOLVER_DEFAULT_MAX_STEPS


def clamp_state(x: float) -> float:
    """Clamps a state value to the physical domain [0, 1]."""
    if x < STATE_MIN:
        return STATE_MIN
    if x > STATE_MAX:
        return STATE_MAX
    return x


def _limit_slope(k: float, limit: float) -> float:
    if k > limit:
        return limit
    if k < -limit:
        return -limit
    return k


def _weight(p: Tuple[float, float, float, float], theta: float) -> float:
    return theta * (p[0] + theta * (p[1] + theta * (p[2] + theta * p[3])))


def _dense_output(
    x_old: float, h: float, theta: float,
    k1: float, k3: float, k4: float, k5: float, k6: float, k7: float,
) -> float:
    return x_old + h * (
        _weight(P1, theta) * k1
        + _weight(P3, theta) * k3
        + _weight(P4, theta) * k4
        + _weight(P5, theta) * k5
        + _weight(P6, theta) * k6
        + _weight(P7, theta) * k7
    )


def solve(
    f: RhsFunction,
    t_span: Tuple[float, float],
    x0: float,
    options: Optional[SolverOptions] = None,
) -> SolverResult:
    """
    Integrates dx/dt = f(t, x) from x(t0) = x0 and samples it on an even grid.

    Args:
        f: Right-hand side. Only ever called with a state inside [0, 1]. Slopes
           steeper than one full state range per minimum step (including +/-inf)
           are capped at that value; NaN is passed through.
        t_span: (t0, t_end) with t_end > t0.
        x0: Initial state. Clamped to [0, 1] before use.
        options: Integrator settings; defaults to `SolverOptions()`.

    Returns:
        A `SolverResult` whose `t` holds `num_points` evenly spaced times (the last
        one exactly `t_end`) and whose `y` holds the clamped state at each of them.
        If `max_steps` is exhausted, the unfilled samples hold the last accepted
        state and `stats.max_steps_exceeded` is set.

    Raises:
        ValueError: If `num_points < 2` or `t_end <= t0`.
    """
    options = options if options is not None else SolverOptions()
    num_points = int(options.num_points)
    rtol, atol = options.rtol, options.atol
    t0, t_end = float(t_span[0]), float(t_span[1])

    if num_points < 2:
        raise ValueError(f"num_points must be at least 2, got {num_points}.")
    if not t_end > t0:
        raise ValueError(f"t_end must be greater than t0, got t_span=({t0}, {t_end}).")

    span = t_end - t0
    t_out = t0 + np.arange(num_points, dtype=float) * (span / (num_points - 1))
    t_out[-1] = t_end
    y_out = np.empty(num_points, dtype=float)

    t_cur = t0
    x_cur = clamp_state(float(x0))
    y_out[0] = x_cur
    out_idx = 1

    h = span * SOLVER_H_INIT_FRACTION
    h_min = span * SOLVER_H_MIN_FRACTION
    h_max = span * SOLVER_H_MAX_FRACTION

    # A slope that crosses the whole state range within the minimum step is
    # indistinguishable from an infinite one once the state is clamped. Capping
    # it keeps overflowed model rates (+/-inf) out of the stage sums; NaN passes.
    slope_limit = (STATE_MAX - STATE_MIN) / h_min

    def rhs(t: float, x: float) -> float:
        return _limit_slope(f(t, x), slope_limit)

    k1 = rhs(t_cur, x_cur)
    n_evals = 1
    n_steps = n_accepted = n_rejected = 0
    max_steps_exceeded = False

    while t_cur < t_end and out_idx < num_points:
        if n_steps >= options.max_steps:
            max_steps_exceeded = True
            logger.warning(
                f"Integrator exceeded {options.max_steps} steps at t={t_cur:.6e} "
                f"(t_end={t_end:.6e}); holding the last state for {num_points - out_idx} remaining sample(s)."
            )
            break
        n_steps += 1

        last_step = t_cur + h >= t_end
        if last_step:
            h = t_end - t_cur

        k2 = rhs(t_cur + C2 * h, clamp_state(x_cur + h * A21 * k1))
        k3 = rhs(t_cur + C3 * h, clamp_state(x_cur + h * (A31 * k1 + A32 * k2)))
        k4 = rhs(t_cur + C4 * h, clamp_state(x_cur + h * (A41 * k1 + A42 * k2 + A43 * k3)))
        k5 = rhs(t_cur + C5 * h, clamp_state(x_cur + h * (A51 * k1 + A52 * k2 + A53 * k3 + A54 * k4)))
        k6 = rhs(t_cur + h, clamp_state(x_cur + h * (A61 * k1 + A62 * k2 + A63 * k3 + A64 * k4 + A65 * k5)))

        x_new = x_cur + h * (B1 * k1 + B3 * k3 + B4 * k4 + B5 * k5 + B6 * k6)
        k7 = rhs(t_cur + h, clamp_state(x_new))
        n_evals += 6

        err = h * (E1 * k1 + E3 * k3 + E4 * k4 + E5 * k5 + E6 * k6 + E7 * k7)
        scale = atol + rtol * max(abs(x_cur), abs(x_new))
        err_ratio = abs(err) / scale

        # A NaN estimate cannot be reduced by shrinking the step; accept it so the
        # NaN surfaces in the output instead of stalling the step loop.
        if err_ratio <= 1.0 or math.isnan(err_ratio):
            t_new = t_end if last_step else t_cur + h
            while out_idx < num_points and t_out[out_idx] <= t_new + 1e-14 * abs(t_new):
                theta = (t_out[out_idx] - t_cur) / h
                y_out[out_idx] = clamp_state(_dense_output(x_cur, h, theta, k1, k3, k4, k5, k6, k7))
                out_idx += 1

            t_cur = t_new
            x_cur = clamp_state(x_new)
            k1 = k7
            n_accepted += 1
        else:
            n_rejected += 1

        if err_ratio > 0:
            factor = SOLVER_SAFETY * err_ratio ** -0.2
        else:
            factor = SOLVER_MAX_FACTOR
        factor = min(SOLVER_MAX_FACTOR, max(SOLVER_MIN_FACTOR, factor))
        h = min(h_max, max(h_min, h * factor))

    # Held samples after early termination (or any slot left by round-off).
    y_out[out_idx:] = x_cur

    stats = SolverStats(
        n_steps=n_steps,
        n_accepted=n_accepted,
        n_rejected=n_rejected,
        n_rhs_evals=n_evals,
        max_steps_exceeded=max_steps_exceeded,
    )
    logger.debug(
        f"Integration over [{t0:.4e}, {t_end:.4e}] finished: {n_accepted} accepted, "
        f"{n_rejected} rejected, {n_evals} RHS evaluations."
    )
    return SolverResult(t=t_out, y=y_out, stats=stats)
