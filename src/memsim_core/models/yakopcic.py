# src/memsim_core/models/yakopcic.py
"""
Yakopcic generalised memristor model.

Reference:
    C. Yakopcic, T. M. Taha, G. Subramanyam, R. E. Pino and S. Rogers,
    "A Memristor Device Model," IEEE Electron Device Letters 32(10),
    1436-1438 (2011).

    I(t)    = a * x(t) * sinh(b * V(t)),  a = a1 for V >= 0 else a2
    dx/dt   = eta * g(V) * f(V, x)

g(V) gates switching behind the thresholds Vp and -Vn and is continuous (zero)
at both thresholds. f(V, x) is unity in the free-motion region and decays
exponentially towards the boundary the state is moving to.
"""
import logging
import math
from typing import Optional, Tuple

import numpy as np

from ..signals import InputSignal
from ..windows import WindowFunction
from .base import ArrayLike, MemristorModel, ParameterInfo, ParamValues

logger = logging.getLogger(__name__)


_PARAMETERS: Tuple[ParameterInfo, ...] = (
    # I-V relationship
    ParameterInfo(
        name="a1", symbol="a_1", default=0.17, min=1e-8, max=2, step=0.001,
        unit="", group="iv",
        description=(
            "Forward-bias current amplitude. Thinner dielectric barriers allow more "
            "tunnelling and a larger a1."
        ),
    ),
    ParameterInfo(
        name="a2", symbol="a_2", default=0.17, min=1e-8, max=2, step=0.001,
        unit="", group="iv",
        description="Reverse-bias current amplitude, allowing asymmetric I-V curves.",
    ),
    ParameterInfo(
        name="b", symbol="b", default=0.05, min=0.001, max=5, step=0.001,
        unit="", group="iv",
        description="I-V curvature: balance between Ohmic and tunnelling conduction.",
    ),
    # Thresholds and switching speed
    ParameterInfo(
        name="Vp", symbol="V_p", default=0.16, min=0.001, max=5, step=0.001,
        unit="V", group="threshold",
        description="Positive voltage threshold; the state only moves for V > Vp.",
    ),
    ParameterInfo(
        name="Vn", symbol="V_n", default=0.15, min=0.001, max=5, step=0.001,
        unit="V", group="threshold",
        description="Negative voltage threshold; the state only moves for V < -Vn.",
    ),
    ParameterInfo(
        name="Ap", symbol="A_p", default=4000, min=0.001, max=50000, step=1,
        unit="", group="threshold",
        description="Positive ion-motion speed once V exceeds Vp.",
    ),
    ParameterInfo(
        name="An", symbol="A_n", default=4000, min=0.001, max=50000, step=1,
        unit="", group="threshold",
        description="Negative ion-motion speed once V drops below -Vn.",
    ),
    # State variable dynamics
    ParameterInfo(
        name="xp", symbol="x_p", default=0.3, min=0.01, max=0.99, step=0.01,
        unit="", group="state",
        description="State above which increasing motion is exponentially damped.",
    ),
    ParameterInfo(
        name="xn", symbol="x_n", default=0.5, min=0.01, max=0.99, step=0.01,
        unit="", group="state",
        description="Decreasing motion is damped once the state falls below 1 - xn.",
    ),
    ParameterInfo(
        name="alphap", symbol="\\alpha_p", default=1, min=0.01, max=20, step=0.01,
        unit="", group="state",
        description="Decay rate of the damping above xp.",
    ),
    ParameterInfo(
        name="alphan", symbol="\\alpha_n", default=5, min=0.01, max=20, step=0.01,
        unit="", group="state",
        description="Decay rate of the damping below 1 - xn.",
    ),
    ParameterInfo(
        name="eta", symbol="\\eta", default=1, min=-1, max=1, step=2,
        unit="", group="state",
        description="Direction flag (+1 or -1): whether positive bias increases or decreases x.",
    ),
)


def threshold(v: float, Ap: float, An: float, Vp: float, Vn: float) -> float:
    """
    g(V): zero inside [-Vn, Vp], exponential outside, continuous at both edges.

    Overflows to +/-inf for drive voltages beyond the float range of exp().
    """
    with np.errstate(over="ignore"):
        if v > Vp:
            return float(Ap * (np.exp(v) - np.exp(Vp)))
        if v < -Vn:
            return float(-An * (np.exp(-v) - np.exp(Vn)))
    return 0.0


def wp(x: float, xp: float) -> float:
    return (xp - x) / (1 - xp) + 1


def wn(x: float, xn: float) -> float:
    return x / (1 - xn)


def state_window(
    v: float, x: float,
    alphap: float, alphan: float,
    xp: float, xn: float, eta: float,
) -> float:
    """f(V, x): the direction of motion is the sign of eta * V."""
    if eta * v >= 0:
        if x < xp:
            return 1.0
        return math.exp(-alphap * (x - xp)) * wp(x, xp)
    if x > 1 - xn:
        return 1.0
    return math.exp(alphan * (x + xn - 1)) * wn(x, xn)


class YakopcicModel(MemristorModel):
    """Generalised behavioural model with threshold-gated state motion."""
    model_id = "yakopcic"
    name = "Yakopcic Generalised Model"

    @classmethod
    def declare_parameters(cls) -> Tuple[ParameterInfo, ...]:
        return _PARAMETERS

    def current(self, v: ArrayLike, x: ArrayLike, params: ParamValues) -> ArrayLike:
        a = np.where(np.asarray(v) >= 0, params["a1"], params["a2"])
        with np.errstate(over="ignore", invalid="ignore"):
            i = a * x * np.sinh(params["b"] * np.asarray(v))
        return float(i) if np.ndim(i) == 0 else i

    def state_derivative(
        self,
        t: float,
        x: float,
        signal: InputSignal,
        params: ParamValues,
        window: Optional[WindowFunction] = None,
    ) -> float:
        # `window` is part of the shared model interface; this model bounds its
        # own state through state_window().
        v = signal(t)
        eta = params["eta"]
        g = threshold(v, params["Ap"], params["An"], params["Vp"], params["Vn"])
        f = state_window(v, x, params["alphap"], params["alphan"], params["xp"], params["xn"], eta)
        if f == 0.0:
            # Closed window: no motion, even when g(V) has overflowed.
            return 0.0
        return eta * g * f
