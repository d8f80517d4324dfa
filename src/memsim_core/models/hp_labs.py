# src/memsim_core/models/hp_labs.py
"""
HP Labs ion-drift memristor model.

References:
    D. B. Strukov, G. S. Snider, D. R. Stewart and R. S. Williams,
    "The missing memristor found," Nature 453, 80-83 (2008).

A thin TiO2 film of thickness D holds a doped region of width w (resistance RON
when it spans the whole film) and an undoped region (ROFF). With the normalised
state x = w / D:

    V(t)  = [RON * x + ROFF * (1 - x)] * I(t)
    dx/dt = (muD * RON / D^2) * I(t) * F(x, I)

where F is an optional window function from `memsim_core.windows`.
"""
import logging
from typing import Optional, Tuple

import numpy as np

from ..signals import InputSignal
from ..windows import WindowFunction
from .base import ArrayLike, MemristorModel, ParameterInfo, ParamValues

logger = logging.getLogger(__name__)


_PARAMETERS: Tuple[ParameterInfo, ...] = (
    ParameterInfo(
        name="D", symbol="D", default=27e-9,
        min=1e-9, max=200e-9, step=1e-9,
        unit="m", group="device",
        description=(
            "Total device thickness (doped + undoped region). Typical TiO2 devices "
            "are 10-100 nm. Thinner films switch faster but are harder to fabricate."
        ),
    ),
    ParameterInfo(
        name="RON", symbol="R_{\\mathrm{ON}}", default=10e3,
        min=100, max=1e6, step=100,
        unit="ohm", group="device",
        description=(
            "Low-resistance state, reached when the doped region spans the whole "
            "device (x = 1)."
        ),
    ),
    ParameterInfo(
        name="ROFF", symbol="R_{\\mathrm{OFF}}", default=100e3,
        min=1e3, max=1e8, step=1e3,
        unit="ohm", group="device",
        description=(
            "High-resistance state, reached when the undoped region spans the whole "
            "device (x = 0). Typically 10-1000x larger than RON."
        ),
    ),
    ParameterInfo(
        name="muD", symbol="\\mu_D", default=1e-14,
        min=1e-16, max=1e-10, step=1e-16,
        unit="m**2 / (V * s)", group="device",
        description=(
            "Average drift mobility of oxygen vacancies; sets the switching speed. "
            "Typically 1e-14 to 1e-10 m^2/(V s) for TiO2."
        ),
    ),
)


class HPLabsModel(MemristorModel):
    """Linear ion-drift model with an optional boundary window."""
    model_id = "hp_labs"
    name = "HP Labs Ion-Drift Model"

    @classmethod
    def declare_parameters(cls) -> Tuple[ParameterInfo, ...]:
        return _PARAMETERS

    @staticmethod
    def resistance(x: ArrayLike, params: ParamValues) -> ArrayLike:
        return params["RON"] * x + params["ROFF"] * (1 - x)

    def current(self, v: ArrayLike, x: ArrayLike, params: ParamValues) -> ArrayLike:
        with np.errstate(divide="ignore", invalid="ignore"):
            i = np.asarray(v, dtype=float) / self.resistance(x, params)
        return float(i) if np.ndim(i) == 0 else i

    def state_derivative(
        self,
        t: float,
        x: float,
        signal: InputSignal,
        params: ParamValues,
        window: Optional[WindowFunction] = None,
    ) -> float:
        v = signal(t)
        # float64 arithmetic: a zero thickness or resistance yields inf/NaN, not an exception.
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            i = np.float64(v) / self.resistance(x, params)
            f = window(x, float(i)) if window is not None else 1.0
            rate = np.float64(params["muD"]) * params["RON"] / np.float64(params["D"]) ** 2
            return float(rate * i * f)
