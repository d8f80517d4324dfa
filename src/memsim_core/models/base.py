# src/memsim_core/models/base.py

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Dict, List, Mapping, Optional, Tuple, Union

import numpy as np

from ..signals import InputSignal
from ..units import QuantityLike, to_magnitude
from ..windows import WindowFunction

logger = logging.getLogger(__name__)

#: A flat mapping from parameter name to its numeric value for one run.
ParamValues = Mapping[str, float]

ArrayLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class ParameterInfo:
    """
    Static, descriptive metadata for one tunable model parameter.

    The numeric core only consumes `default` (to build default parameter sets)
    and `unit` (to convert unit-bearing configuration values). The range and
    step are published for consumers that need human-readable bounds; they are
    never enforced during a simulation.

    Attributes:
        name: Key used in the parameter mapping (e.g. "a1", "RON").
        symbol: LaTeX symbol for display (e.g. "R_{\\mathrm{ON}}").
        default: Value used when no explicit value is supplied.
        min: Lower end of the meaningful range.
        max: Upper end of the meaningful range.
        step: Suggested granularity for interactive tuning.
        unit: A pint-parsable unit string, or "" for dimensionless quantities.
        description: Physical meaning of the parameter.
        group: Grouping tag ("iv", "threshold", "state", "device").
    """
    name: str
    symbol: str
    default: float
    min: float
    max: float
    step: float
    unit: str
    description: str
    group: str

    def to_magnitude(self, value: QuantityLike) -> float:
        """Converts a raw value (number or pint string) to this parameter's unit."""
        return to_magnitude(value, self.unit)


class MemristorModel(ABC):
    """
    The abstract base class for all memristor device models.

    A model is a stateless computational unit: the evolving state variable x
    lives entirely in the integrator, and every parameter value is passed in
    explicitly. Concrete models declare their identity through class attributes
    and their parameters through `declare_parameters`.
    """
    model_id: ClassVar[str] = "BaseModel"
    name: ClassVar[str] = "Base Memristor Model"

    @classmethod
    @abstractmethod
    def declare_parameters(cls) -> Tuple[ParameterInfo, ...]:
        """Declare the ordered metadata of every parameter the model reads."""
        pass

    @property
    def parameter_info(self) -> Tuple[ParameterInfo, ...]:
        return type(self).declare_parameters()

    @property
    def parameter_names(self) -> List[str]:
        return [info.name for info in self.parameter_info]

    def default_params(self) -> Dict[str, float]:
        """Builds a parameter mapping from the declared defaults."""
        return {info.name: info.default for info in self.parameter_info}

    def missing_parameters(self, params: ParamValues) -> List[str]:
        """Returns the declared parameter names absent from `params`, in declaration order."""
        return [name for name in self.parameter_names if name not in params]

    @abstractmethod
    def current(self, v: ArrayLike, x: ArrayLike, params: ParamValues) -> ArrayLike:
        """
        Device current for applied voltage `v` and state `x`.

        Must accept NumPy arrays of equal shape as well as scalars, since the
        orchestrator evaluates it over a whole output trajectory at once.
        """
        pass

    @abstractmethod
    def state_derivative(
        self,
        t: float,
        x: float,
        signal: InputSignal,
        params: ParamValues,
        window: Optional[WindowFunction] = None,
    ) -> float:
        """
        dx/dt at time `t` for state `x`.

        The applied voltage is looked up as `signal(t)`. Models that do not use a
        window function accept and ignore the `window` argument.
        """
        pass

    def __str__(self) -> str:
        return f"{type(self).__name__}('{self.model_id}')"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model_id='{self.model_id}')"
