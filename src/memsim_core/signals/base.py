# src/memsim_core/signals/base.py
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

import numpy as np

TimeLike = Union[float, np.ndarray]

#: A callable returning the input voltage at time t (scalar or array).
InputSignal = Callable[[TimeLike], TimeLike]


class SignalType(Enum):
    """Excitation waveform families."""
    SINE = "sine"
    TRIANGLE = "triangle"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class SignalParams:
    """
    Amplitude and timing of a periodic excitation.

    Attributes:
        vp: Positive peak voltage (V).
        vn: Negative peak voltage magnitude (V). Mirrors `vp` when None.
        frequency: Signal frequency (Hz). Derived from `period` when None,
                   and 1 Hz when both are None.
        period: Signal period (s), used only when `frequency` is None.
    """
    vp: float
    vn: Optional[float] = None
    frequency: Optional[float] = None
    period: Optional[float] = None

    @property
    def negative_peak(self) -> float:
        return self.vp if self.vn is None else self.vn

    @property
    def effective_frequency(self) -> float:
        if self.frequency is not None:
            return self.frequency
        if self.period:
            return 1.0 / self.period
        return 1.0


def as_signal_output(values: np.ndarray) -> TimeLike:
    """Returns a plain float for 0-d results so scalar callers get scalars back."""
    if np.ndim(values) == 0:
        return float(values)
    return values
