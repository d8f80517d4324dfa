# src/memsim_core/signals/sine.py
"""
Sine-wave generator with asymmetric amplitude.

V(t) = vp * sin(2*pi*f*t) on the positive half-cycle and vn * sin(2*pi*f*t) on
the negative one, so SET and RESET drive levels can differ.
"""
import numpy as np

from .base import InputSignal, SignalParams, TimeLike, as_signal_output


def create_sine_signal(params: SignalParams) -> InputSignal:
    vp = params.vp
    vn = params.negative_peak
    omega = 2.0 * np.pi * params.effective_frequency

    def signal(t: TimeLike) -> TimeLike:
        raw = np.sin(omega * np.asarray(t, dtype=float))
        return as_signal_output(np.where(raw >= 0, vp * raw, vn * raw))

    return signal
