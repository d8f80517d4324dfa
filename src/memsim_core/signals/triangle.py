# src/memsim_core/signals/triangle.py
"""
Triangle-wave generator for DC-sweep style excitation.

The waveform ramps 0 -> +vp -> 0 during the first half of the run and
0 -> -vn -> 0 during the second half, reproducing the four-quadrant sweep used to
characterise memristors. The flip point is half of the total run length `t_max`,
not half of the signal period.
"""
import numpy as np
from scipy.signal import sawtooth

from .base import InputSignal, SignalParams, TimeLike, as_signal_output


def create_triangle_signal(params: SignalParams, t_max: float) -> InputSignal:
    vp = params.vp
    vn = params.negative_peak
    omega = 2.0 * np.pi * params.effective_frequency
    t_flip = t_max / 2.0

    def signal(t: TimeLike) -> TimeLike:
        t_arr = np.asarray(t, dtype=float)
        # width=0.5 gives a symmetric triangle rising from -1 to +1 over [0, pi].
        saw = np.abs(sawtooth(omega * t_arr + np.pi / 2.0, width=0.5))
        pos = np.where(t_arr > t_flip, -vp * saw, vp * saw)
        neg = -vn * saw
        return as_signal_output(np.where(pos > 0, pos, neg))

    return signal
