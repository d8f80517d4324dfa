# src/memsim_core/signals/__init__.py
import logging
from typing import Optional, Union

from .base import InputSignal, SignalParams, SignalType
from .sine import create_sine_signal
from .triangle import create_triangle_signal

logger = logging.getLogger(__name__)


def create_signal(
    signal_type: Union[SignalType, str],
    params: SignalParams,
    t_max: Optional[float] = None,
) -> InputSignal:
    """
    Builds the input signal for a run. The triangle waveform needs the total run
    length `t_max` to place its polarity flip; the sine waveform ignores it.

    Raises:
        ValueError: If `signal_type` is unknown, or a triangle is requested
                    without `t_max`.
    """
    signal_type = SignalType(signal_type)
    if signal_type is SignalType.TRIANGLE:
        if t_max is None:
            raise ValueError("The triangle signal requires the total run length 't_max'.")
        return create_triangle_signal(params, t_max)
    return create_sine_signal(params)


__all__ = [
    "InputSignal",
    "SignalParams",
    "SignalType",
    "create_signal",
    "create_sine_signal",
    "create_triangle_signal",
]
