# src/memsim_core/windows.py
"""
Window functions F(x, i) for drift-type memristor models.

A window function multiplies dx/dt so that the state variable stops drifting as
it approaches the edges of its physical domain [0, 1]. Without one, a linear
ion-drift model lets x grow without bound and only the integrator's clamp keeps
it in range.

- Joglekar: F = 1 - (2x - 1)^(2p). Zero at both edges, one at the centre.
- Biolek: F = 1 - (x - H(-i))^(2p). The Heaviside term shifts the window with
  the current direction so the state cannot lock at an edge on reversal.
- Anusudha: F = j * (1 - 2 * (x^3 - x + 1)^p), with an extra scale factor j.
"""
import logging
from enum import Enum
from typing import Callable, Union

logger = logging.getLogger(__name__)

WindowFunction = Callable[[float, float], float]


class WindowType(Enum):
    """Available window function shapes."""
    NONE = "none"
    JOGLEKAR = "joglekar"
    BIOLEK = "biolek"
    ANUSUDHA = "anusudha"

    def __str__(self):
        return self.value


def _even_power(base: float, p: float) -> float:
    # |base|^(2p) equals base^(2p) for integer p and stays real for fractional p.
    return abs(base) ** (2 * p)


def no_window(x: float, i: float) -> float:
    return 1.0


def joglekar(x: float, i: float, p: float) -> float:
    return 1.0 - _even_power(2.0 * x - 1.0, p)


def biolek(x: float, i: float, p: float) -> float:
    step = 1.0 if i < 0 else 0.0  # H(-i)
    return 1.0 - _even_power(x - step, p)


def anusudha(x: float, i: float, p: float, j: float) -> float:
    return j * (1.0 - 2.0 * (x * x * x - x + 1.0) ** p)


def create_window_function(
    window_type: Union[WindowType, str],
    p: float = 1,
    j: float = 1,
) -> WindowFunction:
    """
    Creates a window function closure (x, i) -> F for the given shape.

    Args:
        window_type: A `WindowType` member or its string value.
        p: Shape exponent (Joglekar, Biolek, Anusudha).
        j: Scale factor (Anusudha only).

    Raises:
        ValueError: If `window_type` does not name a known window.
    """
    window_type = WindowType(window_type)

    if window_type is WindowType.JOGLEKAR:
        return lambda x, i: joglekar(x, i, p)
    if window_type is WindowType.BIOLEK:
        return lambda x, i: biolek(x, i, p)
    if window_type is WindowType.ANUSUDHA:
        return lambda x, i: anusudha(x, i, p, j)
    return no_window
