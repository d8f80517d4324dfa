# src/memsim_core/units.py
import logging
from typing import Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")

QuantityLike = Union[int, float, str]


def to_magnitude(value: QuantityLike, unit: str) -> float:
    """
    Converts a raw numeric or unit-bearing string value to a plain float expressed
    in `unit` (an empty string means dimensionless).

    Numbers, and strings that parse to a dimensionless quantity (e.g. "27e-9"),
    are taken as already expressed in `unit`. Strings carrying units
    (e.g. "27 nm", "1 kHz") are converted.

    Raises:
        pint.DimensionalityError: If the quantity's units are incompatible with `unit`.
        pint.UndefinedUnitError: If the string names an unknown unit.
        ValueError: If the value cannot be interpreted as a quantity at all.
    """
    if isinstance(value, bool):
        raise ValueError(f"Boolean value {value!r} is not a valid quantity.")
    if isinstance(value, (int, float)):
        return float(value)

    qty = Quantity(value)
    if qty.dimensionless:
        return float(qty.to(ureg.dimensionless).magnitude)
    target = ureg.Unit(unit) if unit else ureg.dimensionless
    return float(qty.to(target).magnitude)
