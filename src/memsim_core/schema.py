# src/memsim_core/schema.py
"""
Cerberus schemas and the validator shared by the configuration parser and the
preset catalog loader.

Values that carry physical units may be written either as plain numbers (taken
in the canonical SI unit of the field) or as pint strings such as "27 nm",
"1 kHz" or "40 ms". The `quantity` rule only checks that such strings parse;
the conversion itself happens in `memsim_core.units.to_magnitude`.
"""
import logging
from typing import Any, Dict, List

import cerberus

from .signals import SignalType
from .units import Quantity
from .windows import WindowType

logger = logging.getLogger(__name__)


class ConfigValidator(cerberus.Validator):
    """Cerberus validator with the project's quantity and uniqueness rules."""

    def _validate_quantity(self, constraint: bool, field: str, value: Any):
        """
        Validates that a string value parses as a pint quantity.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint or not isinstance(value, str):
            return
        try:
            Quantity(value)
        except Exception as e:
            self._error(field, f"'{value}' is not a valid quantity: {e}")

    def _validate_unique_elements_by_key(self, key_for_uniqueness: str, field: str, value: List[Dict]):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return

        seen_keys = set()
        duplicates = []
        for item in value:
            if not isinstance(item, dict):
                continue
            item_key = item.get(key_for_uniqueness)
            if item_key is not None:
                if item_key in seen_keys:
                    duplicates.append(item_key)
                else:
                    seen_keys.add(item_key)

        if duplicates:
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {sorted(set(duplicates))}")


def format_schema_errors(errors: Dict[str, Any]) -> str:
    """Flattens a cerberus error tree into one readable line per offending field."""
    lines = []

    def _walk(prefix: str, node: Any):
        if isinstance(node, dict):
            for key, sub in sorted(node.items(), key=lambda kv: str(kv[0])):
                _walk(f"{prefix}.{key}" if prefix else str(key), sub)
        elif isinstance(node, list):
            for item in node:
                _walk(prefix, item)
        else:
            lines.append(f"  - Field '{prefix}': {node}")

    _walk("", errors)
    return "\n".join(lines)


_quantity_rule = {"type": ["number", "string"], "quantity": True}

SIGNAL_SCHEMA = {
    "type": {"type": "string", "required": True, "allowed": [t.value for t in SignalType]},
    "vp": {**_quantity_rule, "required": True},
    "vn": {**_quantity_rule, "required": False, "nullable": True},
    "frequency": {**_quantity_rule, "required": False, "nullable": True},
    "period": {**_quantity_rule, "required": False, "nullable": True},
}

WINDOW_SCHEMA = {
    "type": {"type": "string", "required": True, "allowed": [w.value for w in WindowType]},
    "p": {"type": "number", "required": False},
    "j": {"type": "number", "required": False},
}

SOLVER_SCHEMA = {
    "rtol": {"type": "number", "required": False, "min": 0},
    "atol": {"type": "number", "required": False, "min": 0},
    "max_steps": {"type": "integer", "required": False, "min": 1},
}

SIMULATION_SCHEMA = {
    "model_id": {"type": "string", "required": True, "empty": False},
    "model_params": {
        "type": "dict", "required": False,
        "keysrules": {"type": "string", "empty": False},
        "valuesrules": _quantity_rule,
    },
    "signal": {"type": "dict", "required": True, "schema": SIGNAL_SCHEMA},
    "x0": {"type": "number", "required": True},
    "t_max": {**_quantity_rule, "required": True},
    "num_points": {"type": "integer", "required": False, "min": 2},
    "window": {"type": "dict", "required": False, "nullable": True, "schema": WINDOW_SCHEMA},
    "solver": {"type": "dict", "required": False, "schema": SOLVER_SCHEMA},
}

PRESET_SCHEMA = {
    "id": {"type": "string", "required": True, "empty": False},
    "name": {"type": "string", "required": True, "empty": False},
    "description": {"type": "string", "required": False},
    "config": {"type": "dict", "required": True, "schema": SIMULATION_SCHEMA},
}

CATALOG_SCHEMA = {
    "presets": {
        "type": "list", "required": True, "minlength": 1,
        "unique_elements_by_key": "id",
        "schema": {"type": "dict", "schema": PRESET_SCHEMA},
    },
}
