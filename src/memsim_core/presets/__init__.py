# src/memsim_core/presets/__init__.py
from .catalog import ExperimentPreset, get_preset, load_presets

__all__ = [
    "ExperimentPreset",
    "load_presets",
    "get_preset",
]
