# src/memsim_core/models/__init__.py
import logging
logger = logging.getLogger(__name__)

from .base import MemristorModel, ParameterInfo, ParamValues
from .exceptions import MissingParameterError, UnknownModelError
from .hp_labs import HPLabsModel
from .yakopcic import YakopcicModel
from .registry import ModelRegistry, create_default_registry

__all__ = [
    "MemristorModel",
    "ParameterInfo",
    "ParamValues",
    "HPLabsModel",
    "YakopcicModel",
    "ModelRegistry",
    "create_default_registry",
    "UnknownModelError",
    "MissingParameterError",
]
