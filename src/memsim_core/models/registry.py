# src/memsim_core/models/registry.py
"""
Explicit, instance-owned mapping from model id strings to model instances.

The registry is constructed by the caller (or by `create_default_registry`) and
passed to the orchestrator. There is no module-level registry, so concurrent
simulations never share mutable lookup state.
"""
import logging
from typing import Dict, Iterator, List

from .base import MemristorModel, ParameterInfo
from .exceptions import UnknownModelError
from .hp_labs import HPLabsModel
from .yakopcic import YakopcicModel

logger = logging.getLogger(__name__)


class ModelRegistry:
    """Maps model ids to stateless `MemristorModel` instances."""

    def __init__(self):
        self._models: Dict[str, MemristorModel] = {}

    def register(self, model: MemristorModel) -> MemristorModel:
        """
        Validates a model's declared metadata and adds it under its `model_id`.

        Raises:
            TypeError: If the object is not a `MemristorModel` or its declared
                       metadata violates the model API contract.
        """
        if not isinstance(model, MemristorModel):
            raise TypeError(f"Object {model!r} must be an instance of MemristorModel.")

        model_id = model.model_id
        if not isinstance(model_id, str) or not model_id:
            raise TypeError(f"Model class '{type(model).__name__}' must declare a non-empty string model_id.")

        try:
            infos = model.parameter_info
            if not all(isinstance(info, ParameterInfo) for info in infos):
                raise TypeError("declare_parameters() must return ParameterInfo objects only.")
            names = [info.name for info in infos]
            if len(set(names)) != len(names):
                raise TypeError(f"declare_parameters() returned duplicate parameter names: {names}.")
            for info in infos:
                if not (info.min <= info.default <= info.max):
                    raise TypeError(
                        f"Default {info.default} of parameter '{info.name}' lies outside "
                        f"its declared range [{info.min}, {info.max}]."
                    )
        except TypeError as e:
            raise TypeError(
                f"Model class '{type(model).__name__}' violates the model API contract: {e}"
            ) from e

        if model_id in self._models:
            logger.warning(f"Model id '{model_id}' is being redefined/overwritten.")
        self._models[model_id] = model
        logger.debug(f"Registered model '{model_id}' -> {type(model).__name__}")
        return model

    def get(self, model_id: str) -> MemristorModel:
        """
        Resolves a model id.

        Raises:
            UnknownModelError: If no model is registered under `model_id`.
        """
        try:
            return self._models[model_id]
        except KeyError:
            raise UnknownModelError(model_id=model_id, available_models=self.model_ids) from None

    @property
    def model_ids(self) -> List[str]:
        return sorted(self._models)

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._models

    def __iter__(self) -> Iterator[MemristorModel]:
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)


def create_default_registry() -> ModelRegistry:
    """Returns a new registry holding the built-in HP Labs and Yakopcic models."""
    registry = ModelRegistry()
    registry.register(YakopcicModel())
    registry.register(HPLabsModel())
    return registry
