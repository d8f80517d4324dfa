# src/memsim_core/presets/catalog.py
"""
Loads the catalog of published experiment configurations.

The catalog is a YAML document shipped as package data (`presets.yaml`). It is
validated with the same cerberus schema as any user configuration, and every
entry is converted to a `SimulationConfig` at load time so a broken preset is
reported immediately rather than when it is first run.
"""
import dataclasses
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from ..constants import SIMULATION_DEFAULT_NUM_POINTS
from ..models import ModelRegistry
from ..schema import CATALOG_SCHEMA, ConfigValidator, format_schema_errors
from ..simulation.config import ConfigParsingError, SimulationConfig, parse_simulation_config

logger = logging.getLogger(__name__)

PRESETS_RESOURCE = "presets.yaml"


@dataclass(frozen=True)
class ExperimentPreset:
    """A named, ready-to-run configuration reproducing a published experiment."""
    id: str
    name: str
    description: str
    config: SimulationConfig

    @property
    def model_id(self) -> str:
        return self.config.model_id

    def to_config(self, num_points: int = SIMULATION_DEFAULT_NUM_POINTS) -> SimulationConfig:
        """Returns the preset's configuration sampled at `num_points` output points."""
        return dataclasses.replace(self.config, num_points=num_points)


def _load_yaml(source: Optional[Union[str, Path]]) -> Dict[str, Any]:
    """Loads the catalog from `source`, or from the bundled package data when None."""
    try:
        if source is None:
            text = resources.files(__package__).joinpath(PRESETS_RESOURCE).read_text(encoding="utf-8")
        else:
            text = Path(source).read_text(encoding="utf-8")
        content = yaml.safe_load(text)
    except OSError as e:
        raise ConfigParsingError(f"Cannot read preset catalog '{source or PRESETS_RESOURCE}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigParsingError(f"Invalid YAML syntax in preset catalog: {e}") from e

    if not isinstance(content, dict):
        raise ConfigParsingError("The root of the preset catalog must be a dictionary (mapping).")
    return content


def load_presets(
    source: Optional[Union[str, Path]] = None,
    registry: Optional[ModelRegistry] = None,
) -> Tuple[ExperimentPreset, ...]:
    """
    Reads, validates and converts a preset catalog.

    Args:
        source: Path to a catalog YAML file. Defaults to the bundled catalog.
        registry: Registry used to resolve model ids and parameter units.
                  A default registry is used when None.

    Returns:
        The presets in catalog order.

    Raises:
        ConfigParsingError: If the catalog cannot be read, violates the schema
                            (including duplicate preset ids), or holds a
                            configuration that cannot be converted.
    """
    content = _load_yaml(source)

    validator = ConfigValidator(CATALOG_SCHEMA)
    if not validator.validate(content):
        raise ConfigParsingError(
            f"Preset catalog failed schema validation:\n{format_schema_errors(validator.errors)}"
        )

    presets = []
    for entry in validator.document["presets"]:
        try:
            config = parse_simulation_config(entry["config"], registry)
        except ConfigParsingError as e:
            raise ConfigParsingError(f"Invalid configuration in preset '{entry['id']}': {e}") from e
        presets.append(ExperimentPreset(
            id=entry["id"],
            name=entry["name"],
            description=entry.get("description", ""),
            config=config,
        ))

    logger.info(f"Loaded {len(presets)} experiment preset(s).")
    return tuple(presets)


def get_preset(preset_id: str, registry: Optional[ModelRegistry] = None) -> ExperimentPreset:
    """
    Looks up a preset of the bundled catalog by id.

    Raises:
        KeyError: If no preset has the given id.
    """
    presets = load_presets(registry=registry)
    for preset in presets:
        if preset.id == preset_id:
            return preset
    raise KeyError(f"Unknown preset '{preset_id}'. Available presets: {[p.id for p in presets]}")
