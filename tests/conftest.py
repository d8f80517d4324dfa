# tests/conftest.py
import pytest

from memsim_core import (
    SignalParams, SimulationConfig, SolverOptions, create_default_registry,
)
from memsim_core.models import HPLabsModel, YakopcicModel


@pytest.fixture
def registry():
    return create_default_registry()


@pytest.fixture
def hp_model():
    return HPLabsModel()


@pytest.fixture
def yakopcic_model():
    return YakopcicModel()


@pytest.fixture
def hp_params():
    return {"D": 27e-9, "RON": 10e3, "ROFF": 100e3, "muD": 1e-14}


@pytest.fixture
def yakopcic_params(yakopcic_model):
    return yakopcic_model.default_params()


def _hp_config(**overrides) -> SimulationConfig:
    fields = dict(
        model_id="hp_labs",
        model_params={"D": 27e-9, "RON": 10e3, "ROFF": 100e3, "muD": 1e-14},
        signal_type="sine",
        signal_params=SignalParams(vp=1.0, vn=1.0, frequency=1.0),
        x0=0.1,
        t_max=2.0,
        num_points=500,
        window_type="joglekar",
        window_p=7,
        solver=SolverOptions(),
    )
    fields.update(overrides)
    return SimulationConfig(**fields)


def _hp_raw_config(**overrides) -> dict:
    raw = {
        "model_id": "hp_labs",
        "model_params": {"D": "27 nm", "RON": "10 kohm", "ROFF": 100e3, "muD": 1e-14},
        "signal": {"type": "sine", "vp": "1 V", "vn": 1.0, "frequency": "1 Hz"},
        "x0": 0.1,
        "t_max": "2 s",
        "num_points": 200,
        "window": {"type": "joglekar", "p": 7},
    }
    raw.update(overrides)
    return raw


@pytest.fixture
def make_hp_config():
    """
    Factory for a small HP Labs sine configuration. Keyword arguments replace
    fields of the default configuration, e.g. make_hp_config(t_max=1.0).
    """
    return _hp_config


@pytest.fixture
def make_raw_config():
    """Factory for a raw (YAML-style) HP Labs configuration mapping."""
    return _hp_raw_config
