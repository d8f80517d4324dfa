# tests/test_models.py
import logging
import math

import numpy as np
import pytest

from memsim_core.models import (
    HPLabsModel, MemristorModel, ModelRegistry, ParameterInfo, UnknownModelError,
    YakopcicModel, create_default_registry,
)
from memsim_core.models.yakopcic import state_window, threshold
from memsim_core.windows import create_window_function


def _constant(v):
    return lambda t: v


class TestYakopcicCurrent:

    def test_forward_bias_uses_a1_reverse_bias_uses_a2(self, yakopcic_params):
        params = dict(yakopcic_params, a1=2.0, a2=99.0, b=1.0)
        model = YakopcicModel()
        assert model.current(0.1, 0.5, params) == pytest.approx(2 * 0.5 * math.sinh(0.1))
        assert model.current(-0.1, 0.5, params) == pytest.approx(99 * 0.5 * math.sinh(-0.1))

    def test_vectorised_current_matches_scalar(self, yakopcic_model, yakopcic_params):
        v = np.array([-0.3, -0.1, 0.0, 0.1, 0.3])
        x = np.array([0.2, 0.4, 0.5, 0.6, 0.8])
        expected = [yakopcic_model.current(float(vi), float(xi), yakopcic_params) for vi, xi in zip(v, x)]
        np.testing.assert_allclose(yakopcic_model.current(v, x, yakopcic_params), expected)

    def test_scalar_current_is_float(self, yakopcic_model, yakopcic_params):
        assert isinstance(yakopcic_model.current(0.2, 0.5, yakopcic_params), float)


class TestYakopcicDynamics:

    def test_threshold_is_zero_between_thresholds(self):
        for v in (-0.15, -0.05, 0.0, 0.1, 0.16):
            assert threshold(v, Ap=4000, An=4000, Vp=0.16, Vn=0.15) == 0.0

    def test_threshold_is_continuous_at_edges(self):
        assert threshold(0.16 + 1e-12, 4000, 4000, 0.16, 0.15) == pytest.approx(0.0, abs=1e-6)
        assert threshold(-0.15 - 1e-12, 4000, 4000, 0.16, 0.15) == pytest.approx(0.0, abs=1e-6)

    def test_threshold_sign_follows_voltage(self):
        assert threshold(0.5, 1, 1, 0.16, 0.15) > 0
        assert threshold(-0.5, 1, 1, 0.16, 0.15) < 0

    def test_threshold_overflows_to_infinity(self):
        assert threshold(1000.0, 4000, 4000, 0.16, 0.15) == math.inf
        assert threshold(-1000.0, 4000, 4000, 0.16, 0.15) == -math.inf

    def test_closed_window_stops_overflowed_drive(self, yakopcic_model, yakopcic_params):
        assert yakopcic_model.state_derivative(0.0, 1.0, _constant(1000.0), yakopcic_params) == 0.0
        assert yakopcic_model.state_derivative(0.0, 0.5, _constant(1000.0), yakopcic_params) == math.inf

    def test_state_window_free_motion_and_boundaries(self):
        # Increasing motion: free below xp, zero at x = 1.
        assert state_window(0.5, 0.1, 1, 5, 0.3, 0.5, 1) == 1.0
        assert state_window(0.5, 1.0, 1, 5, 0.3, 0.5, 1) == pytest.approx(0.0)
        # Decreasing motion: free above 1 - xn, zero at x = 0.
        assert state_window(-0.5, 0.9, 1, 5, 0.3, 0.5, 1) == 1.0
        assert state_window(-0.5, 0.0, 1, 5, 0.3, 0.5, 1) == pytest.approx(0.0)

    def test_no_motion_below_threshold(self, yakopcic_model, yakopcic_params):
        assert yakopcic_model.state_derivative(0.0, 0.4, _constant(0.1), yakopcic_params) == 0.0

    def test_window_argument_is_ignored(self, yakopcic_model, yakopcic_params):
        window = create_window_function("joglekar", p=1)
        signal = _constant(0.4)
        assert yakopcic_model.state_derivative(0.0, 0.4, signal, yakopcic_params, window) == \
            yakopcic_model.state_derivative(0.0, 0.4, signal, yakopcic_params)


class TestHPLabs:

    def test_current_follows_ohms_law(self, hp_model, hp_params):
        assert hp_model.current(1.0, 1.0, hp_params) == pytest.approx(1.0 / 10e3)
        assert hp_model.current(1.0, 0.0, hp_params) == pytest.approx(1.0 / 100e3)
        assert hp_model.current(0.5, 0.5, hp_params) == pytest.approx(0.5 / 55e3)

    def test_state_derivative_without_window(self, hp_model, hp_params):
        k = hp_params["muD"] * hp_params["RON"] / hp_params["D"] ** 2
        i = 1.0 / HPLabsModel.resistance(0.5, hp_params)
        assert hp_model.state_derivative(0.0, 0.5, _constant(1.0), hp_params) == pytest.approx(k * i)

    def test_joglekar_window_stops_drift_at_edges(self, hp_model, hp_params):
        window = create_window_function("joglekar", p=2)
        assert hp_model.state_derivative(0.0, 1.0, _constant(1.0), hp_params, window) == pytest.approx(0.0)
        assert hp_model.state_derivative(0.0, 0.0, _constant(-1.0), hp_params, window) == pytest.approx(0.0)

    def test_zero_resistance_or_thickness_does_not_raise(self, hp_model, hp_params):
        shorted = dict(hp_params, ROFF=0.0)
        assert hp_model.current(1.0, 0.0, shorted) == math.inf
        flat = dict(hp_params, D=0.0)
        assert hp_model.state_derivative(0.0, 0.5, _constant(1.0), flat) == math.inf
        assert math.isnan(hp_model.state_derivative(0.0, 0.5, _constant(0.0), flat))

    def test_parameter_units_convert(self, hp_model):
        infos = {info.name: info for info in hp_model.parameter_info}
        assert infos["D"].to_magnitude("27 nm") == pytest.approx(27e-9)
        assert infos["RON"].to_magnitude("10 kohm") == pytest.approx(10e3)
        assert infos["muD"].to_magnitude("1e-10 cm**2 / (V * s)") == pytest.approx(1e-14)


class TestModelMetadata:

    def test_default_params_cover_declared_names(self, registry):
        for model in registry:
            params = model.default_params()
            assert list(params) == model.parameter_names
            assert model.missing_parameters(params) == []

    def test_missing_parameters_in_declaration_order(self, hp_model):
        assert hp_model.missing_parameters({"RON": 1.0, "D": 1.0}) == ["ROFF", "muD"]

    def test_yakopcic_declares_twelve_parameters(self, yakopcic_model):
        assert yakopcic_model.parameter_names == [
            "a1", "a2", "b", "Vp", "Vn", "Ap", "An", "xp", "xn", "alphap", "alphan", "eta",
        ]


class _OutOfRangeModel(MemristorModel):
    model_id = "broken"
    name = "Broken"

    @classmethod
    def declare_parameters(cls):
        return (ParameterInfo("k", "k", default=5.0, min=0.0, max=1.0, step=0.1,
                              unit="", description="", group="device"),)

    def current(self, v, x, params):
        return v

    def state_derivative(self, t, x, signal, params, window=None):
        return 0.0


class TestModelRegistry:

    def test_default_registry_contents(self):
        registry = create_default_registry()
        assert registry.model_ids == ["hp_labs", "yakopcic"]
        assert "hp_labs" in registry
        assert len(registry) == 2
        assert isinstance(registry.get("yakopcic"), YakopcicModel)

    def test_registries_are_independent(self):
        first, second = create_default_registry(), ModelRegistry()
        assert len(second) == 0
        assert "hp_labs" in first

    def test_unknown_model_lists_available_ids(self, registry):
        with pytest.raises(UnknownModelError) as excinfo:
            registry.get("nonexistent")
        assert excinfo.value.available_models == ["hp_labs", "yakopcic"]
        assert "nonexistent" in excinfo.value.get_diagnostic_report()

    def test_register_rejects_non_models(self):
        with pytest.raises(TypeError):
            ModelRegistry().register(object())

    def test_register_rejects_default_outside_range(self):
        with pytest.raises(TypeError, match="outside"):
            ModelRegistry().register(_OutOfRangeModel())

    def test_overwrite_logs_warning(self, caplog):
        registry = create_default_registry()
        with caplog.at_level(logging.WARNING):
            registry.register(HPLabsModel())
        assert "overwritten" in caplog.text
        assert len(registry) == 2
