# tests/test_presets.py
import numpy as np
import pytest

from memsim_core import ConfigParsingError, get_preset, load_presets, simulate
from memsim_core.signals import SignalType
from memsim_core.windows import WindowType

EXPECTED_IDS = ["hp_sine", "hp_pulsed", "oblea_sine", "oblea_pulsed", "miao", "jo"]


class TestBundledCatalog:

    def test_catalog_order_and_ids(self):
        assert [p.id for p in load_presets()] == EXPECTED_IDS

    def test_every_preset_has_name_and_description(self):
        for preset in load_presets():
            assert preset.name
            assert preset.description

    def test_hp_sine_values(self):
        config = get_preset("hp_sine").config
        assert config.model_id == "hp_labs"
        assert config.model_params["D"] == pytest.approx(27e-9)
        assert config.model_params["RON"] == pytest.approx(10e3)
        assert config.model_params["ROFF"] == pytest.approx(100e3)
        assert config.model_params["muD"] == pytest.approx(1e-14)
        assert config.signal_type is SignalType.SINE
        assert config.signal_params.vp == pytest.approx(1.0)
        assert config.signal_params.effective_frequency == pytest.approx(1.0)
        assert config.x0 == pytest.approx(0.1)
        assert config.t_max == pytest.approx(2.0)
        assert config.window_type is WindowType.JOGLEKAR
        assert config.window_p == 7

    def test_oblea_sine_duration_in_seconds(self):
        config = get_preset("oblea_sine").config
        assert config.t_max == pytest.approx(40e-3)
        assert config.signal_params.effective_frequency == pytest.approx(100.0)
        assert config.window_type is None

    def test_jo_asymmetric_drive(self):
        preset = get_preset("jo")
        assert preset.model_id == "yakopcic"
        params = preset.config.signal_params
        assert params.vp == pytest.approx(4.0)
        assert params.negative_peak == pytest.approx(2.0)
        assert params.effective_frequency == pytest.approx(0.2)
        assert preset.config.model_params["a1"] == pytest.approx(3.7e-7)

    def test_triangle_presets_flip_at_a_zero_crossing(self):
        for preset in load_presets():
            config = preset.config
            if config.signal_type is SignalType.TRIANGLE:
                cycles = config.signal_params.effective_frequency * config.t_max
                assert cycles == pytest.approx(round(cycles)), preset.id

    def test_to_config_sets_output_points(self):
        preset = get_preset("miao")
        assert preset.to_config().num_points == 10000
        assert preset.to_config(num_points=500).num_points == 500
        assert preset.to_config(num_points=500).model_params == preset.config.model_params

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="nope"):
            get_preset("nope")


class TestPresetRuns:

    @pytest.mark.parametrize("preset_id", EXPECTED_IDS)
    def test_preset_runs_to_completion(self, preset_id):
        result = simulate(get_preset(preset_id).to_config(num_points=2000))
        for trace in (result.time, result.voltage, result.current, result.state_variable):
            assert len(trace) == 2000
            assert np.all(np.isfinite(trace))
        assert np.all(result.state_variable >= 0.0)
        assert np.all(result.state_variable <= 1.0)
        assert not result.solver_stats.max_steps_exceeded


CATALOG_ENTRY = """
  - id: {id}
    name: Test
    config:
      model_id: hp_labs
      signal: {{type: sine, vp: 1 V}}
      x0: 0.5
      t_max: 1 s
"""


class TestCustomCatalog:

    def test_loads_from_path(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("presets:" + CATALOG_ENTRY.format(id="custom"), encoding="utf-8")
        (preset,) = load_presets(path)
        assert preset.id == "custom"
        assert preset.description == ""
        assert preset.config.model_params["RON"] == pytest.approx(10e3)

    def test_duplicate_ids_rejected(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("presets:" + CATALOG_ENTRY.format(id="a") + CATALOG_ENTRY.format(id="a"), encoding="utf-8")
        with pytest.raises(ConfigParsingError, match="Duplicate"):
            load_presets(path)

    def test_invalid_entry_names_the_preset(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "presets:" + CATALOG_ENTRY.format(id="bad").replace("hp_labs", "nonexistent"),
            encoding="utf-8",
        )
        with pytest.raises(ConfigParsingError, match="bad"):
            load_presets(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("presets: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigParsingError, match="YAML"):
            load_presets(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigParsingError, match="Cannot read"):
            load_presets(tmp_path / "absent.yaml")

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigParsingError, match="root"):
            load_presets(path)
