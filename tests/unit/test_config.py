"""Tests for SimulationConfig validation and loading."""

import json

import pytest

from prioritysim.config import DeviceConfig, SimulationConfig, SourceConfig


class TestDefaultConfig:
    def test_reference_topology(self):
        config = SimulationConfig.default()
        assert config.num_sources == 3
        assert config.num_devices == 2
        assert config.sources[2] == SourceConfig(2.5, 3.5)
        assert config.devices[1] == DeviceConfig(3.0)
        assert config.buffer_capacity == 3
        assert config.max_time == 1000.0
        assert config.max_served == 1000
        assert config.seed is None

    def test_with_overrides(self):
        config = SimulationConfig.default().with_overrides(seed=5, buffer_capacity=4)
        assert config.seed == 5
        assert config.max_time == 1000.0
        assert config.buffer_capacity == 4

    def test_with_overrides_can_clear_seed(self):
        seeded = SimulationConfig.default().with_overrides(seed=11)
        cleared = seeded.with_overrides(seed=None)
        assert seeded.seed == 11
        assert cleared.seed is None

    def test_with_overrides_still_validates(self):
        with pytest.raises(ValueError):
            SimulationConfig.default().with_overrides(buffer_capacity=0)

    def test_lists_are_stored_as_tuples(self):
        config = SimulationConfig(sources=[SourceConfig(1, 2)], devices=[DeviceConfig(1)], buffer_capacity=1)
        assert isinstance(config.sources, tuple)
        assert hash(config) == hash(config)


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"sources": []},
            {"devices": []},
            {"buffer_capacity": 0},
            {"max_time": -1.0},
            {"max_served": -1},
        ],
    )
    def test_invalid_values(self, kwargs):
        base = {"sources": [SourceConfig(1, 2)], "devices": [DeviceConfig(1)], "buffer_capacity": 1}
        base.update(kwargs)
        with pytest.raises(ValueError):
            SimulationConfig(**base)

    def test_invalid_source(self):
        with pytest.raises(ValueError):
            SourceConfig(3.0, 2.0)
        with pytest.raises(ValueError):
            SourceConfig(0.0, 0.0)

    def test_invalid_device(self):
        with pytest.raises(ValueError):
            DeviceConfig(0.0)


class TestSerialization:
    def test_dict_round_trip(self):
        config = SimulationConfig.default().with_overrides(seed=9)
        assert SimulationConfig.from_dict(config.to_dict()) == config

    def test_missing_key(self):
        with pytest.raises(ValueError, match="buffer_capacity"):
            SimulationConfig.from_dict({"sources": [], "devices": []})

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "topology.json"
        path.write_text(json.dumps({
            "sources": [{"min_interval": 1.0, "max_interval": 2.0}],
            "devices": [{"mean_service_time": 0.5}, {"mean_service_time": 0.75}],
            "buffer_capacity": 2,
            "max_served": 50,
        }))

        config = SimulationConfig.from_json_file(path)

        assert config.num_devices == 2
        assert config.max_served == 50
        assert config.max_time == 1000.0
