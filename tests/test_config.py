"""Tests for RecognizerConfig."""

import pytest

from stroke_engine.config import RecognizerConfig
from stroke_engine.errors import ConfigError


class TestDefaults:
    def test_values(self):
        config = RecognizerConfig()
        assert config.num_points == 64
        assert config.square_size == 250.0
        assert config.origin == (0.0, 0.0)
        assert config.degenerate_policy == "reject"
        assert config.pass_threshold == 0.2
        assert config.confident_threshold == 0.65

    def test_frozen(self):
        config = RecognizerConfig()
        with pytest.raises(AttributeError):
            config.num_points = 32

    def test_types_normalized(self):
        config = RecognizerConfig(num_points=32.0, square_size=100, origin=[1, 2])
        assert isinstance(config.num_points, int)
        assert isinstance(config.square_size, float)
        assert config.origin == (1.0, 2.0)


class TestValidation:
    @pytest.mark.parametrize("kwargs", [
        {"num_points": 1},
        {"num_points": 10.5},
        {"square_size": 0},
        {"square_size": -5.0},
        {"origin": (1.0,)},
        {"degenerate_policy": "ignore"},
        {"degenerate_epsilon": 0.0},
        {"pass_threshold": 0.9, "confident_threshold": 0.5},
    ])
    def test_rejects(self, kwargs):
        with pytest.raises(ConfigError):
            RecognizerConfig(**kwargs)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            RecognizerConfig(num_points=0)


class TestDictAndYaml:
    def test_dict_round_trip(self):
        config = RecognizerConfig(num_points=32, degenerate_policy="epsilon")
        assert RecognizerConfig.from_dict(config.to_dict()) == config

    def test_from_dict_none(self):
        assert RecognizerConfig.from_dict(None) == RecognizerConfig()

    def test_unknown_keys(self):
        with pytest.raises(ConfigError, match="bogus"):
            RecognizerConfig.from_dict({"bogus": 1})

    def test_bad_value_type(self):
        with pytest.raises(ConfigError):
            RecognizerConfig.from_dict({"num_points": "many"})

    def test_yaml_round_trip(self, tmp_path):
        path = tmp_path / "recognizer.yaml"
        config = RecognizerConfig(num_points=48, square_size=100.0, origin=(5.0, 5.0))
        config.to_yaml(path)
        assert RecognizerConfig.from_yaml(path) == config

    def test_partial_yaml(self, tmp_path):
        path = tmp_path / "recognizer.yaml"
        path.write_text("degenerate_policy: epsilon\n")
        config = RecognizerConfig.from_yaml(path)
        assert config.degenerate_policy == "epsilon"
        assert config.num_points == 64

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert RecognizerConfig.from_yaml(path) == RecognizerConfig()

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            RecognizerConfig.from_yaml(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("num_points: [64\n")
        with pytest.raises(ConfigError):
            RecognizerConfig.from_yaml(path)
