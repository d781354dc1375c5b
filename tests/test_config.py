"""Tests for the YAML configuration."""

import pytest

from streamhist.config import ConfigError, HistConfig, load_config


class TestHistConfig:
    """Defaults, loading and validation."""

    def test_defaults(self):
        config = HistConfig()
        assert (config.bins, config.width, config.field) == (10, 10, 1)
        assert config.validate() == []

    def test_load(self, tmp_path):
        path = tmp_path / "streamhist.yml"
        path.write_text("bins: 20\nwidth: 40\n")
        config = HistConfig.load(path)
        assert (config.bins, config.width, config.field) == (20, 40, 1)

    def test_env_var_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STREAMHIST_TEST_FIELD", "3")
        path = tmp_path / "streamhist.yml"
        path.write_text("field: ${STREAMHIST_TEST_FIELD}\n")
        assert HistConfig.load(path).field == 3

    def test_empty_file(self, tmp_path):
        path = tmp_path / "streamhist.yml"
        path.write_text("")
        assert HistConfig.load(path) == HistConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            HistConfig.load(tmp_path / "nope.yml")

    @pytest.mark.parametrize("text", ["colour: red\n", "bins: many\n", "- 1\n- 2\n", "bins: [\n"])
    def test_invalid(self, tmp_path, text):
        path = tmp_path / "streamhist.yml"
        path.write_text(text)
        with pytest.raises(ConfigError):
            HistConfig.load(path)

    def test_validate(self):
        errors = HistConfig(bins=-1, width=-2, field=0).validate()
        assert len(errors) == 3

    def test_yaml_round_trip(self):
        config = HistConfig(bins=3, width=7, field=2)
        assert HistConfig.from_dict(config.to_dict()) == config
        assert "bins: 3" in config.to_yaml()


class TestLoadConfig:
    """Explicit path, else defaults."""

    def test_defaults(self):
        assert load_config() == HistConfig()

    def test_working_directory_ignored(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "streamhist.yml").write_text("bins: 4\n")
        assert load_config() == HistConfig()

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yml"
        path.write_text("width: 30\n")
        assert load_config(path).width == 30

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "custom.yml"
        path.write_text("field: 0\n")
        with pytest.raises(ConfigError):
            load_config(path)
