"""Tests for configuration loading and validation."""

import os
from pathlib import Path

import pytest

from wallrotate.config import Config, RotationConfig, WallpaperConfig, parse_patterns
from wallrotate.config.validation import rotation_overrides_from_env
from wallrotate.exceptions import ConfigError, ConfigValidationError


class TestRotationConfig:

    def test_defaults(self):
        config = RotationConfig.from_dict({"paths": ["/images"]})

        assert config.interval == 1800
        assert config.recursive is False
        assert config.patterns == ("*",)
        assert config.shuffle is False
        assert config.selection == "head"

    def test_legacy_key_names_are_case_insensitive(self):
        config = RotationConfig.from_dict({
            "Interval": 1,
            "Paths": ["/images"],
            "Recursive": False,
            "Pattern": "*.jpg",
            "Shuffle": False,
        })

        assert config.interval == 1
        assert config.paths == ("/images",)
        assert config.patterns == ("*.jpg",)

    def test_missing_paths_is_fatal(self):
        with pytest.raises(ConfigError):
            RotationConfig.from_dict({"interval": 10})

    def test_empty_paths_is_fatal(self):
        with pytest.raises(ConfigError):
            RotationConfig(paths=())

    @pytest.mark.parametrize("interval", [0, -5])
    def test_non_positive_interval_rejected(self, interval):
        with pytest.raises(ConfigValidationError):
            RotationConfig(paths=("/images",), interval=interval)

    def test_unknown_selection_rejected(self):
        with pytest.raises(ConfigValidationError):
            RotationConfig(paths=("/images",), selection="newest")

    def test_is_immutable(self):
        config = RotationConfig(paths=("/images",))

        with pytest.raises(Exception):
            config.interval = 5

    def test_single_path_string_accepted(self):
        config = RotationConfig.from_dict({"paths": "/images"})

        assert config.paths == ("/images",)

    def test_get_paths_expands_user(self):
        config = RotationConfig(paths=("~/wallpapers",))

        assert config.get_paths() == [Path.home() / "wallpapers"]


class TestParsePatterns:

    def test_semicolon_delimited(self):
        assert parse_patterns("*.jpg;*.png") == ("*.jpg", "*.png")

    def test_list(self):
        assert parse_patterns(["*.jpg", "*.png"]) == ("*.jpg", "*.png")

    def test_blank_fragments_dropped(self):
        assert parse_patterns("*.jpg;; ;*.png;") == ("*.jpg", "*.png")

    def test_empty_falls_back_to_star(self):
        assert parse_patterns("") == ("*",)
        assert parse_patterns(None) == ("*",)

    def test_pattern_property_rejoins(self):
        config = RotationConfig(paths=("/i",), patterns=("*.jpg", "*.png"))

        assert config.pattern == "*.jpg;*.png"


class TestConfigLoad:

    def test_load_from_file(self, test_config, image_tree):
        assert test_config.rotation.interval == 60
        assert test_config.rotation.paths == (image_tree.as_posix(),)
        assert test_config.rotation.patterns == ("*.jpg", "*.png")
        assert test_config.wallpaper.command == "swww"
        assert test_config.wallpaper.monitors == ["DP-1", "HDMI-A-1"]
        assert test_config.logging.level == "INFO"

    def test_missing_file_without_env_paths_is_fatal(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            Config.load(config_file=tmp_path / "nope.toml", environ={})

        assert "paths" in str(exc_info.value)

    def test_missing_file_with_env_paths(self, tmp_path):
        config = Config.load(
            config_file=tmp_path / "nope.toml",
            environ={"WALLROTATE_PATHS": f"/a{os.pathsep}/b"},
        )

        assert config.rotation.paths == ("/a", "/b")
        assert config.source is None

    def test_file_without_rotation_paths_is_fatal(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[rotation]\ninterval = 10\n")

        with pytest.raises(ConfigError):
            Config.load(config_file=path, environ={})

    def test_legacy_capitalised_keys_in_file(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[rotation]\nInterval = 1\nPaths = ["/images"]\nPattern = "*.jpg"\n')

        config = Config.load(config_file=path, environ={})

        assert config.rotation.interval == 1
        assert config.rotation.patterns == ("*.jpg",)

    def test_env_overrides_file(self, config_file):
        config = Config.load(config_file=config_file, environ={
            "WALLROTATE_INTERVAL": "5",
            "WALLROTATE_SHUFFLE": "yes",
            "WALLROTATE_RECURSIVE": "on",
            "WALLROTATE_PATTERN": "*.webp",
        })

        assert config.rotation.interval == 5
        assert config.rotation.shuffle is True
        assert config.rotation.recursive is True
        assert config.rotation.patterns == ("*.webp",)

    def test_unknown_section_rejected(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[rotation]\npaths = ["/i"]\n\n[comfyui]\nbase_url = "x"\n')

        with pytest.raises(ConfigError) as exc_info:
            Config.load(config_file=path, environ={})

        assert "Unknown config section 'comfyui'" in str(exc_info.value)

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[rotation]\npaths = ["/i"]\nfrequency = 3\n')

        with pytest.raises(ConfigError) as exc_info:
            Config.load(config_file=path, environ={})

        assert "Unknown key 'frequency'" in str(exc_info.value)

    def test_wrong_type_rejected(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[rotation]\npaths = ["/i"]\ninterval = "soon"\n')

        with pytest.raises(ConfigError) as exc_info:
            Config.load(config_file=path, environ={})

        assert "must be of type int" in str(exc_info.value)

    def test_boolean_interval_rejected(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[rotation]\npaths = ["/i"]\ninterval = true\n')

        with pytest.raises(ConfigError):
            Config.load(config_file=path, environ={})

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[rotation\npaths = ")

        with pytest.raises(ConfigError) as exc_info:
            Config.load(config_file=path, environ={})

        assert "Invalid TOML" in str(exc_info.value)

    def test_invalid_log_level(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[rotation]\npaths = ["/i"]\n\n[logging]\nlevel = "LOUD"\n')

        with pytest.raises(ConfigValidationError):
            Config.load(config_file=path, environ={})

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigValidationError):
            WallpaperConfig(timeout=0)


class TestEnvironmentOverrides:

    def test_empty_environment(self):
        assert rotation_overrides_from_env({}) == {}

    def test_bad_interval(self):
        with pytest.raises(ConfigValidationError):
            rotation_overrides_from_env({"WALLROTATE_INTERVAL": "often"})

    def test_bad_boolean(self):
        with pytest.raises(ConfigValidationError):
            rotation_overrides_from_env({"WALLROTATE_SHUFFLE": "maybe"})


class TestConfigDir:

    def test_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert Config.get_config_file() == tmp_path / "wallrotate" / "config.toml"

    def test_initialize_writes_loadable_default(self, tmp_path):
        target = tmp_path / "cfg" / "config.toml"

        assert Config.initialize_config(target) is True
        assert Config.initialize_config(target) is False

        config = Config.load(config_file=target, environ={})
        assert config.rotation.paths == ("~/Pictures/wallpapers",)
        assert config.rotation.shuffle is True
