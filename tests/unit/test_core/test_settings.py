"""Tests for settings and the YAML configuration loader."""

from pathlib import Path

import pytest

from android_selfcheck.core.config import get_target_linker, load_cargo_config
from android_selfcheck.core.config.loader import ConfigLoader
from android_selfcheck.core.config.settings import CheckSettings, LoggingSettings, Settings
from android_selfcheck.core.exceptions.errors import ConfigurationError
from android_selfcheck.models.target import TargetTriple


class TestLoggingSettings:
    """Test LoggingSettings."""

    def test_level_is_normalized(self) -> None:
        """Test lowercase level names are accepted."""
        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_invalid_level(self) -> None:
        """Test unknown level names are rejected."""
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingSettings(level="chatty")

    def test_empty_file_means_none(self) -> None:
        """Test empty log file path."""
        assert LoggingSettings(file="").file is None


class TestCheckSettings:
    """Test CheckSettings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default values."""
        for var in ("CARGO_CONFIG", "CHECK_TARGET_DIR", "NDK_HOST_TAG", "EXTRA_CHECK_ARGS"):
            monkeypatch.delenv(f"ANDROID_SELFCHECK_{var}", raising=False)

        settings = CheckSettings()

        assert settings.cargo_config == Path(".cargo") / "config.toml"
        assert settings.check_target_dir == Path("/tmp/android-selfcheck-target")
        assert settings.ndk_host_tag == "linux-x86_64"
        assert settings.extra_check_args == []

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test values from ANDROID_SELFCHECK_* variables."""
        monkeypatch.setenv("ANDROID_SELFCHECK_NDK_HOST_TAG", "darwin-x86_64")
        assert CheckSettings().ndk_host_tag == "darwin-x86_64"


class TestSettingsFromYaml:
    """Test Settings.from_yaml."""

    def test_sections(self, temp_dir: Path) -> None:
        """Test both sections are applied."""
        path = temp_dir / "settings.yaml"
        path.write_text(
            "logging:\n"
            "  level: warning\n"
            "check:\n"
            "  ndk_host_tag: darwin-x86_64\n"
            "  extra_check_args: [--offline]\n",
            encoding="utf-8",
        )

        settings = Settings.from_yaml(path)

        assert settings.logging.level == "WARNING"
        assert settings.check.ndk_host_tag == "darwin-x86_64"
        assert settings.check.extra_check_args == ["--offline"]

    def test_missing_file(self, temp_dir: Path) -> None:
        """Test missing settings file."""
        with pytest.raises(ConfigurationError, match="not found"):
            Settings.from_yaml(temp_dir / "missing.yaml")

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """Test malformed YAML."""
        path = temp_dir / "settings.yaml"
        path.write_text("check: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            Settings.from_yaml(path)

    def test_not_a_mapping(self, temp_dir: Path) -> None:
        """Test YAML that is not a mapping."""
        path = temp_dir / "settings.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="mapping"):
            Settings.from_yaml(path)

    def test_invalid_value(self, temp_dir: Path) -> None:
        """Test values rejected by validation."""
        path = temp_dir / "settings.yaml"
        path.write_text("logging:\n  level: chatty\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid settings"):
            Settings.from_yaml(path)


class TestConfigLoader:
    """Test ConfigLoader."""

    def test_sections(self, temp_dir: Path) -> None:
        """Test section lookup."""
        path = temp_dir / "settings.yaml"
        path.write_text("check:\n  ndk_host_tag: linux-aarch64\nlogging: verbose\n", encoding="utf-8")

        loader = ConfigLoader(path)
        loader.load()

        assert loader.get_section("check") == {"ndk_host_tag": "linux-aarch64"}
        assert loader.get_section("logging") == {}
        assert loader.get_section("missing") == {}

    def test_empty_file(self, temp_dir: Path) -> None:
        """Test empty YAML file."""
        path = temp_dir / "settings.yaml"
        path.write_text("", encoding="utf-8")

        assert ConfigLoader(path).load() == {}


class TestCargoConfig:
    """Test cargo configuration reading."""

    def test_missing_file(self, temp_dir: Path) -> None:
        """Test missing cargo config."""
        assert load_cargo_config(temp_dir / "config.toml") == {}

    def test_malformed_file(self, temp_dir: Path) -> None:
        """Test unparsable cargo config."""
        path = temp_dir / "config.toml"
        path.write_text("[target.aarch64-linux-android\n", encoding="utf-8")

        assert load_cargo_config(path) == {}

    def test_target_linker(self, temp_dir: Path) -> None:
        """Test linker lookup by triple."""
        path = temp_dir / "config.toml"
        path.write_text(
            '[target.aarch64-linux-android]\nlinker = "clang"\n'
            "[target.armv7-linux-androideabi]\nrunner = \"adb\"\n",
            encoding="utf-8",
        )
        config = load_cargo_config(path)

        assert get_target_linker(config, TargetTriple.AARCH64.value) == "clang"
        assert get_target_linker(config, TargetTriple.ARMV7.value) is None

    def test_non_string_linker(self) -> None:
        """Test linker values that are not strings."""
        config = {"target": {"aarch64-linux-android": {"linker": 42}}}
        assert get_target_linker(config, TargetTriple.AARCH64.value) is None
