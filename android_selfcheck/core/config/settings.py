"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from android_selfcheck.core.config.loader import ConfigLoader
from android_selfcheck.core.exceptions.errors import ConfigurationError


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="ANDROID_SELFCHECK_LOGGING_",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v)


class CheckSettings(BaseSettings):
    """Self-check behaviour settings."""

    model_config = SettingsConfigDict(
        env_prefix="ANDROID_SELFCHECK_",
        extra="ignore",
    )

    cargo_config: Path = Field(
        default=Path(".cargo") / "config.toml",
        description="Cargo configuration file, relative to the project root",
    )
    check_target_dir: Path = Field(
        default=Path("/tmp/android-selfcheck-target"),
        description="CARGO_TARGET_DIR used by the check command when unset",
    )
    ndk_host_tag: str = Field(
        default="linux-x86_64",
        description="Prebuilt host directory inside the NDK llvm toolchain",
    )
    extra_check_args: list[str] = Field(
        default_factory=list,
        description="Additional arguments appended to the check command",
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ANDROID_SELFCHECK_",
        extra="ignore",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    check: CheckSettings = Field(default_factory=CheckSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.

        Raises:
            ConfigurationError: If the file cannot be loaded or holds invalid values.
        """
        loader = ConfigLoader(path)
        loader.load()

        try:
            return cls(
                logging=LoggingSettings(**loader.get_section("logging")),
                check=CheckSettings(**loader.get_section("check")),
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings in {path}",
                config_key=str(path),
                details={"errors": e.error_count()},
            ) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings()
