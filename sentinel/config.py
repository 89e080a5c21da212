"""Sentinel configuration management using pydantic-settings."""

from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Pick up SENTINEL_* overrides from a .env in the working directory
load_dotenv(find_dotenv(usecwd=True))

DEFAULT_CONFIG_PATH = Path.home() / ".config/sentinel/config.toml"


class GeneralSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SENTINEL_")
    data_path: Path = Field(default=Path.home() / ".sentinel")
    log_level: str = "INFO"


class HookSettings(BaseSettings):
    """Settings for project on-start hooks."""

    model_config = SettingsConfigDict(env_prefix="SENTINEL_HOOKS_")
    enabled: bool = True


class DisplaySettings(BaseSettings):
    show_dates: bool = True


class Settings(BaseSettings):
    """Top-level settings assembled from subsections."""

    general: GeneralSettings = Field(default_factory=GeneralSettings)
    hooks: HookSettings = Field(default_factory=HookSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from TOML config file, falling back to defaults."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        if config_path.exists():
            import toml

            data = toml.load(config_path)
            return cls(
                general=GeneralSettings(**data.get("general", {})),
                hooks=HookSettings(**data.get("hooks", {})),
                display=DisplaySettings(**data.get("display", {})),
            )

        return cls()


# Module-level singleton
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings(settings: Optional[Settings] = None) -> None:
    """Replace the global settings instance (None forces a reload on next access)."""
    global _settings
    _settings = settings
