"""Application configuration using pydantic-settings."""

import functools
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


def _find_project_root() -> Path:
    """Find project root by locating pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return Path(__file__).resolve().parent.parent.parent


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from config/settings.yaml."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        """Not used - we implement __call__ instead."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load settings from YAML file."""
        yaml_path = _find_project_root() / "config" / "settings.yaml"
        if not yaml_path.exists():
            return {}

        with open(yaml_path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        return flatten_yaml_settings(data)


def flatten_yaml_settings(data: dict) -> dict[str, Any]:
    """Flatten the nested YAML layout onto Settings field names."""
    flattened = {}
    if 'server' in data:
        flattened['host'] = data['server'].get('host')
        flattened['port'] = data['server'].get('port')
        flattened['allowed_origins'] = data['server'].get('allowed_origins')
    if 'openai' in data:
        flattened['completion_model'] = data['openai'].get('model')
        flattened['completion_temperature'] = data['openai'].get('temperature')
    if 'sprint' in data:
        flattened['spin_delay_seconds'] = data['sprint'].get('spin_delay_seconds')
        flattened['rival_name'] = data['sprint'].get('rival_name')
        flattened['session_ttl_seconds'] = data['sprint'].get('session_ttl_seconds')

    # Remove None values
    return {k: v for k, v in flattened.items() if v is not None}


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str = Field(description="OpenAI API key")
    completion_model: str = Field(default="gpt-4o-mini")
    completion_temperature: float = Field(default=0.4)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:8000", "http://127.0.0.1:8000"]
    )

    # Sprint
    spin_delay_seconds: float = Field(default=3.0, ge=0.0)
    rival_name: str = Field(default="Alex_Bot_92")
    session_ttl_seconds: float = Field(default=3600.0, gt=0.0)

    # Paths
    project_root: Path = Field(default_factory=_find_project_root)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include YAML file.

        Priority order (highest to lowest):
        1. init_settings (arguments passed to Settings())
        2. env_settings (environment variables)
        3. dotenv_settings (.env file)
        4. YamlSettingsSource (settings.yaml)
        5. file_secret_settings
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )


@functools.lru_cache
def get_settings() -> Settings:
    """Get application settings singleton."""
    return Settings()
