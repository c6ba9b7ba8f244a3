"""
Configuration management for AdTags – GPT placeholder and footer tags.

Supports loading from environment variables and YAML files.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------------------------------------------------------------------------
# Infrastructure
# ---------------------------------------------------------------------------

class ServerSettings(BaseSettings):
    """Uvicorn / HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1
    reload: bool = False


# ---------------------------------------------------------------------------
# Ad Tags
# ---------------------------------------------------------------------------

class TagSettings(BaseSettings):
    """Placeholder and footer tag generation."""

    # Container ids are "{prefix}{counter}"
    container_id_prefix: str = "div-gpt-ad-"

    # "process": one counter shared by every request of the process.
    # "request": the counter restarts at 0 for each request context.
    container_id_scope: Literal["process", "request"] = "process"

    # Size mapping "m1" is declared in script as "m1GoogleAdMapping"
    mapping_suffix: str = "GoogleAdMapping"

    # GPT library, protocol-relative
    library_url: str = "//www.googletagservices.com/tag/js/gpt.js"

    # "page": pick http/https in the browser from document.location.protocol.
    # "request": pick it server-side from the scheme of the current request.
    protocol_detection: Literal["page", "request"] = "page"

    # Escape values inserted into HTML attributes and JS string literals.
    # Sizes and size-mapping variations are JS literals and never escaped.
    escape_values: bool = True

    # Used by the web layer when a request does not name a network
    default_network_code: str = ""

    @field_validator("container_id_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("container_id_prefix must not be blank")
        return v


# ---------------------------------------------------------------------------
# Observability
# ---------------------------------------------------------------------------

class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["json", "console"] = "json"


class MonitoringSettings(BaseSettings):
    """Prometheus / monitoring configuration."""

    enabled: bool = True


# ---------------------------------------------------------------------------
# Root Settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ADTAGS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Application
    app_name: str = "AdTags"
    app_version: str = "0.1.0"
    debug: bool = False
    env: Literal["dev", "prod", "test"] = "dev"

    # Nested settings
    server: ServerSettings = Field(default_factory=ServerSettings)
    tags: TagSettings = Field(default_factory=TagSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        if v not in ("dev", "prod", "test"):
            raise ValueError(f"Invalid environment: {v}")
        return v


# ---------------------------------------------------------------------------
# YAML Loader
# ---------------------------------------------------------------------------

def load_yaml_config(config_path: Path) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}
    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def merge_configs(base: dict, override: dict) -> dict:
    """Deep-merge two configuration dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


_SECTION_CLASSES: dict[str, type[BaseSettings]] = {
    "server": ServerSettings,
    "tags": TagSettings,
    "logging": LoggingSettings,
    "monitoring": MonitoringSettings,
}


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings.

    Loads from:
    1. configs/base.yaml (base configuration)
    2. configs/{env}.yaml (environment-specific overrides)
    3. Environment variables (highest priority)
    """
    import os

    env = os.getenv("ADTAGS_ENV", "dev")

    config_dir = Path(__file__).parent.parent.parent / "configs"

    base_config = load_yaml_config(config_dir / "base.yaml")
    env_config = load_yaml_config(config_dir / f"{env}.yaml")
    merged = merge_configs(base_config, env_config)

    flat_config: dict = {}
    if "app" in merged:
        flat_config["app_name"] = merged["app"].get("name", "AdTags")
        flat_config["app_version"] = merged["app"].get("version", "0.1.0")
        flat_config["debug"] = merged["app"].get("debug", False)

    flat_config["env"] = env

    # pydantic-settings gives init kwargs higher priority than env vars,
    # so env-var overrides are merged into the YAML dict first.
    for section_key, settings_cls in _SECTION_CLASSES.items():
        section_data = dict(merged.get(section_key, {}))

        # ADTAGS_SECTION__FIELD → field
        prefix = f"ADTAGS_{section_key.upper()}__"
        for env_key, env_value in os.environ.items():
            if env_key.startswith(prefix):
                field_name = env_key[len(prefix):].lower()
                section_data[field_name] = env_value

        flat_config[section_key] = settings_cls(**section_data)

    return Settings(**flat_config)


# Convenience alias
settings = get_settings()
