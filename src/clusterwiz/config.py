from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from clusterwiz.exceptions import ConfigError
from clusterwiz.logging import get_logger

__all__ = [
    "ClusterWizConfig",
    "GoogleProviderConfig",
    "load_config",
    "get_user_config_path",
    "PROJECT_CONFIG_NAME",
]

logger = get_logger(__name__)

PROJECT_CONFIG_NAME = "clusterwiz.yaml"

# Overrides ./clusterwiz.yaml while load_config() builds the settings
_project_config_path: ContextVar[Path | None] = ContextVar(
    "clusterwiz_project_config_path", default=None
)


class GoogleProviderConfig(BaseModel):
    """Settings for the Google cluster adapter.

    Attributes:
        gcloud_path: Executable used for container-cluster commands.
        az_path: Executable used for region and VM size lookups.
        credential_attempts: Attempts made by ``get-credentials`` before giving up.
        credential_retry_interval: Seconds to sleep between credential attempts.
        cluster_wait_seconds: Fixed pause used by ``wait_for_cluster``.
        command_timeout: Timeout for a single CLI invocation, in seconds.
        command_retries: Extra attempts for a CLI invocation that fails
            transiently (timeout, connection reset, rate limit).
    """

    gcloud_path: str = "gcloud"
    az_path: str = "az"
    credential_attempts: int = Field(default=5, ge=1, le=20)
    credential_retry_interval: float = Field(default=15.0, ge=0.0)
    cluster_wait_seconds: float = Field(default=300.0, ge=0.0)
    command_timeout: float = Field(default=120.0, gt=0.0)
    command_retries: int = Field(default=2, ge=0, le=10)


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that loads values from a YAML file."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Expected a mapping at the top of {yaml_file}",
                    value=loaded,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class ClusterWizConfig(BaseSettings):
    """Root configuration object."""

    model_config = SettingsConfigDict(
        env_prefix="CLUSTERWIZ_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    google: GoogleProviderConfig = Field(default_factory=GoogleProviderConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order settings sources, highest priority first.

        1. Explicit init arguments
        2. Environment variables (CLUSTERWIZ_*)
        3. Project YAML config (./clusterwiz.yaml or the path given to load_config)
        4. User YAML config (~/.config/clusterwiz/config.yaml)
        """
        project_config_path = (
            _project_config_path.get() or Path.cwd() / PROJECT_CONFIG_NAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/clusterwiz/config.yaml
    """
    return Path.home() / ".config" / "clusterwiz" / "config.yaml"


def load_config(config_path: Path | None = None) -> ClusterWizConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional project config file. Defaults to ./clusterwiz.yaml.

    Returns:
        ClusterWizConfig with merged configuration.

    Raises:
        ConfigError: If a config file is malformed or a value is invalid.
    """
    effective_path = config_path or Path.cwd() / PROJECT_CONFIG_NAME
    if not effective_path.exists():
        logger.info("project_config_missing", path=str(effective_path))

    token = _project_config_path.set(effective_path)
    try:
        return ClusterWizConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_path.reset(token)
