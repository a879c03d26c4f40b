"""Configuration settings for rgsearch.

Sources, later wins:
- defaults
- YAML file (explicit path, or $RGSEARCH_CONFIG)
- environment (RGSEARCH_RG_PATH, RGSEARCH_TIMEOUT, RGSEARCH_DEBUG,
  RGSEARCH_LOG_DIR, RGSEARCH_LOG_LEVEL)
- explicit overrides (CLI flags)

A YAML file may hold the keys at top level or under an `rgsearch:` key:

    rgsearch:
      rg_path: /usr/local/bin/rg
      timeout: 30
      log_dir: ~/.rgsearch/logs
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from rgkit.primitives.errors import ConfigurationError
from rgsearch.constants import DEFAULT_PROGRAM

logger = logging.getLogger(__name__)

ENV_PREFIX = "RGSEARCH_"
CONFIG_ENV = "RGSEARCH_CONFIG"

# Init keyword naming the YAML file; not a setting itself
CONFIG_FILE_KEY = "config_file"


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    section = data.get("rgsearch", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'rgsearch' section in {path} must be a mapping")
    return section


class YamlFileSource(PydanticBaseSettingsSource):
    """Settings read from a YAML file; lowest priority after defaults."""

    def __init__(self, settings_cls: Type[BaseSettings], path: Optional[str]):
        super().__init__(settings_cls)
        self.path = Path(path).expanduser() if path else None
        self.data = _load_yaml(self.path) if self.path else {}

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> Tuple[Any, str, bool]:
        return self.data.get(field_name), field_name, False

    def __call__(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for key, value in self.data.items():
            if key not in self.settings_cls.model_fields:
                logger.warning(f"Ignoring unknown setting in {self.path}: {key}")
                continue
            values[key] = value
        return values


class Settings(BaseSettings):
    """Runtime settings.

    Attributes:
        rg_path: ripgrep executable, resolved on PATH when not absolute.
        timeout: Seconds to wait for one ripgrep run; None waits forever.
        debug: Verbose logging.
        log_dir: Directory for rotating log files; None logs to stderr only.
        log_level: Level name for the rgsearch loggers.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    rg_path: str = Field(default=DEFAULT_PROGRAM, min_length=1)
    timeout: Optional[float] = Field(default=None, ge=0)
    debug: bool = False
    log_dir: Optional[Path] = None
    log_level: str = "INFO"

    @field_validator("timeout")
    @classmethod
    def zero_timeout_is_unbounded(cls, value: Optional[float]) -> Optional[float]:
        return value or None

    @field_validator("log_dir")
    @classmethod
    def expand_log_dir(cls, value: Optional[Path]) -> Optional[Path]:
        return value.expanduser() if value is not None else None

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        init_kwargs = getattr(init_settings, "init_kwargs", {})
        path = init_kwargs.get(CONFIG_FILE_KEY) or os.environ.get(CONFIG_ENV)
        return (init_settings, env_settings, YamlFileSource(settings_cls, path))

    @property
    def effective_log_level(self) -> int:
        if self.debug:
            return logging.DEBUG
        return logging.getLevelName(self.log_level)


def load_settings(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Resolve Settings from file, environment, and overrides.

    Raises:
        ConfigurationError: A value is invalid or the file is unreadable.
    """
    explicit = {k: v for k, v in (overrides or {}).items() if v is not None}
    if config_path:
        explicit[CONFIG_FILE_KEY] = config_path

    try:
        return Settings(**explicit)
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first.get("loc") else None
        raise ConfigurationError(
            f"Invalid setting {field}: {first['msg']}", field=field
        ) from e
