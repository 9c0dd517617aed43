from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from core.exceptions import ConfigurationError
from core.units import Unit

# Load .env file from project root
_project_root = Path(__file__).resolve().parent.parent
_env_path = _project_root / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

DEFAULT_CONFIG_PATH = _project_root / "config" / "default.yaml"


class CalculationSettings(BaseModel):
    default_unit: Unit = Unit.FEET
    # Decimals kept when boundary triangles are turned into SSS side strings
    side_decimals: int = Field(2, ge=0, le=10)


class ApiSettings(BaseModel):
    title: str = "Plot Area API"
    ui_origin: str = "http://localhost:3000"
    rate_limit_enabled: bool = True
    requests_per_minute: int = Field(60, ge=1)
    requests_per_hour: int = Field(1000, ge=1)

    @field_validator("ui_origin")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = str(value).upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


class Settings(BaseModel):
    calculation: CalculationSettings = Field(default_factory=CalculationSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                PLOTAREA_CONFIG environment variable or defaults to config/default.yaml.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigurationError: If the file is missing or the configuration is invalid.
        """
        env_path = os.getenv("PLOTAREA_CONFIG")
        config_path = path or (Path(env_path) if env_path else DEFAULT_CONFIG_PATH)
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)},
            )
        with config_path.open("r", encoding="utf-8") as fp:
            try:
                payload = yaml.safe_load(fp) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
        try:
            return cls(**payload)
        except Exception as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}", {"path": str(config_path)}) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "CalculationSettings",
    "ApiSettings",
    "LoggingSettings",
    "DEFAULT_CONFIG_PATH",
    "get_settings",
]
