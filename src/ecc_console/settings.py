"""Application settings management using Pydantic."""

import os
import re
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .models.schemas import LogLevel


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        populate_by_name=True,
    )

    # SDK identification
    partner_key: Optional[str] = Field(
        default=None,
        alias="ECC_PARTNER_KEY",
        description="Partner key issued by the headset vendor"
    )

    app_id: str = Field(
        default="EasyCallControlSample",
        alias="ECC_APP_ID",
        description="Application identifier reported to the SDK"
    )

    app_name: str = Field(
        default="EasyCallControl Console",
        alias="ECC_APP_NAME",
        description="Human-readable application name reported to the SDK"
    )

    # Console behaviour
    keymap_path: Optional[str] = Field(
        default="config/keymap.yaml",
        alias="KEYMAP_PATH",
        validate_default=True,
        description="Path to key binding YAML file"
    )

    sdk_log_level: LogLevel = Field(
        default=LogLevel.ERROR,
        alias="SDK_LOG_LEVEL",
        description="Minimum SDK log level echoed to the console"
    )

    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Application log level"
    )

    simulated_devices: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["Headset"],
        alias="SIMULATED_DEVICES",
        description="Simulated headsets attached at startup (comma-separated in env)"
    )

    @field_validator("app_id")
    @classmethod
    def validate_app_id(cls, v: str) -> str:
        """Validate application identifier characters."""
        if not re.fullmatch(r"[A-Za-z0-9_-]+", v):
            raise ValueError("ECC_APP_ID may only contain letters, digits, '-' and '_'")
        return v

    @field_validator("partner_key", mode="before")
    @classmethod
    def validate_partner_key(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank partner key as unset."""
        if v and v.strip():
            return v.strip()
        return None

    @field_validator("keymap_path", mode="before")
    @classmethod
    def validate_keymap_path(cls, v: Optional[str]) -> Optional[str]:
        """Validate keymap path exists if provided."""
        if v and v.strip():
            path = v.strip()
            if not os.path.isfile(path):
                print(f"Warning: KEYMAP_PATH '{path}' does not exist - using default key bindings")
                return None
            return path
        return None

    @field_validator("sdk_log_level", mode="before")
    @classmethod
    def validate_sdk_log_level(cls, v):
        """Accept SDK log levels in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate application log level name."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    @field_validator("simulated_devices", mode="before")
    @classmethod
    def validate_simulated_devices(cls, v) -> List[str]:
        """Parse comma-separated device names."""
        if isinstance(v, str):
            return parse_comma_separated_list(v)
        elif isinstance(v, list):
            return v
        return []


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


def parse_comma_separated_list(value: str) -> List[str]:
    """Parse comma-separated string into list of strings."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
