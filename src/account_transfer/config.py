"""
Account Transfer Configuration
==============================

This module handles configuration loading for the account transfer core.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    ACCOUNT_TRANSFER_SUPPORTED_VERSIONS -> transfer.supported_versions
    ACCOUNT_TRANSFER_REQUIRE_HTTPS      -> transfer.require_https_domain
    ACCOUNT_TRANSFER_CHUNK_SIZE         -> export.chunk_size
    ACCOUNT_TRANSFER_EXPORT_VERSION     -> export.version
    ACCOUNT_TRANSFER_LOG_LEVEL          -> logging.level
    ACCOUNT_TRANSFER_LOG_FORMAT         -> logging.format

Example:
    from account_transfer.config import settings

    print(settings.transfer.supported_versions)
    print(settings.export.chunk_size)
"""

import os
import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class TransferConfig(BaseModel):
    """Importing side: frame decoding and configuration validation."""

    supported_versions: List[str] = Field(
        default_factory=lambda: ["1", "2"],
        min_length=1,
        description="Allow-list of one-character frame version tags",
    )
    require_https_domain: bool = Field(
        default=True,
        description="Reject transfer configurations whose domain is not https",
    )

    @field_validator("supported_versions")
    @classmethod
    def _single_character_tags(cls, value: List[str]) -> List[str]:
        for tag in value:
            if len(tag) != 1:
                raise ValueError(f"Version tag must be one character, got {tag!r}")
        return value


class ExportConfig(BaseModel):
    """Exporting side: chunking of the account payload into frames."""

    version: str = Field(
        default="1",
        min_length=1,
        max_length=1,
        description="Version tag written in front of every exported frame",
    )
    chunk_size: int = Field(
        default=1462,
        ge=16,
        le=4096,
        description="Payload bytes per frame, without the 3 character header",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for the account transfer core.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    transfer: TransferConfig = Field(default_factory=TransferConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to config.yaml. If None, searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")

    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Transfer settings
    if env_versions := os.environ.get("ACCOUNT_TRANSFER_SUPPORTED_VERSIONS"):
        config_data.setdefault("transfer", {})["supported_versions"] = [
            tag.strip() for tag in env_versions.split(",") if tag.strip()
        ]
    if env_https := os.environ.get("ACCOUNT_TRANSFER_REQUIRE_HTTPS"):
        config_data.setdefault("transfer", {})["require_https_domain"] = _parse_bool(env_https)

    # Export settings
    if env_chunk := os.environ.get("ACCOUNT_TRANSFER_CHUNK_SIZE"):
        config_data.setdefault("export", {})["chunk_size"] = int(env_chunk)
    if env_version := os.environ.get("ACCOUNT_TRANSFER_EXPORT_VERSION"):
        config_data.setdefault("export", {})["version"] = env_version

    # Logging settings
    if env_log := os.environ.get("ACCOUNT_TRANSFER_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log
    if env_format := os.environ.get("ACCOUNT_TRANSFER_LOG_FORMAT"):
        config_data.setdefault("logging", {})["format"] = env_format


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


# =============================================================================
# Global Settings Instance
# =============================================================================

# Global settings instance - loaded on import
settings = load_config()
