"""
Configuration schema for building capture file lists.

Values come from a YAML file (optional) and may be overridden from the
environment, so the same file can be shared between sensors.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

# Environment overrides: variable name -> config field
ENV_OVERRIDES: Dict[str, str] = {
    "PCAP_FILELIST_DIR": "pcap_directory",
    "PCAP_FILELIST_TEMPLATE": "filename_template",
    "PCAP_FILELIST_LOG_LEVEL": "log_level",
}


class FileListConfig(BaseModel):
    """
    Centralized, validated configuration for one file-list build.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # === Discovery ===
    pcap_directory: str = Field(
        default=".",
        description="Directory holding the rotated capture files.",
    )
    filename_template: str = Field(
        default="log.%n.%t.pcap",
        min_length=1,
        description="Capture file naming template; %n/%i thread, %t epoch seconds.",
    )
    sort_by_timestamp: bool = Field(
        default=False,
        description="Order discovered files by their timestamp instead of directory order.",
    )

    # === Logging ===
    log_level: str = Field(
        default="INFO",
        description="Name of a standard logging level.",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional rotating log file in addition to the console.",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level


def config_from_mapping(data: Mapping[str, Any], env: Optional[Mapping[str, str]] = None) -> FileListConfig:
    """Validate `data`, letting environment variables win."""
    merged = dict(data)
    env = os.environ if env is None else env
    for var, field_name in ENV_OVERRIDES.items():
        if env.get(var):
            merged[field_name] = env[var]
    try:
        return FileListConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: Union[str, Path, None] = None, env: Optional[Mapping[str, str]] = None) -> FileListConfig:
    """
    Load configuration from a YAML mapping.

    With no path, only defaults and environment overrides apply.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        p = Path(path)
        try:
            with p.open("r", encoding="utf-8") as handle:
                loaded = yaml.safe_load(handle)
        except OSError as e:
            raise ConfigError(f"Can't read config file {p}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file {p} is not valid YAML: {e}") from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file {p} must hold a mapping")
        data = loaded
    return config_from_mapping(data, env=env)
