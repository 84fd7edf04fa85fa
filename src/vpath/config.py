"""
Configuration for vpath.

Controls how drive roots are enumerated on multi-root platforms and how
wide directory fan-out may go. Values can be given directly or read from
VPATH_* environment variables.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_DRIVE_LIST_COMMAND = "wmic logicaldisk get caption"

ENV_PREFIX = "VPATH_"


class VpathConfig(BaseModel):
    """
    Pydantic schema for vpath settings.

    Example:
        >>> config = VpathConfig(drive_source="psutil", max_concurrency=32)
        >>> set_config(config)
    """

    model_config = {"frozen": True}

    drive_list_command: str = Field(
        DEFAULT_DRIVE_LIST_COMMAND,
        description="Shell command whose stdout lists drive captions, one per line",
    )
    drive_source: Literal["command", "psutil"] = Field(
        "command",
        description="Where drive letters come from: the shell command or psutil.disk_partitions",
    )
    command_timeout: float = Field(
        30.0, description="Timeout in seconds for the drive enumeration command"
    )
    command_encoding: str = Field(
        "utf-8", description="Encoding used to decode the command output"
    )
    max_concurrency: Optional[int] = Field(
        None,
        description="Upper bound on concurrent lookups in get_children (None = unbounded)",
    )
    platform: Optional[str] = Field(
        None,
        description="Platform identifier overriding sys.platform for root strategy selection",
    )

    @field_validator("drive_list_command")
    @classmethod
    def _check_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("drive_list_command must not be empty")
        return v

    @field_validator("command_timeout")
    @classmethod
    def _check_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("command_timeout must be positive")
        return v

    @field_validator("max_concurrency")
    @classmethod
    def _check_concurrency(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("max_concurrency must be at least 1")
        return v

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "VpathConfig":
        """
        Build a config from VPATH_* environment variables.

        Unset variables keep their defaults. Empty VPATH_MAX_CONCURRENCY
        means unbounded.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            A validated VpathConfig
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        for field_name in cls.model_fields:
            raw = env.get(f"{ENV_PREFIX}{field_name.upper()}")
            if raw is None:
                continue
            if field_name == "max_concurrency" and raw.strip() == "":
                values[field_name] = None
                continue
            values[field_name] = raw

        if values:
            logger.debug(f"Read vpath settings from environment: {sorted(values)}")
        return cls(**values)


_config: Optional[VpathConfig] = None


def get_config() -> VpathConfig:
    """Return the process-wide config, loading it from the environment on first use."""
    global _config
    if _config is None:
        _config = VpathConfig.from_env()
    return _config


def set_config(config: Optional[VpathConfig]) -> None:
    """
    Replace the process-wide config.

    Passing None drops the current config so the next get_config() reloads
    it from the environment. The cached root strategy is reset either way.
    """
    global _config
    _config = config

    from .roots import reset_root_strategy

    reset_root_strategy()
