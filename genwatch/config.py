"""
Runtime settings for the watcher, read from the environment.

Values can also be supplied through a .env file, which is loaded without
overriding variables already set in the environment.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

ENV_PREFIX = "GENWATCH_"
DEFAULT_POLL_INTERVAL_SEC = 5.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Paths and timings every component receives at startup."""

    input_dir: Path
    output_dir: Path
    reference_data_file: Path
    poll_interval_sec: float = DEFAULT_POLL_INTERVAL_SEC
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env_file: Optional[Path | str] = None) -> Settings:
        """
        Resolve settings from environment variables (GENWATCH_*).

        Args:
            env_file: Optional .env file; when omitted python-dotenv searches
                for one starting from the working directory.

        Raises:
            ConfigError: If a required setting is missing or invalid
        """
        if env_file is not None and not Path(env_file).is_file():
            raise ConfigError(f"Env file not found: {env_file}")
        load_dotenv(env_file)

        input_dir = Path(_required("INPUT_DIR"))
        if not input_dir.is_dir():
            raise ConfigError(f"Input folder does not exist: {input_dir}")

        interval_str = os.getenv(f"{ENV_PREFIX}POLL_INTERVAL_SEC")
        poll_interval_sec = DEFAULT_POLL_INTERVAL_SEC
        if interval_str:
            try:
                poll_interval_sec = float(interval_str)
            except ValueError as e:
                raise ConfigError(f"Invalid {ENV_PREFIX}POLL_INTERVAL_SEC '{interval_str}'") from e
            if not poll_interval_sec > 0:
                raise ConfigError(f"{ENV_PREFIX}POLL_INTERVAL_SEC must be positive, got {interval_str}")

        log_level = (os.getenv(f"{ENV_PREFIX}LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"Unknown {ENV_PREFIX}LOG_LEVEL '{log_level}'")

        output_dir = Path(_required("OUTPUT_DIR"))
        if output_dir.resolve() == input_dir.resolve():
            raise ConfigError(f"Output folder must differ from the input folder: {output_dir}")

        return cls(
            input_dir=input_dir,
            output_dir=output_dir,
            reference_data_file=Path(_required("REFERENCE_DATA_FILE")),
            poll_interval_sec=poll_interval_sec,
            log_level=log_level,
        )


def _required(name: str) -> str:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    if not value:
        raise ConfigError(f"Missing required setting {ENV_PREFIX}{name}")
    return value
