"""Configuration management for pgdiff."""

import codecs
import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pgdiff.exceptions import ConfigError

CONFIG_FILE_NAME = ".pgdiffcfg"
CONFIG_KEYS = ("encoding", "skip_errors", "log_level")

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def load_pgdiffcfg(profile: str = "DEFAULT") -> dict[str, str]:
    """Load settings from ~/.pgdiffcfg.

    Args:
        profile: Profile name to load (default: "DEFAULT")

    Returns:
        Dict with whichever of encoding, skip_errors and log_level are set

    Raises:
        ConfigError: If the profile doesn't exist
    """
    cfg_path = Path.home() / CONFIG_FILE_NAME
    if not cfg_path.exists():
        return {}

    config = configparser.ConfigParser()
    config.read(cfg_path)

    if profile not in config:
        available = [s for s in config.sections() if s != "DEFAULT"] or ["DEFAULT"]
        raise ConfigError(
            f"Profile '{profile}' not found in ~/{CONFIG_FILE_NAME}. "
            f"Available profiles: {', '.join(available)}"
        )

    section = config[profile]
    return {key: section[key].strip() for key in CONFIG_KEYS if key in section}


def parse_bool(value: str, name: str) -> bool:
    """Parse a boolean setting such as "true", "0" or "off".

    Raises:
        ConfigError: If value is not a recognized boolean
    """
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: '{value}'")


@dataclass
class Config:
    """Configuration for pgdiff."""

    encoding: str = "utf-8"
    skip_errors: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        *,
        encoding: Optional[str] = None,
        skip_errors: Optional[bool] = None,
        log_level: Optional[str] = None,
        profile: Optional[str] = None,
    ) -> "Config":
        """Load configuration from ~/.pgdiffcfg, env vars, with CLI overrides.

        Priority (highest to lowest):
        1. Explicit parameters (CLI args)
        2. Environment variables
        3. ~/.pgdiffcfg profile

        Raises:
            ConfigError: If a boolean setting cannot be parsed
        """
        pgdiff_cfg = {}
        profile_name = profile or os.environ.get("PGDIFF_CONFIG_PROFILE", "DEFAULT")
        try:
            pgdiff_cfg = load_pgdiffcfg(profile_name)
        except ConfigError:
            pass

        def resolve(explicit, env_key, cfg_key):
            if explicit is not None:
                return explicit
            env_val = os.environ.get(env_key)
            if env_val is not None:
                return env_val
            return pgdiff_cfg.get(cfg_key)

        resolved_skip = resolve(skip_errors, "PGDIFF_SKIP_ERRORS", "skip_errors")
        if isinstance(resolved_skip, str):
            resolved_skip = parse_bool(resolved_skip, "skip_errors")

        return cls(
            encoding=resolve(encoding, "PGDIFF_ENCODING", "encoding") or "utf-8",
            skip_errors=bool(resolved_skip),
            log_level=(
                resolve(log_level, "PGDIFF_LOG_LEVEL", "log_level") or "INFO"
            ).upper(),
        )

    def validate(self) -> None:
        """Validate encoding and log level.

        Raises:
            ConfigError: If the encoding is unknown or the log level invalid.
        """
        problems = []
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            problems.append(f"unknown encoding '{self.encoding}' (PGDIFF_ENCODING)")

        if not isinstance(logging.getLevelName(self.log_level), int):
            problems.append(f"invalid log level '{self.log_level}' (PGDIFF_LOG_LEVEL)")

        if problems:
            raise ConfigError(
                "Invalid configuration:\n  - " + "\n  - ".join(problems)
            )

    @property
    def logging_level(self) -> int:
        """Numeric logging level for logging.basicConfig."""
        return logging.getLevelName(self.log_level)
