"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (applied by the CLI on top of the loaded config)
2. Environment variables (FFDIAG_*)
3. Config file (~/.ffdiag/config.toml)
4. Default values

Environment variables:
- FFDIAG_CONFIG_PATH: Path to config file (overrides default location)
- FFDIAG_FFMPEG_PATH: Path to ffmpeg executable
- FFDIAG_FFPROBE_PATH: Path to ffprobe executable
- FFDIAG_HISTORY_LINES: Stderr lines kept for error reporting
- FFDIAG_LOG_LEVEL: Log level (debug, info, warning, error)
- FFDIAG_LOG_FORMAT: Log format (text, json)
- FFDIAG_LOG_FILE: Log file path
- FFDIAG_LOG_STDERR: Also log to stderr when a log file is set (true/false)
"""

from __future__ import annotations

import logging
import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from ffdiag.config.env import EnvReader
from ffdiag.config.models import (
    FfdiagConfig,
    LoggingConfig,
    ParserConfig,
    ToolPathsConfig,
)
from ffdiag.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".ffdiag"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

_config_cache: FfdiagConfig | None = None
_config_cache_lock = threading.Lock()


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by FFDIAG_CONFIG_PATH environment variable.
    """
    env_path = os.environ.get("FFDIAG_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(config_path: Path | None = None) -> dict[str, Any]:
    """Load the raw contents of a config file.

    Args:
        config_path: Path to the TOML file. None uses the default path.

    Returns:
        Parsed TOML data, or an empty dict if the file does not exist.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    path = config_path or get_default_config_path()
    if not path.exists():
        logger.debug("Config file does not exist: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _optional_path(value: Any) -> Path | None:
    if value is None or value == "":
        return None
    return Path(str(value)).expanduser()


def build_config(
    file_data: dict[str, Any],
    env: EnvReader | None = None,
) -> FfdiagConfig:
    """Build the configuration from file data and environment variables.

    Args:
        file_data: Parsed config file contents.
        env: Environment reader. None reads os.environ.

    Returns:
        The merged configuration.

    Raises:
        ConfigError: If a value is invalid.
    """
    env = env or EnvReader()

    tools_data = file_data.get("tools", {})
    tools = ToolPathsConfig(
        ffmpeg=env.get_path(
            "FFDIAG_FFMPEG_PATH",
            must_exist=False,
            default=_optional_path(tools_data.get("ffmpeg")),
        ),
        ffprobe=env.get_path(
            "FFDIAG_FFPROBE_PATH",
            must_exist=False,
            default=_optional_path(tools_data.get("ffprobe")),
        ),
    )

    parser_data = file_data.get("parser", {})
    history_lines = env.get_int(
        "FFDIAG_HISTORY_LINES",
        parser_data.get("history_lines", ParserConfig.history_lines),
    )
    parser = ParserConfig(history_lines=history_lines)

    logging_data = file_data.get("logging", {})
    defaults = LoggingConfig()
    try:
        logging_config = LoggingConfig(
            level=env.get_str(
                "FFDIAG_LOG_LEVEL", logging_data.get("level", defaults.level)
            ),
            file=env.get_path(
                "FFDIAG_LOG_FILE",
                must_exist=False,
                default=_optional_path(logging_data.get("file")),
            ),
            format=env.get_str(
                "FFDIAG_LOG_FORMAT", logging_data.get("format", defaults.format)
            ),
            include_stderr=env.get_bool(
                "FFDIAG_LOG_STDERR",
                logging_data.get("include_stderr", defaults.include_stderr),
            ),
            max_bytes=logging_data.get("max_bytes", defaults.max_bytes),
            backup_count=logging_data.get("backup_count", defaults.backup_count),
        )
    except ValueError as e:
        raise ConfigError(f"Invalid logging configuration: {e}") from e

    return FfdiagConfig(tools=tools, parser=parser, logging=logging_config)


def get_config(config_path: Path | None = None, reload: bool = False) -> FfdiagConfig:
    """Get the effective configuration.

    The default configuration is cached after the first load; passing an
    explicit ``config_path`` always loads that file.

    Args:
        config_path: Explicit config file path.
        reload: Ignore the cached configuration.

    Returns:
        The effective configuration.

    Raises:
        ConfigError: If the config file or a value is invalid.
    """
    global _config_cache

    if config_path is not None:
        return build_config(load_config_file(config_path))

    with _config_cache_lock:
        if _config_cache is None or reload:
            _config_cache = build_config(load_config_file())
        return _config_cache


def clear_config_cache() -> None:
    """Clear the cached configuration (for test isolation)."""
    global _config_cache
    with _config_cache_lock:
        _config_cache = None
