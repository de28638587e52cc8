"""Configuration management for ffdiag.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (FFDIAG_*)
3. Config file (~/.ffdiag/config.toml)
4. Default values (lowest priority)
"""

from ffdiag.config.env import EnvReader
from ffdiag.config.loader import (
    build_config,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from ffdiag.config.models import (
    FfdiagConfig,
    LoggingConfig,
    ParserConfig,
    ToolPathsConfig,
)

__all__ = [
    # Models
    "FfdiagConfig",
    "LoggingConfig",
    "ParserConfig",
    "ToolPathsConfig",
    # Loader
    "EnvReader",
    "build_config",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
]
