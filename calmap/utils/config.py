"""
Configuration management for calmap.

Handles loading the defaults used by the command-line tool from a YAML
file and environment variables. The core algorithms never read
configuration; callers pass explicit parameters.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .constants import DEFAULT_SIGMA, DEFAULT_WINDOW_SIZE

# Load environment variables
load_dotenv()

DEFAULT_CONFIG_PATH = "config/calmap.yaml"

_TRUE_VALUES = ("true", "1", "yes")


@dataclass
class LoggingConfig:
    """Logging configuration settings."""

    level: str = "INFO"
    file: Optional[str] = None
    format: str = "text"


@dataclass
class AppConfig:
    """Main application configuration."""

    # Coloring
    color_scheme: str = "THERMAL"

    # Smoothing
    window_size: int = DEFAULT_WINDOW_SIZE
    sigma: float = DEFAULT_SIGMA

    # Headings: None, "row", "column" or "both"
    with_headings: Optional[str] = None
    skip_headings: bool = False

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "AppConfig":
        """Create configuration from dictionary."""
        logging_config = LoggingConfig(**config_dict.get("logging", {}))

        return cls(
            color_scheme=str(config_dict.get("color_scheme", cls.color_scheme)).upper(),
            window_size=int(config_dict.get("window_size", cls.window_size)),
            sigma=float(config_dict.get("sigma", cls.sigma)),
            with_headings=config_dict.get("with_headings", cls.with_headings),
            skip_headings=bool(config_dict.get("skip_headings", cls.skip_headings)),
            logging=logging_config,
        )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load application configuration from YAML file and environment variables.

    Args:
        config_path: Optional path to configuration file.
                    Defaults to config/calmap.yaml

    Returns:
        AppConfig instance with loaded configuration
    """
    config_dict: Dict[str, Any] = {}

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f) or {}

    # Override with environment variables
    env_mappings = {
        "CALMAP_COLOR_SCHEME": "color_scheme",
        "CALMAP_WINDOW_SIZE": "window_size",
        "CALMAP_SIGMA": "sigma",
        "CALMAP_WITH_HEADINGS": "with_headings",
        "CALMAP_SKIP_HEADINGS": "skip_headings",
    }

    for env_var, config_key in env_mappings.items():
        if env_var in os.environ:
            value = os.environ[env_var]
            if config_key == "skip_headings":
                config_dict[config_key] = value.lower() in _TRUE_VALUES
            elif config_key == "window_size":
                config_dict[config_key] = int(value)
            elif config_key == "sigma":
                config_dict[config_key] = float(value)
            elif config_key == "with_headings":
                config_dict[config_key] = value.lower() or None
            else:
                config_dict[config_key] = value

    logging_config = config_dict.get("logging", {})
    logging_env_mappings = {
        "LOG_LEVEL": "level",
        "LOG_FILE": "file",
        "LOG_FORMAT": "format",
    }

    for env_var, config_key in logging_env_mappings.items():
        if env_var in os.environ:
            logging_config[config_key] = os.environ[env_var]

    config_dict["logging"] = logging_config

    return AppConfig.from_dict(config_dict)
