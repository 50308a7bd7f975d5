"""Configuration management for the TIC Summit client."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import toml

ALLOWED_THEMES = ["TIC Dark", "TIC Light"]
ALLOWED_LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
CONFIG_FILE_PATH = Path.home() / ".ticsummit.config"
DEFAULT_LOG_FILE = str(Path.home() / ".ticsummit.log")


@dataclass
class TicConfig:
    """Client configuration settings."""

    base_url: str = "http://localhost:3000"
    api_token: Optional[str] = None
    timeout: float = 10.0
    theme: str = "TIC Dark"
    log_file: str = DEFAULT_LOG_FILE
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """Validate configuration settings."""
        parsed = urlparse(self.base_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid base_url '{self.base_url}'. Expected an http(s) URL such as https://ticsummit.org")

        try:
            self.timeout = float(self.timeout)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid timeout '{self.timeout}'. Expected a number of seconds")
        if self.timeout <= 0:
            raise ValueError("timeout must be greater than zero")

        if self.theme not in ALLOWED_THEMES:
            raise ValueError(f"Invalid theme '{self.theme}'. Allowed themes: {', '.join(ALLOWED_THEMES)}")

        self.log_level = str(self.log_level).upper()
        if self.log_level not in ALLOWED_LOG_LEVELS:
            raise ValueError(f"Invalid log_level '{self.log_level}'. Allowed levels: {', '.join(ALLOWED_LOG_LEVELS)}")


def load_config(config_file_path: Optional[str] = None) -> TicConfig:
    """Load configuration from file."""
    if config_file_path:
        config_path = Path(config_file_path)
    else:
        config_path = CONFIG_FILE_PATH

    if not config_path.exists():
        return TicConfig()

    try:
        with open(config_path, "r") as f:
            config_data = toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")

    # Keys that are not TicConfig fields are ignored
    valid_fields = set(TicConfig.__dataclass_fields__)
    filtered_config = {key: value for key, value in config_data.items() if key in valid_fields}

    return TicConfig(**filtered_config)


def merge_config_with_cli_args(config: TicConfig, **cli_args) -> TicConfig:
    """Merge configuration with CLI arguments, giving priority to CLI args."""
    merged_config = {}

    for field_name in TicConfig.__dataclass_fields__:
        merged_config[field_name] = getattr(config, field_name)

    # Override with CLI args where provided (not None)
    for key, value in cli_args.items():
        if value is not None:
            merged_config[key] = value

    return TicConfig(**merged_config)


def save_config(config: dict, config_path: Path = CONFIG_FILE_PATH) -> None:
    with open(config_path, "w") as f:
        toml.dump(config, f)
