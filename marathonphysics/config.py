"""Default paths and constants for the physics converter."""
from pathlib import Path

import click

APP_NAME = "mphys"
CONFIG_FILENAME = "config.toml"

# JSON indentation when neither --indent nor the config file sets one
DEFAULT_INDENT = 2


def get_config_path() -> Path:
    """Return the TOML config file path via click.get_app_dir."""
    return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILENAME
