"""YAML configuration with defaults."""

import copy
import logging
from pathlib import Path

import yaml

from .auth import DEFAULT_PASSPHRASE

logger = logging.getLogger(__name__)

DEFAULTS = {
    "storage": {
        "snapshot_path": "quiz_data.json",
    },
    "auth": {
        "passphrase": DEFAULT_PASSPHRASE,
    },
    "audio": {
        "backend": "tone",  # tone | voice | none
        "muted": False,
        "volume": 0.4,
    },
    "quiz": {
        "seed": None,
    },
}


def load_config(path: str = "config.yaml") -> dict:
    """Read ``path`` and merge its sections over ``DEFAULTS``."""
    config = copy.deepcopy(DEFAULTS)
    config_path = Path(path)
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}, using defaults")
        return config
    with open(config_path, encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        logger.warning(f"Config file {config_path} is not a mapping, using defaults")
        return config
    for section, values in loaded.items():
        if isinstance(config.get(section), dict):
            if isinstance(values, dict):
                config[section].update(values)
            elif values is not None:
                logger.warning(f"Config section '{section}' is not a mapping, using defaults")
        else:
            config[section] = values
    return config
