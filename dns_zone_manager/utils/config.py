"""
Configuration loading and logging setup.
"""

import copy
import logging
import sys
from typing import Dict, Optional

import yaml

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/config.yaml"


def load_config(config_path: str) -> Dict:
    """Load configuration from YAML file."""
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
        return config
    except FileNotFoundError:
        logger.warning(f"Config file {config_path} not found, using defaults")
        return get_default_config()
    except yaml.YAMLError as e:
        logger.error(f"Error parsing config file: {e}")
        raise ConfigurationError(f"Error parsing config file {config_path}: {e}")


def get_default_config() -> Dict:
    """Return default configuration."""
    return copy.deepcopy(
        {
            "dns_providers": {"mock": {}},
            "default_provider": "mock",
            "retry": {
                "max_retries": 3,
                "base_delay": 1.0,
                "multiplier": 2.0,
                "max_delay": 32.0,
                "jitter": True,
            },
            "logging": {"level": "INFO"},
        }
    )


def config_logger(config: Dict, verbose: Optional[bool] = False):
    """Configure logging."""
    logging_config = config.get("logging", None) or {}
    log_level = "DEBUG" if verbose else logging_config.get("level", "INFO")
    handlers = [logging.StreamHandler(sys.stdout)]

    log_file = logging_config.get("file")
    if log_file:
        handlers.insert(0, logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
