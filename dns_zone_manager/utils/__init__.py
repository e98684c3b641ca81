"""
Utility functions and helpers.

This package contains name validation, configuration loading,
and the retry/backoff executor used for every remote call.
"""

from .config import config_logger, get_default_config, load_config
from .retry import RetryExecutor, RetryPolicy
from .validators import qualify_name, validate_fqdn, validate_ttl

__all__ = [
    "config_logger",
    "get_default_config",
    "load_config",
    "RetryExecutor",
    "RetryPolicy",
    "qualify_name",
    "validate_fqdn",
    "validate_ttl",
]
