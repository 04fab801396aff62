"""Validator for ad exit configs."""

from adexit.config.errors import ConfigError
from adexit.config.schema import ExitConfig, validate_config

__all__ = ["ConfigError", "ExitConfig", "validate_config"]
