"""
Configuration module
"""

from f9.config.client_config import (
    AUTH_ENV_VAR_MAPPING,
    ClientConfig,
    ConfigDefaults,
    ENV_VAR_MAPPING,
)
from f9.config.config_loader import ConfigLoader
from f9.config.config_validator import (
    ConfigValidator,
    ValidationResult,
    ValidationErrorDetail,
)

__all__ = [
    "AUTH_ENV_VAR_MAPPING",
    "ClientConfig",
    "ConfigDefaults",
    "ENV_VAR_MAPPING",
    "ConfigLoader",
    "ConfigValidator",
    "ValidationResult",
    "ValidationErrorDetail",
]
