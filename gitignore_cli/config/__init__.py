"""Configuration package exports."""

from .loader import CONFIG_ENV_VAR, ConfigLocator, ConfigRepository
from .models import GlobalConfig

__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigLocator",
    "ConfigRepository",
    "GlobalConfig",
]
