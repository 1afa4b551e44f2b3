"""
Configuration management infrastructure.

This module provides configuration models and loading for the samplers.
"""

from .models import (
    ApplicationConfig,
    ConnectionConfig,
    CommandSamplerConfig,
    SFTPSamplerConfig,
    LoggingConfig,
)
from .loader import ConfigLoader

__all__ = [
    "ApplicationConfig",
    "ConnectionConfig",
    "CommandSamplerConfig",
    "SFTPSamplerConfig",
    "LoggingConfig",
    "ConfigLoader",
]
