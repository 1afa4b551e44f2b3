"""
Infrastructure layer containing external dependencies and I/O operations.

This layer handles configuration, logging and the SSH transport.
"""

from .config.loader import ConfigLoader
from .logging.setup import setup_logging

__all__ = [
    "ConfigLoader",
    "setup_logging",
]
