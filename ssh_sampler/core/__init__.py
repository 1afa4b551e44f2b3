"""
Core module containing domain models and service interfaces.

This module defines the core abstractions of the SSH samplers, independent
of the SSH library and other infrastructure concerns.
"""

from .interfaces.ssh import ICommandExecutor, IFileTransferExecutor, ISessionManager
from .interfaces.samplers import ISampler
from .domain.models import ConnectionParameters, ExecutionOutcome, SampleResult

__all__ = [
    "ICommandExecutor",
    "IFileTransferExecutor",
    "ISessionManager",
    "ISampler",
    "ConnectionParameters",
    "ExecutionOutcome",
    "SampleResult",
]
