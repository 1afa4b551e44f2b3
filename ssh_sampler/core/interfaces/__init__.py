"""
Core interfaces defining contracts for the sampler components.
"""

from .ssh import (
    ICredentialProvider,
    ISession,
    ISessionManager,
    ICommandExecutor,
    IFileTransferExecutor,
)
from .samplers import ISampler

__all__ = [
    "ICredentialProvider",
    "ISession",
    "ISessionManager",
    "ICommandExecutor",
    "IFileTransferExecutor",
    "ISampler",
]
