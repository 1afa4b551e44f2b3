"""
SSH Sampler - SSH command and SFTP samplers for load testing.

Each sample opens its own SSH session, performs exactly one remote command
or file-transfer action, reports timing, success and captured output as a
single result, and closes the session again.
"""

__version__ = "0.1.0"

# Public API exports
from .core.domain.models import (
    ConnectionParameters,
    CommandCapture,
    CommandRequest,
    TransferAction,
    TransferRequest,
    ExecutionOutcome,
    SampleResult,
)
from .application.samplers import SSHCommandSampler, SSHSFTPSampler
from .application.runner import run_samples, summarize
from .infrastructure.ssh.context import SSHClientContext

__all__ = [
    "ConnectionParameters",
    "CommandCapture",
    "CommandRequest",
    "TransferAction",
    "TransferRequest",
    "ExecutionOutcome",
    "SampleResult",
    "SSHCommandSampler",
    "SSHSFTPSampler",
    "run_samples",
    "summarize",
    "SSHClientContext",
]
