"""
Domain models representing samples, requests and their outcomes.

This module contains pure domain models without external dependencies.
"""

from .models import (
    ConnectionParameters,
    TransferAction,
    CommandCapture,
    CommandRequest,
    TransferRequest,
    ExecutionOutcome,
    SampleResult,
)
from .exceptions import (
    SamplerError,
    ConnectFailure,
    ProtocolFailure,
    TransportIOFailure,
    SftpOperationFailure,
)

__all__ = [
    "ConnectionParameters",
    "TransferAction",
    "CommandCapture",
    "CommandRequest",
    "TransferRequest",
    "ExecutionOutcome",
    "SampleResult",
    "SamplerError",
    "ConnectFailure",
    "ProtocolFailure",
    "TransportIOFailure",
    "SftpOperationFailure",
]
