"""
Failure types raised while running a sample.

Every failure carries the response code it is reported under, plus whatever
output and timing had been captured when it happened, so the sampler can
still turn it into a result.
"""

import time
from typing import Optional


RESPONSE_CODE_CONNECTION_FAILED = "Connection Failed"
RESPONSE_CODE_PROTOCOL = "SSHException"
RESPONSE_CODE_IO = "IOException"
RESPONSE_CODE_SFTP = "SftpException"


class SamplerError(Exception):
    """Base exception for all sample failures."""

    response_code = "Error"

    def __init__(
        self,
        message: str,
        payload: bytes = b"",
        start_time: Optional[float] = None,
        end_time: Optional[float] = None
    ):
        super().__init__(message)
        self.message = message
        self.payload = payload
        now = time.time()
        self.start_time = start_time if start_time is not None else now
        self.end_time = end_time if end_time is not None else now


class ConnectFailure(SamplerError):
    """Handshake, authentication or timeout failure; no session exists."""
    response_code = RESPONSE_CODE_CONNECTION_FAILED


class ProtocolFailure(SamplerError):
    """Channel open, command dispatch or sftp protocol failure."""
    response_code = RESPONSE_CODE_PROTOCOL


class TransportIOFailure(SamplerError):
    """Stream or local file I/O failure in the middle of an operation."""
    response_code = RESPONSE_CODE_IO


class SftpOperationFailure(SamplerError):
    """An sftp action rejected by the remote side."""
    response_code = RESPONSE_CODE_SFTP

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        payload: bytes = b"",
        start_time: Optional[float] = None,
        end_time: Optional[float] = None
    ):
        super().__init__(message, payload, start_time, end_time)
        self.code = code
