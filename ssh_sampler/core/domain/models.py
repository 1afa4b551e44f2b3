"""
Sample domain models for the SSH samplers.

This module defines the immutable connection parameters, the request types
for the two kinds of remote operation, and the outcome/result records that
an execution produces.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


DEFAULT_SSH_PORT = 22
DEFAULT_CONNECT_TIMEOUT_MS = 5000

RESPONSE_CODE_OK = "OK"
RESPONSE_MESSAGE_OK = "OK"
CONTENT_TYPE_TEXT = "text/plain"


@dataclass(frozen=True)
class ConnectionParameters:
    """Connection settings for one sampler; read-only once built."""

    host: str
    username: str
    port: int = DEFAULT_SSH_PORT
    password: str = ""
    private_key_path: str = ""
    passphrase: str = ""
    connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS

    @property
    def has_key_file(self) -> bool:
        """A private key takes precedence over the password when present."""
        return len(self.private_key_path) > 0

    @property
    def connect_timeout(self) -> float:
        """Connect timeout in seconds."""
        return self.connect_timeout_ms / 1000.0

    @property
    def endpoint(self) -> str:
        return f"{self.username}@{self.host}:{self.port}"


class TransferAction(Enum):
    """File-transfer actions understood by the sftp executor."""
    GET = "get"
    PUT = "put"
    LS = "ls"
    RM = "rm"
    RMDIR = "rmdir"
    MKDIR = "mkdir"
    RENAME = "rename"

    @classmethod
    def parse(cls, value: Any) -> Optional["TransferAction"]:
        """Return the matching action, or None for an unrecognized value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class CommandCapture:
    """How a command's result is captured."""
    use_return_code: bool = True
    use_pty: bool = True
    print_stderr: bool = True


@dataclass(frozen=True)
class CommandRequest:
    """One remote command to run on an exec channel."""
    command: str
    capture: CommandCapture = field(default_factory=CommandCapture)

    def describe(self) -> str:
        return self.command


@dataclass(frozen=True)
class TransferRequest:
    """
    One file-transfer action to run on an sftp channel.

    ``action`` keeps the raw configured value so an unrecognized action can
    still be reported as it was given.
    """
    action: str
    source: str
    destination: str = ""
    print_file: bool = True

    @property
    def transfer_action(self) -> Optional[TransferAction]:
        return TransferAction.parse(self.action)

    def describe(self) -> str:
        return f"{self.action} {self.source}"


@dataclass
class ExecutionOutcome:
    """What an executor reports back for one operation."""

    succeeded: bool
    response_code: str
    response_message: str
    payload: bytes = b""
    start_time: float = field(default_factory=time.time)
    end_time: float = field(default_factory=time.time)

    @property
    def elapsed(self) -> float:
        """Elapsed time in seconds."""
        return max(0.0, self.end_time - self.start_time)


@dataclass
class SampleResult:
    """
    Result record handed to the load-testing harness.

    Timestamps are Unix times in seconds, bracketing only the channel work
    (connection setup and teardown are excluded).
    """

    label: str
    sampler_data: str
    response_data: bytes = b""
    content_type: str = CONTENT_TYPE_TEXT
    data_type: str = "text"
    successful: bool = False
    response_code: str = ""
    response_message: str = ""
    start_time: float = 0.0
    end_time: float = 0.0

    @property
    def elapsed_ms(self) -> int:
        return int(round(max(0.0, self.end_time - self.start_time) * 1000))

    @property
    def response_text(self) -> str:
        return self.response_data.decode("utf-8", errors="replace")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-friendly dictionary."""
        return {
            "label": self.label,
            "sampler_data": self.sampler_data,
            "response_data": self.response_text,
            "content_type": self.content_type,
            "data_type": self.data_type,
            "successful": self.successful,
            "response_code": self.response_code,
            "response_message": self.response_message,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "elapsed_ms": self.elapsed_ms,
        }
