"""
SSH session and channel handling for the samplers.

This module provides the credential responder, the session lifecycle
manager and the exec/sftp channel executors, all built on asyncssh.
"""

from .auth import Credentials, CredentialResponder
from .context import SSHClientContext, PREFERRED_AUTH
from .session import Session, SessionManager
from .command import CommandExecutor, CommandState
from .sftp import FileTransferExecutor

__all__ = [
    "Credentials",
    "CredentialResponder",
    "SSHClientContext",
    "PREFERRED_AUTH",
    "Session",
    "SessionManager",
    "CommandExecutor",
    "CommandState",
    "FileTransferExecutor",
]
