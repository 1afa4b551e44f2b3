"""
SSH service interfaces for the samplers.

This module defines the contracts for credential supply, session lifecycle
management and the two channel executors.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple

from ..domain.models import CommandRequest, ExecutionOutcome, TransferRequest


class ICredentialProvider(ABC):
    """
    Interface for answering the credential queries an SSH client makes.

    Implementations never prompt a human. ``None`` means "no answer" and
    makes the SSH library fail that authentication method.
    """

    @abstractmethod
    def password(self) -> Optional[str]:
        """Get the password, or None if none is configured."""
        pass

    @abstractmethod
    def passphrase(self) -> Optional[str]:
        """Get the private key passphrase, or None if it cannot apply."""
        pass

    @abstractmethod
    def keyboard_interactive(
        self,
        prompts: Sequence[Tuple[str, bool]]
    ) -> Optional[List[str]]:
        """
        Answer a keyboard-interactive challenge.

        Args:
            prompts: Sequence of (prompt text, echo flag) pairs

        Returns:
            Responses, one per prompt, or None to refuse
        """
        pass

    @abstractmethod
    def prompt_yes_no(self, message: str) -> bool:
        """Answer a yes/no question such as an unknown host key."""
        pass

    @abstractmethod
    def show_message(self, message: str) -> None:
        """Receive an informational message from the server."""
        pass


class ISession(ABC):
    """Interface for one connected, authenticated SSH session."""

    @property
    @abstractmethod
    def connection(self) -> Any:
        """Get the underlying SSH connection object."""
        pass

    @abstractmethod
    def is_closed(self) -> bool:
        """Check if the session has been disconnected."""
        pass


class ISessionManager(ABC):
    """
    Interface for the connect/disconnect lifecycle of one sample.

    A manager never reuses a session: each connect produces a new one.
    """

    @property
    @abstractmethod
    def failure_reason(self) -> str:
        """Get the reason the last connect attempt failed."""
        pass

    @abstractmethod
    async def connect(self) -> Optional[ISession]:
        """
        Open and authenticate a new session.

        Returns:
            The session, or None if connecting failed. Never raises.
        """
        pass

    @abstractmethod
    async def disconnect(self, session: Optional[ISession]) -> None:
        """Close a session. Closing None or a closed session is a no-op."""
        pass


class ICommandExecutor(ABC):
    """Interface for running one command on an exec channel."""

    @abstractmethod
    async def execute(self, session: ISession, request: CommandRequest) -> ExecutionOutcome:
        """
        Run the command and capture its output and exit status.

        Raises:
            ProtocolFailure: If the channel cannot be opened or dispatched
            TransportIOFailure: If reading the output streams fails
        """
        pass


class IFileTransferExecutor(ABC):
    """Interface for running one action on an sftp channel."""

    @abstractmethod
    async def execute(self, session: ISession, request: TransferRequest) -> ExecutionOutcome:
        """
        Run the transfer action and capture its textual output.

        Raises:
            ProtocolFailure: If the sftp channel fails
            SftpOperationFailure: If the remote rejects the action
            TransportIOFailure: If local file I/O fails
        """
        pass
