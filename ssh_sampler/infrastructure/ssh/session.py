"""
SSH session lifecycle for one sample.

The session manager opens a fresh connection per sample, normalizes every
connection error into a failure reason, and closes the connection again
no matter how the sample went.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from ...core.domain.models import ConnectionParameters
from ...core.interfaces.ssh import ICredentialProvider, ISession, ISessionManager
from .auth import Credentials
from .context import SSHClientContext
from .utils import error_message

logger = logging.getLogger(__name__)

UNKNOWN_FAILURE = "Unknown"


class Session(ISession):
    """One authenticated SSH connection, owned by a single sample."""

    def __init__(self, connection: Any, params: ConnectionParameters):
        self._connection = connection
        self._params = params
        self._closed = False

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def params(self) -> ConnectionParameters:
        return self._params

    def is_closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        """Close the connection once; later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        await _close_connection(self._connection)


async def _close_connection(connection: Any) -> None:
    connection.close()
    await connection.wait_closed()


class SessionManager(ISessionManager):
    """
    Connect/disconnect lifecycle manager.

    Authentication order is fixed (public key, keyboard-interactive, then
    password) and host keys are not verified.
    """

    def __init__(
        self,
        params: ConnectionParameters,
        credentials: Optional[ICredentialProvider] = None,
        context: Optional[SSHClientContext] = None
    ):
        """
        Initialize session manager.

        Args:
            params: Connection parameters
            credentials: Credential provider, built from params if omitted
            context: SSH client context used to open connections
        """
        self._params = params
        self._credentials = credentials or Credentials.from_parameters(params)
        self._context = context or SSHClientContext()
        self._failure_reason = UNKNOWN_FAILURE
        self._warned_host_key = False

    @property
    def params(self) -> ConnectionParameters:
        return self._params

    @property
    def failure_reason(self) -> str:
        return self._failure_reason

    async def connect(self) -> Optional[Session]:
        """Open a new session, or return None and record why it failed."""
        self._failure_reason = UNKNOWN_FAILURE

        if not self._warned_host_key:
            logger.warning(
                f"Host key verification is disabled for {self._params.host}:{self._params.port}")
            self._warned_host_key = True

        connection: Optional[Any] = None
        try:
            connection = await self._context.open_connection(self._params, self._credentials)
            logger.debug(f"SSH session opened: {self._params.endpoint}")
            return Session(connection, self._params)

        except Exception as e:
            self._failure_reason = error_message(e)
            logger.error(f"SSH connection error for {self._params.endpoint}: {self._failure_reason}")

            if connection is not None:
                try:
                    await _close_connection(connection)
                except Exception as close_error:
                    logger.debug(f"Error closing partial SSH connection: {close_error}")
            return None

    async def disconnect(self, session: Optional[ISession]) -> None:
        """Close the session; None or an already closed session is a no-op."""
        if session is None or session.is_closed():
            return

        try:
            if isinstance(session, Session):
                await session.close()
            else:
                await _close_connection(session.connection)
            logger.debug(f"SSH session closed: {self._params.endpoint}")
        except Exception as e:
            logger.error(f"Error during SSH disconnect: {e}")

    @asynccontextmanager
    async def session_scope(self) -> AsyncIterator[Optional[Session]]:
        """
        Connect for the duration of one operation.

        Yields the session, or None if connecting failed. Disconnect always
        runs on exit, including when the body raises.
        """
        session = await self.connect()
        try:
            yield session
        finally:
            await self.disconnect(session)
