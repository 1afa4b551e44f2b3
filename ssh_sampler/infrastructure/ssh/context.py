"""
SSH client context.

The context is the one place that talks to ``asyncssh.connect``. It is built
explicitly and handed to each session manager, so tests can swap in a fake
and no hidden process-wide client state exists.
"""

import logging
from typing import Any, Callable, Dict, Optional, Sequence

import asyncssh

from ...core.domain.models import ConnectionParameters
from ...core.interfaces.ssh import ICredentialProvider
from .auth import CredentialResponder

logger = logging.getLogger(__name__)

# Fixed order; callers do not choose.
PREFERRED_AUTH = ("publickey", "keyboard-interactive", "password")

Connector = Callable[..., Any]


class SSHClientContext:
    """Connection factory in front of asyncssh."""

    def __init__(
        self,
        connector: Optional[Connector] = None,
        preferred_auth: Sequence[str] = PREFERRED_AUTH,
        client_version: str = "SSH_Sampler_1.0",
        extra_options: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the client context.

        Args:
            connector: Coroutine function used to connect, asyncssh.connect by default
            preferred_auth: Authentication methods in the order they are tried
            client_version: Version string sent to the server
            extra_options: Additional asyncssh connect options
        """
        self._connector = connector or asyncssh.connect
        self._preferred_auth = tuple(preferred_auth)
        self._client_version = client_version
        self._extra_options = dict(extra_options or {})

    @property
    def preferred_auth(self) -> Sequence[str]:
        return self._preferred_auth

    def build_options(
        self,
        params: ConnectionParameters,
        credentials: ICredentialProvider
    ) -> Dict[str, Any]:
        """Convert connection parameters to asyncssh connect kwargs."""
        kwargs: Dict[str, Any] = {
            'host': params.host,
            'port': params.port,
            'username': params.username,
            'client_version': self._client_version,
            'connect_timeout': params.connect_timeout,
            'preferred_auth': list(self._preferred_auth),
            # Host key checking disabled: accept any server key.
            'known_hosts': None,
            'client_factory': lambda: CredentialResponder(credentials),
        }

        if params.has_key_file:
            kwargs['client_keys'] = [params.private_key_path]
            kwargs['passphrase'] = credentials.passphrase()
        else:
            # Keep asyncssh from picking up keys or an agent on its own.
            kwargs['client_keys'] = []
            kwargs['agent_path'] = None

        kwargs.update(self._extra_options)
        return kwargs

    async def open_connection(
        self,
        params: ConnectionParameters,
        credentials: ICredentialProvider
    ) -> Any:
        """
        Open and authenticate one SSH connection.

        Raises:
            Whatever the connector raises; the session manager normalizes it.
        """
        kwargs = self.build_options(params, credentials)
        logger.debug(
            f"Connecting to {params.host}:{params.port} as {params.username} "
            f"(timeout {params.connect_timeout:.3f}s)")
        return await self._connector(**kwargs)
