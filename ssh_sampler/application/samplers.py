"""
SSH samplers.

A sampler ties one configuration to the per-sample pipeline: connect, run
exactly one operation, assemble the result, disconnect. Nothing is kept
between samples except the read-only configuration.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..core.domain.exceptions import SamplerError
from ..core.domain.models import (
    CommandRequest, ConnectionParameters, ExecutionOutcome, SampleResult, TransferRequest
)
from ..core.interfaces.samplers import ISampler
from ..core.interfaces.ssh import ICommandExecutor, IFileTransferExecutor, ISession
from ..infrastructure.config.models import ApplicationConfig
from ..infrastructure.ssh.auth import Credentials
from ..infrastructure.ssh.command import CommandExecutor
from ..infrastructure.ssh.context import SSHClientContext
from ..infrastructure.ssh.session import SessionManager
from ..infrastructure.ssh.sftp import FileTransferExecutor
from .assembler import ResultAssembler

logger = logging.getLogger(__name__)


class AbstractSSHSampler(ISampler, ABC):
    """
    Base class for SSH samplers.

    Subclasses describe the request and run it on a session; the base class
    owns the session lifecycle and failure handling.
    """

    def __init__(
        self,
        name: str,
        params: ConnectionParameters,
        context: Optional[SSHClientContext] = None,
        session_manager: Optional[SessionManager] = None
    ):
        """
        Initialize the sampler.

        Args:
            name: Sampler name used in result labels
            params: Connection parameters
            context: SSH client context shared by the samplers that use it
            session_manager: Session manager to use instead of building one
        """
        self._name = name
        self._params = params
        # Credentials are captured once, at construction.
        self._credentials = Credentials.from_parameters(params)
        self._sessions = session_manager or SessionManager(
            params, self._credentials, context)
        self._assembler = ResultAssembler(name, params)

    @property
    def name(self) -> str:
        return self._name

    @property
    def params(self) -> ConnectionParameters:
        return self._params

    @property
    def session_manager(self) -> SessionManager:
        return self._sessions

    @abstractmethod
    def describe(self) -> str:
        """Get the request text recorded as the sampler data."""
        pass

    @abstractmethod
    async def run(self, session: ISession) -> ExecutionOutcome:
        """Run this sampler's single operation on a live session."""
        pass

    async def sample(self) -> SampleResult:
        """Connect, run one operation and disconnect."""
        sampler_data = self.describe()

        async with self._sessions.session_scope() as session:
            if session is None:
                logger.error(
                    f"Failed to connect to server with credentials {self._params.endpoint}: "
                    f"{self._sessions.failure_reason}")
                return self._assembler.connection_failed(
                    sampler_data, self._sessions.failure_reason)

            try:
                outcome = await self.run(session)
            except SamplerError as e:
                logger.warning(f"{self._name} failed ({e.response_code}): {e.message}")
                return self._assembler.from_failure(sampler_data, e)
            except Exception as e:
                logger.exception(f"{self._name} failed unexpectedly: {e}")
                return self._assembler.unexpected_error(sampler_data, e)

            return self._assembler.from_outcome(sampler_data, outcome)


class SSHCommandSampler(AbstractSSHSampler):
    """Runs one remote command per sample."""

    DEFAULT_NAME = "SSH Command Sampler"

    def __init__(
        self,
        params: ConnectionParameters,
        request: CommandRequest,
        name: str = DEFAULT_NAME,
        context: Optional[SSHClientContext] = None,
        session_manager: Optional[SessionManager] = None,
        executor: Optional[ICommandExecutor] = None
    ):
        super().__init__(name, params, context, session_manager)
        self._request = request
        self._executor = executor or CommandExecutor()

    @classmethod
    def from_config(
        cls,
        config: ApplicationConfig,
        context: Optional[SSHClientContext] = None
    ) -> "SSHCommandSampler":
        return cls(
            params=config.connection.to_parameters(),
            request=config.command.to_request(),
            name=config.command.name,
            context=context
        )

    @property
    def request(self) -> CommandRequest:
        return self._request

    def describe(self) -> str:
        return self._request.describe()

    async def run(self, session: ISession) -> ExecutionOutcome:
        return await self._executor.execute(session, self._request)


class SSHSFTPSampler(AbstractSSHSampler):
    """Runs one file-transfer action per sample."""

    DEFAULT_NAME = "SSH SFTP Sampler"

    def __init__(
        self,
        params: ConnectionParameters,
        request: TransferRequest,
        name: str = DEFAULT_NAME,
        context: Optional[SSHClientContext] = None,
        session_manager: Optional[SessionManager] = None,
        executor: Optional[IFileTransferExecutor] = None
    ):
        super().__init__(name, params, context, session_manager)
        self._request = request
        self._executor = executor or FileTransferExecutor()

    @classmethod
    def from_config(
        cls,
        config: ApplicationConfig,
        context: Optional[SSHClientContext] = None
    ) -> "SSHSFTPSampler":
        return cls(
            params=config.connection.to_parameters(),
            request=config.sftp.to_request(),
            name=config.sftp.name,
            context=context
        )

    @property
    def request(self) -> TransferRequest:
        return self._request

    def describe(self) -> str:
        return self._request.describe()

    async def run(self, session: ISession) -> ExecutionOutcome:
        return await self._executor.execute(session, self._request)
