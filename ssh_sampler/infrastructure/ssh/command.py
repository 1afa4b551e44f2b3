"""
Command execution over an SSH exec channel.

One call runs one command: open the channel, optionally with a pty, read
stdout and stderr concurrently to the end, wait for the channel to close and
read the exit status.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Any, Callable, List, Optional

import asyncssh

from ...core.domain.exceptions import ProtocolFailure, TransportIOFailure
from ...core.domain.models import (
    CommandRequest, ExecutionOutcome, RESPONSE_CODE_OK, RESPONSE_MESSAGE_OK
)
from ...core.interfaces.ssh import ICommandExecutor, ISession
from .utils import error_message

logger = logging.getLogger(__name__)

STDOUT_HEADER = "=== stdout ===\n\n"
STDERR_HEADER = "\n\n=== stderr ===\n\n"
PTY_TERM_TYPE = "xterm"
UNKNOWN_EXIT_STATUS = -1


class CommandState(Enum):
    """Stages one command execution goes through."""
    NOT_CONNECTED = "not_connected"
    CONNECTED = "connected"
    CHANNEL_OPEN = "channel_open"
    EXECUTING = "executing"
    DRAINING = "draining"
    CLOSED = "closed"
    EXIT_STATUS_KNOWN = "exit_status_known"


StateListener = Callable[[CommandState], None]


class _CommandRun:
    """Per-invocation state: output buffers and the current stage."""

    def __init__(self, request: CommandRequest, listener: Optional[StateListener]):
        self.request = request
        self.stdout_lines: List[str] = []
        self.stderr_lines: List[str] = []
        self.state = CommandState.NOT_CONNECTED
        self.start_time = time.time()
        self._listener = listener

    def advance(self, state: CommandState) -> None:
        self.state = state
        if self._listener:
            self._listener(state)

    def render(self) -> str:
        parts: List[str] = []
        if self.request.capture.print_stderr:
            parts.append(STDOUT_HEADER)
        parts.extend(line + "\n" for line in self.stdout_lines)
        if self.request.capture.print_stderr:
            parts.append(STDERR_HEADER)
            parts.extend(line + "\n" for line in self.stderr_lines)
        return "".join(parts)

    def payload(self) -> bytes:
        return self.render().encode("utf-8")


async def _drain(stream: Any, sink: List[str]) -> None:
    """Read a stream line by line until end of stream."""
    while True:
        line = await stream.readline()
        if not line:
            break
        sink.append(line.rstrip("\r\n"))


class CommandExecutor(ICommandExecutor):
    """Runs one command per call on a live session."""

    def __init__(
        self,
        encoding: str = "utf-8",
        state_listener: Optional[StateListener] = None
    ):
        """
        Initialize command executor.

        Args:
            encoding: Encoding used to decode the remote output streams
            state_listener: Called with each stage the execution reaches
        """
        self._encoding = encoding
        self._state_listener = state_listener

    async def execute(self, session: ISession, request: CommandRequest) -> ExecutionOutcome:
        """Run the command on the session and capture its result."""
        run = _CommandRun(request, self._state_listener)
        run.advance(CommandState.CONNECTED)
        connection = session.connection
        process: Optional[Any] = None

        try:
            try:
                run.start_time = time.time()
                process = await connection.create_process(
                    request.command,
                    term_type=PTY_TERM_TYPE if request.capture.use_pty else None,
                    encoding=self._encoding,
                    errors="replace"
                )
                run.advance(CommandState.CHANNEL_OPEN)
                run.advance(CommandState.EXECUTING)
            except asyncssh.Error as e:
                raise ProtocolFailure(
                    error_message(e), run.payload(), run.start_time, time.time()) from e

            try:
                run.advance(CommandState.DRAINING)
                # Both streams must be read, or a full pipe stalls the remote side.
                await asyncio.gather(
                    _drain(process.stdout, run.stdout_lines),
                    _drain(process.stderr, run.stderr_lines)
                )
                await process.wait_closed()
                run.advance(CommandState.CLOSED)
            except (OSError, asyncssh.Error) as e:
                raise TransportIOFailure(
                    error_message(e), run.payload(), run.start_time, time.time()) from e

            end_time = time.time()
            exit_status = process.exit_status
            if exit_status is None:
                exit_status = UNKNOWN_EXIT_STATUS
            run.advance(CommandState.EXIT_STATUS_KNOWN)

        finally:
            if process is not None and run.state != CommandState.EXIT_STATUS_KNOWN:
                process.close()

        logger.debug(f"Command finished with exit status {exit_status}: {request.command}")

        if request.capture.use_return_code:
            succeeded = exit_status == 0
            response_code = str(exit_status)
        else:
            succeeded = True
            response_code = RESPONSE_CODE_OK

        return ExecutionOutcome(
            succeeded=succeeded,
            response_code=response_code,
            response_message=RESPONSE_MESSAGE_OK,
            payload=run.payload(),
            start_time=run.start_time,
            end_time=end_time
        )

