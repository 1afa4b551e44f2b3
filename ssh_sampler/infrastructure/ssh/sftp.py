"""
File-transfer actions over an SSH sftp channel.

One call runs one action against the remote filesystem and captures its
textual output: the directory listing for ``ls`` and the file content for
``get`` when printing is enabled. Other actions produce an empty payload.
"""

import logging
import time
from typing import Any, Awaitable, Callable, Dict, List

import asyncssh

from ...core.domain.exceptions import (
    ProtocolFailure, SftpOperationFailure, TransportIOFailure
)
from ...core.domain.models import (
    ExecutionOutcome,
    RESPONSE_CODE_OK,
    RESPONSE_MESSAGE_OK,
    TransferAction,
    TransferRequest,
)
from ...core.interfaces.ssh import IFileTransferExecutor, ISession
from .utils import error_message

logger = logging.getLogger(__name__)

READ_BLOCK_SIZE = 32768  # 32KB

ActionHandler = Callable[[Any, TransferRequest, List[bytes]], Awaitable[None]]


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    return str(value).encode("utf-8")


class FileTransferExecutor(IFileTransferExecutor):
    """Runs one sftp action per call on a live session."""

    def __init__(self, read_block_size: int = READ_BLOCK_SIZE):
        self._read_block_size = read_block_size
        self._handlers: Dict[TransferAction, ActionHandler] = {
            TransferAction.GET: self._get,
            TransferAction.PUT: self._put,
            TransferAction.LS: self._ls,
            TransferAction.RM: self._rm,
            TransferAction.RMDIR: self._rmdir,
            TransferAction.MKDIR: self._mkdir,
            TransferAction.RENAME: self._rename,
        }

    async def execute(self, session: ISession, request: TransferRequest) -> ExecutionOutcome:
        """Run the transfer action on the session and capture its output."""
        buffer: List[bytes] = []
        start_time = time.time()

        try:
            async with session.connection.start_sftp_client() as sftp:
                await self._dispatch(sftp, request, buffer)

        except asyncssh.SFTPError as e:
            raise SftpOperationFailure(
                error_message(e), getattr(e, "code", None),
                b"".join(buffer), start_time, time.time()) from e
        except asyncssh.Error as e:
            raise ProtocolFailure(
                error_message(e), b"".join(buffer), start_time, time.time()) from e
        except OSError as e:
            raise TransportIOFailure(
                error_message(e), b"".join(buffer), start_time, time.time()) from e

        end_time = time.time()
        logger.debug(f"SFTP action completed: {request.describe()}")

        return ExecutionOutcome(
            succeeded=True,
            response_code=RESPONSE_CODE_OK,
            response_message=RESPONSE_MESSAGE_OK,
            payload=b"".join(buffer),
            start_time=start_time,
            end_time=end_time
        )

    async def _dispatch(self, sftp: Any, request: TransferRequest, buffer: List[bytes]) -> None:
        action = request.transfer_action
        if action is None:
            # TODO: decide whether an unrecognized action should fail the sample instead
            logger.debug(f"Ignoring unrecognized SFTP action: {request.action!r}")
            return

        await self._handlers[action](sftp, request, buffer)

    async def _get(self, sftp: Any, request: TransferRequest, buffer: List[bytes]) -> None:
        if not request.print_file:
            await sftp.get(request.source, request.destination)
            return

        async with sftp.open(request.source, "rb") as remote_file:
            while True:
                block = await remote_file.read(self._read_block_size)
                if not block:
                    break
                buffer.append(block)

    async def _put(self, sftp: Any, request: TransferRequest, buffer: List[bytes]) -> None:
        await sftp.put(request.source, request.destination)

    async def _ls(self, sftp: Any, request: TransferRequest, buffer: List[bytes]) -> None:
        for entry in await sftp.readdir(request.source):
            longname = entry.longname or entry.filename
            buffer.append(_as_bytes(longname))
            buffer.append(b"\n")

    async def _rm(self, sftp: Any, request: TransferRequest, buffer: List[bytes]) -> None:
        await sftp.remove(request.source)

    async def _rmdir(self, sftp: Any, request: TransferRequest, buffer: List[bytes]) -> None:
        await sftp.rmdir(request.source)

    async def _mkdir(self, sftp: Any, request: TransferRequest, buffer: List[bytes]) -> None:
        await sftp.mkdir(request.source)

    async def _rename(self, sftp: Any, request: TransferRequest, buffer: List[bytes]) -> None:
        await sftp.rename(request.source, request.destination)
