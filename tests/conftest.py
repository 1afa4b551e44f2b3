"""
Shared fakes for the SSH sampler tests.

The fakes stand in for asyncssh connections, exec processes and sftp
clients, and count how often connections are opened and closed.
"""

import posixpath
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Set

import asyncssh
import pytest

from ssh_sampler.core.domain.models import ConnectionParameters
from ssh_sampler.infrastructure.ssh.context import SSHClientContext


class FakeReader:
    """Async line reader over a fixed text."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self._lines = text.splitlines(keepends=True)
        self._error = error

    async def readline(self) -> str:
        if self._lines:
            return self._lines.pop(0)
        if self._error is not None:
            raise self._error
        return ""


class FakeProcess:
    """Exec channel with canned output and exit status."""

    def __init__(
        self,
        stdout: str = "",
        stderr: str = "",
        exit_status: Optional[int] = 0,
        read_error: Optional[Exception] = None
    ):
        self.stdout = FakeReader(stdout, read_error)
        self.stderr = FakeReader(stderr)
        self.exit_status = exit_status
        self.closed = False
        self.close_calls = 0

    async def wait_closed(self) -> None:
        self.closed = True

    def close(self) -> None:
        self.close_calls += 1
        self.closed = True


class _AsyncContext:
    def __init__(self, value: Any, on_exit: Any = None):
        self._value = value
        self._on_exit = on_exit

    async def __aenter__(self) -> Any:
        return self._value

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._on_exit:
            self._on_exit()


class FakeRemoteFile:
    def __init__(self, data: bytes):
        self._data = data

    async def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = len(self._data)
        block, self._data = self._data[:size], self._data[size:]
        return block


class FakeSFTPClient:
    """In-memory remote filesystem with asyncssh-like sftp methods."""

    def __init__(self, files: Optional[Dict[str, bytes]] = None, dirs: Optional[Set[str]] = None):
        self.files: Dict[str, bytes] = dict(files or {})
        self.dirs: Set[str] = set(dirs or {"/"})
        self.listings: Dict[str, List[SimpleNamespace]] = {}
        self.calls: List[tuple] = []
        self.local_files: Dict[str, bytes] = {}

    def snapshot(self) -> tuple:
        return (dict(self.files), set(self.dirs))

    def _parent_exists(self, path: str) -> bool:
        return posixpath.dirname(path.rstrip("/")) in self.dirs

    async def get(self, remotepath: str, localpath: str) -> None:
        self.calls.append(("get", remotepath, localpath))
        if remotepath not in self.files:
            raise asyncssh.SFTPNoSuchFile("No such file")
        self.local_files[localpath] = self.files[remotepath]

    async def put(self, localpath: str, remotepath: str) -> None:
        self.calls.append(("put", localpath, remotepath))
        if localpath not in self.local_files:
            raise FileNotFoundError(2, "No such file or directory", localpath)
        self.files[remotepath] = self.local_files[localpath]

    def open(self, path: str, mode: str = "r") -> _AsyncContext:
        self.calls.append(("open", path, mode))
        if path not in self.files:
            raise asyncssh.SFTPNoSuchFile("No such file")
        return _AsyncContext(FakeRemoteFile(self.files[path]))

    async def readdir(self, path: str) -> List[SimpleNamespace]:
        self.calls.append(("readdir", path))
        if path not in self.dirs:
            raise asyncssh.SFTPNoSuchFile("No such file")
        return list(self.listings.get(path, []))

    async def remove(self, path: str) -> None:
        self.calls.append(("remove", path))
        if path not in self.files:
            raise asyncssh.SFTPNoSuchFile("No such file")
        del self.files[path]

    async def rmdir(self, path: str) -> None:
        self.calls.append(("rmdir", path))
        if path not in self.dirs:
            raise asyncssh.SFTPNoSuchFile("No such file")
        self.dirs.remove(path)

    async def mkdir(self, path: str) -> None:
        self.calls.append(("mkdir", path))
        if path in self.dirs or path in self.files:
            raise asyncssh.SFTPFailure("File already exists")
        if not self._parent_exists(path):
            raise asyncssh.SFTPNoSuchFile("No such file")
        self.dirs.add(path)

    async def rename(self, oldpath: str, newpath: str) -> None:
        self.calls.append(("rename", oldpath, newpath))
        if oldpath not in self.files:
            raise asyncssh.SFTPNoSuchFile("No such file")
        self.files[newpath] = self.files.pop(oldpath)


class FakeConnection:
    """asyncssh connection double."""

    def __init__(
        self,
        process: Optional[FakeProcess] = None,
        sftp: Optional[FakeSFTPClient] = None,
        process_error: Optional[Exception] = None,
        sftp_error: Optional[Exception] = None
    ):
        self.process = process or FakeProcess()
        self.sftp = sftp or FakeSFTPClient()
        self.process_error = process_error
        self.sftp_error = sftp_error
        self.process_calls: List[tuple] = []
        self.sftp_opened = 0
        self.sftp_closed = 0
        self.close_calls = 0
        self.wait_closed_calls = 0

    async def create_process(self, command: str, **kwargs: Any) -> FakeProcess:
        self.process_calls.append((command, kwargs))
        if self.process_error is not None:
            raise self.process_error
        return self.process

    def start_sftp_client(self) -> _AsyncContext:
        if self.sftp_error is not None:
            raise self.sftp_error
        self.sftp_opened += 1

        def closed() -> None:
            self.sftp_closed += 1

        return _AsyncContext(self.sftp, closed)

    def close(self) -> None:
        self.close_calls += 1

    async def wait_closed(self) -> None:
        self.wait_closed_calls += 1


class FakeConnector:
    """Stand-in for asyncssh.connect that records every attempt."""

    def __init__(self, connection: Optional[FakeConnection] = None, error: Optional[Exception] = None):
        self.connection = connection or FakeConnection()
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.opened = 0

    async def __call__(self, **kwargs: Any) -> FakeConnection:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        self.opened += 1
        return self.connection


@pytest.fixture
def params() -> ConnectionParameters:
    """Password-authenticated connection parameters."""
    return ConnectionParameters(
        host="sut.example.com",
        port=2222,
        username="loadtest",
        password="secret",
        connect_timeout_ms=1500
    )


@pytest.fixture
def connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def connector(connection: FakeConnection) -> FakeConnector:
    return FakeConnector(connection)


@pytest.fixture
def context(connector: FakeConnector) -> SSHClientContext:
    return SSHClientContext(connector=connector)


@pytest.fixture
def fakes() -> SimpleNamespace:
    """Fake classes, for tests that build their own doubles."""
    return SimpleNamespace(
        Reader=FakeReader,
        Process=FakeProcess,
        SFTPClient=FakeSFTPClient,
        Connection=FakeConnection,
        Connector=FakeConnector,
    )
