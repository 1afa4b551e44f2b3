"""
Configuration models and data structures.

This module defines the configuration models for the samplers, providing
type safety, defaults and validation for configuration values.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict

from ...core.domain.models import (
    CommandCapture,
    CommandRequest,
    ConnectionParameters,
    DEFAULT_CONNECT_TIMEOUT_MS,
    DEFAULT_SSH_PORT,
    TransferRequest,
)


@dataclass
class ConnectionConfig:
    """SSH connection configuration."""
    host: str = "localhost"
    port: int = DEFAULT_SSH_PORT
    username: str = ""
    password: str = ""
    private_key_path: str = ""
    passphrase: str = ""
    connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS
    # Host key verification is not supported; every server key is accepted.
    accept_any_host_key: bool = True

    def to_parameters(self) -> ConnectionParameters:
        """Build the immutable connection parameters."""
        return ConnectionParameters(
            host=self.host,
            port=int(self.port),
            username=self.username or "",
            password=self.password or "",
            private_key_path=self.private_key_path or "",
            passphrase=self.passphrase or "",
            connect_timeout_ms=int(self.connect_timeout_ms)
        )


@dataclass
class CommandSamplerConfig:
    """Command sampler configuration."""
    name: str = "SSH Command Sampler"
    command: str = "date"
    use_return_code: bool = True
    use_tty: bool = True
    print_stderr: bool = True

    def to_request(self) -> CommandRequest:
        return CommandRequest(
            command=self.command,
            capture=CommandCapture(
                use_return_code=self.use_return_code,
                use_pty=self.use_tty,
                print_stderr=self.print_stderr
            )
        )


@dataclass
class SFTPSamplerConfig:
    """SFTP sampler configuration."""
    name: str = "SSH SFTP Sampler"
    action: str = "get"
    source: str = ""
    destination: str = ""
    print_file: bool = True

    def to_request(self) -> TransferRequest:
        return TransferRequest(
            action=self.action,
            source=self.source,
            destination=self.destination,
            print_file=self.print_file
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_directory: str = "logs"
    max_file_size: str = "10MB"
    backup_count: int = 5
    console_enabled: bool = True
    file_enabled: bool = False


@dataclass
class ApplicationConfig:
    """Main application configuration."""

    name: str = "SSH Sampler"
    version: str = "0.1.0"

    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    command: CommandSamplerConfig = field(default_factory=CommandSamplerConfig)
    sftp: SFTPSamplerConfig = field(default_factory=SFTPSamplerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    config_file_path: str = ""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate the current configuration values."""
        self._validate_port()
        self._validate_timeout()
        self._validate_host_key_policy()

    def _validate_port(self) -> None:
        port = self.connection.port
        if not (1 <= port <= 65535):
            raise ValueError(f"SSH port must be between 1 and 65535, got {port}")

    def _validate_timeout(self) -> None:
        timeout = self.connection.connect_timeout_ms
        if timeout <= 0:
            raise ValueError(f"Connect timeout must be positive, got {timeout}")

    def _validate_host_key_policy(self) -> None:
        if not self.connection.accept_any_host_key:
            raise ValueError(
                "Host key verification is not supported; accept_any_host_key must be true")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApplicationConfig':
        """Create configuration from dictionary."""
        return cls(
            name=data.get('name', 'SSH Sampler'),
            version=data.get('version', '0.1.0'),
            connection=ConnectionConfig(**data.get('connection', {})),
            command=CommandSamplerConfig(**data.get('command', {})),
            sftp=SFTPSamplerConfig(**data.get('sftp', {})),
            logging=LoggingConfig(**data.get('logging', {})),
            config_file_path=data.get('config_file_path') or ""
        )
