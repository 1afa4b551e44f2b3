"""
Main entry point for the SSH samplers.

This module provides the command-line interface: run command or SFTP
samples against a host, and create or validate configuration files.
"""

import asyncio
import json
import logging
import sys
from typing import List, Optional

import typer

from .application.runner import run_samples, summarize
from .application.samplers import AbstractSSHSampler, SSHCommandSampler, SSHSFTPSampler
from .core.domain.models import SampleResult
from .infrastructure.config.loader import ConfigLoader
from .infrastructure.config.models import ApplicationConfig
from .infrastructure.logging.setup import setup_logging
from .infrastructure.ssh.context import SSHClientContext

# Create CLI application
cli = typer.Typer(
    name="ssh-sampler",
    help="SSH command and SFTP samplers for load testing"
)

logger = logging.getLogger(__name__)


def _load(
    config_file: Optional[str],
    host: Optional[str],
    port: Optional[int],
    user: Optional[str],
    password: Optional[str],
    key_file: Optional[str],
    passphrase: Optional[str],
    timeout: Optional[int],
    log_level: Optional[str]
) -> ApplicationConfig:
    """Load configuration and apply command line overrides."""
    config_loader = ConfigLoader()
    try:
        config = config_loader.load_config(config_file)
    except (ValueError, FileNotFoundError) as e:
        typer.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    if host:
        config.connection.host = host
    if port:
        config.connection.port = port
    if user:
        config.connection.username = user
    if password is not None:
        config.connection.password = password
    if key_file is not None:
        config.connection.private_key_path = key_file
    if passphrase is not None:
        config.connection.passphrase = passphrase
    if timeout:
        config.connection.connect_timeout_ms = timeout
    if log_level:
        config.logging.level = log_level.upper()

    try:
        config.validate()
    except ValueError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(1)
    return config


def _format_result(result: SampleResult, as_json: bool, show_output: bool) -> str:
    if as_json:
        return json.dumps(result.to_dict())

    status = "OK " if result.successful else "ERR"
    line = (f"{status} {result.label} [{result.sampler_data}] "
            f"code={result.response_code} {result.elapsed_ms}ms")
    if not result.successful:
        line += f" - {result.response_message}"
    if show_output and result.response_data:
        line += "\n" + result.response_text.rstrip("\n")
    return line


def _run(
    sampler: AbstractSSHSampler,
    iterations: int,
    concurrency: int,
    as_json: bool,
    show_output: bool
) -> None:
    """Run the samples, print the results and exit non-zero on any failure."""

    def print_result(result: SampleResult) -> None:
        typer.echo(_format_result(result, as_json, show_output))

    try:
        results: List[SampleResult] = asyncio.run(
            run_samples(sampler, iterations, concurrency, on_result=print_result))
    except KeyboardInterrupt:
        logger.info("Sampling interrupted by user")
        sys.exit(130)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        sys.exit(2)

    stats = summarize(results)
    if as_json:
        typer.echo(json.dumps({"summary": stats.to_dict()}))
    else:
        summary = stats.to_dict()
        typer.echo(
            f"samples={summary['samples']} failed={summary['failed']} "
            f"min={summary['min_ms']}ms avg={summary['avg_ms']}ms max={summary['max_ms']}ms")

    if stats.failed_samples:
        sys.exit(1)


@cli.command("exec")
def exec_command(
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
    host: Optional[str] = typer.Option(None, "--host", help="SSH server host"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="SSH server port"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Username"),
    password: Optional[str] = typer.Option(None, "--password", help="Password"),
    key_file: Optional[str] = typer.Option(None, "--key-file", help="Private key file path"),
    passphrase: Optional[str] = typer.Option(None, "--passphrase", help="Private key passphrase"),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", help="Connect timeout in milliseconds"
    ),
    command: Optional[str] = typer.Option(None, "--command", help="Command to run"),
    no_return_code: bool = typer.Option(
        False, "--no-return-code", help="Do not use the exit status to decide success"
    ),
    no_tty: bool = typer.Option(False, "--no-tty", help="Do not request a pseudo-terminal"),
    no_stderr: bool = typer.Option(False, "--no-stderr", help="Leave stderr out of the response"),
    iterations: int = typer.Option(1, "--iterations", "-n", help="Number of samples"),
    concurrency: int = typer.Option(1, "--concurrency", help="Samples in flight at once"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON lines"),
    show_output: bool = typer.Option(False, "--show-output", help="Print captured output")
) -> None:
    """Run SSH command samples."""
    config = _load(config_file, host, port, user, password, key_file,
                   passphrase, timeout, log_level)

    if command:
        config.command.command = command
    if no_return_code:
        config.command.use_return_code = False
    if no_tty:
        config.command.use_tty = False
    if no_stderr:
        config.command.print_stderr = False

    setup_logging(config.logging)

    sampler = SSHCommandSampler.from_config(config, SSHClientContext())
    _run(sampler, iterations, concurrency, as_json, show_output)


@cli.command("sftp")
def sftp_command(
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
    host: Optional[str] = typer.Option(None, "--host", help="SSH server host"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="SSH server port"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Username"),
    password: Optional[str] = typer.Option(None, "--password", help="Password"),
    key_file: Optional[str] = typer.Option(None, "--key-file", help="Private key file path"),
    passphrase: Optional[str] = typer.Option(None, "--passphrase", help="Private key passphrase"),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", help="Connect timeout in milliseconds"
    ),
    action: Optional[str] = typer.Option(
        None, "--action", help="get, put, ls, rm, rmdir, mkdir or rename"
    ),
    source: Optional[str] = typer.Option(None, "--source", help="Source path"),
    destination: Optional[str] = typer.Option(None, "--destination", help="Destination path"),
    no_print_file: bool = typer.Option(
        False, "--no-print-file", help="For get, save to the destination instead of the response"
    ),
    iterations: int = typer.Option(1, "--iterations", "-n", help="Number of samples"),
    concurrency: int = typer.Option(1, "--concurrency", help="Samples in flight at once"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON lines"),
    show_output: bool = typer.Option(False, "--show-output", help="Print captured output")
) -> None:
    """Run SSH SFTP samples."""
    config = _load(config_file, host, port, user, password, key_file,
                   passphrase, timeout, log_level)

    if action:
        config.sftp.action = action
    if source is not None:
        config.sftp.source = source
    if destination is not None:
        config.sftp.destination = destination
    if no_print_file:
        config.sftp.print_file = False

    setup_logging(config.logging)

    sampler = SSHSFTPSampler.from_config(config, SSHClientContext())
    _run(sampler, iterations, concurrency, as_json, show_output)


@cli.command()
def init_config(
    output: str = typer.Option(
        "ssh_sampler.yaml", "--output", "-o", help="Output configuration file"
    ),
    format: str = typer.Option(
        "yaml", "--format", "-f", help="Configuration format (yaml/json)"
    )
) -> None:
    """Generate a default configuration file."""

    config = ApplicationConfig()
    config_loader = ConfigLoader()

    try:
        config_loader.save_config(config, output, format)
        typer.echo(f"Default configuration saved to {output}")
    except ValueError as e:
        typer.echo(f"Error saving configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
def validate_config(
    config_file: str = typer.Argument(...,
                                      help="Configuration file to validate")
) -> None:
    """Validate a configuration file."""

    config_loader = ConfigLoader()

    try:
        config = config_loader.load_config(config_file)
        typer.echo(f"Configuration file {config_file} is valid")
        typer.echo(f"Target: {config.connection.username}@{config.connection.host}:{config.connection.port}")
    except (ValueError, FileNotFoundError) as e:
        typer.echo(f"Configuration validation failed: {e}", err=True)
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
