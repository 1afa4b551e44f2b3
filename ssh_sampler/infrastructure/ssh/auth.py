"""
Credential supply for SSH authentication.

``Credentials`` answers password, passphrase and keyboard-interactive queries
from configuration alone. ``CredentialResponder`` plugs it into asyncssh's
client callbacks so the library never needs a human at the keyboard.

Host keys are accepted unconditionally.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

import asyncssh

from ...core.domain.models import ConnectionParameters
from ...core.interfaces.ssh import ICredentialProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials(ICredentialProvider):
    """Only the fields authentication needs, copied from the configuration."""

    password_value: str = ""
    passphrase_value: str = ""
    has_key_file: bool = False

    @classmethod
    def from_parameters(cls, params: ConnectionParameters) -> "Credentials":
        return cls(
            password_value=params.password or "",
            passphrase_value=params.passphrase or "",
            has_key_file=params.has_key_file
        )

    def password(self) -> Optional[str]:
        if len(self.password_value) == 0:
            return None
        return self.password_value

    def passphrase(self) -> Optional[str]:
        # An empty passphrase is valid for an unencrypted key.
        if len(self.passphrase_value) == 0 and not self.has_key_file:
            return None
        return self.passphrase_value

    def keyboard_interactive(
        self,
        prompts: Sequence[Tuple[str, bool]]
    ) -> Optional[List[str]]:
        if len(prompts) != 1:
            return None
        _, echo = prompts[0]
        password = self.password()
        if echo or password is None:
            return None
        return [password]

    def prompt_yes_no(self, message: str) -> bool:
        return True

    def show_message(self, message: str) -> None:
        logger.debug(f"SSH server message: {message}")


class CredentialResponder(asyncssh.SSHClient):
    """
    asyncssh client callbacks backed by a credential provider.

    asyncssh builds one responder per connection through ``client_factory``.
    Each method is offered at most once per connection so a rejected
    password is not replayed until the server gives up.
    """

    def __init__(self, credentials: ICredentialProvider):
        self._credentials = credentials
        self._password_offered = False
        self._kbdint_offered = False

    @property
    def credentials(self) -> ICredentialProvider:
        return self._credentials

    def connection_made(self, conn: Any) -> None:
        logger.debug("SSH transport established")

    def connection_lost(self, exc: Optional[Exception]) -> None:
        if exc:
            logger.debug(f"SSH transport lost: {exc}")

    def validate_host_public_key(self, host: str, addr: str, port: int, key: Any) -> bool:
        return self._credentials.prompt_yes_no(
            f"Accept host key for {host} ({addr}:{port})?")

    def auth_banner_received(self, msg: str, lang: str) -> None:
        self._credentials.show_message(msg)

    def password_auth_requested(self) -> Optional[str]:
        if self._password_offered:
            return None
        self._password_offered = True
        return self._credentials.password()

    def kbdint_auth_requested(self) -> Optional[str]:
        if self._kbdint_offered or self._credentials.password() is None:
            return None
        self._kbdint_offered = True
        # Empty submethods string lets the server choose.
        return ""

    def kbdint_challenge_received(
        self,
        name: str,
        instructions: str,
        lang: str,
        prompts: Sequence[Tuple[str, bool]]
    ) -> Optional[List[str]]:
        if instructions:
            self._credentials.show_message(instructions)
        return self._credentials.keyboard_interactive(prompts)

    def auth_completed(self) -> None:
        logger.debug("SSH authentication completed")
