"""Lookup of remote credentials in the OS secret store."""

import logging
import re
from typing import Optional, Tuple
from urllib.parse import urlsplit

import keyring
from keyring.backend import KeyringBackend

from lifelogr.errors import CredentialNotFoundError
from lifelogr.models.entry import Credential

logger = logging.getLogger(__name__)

# user@host:path, as accepted by git for ssh remotes
_SCP_LIKE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?!//)")


def parse_remote_url(remote_url: str) -> Tuple[str, str]:
    """Split a git remote URL into (scheme, host).

    Args:
        remote_url: URL as configured in remote.<name>.url

    Returns:
        Lower-cased scheme and host. Local paths give ("file", "").
    """
    if "://" in remote_url:
        parts = urlsplit(remote_url)
        return parts.scheme.lower(), (parts.hostname or "").lower()

    match = _SCP_LIKE.match(remote_url)
    # A single letter before the colon is a Windows drive, not a host.
    if match and len(match.group("host")) > 1:
        return "ssh", match.group("host").lower()

    return "file", ""


class CredentialResolver:
    """Resolves the stored username/password for a remote."""

    def __init__(
        self,
        namespace: str = "git",
        username: Optional[str] = None,
        backend: Optional[KeyringBackend] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            namespace: Tag prefixed to every lookup key ("git" matches Git Credential Manager)
            username: Account name stored with the secret. Backends that can only
                look up a password by service and account (macOS Keychain) need it.
            backend: Keyring backend to query. Defaults to the platform keyring.
        """
        self.namespace = namespace
        self.username = username
        self.backend = backend

    def credential_key(self, remote_url: str) -> str:
        """Get the secret store key for a remote URL, e.g. ``git:https://github.com``."""
        scheme, host = parse_remote_url(remote_url)
        return f"{self.namespace}:{scheme}://{host}"

    def resolve(self, remote_url: str) -> Credential:
        """Look up credentials for a remote.

        The full credential is asked for first. Backends that only store
        passwords answer the second, password-only lookup.

        Args:
            remote_url: Remote URL to authenticate against

        Returns:
            Credential

        Raises:
            CredentialNotFoundError: If neither lookup finds an entry for the host
        """
        key = self.credential_key(remote_url)
        backend = self.backend if self.backend is not None else keyring.get_keyring()

        stored = backend.get_credential(key, self.username)
        if stored is not None and stored.password is not None:
            logger.debug(f"Found stored credentials for {key}")
            return Credential(username=stored.username or self.username or "", password=stored.password)

        password = backend.get_password(key, self.username)
        if password is None:
            raise CredentialNotFoundError(key)

        logger.debug(f"Found stored password for {key}")
        return Credential(username=self.username or "", password=password)
