"""Version control and remote authentication."""

from lifelogr.vcs.credentials import CredentialResolver, parse_remote_url
from lifelogr.vcs.repository import RepositoryGateway

__all__ = ["CredentialResolver", "RepositoryGateway", "parse_remote_url"]
