"""Error taxonomy for LifeLogr.

Every expected failure of the add workflow is a ``LifeLogrError`` carrying an
``ErrorKind``. Anything else (I/O, keyring or git failures) is left to
propagate unchanged.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of expected failure."""

    EMPTY_MESSAGE = "empty_message"
    ALREADY_EXISTS = "already_exists"
    DIRTY_REPOSITORY = "dirty_repository"
    NO_TRACKING_BRANCH = "no_tracking_branch"
    CREDENTIAL_NOT_FOUND = "credential_not_found"
    REPOSITORY_NOT_CONFIGURED = "repository_not_configured"
    REPOSITORY_NOT_FOUND = "repository_not_found"
    IDENTITY_NOT_CONFIGURED = "identity_not_configured"


class LifeLogrError(Exception):
    """Base class for expected LifeLogr failures."""

    kind: ErrorKind


class EmptyMessageError(LifeLogrError):
    """Raised when an entry message is blank."""

    kind = ErrorKind.EMPTY_MESSAGE

    def __init__(self) -> None:
        super().__init__("Cannot add empty message.")


class EntryExistsError(LifeLogrError):
    """Raised when the entry file for a timestamp already exists."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"Cannot add log that already exists: {path}")


class DirtyRepositoryError(LifeLogrError):
    """Raised when the repository has pending changes."""

    kind = ErrorKind.DIRTY_REPOSITORY

    def __init__(self, reason: str = "pending changes") -> None:
        self.reason = reason
        super().__init__(f"Cannot add log entry whilst repository has {reason}.")


class NoTrackingBranchError(LifeLogrError):
    """Raised when a push is requested but the branch has no upstream."""

    kind = ErrorKind.NO_TRACKING_BRANCH

    def __init__(self, branch: str) -> None:
        self.branch = branch
        super().__init__(f"The current branch ({branch}) is not tracking a remote branch")


class CredentialNotFoundError(LifeLogrError):
    """Raised when the secret store has no entry for a remote host."""

    kind = ErrorKind.CREDENTIAL_NOT_FOUND

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No stored credentials found for {key}")


class RepositoryNotConfiguredError(LifeLogrError):
    """Raised when no repository path has been configured."""

    kind = ErrorKind.REPOSITORY_NOT_CONFIGURED

    def __init__(self) -> None:
        super().__init__(
            "Repository path is not configured. Run: lifelogr config --path <dir>"
        )


class RepositoryNotFoundError(LifeLogrError):
    """Raised when the configured path is not a git working copy."""

    kind = ErrorKind.REPOSITORY_NOT_FOUND

    def __init__(self, path, reason: str) -> None:
        self.path = path
        super().__init__(f"{reason}: {path}")


class IdentityNotConfiguredError(LifeLogrError):
    """Raised when git has no user.name/user.email to commit with."""

    kind = ErrorKind.IDENTITY_NOT_CONFIGURED

    def __init__(self, missing: str) -> None:
        self.missing = missing
        super().__init__(
            f"Git identity is not configured ({missing} unset). "
            f'Run: git config user.name "Your Name" && git config user.email you@example.com'
        )
