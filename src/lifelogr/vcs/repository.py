"""Git operations for the journal repository."""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Tuple

import git
from git import Actor, Repo

from lifelogr.errors import (
    DirtyRepositoryError,
    IdentityNotConfiguredError,
    NoTrackingBranchError,
    RepositoryNotFoundError,
)
from lifelogr.models.entry import Credential

logger = logging.getLogger(__name__)

# Files git leaves in the git dir while an operation is half done.
IN_PROGRESS_MARKERS = {
    "MERGE_HEAD": "a merge in progress",
    "rebase-merge": "a rebase in progress",
    "rebase-apply": "a rebase in progress",
    "CHERRY_PICK_HEAD": "a cherry-pick in progress",
    "REVERT_HEAD": "a revert in progress",
}

# Inline credential helper answering "get" from the environment.
_CREDENTIAL_HELPER = (
    '!f() { if [ "$1" = get ]; then '
    'printf "username=%s\\npassword=%s\\n" "$LIFELOGR_GIT_USERNAME" "$LIFELOGR_GIT_PASSWORD"; '
    "fi; }; f"
)


def credential_environment(credential: Credential) -> Dict[str, str]:
    """Build the environment that hands ``credential`` to git for one command.

    The first helper entry is empty so that helpers from the user's git
    config are not consulted.
    """
    return {
        "GIT_TERMINAL_PROMPT": "0",
        "GIT_CONFIG_COUNT": "2",
        "GIT_CONFIG_KEY_0": "credential.helper",
        "GIT_CONFIG_VALUE_0": "",
        "GIT_CONFIG_KEY_1": "credential.helper",
        "GIT_CONFIG_VALUE_1": _CREDENTIAL_HELPER,
        "LIFELOGR_GIT_USERNAME": credential.username,
        "LIFELOGR_GIT_PASSWORD": credential.password,
    }


def _git_date(timestamp: datetime) -> str:
    """Format a datetime in git's internal "<epoch> <offset>" date format."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.astimezone()
    return f"{int(timestamp.timestamp())} {timestamp.strftime('%z')}"


class RepositoryGateway:
    """Wraps the version-control operations of the add workflow."""

    def __init__(self, repo_path: Path) -> None:
        """Open the journal repository.

        Args:
            repo_path: Root of the working copy

        Raises:
            RepositoryNotFoundError: If the path is missing or not a git working copy
        """
        repo_path = Path(repo_path)
        if not repo_path.exists():
            raise RepositoryNotFoundError(repo_path, "Repository path does not exist")

        try:
            self.repo = Repo(repo_path)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise RepositoryNotFoundError(repo_path, "Invalid Git repository") from e

        if self.repo.bare:
            raise RepositoryNotFoundError(repo_path, "Repository has no working tree")

        self.working_dir = Path(self.repo.working_tree_dir)

    def ensure_clean(self) -> None:
        """Check that a new commit can be created on top of HEAD.

        Raises:
            DirtyRepositoryError: If tracked files have staged or unstaged
                changes, or a merge/rebase/cherry-pick/revert is in progress
        """
        git_dir = Path(self.repo.git_dir)
        for marker, reason in IN_PROGRESS_MARKERS.items():
            if (git_dir / marker).exists():
                raise DirtyRepositoryError(reason)

        if self.repo.is_dirty(index=True, working_tree=True, untracked_files=False):
            raise DirtyRepositoryError()

    def stage(self, file_path: Path) -> None:
        """Add a file inside the working copy to the index."""
        relative = Path(file_path).resolve().relative_to(self.working_dir.resolve())
        self.repo.index.add([relative.as_posix()])
        logger.debug(f"Staged {relative.as_posix()}")

    def identity(self) -> Actor:
        """Get the identity commits are made with.

        ``GIT_COMMITTER_NAME``/``GIT_COMMITTER_EMAIL`` win over ``user.name``/
        ``user.email`` from the repository, global and system config.

        Raises:
            IdentityNotConfiguredError: If the name or email is not set anywhere
        """
        with self.repo.config_reader() as reader:
            name = os.environ.get("GIT_COMMITTER_NAME") or str(reader.get_value("user", "name", ""))
            email = os.environ.get("GIT_COMMITTER_EMAIL") or str(reader.get_value("user", "email", ""))

        if not name.strip():
            raise IdentityNotConfiguredError("user.name")
        if not email.strip():
            raise IdentityNotConfiguredError("user.email")
        return Actor(name, email)

    def commit(self, message: str, timestamp: datetime, actor: Optional[Actor] = None) -> str:
        """Commit the index using the repository's configured identity.

        Args:
            message: Commit message
            timestamp: Author and commit date
            actor: Author and committer. Defaults to ``identity()``.

        Returns:
            SHA of the new commit

        Raises:
            IdentityNotConfiguredError: If no actor is given and none is configured
        """
        if actor is None:
            actor = self.identity()
        date = _git_date(timestamp)
        commit = self.repo.index.commit(
            message,
            author=actor,
            committer=actor,
            author_date=date,
            commit_date=date,
        )
        logger.info(f"Created commit {commit.hexsha[:7]}")
        return commit.hexsha

    def current_branch(self) -> Optional[str]:
        """Get the checked out branch name, or None for a detached HEAD."""
        if self.repo.head.is_detached:
            return None
        return self.repo.active_branch.name

    def upstream(self) -> Tuple[str, str]:
        """Get the (remote name, remote branch) the current branch tracks.

        Raises:
            NoTrackingBranchError: If HEAD is detached or the branch has no upstream
        """
        branch_name = self.current_branch()
        if branch_name is None:
            raise NoTrackingBranchError("detached HEAD")

        tracking = self.repo.active_branch.tracking_branch()
        if tracking is None or not tracking.remote_name:
            raise NoTrackingBranchError(branch_name)

        return tracking.remote_name, tracking.remote_head

    def remote_url(self, remote_name: str) -> str:
        """Get the URL configured for a remote."""
        return self.repo.remote(remote_name).url

    def push(self, credential: Credential) -> None:
        """Push the current branch to its upstream.

        Args:
            credential: Username/password offered to git if the remote asks

        Raises:
            NoTrackingBranchError: If the current branch has no upstream
            git.exc.GitCommandError: If git fails to push
        """
        remote_name, remote_branch = self.upstream()
        refspec = f"refs/heads/{self.current_branch()}:refs/heads/{remote_branch}"

        logger.info(f"Pushing {refspec} to {remote_name}")
        with self.repo.git.custom_environment(**credential_environment(credential)):
            self.repo.git.push(remote_name, refspec)

    def close(self) -> None:
        self.repo.close()
