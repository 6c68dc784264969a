"""The add workflow: write an entry, commit it and optionally push."""

import logging
from datetime import datetime
from typing import Optional

from lifelogr.errors import EmptyMessageError, LifeLogrError, RepositoryNotConfiguredError
from lifelogr.models import AddResult, Settings
from lifelogr.storage import EntryWriter
from lifelogr.vcs import CredentialResolver, RepositoryGateway

logger = logging.getLogger(__name__)


class JournalService:
    """Runs the add workflow against the configured repository.

    Steps run in strict order (check clean, write, stage, commit, push) and
    the first failure stops the rest. Nothing is retried or rolled back, so a
    failed push leaves the commit in place.
    """

    def __init__(self, settings: Settings, resolver: Optional[CredentialResolver] = None) -> None:
        self.settings = settings
        self.resolver = resolver or CredentialResolver(
            namespace=settings.credential_namespace,
            username=settings.credential_username,
        )

    def add(self, message: str, push: bool = False, now: Optional[datetime] = None) -> AddResult:
        """Add a journal entry.

        Args:
            message: Entry text
            push: Push after committing (also done when push_by_default is set)
            now: Entry time. Defaults to the current local time; a naive
                value is taken as local time, an aware one is kept as is.

        Returns:
            AddResult. Expected failures are reported in ``error``; I/O and
            git failures propagate.
        """
        result = AddResult()
        try:
            self._run(result, message, push, now)
        except LifeLogrError as e:
            logger.info(f"Add aborted: {e}")
            result.error = e.kind
            result.error_message = str(e)
        return result

    def _run(self, result: AddResult, message: str, push: bool, now: Optional[datetime]) -> None:
        if message is None or not message.strip():
            raise EmptyMessageError()

        repo_path = self.settings.repository_path
        if repo_path is None:
            raise RepositoryNotConfiguredError()

        if now is None:
            now = datetime.now()
        timestamp = (now if now.tzinfo is not None else now.astimezone()).replace(microsecond=0)

        gateway = RepositoryGateway(repo_path)
        try:
            gateway.ensure_clean()
            identity = gateway.identity()

            entry = EntryWriter(gateway.working_dir).write(message, timestamp)
            result.entry = entry

            gateway.stage(entry.file_path)
            result.commit_sha = gateway.commit(message, timestamp, identity)

            if push or self.settings.push_by_default:
                remote_name, _ = gateway.upstream()
                credential = self.resolver.resolve(gateway.remote_url(remote_name))
                gateway.push(credential)
                result.pushed = True
        finally:
            gateway.close()
