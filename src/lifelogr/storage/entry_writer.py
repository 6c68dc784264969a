"""Writes journal entries into month folders."""

import logging
from datetime import datetime
from pathlib import Path

from lifelogr.errors import EntryExistsError
from lifelogr.models.entry import LogEntry

logger = logging.getLogger(__name__)

MONTH_FOLDER_FORMAT = "%Y-%m"
FILE_NAME_FORMAT = "%Y-%m-%d %H-%M-%S.txt"


class EntryWriter:
    """Creates one plain-text file per entry under <base>/<YYYY-MM>/."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = Path(base_path)

    def entry_path(self, timestamp: datetime) -> Path:
        """Get the file path an entry at ``timestamp`` is written to."""
        month_folder = self.base_path / timestamp.strftime(MONTH_FOLDER_FORMAT)
        return month_folder / timestamp.strftime(FILE_NAME_FORMAT)

    def write(self, message: str, timestamp: datetime) -> LogEntry:
        """Write a new entry file.

        Args:
            message: Entry text, written as-is
            timestamp: Entry time; determines folder and file name

        Returns:
            LogEntry for the written file

        Raises:
            EntryExistsError: If a file for this timestamp already exists
        """
        file_path = self.entry_path(timestamp)
        if file_path.exists():
            raise EntryExistsError(file_path)

        file_path.parent.mkdir(parents=True, exist_ok=True)

        # Exclusive create: never overwrite an existing entry.
        try:
            with open(file_path, "x", encoding="utf-8", newline="") as f:
                f.write(message)
        except FileExistsError as e:
            raise EntryExistsError(file_path) from e

        logger.info(f"Wrote entry {file_path}")
        return LogEntry(timestamp=timestamp, message=message, file_path=file_path)
