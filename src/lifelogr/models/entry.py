"""Data models for journal entries and the add workflow."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from lifelogr.errors import ErrorKind


class LogEntry(BaseModel):
    """A single journal entry persisted as one file."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="Entry time (second resolution)")
    message: str = Field(..., description="Raw entry text")
    file_path: Path = Field(..., description="Absolute path of the entry file")


class Credential(BaseModel):
    """Username/password pair read from the OS secret store."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: str = Field(..., repr=False)


class AddResult(BaseModel):
    """Outcome of the add workflow.

    ``entry`` and ``commit_sha`` are filled in as soon as those steps complete,
    so a failed push still reports the commit that was created.
    """

    entry: Optional[LogEntry] = None
    commit_sha: Optional[str] = None
    pushed: bool = False
    error: Optional[ErrorKind] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
