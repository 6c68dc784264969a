"""Data models for LifeLogr."""

from lifelogr.models.config import Settings, parse_flag
from lifelogr.models.entry import AddResult, Credential, LogEntry

__all__ = [
    "Settings",
    "parse_flag",
    "LogEntry",
    "Credential",
    "AddResult",
]
