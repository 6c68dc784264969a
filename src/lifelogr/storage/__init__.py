"""Local storage: user settings and entry files."""

from lifelogr.storage.entry_writer import EntryWriter
from lifelogr.storage.settings_store import SettingsStore

__all__ = ["EntryWriter", "SettingsStore"]
