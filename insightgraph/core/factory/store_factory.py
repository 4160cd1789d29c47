"""
Factory for creating note store backends.
"""

from insightgraph.config import Config
from insightgraph.core.note_store.base import NoteStore
from insightgraph.core.note_store.memory_store import InMemoryNoteStore
from insightgraph.core.note_store.sqlite_store import SQLiteNoteStore


class NoteStoreFactory:
    """Factory for creating note store backends from configuration."""

    @staticmethod
    def create(config: Config) -> NoteStore:
        """
        Create note store from configuration.

        Args:
            config: Main configuration object

        Returns:
            Note store instance

        Raises:
            ValueError: If backend is not supported
        """
        if config.store.backend == "memory":
            return InMemoryNoteStore()
        elif config.store.backend == "sqlite":
            return SQLiteNoteStore(db_path=config.store.db_path)
        else:
            raise ValueError(f"Unsupported note store backend: {config.store.backend}")
