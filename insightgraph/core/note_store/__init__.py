"""
Note store implementations for InsightGraph.

Available backends:
- InMemoryNoteStore: Process-local, for tests and ephemeral sessions
- SQLiteNoteStore: Local file persistence via aiosqlite
"""

from insightgraph.core.note_store.base import NoteStore
from insightgraph.core.note_store.memory_store import InMemoryNoteStore
from insightgraph.core.note_store.sqlite_store import SQLiteNoteStore

__all__ = [
    "NoteStore",
    "InMemoryNoteStore",
    "SQLiteNoteStore",
]
