"""
SQLite note store implementation using aiosqlite.

Embeddings are stored as JSON text; links reference notes with
ON DELETE CASCADE so deleting a note removes both directions of its links.
"""

import json
from datetime import datetime
from pathlib import Path

import aiosqlite

from insightgraph.core.note_store.base import NoteStore
from insightgraph.models.link import Link, LinkKind
from insightgraph.models.note import ItemType, Note
from insightgraph.utils.exceptions import InsightGraphError, NoteStoreError, NotFoundError
from insightgraph.utils.logger import get_logger

logger = get_logger(__name__)


class SQLiteNoteStore(NoteStore):
    """
    SQLite-based store for notes and links.

    Features:
    - Fast local storage
    - JSON-encoded embeddings
    - Cascading link deletion
    """

    def __init__(self, db_path: str = "data/insight_graph.db"):
        """
        Initialize SQLite note store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self.connection: aiosqlite.Connection | None = None

        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async def connect(self) -> None:
        """Establish connection to SQLite."""
        if self.connection is None:
            try:
                self.connection = await aiosqlite.connect(self.db_path)
                await self.connection.execute("PRAGMA foreign_keys = ON")
                await self.connection.execute("PRAGMA journal_mode = WAL")
                await self.connection.commit()
            except aiosqlite.Error as e:
                raise NoteStoreError(
                    f"Failed to open note store: {e}", context={"db_path": self.db_path}
                ) from e

    async def initialize(self) -> None:
        """Initialize database schema."""
        await self.connect()

        await self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS notes (
                id TEXT PRIMARY KEY,
                item_type TEXT NOT NULL,
                content TEXT NOT NULL,
                title TEXT,
                category TEXT,
                embedding TEXT,
                created_at TEXT NOT NULL
            )
        """
        )

        await self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS links (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                source_id TEXT NOT NULL,
                target_id TEXT NOT NULL,
                strength REAL NOT NULL,
                reason TEXT NOT NULL,
                kind TEXT NOT NULL,
                created_at TEXT NOT NULL,
                UNIQUE (source_id, target_id),
                FOREIGN KEY (source_id) REFERENCES notes(id) ON DELETE CASCADE,
                FOREIGN KEY (target_id) REFERENCES notes(id) ON DELETE CASCADE
            )
        """
        )

        await self.connection.execute(
            "CREATE INDEX IF NOT EXISTS idx_links_source ON links(source_id)"
        )
        await self.connection.execute(
            "CREATE INDEX IF NOT EXISTS idx_links_target ON links(target_id)"
        )

        await self.connection.commit()
        logger.debug(f"Note store ready at {self.db_path}")

    # ═══════════════════════════════════════════════════════════
    # NOTE OPERATIONS
    # ═══════════════════════════════════════════════════════════

    async def upsert_note(self, note: Note) -> None:
        """Insert or update a note. Existing links are kept."""
        await self.connect()

        try:
            await self._write_note(note)
            await self.connection.commit()
        except aiosqlite.Error as e:
            await self.connection.rollback()
            raise NoteStoreError(f"Failed to save note: {e}", context={"note_id": note.id}) from e

    async def save_note_with_links(self, note: Note, links: list[Link]) -> None:
        """Upsert a note and insert its links in one transaction."""
        await self.connect()

        try:
            await self._write_note(note)
            if links:
                await self._write_links(links)
            await self.connection.commit()
        except aiosqlite.IntegrityError as e:
            await self.connection.rollback()
            raise self._link_integrity_error(e) from e
        except aiosqlite.Error as e:
            await self.connection.rollback()
            raise NoteStoreError(f"Failed to save note: {e}", context={"note_id": note.id}) from e

    async def get_note(self, note_id: str) -> Note | None:
        """Retrieve a note by ID with its outgoing links."""
        await self.connect()

        cursor = await self.connection.execute(
            "SELECT id, item_type, content, title, category, embedding, created_at "
            "FROM notes WHERE id = ?",
            (note_id,),
        )
        row = await cursor.fetchone()
        if not row:
            return None

        note = self._row_to_note(row)

        cursor = await self.connection.execute(
            "SELECT source_id, target_id, strength, reason, kind, created_at "
            "FROM links WHERE source_id = ? ORDER BY id",
            (note_id,),
        )
        note.outgoing_links = [self._row_to_link(link_row) for link_row in await cursor.fetchall()]
        return note

    async def list_notes(self) -> list[Note]:
        """Retrieve all notes with their links, in insertion order."""
        await self.connect()

        cursor = await self.connection.execute(
            "SELECT id, item_type, content, title, category, embedding, created_at "
            "FROM notes ORDER BY rowid"
        )
        notes = {row[0]: self._row_to_note(row) for row in await cursor.fetchall()}

        for link in await self.list_links():
            source = notes.get(link.source_id)
            if source is not None:
                source.outgoing_links.append(link)

        return list(notes.values())

    async def delete_note(self, note_id: str) -> bool:
        """Delete a note; links cascade through foreign keys."""
        await self.connect()

        try:
            cursor = await self.connection.execute("DELETE FROM notes WHERE id = ?", (note_id,))
            await self.connection.commit()
        except aiosqlite.Error as e:
            raise NoteStoreError(f"Failed to delete note: {e}", context={"note_id": note_id}) from e

        return cursor.rowcount > 0

    # ═══════════════════════════════════════════════════════════
    # LINK OPERATIONS
    # ═══════════════════════════════════════════════════════════

    async def add_links(self, links: list[Link]) -> None:
        """Insert links in a single transaction."""
        await self.connect()

        try:
            await self._write_links(links)
            await self.connection.commit()
        except aiosqlite.IntegrityError as e:
            await self.connection.rollback()
            raise self._link_integrity_error(e) from e
        except aiosqlite.Error as e:
            await self.connection.rollback()
            raise NoteStoreError(f"Failed to save links: {e}") from e

    async def has_link(self, source_id: str, target_id: str) -> bool:
        """Check whether a link exists."""
        await self.connect()

        cursor = await self.connection.execute(
            "SELECT 1 FROM links WHERE source_id = ? AND target_id = ? LIMIT 1",
            (source_id, target_id),
        )
        return await cursor.fetchone() is not None

    async def list_links(self) -> list[Link]:
        """Retrieve all links in insertion order."""
        await self.connect()

        cursor = await self.connection.execute(
            "SELECT source_id, target_id, strength, reason, kind, created_at FROM links ORDER BY id"
        )
        return [self._row_to_link(row) for row in await cursor.fetchall()]

    # ═══════════════════════════════════════════════════════════
    # UTILITY METHODS
    # ═══════════════════════════════════════════════════════════

    async def count_notes(self) -> int:
        """Count notes."""
        await self.connect()

        cursor = await self.connection.execute("SELECT COUNT(*) FROM notes")
        row = await cursor.fetchone()
        return row[0] if row else 0

    async def count_links(self) -> int:
        """Count links."""
        await self.connect()

        cursor = await self.connection.execute("SELECT COUNT(*) FROM links")
        row = await cursor.fetchone()
        return row[0] if row else 0

    async def close(self) -> None:
        """Close the connection."""
        if self.connection is not None:
            await self.connection.close()
            self.connection = None

    # ═══════════════════════════════════════════════════════════
    # HELPER METHODS
    # ═══════════════════════════════════════════════════════════

    async def _write_note(self, note: Note) -> None:
        """Upsert a note row without committing."""
        embedding_json = json.dumps(note.embedding) if note.embedding else None

        await self.connection.execute(
            """
            INSERT INTO notes (id, item_type, content, title, category, embedding, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                item_type = excluded.item_type,
                content = excluded.content,
                title = excluded.title,
                category = excluded.category,
                embedding = excluded.embedding
            """,
            (
                note.id,
                note.item_type.value,
                note.content,
                note.title,
                note.category,
                embedding_json,
                note.created_at.isoformat(),
            ),
        )

    async def _write_links(self, links: list[Link]) -> None:
        """Insert link rows without committing."""
        await self.connection.executemany(
            """
            INSERT INTO links (source_id, target_id, strength, reason, kind, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    link.source_id,
                    link.target_id,
                    link.strength,
                    link.reason,
                    link.kind.value,
                    link.created_at.isoformat(),
                )
                for link in links
            ],
        )

    def _link_integrity_error(self, error: aiosqlite.IntegrityError) -> InsightGraphError:
        """Map a constraint violation to the store's exceptions."""
        if "FOREIGN KEY" in str(error):
            return NotFoundError(f"Cannot link unknown note: {error}")
        if "UNIQUE" in str(error):
            return NoteStoreError(f"Duplicate link: {error}")
        return NoteStoreError(f"Constraint violated: {error}")

    def _row_to_note(self, row: tuple) -> Note:
        """Convert database row to Note object."""
        return Note(
            id=row[0],
            item_type=ItemType(row[1]),
            content=row[2],
            title=row[3],
            category=row[4],
            embedding=json.loads(row[5]) if row[5] else None,
            created_at=datetime.fromisoformat(row[6]),
        )

    def _row_to_link(self, row: tuple) -> Link:
        """Convert database row to Link object."""
        return Link(
            source_id=row[0],
            target_id=row[1],
            strength=row[2],
            reason=row[3],
            kind=LinkKind(row[4]),
            created_at=datetime.fromisoformat(row[5]),
        )
