"""
Knowledge Base - Integrates all components.

Brings together:
- Embedder and Note Store
- Auto-linking on ingestion
- Hybrid search and pathfinding
- Conversational router
"""

import asyncio

from insightgraph.config import Config
from insightgraph.core.embeddings.base import Embedder
from insightgraph.core.factory import EmbedderFactory, NoteStoreFactory
from insightgraph.core.note_store.base import NoteStore
from insightgraph.models.conversation import ConversationSession, RouterResponse
from insightgraph.models.link import Link
from insightgraph.models.note import ItemType, Note
from insightgraph.models.search import IngestionResult, SearchResult, SmartSearchResult
from insightgraph.models.writing import CritiquePoint, GhostFormat, GhostTone
from insightgraph.services.auto_linker import AutoLinker
from insightgraph.services.pathfinder import shortest_path
from insightgraph.services.router.chit_chat import ChitChat
from insightgraph.services.router.intent_router import CompletionCallback, IntentRouter
from insightgraph.services.search_engine import SearchEngine
from insightgraph.services.synthesis import (
    explain_connection,
    expand,
    generate_critique,
    ghost_write,
    synthesize_notes,
)
from insightgraph.utils.exceptions import NotFoundError, ValidationError
from insightgraph.utils.id_generator import generate_note_id
from insightgraph.utils.logger import get_logger

logger = get_logger(__name__)


class KnowledgeBase:
    """
    Personal knowledge base.

    Features:
    - Add notes with automatic semantic linking
    - Manual linking and deletion with link cascade
    - Hybrid search with snippets
    - Shortest link paths between notes
    - Conversational answers over the library or a loaded document
    - Ghost-written drafts, critique and deep dives over notes

    All mutations go through a single write lock, so two ingestions never
    race on the same pair. Reads take a copy of the notes under the same
    lock and never see a half-linked note.
    """

    def __init__(
        self,
        embedder: Embedder,
        note_store: NoteStore,
        config: Config | None = None,
        chit_chat: ChitChat | None = None,
    ):
        """
        Initialize Knowledge Base.

        Args:
            embedder: Embedder for notes, queries and document chunks
            note_store: Persistence for notes and links
            config: Configuration object
            chit_chat: Small-talk replies (inject a seeded one for tests)
        """
        self.embedder = embedder
        self.note_store = note_store
        self.config = config or Config()

        self.auto_linker = AutoLinker(embedder, note_store, self.config.linking)
        self.search_engine = SearchEngine(embedder, self.config.search, self.config.snippet)
        self.router = IntentRouter.default(
            embedder, self.search_engine, self.config, chit_chat=chit_chat
        )

        self._write_lock = asyncio.Lock()

    @classmethod
    def from_config(cls, config: Config) -> "KnowledgeBase":
        """
        Build a knowledge base with the embedder and store named in config.

        Args:
            config: Configuration object

        Returns:
            Knowledge base (call initialize() before use)
        """
        embedder = EmbedderFactory.create(config.embedder)
        note_store = NoteStoreFactory.create(config)
        return cls(embedder, note_store, config)

    async def initialize(self):
        """Initialize the note store."""
        logger.info("Initializing Knowledge Base")
        await self.note_store.initialize()
        logger.info("Knowledge Base ready")

    async def close(self):
        """Close the note store and the embedder."""
        logger.info("Shutting down Knowledge Base")
        await self.note_store.close()
        await self.embedder.close()
        logger.info("Knowledge Base shut down")

    # ═══════════════════════════════════════════════════════════
    # NOTE OPERATIONS
    # ═══════════════════════════════════════════════════════════

    async def add_note(
        self,
        content: str,
        title: str | None = None,
        category: str | None = None,
        item_type: ItemType = ItemType.NOTE,
    ) -> IngestionResult:
        """
        Ingest a note and link it to similar notes.

        The note is stored even when no embedding can be produced; it then
        has no links and is ignored by later auto-linking scans.

        Args:
            content: Note text
            title: Optional short label
            category: Optional grouping tag
            item_type: Capture pipeline the text came from

        Returns:
            Stored note with its links, and the links created
        """
        note = Note(
            id=generate_note_id(),
            item_type=item_type,
            content=content,
            title=title,
            category=category,
        )

        async with self._write_lock:
            existing_notes = await self.note_store.list_notes()
            links = await self.auto_linker.link(note, existing_notes)

        logger.info(
            f"Added note {note.id} ({item_type.value}) with {len(links) // 2} links"
        )
        return IngestionResult(note=note, links_created=links)

    async def link_notes(self, note_id_a: str, note_id_b: str) -> list[Link]:
        """
        Link two notes by hand with full strength.

        Args:
            note_id_a: First note ID
            note_id_b: Second note ID

        Returns:
            Created links, or an empty list if the notes were already linked

        Raises:
            ValidationError: If both IDs are the same
            NotFoundError: If either note does not exist
        """
        if note_id_a == note_id_b:
            raise ValidationError(
                "A note cannot be linked to itself", context={"note_id": note_id_a}
            )

        async with self._write_lock:
            note_a = await self._require_note(note_id_a)
            note_b = await self._require_note(note_id_b)
            return await self.auto_linker.link_manually(note_a, note_b)

    async def delete_note(self, note_id: str) -> bool:
        """
        Delete a note together with every link to or from it.

        Args:
            note_id: Note ID

        Returns:
            True if the note existed
        """
        async with self._write_lock:
            deleted = await self.note_store.delete_note(note_id)

        if deleted:
            logger.info(f"Deleted note {note_id}")
        return deleted

    async def get_note(self, note_id: str) -> Note | None:
        """Retrieve a note by ID."""
        async with self._write_lock:
            return await self.note_store.get_note(note_id)

    async def list_notes(self) -> list[Note]:
        """
        Take a consistent snapshot of all notes.

        Returns:
            Copies of all notes with their links
        """
        async with self._write_lock:
            return await self.note_store.list_notes()

    async def _require_note(self, note_id: str) -> Note:
        note = await self.note_store.get_note(note_id)
        if note is None:
            raise NotFoundError(f"Note not found: {note_id}", context={"note_id": note_id})
        return note

    # ═══════════════════════════════════════════════════════════
    # SEARCH & NAVIGATION
    # ═══════════════════════════════════════════════════════════

    async def search(self, query: str) -> list[SearchResult]:
        """
        Search the library.

        Args:
            query: Free-text query

        Returns:
            Matching notes, highest score first
        """
        notes = await self.list_notes()
        return await self.search_engine.search(query, notes)

    async def smart_search(self, query: str) -> SmartSearchResult | None:
        """
        Find the best matching note and its most relevant sentence.

        Args:
            query: Free-text query

        Returns:
            Best match with snippet, or None
        """
        notes = await self.list_notes()
        return await self.search_engine.smart_search(query, notes)

    async def shortest_path(self, start_id: str, end_id: str) -> list[str]:
        """
        Find the minimum-hop link path between two notes.

        Args:
            start_id: Start note ID
            end_id: End note ID

        Returns:
            Note IDs from start to end inclusive, or empty if unreachable
        """
        notes = await self.list_notes()
        return shortest_path(start_id, end_id, notes)

    async def explain_path(self, start_id: str, end_id: str) -> str | None:
        """
        Describe the link path between two notes.

        Args:
            start_id: Start note ID
            end_id: End note ID

        Returns:
            Explanation, or None if the notes are not connected
        """
        notes = await self.list_notes()
        path = shortest_path(start_id, end_id, notes)
        if not path:
            return None

        by_id = {note.id: note for note in notes}
        return explain_connection([by_id[note_id] for note_id in path])

    async def synthesize(self, note_ids: list[str]) -> str:
        """
        Fuse several notes into a briefing.

        Args:
            note_ids: Notes to fuse, in order

        Returns:
            Briefing text

        Raises:
            NotFoundError: If any note does not exist
        """
        return synthesize_notes(await self._notes_in_order(note_ids, "synthesize"))

    # ═══════════════════════════════════════════════════════════
    # WRITING ASSISTANT
    # ═══════════════════════════════════════════════════════════

    async def _notes_in_order(self, note_ids: list[str], action: str) -> list[Note]:
        notes = await self.list_notes()
        by_id = {note.id: note for note in notes}

        missing = [note_id for note_id in note_ids if note_id not in by_id]
        if missing:
            raise NotFoundError(f"Cannot {action} unknown notes", context={"note_ids": missing})

        return [by_id[note_id] for note_id in note_ids]

    async def ghost_write(
        self,
        note_ids: list[str],
        draft_format: GhostFormat = GhostFormat.SUMMARY,
        tone: GhostTone = GhostTone.FORMAL,
    ) -> str:
        """
        Draft an email, post or summary from several notes.

        Raises:
            NotFoundError: If any note does not exist
        """
        notes = await self._notes_in_order(note_ids, "ghost-write")
        return ghost_write(notes, draft_format, tone)

    async def critique(self, note_id: str) -> list[CritiquePoint]:
        """Question the hedged and absolute claims of a note."""
        note = await self.get_note(note_id)
        if note is None:
            raise NotFoundError(f"Note not found: {note_id}", context={"note_id": note_id})
        return generate_critique(note.content)

    async def expand(self, note_id: str, sentence: str) -> str:
        """Deep dive into a sentence, using its note as context."""
        note = await self.get_note(note_id)
        if note is None:
            raise NotFoundError(f"Note not found: {note_id}", context={"note_id": note_id})
        return expand(sentence, note.content)

    # ═══════════════════════════════════════════════════════════
    # CONVERSATION
    # ═══════════════════════════════════════════════════════════

    def new_session(self) -> ConversationSession:
        """Start a new conversation."""
        return ConversationSession()

    async def ask(
        self,
        utterance: str,
        session: ConversationSession,
        on_complete: CompletionCallback | None = None,
    ) -> RouterResponse:
        """
        Answer an utterance against the current library.

        Args:
            utterance: What the user typed
            session: Conversation state
            on_complete: Called once with (answer, citation_id)

        Returns:
            Final response
        """
        notes = await self.list_notes()
        return await self.router.ask(utterance, notes, session, on_complete)

    async def load_document(
        self, session: ConversationSession, name: str, pages: list[str]
    ) -> RouterResponse:
        """Load a document into the session's focus mode."""
        return await self.router.load_document(session, name, pages)

    def exit_focus_mode(self, session: ConversationSession) -> None:
        """Return the session to library mode."""
        self.router.exit_focus_mode(session)

    # ═══════════════════════════════════════════════════════════
    # STATISTICS
    # ═══════════════════════════════════════════════════════════

    async def get_statistics(self) -> dict[str, int]:
        """
        Get knowledge base statistics.

        Returns:
            Note count and link pair count
        """
        async with self._write_lock:
            notes = await self.note_store.count_notes()
            links = await self.note_store.count_links()
        return {"notes": notes, "link_pairs": links // 2}
