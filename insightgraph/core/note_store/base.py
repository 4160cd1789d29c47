"""
Base interface for note persistence.

Stores notes and their paired links as plain records. The knowledge base
serializes all writes, so implementations need not be safe for concurrent
writers.
"""

from abc import ABC, abstractmethod

from insightgraph.models.link import Link
from insightgraph.models.note import Note


class NoteStore(ABC):
    """Abstract base class for note storage implementations."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the store (create tables/schema)."""
        pass

    # ═══════════════════════════════════════════════════════════
    # NOTE OPERATIONS
    # ═══════════════════════════════════════════════════════════

    @abstractmethod
    async def upsert_note(self, note: Note) -> None:
        """
        Insert a note or update its fields if it already exists.

        Outgoing links on the note object are ignored; use add_links.

        Args:
            note: Note to store
        """
        pass

    @abstractmethod
    async def save_note_with_links(self, note: Note, links: list[Link]) -> None:
        """
        Upsert a note and add links as one unit.

        Either the note and every link are stored, or nothing changes.
        Links may point at the note being saved.

        Args:
            note: Note to store
            links: Links to add (callers pass complete pairs)

        Raises:
            NotFoundError: If a link endpoint does not exist
            NoteStoreError: If a link already exists
        """
        pass

    @abstractmethod
    async def get_note(self, note_id: str) -> Note | None:
        """
        Retrieve a note with its outgoing links.

        Args:
            note_id: Note identifier

        Returns:
            Note or None if not found
        """
        pass

    @abstractmethod
    async def list_notes(self) -> list[Note]:
        """
        Retrieve every note with its outgoing links, in insertion order.

        Returns:
            List of notes
        """
        pass

    @abstractmethod
    async def delete_note(self, note_id: str) -> bool:
        """
        Delete a note and every link that touches it, in both directions.

        Args:
            note_id: Note identifier

        Returns:
            True if the note existed
        """
        pass

    # ═══════════════════════════════════════════════════════════
    # LINK OPERATIONS
    # ═══════════════════════════════════════════════════════════

    @abstractmethod
    async def add_links(self, links: list[Link]) -> None:
        """
        Persist links. Both endpoints of every link must exist.

        Args:
            links: Links to add (callers pass complete pairs)
        """
        pass

    @abstractmethod
    async def has_link(self, source_id: str, target_id: str) -> bool:
        """
        Check whether a link source_id -> target_id exists.

        Args:
            source_id: Source note ID
            target_id: Target note ID

        Returns:
            True if the link exists
        """
        pass

    @abstractmethod
    async def list_links(self) -> list[Link]:
        """
        Retrieve all links.

        Returns:
            List of links
        """
        pass

    # ═══════════════════════════════════════════════════════════
    # UTILITY METHODS
    # ═══════════════════════════════════════════════════════════

    @abstractmethod
    async def count_notes(self) -> int:
        """Count stored notes."""
        pass

    @abstractmethod
    async def count_links(self) -> int:
        """Count stored links (each pair counts as two)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the connection to the store."""
        pass
