"""In-memory note store."""

from insightgraph.core.note_store.base import NoteStore
from insightgraph.models.link import Link
from insightgraph.models.note import Note
from insightgraph.utils.exceptions import NoteStoreError, NotFoundError


class InMemoryNoteStore(NoteStore):
    """
    Dictionary-backed note store.

    Notes are copied on the way in and on the way out, so callers never share
    mutable state with the store.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._notes: dict[str, Note] = {}

    async def initialize(self) -> None:
        """Nothing to set up."""
        pass

    async def upsert_note(self, note: Note) -> None:
        """Insert or update a note, keeping its existing links."""
        existing = self._notes.get(note.id)
        links = list(existing.outgoing_links) if existing else []
        self._notes[note.id] = note.model_copy(deep=True, update={"outgoing_links": links})

    async def save_note_with_links(self, note: Note, links: list[Link]) -> None:
        """Validate everything first, then upsert the note and attach the links."""
        self._check_links(links, known_ids=set(self._notes) | {note.id})

        await self.upsert_note(note)
        for link in links:
            self._notes[link.source_id].outgoing_links.append(link)

    async def get_note(self, note_id: str) -> Note | None:
        """Retrieve a note by ID."""
        note = self._notes.get(note_id)
        return note.model_copy(deep=True) if note else None

    async def list_notes(self) -> list[Note]:
        """Retrieve all notes in insertion order."""
        return [note.model_copy(deep=True) for note in self._notes.values()]

    async def delete_note(self, note_id: str) -> bool:
        """Delete a note and cascade its links."""
        if note_id not in self._notes:
            return False

        del self._notes[note_id]
        for note in self._notes.values():
            if note.is_linked_to(note_id):
                note.outgoing_links = [
                    link for link in note.outgoing_links if link.target_id != note_id
                ]
        return True

    async def add_links(self, links: list[Link]) -> None:
        """Attach links to their source notes."""
        self._check_links(links, known_ids=set(self._notes))

        for link in links:
            self._notes[link.source_id].outgoing_links.append(link)

    def _check_links(self, links: list[Link], known_ids: set[str]) -> None:
        seen = set()
        for link in links:
            context = {"source_id": link.source_id, "target_id": link.target_id}
            if link.source_id not in known_ids or link.target_id not in known_ids:
                raise NotFoundError("Cannot link unknown note", context=context)

            source = self._notes.get(link.source_id)
            pair = (link.source_id, link.target_id)
            if pair in seen or (source is not None and source.is_linked_to(link.target_id)):
                raise NoteStoreError("Duplicate link", context=context)
            seen.add(pair)

    async def has_link(self, source_id: str, target_id: str) -> bool:
        """Check whether a link exists."""
        note = self._notes.get(source_id)
        return note is not None and note.is_linked_to(target_id)

    async def list_links(self) -> list[Link]:
        """Retrieve all links."""
        return [link for note in self._notes.values() for link in note.outgoing_links]

    async def count_notes(self) -> int:
        """Count notes."""
        return len(self._notes)

    async def count_links(self) -> int:
        """Count links."""
        return sum(len(note.outgoing_links) for note in self._notes.values())

    async def close(self) -> None:
        """Nothing to release."""
        pass
