"""Automatic semantic linking of newly ingested notes."""

from insightgraph.config import LinkingConfig
from insightgraph.core.embeddings.base import Embedder
from insightgraph.core.note_store.base import NoteStore
from insightgraph.core.similarity import batch_cosine_similarity
from insightgraph.models.link import Link, LinkKind
from insightgraph.models.note import Note
from insightgraph.utils.exceptions import ValidationError
from insightgraph.utils.logger import get_logger

logger = get_logger(__name__)

MANUAL_LINK_REASON = "Manual Link"


def link_reason(score: float) -> str:
    """Human-readable reason for a semantic link."""
    return f"Contextual Match ({int(score * 100)}%)"


def make_link_pair(
    note_a: Note, note_b: Note, strength: float, reason: str, kind: LinkKind
) -> tuple[Link, Link]:
    """
    Build both directions of a link and attach them to the notes.

    Args:
        note_a: First note
        note_b: Second note
        strength: Link strength, clamped into [0, 1]
        reason: Human-readable reason
        kind: How the link was created

    Returns:
        (a -> b, b -> a)
    """
    if note_a.id == note_b.id:
        raise ValidationError(
            "A note cannot be linked to itself", context={"note_id": note_a.id}
        )

    forward = Link(
        source_id=note_a.id,
        target_id=note_b.id,
        strength=max(0.0, min(1.0, strength)),
        reason=reason,
        kind=kind,
    )
    backward = forward.reversed()

    note_a.outgoing_links.append(forward)
    note_b.outgoing_links.append(backward)
    return forward, backward


def pair_exists(note_a: Note, note_b: Note) -> bool:
    """Check whether two notes are already linked in either direction."""
    return note_a.is_linked_to(note_b.id) or note_b.is_linked_to(note_a.id)


class AutoLinker:
    """
    Links a new note to every existing note whose embedding is similar enough.

    Each ingestion is a single O(N) scan over the corpus. Callers must
    serialize calls (the knowledge base holds a write lock) so that two
    ingestions never race on the same pair.
    """

    def __init__(
        self,
        embedder: Embedder,
        note_store: NoteStore,
        config: LinkingConfig | None = None,
    ):
        """
        Initialize auto-linker.

        Args:
            embedder: Embedder used for new notes
            note_store: Store receiving the note and its links
            config: Linking thresholds
        """
        self.embedder = embedder
        self.note_store = note_store
        self.config = config or LinkingConfig()

    @property
    def similarity_threshold(self) -> float:
        return self.config.similarity_threshold

    async def link(self, new_note: Note, existing_notes: list[Note]) -> list[Link]:
        """
        Embed a new note, link it to similar notes and persist both.

        The note is always saved. If no embedding is available it is saved
        without one and no links are created. Otherwise the note and its links
        are saved together, so a failure leaves neither behind.

        Args:
            new_note: Note being ingested (mutated in place)
            existing_notes: Current corpus (mutated in place with back-links)

        Returns:
            Created links, both directions of every pair
        """
        embedding = await self.embedder.try_embed(new_note.content)
        if embedding is None:
            logger.bind(note_id=new_note.id).info(
                f"Embedding unavailable for {new_note.id}, skipping auto-linking"
            )
            await self.note_store.upsert_note(new_note)
            return []

        new_note.embedding = embedding
        links = self.find_links(new_note, existing_notes)

        await self.note_store.save_note_with_links(new_note, links)

        logger.bind(note_id=new_note.id).info(
            f"Auto-linked {new_note.id} to {len(links) // 2} of {len(existing_notes)} notes: "
            f"{new_note.content_preview!r}"
        )
        return links

    def find_links(self, new_note: Note, existing_notes: list[Note]) -> list[Link]:
        """
        Create link pairs between an embedded note and similar notes.

        Notes without embeddings, the note itself, and already linked notes
        are skipped. Nothing is persisted.

        Args:
            new_note: Note with an embedding
            existing_notes: Candidate notes

        Returns:
            Created links, both directions of every pair
        """
        candidates = [
            note for note in existing_notes if note.id != new_note.id and note.has_embedding()
        ]
        if not candidates or not new_note.has_embedding():
            return []

        scores = batch_cosine_similarity(
            new_note.embedding, [note.embedding for note in candidates]
        )

        links: list[Link] = []
        for candidate, score in zip(candidates, scores):
            if score <= self.similarity_threshold:
                continue
            if pair_exists(new_note, candidate):
                continue

            links.extend(
                make_link_pair(new_note, candidate, score, link_reason(score), LinkKind.SEMANTIC)
            )

        return links

    async def link_manually(self, note_a: Note, note_b: Note) -> list[Link]:
        """
        Create a full-strength manual link pair between two notes.

        Does nothing if the notes are already linked, either on the given
        objects or in the store.

        Args:
            note_a: First note (mutated in place)
            note_b: Second note (mutated in place)

        Returns:
            Created links, or an empty list if the pair already existed

        Raises:
            ValidationError: If both notes are the same
        """
        if note_a.id == note_b.id:
            raise ValidationError(
                "A note cannot be linked to itself", context={"note_id": note_a.id}
            )
        if pair_exists(note_a, note_b) or await self._stored_pair_exists(note_a.id, note_b.id):
            return []

        links = list(
            make_link_pair(
                note_a,
                note_b,
                self.config.manual_link_strength,
                MANUAL_LINK_REASON,
                LinkKind.MANUAL,
            )
        )
        await self.note_store.add_links(links)

        logger.info(f"Manually linked {note_a.id} and {note_b.id}")
        return links

    async def _stored_pair_exists(self, id_a: str, id_b: str) -> bool:
        return await self.note_store.has_link(id_a, id_b) or await self.note_store.has_link(
            id_b, id_a
        )
