"""Shared fixtures for InsightGraph tests.

The fake embedder returns fixed vectors for known texts and fails for anything
else, so tests control similarity scores exactly and can exercise the
"embedding unavailable" paths.
"""

import random

import pytest

from insightgraph.core.embeddings.base import Embedder
from insightgraph.core.note_store.memory_store import InMemoryNoteStore
from insightgraph.models.link import Link, LinkKind
from insightgraph.models.note import Note
from insightgraph.services.router.chit_chat import ChitChat
from insightgraph.utils.exceptions import EmbeddingError, ValidationError


class FakeEmbedder(Embedder):
    """Embedder returning preset vectors keyed by exact text."""

    def __init__(self, vectors: dict[str, list[float]] | None = None):
        self.vectors = dict(vectors or {})
        self.calls: list[str] = []
        self.closed = False

    async def embed(self, text: str, **kwargs) -> list[float]:
        self.calls.append(text)
        if not text or not text.strip():
            raise ValidationError("Text cannot be empty")
        if text not in self.vectors:
            raise EmbeddingError(f"No vector for text: {text[:30]}")
        return list(self.vectors[text])

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    """Fake embedder; tests register vectors in `fake_embedder.vectors`."""
    return FakeEmbedder()


@pytest.fixture
def make_note():
    """Factory for notes with fixed IDs."""

    def _make_note(
        note_id: str,
        content: str = "",
        title: str | None = None,
        embedding: list[float] | None = None,
    ) -> Note:
        return Note(id=note_id, content=content, title=title, embedding=embedding)

    return _make_note


@pytest.fixture
def connect():
    """Attach a bidirectional link pair to two notes in place."""

    def _connect(note_a: Note, note_b: Note, strength: float = 0.9) -> None:
        forward = Link(
            source_id=note_a.id,
            target_id=note_b.id,
            strength=strength,
            reason="Contextual Match (90%)",
            kind=LinkKind.SEMANTIC,
        )
        note_a.outgoing_links.append(forward)
        note_b.outgoing_links.append(forward.reversed())

    return _connect


@pytest.fixture
async def memory_store():
    """Initialized in-memory note store."""
    store = InMemoryNoteStore()
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def seeded_chit_chat() -> ChitChat:
    """Small talk with a deterministic joke picker."""
    return ChitChat(rng=random.Random(42))
