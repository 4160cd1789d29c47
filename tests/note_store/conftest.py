"""
Shared test fixtures for note store tests.

Every test using `note_store` runs against both backends.
"""

import pytest

from insightgraph.core.note_store.memory_store import InMemoryNoteStore
from insightgraph.core.note_store.sqlite_store import SQLiteNoteStore
from insightgraph.models.link import Link, LinkKind
from insightgraph.models.note import ItemType, Note


@pytest.fixture(params=["memory", "sqlite"])
async def note_store(request, tmp_path):
    """Initialized note store, once per backend."""
    if request.param == "memory":
        store = InMemoryNoteStore()
    else:
        store = SQLiteNoteStore(db_path=str(tmp_path / "notes.db"))

    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def sample_notes() -> list[Note]:
    """Three notes, the first with an embedding."""
    return [
        Note(
            id="note_a",
            content="The Phoenix budget was approved.",
            title="Phoenix",
            category="work",
            embedding=[0.1, 0.2, 0.3],
        ),
        Note(id="note_b", content="Phoenix kickoff in March.", item_type=ItemType.AUDIO),
        Note(id="note_c", content="", item_type=ItemType.IMAGE),
    ]


@pytest.fixture
def link_pair() -> list[Link]:
    """Bidirectional pair between note_a and note_b."""
    forward = Link(
        source_id="note_a",
        target_id="note_b",
        strength=0.8,
        reason="Contextual Match (80%)",
        kind=LinkKind.SEMANTIC,
    )
    return [forward, forward.reversed()]
