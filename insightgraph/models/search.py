"""Result models returned by the search and ingestion services."""

from pydantic import BaseModel, Field

from insightgraph.models.link import Link
from insightgraph.models.note import Note


class SearchResult(BaseModel):
    """A note scored against a query."""

    note: Note
    score: float


class SmartSearchResult(SearchResult):
    """Best search match with the most relevant passage."""

    snippet: str


class IngestionResult(BaseModel):
    """Outcome of adding a note to the knowledge base."""

    note: Note
    links_created: list[Link] = Field(default_factory=list)

    @property
    def linked(self) -> bool:
        """Whether auto-linking ran (the note received an embedding)."""
        return self.note.has_embedding()
