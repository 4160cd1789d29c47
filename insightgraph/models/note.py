"""
Note model, the atomic knowledge unit.

Notes arrive from capture pipelines as plain text tagged with the kind of item
they were captured from. The auto-linking engine fills in the embedding and
the outgoing links.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from insightgraph.models.link import Link


class ItemType(str, Enum):
    """Kind of captured item a note's text came from."""

    NOTE = "note"  # Typed text
    AUDIO = "audio"  # Speech-to-text transcript
    IMAGE = "image"  # OCR output
    PDF = "pdf"  # Extracted PDF text


class Note(BaseModel):
    """
    A single piece of knowledge in the graph.

    Storage Architecture:
    - Note Store: full record including embedding
    - Links: stored as outgoing edges on the source note
    """

    # Core identity
    id: str = Field(..., description="Unique note ID (note_xxx)")
    item_type: ItemType = Field(default=ItemType.NOTE, description="Capture pipeline tag")

    # Content
    content: str = Field(default="", description="Full text (may be empty for media notes)")
    title: str | None = Field(default=None, description="Optional short label")
    category: str | None = Field(default=None, description="Optional free-text grouping tag")
    embedding: list[float] | None = Field(
        default=None, description="Vector embedding, absent until auto-linking processed the note"
    )

    # Graph
    outgoing_links: list[Link] = Field(default_factory=list, description="Outgoing edges")

    created_at: datetime = Field(default_factory=datetime.now, description="Creation timestamp")

    class Config:
        """Pydantic configuration."""

        json_encoders = {datetime: lambda v: v.isoformat()}

    @property
    def display_title(self) -> str:
        """Title for display, falling back to a generic label."""
        return self.title or "Note"

    @property
    def content_preview(self) -> str:
        """
        Get a preview of content for display and logs.

        Returns:
            First 200 characters of content
        """
        return self.content[:200] if len(self.content) > 200 else self.content

    def has_embedding(self) -> bool:
        """Check whether the note has been embedded."""
        return bool(self.embedding)

    def link_targets(self) -> list[str]:
        """IDs of notes this note links to."""
        return [link.target_id for link in self.outgoing_links]

    def is_linked_to(self, note_id: str) -> bool:
        """Check whether an outgoing link to note_id exists."""
        return any(link.target_id == note_id for link in self.outgoing_links)
