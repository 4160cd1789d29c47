"""Link models for the note graph."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LinkKind(str, Enum):
    """How a link came into existence."""

    SEMANTIC = "SEMANTIC"  # Created by auto-linking
    MANUAL = "MANUAL"  # Created by an explicit user action


class Link(BaseModel):
    """
    Directed edge between two notes.

    Links are always created in pairs (A->B and B->A with the same strength),
    so the graph behaves as undirected.
    """

    model_config = ConfigDict(frozen=True)

    source_id: str
    target_id: str
    strength: float = Field(..., ge=0.0, le=1.0)
    reason: str
    kind: LinkKind = LinkKind.SEMANTIC
    created_at: datetime = Field(default_factory=datetime.now)

    def reversed(self) -> "Link":
        """Build the mirrored twin of this link."""
        return Link(
            source_id=self.target_id,
            target_id=self.source_id,
            strength=self.strength,
            reason=self.reason,
            kind=self.kind,
            created_at=self.created_at,
        )
