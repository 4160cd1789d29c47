"""
Data models for InsightGraph.

Core models:
- Note, ItemType: The atomic knowledge unit and its capture tag
- Link, LinkKind: Paired graph edges between notes
- SearchResult, SmartSearchResult, IngestionResult: Service results
- ConversationSession, ChatTurn, DocumentChunk: Ephemeral router state
- RouterResponse, PendingAction, IntentLane, ActionType: Router output
- GhostFormat, GhostTone, CritiquePoint, CritiqueType: Writing assistant
"""

from insightgraph.models.conversation import (
    ActionType,
    ChatRole,
    ChatTurn,
    ConversationSession,
    DocumentChunk,
    IntentLane,
    PendingAction,
    RouterResponse,
)
from insightgraph.models.link import Link, LinkKind
from insightgraph.models.note import ItemType, Note
from insightgraph.models.search import IngestionResult, SearchResult, SmartSearchResult
from insightgraph.models.writing import CritiquePoint, CritiqueType, GhostFormat, GhostTone

__all__ = [
    # Graph models
    "Note",
    "ItemType",
    "Link",
    "LinkKind",
    # Service results
    "SearchResult",
    "SmartSearchResult",
    "IngestionResult",
    # Conversation models
    "ConversationSession",
    "ChatTurn",
    "ChatRole",
    "DocumentChunk",
    "RouterResponse",
    "PendingAction",
    "IntentLane",
    "ActionType",
    # Writing assistant
    "GhostFormat",
    "GhostTone",
    "CritiquePoint",
    "CritiqueType",
]
