"""
Conversation models for the intent router.

Everything here is ephemeral: a session lives as long as a conversation view
and is never persisted.
"""

from enum import Enum

from pydantic import BaseModel, Field

from insightgraph.utils.id_generator import generate_session_id


class ChatRole(str, Enum):
    """Speaker of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    """One message in a conversation."""

    role: ChatRole
    text: str
    citation_id: str | None = Field(default=None, description="Note the answer came from")


class DocumentChunk(BaseModel):
    """Paragraph-level slice of a loaded document."""

    text: str
    page: int = Field(..., ge=1, description="1-based source page number")
    embedding: list[float] | None = None


class IntentLane(str, Enum):
    """Handling lane chosen by the router."""

    SYSTEM_COMMAND = "system_command"
    ARITHMETIC = "arithmetic"
    SELF_HELP = "self_help"
    CHIT_CHAT = "chit_chat"
    DOCUMENT = "document"
    LIBRARY = "library"


class ActionType(str, Enum):
    """Structured actions the UI should carry out."""

    CREATE_NOTE = "create_note"
    EXIT_FOCUS = "exit_focus"


class PendingAction(BaseModel):
    """Action requested by a system command."""

    type: ActionType
    title: str | None = None


class RouterResponse(BaseModel):
    """Final answer produced by the router for one utterance."""

    answer: str
    lane: IntentLane
    citation_id: str | None = None
    action: PendingAction | None = None


class ConversationSession(BaseModel):
    """
    Per-conversation router state.

    Holds the short-term memory used for pronoun resolution and the focus
    mode document. Generation counters let a newer query or document load win
    over a stale one that finishes later.
    """

    id: str = Field(default_factory=generate_session_id)

    # Short-term memory
    short_term_memory: str = ""
    last_context_topic: str | None = None

    # Focus mode
    is_focus_mode: bool = False
    focus_document_name: str = ""
    focus_chunks: list[DocumentChunk] = Field(default_factory=list)

    turns: list[ChatTurn] = Field(default_factory=list)

    query_generation: int = 0
    focus_generation: int = 0

    def exit_focus_mode(self) -> None:
        """Drop the loaded document and return to library mode."""
        self.focus_generation += 1
        self.is_focus_mode = False
        self.focus_chunks = []
        self.focus_document_name = ""
