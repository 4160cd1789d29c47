"""
Intent handlers for the conversational router.

Each handler either answers an utterance or declines by returning None; the
router asks them in order and stops at the first answer.
"""

import re
from abc import ABC, abstractmethod

from pydantic import BaseModel

from insightgraph.config import FocusConfig, SnippetConfig
from insightgraph.core.embeddings.base import Embedder
from insightgraph.core.similarity import batch_cosine_similarity
from insightgraph.core.text.snippet import extract_snippet
from insightgraph.models.conversation import (
    ActionType,
    ConversationSession,
    DocumentChunk,
    IntentLane,
    PendingAction,
    RouterResponse,
)
from insightgraph.models.note import Note
from insightgraph.services.router.arithmetic import solve_math
from insightgraph.services.router.chit_chat import ChitChat, mentions_schedule
from insightgraph.services.router.self_help import answer_help
from insightgraph.services.search_engine import SearchEngine
from insightgraph.utils.logger import get_logger

logger = get_logger(__name__)

LIBRARY_NO_MATCH = "I searched your memory banks but couldn't find a direct match."
SCHEDULE_NO_MATCH = "I couldn't find anything about your schedule or meetings in your notes."
DOCUMENT_NO_MATCH = "I scanned the document but couldn't find a specific answer to that."
EMPTY_DOCUMENT = "The loaded document has no readable passages."


class RouteContext:
    """
    Everything a handler may look at for one utterance.

    `query` starts as the trimmed utterance and may be rewritten by earlier
    handlers (pronoun resolution); `utterance` is never changed.
    """

    def __init__(self, utterance: str, notes: list[Note], session: ConversationSession):
        self.utterance = utterance
        self.query = utterance.strip()
        self.notes = notes
        self.session = session


class IntentResult(BaseModel):
    """A handler's answer plus the session memory it wants to record."""

    response: RouterResponse
    short_term_memory: str | None = None
    context_topic: str | None = None


class IntentHandler(ABC):
    """Base class for one lane of the router."""

    @abstractmethod
    async def handle(self, context: RouteContext) -> IntentResult | None:
        """
        Answer the utterance or decline.

        Args:
            context: Utterance, notes and session

        Returns:
            Result, or None to let the next handler try
        """
        pass


# ═══════════════════════════════════════════════════════════
# LOCAL LANES
# ═══════════════════════════════════════════════════════════


class SystemCommandHandler(IntentHandler):
    """Commands that ask the UI to do something: create a note, leave focus mode."""

    CREATE_NOTE = re.compile(
        r"^(?:create|new)\s+(?:a\s+)?note(?:\s+(?:called|named|titled))?(?:\s+(?P<title>.*))?$",
        re.IGNORECASE,
    )
    EXIT_FOCUS = re.compile(
        r"^(?:exit|leave|close)\s+(?:focus(?:\s+mode)?|(?:the\s+)?document)[.!]?$",
        re.IGNORECASE,
    )

    async def handle(self, context: RouteContext) -> IntentResult | None:
        utterance = context.utterance.strip()

        match = self.CREATE_NOTE.match(utterance)
        if match:
            title = (match.group("title") or "").strip().strip("'\"") or None
            answer = f"Opening editor for '{title}'..." if title else "Opening editor..."
            return IntentResult(
                response=RouterResponse(
                    answer=answer,
                    lane=IntentLane.SYSTEM_COMMAND,
                    action=PendingAction(type=ActionType.CREATE_NOTE, title=title),
                )
            )

        if self.EXIT_FOCUS.match(utterance):
            if not context.session.is_focus_mode:
                return IntentResult(
                    response=RouterResponse(
                        answer="Focus mode is not active.", lane=IntentLane.SYSTEM_COMMAND
                    )
                )
            return IntentResult(
                response=RouterResponse(
                    answer="Leaving focus mode. Back to your library.",
                    lane=IntentLane.SYSTEM_COMMAND,
                    action=PendingAction(type=ActionType.EXIT_FOCUS),
                )
            )

        return None


class ArithmeticHandler(IntentHandler):
    """Evaluates arithmetic questions."""

    async def handle(self, context: RouteContext) -> IntentResult | None:
        result = solve_math(context.utterance)
        if result is None:
            return None
        return IntentResult(
            response=RouterResponse(
                answer=f"Calculation Result: {result}", lane=IntentLane.ARITHMETIC
            )
        )


class SelfHelpHandler(IntentHandler):
    """Answers questions about the assistant's features."""

    async def handle(self, context: RouteContext) -> IntentResult | None:
        answer = answer_help(context.utterance)
        if answer is None:
            return None
        return IntentResult(response=RouterResponse(answer=answer, lane=IntentLane.SELF_HELP))


class ChitChatHandler(IntentHandler):
    """Small talk."""

    def __init__(self, chit_chat: ChitChat | None = None):
        self.chit_chat = chit_chat or ChitChat()

    async def handle(self, context: RouteContext) -> IntentResult | None:
        answer = self.chit_chat.reply(context.utterance)
        if answer is None:
            return None
        return IntentResult(response=RouterResponse(answer=answer, lane=IntentLane.CHIT_CHAT))


class ContextualRewriteHandler(IntentHandler):
    """
    Resolves follow-up questions against the last answer.

    Never answers; when the utterance has a pronoun or is very short it
    appends the short-term memory to the query used by retrieval.
    """

    PRONOUN = re.compile(r"\b(it|that|he|she)\b")
    MIN_WORDS = 3

    async def handle(self, context: RouteContext) -> IntentResult | None:
        memory = context.session.short_term_memory
        if not memory:
            return None

        utterance = context.utterance.strip()
        lower_utterance = utterance.lower()
        if self.PRONOUN.search(lower_utterance) or len(lower_utterance.split()) < self.MIN_WORDS:
            context.query = f"{utterance} (Context: {memory})"
            logger.debug(f"Rewrote follow-up query: {context.query}")
        return None


# ═══════════════════════════════════════════════════════════
# RETRIEVAL LANES
# ═══════════════════════════════════════════════════════════


class FocusRetrievalHandler(IntentHandler):
    """Answers from the passages of the document loaded in focus mode."""

    def __init__(
        self,
        embedder: Embedder,
        focus_config: FocusConfig | None = None,
        snippet_config: SnippetConfig | None = None,
    ):
        self.embedder = embedder
        self.focus_config = focus_config or FocusConfig()
        self.snippet_config = snippet_config or SnippetConfig()

    async def handle(self, context: RouteContext) -> IntentResult | None:
        session = context.session
        if not session.is_focus_mode:
            return None

        chunks = list(session.focus_chunks)
        if not chunks:
            return IntentResult(
                response=RouterResponse(answer=EMPTY_DOCUMENT, lane=IntentLane.DOCUMENT)
            )

        query_embedding = await self.embedder.try_embed(context.query)
        best_chunk, best_score = self.best_chunk(context.query, query_embedding, chunks)

        if best_chunk is None or best_score <= self.focus_config.answer_threshold:
            return IntentResult(
                response=RouterResponse(answer=DOCUMENT_NO_MATCH, lane=IntentLane.DOCUMENT)
            )

        snippet = extract_snippet(best_chunk.text, context.query, self.snippet_config)
        return IntentResult(
            response=RouterResponse(
                answer=f'From Page {best_chunk.page}:\n\n"{snippet}"', lane=IntentLane.DOCUMENT
            ),
            short_term_memory=snippet,
        )

    def best_chunk(
        self, query: str, query_embedding: list[float] | None, chunks: list[DocumentChunk]
    ) -> tuple[DocumentChunk | None, float]:
        """
        Pick the chunk that best matches the query.

        A chunk scores the larger of its keyword score (a fixed weight per
        query word it contains) and its semantic similarity. Ties keep the
        earlier chunk.
        """
        words = query.lower().split()
        semantic_scores = batch_cosine_similarity(
            query_embedding, [chunk.embedding for chunk in chunks]
        )

        best: DocumentChunk | None = None
        max_score = 0.0
        for chunk, semantic in zip(chunks, semantic_scores):
            lower_text = chunk.text.lower()
            keyword_score = sum(
                self.focus_config.keyword_weight for word in words if word in lower_text
            )
            score = max(keyword_score, semantic)
            if score > max_score:
                max_score = score
                best = chunk
        return best, max_score


class LibraryRetrievalHandler(IntentHandler):
    """Answers from the note library. Always produces an answer."""

    def __init__(self, search_engine: SearchEngine):
        self.search_engine = search_engine

    async def handle(self, context: RouteContext) -> IntentResult | None:
        match = await self.search_engine.smart_search(context.query, context.notes)
        if match is None:
            answer = SCHEDULE_NO_MATCH if mentions_schedule(context.utterance) else LIBRARY_NO_MATCH
            return IntentResult(response=RouterResponse(answer=answer, lane=IntentLane.LIBRARY))

        title = match.note.display_title
        return IntentResult(
            response=RouterResponse(
                answer=f'Found in **{title}**:\n\n"{match.snippet}"',
                lane=IntentLane.LIBRARY,
                citation_id=match.note.id,
            ),
            short_term_memory=match.snippet,
            context_topic=title,
        )
