"""
Conversational intent router.

Routes an utterance through an ordered chain of handlers:
system command -> arithmetic -> self-help -> chit-chat -> contextual rewrite
-> focus retrieval -> library retrieval.

All conversation state lives in the ConversationSession passed to each call,
so one router can serve many conversations.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable

from insightgraph.config import Config
from insightgraph.core.embeddings.base import Embedder
from insightgraph.core.text.chunking import split_document
from insightgraph.models.conversation import (
    ActionType,
    ChatRole,
    ChatTurn,
    ConversationSession,
    DocumentChunk,
    IntentLane,
    RouterResponse,
)
from insightgraph.models.note import Note
from insightgraph.services.router.chit_chat import ChitChat
from insightgraph.services.router.handlers import (
    ArithmeticHandler,
    ChitChatHandler,
    ContextualRewriteHandler,
    FocusRetrievalHandler,
    IntentHandler,
    IntentResult,
    LibraryRetrievalHandler,
    RouteContext,
    SelfHelpHandler,
    SystemCommandHandler,
)
from insightgraph.services.search_engine import SearchEngine
from insightgraph.utils.exceptions import EmbeddingError, InsightGraphError, ValidationError
from insightgraph.utils.logger import get_logger

logger = get_logger(__name__)

CompletionCallback = Callable[[str, str | None], Awaitable[None] | None]

FALLBACK_ANSWER = "Something went wrong while looking that up. Please try again."


class IntentRouter:
    """
    Answers user utterances.

    Handlers are asked in order; the first non-None result wins. The answer
    is final when ask() returns and the completion callback fires exactly
    once per call.
    """

    def __init__(
        self,
        embedder: Embedder,
        handlers: list[IntentHandler],
        config: Config | None = None,
    ):
        """
        Initialize router.

        Args:
            embedder: Embedder for document chunks
            handlers: Handler chain, asked in order
            config: Focus mode settings
        """
        self.embedder = embedder
        self.handlers = handlers
        self.config = config or Config()

    @classmethod
    def default(
        cls,
        embedder: Embedder,
        search_engine: SearchEngine,
        config: Config | None = None,
        chit_chat: ChitChat | None = None,
    ) -> "IntentRouter":
        """
        Build a router with the standard handler chain.

        Args:
            embedder: Embedder for queries and document chunks
            search_engine: Library search engine
            config: Main configuration
            chit_chat: Small-talk replies (inject a seeded one for tests)

        Returns:
            Configured router
        """
        config = config or Config()
        handlers: list[IntentHandler] = [
            SystemCommandHandler(),
            ArithmeticHandler(),
            SelfHelpHandler(),
            ChitChatHandler(chit_chat),
            ContextualRewriteHandler(),
            FocusRetrievalHandler(embedder, config.focus, config.snippet),
            LibraryRetrievalHandler(search_engine),
        ]
        return cls(embedder, handlers, config)

    # ═══════════════════════════════════════════════════════════
    # CONVERSATION
    # ═══════════════════════════════════════════════════════════

    async def ask(
        self,
        utterance: str,
        notes: list[Note],
        session: ConversationSession,
        on_complete: CompletionCallback | None = None,
    ) -> RouterResponse:
        """
        Answer one utterance.

        Args:
            utterance: What the user typed
            notes: Snapshot of the note library
            session: Conversation state, updated in place
            on_complete: Called once with (answer, citation_id)

        Returns:
            Final response
        """
        session.query_generation += 1
        generation = session.query_generation

        context = RouteContext(utterance, notes, session)
        try:
            result = await self._route(context)
        except InsightGraphError as e:
            logger.bind(session_id=session.id).error(f"Routing failed: {e.message}")
            result = IntentResult(
                response=RouterResponse(answer=FALLBACK_ANSWER, lane=IntentLane.LIBRARY)
            )

        if generation == session.query_generation:
            self._apply(session, utterance, result)
        else:
            logger.debug(f"Discarding stale answer for session {session.id}")

        response = result.response
        if on_complete is not None:
            outcome = on_complete(response.answer, response.citation_id)
            if inspect.isawaitable(outcome):
                await outcome
        return response

    async def _route(self, context: RouteContext) -> IntentResult:
        for handler in self.handlers:
            result = await handler.handle(context)
            if result is not None:
                logger.debug(
                    f"{type(handler).__name__} answered in lane {result.response.lane.value}"
                )
                return result

        return IntentResult(
            response=RouterResponse(
                answer="I'm not sure how to help with that.", lane=IntentLane.LIBRARY
            )
        )

    def _apply(self, session: ConversationSession, utterance: str, result: IntentResult) -> None:
        """Record the exchange and any memory update in the session."""
        response = result.response

        if result.short_term_memory is not None:
            session.short_term_memory = result.short_term_memory
        if result.context_topic is not None:
            session.last_context_topic = result.context_topic
        if response.action is not None and response.action.type == ActionType.EXIT_FOCUS:
            session.exit_focus_mode()

        session.turns.append(ChatTurn(role=ChatRole.USER, text=utterance))
        session.turns.append(
            ChatTurn(
                role=ChatRole.ASSISTANT, text=response.answer, citation_id=response.citation_id
            )
        )

    # ═══════════════════════════════════════════════════════════
    # FOCUS MODE
    # ═══════════════════════════════════════════════════════════

    async def load_document(
        self, session: ConversationSession, name: str, pages: list[str]
    ) -> RouterResponse:
        """
        Load a document and switch the session to focus mode.

        Splitting runs in a worker thread; the chunks are embedded once, in
        batches. If another load or an exit happens meanwhile, this load is
        discarded.

        Args:
            session: Conversation state
            name: Document name for display
            pages: Extracted text of each page

        Returns:
            Status response
        """
        session.focus_generation += 1
        generation = session.focus_generation

        chunks = await asyncio.to_thread(
            split_document, pages, self.config.focus.min_paragraph_chars
        )
        await self._embed_chunks(chunks)

        if generation != session.focus_generation:
            logger.info(f"Discarding superseded load of {name}")
            return RouterResponse(
                answer=f"Loading {name} was cancelled.", lane=IntentLane.DOCUMENT
            )

        session.is_focus_mode = True
        session.focus_document_name = name
        session.focus_chunks = chunks

        logger.bind(session_id=session.id).info(
            f"Loaded {name}: {len(pages)} pages, {len(chunks)} passages"
        )
        return RouterResponse(
            answer=f"I've analyzed {name} ({len(pages)} pages). Ask me specific questions.",
            lane=IntentLane.DOCUMENT,
        )

    async def _embed_chunks(self, chunks: list[DocumentChunk]) -> None:
        """Embed chunks in batches, one by one if a batch request fails."""
        if not chunks:
            return

        try:
            embeddings = await self.embedder.batch_embed([chunk.text for chunk in chunks])
        except (ValidationError, EmbeddingError) as e:
            logger.warning(f"Batch embedding failed, embedding passages one by one: {e.message}")
            for chunk in chunks:
                chunk.embedding = await self.embedder.try_embed(chunk.text)
            return

        for chunk, embedding in zip(chunks, embeddings):
            chunk.embedding = embedding or None

    def exit_focus_mode(self, session: ConversationSession) -> None:
        """Leave focus mode and cancel any load in flight."""
        session.exit_focus_mode()
        logger.bind(session_id=session.id).info("Focus mode closed")
