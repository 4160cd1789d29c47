"""
Tests for the intent router: handler ordering, session updates, callbacks
and focus mode loading.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from insightgraph.models.conversation import (
    ActionType,
    ChatRole,
    ConversationSession,
    IntentLane,
    RouterResponse,
)
from insightgraph.services.router.chit_chat import GREETING_REPLY
from insightgraph.services.router.handlers import IntentHandler, IntentResult
from insightgraph.services.router.intent_router import FALLBACK_ANSWER, IntentRouter
from insightgraph.services.search_engine import SearchEngine
from insightgraph.utils.exceptions import EmbeddingError

REPORT_PAGES = [
    "Intro\n\nRevenue grew by twelve percent in the third quarter.",
    "",
    "Costs fell sharply across every single department.",
]


@pytest.fixture
def router(fake_embedder, seeded_chit_chat):
    """Router with the standard chain over the fake embedder."""
    return IntentRouter.default(
        fake_embedder, SearchEngine(fake_embedder), chit_chat=seeded_chit_chat
    )


@pytest.fixture
def alpha_note(make_note):
    return make_note("note_a", "Kickoff in May. The Alpha budget is final.", title="Alpha")


class StaleHandler(IntentHandler):
    """Answers, but only after a newer query has started."""

    async def handle(self, context):
        context.session.query_generation += 1
        return IntentResult(
            response=RouterResponse(answer="late answer", lane=IntentLane.LIBRARY),
            short_term_memory="late memory",
        )


class BrokenHandler(IntentHandler):
    """Fails the way a provider outage would."""

    async def handle(self, context):
        raise EmbeddingError("Provider offline")


@pytest.mark.unit
@pytest.mark.asyncio
class TestAsk:
    """Test IntentRouter.ask."""

    async def test_sync_callback_called_once(self, router):
        """Test a plain function callback receives the answer."""
        calls = []

        response = await router.ask(
            "what is 2+2*5",
            [],
            ConversationSession(),
            on_complete=lambda answer, citation: calls.append((answer, citation)),
        )

        assert response.answer == "Calculation Result: 12"
        assert calls == [("Calculation Result: 12", None)]

    async def test_async_callback_awaited(self, router, alpha_note):
        """Test a coroutine callback is awaited with the citation."""
        calls = []

        async def on_complete(answer, citation):
            calls.append((answer, citation))

        await router.ask("alpha budget", [alpha_note], ConversationSession(), on_complete)

        assert len(calls) == 1
        assert calls[0][1] == "note_a"

    async def test_turns_recorded(self, router):
        """Test the user and assistant turns are appended."""
        session = ConversationSession()

        await router.ask("hello", [], session)

        assert [turn.role for turn in session.turns] == [ChatRole.USER, ChatRole.ASSISTANT]
        assert session.turns[0].text == "hello"
        assert session.turns[1].text == GREETING_REPLY

    async def test_library_answer_sets_memory(self, router, alpha_note):
        """Test a library answer becomes the short-term memory."""
        session = ConversationSession()

        response = await router.ask("alpha budget", [alpha_note], session)

        assert response.citation_id == "note_a"
        assert session.short_term_memory == "The Alpha budget is final."
        assert session.last_context_topic == "Alpha"
        assert session.turns[1].citation_id == "note_a"

    async def test_chit_chat_keeps_memory(self, router, alpha_note):
        """Test small talk does not overwrite the short-term memory."""
        session = ConversationSession()
        await router.ask("alpha budget", [alpha_note], session)

        await router.ask("thanks", [alpha_note], session)

        assert session.short_term_memory == "The Alpha budget is final."

    async def test_follow_up_uses_memory(self, router, alpha_note, fake_embedder):
        """Test a pronoun follow-up is searched with the previous answer."""
        session = ConversationSession()
        await router.ask("alpha budget", [alpha_note], session)

        response = await router.ask("when was it final", [alpha_note], session)

        assert response.citation_id == "note_a"
        assert "when was it final (Context: The Alpha budget is final.)" in fake_embedder.calls

    async def test_handler_order(self, router):
        """Test a system command wins over every other lane."""
        response = await router.ask("create note Groceries", [], ConversationSession())

        assert response.lane == IntentLane.SYSTEM_COMMAND
        assert response.action.type == ActionType.CREATE_NOTE
        assert response.action.title == "Groceries"

    async def test_stale_answer_not_applied(self, fake_embedder):
        """Test an answer overtaken by a newer query leaves the session alone."""
        router = IntentRouter(fake_embedder, [StaleHandler()])
        session = ConversationSession()
        calls = []

        response = await router.ask(
            "anything", [], session, on_complete=lambda *args: calls.append(args)
        )

        assert response.answer == "late answer"
        assert session.turns == []
        assert session.short_term_memory == ""
        assert calls == [("late answer", None)]

    async def test_handler_failure_falls_back(self, fake_embedder):
        """Test a failing handler produces the fallback answer."""
        router = IntentRouter(fake_embedder, [BrokenHandler()])
        calls = []

        response = await router.ask(
            "anything", [], ConversationSession(), on_complete=lambda *args: calls.append(args)
        )

        assert response.answer == FALLBACK_ANSWER
        assert calls == [(FALLBACK_ANSWER, None)]


@pytest.mark.unit
@pytest.mark.asyncio
class TestFocusMode:
    """Test loading documents and leaving focus mode."""

    async def test_load_document(self, router, fake_embedder):
        """Test a load splits pages into embedded passages."""
        fake_embedder.vectors["Costs fell sharply across every single department."] = [1.0, 0.0]
        session = ConversationSession()

        response = await router.load_document(session, "report.pdf", REPORT_PAGES)

        assert response.answer == (
            "I've analyzed report.pdf (3 pages). Ask me specific questions."
        )
        assert session.is_focus_mode
        assert session.focus_document_name == "report.pdf"
        assert [chunk.page for chunk in session.focus_chunks] == [1, 3]
        assert session.focus_chunks[0].embedding is None
        assert session.focus_chunks[1].embedding == [1.0, 0.0]

    async def test_load_document_embeds_in_one_batch(self, router, fake_embedder):
        """Test all passages go to the embedder in a single batch call."""
        revenue = "Revenue grew by twelve percent in the third quarter."
        costs = "Costs fell sharply across every single department."
        fake_embedder.vectors.update({revenue: [0.0, 1.0], costs: [1.0, 0.0]})
        session = ConversationSession()

        with patch.object(
            fake_embedder, "batch_embed", wraps=fake_embedder.batch_embed
        ) as mock_batch:
            await router.load_document(session, "report.pdf", REPORT_PAGES)

        mock_batch.assert_called_once_with([revenue, costs])
        assert fake_embedder.calls == [revenue, costs]
        assert [chunk.embedding for chunk in session.focus_chunks] == [[0.0, 1.0], [1.0, 0.0]]

    async def test_failed_batch_falls_back_per_passage(self, router, fake_embedder):
        """Test a failed batch request still embeds the passages it can."""
        costs = "Costs fell sharply across every single department."
        fake_embedder.vectors[costs] = [1.0, 0.0]
        session = ConversationSession()

        with patch.object(
            fake_embedder, "batch_embed", new_callable=AsyncMock
        ) as mock_batch:
            mock_batch.side_effect = EmbeddingError("Batch endpoint unavailable")
            await router.load_document(session, "report.pdf", REPORT_PAGES)

        assert [chunk.embedding for chunk in session.focus_chunks] == [None, [1.0, 0.0]]

    async def test_load_empty_document(self, router, fake_embedder):
        """Test a document without passages loads without embedding anything."""
        session = ConversationSession()

        response = await router.load_document(session, "blank.pdf", ["", "  "])

        assert response.answer.startswith("I've analyzed blank.pdf (2 pages)")
        assert session.focus_chunks == []
        assert fake_embedder.calls == []

    async def test_answers_from_document(self, router, alpha_note):
        """Test focus mode answers cite the page, not the library."""
        session = ConversationSession()
        await router.load_document(session, "report.pdf", REPORT_PAGES)

        response = await router.ask("revenue in the third quarter", [alpha_note], session)

        assert response.lane == IntentLane.DOCUMENT
        assert response.answer.startswith("From Page 1:")
        assert response.citation_id is None

    async def test_exit_command_clears_focus(self, router):
        """Test the exit command leaves focus mode."""
        session = ConversationSession()
        await router.load_document(session, "report.pdf", REPORT_PAGES)

        response = await router.ask("exit focus mode", [], session)

        assert response.action.type == ActionType.EXIT_FOCUS
        assert not session.is_focus_mode
        assert session.focus_chunks == []

    async def test_superseded_load_discarded(self, router):
        """Test the later of two overlapping loads wins."""
        session = ConversationSession()

        first, second = await asyncio.gather(
            router.load_document(session, "a.pdf", REPORT_PAGES),
            router.load_document(session, "b.pdf", REPORT_PAGES),
        )

        assert first.answer == "Loading a.pdf was cancelled."
        assert second.answer.startswith("I've analyzed b.pdf")
        assert session.focus_document_name == "b.pdf"

    async def test_exit_during_load(self, router):
        """Test leaving focus mode cancels a load in flight."""
        session = ConversationSession()

        task = asyncio.create_task(router.load_document(session, "a.pdf", REPORT_PAGES))
        await asyncio.sleep(0)
        router.exit_focus_mode(session)
        response = await task

        assert response.answer == "Loading a.pdf was cancelled."
        assert not session.is_focus_mode
        assert session.focus_chunks == []
