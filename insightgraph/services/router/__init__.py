"""Conversational intent router and its handlers."""

from insightgraph.services.router.arithmetic import solve_math
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
from insightgraph.services.router.intent_router import IntentRouter
from insightgraph.services.router.self_help import answer_help

__all__ = [
    "IntentRouter",
    "IntentHandler",
    "IntentResult",
    "RouteContext",
    "SystemCommandHandler",
    "ArithmeticHandler",
    "SelfHelpHandler",
    "ChitChatHandler",
    "ContextualRewriteHandler",
    "FocusRetrievalHandler",
    "LibraryRetrievalHandler",
    "ChitChat",
    "answer_help",
    "solve_math",
]
