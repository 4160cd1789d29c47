"""Services layer: linking, search, navigation and conversation."""

from insightgraph.services.auto_linker import AutoLinker
from insightgraph.services.knowledge_base import KnowledgeBase
from insightgraph.services.pathfinder import shortest_path
from insightgraph.services.router import IntentRouter
from insightgraph.services.search_engine import SearchEngine
from insightgraph.services.synthesis import (
    expand,
    explain_connection,
    generate_critique,
    ghost_write,
    synthesize_notes,
)

__all__ = [
    "KnowledgeBase",
    "AutoLinker",
    "SearchEngine",
    "IntentRouter",
    "shortest_path",
    "synthesize_notes",
    "explain_connection",
    "ghost_write",
    "generate_critique",
    "expand",
]
