"""InsightGraph: a personal knowledge base with semantic auto-linking."""

from insightgraph.config import Config
from insightgraph.services.knowledge_base import KnowledgeBase

__version__ = "0.1.0"

__all__ = ["Config", "KnowledgeBase"]
