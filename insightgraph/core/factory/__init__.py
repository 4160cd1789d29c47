"""
Factory modules for creating InsightGraph components.

Provides modular factories for the Embedder and the Note Store.
"""

from insightgraph.core.factory.embedder_factory import EmbedderFactory
from insightgraph.core.factory.store_factory import NoteStoreFactory

__all__ = [
    "EmbedderFactory",
    "NoteStoreFactory",
]
