"""
Embedder abstraction layer for text embeddings.

Supported providers:
- Local (scikit-learn hashing, offline)
- Ollama (native SDK)
- OpenAI (official SDK)
"""

from insightgraph.core.embeddings.base import Embedder
from insightgraph.core.embeddings.local import LocalEmbedder
from insightgraph.core.embeddings.ollama import OllamaEmbedder
from insightgraph.core.embeddings.openai import OpenAIEmbedder

__all__ = [
    "Embedder",
    "LocalEmbedder",
    "OllamaEmbedder",
    "OpenAIEmbedder",
]
