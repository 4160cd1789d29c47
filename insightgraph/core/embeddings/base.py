"""
Abstract base class for embedding providers.
Handles text to vector embeddings for semantic search and auto-linking.
"""

from abc import ABC, abstractmethod

from insightgraph.utils.exceptions import EmbeddingError, ValidationError
from insightgraph.utils.logger import get_logger

logger = get_logger(__name__)


def prepare_text(text: str, max_chars: int | None = None) -> str:
    """
    Normalize note text before sending it to a remote provider.

    Whitespace runs (OCR and PDF extraction leave plenty) collapse to single
    spaces, and overly long notes are cut to max_chars.

    Args:
        text: Raw note, query or chunk text
        max_chars: Character budget, or None for no limit

    Returns:
        Cleaned text

    Raises:
        ValidationError: If text is empty or whitespace only
    """
    if not text or not text.strip():
        raise ValidationError("Text cannot be empty")

    cleaned = " ".join(text.split())
    if max_chars is not None and len(cleaned) > max_chars:
        cleaned = cleaned[:max_chars]
    return cleaned


class Embedder(ABC):
    """
    Abstract base for embedding providers.

    Responsibilities:
    - Generate vector embeddings for text
    - Consistent vector dimensions across a corpus
    - Deterministic output for identical text within a session
    """

    @abstractmethod
    async def embed(self, text: str, **kwargs) -> list[float]:
        """
        Generate embedding vector for text.

        Args:
            text: Text to embed
            **kwargs: Provider-specific parameters

        Returns:
            List of floats representing the embedding vector

        Raises:
            ValidationError: If text is invalid
            EmbeddingError: If embedding generation fails
        """
        pass

    async def try_embed(self, text: str, **kwargs) -> list[float] | None:
        """
        Generate an embedding, treating failure as "vector unavailable".

        Args:
            text: Text to embed
            **kwargs: Provider-specific parameters

        Returns:
            Embedding vector, or None if the provider could not produce one
        """
        try:
            embedding = await self.embed(text, **kwargs)
        except (ValidationError, EmbeddingError) as e:
            logger.debug(f"Embedding unavailable: {e.message}")
            return None

        return embedding or None

    async def batch_embed(
        self, texts: list[str], batch_size: int = 32, **kwargs
    ) -> list[list[float]]:
        """
        Generate embeddings for multiple texts.

        Default implementation processes sequentially.
        Override for provider-specific batch optimization.

        Args:
            texts: List of texts to embed
            batch_size: Number of texts per batch
            **kwargs: Provider-specific parameters

        Returns:
            List of embedding vectors (same order as input texts)
        """
        embeddings = []
        for text in texts:
            embedding = await self.embed(text, **kwargs)
            embeddings.append(embedding)
        return embeddings

    async def get_dimension(self) -> int:
        """
        Get the dimension of embeddings produced by this provider.

        Default implementation embeds a test string.

        Returns:
            Embedding vector dimension
        """
        test_embedding = await self.embed("test")
        return len(test_embedding)

    @abstractmethod
    async def close(self):
        """Close any open connections."""
        pass
