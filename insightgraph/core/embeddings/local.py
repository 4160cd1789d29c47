"""
Local embedder using scikit-learn's HashingVectorizer.

Runs fully offline and is deterministic across sessions, which makes it the
default provider for an on-device knowledge base and for tests. Vectors are
lexical (hashed word and bigram counts), so "meaning" is approximated by
shared vocabulary.
"""

import asyncio

import numpy as np
from sklearn.feature_extraction.text import HashingVectorizer

from insightgraph.core.embeddings.base import Embedder
from insightgraph.utils.exceptions import EmbeddingError, ValidationError


class LocalEmbedder(Embedder):
    """
    Offline embedder producing L2-normalized hashed bag-of-words vectors.
    """

    def __init__(self, dimension: int = 2048, ngram_range: tuple[int, int] = (1, 2)):
        """
        Initialize local embedder.

        Args:
            dimension: Number of hash buckets (embedding dimension)
            ngram_range: Word n-gram range fed to the vectorizer
        """
        if dimension <= 0:
            raise ValidationError("Embedding dimension must be positive")

        self.dimension = dimension
        self.vectorizer = HashingVectorizer(
            n_features=dimension,
            ngram_range=ngram_range,
            alternate_sign=False,
            norm="l2",
            lowercase=True,
        )

    def _embed_sync(self, text: str) -> list[float]:
        matrix = self.vectorizer.transform([text])
        vector = np.asarray(matrix.toarray()[0], dtype=np.float64)
        if not np.any(vector):
            raise EmbeddingError("Text has no embeddable tokens")
        return vector.tolist()

    async def embed(self, text: str, **kwargs) -> list[float]:
        """
        Generate embedding for text.

        Args:
            text: Text to embed

        Returns:
            Embedding vector as list of floats

        Raises:
            ValidationError: If text is empty
            EmbeddingError: If text contains no tokens
        """
        if not text or not text.strip():
            raise ValidationError("Text cannot be empty")

        return await asyncio.to_thread(self._embed_sync, text)

    async def get_dimension(self) -> int:
        """Embedding dimension (number of hash buckets)."""
        return self.dimension

    async def close(self):
        """Nothing to release."""
        pass
