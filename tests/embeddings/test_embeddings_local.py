"""
Tests for the offline hashing embedder.
"""

import pytest

from insightgraph.core.embeddings.local import LocalEmbedder
from insightgraph.core.similarity import cosine_similarity
from insightgraph.utils.exceptions import EmbeddingError, ValidationError


@pytest.fixture
def local_embedder():
    """Create local embedder for testing."""
    return LocalEmbedder(dimension=512)


@pytest.mark.unit
@pytest.mark.asyncio
class TestLocalEmbedder:
    """Test local embedder."""

    async def test_dimension(self, local_embedder):
        """Vectors have the configured dimension."""
        vector = await local_embedder.embed("project budget review")

        assert len(vector) == 512
        assert await local_embedder.get_dimension() == 512

    async def test_deterministic(self, local_embedder):
        """Identical text gives identical vectors."""
        first = await local_embedder.embed("Phoenix budget")
        second = await LocalEmbedder(dimension=512).embed("Phoenix budget")

        assert first == second

    async def test_normalized(self, local_embedder):
        """Vectors have unit length."""
        vector = await local_embedder.embed("some words to embed")
        assert sum(x * x for x in vector) == pytest.approx(1.0)

    async def test_shared_vocabulary_is_similar(self, local_embedder):
        """Texts sharing words score higher than unrelated texts."""
        query = await local_embedder.embed("Phoenix budget")
        related = await local_embedder.embed("The Phoenix budget was approved")
        unrelated = await local_embedder.embed("Boil pasta in salted water")

        assert cosine_similarity(query, related) > cosine_similarity(query, unrelated)

    async def test_empty_text_raises(self, local_embedder):
        """Empty text is rejected."""
        with pytest.raises(ValidationError):
            await local_embedder.embed("   ")

    async def test_no_tokens_raises(self, local_embedder):
        """Text without word tokens cannot be embedded."""
        with pytest.raises(EmbeddingError):
            await local_embedder.embed("? !")

    async def test_no_tokens_is_unavailable(self, local_embedder):
        """try_embed turns a token-less text into None."""
        assert await local_embedder.try_embed("? !") is None

    async def test_invalid_dimension(self):
        """Dimension must be positive."""
        with pytest.raises(ValidationError):
            LocalEmbedder(dimension=0)

    async def test_close(self, local_embedder):
        """Close is a no-op."""
        await local_embedder.close()
