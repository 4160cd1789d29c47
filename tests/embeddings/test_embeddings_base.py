"""
Tests for embeddings base class.
"""

import pytest

from insightgraph.core.embeddings.base import Embedder, prepare_text
from insightgraph.utils.exceptions import EmbeddingError, ValidationError


class MockEmbedder(Embedder):
    """Mock embedder for testing."""

    def __init__(self, error: Exception | None = None, result: list[float] | None = None):
        self.error = error
        self.result = [0.1, 0.2, 0.3, 0.4, 0.5] if result is None else result

    async def embed(self, text: str, **kwargs):
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self):
        """Mock close implementation."""
        pass


@pytest.mark.unit
@pytest.mark.asyncio
class TestEmbedderBase:
    """Test base Embedder functionality."""

    async def test_abstract_instantiation(self):
        """Test that abstract class cannot be instantiated."""
        with pytest.raises(TypeError, match="Can't instantiate abstract class"):
            Embedder()

    async def test_batch_embed_default(self):
        """Test default batch_embed implementation."""
        embedder = MockEmbedder()
        results = await embedder.batch_embed(["text1", "text2", "text3"])

        assert len(results) == 3
        assert all(len(emb) == 5 for emb in results)

    async def test_get_dimension_default(self):
        """Test default get_dimension implementation."""
        embedder = MockEmbedder()
        assert await embedder.get_dimension() == 5


@pytest.mark.unit
@pytest.mark.asyncio
class TestTryEmbed:
    """Test the failure-tolerant embedding wrapper."""

    async def test_returns_vector(self):
        """A successful embedding is passed through."""
        embedder = MockEmbedder()
        assert await embedder.try_embed("text") == [0.1, 0.2, 0.3, 0.4, 0.5]

    async def test_embedding_error_is_unavailable(self):
        """Provider failures become None."""
        embedder = MockEmbedder(error=EmbeddingError("provider down"))
        assert await embedder.try_embed("text") is None

    async def test_validation_error_is_unavailable(self):
        """Invalid text becomes None."""
        embedder = MockEmbedder(error=ValidationError("Text cannot be empty"))
        assert await embedder.try_embed("") is None

    async def test_empty_vector_is_unavailable(self):
        """An empty vector is treated as no vector."""
        embedder = MockEmbedder(result=[])
        assert await embedder.try_embed("text") is None

    async def test_unexpected_errors_propagate(self):
        """Programming errors are not hidden."""
        embedder = MockEmbedder(error=RuntimeError("bug"))
        with pytest.raises(RuntimeError):
            await embedder.try_embed("text")


@pytest.mark.unit
class TestPrepareText:
    """Test input cleanup for remote providers."""

    def test_collapses_whitespace(self):
        """OCR line breaks and runs of spaces become single spaces."""
        assert prepare_text("  Invoice\n\n total:   42  ") == "Invoice total: 42"

    def test_truncates(self):
        """Long notes are cut to the character budget."""
        assert prepare_text("abcdef", max_chars=3) == "abc"
        assert prepare_text("abcdef") == "abcdef"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_rejects_blank(self, text):
        """Blank text is invalid."""
        with pytest.raises(ValidationError):
            prepare_text(text)
