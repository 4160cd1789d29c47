"""
Ollama embedder using native ollama-python SDK.

Talks to the /api/embed endpoint, which accepts a list of inputs, so a
document's chunks can be embedded in a few round trips.
"""

import ollama

from insightgraph.core.embeddings.base import Embedder, prepare_text
from insightgraph.utils.exceptions import EmbeddingError, ValidationError
from insightgraph.utils.logger import get_logger

logger = get_logger(__name__)


class OllamaEmbedder(Embedder):
    """
    Ollama embedder for a locally hosted model (nomic-embed-text, mxbai-embed-large).
    """

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "nomic-embed-text",
        timeout: float = 120.0,
        max_input_chars: int | None = 8000,
        dimension: int | None = None,
    ):
        """
        Initialize Ollama embedder.

        Args:
            host: Ollama server URL
            model: Embedding model name
            timeout: Request timeout in seconds
            max_input_chars: Longer notes are truncated before embedding
            dimension: Known embedding size; measured on first use when None
        """
        self.host = host
        self.model = model
        self.timeout = timeout
        self.max_input_chars = max_input_chars
        self._dimension = dimension

        self.client = ollama.AsyncClient(host=host, timeout=timeout)

    async def _embed_inputs(self, inputs: list[str], **kwargs) -> list[list[float]]:
        try:
            response = await self.client.embed(model=self.model, input=inputs, **kwargs)
        except Exception as e:
            logger.bind(model=self.model, host=self.host).error(f"Ollama embedding error: {e}")
            raise EmbeddingError(f"Ollama embedding error: {e}") from e

        vectors = response.get("embeddings") if response else None
        if not vectors or len(vectors) != len(inputs):
            raise EmbeddingError(
                "Ollama returned invalid embedding response",
                context={"model": self.model, "inputs": len(inputs)},
            )
        return [list(vector) for vector in vectors]

    async def embed(self, text: str, **kwargs) -> list[float]:
        """
        Generate embedding for text using Ollama.

        Args:
            text: Text to embed
            **kwargs: Additional options passed to Ollama (keep_alive, options)

        Returns:
            Embedding vector as list of floats

        Raises:
            ValidationError: If text is empty
            EmbeddingError: If Ollama embedding fails
        """
        prepared = prepare_text(text, self.max_input_chars)
        vectors = await self._embed_inputs([prepared], **kwargs)
        return vectors[0]

    async def batch_embed(
        self, texts: list[str], batch_size: int = 32, **kwargs
    ) -> list[list[float]]:
        """
        Embed many texts, batch_size inputs per request.

        Args:
            texts: List of texts to embed
            batch_size: Inputs per request
            **kwargs: Additional options

        Returns:
            List of embedding vectors (same order as input texts)

        Raises:
            ValidationError: If the list or any text in it is empty
            EmbeddingError: If a request fails
        """
        if not texts:
            raise ValidationError("Texts list cannot be empty")

        prepared = [prepare_text(text, self.max_input_chars) for text in texts]
        embeddings = []
        for i in range(0, len(prepared), batch_size):
            embeddings.extend(await self._embed_inputs(prepared[i : i + batch_size], **kwargs))
        return embeddings

    async def get_dimension(self) -> int:
        """
        Get embedding dimension.
        Caches result after first call.

        Returns:
            Embedding vector dimension
        """
        if self._dimension is None:
            test_embedding = await self.embed("test")
            self._dimension = len(test_embedding)
        return self._dimension

    async def close(self):
        """Close client (Ollama SDK handles cleanup internally)."""
        pass
