"""
OpenAI embedder using official SDK.

text-embedding-3 models can shorten their vectors server-side; when a
dimension is configured it is requested through the `dimensions` parameter so
stored notes and new queries always agree on vector size.
"""

from openai import AsyncOpenAI

from insightgraph.core.embeddings.base import Embedder, prepare_text
from insightgraph.utils.exceptions import EmbeddingError, ValidationError
from insightgraph.utils.logger import get_logger

logger = get_logger(__name__)

# OpenAI caps a single embeddings request at 2048 inputs
MAX_BATCH_INPUTS = 2048


class OpenAIEmbedder(Embedder):
    """
    OpenAI embedder (text-embedding-3-small, text-embedding-3-large, ada-002).
    """

    _MODEL_DIMENSIONS = {
        "text-embedding-3-small": 1536,
        "text-embedding-3-large": 3072,
        "text-embedding-ada-002": 1536,
    }

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        base_url: str | None = None,
        timeout: float = 120.0,
        max_input_chars: int | None = 8000,
        dimension: int | None = None,
    ):
        """
        Initialize OpenAI embedder.

        Args:
            api_key: OpenAI API key
            model: Embedding model name
            base_url: Optional custom base URL (Azure, proxies)
            timeout: Request timeout in seconds
            max_input_chars: Longer notes are truncated before embedding
            dimension: Requested vector size (text-embedding-3 models only)
        """
        self.model = model
        self.max_input_chars = max_input_chars
        self.dimension = dimension if self.supports_dimension_override else None

        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    @property
    def supports_dimension_override(self) -> bool:
        """Whether the model accepts the `dimensions` request parameter."""
        return self.model.startswith("text-embedding-3")

    def _request_options(self, kwargs: dict) -> dict:
        options = dict(kwargs)
        if self.dimension is not None:
            options.setdefault("dimensions", self.dimension)
        return options

    async def embed(self, text: str, **kwargs) -> list[float]:
        """
        Generate embedding for text using OpenAI.

        Args:
            text: Text to embed
            **kwargs: Additional request parameters (e.g. user)

        Returns:
            Embedding vector as list of floats

        Raises:
            ValidationError: If text is empty
            EmbeddingError: If OpenAI API call fails
        """
        prepared = prepare_text(text, self.max_input_chars)

        try:
            response = await self.client.embeddings.create(
                model=self.model, input=prepared, **self._request_options(kwargs)
            )
        except Exception as e:
            logger.bind(model=self.model, error_type=type(e).__name__).error(
                f"OpenAI embedding error: {e}"
            )
            raise EmbeddingError(f"OpenAI embedding error: {e}") from e

        if not response.data:
            raise EmbeddingError("OpenAI returned empty embedding response")
        return list(response.data[0].embedding)

    async def batch_embed(
        self, texts: list[str], batch_size: int = MAX_BATCH_INPUTS, **kwargs
    ) -> list[list[float]]:
        """
        Batch embed using OpenAI's native batch API.

        Args:
            texts: List of texts to embed
            batch_size: Inputs per request, capped at 2048
            **kwargs: Additional request parameters

        Returns:
            List of embedding vectors (same order as input texts)

        Raises:
            ValidationError: If the list or any text in it is empty
            EmbeddingError: If a request fails
        """
        if not texts:
            raise ValidationError("Texts list cannot be empty")

        prepared = [prepare_text(text, self.max_input_chars) for text in texts]
        batch_size = min(batch_size, MAX_BATCH_INPUTS)
        options = self._request_options(kwargs)

        embeddings = []
        for i in range(0, len(prepared), batch_size):
            batch = prepared[i : i + batch_size]
            try:
                response = await self.client.embeddings.create(
                    model=self.model, input=batch, **options
                )
            except Exception as e:
                logger.bind(model=self.model, num_texts=len(texts)).error(
                    f"OpenAI batch embedding error: {e}"
                )
                raise EmbeddingError(f"OpenAI batch embedding error: {e}") from e

            if len(response.data) != len(batch):
                raise EmbeddingError(
                    "OpenAI returned an incomplete batch",
                    context={"expected": len(batch), "received": len(response.data)},
                )
            # Each result carries its input position
            ordered = sorted(response.data, key=lambda item: item.index)
            embeddings.extend(list(item.embedding) for item in ordered)

        return embeddings

    async def get_dimension(self) -> int:
        """
        Get embedding dimension without an API call where possible.

        Returns:
            Embedding vector dimension
        """
        if self.dimension is not None:
            return self.dimension
        if self.model in self._MODEL_DIMENSIONS:
            return self._MODEL_DIMENSIONS[self.model]

        return await super().get_dimension()

    async def close(self):
        """Close OpenAI client."""
        await self.client.close()
