"""
Factory for creating embedder providers.
"""

from insightgraph.config import EmbedderConfig
from insightgraph.core.embeddings.base import Embedder
from insightgraph.core.embeddings.local import LocalEmbedder
from insightgraph.core.embeddings.ollama import OllamaEmbedder
from insightgraph.core.embeddings.openai import OpenAIEmbedder

DEFAULT_LOCAL_DIMENSION = 2048


class EmbedderFactory:
    """Factory for creating embedder providers from configuration."""

    @staticmethod
    def create(config: EmbedderConfig) -> Embedder:
        """
        Create embedder from configuration.

        Args:
            config: Embedder configuration

        Returns:
            Embedder instance

        Raises:
            ValueError: If provider is not supported
        """
        if config.provider == "local":
            return LocalEmbedder(dimension=config.dimension or DEFAULT_LOCAL_DIMENSION)
        elif config.provider == "ollama":
            return OllamaEmbedder(
                host=config.base_url,
                model=config.model,
                timeout=config.timeout,
                max_input_chars=config.max_input_chars,
                dimension=config.dimension,
            )
        elif config.provider == "openai":
            if not config.api_key:
                raise ValueError("OpenAI API key is required")
            return OpenAIEmbedder(
                api_key=config.api_key,
                model=config.model,
                timeout=config.timeout,
                max_input_chars=config.max_input_chars,
                dimension=config.dimension,
            )
        else:
            raise ValueError(f"Unsupported embedder provider: {config.provider}")

    @staticmethod
    async def get_dimension(embedder: Embedder, config: EmbedderConfig | None = None) -> int:
        """
        Get embedding dimension with fallback logic.

        Priority:
        1. From config if provided
        2. From the embedder itself

        Args:
            embedder: Embedder instance
            config: Optional embedder config with dimension hint

        Returns:
            Embedding dimension
        """
        if config and config.dimension:
            return config.dimension

        return await embedder.get_dimension()
