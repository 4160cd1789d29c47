"""
Configuration for InsightGraph.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class EmbedderConfig(BaseModel):
    """Embedder configuration."""

    provider: str = "local"  # local, ollama, openai
    model: str = "nomic-embed-text"
    base_url: str = "http://localhost:11434"
    api_key: str | None = None
    timeout: float = 120.0
    # Used by the local hashing embedder; auto-detected for remote providers
    dimension: int | None = None
    # Remote providers truncate longer inputs (long OCR or PDF notes)
    max_input_chars: int = 8000


class LinkingConfig(BaseModel):
    """Auto-linking configuration."""

    similarity_threshold: float = 0.35
    manual_link_strength: float = 1.0


class SearchConfig(BaseModel):
    """Ranked search configuration."""

    inclusion_threshold: float = 0.22
    title_in_query_boost: float = 0.5
    query_in_title_boost: float = 0.3
    keyword_boost: float = 0.1


class SnippetConfig(BaseModel):
    """Snippet extraction configuration."""

    max_length: int = 300
    fallback_length: int = 100
    min_word_length: int = 3  # words must be longer than this
    phrase_bonus: float = 5.0


class FocusConfig(BaseModel):
    """Focus mode (single document) configuration."""

    answer_threshold: float = 0.25
    keyword_weight: float = 0.2
    min_paragraph_chars: int = 20


class StoreConfig(BaseModel):
    """Note store configuration."""

    backend: str = "memory"  # memory, sqlite
    db_path: str = "data/insight_graph.db"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class Config(BaseModel):
    """Main configuration."""

    embedder: EmbedderConfig = Field(default_factory=EmbedderConfig)
    linking: LinkingConfig = Field(default_factory=LinkingConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    snippet: SnippetConfig = Field(default_factory=SnippetConfig)
    focus: FocusConfig = Field(default_factory=FocusConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in project root)

        Returns:
            Config instance

        Environment variables:
            INSIGHT_EMBEDDER_PROVIDER: Embedder provider (local, ollama, openai)
            INSIGHT_EMBEDDER_MODEL: Embedder model name
            INSIGHT_EMBEDDER_BASE_URL: Embedder base URL
            INSIGHT_EMBEDDER_API_KEY: Embedder API key (for OpenAI)
            INSIGHT_EMBEDDER_DIMENSION: Embedding dimension (optional)
            INSIGHT_EMBEDDER_MAX_INPUT_CHARS: Input truncation for remote embedders
            INSIGHT_LINK_THRESHOLD: Auto-link similarity threshold
            INSIGHT_SEARCH_THRESHOLD: Search inclusion threshold
            INSIGHT_FOCUS_THRESHOLD: Focus mode answer threshold
            INSIGHT_STORE_BACKEND: Note store backend (memory, sqlite)
            INSIGHT_STORE_DB_PATH: SQLite database path
            INSIGHT_LOG_LEVEL: Log level
        """
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None:
                return default
            if value == "":
                return default
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
            return value

        dimension = get_env("INSIGHT_EMBEDDER_DIMENSION")

        return cls(
            embedder=EmbedderConfig(
                provider=get_env("INSIGHT_EMBEDDER_PROVIDER", "local"),
                model=get_env("INSIGHT_EMBEDDER_MODEL", "nomic-embed-text"),
                base_url=get_env("INSIGHT_EMBEDDER_BASE_URL", "http://localhost:11434"),
                api_key=get_env("INSIGHT_EMBEDDER_API_KEY"),
                timeout=get_env("INSIGHT_EMBEDDER_TIMEOUT", 120.0),
                dimension=int(dimension) if dimension is not None else None,
                max_input_chars=get_env("INSIGHT_EMBEDDER_MAX_INPUT_CHARS", 8000),
            ),
            linking=LinkingConfig(
                similarity_threshold=get_env("INSIGHT_LINK_THRESHOLD", 0.35),
            ),
            search=SearchConfig(
                inclusion_threshold=get_env("INSIGHT_SEARCH_THRESHOLD", 0.22),
            ),
            focus=FocusConfig(
                answer_threshold=get_env("INSIGHT_FOCUS_THRESHOLD", 0.25),
            ),
            store=StoreConfig(
                backend=get_env("INSIGHT_STORE_BACKEND", "memory"),
                db_path=get_env("INSIGHT_STORE_DB_PATH", "data/insight_graph.db"),
            ),
            logging=LoggingConfig(
                level=get_env("INSIGHT_LOG_LEVEL", "INFO"),
                log_to_file=get_env("INSIGHT_LOG_TO_FILE", False),
                log_dir=get_env("INSIGHT_LOG_DIR", "logs"),
                file_rotation=get_env("INSIGHT_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("INSIGHT_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("INSIGHT_LOG_COMPRESSION", "zip"),
                serialize=get_env("INSIGHT_LOG_SERIALIZE", True),
            ),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls(**(data or {}))

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        # Merge: env vars override YAML, section by section
        final_dict = {**config_dict}
        default = cls()
        for section in ("embedder", "linking", "search", "focus", "store", "logging"):
            env_section = getattr(env_config, section)
            if env_section != getattr(default, section):
                final_dict[section] = env_section.model_dump()

        return cls(**final_dict) if final_dict else env_config


# Default config instance
default_config = Config()
