"""Utility modules for InsightGraph."""

from insightgraph.utils.exceptions import (
    ConfigurationError,
    EmbeddingError,
    InsightGraphError,
    NoteStoreError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from insightgraph.utils.id_generator import generate_note_id, generate_session_id
from insightgraph.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # ID Generators
    "generate_note_id",
    "generate_session_id",
    # Exceptions
    "InsightGraphError",
    "StoreError",
    "NoteStoreError",
    "ValidationError",
    "NotFoundError",
    "ConfigurationError",
    "EmbeddingError",
]
