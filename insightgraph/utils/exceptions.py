"""
Custom exception hierarchy for InsightGraph.

Provides structured error types for better error handling and debugging.
All exceptions inherit from InsightGraphError for easy catching.
"""


class InsightGraphError(Exception):
    """
    Base exception for all InsightGraph errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize InsightGraph error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreError(InsightGraphError):
    """
    Base exception for store operations.
    Used for errors related to data storage operations.
    """

    pass


class NoteStoreError(StoreError):
    """
    Note store operation errors.
    Raised when the persistence backend fails to read or write notes and links.
    """

    pass


class ValidationError(InsightGraphError):
    """
    Validation errors.
    Raised when input validation fails or data is invalid.
    """

    pass


class NotFoundError(InsightGraphError):
    """
    Resource not found errors.
    Raised when a requested note doesn't exist.
    """

    pass


class ConfigurationError(InsightGraphError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    pass


class EmbeddingError(InsightGraphError):
    """
    Embedding generation errors.
    Raised when embedding generation fails.
    """

    pass
