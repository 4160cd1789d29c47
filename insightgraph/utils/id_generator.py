"""
ID generation utilities for InsightGraph.

Provides consistent ID generation for all entity types:
- Notes: note_xxx
- Conversation sessions: sess_xxx
"""

from uuid import uuid4


def generate_note_id() -> str:
    """
    Generate unique Note ID.

    Returns:
        ID in format "note_xxx" where xxx is 12 hex characters
    """
    return f"note_{uuid4().hex[:12]}"


def generate_session_id() -> str:
    """
    Generate unique conversation session ID.

    Returns:
        ID in format "sess_xxx" where xxx is 12 hex characters
    """
    return f"sess_{uuid4().hex[:12]}"
