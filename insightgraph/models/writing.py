"""
Writing-assistant models: ghost-written drafts and critique points.
"""

from enum import Enum

from pydantic import BaseModel, Field


class GhostFormat(str, Enum):
    """Kind of draft to ghost-write."""

    EMAIL = "Email Draft"
    LINKEDIN = "LinkedIn Post"
    SUMMARY = "Executive Summary"


class GhostTone(str, Enum):
    """Voice of a ghost-written draft."""

    FORMAL = "Formal"
    CASUAL = "Casual"
    CREATIVE = "Creative"


class CritiqueType(str, Enum):
    """What a critique point questions."""

    EVIDENCE = "evidence"
    LOGIC = "logic"
    CLARITY = "clarity"


class CritiquePoint(BaseModel):
    """A sentence of a note paired with a question about it."""

    original_text: str = Field(..., description="Sentence the question is about")
    question: str
    type: CritiqueType
