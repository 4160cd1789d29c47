"""Canned answers to questions about the assistant's own features."""

import re

_HELP_TRIGGER = re.compile(r"\b(how|what|help)\b")

# Checked in order, first matching keyword wins
HELP_TOPICS: dict[str, str] = {
    "focus mode": (
        "Focus Mode answers questions from a single document. Load a PDF and ask away: "
        "every answer cites the page it came from. Say 'exit focus mode' to return to "
        "your library."
    ),
    "auto-link": (
        "Whenever you save a note I compare its meaning with every other note. When two "
        "notes overlap by more than 35% they are linked in both directions, and the link "
        "shows how strong the match is."
    ),
    "manual link": (
        "You can link any two notes by hand. Manual links always have full strength and "
        "are never removed by the auto-linker."
    ),
    "pathfinder": (
        "The Pathfinder finds the shortest chain of links between two notes. Pick a start "
        "and an end note and I will walk the graph for you."
    ),
    "how does search": (
        "Search understands concepts, not just keywords. It blends the meaning of your "
        "question with title matches and exact phrases, then shows the best sentence."
    ),
    "fusion": (
        "Fusion combines several notes into one briefing made of their most substantial "
        "sentences. Select two or more notes and fuse them."
    ),
    "calculator": (
        "Ask me arithmetic like 'what is 2+2*5' or 'calc (3+4)' and I will work it out. "
        "Use ^ for powers."
    ),
    "privacy": (
        "Your notes stay in your own store. With the local embedder nothing ever leaves "
        "your machine."
    ),
}


def answer_help(query: str) -> str | None:
    """
    Answer a question about one of the assistant's features.

    Only questions (containing "how", "what" or "help") are considered.

    Args:
        query: User utterance

    Returns:
        Canned answer, or None if the utterance is not a feature question
    """
    lower_query = query.lower()
    if not _HELP_TRIGGER.search(lower_query):
        return None

    for keyword, answer in HELP_TOPICS.items():
        if keyword in lower_query:
            return answer
    return None
