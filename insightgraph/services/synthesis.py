"""
Extractive summaries over several notes.

No language model is involved: a briefing is built from the notes' own
sentences, and a path explanation from the titles along the path. The
writing helpers below are rule based in the same way.
"""

import re

from insightgraph.core.text.snippet import split_sentences, truncate
from insightgraph.models.note import Note
from insightgraph.models.writing import CritiquePoint, CritiqueType, GhostFormat, GhostTone

BRIEFING_HEADER = "--- INSIGHT BRIEFING ---"
BRIEFING_SEPARATOR = "\n• "
MIN_SENTENCE_LENGTH = 20  # shorter sentences are noise
MAX_BRIEFING_SENTENCES = 5

GHOST_WRITE_MAX_CHARS = 800
GHOST_WRITE_FOOTER = "(Generated by InsightGraph)"
DEFAULT_TOPIC = "Project"
MAX_CRITIQUE_POINTS = 3

_HEDGE_WORDS = re.compile(r"\b(assum|believ)", re.IGNORECASE)
_ABSOLUTE_WORDS = re.compile(r"\b(always|never)\b", re.IGNORECASE)
_PUNCTUATION = re.compile(r"[^\w\-]")


def synthesize_notes(notes: list[Note]) -> str:
    """
    Fuse several notes into a short briefing.

    Takes the first substantial sentences across the notes in order.

    Args:
        notes: Notes to fuse

    Returns:
        Briefing text under a fixed header
    """
    full_text = "\n\n".join(note.content for note in notes)
    key_points = [
        sentence for sentence in split_sentences(full_text) if len(sentence) > MIN_SENTENCE_LENGTH
    ][:MAX_BRIEFING_SENTENCES]

    return f"{BRIEFING_HEADER}\n\n" + BRIEFING_SEPARATOR.join(key_points)


def explain_connection(path: list[Note]) -> str:
    """
    Describe how the notes along a path are connected.

    Args:
        path: Notes in path order

    Returns:
        Titles joined by arrows with a short explanation
    """
    chain = " -> ".join(note.display_title for note in path)
    return (
        "I have analyzed the connection path:\n\n"
        f"{chain}\n\n"
        "These notes are linked because their content shares meaning or because you "
        "connected them by hand. This path is a logical flow of information in your library."
    )


def ghost_write(notes: list[Note], draft_format: GhostFormat, tone: GhostTone) -> str:
    """
    Draft a piece of writing from the notes' own text.

    The topic is the first note's title. The body is the notes' content,
    cut at GHOST_WRITE_MAX_CHARS.

    Args:
        notes: Source notes, in order
        draft_format: Kind of draft
        tone: Voice of the draft

    Returns:
        Draft text with a format heading, topic and tone lines
    """
    raw_text = "\n\n".join(note.content for note in notes)
    topic = notes[0].title if notes and notes[0].title else DEFAULT_TOPIC

    return (
        f"{draft_format.value.upper()}\n"
        f"Topic: {topic}\n"
        f"Tone: {tone.value}\n\n"
        f"{truncate(raw_text.strip(), GHOST_WRITE_MAX_CHARS)}\n\n"
        f"{GHOST_WRITE_FOOTER}"
    )


def generate_critique(text: str) -> list[CritiquePoint]:
    """
    Question the hedged and absolute claims in a text.

    Sentences with "assume" or "believe" ask for evidence; otherwise
    sentences with "always" or "never" are flagged as a logic risk.

    Args:
        text: Note content

    Returns:
        At most MAX_CRITIQUE_POINTS points, in sentence order
    """
    points = []
    for sentence in split_sentences(text):
        if _HEDGE_WORDS.search(sentence):
            points.append(
                CritiquePoint(
                    original_text=sentence,
                    question="Uncertainty detected. What data supports this?",
                    type=CritiqueType.EVIDENCE,
                )
            )
        elif _ABSOLUTE_WORDS.search(sentence):
            points.append(
                CritiquePoint(
                    original_text=sentence,
                    question="Absolutes are risky. Is there really no exception?",
                    type=CritiqueType.LOGIC,
                )
            )
        if len(points) == MAX_CRITIQUE_POINTS:
            break
    return points


def expand(sentence: str, context: str) -> str:
    """
    Deep dive into the key term of a sentence.

    The key term is the sentence's longest word (the first one on ties).
    When another sentence of the context mentions it, that sentence is
    quoted as related material.

    Args:
        sentence: Sentence the reader selected
        context: Full text the sentence came from

    Returns:
        Deep-dive text
    """
    words = [_PUNCTUATION.sub("", word) for word in sentence.split()]
    words = [word for word in words if word]
    topic = max(words, key=len) if words else "this topic"

    lines = [
        f"DEEP DIVE: {topic.capitalize()}",
        "",
        f'You focused on "{topic}". In context, this is the structural foundation '
        "of the argument.",
        "",
        "Implication:",
        "Ignoring this variable typically leads to downstream instability.",
    ]

    lower_topic = topic.lower()
    related = [
        other
        for other in split_sentences(context)
        if other != sentence.strip() and lower_topic in other.lower()
    ]
    if related:
        lines += ["", "Related passage:", related[0]]

    return "\n".join(lines)
