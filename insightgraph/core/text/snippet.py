"""
Relevant-passage extraction.

Finds the single sentence of a note that best answers a query, scoring by
query-word overlap with a large bonus for the verbatim query phrase.
Sentences come from spaCy's rule-based sentencizer on top of the English
tokenizer, so abbreviations such as "Dr." or "e.g." do not end a sentence.
"""

import re
from functools import lru_cache

import spacy
from spacy.language import Language

from insightgraph.config import SnippetConfig

_LINE_BREAK = re.compile(r"\n+")
_PUNCTUATION = re.compile(r"[^\w\s]")


@lru_cache(maxsize=1)
def sentence_pipeline() -> Language:
    """Blank English pipeline with a sentencizer, built once per process."""
    nlp = spacy.blank("en")
    nlp.add_pipe("sentencizer")
    return nlp


def split_sentences(text: str) -> list[str]:
    """
    Split text into trimmed, non-empty sentences.

    Line breaks always end a sentence.

    Args:
        text: Text to split

    Returns:
        Sentences in document order
    """
    if not text:
        return []

    lines = [line.strip() for line in _LINE_BREAK.split(text) if line.strip()]
    sentences = []
    for doc in sentence_pipeline().pipe(lines):
        sentences.extend(sent.text.strip() for sent in doc.sents if sent.text.strip())
    return sentences


def query_keywords(query: str, min_length: int = 3) -> list[str]:
    """
    Lower-cased, punctuation-stripped query words longer than min_length.

    Args:
        query: Raw query text
        min_length: Words of this length or shorter are dropped

    Returns:
        Keywords in query order
    """
    cleaned = _PUNCTUATION.sub("", query.lower())
    return [word for word in cleaned.split() if len(word) > min_length]


def score_sentence(sentence: str, query: str, keywords: list[str], phrase_bonus: float) -> float:
    """Overlap score of one sentence against a query."""
    lower_sentence = sentence.lower()
    score = float(sum(1 for word in keywords if word in lower_sentence))

    phrase = query.strip().lower()
    if phrase and phrase in lower_sentence:
        score += phrase_bonus
    return score


def truncate(text: str, max_length: int) -> str:
    """Cut text to max_length characters, marking the cut with an ellipsis."""
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def extract_snippet(content: str, query: str, config: SnippetConfig | None = None) -> str:
    """
    Extract the sentence of content most relevant to query.

    Ties keep the earliest sentence. When no sentence scores above zero the
    first sentence is returned, or the first characters of the content if it
    has no sentences at all.

    Args:
        content: Full note or chunk text
        query: Query text
        config: Snippet limits and weights

    Returns:
        Best sentence, truncated with a trailing ellipsis if too long
    """
    config = config or SnippetConfig()
    sentences = split_sentences(content)
    keywords = query_keywords(query, config.min_word_length)

    best_sentence = ""
    max_score = 0.0
    for sentence in sentences:
        score = score_sentence(sentence, query, keywords, config.phrase_bonus)
        if score > max_score:
            max_score = score
            best_sentence = sentence

    if not best_sentence:
        if sentences:
            best_sentence = sentences[0]
        else:
            best_sentence = truncate(content.strip(), config.fallback_length)

    return truncate(best_sentence.strip(), config.max_length)
