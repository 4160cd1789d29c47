"""Text utilities: sentence splitting, snippet extraction and document chunking."""

from insightgraph.core.text.chunking import split_document
from insightgraph.core.text.snippet import extract_snippet, query_keywords, split_sentences

__all__ = ["extract_snippet", "query_keywords", "split_document", "split_sentences"]
