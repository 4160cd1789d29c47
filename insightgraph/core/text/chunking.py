"""Paragraph chunking for focus mode documents."""

import re

from insightgraph.models.conversation import DocumentChunk

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def split_document(pages: list[str], min_chars: int = 20) -> list[DocumentChunk]:
    """
    Split page texts into paragraph chunks tagged with their page number.

    Wrapped lines inside a paragraph are joined with single spaces, and
    paragraphs of min_chars characters or fewer (headers, page numbers) are
    dropped.

    Args:
        pages: Extracted text of each page, in order
        min_chars: Paragraphs must be longer than this to be kept

    Returns:
        Chunks in reading order
    """
    chunks = []
    for page_number, page_text in enumerate(pages, start=1):
        if not page_text:
            continue
        for paragraph in _PARAGRAPH_BREAK.split(page_text):
            clean = " ".join(paragraph.split())
            if len(clean) > min_chars:
                chunks.append(DocumentChunk(text=clean, page=page_number))
    return chunks
