"""
Ranked hybrid search over notes.

Combines semantic similarity with title and keyword boosts, so that a note
can be found by meaning as well as by its exact wording.
"""

from insightgraph.config import SearchConfig, SnippetConfig
from insightgraph.core.embeddings.base import Embedder
from insightgraph.core.similarity import batch_cosine_similarity
from insightgraph.core.text.snippet import extract_snippet
from insightgraph.models.note import Note
from insightgraph.models.search import SearchResult, SmartSearchResult
from insightgraph.utils.logger import get_logger

logger = get_logger(__name__)


class SearchEngine:
    """
    Hybrid search engine.

    Scoring:
    - Semantic: cosine similarity of query and note embeddings
      (0 when either is unavailable)
    - Title: +0.5 if the query contains the title, else +0.3 if the title
      contains the query
    - Keyword: +0.1 if the content contains the query verbatim

    Only results scoring above the inclusion threshold are returned.
    """

    def __init__(
        self,
        embedder: Embedder,
        config: SearchConfig | None = None,
        snippet_config: SnippetConfig | None = None,
    ):
        """
        Initialize search engine.

        Args:
            embedder: Embedder used for queries
            config: Boost weights and inclusion threshold
            snippet_config: Snippet limits for smart search
        """
        self.embedder = embedder
        self.config = config or SearchConfig()
        self.snippet_config = snippet_config or SnippetConfig()

    async def search(self, query: str, notes: list[Note]) -> list[SearchResult]:
        """
        Search notes for a query.

        Args:
            query: Free-text query
            notes: Notes to rank

        Returns:
            Results sorted by score (highest first)
        """
        if not query.strip():
            return []

        query_embedding = await self.embedder.try_embed(query)
        if query_embedding is None:
            logger.debug("Query embedding unavailable, ranking on lexical signals only")

        results = self.rank(query, query_embedding, notes)
        logger.debug(f"Search returned {len(results)} of {len(notes)} notes")
        return results

    async def smart_search(self, query: str, notes: list[Note]) -> SmartSearchResult | None:
        """
        Return the best matching note with its most relevant sentence.

        Args:
            query: Free-text query
            notes: Notes to rank

        Returns:
            Top result with snippet, or None if nothing passed the threshold
        """
        results = await self.search(query, notes)
        if not results:
            return None

        best = results[0]
        snippet = extract_snippet(best.note.content, query, self.snippet_config)
        return SmartSearchResult(note=best.note, score=best.score, snippet=snippet)

    def rank(
        self, query: str, query_embedding: list[float] | None, notes: list[Note]
    ) -> list[SearchResult]:
        """
        Score and sort notes against a query with a precomputed embedding.

        Args:
            query: Free-text query
            query_embedding: Query vector, or None when unavailable
            notes: Notes to rank

        Returns:
            Results above the inclusion threshold, highest first; ties keep
            input order
        """
        lower_query = query.strip().lower()
        if not lower_query or not notes:
            return []

        semantic_scores = batch_cosine_similarity(
            query_embedding, [note.embedding for note in notes]
        )

        results = []
        for note, semantic in zip(notes, semantic_scores):
            score = semantic + self.lexical_boost(lower_query, note)
            if score > self.config.inclusion_threshold:
                results.append(SearchResult(note=note, score=score))

        # sorted() is stable, equal scores keep input order
        return sorted(results, key=lambda result: result.score, reverse=True)

    def lexical_boost(self, lower_query: str, note: Note) -> float:
        """Title and keyword boost for a lower-cased query."""
        boost = 0.0

        title = (note.title or "").strip().lower()
        if title:
            if title in lower_query:
                boost += self.config.title_in_query_boost
            elif lower_query in title:
                boost += self.config.query_in_title_boost

        if lower_query in note.content.lower():
            boost += self.config.keyword_boost

        return boost
