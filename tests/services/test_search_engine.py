"""
Tests for hybrid search.
"""

import pytest

from insightgraph.config import SearchConfig
from insightgraph.services.search_engine import SearchEngine


@pytest.fixture
def search_engine(fake_embedder):
    """Search engine over the fake embedder."""
    return SearchEngine(fake_embedder)


@pytest.mark.unit
class TestRank:
    """Test scoring with a precomputed query vector."""

    def test_title_in_query_boost(self, search_engine, make_note):
        """Test a title contained in the query adds 0.5."""
        note = make_note("note_a", "unrelated text", title="Alpha")

        results = search_engine.rank("tell me about alpha", None, [note])

        assert len(results) == 1
        assert results[0].score == pytest.approx(0.5)

    def test_title_boost_precedence(self, search_engine, make_note):
        """Test only the stronger title boost applies when both could."""
        note = make_note("note_a", "unrelated text", title="Alpha")

        results = search_engine.rank("alpha", None, [note])

        assert results[0].score == pytest.approx(0.5)

    def test_query_in_title_boost(self, search_engine, make_note):
        """Test a query contained in the title adds 0.3."""
        note = make_note("note_a", "unrelated text", title="Project Alpha Budget")

        results = search_engine.rank("alpha", None, [note])

        assert results[0].score == pytest.approx(0.3)

    def test_keyword_boost_alone_below_threshold(self, search_engine, make_note):
        """Test a verbatim content match alone does not pass the threshold."""
        note = make_note("note_a", "the phoenix budget")

        assert search_engine.rank("phoenix", None, [note]) == []

    def test_semantic_plus_keyword(self, search_engine, make_note):
        """Test semantic and keyword signals add up."""
        note = make_note("note_a", "the phoenix budget", embedding=[0.6, 0.8])

        results = search_engine.rank("phoenix", [1.0, 0.0], [note])

        assert results[0].score == pytest.approx(0.7)

    def test_case_insensitive(self, search_engine, make_note):
        """Test title and keyword matching ignore case."""
        note = make_note("note_a", "PHOENIX notes", title="PHOENIX")

        results = search_engine.rank("Phoenix", None, [note])

        assert results[0].score == pytest.approx(0.6)

    def test_threshold_is_strict(self, fake_embedder, make_note):
        """Test a score equal to the threshold is excluded."""
        engine = SearchEngine(fake_embedder, SearchConfig(inclusion_threshold=0.5))
        note = make_note("note_a", "text", title="Alpha")

        assert engine.rank("alpha", None, [note]) == []

    def test_sorted_descending_with_stable_ties(self, search_engine, make_note):
        """Test ordering by score with ties in input order."""
        notes = [
            make_note("note_low", "x", embedding=[0.6, 0.8]),
            make_note("note_tie_1", "x", embedding=[1.0, 0.0]),
            make_note("note_tie_2", "x", embedding=[1.0, 0.0]),
            make_note("note_none", "x", embedding=[0.0, 1.0]),
        ]

        results = search_engine.rank("query", [1.0, 0.0], notes)

        assert [result.note.id for result in results] == ["note_tie_1", "note_tie_2", "note_low"]
        assert all(result.score > 0.22 for result in results)

    def test_empty_title_no_boost(self, search_engine, make_note):
        """Test blank titles never match."""
        note = make_note("note_a", "x", title="   ", embedding=[0.6, 0.8])

        results = search_engine.rank("anything", [1.0, 0.0], [note])

        assert results[0].score == pytest.approx(0.6)

    def test_empty_query(self, search_engine, make_note):
        """Test an empty query matches nothing."""
        assert search_engine.rank("  ", None, [make_note("note_a", "x", title="x")]) == []


@pytest.mark.unit
@pytest.mark.asyncio
class TestSearch:
    """Test async search with query embedding."""

    async def test_search_embeds_query(self, search_engine, fake_embedder, make_note):
        """Test the query vector drives semantic scoring."""
        fake_embedder.vectors["budget"] = [1.0, 0.0]
        notes = [
            make_note("note_a", "x", embedding=[1.0, 0.0]),
            make_note("note_b", "y", embedding=[0.0, 1.0]),
        ]

        results = await search_engine.search("budget", notes)

        assert [result.note.id for result in results] == ["note_a"]
        assert fake_embedder.calls == ["budget"]

    async def test_search_degrades_to_lexical(self, search_engine, make_note):
        """Test search still works when the query cannot be embedded."""
        notes = [make_note("note_a", "x", title="Alpha", embedding=[1.0, 0.0])]

        results = await search_engine.search("alpha", notes)

        assert results[0].score == pytest.approx(0.5)

    async def test_smart_search_snippet(self, search_engine, make_note):
        """Test the top result comes with its best sentence."""
        notes = [
            make_note(
                "note_a",
                "Kickoff was in March. The Alpha budget is two million. Lunch was late.",
                title="Alpha",
            )
        ]

        result = await search_engine.smart_search("alpha budget", notes)

        assert result.note.id == "note_a"
        assert result.snippet == "The Alpha budget is two million."

    async def test_smart_search_no_match(self, search_engine, make_note):
        """Test smart search returns None without results."""
        assert await search_engine.smart_search("zebra", [make_note("note_a", "x")]) is None
