"""
Tests for cosine similarity.
"""

import pytest

from insightgraph.core.similarity import batch_cosine_similarity, cosine_similarity


@pytest.mark.unit
class TestCosineSimilarity:
    """Test pairwise cosine similarity."""

    def test_identical_vectors(self):
        """A non-zero vector is fully similar to itself."""
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        """Orthogonal vectors score zero."""
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors(self):
        """Opposite vectors score -1."""
        assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)

    def test_scale_invariant(self):
        """Scaling a vector does not change the score."""
        assert cosine_similarity([1.0, 1.0], [5.0, 5.0]) == pytest.approx(1.0)

    def test_symmetric(self):
        """similarity(a, b) == similarity(b, a)."""
        a = [0.3, 0.1, 0.9]
        b = [0.2, 0.8, 0.4]
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_unequal_lengths(self):
        """Mismatched dimensions score zero instead of raising."""
        assert cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0]) == 0.0

    def test_empty_vectors(self):
        """Empty vectors score zero."""
        assert cosine_similarity([], []) == 0.0

    def test_zero_magnitude(self):
        """A zero vector scores zero, never NaN."""
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0

    def test_missing_vector(self):
        """A missing embedding scores zero."""
        assert cosine_similarity(None, [1.0]) == 0.0
        assert cosine_similarity([1.0], None) == 0.0

    def test_non_finite_input(self):
        """Infinite components do not leak NaN."""
        assert cosine_similarity([float("inf"), 1.0], [1.0, 1.0]) == 0.0


@pytest.mark.unit
class TestBatchCosineSimilarity:
    """Test one-to-many cosine similarity."""

    def test_matches_pairwise(self):
        """Batch scores agree with pairwise scores."""
        query = [1.0, 0.5, 0.0]
        vectors = [[1.0, 0.5, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]

        scores = batch_cosine_similarity(query, vectors)

        assert len(scores) == 3
        for vector, score in zip(vectors, scores):
            assert score == pytest.approx(cosine_similarity(query, vector))

    def test_degenerate_rows_score_zero(self):
        """Missing, mismatched and zero rows score zero, in order."""
        scores = batch_cosine_similarity([1.0, 0.0], [None, [1.0], [0.0, 0.0], [2.0, 0.0]])

        assert scores[:3] == [0.0, 0.0, 0.0]
        assert scores[3] == pytest.approx(1.0)

    def test_missing_query(self):
        """Without a query vector every row scores zero."""
        assert batch_cosine_similarity(None, [[1.0], [2.0]]) == [0.0, 0.0]

    def test_no_vectors(self):
        """No rows, no scores."""
        assert batch_cosine_similarity([1.0], []) == []
