"""
Cosine similarity between embedding vectors.

Degenerate inputs (unequal lengths, empty or zero-magnitude vectors) score 0.0
instead of raising or producing NaN.
"""

from collections.abc import Sequence

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sk_cosine_similarity


def cosine_similarity(vector_a: Sequence[float] | None, vector_b: Sequence[float] | None) -> float:
    """
    Compute cosine similarity between two embeddings.

    Args:
        vector_a: First embedding vector
        vector_b: Second embedding vector

    Returns:
        Similarity score in [-1, 1], or 0.0 for degenerate input
    """
    if vector_a is None or vector_b is None:
        return 0.0
    if len(vector_a) != len(vector_b) or len(vector_a) == 0:
        return 0.0

    vec_a = np.asarray(vector_a, dtype=np.float64)
    vec_b = np.asarray(vector_b, dtype=np.float64)

    magnitude = float(np.linalg.norm(vec_a) * np.linalg.norm(vec_b))
    if magnitude == 0.0 or not np.isfinite(magnitude):
        return 0.0

    score = float(np.dot(vec_a, vec_b) / magnitude)
    if not np.isfinite(score):
        return 0.0
    return max(-1.0, min(1.0, score))


def batch_cosine_similarity(
    query: Sequence[float] | None, vectors: Sequence[Sequence[float] | None]
) -> list[float]:
    """
    Compute cosine similarity between a query and multiple embeddings.

    Rows that are missing or whose length differs from the query score 0.0.

    Args:
        query: Query embedding vector
        vectors: Embedding vectors to compare against

    Returns:
        List of similarity scores, same order as vectors
    """
    scores = [0.0] * len(vectors)
    if query is None or len(query) == 0:
        return scores

    rows = [i for i, vec in enumerate(vectors) if vec is not None and len(vec) == len(query)]
    if not rows:
        return scores

    query_vec = np.asarray(query, dtype=np.float64).reshape(1, -1)
    matrix = np.asarray([vectors[i] for i in rows], dtype=np.float64)

    # sklearn normalizes zero rows to zero, so they score 0.0
    similarities = sk_cosine_similarity(query_vec, matrix)[0]

    for i, score in zip(rows, similarities):
        score = float(score)
        scores[i] = max(-1.0, min(1.0, score)) if np.isfinite(score) else 0.0
    return scores
