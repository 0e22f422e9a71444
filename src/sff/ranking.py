"""Cosine similarity scoring and top-K selection."""

from typing import Sequence

import numpy as np

from sff.models import Chunk, ScoredResult


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Compute cosine similarity between two vectors.

    Returns 0.0 when either vector has zero magnitude.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


def cosine_similarities(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of ``query`` against every row of ``matrix``.

    Rows with zero magnitude, or a zero query, score 0.0. Computed in
    float64.
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    query = np.asarray(query, dtype=np.float64)
    if matrix.shape[0] == 0:
        return np.zeros(0, dtype=np.float64)

    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    scores = np.zeros_like(dots)
    np.divide(dots, norms, out=scores, where=norms > 0)
    return scores


def rank(
    query_vector: np.ndarray,
    chunks: Sequence[Chunk],
    vectors: np.ndarray,
    limit: int,
) -> list[ScoredResult]:
    """Score every chunk against the query and keep the best ``limit``.

    Ties keep their input order, so identical inputs always rank
    identically.

    Args:
        query_vector: Embedding of the query
        chunks: Chunks in the same order as ``vectors``
        vectors: Chunk embeddings, one row per chunk
        limit: Maximum number of results

    Returns:
        Results sorted by descending score, at most ``limit`` long
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    if len(chunks) != len(vectors):
        raise ValueError(f"Got {len(chunks)} chunks but {len(vectors)} vectors")
    if not chunks:
        return []

    scores = cosine_similarities(query_vector, vectors)
    # Stable sort on the negated scores: descending, ties in input order
    order = np.argsort(-scores, kind="stable")[:limit]
    return [ScoredResult(chunk=chunks[i], score=float(scores[i])) for i in order]
