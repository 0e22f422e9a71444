"""Batched, parallel embedding on top of a shared provider."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import numpy as np

from sff.config import DEFAULT_BATCH_SIZE, default_workers
from sff.errors import EmbeddingError, SffError
from sff.protocols import EmbeddingProvider

logger = logging.getLogger(__name__)


class BatchEmbedder:
    """Embed texts in fixed-size batches across a thread pool.

    The provider is shared by all workers and must already be loaded.
    Batches are reassembled by index, so row ``i`` of the output always
    belongs to ``texts[i]`` whatever order the workers finish in.
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        batch_size: int = DEFAULT_BATCH_SIZE,
        workers: int | None = None,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.provider = provider
        self.batch_size = batch_size
        self.workers = workers or default_workers()

    def embed_texts(self, texts: Sequence[str]) -> np.ndarray:
        """Embed every text, preserving input order.

        Returns:
            numpy array of shape (len(texts), embedding_dim)

        Raises:
            EmbeddingError: if any batch fails or returns malformed vectors
        """
        if not texts:
            return np.empty((0, self.provider.dimension), dtype=np.float32)

        batches = [
            texts[start : start + self.batch_size]
            for start in range(0, len(texts), self.batch_size)
        ]
        logger.debug(
            f"[VERBOSE] Embedding {len(texts)} texts in {len(batches)} batches "
            f"on {self.workers} workers"
        )

        results: list[np.ndarray | None] = [None] * len(batches)
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {
                executor.submit(self._embed_batch, batch): index
                for index, batch in enumerate(batches)
            }
            for future, index in futures.items():
                # result() re-raises the worker's exception
                results[index] = future.result()

        dimensions = {batch.shape[1] for batch in results}
        if len(dimensions) != 1:
            raise EmbeddingError(
                f"Inconsistent embedding dimensions across batches: {sorted(dimensions)}"
            )
        return np.concatenate(results, axis=0)

    def embed_query(self, query: str) -> np.ndarray:
        """Embed the query as a one-element batch with the same provider.

        Returns:
            1-D numpy array of length embedding_dim
        """
        return self._embed_batch([query])[0]

    def _embed_batch(self, batch: Sequence[str]) -> np.ndarray:
        try:
            vectors = self.provider.embed(batch)
        except SffError:
            raise
        except Exception as exc:
            raise EmbeddingError(f"Embedding batch of {len(batch)} texts failed: {exc}") from exc

        vectors = np.asarray(vectors, dtype=np.float32)
        if vectors.ndim != 2 or vectors.shape[0] != len(batch):
            raise EmbeddingError(
                f"Provider returned shape {vectors.shape} for a batch of {len(batch)} texts"
            )
        return vectors
