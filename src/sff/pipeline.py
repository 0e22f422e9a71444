"""Scan, chunk, embed and rank: one full search run."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sff.chunkers import chunk_file
from sff.collectors import collect_files
from sff.config import RunConfiguration
from sff.embedders import BatchEmbedder, SentenceTransformerEmbedder
from sff.errors import EmbeddingError, FileProcessingError
from sff.models import Chunk, SearchReport, SkippedFile
from sff.protocols import EmbeddingProvider
from sff.ranking import rank

logger = logging.getLogger(__name__)


@contextmanager
def timed_stage(report: SearchReport, name: str, cpu_bound: bool) -> Iterator[None]:
    """Record how long a stage took and log it at DEBUG."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        report.timings[name] = elapsed
        bound_type = "CPU-bound" if cpu_bound else "I/O-bound"
        logger.debug(f"[VERBOSE] {name}: {elapsed * 1000:.2f} ms ({bound_type})")


def chunk_files(
    files: list[Path], config: RunConfiguration
) -> tuple[list[Chunk], list[SkippedFile]]:
    """Chunk every file on the worker pool.

    Files that cannot be read or decoded are logged and skipped. Chunks
    come back grouped by file in the order of ``files``, regardless of
    which worker finished first.
    """

    def chunk_one(path: Path) -> list[Chunk] | SkippedFile:
        try:
            return chunk_file(path, config.chunk_size)
        except FileProcessingError as exc:
            return SkippedFile(path=path, reason=exc.reason)

    chunks: list[Chunk] = []
    skipped: list[SkippedFile] = []
    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        # map() yields in submission order
        for outcome in executor.map(chunk_one, files):
            if isinstance(outcome, SkippedFile):
                logger.warning(f"Skipping {outcome.path}: {outcome.reason}")
                skipped.append(outcome)
            else:
                chunks.extend(outcome)
    return chunks, skipped


class SearchPipeline:
    """Run one search from a configuration.

    The embedding provider is created lazily and loaded once, only if
    there is something to embed. Pass ``provider`` to supply an already
    constructed one.
    """

    def __init__(self, config: RunConfiguration, provider: EmbeddingProvider | None = None):
        self.config = config
        self._provider = provider

    def run(self, query: str) -> SearchReport:
        """Search the configured root for passages similar to ``query``.

        Raises:
            SearchRootError: if the root is missing or not a directory
            ModelLoadError: if the embedding model cannot be loaded
            EmbeddingError: if embedding the query or any chunk fails
        """
        config = self.config
        report = SearchReport(query=query)

        with timed_stage(report, "File Discovery, Reading & Chunking", cpu_bound=False):
            files = collect_files(config)
            chunks, report.skipped = chunk_files(files, config)

        report.chunk_count = len(chunks)
        report.file_count = len({chunk.source_path for chunk in chunks})
        if not chunks:
            logger.debug("[VERBOSE] No chunks to embed; skipping model load")
            return report

        with timed_stage(report, "Model Loading", cpu_bound=False):
            provider = self._load_provider()

        embedder = BatchEmbedder(provider, batch_size=config.batch_size, workers=config.workers)

        with timed_stage(report, "Query Embedding", cpu_bound=True):
            query_vector = embedder.embed_query(query)

        with timed_stage(report, "Chunk Embedding Generation", cpu_bound=True):
            vectors = embedder.embed_texts([chunk.text for chunk in chunks])

        if vectors.shape[1] != query_vector.shape[0]:
            raise EmbeddingError(
                f"Query vector has dimension {query_vector.shape[0]} "
                f"but chunk vectors have dimension {vectors.shape[1]}"
            )

        with timed_stage(report, "Similarity Calculation & Sorting", cpu_bound=True):
            report.results = rank(query_vector, chunks, vectors, config.limit)

        return report

    def _load_provider(self) -> EmbeddingProvider:
        if self._provider is None:
            self._provider = SentenceTransformerEmbedder(self.config.model).load()
        return self._provider


def search(
    query: str, config: RunConfiguration, provider: EmbeddingProvider | None = None
) -> SearchReport:
    """Convenience wrapper around ``SearchPipeline(config, provider).run(query)``."""
    return SearchPipeline(config, provider).run(query)
