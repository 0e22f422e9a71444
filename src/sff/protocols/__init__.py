"""Protocol definitions for swappable pipeline components."""

from sff.protocols.chunker import ChunkingStrategy
from sff.protocols.embedder import EmbeddingProvider

__all__ = ["EmbeddingProvider", "ChunkingStrategy"]
