"""Chunking strategies for sff."""

from sff.chunkers.word_chunker import WordChunker, chunk_file

__all__ = ["WordChunker", "chunk_file"]
