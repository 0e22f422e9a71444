"""Embedding providers and batching for vector generation."""

from sff.embedders.batching import BatchEmbedder
from sff.embedders.sentence_transformer import SentenceTransformerEmbedder

__all__ = ["BatchEmbedder", "SentenceTransformerEmbedder"]
