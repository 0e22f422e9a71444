"""Data models for sff."""

from sff.models.document import Chunk, ScoredResult, SearchReport, SkippedFile

__all__ = ["Chunk", "ScoredResult", "SearchReport", "SkippedFile"]
