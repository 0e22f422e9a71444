"""sff - semantic file finder."""

from sff.config import RunConfiguration
from sff.models import Chunk, ScoredResult, SearchReport
from sff.pipeline import SearchPipeline, search

__version__ = "0.3.0"

__all__ = [
    "Chunk",
    "RunConfiguration",
    "ScoredResult",
    "SearchPipeline",
    "SearchReport",
    "search",
]
