"""Protocol for text chunking strategies."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from sff.models import Chunk


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Protocol for text chunking strategies."""

    def chunk(self, text: str, source_path: Path) -> list[Chunk]:
        """Split text into chunks tagged with their source and start line."""
        ...
