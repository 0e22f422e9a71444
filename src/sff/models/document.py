"""Core data models for chunks and search results."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Chunk:
    """A run of consecutive words taken from one file."""

    text: str
    source_path: Path
    start_line: int  # 1-based line of the first word
    chunk_index: int = 0


@dataclass(frozen=True)
class ScoredResult:
    """A chunk paired with its similarity to the query."""

    chunk: Chunk
    score: float

    @property
    def path(self) -> Path:
        return self.chunk.source_path

    @property
    def line(self) -> int:
        return self.chunk.start_line

    @property
    def text(self) -> str:
        return self.chunk.text

    def to_dict(self) -> dict:
        """Return the structured record consumed by the renderers."""
        return {
            "path": str(self.path),
            "line": self.line,
            "score": self.score,
            "text": self.text,
        }


@dataclass(frozen=True)
class SkippedFile:
    """A file that was left out of the run, and why."""

    path: Path
    reason: str


@dataclass
class SearchReport:
    """Everything one search run produced."""

    query: str
    results: list[ScoredResult] = field(default_factory=list)
    file_count: int = 0
    chunk_count: int = 0
    skipped: list[SkippedFile] = field(default_factory=list)
    timings: dict[str, float] = field(default_factory=dict)  # stage -> seconds
