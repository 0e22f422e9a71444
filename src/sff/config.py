"""Run configuration for a single search invocation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

DEFAULT_MODEL = "minishlab/potion-retrieval-32M"
DEFAULT_LIMIT = 10
DEFAULT_EXTENSIONS = ("txt", "md", "mdx", "org")
DEFAULT_BATCH_SIZE = 128  # texts per embedding call
DEFAULT_CHUNK_SIZE = 20  # words per chunk


def default_workers() -> int:
    """Return the worker pool size: one thread per available CPU."""
    return os.cpu_count() or 1


def normalize_extensions(values: Iterable[str]) -> frozenset[str]:
    """Normalize extension arguments into a lower-case set without dots.

    Accepts repeated values as well as comma-separated lists, so
    ``["MD, .txt", "org"]`` becomes ``{"md", "txt", "org"}``.
    """
    if isinstance(values, str):
        values = [values]

    normalized = set()
    for value in values:
        for part in value.split(","):
            ext = part.strip().lstrip(".").lower()
            if ext:
                normalized.add(ext)
    return frozenset(normalized)


@dataclass(frozen=True)
class RunConfiguration:
    """Resolved options for one search run.

    Created once at the entry point and passed explicitly to every
    component. Instances are immutable.
    """

    root: Path = Path(".")
    recursive: bool = False
    model: str = DEFAULT_MODEL
    limit: int = DEFAULT_LIMIT
    extensions: frozenset[str] = field(
        default_factory=lambda: frozenset(DEFAULT_EXTENSIONS)
    )
    batch_size: int = DEFAULT_BATCH_SIZE
    chunk_size: int = DEFAULT_CHUNK_SIZE
    workers: int = field(default_factory=default_workers)

    def __post_init__(self) -> None:
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "root", Path(self.root))
        object.__setattr__(self, "extensions", normalize_extensions(self.extensions))

        if self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

    def accepts(self, path: Path) -> bool:
        """Check whether a file's extension is in the accepted set."""
        return path.suffix.lstrip(".").lower() in self.extensions
