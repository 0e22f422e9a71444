"""Shared fixtures for tests: synthetic directory trees, no model downloads."""

from __future__ import annotations

import hashlib
import threading
from pathlib import Path

import numpy as np
import pytest

from sff.config import RunConfiguration

DIM = 1024


# ---------------------------------------------------------------------------
# Fake embedding provider
# ---------------------------------------------------------------------------


class FakeEmbedder:
    """Deterministic bag-of-words embeddings.

    Each word is hashed into one of ``dim`` buckets, so texts that share
    words point in similar directions. Records every batch it receives.
    """

    def __init__(self, dim: int = DIM):
        self._dim = dim
        self._lock = threading.Lock()
        self.batches: list[list[str]] = []

    @property
    def dimension(self) -> int:
        return self._dim

    @property
    def model_name(self) -> str:
        return "fake-bag-of-words"

    def embed(self, texts):
        with self._lock:
            self.batches.append(list(texts))
        return np.stack([self._embed_one(t) for t in texts]) if texts else np.empty((0, self._dim))

    def _embed_one(self, text: str) -> np.ndarray:
        vec = np.zeros(self._dim, dtype=np.float32)
        for word in text.lower().split():
            digest = hashlib.sha256(word.encode()).digest()
            vec[int.from_bytes(digest[:4], "little") % self._dim] += 1.0
        norm = np.linalg.norm(vec)
        return vec / norm if norm else vec


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


# ---------------------------------------------------------------------------
# Directory fixtures
# ---------------------------------------------------------------------------


def words(prefix: str, count: int) -> str:
    """Return ``count`` distinct words, space separated."""
    return " ".join(f"{prefix}{i}" for i in range(count))


@pytest.fixture
def two_file_root(tmp_path: Path) -> Path:
    """a.txt with 25 words and b.txt with 15 words."""
    (tmp_path / "a.txt").write_text(words("alpha", 25))
    (tmp_path / "b.txt").write_text(words("beta", 15))
    return tmp_path


@pytest.fixture
def notes_root(tmp_path: Path) -> Path:
    """A small nested tree of notes with a few distractors."""
    (tmp_path / "cooking.md").write_text(
        "# Pasta\n\nBoil the pasta in salted water.\nDrain and add tomato sauce.\n"
    )
    (tmp_path / "garden.txt").write_text(
        "Water the tomato plants every morning.\nPrune the roses in spring.\n"
    )
    sub = tmp_path / "projects"
    sub.mkdir()
    (sub / "rust.org").write_text("* Rust\nOwnership and borrowing rules for the compiler.\n")
    (sub / "deep").mkdir()
    (sub / "deep" / "notes.mdx").write_text("Kubernetes pods restart on failure.\n")

    hidden = tmp_path / ".cache"
    hidden.mkdir()
    (hidden / "secret.txt").write_text("pasta tomato secret")
    (tmp_path / ".hidden.md").write_text("pasta hidden")
    (tmp_path / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")
    (tmp_path / "script.py").write_text("print('pasta')\n")
    return tmp_path


@pytest.fixture
def config_for():
    """Build a RunConfiguration for a root with test-friendly defaults."""

    def _make(root: Path, **overrides) -> RunConfiguration:
        options = {"root": root, "workers": 4}
        options.update(overrides)
        return RunConfiguration(**options)

    return _make
