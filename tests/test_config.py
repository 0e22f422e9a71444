"""Tests for run configuration and extension handling."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from sff.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_LIMIT,
    DEFAULT_MODEL,
    RunConfiguration,
    normalize_extensions,
)

# ---------------------------------------------------------------------------
# Extension normalization
# ---------------------------------------------------------------------------


class TestNormalizeExtensions:
    def test_comma_separated_and_dotted(self):
        assert normalize_extensions(["MD, .txt"]) == {"md", "txt"}

    def test_repeated_values(self):
        assert normalize_extensions(["md", "org", "md"]) == {"md", "org"}

    def test_drops_empty_parts(self):
        assert normalize_extensions(["txt,,", " , "]) == {"txt"}

    def test_single_string(self):
        assert normalize_extensions("mdx") == {"mdx"}


# ---------------------------------------------------------------------------
# RunConfiguration
# ---------------------------------------------------------------------------


class TestRunConfiguration:
    def test_defaults(self):
        config = RunConfiguration()
        assert config.root == Path(".")
        assert config.recursive is False
        assert config.model == DEFAULT_MODEL
        assert config.limit == DEFAULT_LIMIT == 10
        assert config.batch_size == DEFAULT_BATCH_SIZE == 128
        assert config.chunk_size == DEFAULT_CHUNK_SIZE == 20
        assert config.extensions == {"txt", "md", "mdx", "org"}
        assert config.workers >= 1

    def test_root_coerced_to_path(self):
        assert RunConfiguration(root="docs").root == Path("docs")

    def test_is_immutable(self):
        config = RunConfiguration()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.limit = 3

    def test_extensions_normalized(self):
        config = RunConfiguration(extensions=frozenset({".TXT", "md,org"}))
        assert config.extensions == {"txt", "md", "org"}

    def test_accepts_is_case_insensitive(self):
        config = RunConfiguration(extensions=frozenset({"md"}))
        assert config.accepts(Path("README.MD"))
        assert config.accepts(Path("notes.md"))
        assert not config.accepts(Path("notes.txt"))
        assert not config.accepts(Path("Makefile"))

    @pytest.mark.parametrize(
        "field, value",
        [("limit", -1), ("batch_size", 0), ("chunk_size", 0), ("workers", 0)],
    )
    def test_rejects_invalid_values(self, field: str, value: int):
        with pytest.raises(ValueError, match=field):
            RunConfiguration(**{field: value})

    def test_zero_limit_allowed(self):
        assert RunConfiguration(limit=0).limit == 0
