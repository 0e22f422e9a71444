"""Fixed word-count chunking strategy."""

import re
from pathlib import Path

from sff.config import DEFAULT_CHUNK_SIZE
from sff.errors import FileReadError
from sff.models import Chunk
from sff.utils.binary import decode_text

# Same separators as str.split(); each match is one word
_WORD_RE = re.compile(r"\S+")


class WordChunker:
    """Split text into runs of ``chunk_size`` whitespace-delimited words.

    The last chunk of a text may be shorter; it is still emitted. Each
    chunk records the line its first word sits on, so results can point
    back into the file.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.chunk_size = chunk_size

    def chunk(self, text: str, source_path: Path) -> list[Chunk]:
        """Split text into chunks with line information.

        Args:
            text: The text content to chunk
            source_path: Path of the file the text came from

        Returns:
            List of Chunk objects in word order
        """
        if not text or not text.strip():
            return []

        chunks = []
        words: list[str] = []
        start_line = 1
        line = 1
        offset = 0

        for match in _WORD_RE.finditer(text):
            # Advance the line counter over everything since the last word
            line += text.count("\n", offset, match.start())
            offset = match.start()

            if not words:
                start_line = line
            words.append(match.group())

            if len(words) == self.chunk_size:
                chunks.append(self._make_chunk(words, source_path, start_line, len(chunks)))
                words = []

        # Short trailing chunk
        if words:
            chunks.append(self._make_chunk(words, source_path, start_line, len(chunks)))

        return chunks

    @staticmethod
    def _make_chunk(words: list[str], source_path: Path, start_line: int, index: int) -> Chunk:
        return Chunk(
            text=" ".join(words),
            source_path=source_path,
            start_line=start_line,
            chunk_index=index,
        )


def chunk_file(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> list[Chunk]:
    """Read a file and split its text into chunks.

    Raises:
        FileReadError: if the file cannot be read
        FileDecodeError: if the file is binary or not valid UTF-8
    """
    try:
        raw_content = path.read_bytes()
    except OSError as exc:
        raise FileReadError(path, exc.strerror or str(exc)) from exc

    text = decode_text(path, raw_content)
    return WordChunker(chunk_size).chunk(text, path)
