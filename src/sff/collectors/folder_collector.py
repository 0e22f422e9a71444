"""Collector for candidate files under a local folder."""

import logging
import os
from pathlib import Path

from sff.config import RunConfiguration
from sff.errors import SearchRootError

logger = logging.getLogger(__name__)


class FolderCollector:
    """Find files with accepted extensions under a search root."""

    def __init__(self, config: RunConfiguration):
        self.config = config

    def collect(self) -> list[Path]:
        """Return matching file paths, sorted for reproducible ordering.

        Raises:
            SearchRootError: if the root does not exist or is not a directory
        """
        root = self.config.root
        if not root.exists():
            raise SearchRootError(f"Search path does not exist: {root}")
        if not root.is_dir():
            raise SearchRootError(f"Search path is not a directory: {root}")

        if self.config.recursive:
            candidates = self._walk(root)
        else:
            candidates = self._list(root)

        files = [path for path in candidates if self._accept(root, path)]
        files.sort(key=str)
        logger.debug(f"[VERBOSE] Collected {len(files)} files under {root}")
        return files

    def _list(self, root: Path) -> list[Path]:
        """Direct children of the root."""
        try:
            return list(root.iterdir())
        except OSError as exc:
            raise SearchRootError(f"Cannot list search path {root}: {exc}") from exc

    def _walk(self, root: Path) -> list[Path]:
        """Every file in the subtree, pruning hidden directories."""

        def on_error(exc: OSError) -> None:
            # Only the root is fatal; unreadable subdirectories are skipped
            if Path(exc.filename) == root:
                raise SearchRootError(f"Cannot list search path {root}: {exc}") from exc
            logger.debug(f"[VERBOSE] Skipping unreadable directory {exc.filename}: {exc}")

        found = []
        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            # Prune in place so os.walk does not descend into hidden folders
            dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            found.extend(Path(dirpath) / name for name in filenames)
        return found

    def _accept(self, root: Path, path: Path) -> bool:
        """Check if a discovered entry should be chunked.

        Skips hidden entries, symlinks, non-regular files and files with
        extensions outside the accepted set.
        """
        rel_path = path.relative_to(root)
        if any(part.startswith(".") for part in rel_path.parts):
            logger.debug(f"[VERBOSE] Skipping hidden entry {path}")
            return False

        if path.is_symlink():
            logger.debug(f"[VERBOSE] Skipping symlink {path}")
            return False

        try:
            if not path.is_file():
                return False
        except OSError as exc:
            logger.debug(f"[VERBOSE] Skipping inaccessible entry {path}: {exc}")
            return False

        return self.config.accepts(path)


def collect_files(config: RunConfiguration) -> list[Path]:
    """Collect candidate files for a run.

    Args:
        config: Run configuration (root, recursive flag, extensions)

    Returns:
        Sorted list of matching file paths; empty if nothing matches
    """
    return FolderCollector(config).collect()
