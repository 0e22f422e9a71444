"""Exception hierarchy for sff."""


class SffError(Exception):
    """Base class for all sff errors."""


class SearchRootError(SffError):
    """The search root does not exist or is not a directory."""


class ModelLoadError(SffError):
    """The embedding model could not be resolved or loaded."""


class EmbeddingError(SffError):
    """An embedding call failed or returned malformed vectors."""


class FileProcessingError(SffError):
    """A single file could not be turned into chunks.

    Recoverable: the pipeline records the file as skipped and moves on.
    """

    def __init__(self, path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class FileReadError(FileProcessingError):
    """The file could not be read from disk."""


class FileDecodeError(FileProcessingError):
    """The file is binary or not valid UTF-8."""
