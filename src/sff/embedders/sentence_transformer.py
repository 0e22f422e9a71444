"""SentenceTransformer-based embedding provider."""

import logging
from typing import Sequence

import numpy as np
from sentence_transformers import SentenceTransformer

from sff.config import DEFAULT_MODEL
from sff.errors import EmbeddingError, ModelLoadError

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder:
    """Embedding provider using sentence-transformers library.

    Uses minishlab/potion-retrieval-32M by default, a static embedding
    model that is fast enough to embed thousands of chunks per query on
    CPU. Any Hub identifier or local model path is accepted.
    """

    def __init__(self, model_name: str | None = None, device: str | None = None):
        """Initialize the embedder.

        Args:
            model_name: Hub identifier or local path of the model.
                       Defaults to minishlab/potion-retrieval-32M.
            device: Torch device to run on; sentence-transformers picks
                    one when omitted.
        """
        self._model_name = model_name or DEFAULT_MODEL
        self._device = device
        self._model: SentenceTransformer | None = None

    def load(self) -> "SentenceTransformerEmbedder":
        """Load the model once, before any worker uses it.

        Raises:
            ModelLoadError: if the model cannot be resolved or loaded
        """
        if self._model is None:
            try:
                self._model = SentenceTransformer(self._model_name, device=self._device)
            except Exception as exc:
                raise ModelLoadError(
                    f"Failed to load embedding model '{self._model_name}': {exc}"
                ) from exc
            logger.debug(
                f"[VERBOSE] Loaded model {self._model_name} (dim={self.dimension})"
            )
        return self

    @property
    def model(self) -> SentenceTransformer:
        """Return the loaded model, loading it on first access."""
        if self._model is None:
            self.load()
        return self._model

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self.model.get_sentence_embedding_dimension()

    @property
    def model_name(self) -> str:
        """Return identifier for the model used."""
        return self._model_name

    def embed(self, texts: Sequence[str]) -> np.ndarray:
        """Generate embeddings for a batch of texts.

        Args:
            texts: Text strings to embed

        Returns:
            numpy array of shape (len(texts), embedding_dim)
        """
        if not texts:
            return np.empty((0, self.dimension), dtype=np.float32)

        try:
            embeddings = self.model.encode(
                list(texts),
                convert_to_numpy=True,
                normalize_embeddings=True,  # For cosine similarity
                show_progress_bar=False,
            )
        except Exception as exc:
            raise EmbeddingError(f"Embedding batch of {len(texts)} texts failed: {exc}") from exc
        return np.asarray(embeddings, dtype=np.float32)
