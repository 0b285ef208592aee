# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-03
# Description: CRMEmbedder
# -----------------------------------------------------------------------------
import time
from typing import List, Optional

import numpy as np
from openai import OpenAI

from config.Config import Config
from utility.logging_utils import get_class_logger


class EmbeddingProviderError(RuntimeError):
    """The embedding provider failed or returned nothing usable."""


class CRMEmbedder:
    """
    Thin wrapper over the OpenAI embeddings endpoint.

    Never returns a degenerate vector: empty input, an empty response or an
    exhausted retry budget all raise EmbeddingProviderError.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            max_retries: int = 3,
            backoff_seconds: float = 0.8,
            client=None,
            logger=None,
    ):
        self.cfg = cfg
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds
        self.logger = logger or get_class_logger(self.__class__)

        self.client = client or OpenAI(
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url or None,
        )
        self.model = cfg.openai_embed_model or "text-embedding-3-small"
        self.logger.info("OpenAI Embedder initialized (model=%s)", self.model)

    def _embed_batch(self, texts: List[str]) -> np.ndarray:
        delay = self.backoff_seconds
        for attempt in range(1, self.max_retries + 1):
            try:
                resp = self.client.embeddings.create(model=self.model, input=texts)
                arr = np.asarray([d.embedding for d in resp.data], dtype=np.float32)
                if arr.shape[0] != len(texts) or arr.size == 0:
                    raise EmbeddingProviderError(
                        f"Expected {len(texts)} embeddings, got shape {arr.shape}"
                    )
                return arr

            except Exception as e:
                self.logger.warning("Embedding batch failed (attempt %d/%d): %s", attempt, self.max_retries, e)
                if attempt == self.max_retries:
                    if isinstance(e, EmbeddingProviderError):
                        raise
                    raise EmbeddingProviderError(f"Embedding provider failed: {e}") from e
                time.sleep(delay)
                delay *= 1.7  # backoff

        # Unreachable and include for type checkers
        raise EmbeddingProviderError("Embedding provider failed")

    def embed_text(self, text: str) -> np.ndarray:
        """Embed a single text into a 1-D float32 vector."""
        if not text or not text.strip():
            raise EmbeddingProviderError("Cannot embed empty text")
        vec = self._embed_batch([text])[0]
        self.logger.debug("Embedded text (chars=%d, dim=%d)", len(text), vec.shape[0])
        return vec

    def embed_texts(self, texts: List[str], batch_size: Optional[int] = 64) -> List[np.ndarray]:
        items = [t for t in texts if t and t.strip()]
        if len(items) != len(texts):
            raise EmbeddingProviderError("Cannot embed empty text")

        out: List[np.ndarray] = []
        step = batch_size or len(items) or 1
        for i in range(0, len(items), step):
            out.extend(self._embed_batch(items[i:i + step]))
        return out

    def healthcheck(self) -> bool:
        try:
            vec = self.embed_text("CRM embedding healthcheck")
            return vec.size > 0
        except EmbeddingProviderError as e:
            self.logger.warning("Embedding healthcheck failed: %s", e)
            return False
