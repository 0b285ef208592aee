# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-10
# Description: EmbeddingHealth
# -----------------------------------------------------------------------------
import logging
import time
from typing import Optional

from embedding.CRMEmbedder import CRMEmbedder, EmbeddingProviderError
from utility.logging_utils import get_logger

# Known output sizes, used when no expected_dim is given
MODEL_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class EmbeddingHealth:
    """
    Smoke test for the OpenAI embeddings endpoint.

    Verifies:
      - The embedding call completes successfully
      - The response contains a non-empty vector
      - The vector dimension matches the expected dimension (when known)
    """

    def __init__(
        self,
        embedder: CRMEmbedder,
        expected_dim: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.embedder = embedder
        self.expected_dim = expected_dim or MODEL_DIMENSIONS.get(embedder.model)
        self.logger = logger or get_logger(__name__)

    def run(self) -> bool:
        test_text = "CRM embedding healthcheck"
        self.logger.info("Running embedding healthcheck using model: %s", self.embedder.model)

        try:
            start = time.time()
            vec = self.embedder.embed_text(test_text)
            elapsed_ms = (time.time() - start) * 1000.0
        except EmbeddingProviderError as e:
            self.logger.error("Embedding healthcheck FAILED: %s", e)
            return False

        dim = int(vec.shape[0])
        self.logger.info("Embedding call succeeded in %.1f ms. Returned dimension: %d", elapsed_ms, dim)

        if self.expected_dim is not None and dim != self.expected_dim:
            self.logger.warning("Dimension mismatch: expected %d, got %d.", self.expected_dim, dim)
            return False

        self.logger.info("Embedding healthcheck PASSED.")
        return True
