# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-04
# Description: VectorSimilarity
# -----------------------------------------------------------------------------
from typing import Sequence, Union

import numpy as np

VectorLike = Union[Sequence[float], np.ndarray]


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """
    Cosine of the angle between two vectors, in [-1, 1].

    Raises ValueError when the lengths differ. A zero-norm vector has no
    direction, so its similarity to anything is 0.0 rather than NaN.
    """
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()

    if va.shape[0] != vb.shape[0]:
        raise ValueError(f"Vector length mismatch: {va.shape[0]} != {vb.shape[0]}")

    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    score = float(np.dot(va, vb) / (norm_a * norm_b))
    return max(-1.0, min(1.0, score))
