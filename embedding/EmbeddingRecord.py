# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-03
# Description: EmbeddingRecord
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

import numpy as np


@dataclass
class EmbeddingRecord:
    """Indexed snapshot of one entity: vector + the text it was built from."""
    user_id: str
    entity_type: str
    entity_id: str
    source_text: str
    vector: np.ndarray
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Any) -> "EmbeddingRecord":
        return cls(
            user_id=row.user_id,
            entity_type=row.entity_type,
            entity_id=row.entity_id,
            source_text=row.source_text,
            vector=np.asarray(row.vector, dtype=np.float32),
            created_at=row.created_at,
        )

    @property
    def key(self) -> tuple:
        return self.user_id, self.entity_type, self.entity_id

    def to_hit(self, score: float) -> Dict[str, Any]:
        return {
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "score": float(score),
            "source_text": self.source_text,
        }
