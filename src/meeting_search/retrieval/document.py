"""
Document model for the retrieval system.

Single responsibility: Define the structure of meeting-record documents
as they come back from either retrieval channel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from meeting_search.core import DocumentId


@dataclass
class Document:
    """
    An archived meeting record.

    Immutable from the pipeline's point of view; owned by the store.
    ``metadata`` carries free-form fields such as meeting_type, date,
    session_num and source.
    """
    id: DocumentId
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    embedding: np.ndarray | None = None
    score: float | None = None  # Only set by similarity search

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (no embedding)."""
        return {
            "id": self.id,
            "content": self.content,
            "metadata": dict(self.metadata),
            "score": self.score,
        }
