"""
Document store implementations.

Pattern: Protocol → Production impl → Test double → Factory

This module contains:
1. StoreConfig - Configuration dataclass
2. PgDocumentStore - PostgreSQL with pgvector (production)
3. InMemoryDocumentStore - In-memory store (testing/development)
4. get_document_store() - Factory function

Both stores serve the two retrieval channels from one table: a
case-insensitive substring match over ``content`` for the lexical
channel, and cosine similarity over ``embedding`` for the semantic one.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

import numpy as np

from meeting_search.core import EmbeddingProvider
from meeting_search.retrieval.document import Document


# Optional: Only import psycopg if available (for local dev without postgres)
try:
    import psycopg
    from psycopg.types.json import Jsonb
    from pgvector.psycopg import register_vector

    PGVECTOR_AVAILABLE = True
except ImportError:
    PGVECTOR_AVAILABLE = False


# ---------------------------------------------------------------------------
# CONFIGURATION
# ---------------------------------------------------------------------------


@dataclass
class StoreConfig:
    """Configuration for the document store."""

    connection_string: str = "postgresql://localhost/meeting_records"
    embedding_dim: int = 1536
    table_name: str = "documents"
    connect_timeout_s: int = 10


def _like_pattern(text: str) -> str:
    """Wrap ``text`` for ILIKE, escaping the LIKE wildcards it contains."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _embedding_text(doc: Document) -> str:
    return doc.content


# ---------------------------------------------------------------------------
# PGVECTOR STORE (Production)
# ---------------------------------------------------------------------------


class PgDocumentStore:
    """
    PostgreSQL document store using pgvector.

    Dependencies are INJECTED, not created internally. The embedding
    provider is only used when inserting documents without a vector;
    searches receive a ready-made query vector.
    """

    def __init__(
        self,
        config: StoreConfig,
        embeddings: EmbeddingProvider,
    ):
        self.config = config
        self._embeddings = embeddings
        self._conn = None

    def connect(self) -> None:
        """Establish database connection."""
        if not PGVECTOR_AVAILABLE:
            raise ImportError(
                "pgvector not available. Install with: pip install pgvector psycopg[binary]"
            )

        self._conn = psycopg.connect(
            self.config.connection_string,
            autocommit=True,
            connect_timeout=self.config.connect_timeout_s,
        )
        self._conn.execute("CREATE EXTENSION IF NOT EXISTS vector")
        register_vector(self._conn)

    def close(self) -> None:
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def create_schema(self) -> None:
        """Create the documents table and indexes."""
        if not self._conn:
            self.connect()

        self._conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.config.table_name} (
                id TEXT PRIMARY KEY,
                content TEXT NOT NULL,
                metadata JSONB NOT NULL DEFAULT '{{}}'::jsonb,
                embedding vector({self.config.embedding_dim})
            )
        """
        )

        # HNSW index for the semantic channel
        self._conn.execute(
            f"""
            CREATE INDEX IF NOT EXISTS {self.config.table_name}_embedding_idx
            ON {self.config.table_name}
            USING hnsw (embedding vector_cosine_ops)
            WITH (m = 16, ef_construction = 64)
        """
        )

    def insert_document(self, doc: Document) -> None:
        """Insert or update a document with its embedding."""
        if not self._conn:
            self.connect()

        if doc.embedding is None:
            doc.embedding = self._embeddings.embed(_embedding_text(doc))

        self._conn.execute(
            f"""
            INSERT INTO {self.config.table_name} (id, content, metadata, embedding)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (id) DO UPDATE SET
                content = EXCLUDED.content,
                metadata = EXCLUDED.metadata,
                embedding = EXCLUDED.embedding
            """,
            (str(doc.id), doc.content, Jsonb(doc.metadata), doc.embedding),
        )

    def insert_documents_batch(self, docs: list[Document]) -> None:
        """Batch insert documents."""
        pending = [doc for doc in docs if doc.embedding is None]
        if pending:
            vectors = self._embeddings.embed_batch([_embedding_text(d) for d in pending])
            for doc, vector in zip(pending, vectors):
                doc.embedding = vector

        for doc in docs:
            self.insert_document(doc)

    def find_containing(self, text: str, limit: int) -> list[Document]:
        """Case-insensitive substring match over content."""
        if not self._conn:
            self.connect()

        rows = self._conn.execute(
            f"""
            SELECT id, content, metadata
            FROM {self.config.table_name}
            WHERE content ILIKE %s ESCAPE '\\'
            ORDER BY id
            LIMIT %s
            """,
            (_like_pattern(text), limit),
        ).fetchall()

        return [Document(id=row[0], content=row[1], metadata=row[2] or {}) for row in rows]

    def search_similar(self, embedding: np.ndarray, k: int) -> list[Document]:
        """Top-k by cosine distance, best first."""
        if not self._conn:
            self.connect()

        rows = self._conn.execute(
            f"""
            SELECT id, content, metadata,
                   embedding <=> %s AS distance
            FROM {self.config.table_name}
            WHERE embedding IS NOT NULL
            ORDER BY distance
            LIMIT %s
            """,
            (embedding, k),
        ).fetchall()

        return [
            Document(
                id=row[0],
                content=row[1],
                metadata=row[2] or {},
                score=1 - row[3],  # Convert distance to similarity
            )
            for row in rows
        ]


# ---------------------------------------------------------------------------
# IN-MEMORY STORE (Testing/Development)
# ---------------------------------------------------------------------------


class InMemoryDocumentStore:
    """
    In-memory document store for development/testing.

    Implements the same interface as PgDocumentStore but doesn't require
    Postgres. Lexical matches come back in insertion order; similarity
    results are ranked by cosine similarity.
    """

    def __init__(self, embeddings: EmbeddingProvider):
        self._embeddings = embeddings
        self._documents: dict = {}

    def connect(self) -> None:
        """No-op for in-memory store."""
        pass

    def close(self) -> None:
        """No-op for in-memory store."""
        pass

    def create_schema(self) -> None:
        """No-op for in-memory store."""
        pass

    def __len__(self) -> int:
        return len(self._documents)

    def insert_document(self, doc: Document) -> None:
        """Insert document into memory."""
        if doc.embedding is None:
            doc.embedding = self._embeddings.embed(_embedding_text(doc))
        self._documents[doc.id] = doc

    def insert_documents_batch(self, docs: list[Document]) -> None:
        """Batch insert."""
        pending = [doc for doc in docs if doc.embedding is None]
        if pending:
            vectors = self._embeddings.embed_batch([_embedding_text(d) for d in pending])
            for doc, vector in zip(pending, vectors):
                doc.embedding = vector

        for doc in docs:
            self._documents[doc.id] = doc

    def find_containing(self, text: str, limit: int) -> list[Document]:
        """Case-insensitive substring match, insertion order."""
        needle = text.lower()
        matches = [
            Document(id=doc.id, content=doc.content, metadata=doc.metadata)
            for doc in self._documents.values()
            if needle in doc.content.lower()
        ]
        return matches[:limit]

    def _cosine_similarity(self, a: np.ndarray, b: np.ndarray) -> float:
        """Calculate cosine similarity between two vectors."""
        return float(np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b)))

    def search_similar(self, embedding: np.ndarray, k: int) -> list[Document]:
        """Search using cosine similarity."""
        scored = [
            (doc, self._cosine_similarity(embedding, doc.embedding))
            for doc in self._documents.values()
            if doc.embedding is not None
        ]
        scored.sort(key=lambda x: x[1], reverse=True)

        return [
            Document(id=doc.id, content=doc.content, metadata=doc.metadata, score=score)
            for doc, score in scored[:k]
        ]


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


def get_document_store(
    use_postgres: bool = False,
    embeddings: EmbeddingProvider | None = None,
    config: StoreConfig | None = None,
) -> PgDocumentStore | InMemoryDocumentStore:
    """
    Factory function to get the appropriate document store.

    Args:
        use_postgres: Use PostgreSQL store (default: False for dev)
        embeddings: Embedding provider (will create one if not provided)
        config: Store configuration (uses defaults if not provided)

    Returns:
        DocumentStore implementation

    Raises:
        ImportError: Postgres requested but psycopg/pgvector not installed
    """
    if embeddings is None:
        from meeting_search.embeddings import get_embedding_provider

        use_mock = os.environ.get("USE_MOCK_EMBEDDINGS", "true").lower() == "true"
        embeddings = get_embedding_provider(use_mock=use_mock and not use_postgres)

    if use_postgres:
        if not PGVECTOR_AVAILABLE:
            raise ImportError(
                "USE_POSTGRES requested but pgvector is not available. "
                "Install with: pip install pgvector psycopg[binary]"
            )
        config = config or StoreConfig(
            connection_string=os.environ.get(
                "DATABASE_URL", "postgresql://localhost/meeting_records"
            )
        )
        return PgDocumentStore(config, embeddings)

    return InMemoryDocumentStore(embeddings)
