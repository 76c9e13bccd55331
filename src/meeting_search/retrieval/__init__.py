"""
Retrieval module - the two search channels and their merge.

This module provides:
- Document: The meeting-record model
- StoreConfig / PgDocumentStore / InMemoryDocumentStore / get_document_store
- LexicalMatcher: strict-to-loose keyword cascade
- SemanticMatcher: embedding nearest-neighbour recall
- merge_candidates: lexical-first, id-deduplicated merge
"""

# Document model
from meeting_search.retrieval.document import Document

# Store implementations and factory
from meeting_search.retrieval.store import (
    StoreConfig,
    PgDocumentStore,
    InMemoryDocumentStore,
    get_document_store,
)

# Channels and merge
from meeting_search.retrieval.lexical import LexicalMatch, LexicalMatcher, tokenize_query
from meeting_search.retrieval.semantic import SemanticMatcher
from meeting_search.retrieval.merge import merge_candidates

# Seed data
from meeting_search.retrieval.seeds import (
    get_meeting_records,
    seed_document_store,
)

__all__ = [
    "Document",
    "StoreConfig",
    "PgDocumentStore",
    "InMemoryDocumentStore",
    "get_document_store",
    "LexicalMatch",
    "LexicalMatcher",
    "tokenize_query",
    "SemanticMatcher",
    "merge_candidates",
    "get_meeting_records",
    "seed_document_store",
]
