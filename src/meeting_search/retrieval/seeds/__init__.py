"""
Seed data for the retrieval system.

Externalized sample meeting records for development stores and demos.
"""

from meeting_search.retrieval.seeds.meeting_records import (
    get_meeting_records,
    seed_document_store,
)

__all__ = ["get_meeting_records", "seed_document_store"]
