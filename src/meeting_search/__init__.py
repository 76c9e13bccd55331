"""
meeting_search - hybrid lexical + semantic search over archived meeting records.

Keyword matches and embedding neighbours are merged lexical-first into one
deduplicated candidate list, which grounds an LLM answer. A paginated mode
hands out one record per call, driven by the caller's list of seen ids.
"""

__version__ = "0.1.0"
