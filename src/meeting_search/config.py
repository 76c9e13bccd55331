"""
Search pipeline configuration.

Loads retrieval limits, provider settings and response wording from
environment variables. Defaults mirror the production deployment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_NO_RESULTS_MESSAGE = "No related meeting records were found."
DEFAULT_NO_MORE_RESULTS_MESSAGE = "There are no more related meeting records."


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass
class SearchSettings:
    """Configuration for the search pipeline.

    Environment Variables:
        SEARCH_BULK_LEXICAL_LIMIT: Lexical results per bulk request (default: 5)
        SEARCH_BULK_SEMANTIC_K: Semantic results per bulk request (default: 10)
        SEARCH_CONTEXT_CAP: Candidates passed to the model in bulk mode (default: 10)
        SEARCH_PAGE_LEXICAL_LIMIT: Lexical results per paginated request (default: 20)
        SEARCH_PAGE_SEMANTIC_K: Semantic results per paginated request (default: 30)
        SEARCH_BROAD_FETCH_LIMIT: First-word candidate pool for the word fallback (default: 30)
        SEARCH_MIN_WORD_LENGTH: Shortest query word kept by the tokenizer (default: 2)
        EMBEDDING_MODEL: OpenAI embedding model (default: text-embedding-3-small)
        COMPLETION_MODEL: Chat model used for answers (default: gpt-4o-mini)
        COMPLETION_MAX_TOKENS: Answer length ceiling (default: 2000)
        COMPLETION_TEMPERATURE: Sampling temperature (default: 0.2)
        PROVIDER_TIMEOUT_S: Timeout for every provider call (default: 30)
        SEARCH_NO_RESULTS_MESSAGE / SEARCH_NO_MORE_RESULTS_MESSAGE: Empty-result wording
        USE_POSTGRES: Use PgDocumentStore instead of the in-memory store (default: false)
        USE_MOCK_EMBEDDINGS / USE_MOCK_COMPLETION: Offline providers (default: false)
    """

    bulk_lexical_limit: int = 5
    bulk_semantic_k: int = 10
    context_cap: int = 10
    page_lexical_limit: int = 20
    page_semantic_k: int = 30
    broad_fetch_limit: int = 30
    min_word_length: int = 2

    embedding_model: str = "text-embedding-3-small"
    completion_model: str = "gpt-4o-mini"
    completion_max_tokens: int = 2000
    completion_temperature: float = 0.2
    provider_timeout_s: float = 30.0

    no_results_message: str = DEFAULT_NO_RESULTS_MESSAGE
    no_more_results_message: str = DEFAULT_NO_MORE_RESULTS_MESSAGE

    use_postgres: bool = False
    use_mock_embeddings: bool = False
    use_mock_completion: bool = False

    @classmethod
    def from_env(cls) -> "SearchSettings":
        """Load settings from environment variables."""
        return cls(
            bulk_lexical_limit=int(os.environ.get("SEARCH_BULK_LEXICAL_LIMIT", "5")),
            bulk_semantic_k=int(os.environ.get("SEARCH_BULK_SEMANTIC_K", "10")),
            context_cap=int(os.environ.get("SEARCH_CONTEXT_CAP", "10")),
            page_lexical_limit=int(os.environ.get("SEARCH_PAGE_LEXICAL_LIMIT", "20")),
            page_semantic_k=int(os.environ.get("SEARCH_PAGE_SEMANTIC_K", "30")),
            broad_fetch_limit=int(os.environ.get("SEARCH_BROAD_FETCH_LIMIT", "30")),
            min_word_length=int(os.environ.get("SEARCH_MIN_WORD_LENGTH", "2")),
            embedding_model=os.environ.get("EMBEDDING_MODEL", "text-embedding-3-small"),
            completion_model=os.environ.get("COMPLETION_MODEL", "gpt-4o-mini"),
            completion_max_tokens=int(os.environ.get("COMPLETION_MAX_TOKENS", "2000")),
            completion_temperature=float(os.environ.get("COMPLETION_TEMPERATURE", "0.2")),
            provider_timeout_s=float(os.environ.get("PROVIDER_TIMEOUT_S", "30")),
            no_results_message=os.environ.get(
                "SEARCH_NO_RESULTS_MESSAGE", DEFAULT_NO_RESULTS_MESSAGE
            ),
            no_more_results_message=os.environ.get(
                "SEARCH_NO_MORE_RESULTS_MESSAGE", DEFAULT_NO_MORE_RESULTS_MESSAGE
            ),
            use_postgres=_env_bool("USE_POSTGRES", "false"),
            use_mock_embeddings=_env_bool("USE_MOCK_EMBEDDINGS", "false"),
            use_mock_completion=_env_bool("USE_MOCK_COMPLETION", "false"),
        )


# Global settings singleton
_settings: SearchSettings | None = None


def get_settings() -> SearchSettings:
    """Get the global settings (lazy-loaded from env)."""
    global _settings
    if _settings is None:
        _settings = SearchSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
