"""
Error taxonomy and the failure policy table.

Retrieval channels and providers fail differently on purpose:

    source           policy    effect
    ---------------  --------  ---------------------------------------------
    lexical_store    degrade   logged, channel contributes no documents
    vector_store     degrade   logged, channel contributes no documents
    embedding        fatal     EmbeddingError propagates, request fails (500)
    completion       fatal     CompletionError propagates, request fails (500)

"No candidates" is not an error: the graph routes it to an explicit
empty-result answer.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Base class for all pipeline errors."""


class ProviderFailure(SearchError):
    """An embedding or completion provider errored, timed out or returned garbage."""


class EmbeddingError(ProviderFailure):
    """The embedding provider call failed or returned a malformed vector."""


class CompletionError(ProviderFailure):
    """The completion provider call failed or returned a malformed payload."""


class InputMalformed(SearchError):
    """The request could not be turned into a valid query."""


class RetrievalDegraded(SearchError):
    """A retrieval channel failed and was dropped from the merge."""

    def __init__(self, source: FailureSource, cause: BaseException):
        self.source = source
        self.cause = cause
        super().__init__(f"{source.value} channel degraded: {cause}")


class FailureSource(str, Enum):
    LEXICAL_STORE = "lexical_store"
    VECTOR_STORE = "vector_store"
    EMBEDDING = "embedding"
    COMPLETION = "completion"


class FailurePolicy(str, Enum):
    DEGRADE = "degrade"
    FATAL = "fatal"


FAILURE_POLICY: dict[FailureSource, FailurePolicy] = {
    FailureSource.LEXICAL_STORE: FailurePolicy.DEGRADE,
    FailureSource.VECTOR_STORE: FailurePolicy.DEGRADE,
    FailureSource.EMBEDDING: FailurePolicy.FATAL,
    FailureSource.COMPLETION: FailurePolicy.FATAL,
}

# Error raised for a fatal source when the collaborator fails with anything
# that is not already a SearchError
FATAL_ERRORS: dict[FailureSource, type[SearchError]] = {
    FailureSource.LEXICAL_STORE: ProviderFailure,
    FailureSource.VECTOR_STORE: ProviderFailure,
    FailureSource.EMBEDDING: EmbeddingError,
    FailureSource.COMPLETION: CompletionError,
}


def guarded_call(source: FailureSource, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    Call ``fn`` under the policy registered for ``source``.

    Degradable sources swallow the failure, log it and return ``[]``.
    Fatal sources re-raise: SearchErrors untouched, anything else wrapped
    in the error type FATAL_ERRORS registers for the source.

    Args:
        source: Which collaborator is being called
        fn: The collaborator call

    Returns:
        Whatever ``fn`` returned, or ``[]`` for a degraded channel
    """
    try:
        return fn(*args, **kwargs)
    except Exception as e:
        if FAILURE_POLICY[source] is FailurePolicy.FATAL:
            if isinstance(e, SearchError):
                raise
            raise FATAL_ERRORS[source](f"{source.value} failed: {e}") from e

        degraded = RetrievalDegraded(source, e)
        logger.warning("Retrieval degraded: %s", degraded)
        return []
