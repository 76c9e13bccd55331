"""
Answer synthesis - grounded answer generation over the assembled context.

Prompt construction is a pure function, testable without any provider.
The synthesizer returns the model's text unmodified. Provider failures are
fatal: they surface as CompletionError at the request's error boundary.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from meeting_search.core import FailureSource, guarded_call
from meeting_search.search.state import SearchState

if TYPE_CHECKING:
    from meeting_search.core import CompletionProvider

logger = logging.getLogger(__name__)


def build_answer_prompt(query: str, context: str) -> str:
    """
    Build the grounded-answer prompt.

    This is a PURE FUNCTION - same inputs always produce same output.
    """
    return f"""You answer questions about archived meeting records.

QUESTION: "{query}"

RECORDS:
{context}

Instructions:
- Answer ONLY from the records above. Do not use outside knowledge.
- When you state a fact, quote the original wording and cite it as [Record n].
- Mention the speaker, the meeting and the policy context where the record gives them.
- Metadata shown as "unknown" is missing from the archive; do not guess it.
- If the records do not support an answer, say so explicitly instead of answering."""


class AnswerSynthesizer:
    """Sends the grounded prompt to a completion provider."""

    def __init__(self, completion: CompletionProvider):
        self._completion = completion

    def synthesize(self, query: str, context: str) -> str:
        prompt = build_answer_prompt(query, context)
        return guarded_call(FailureSource.COMPLETION, self._completion.complete, prompt)


def create_synthesize_node(synthesizer: AnswerSynthesizer) -> Callable[[SearchState], dict]:
    """Factory for the synthesis node."""

    def synthesize_answer(state: SearchState) -> dict:
        """
        Reads: query, context
        Writes: answer, synthesis_latency_ms
        """
        start = time.time()
        answer = synthesizer.synthesize(state["query"], state["context"])
        latency = (time.time() - start) * 1000
        logger.debug("Synthesized answer in %.0f ms", latency)

        return {"answer": answer, "synthesis_latency_ms": latency}

    return synthesize_answer


def create_no_results_node(
    no_results_message: str,
    no_more_results_message: str,
) -> Callable[[SearchState], dict]:
    """
    Factory for the empty-result branch.

    Reached when the merge produced nothing. The completion provider is
    never called. A caller that sent exclusions has walked past the last
    candidate, so it gets the "no more" wording.
    """

    def no_results(state: SearchState) -> dict:
        message = no_more_results_message if state["exclude_ids"] else no_results_message
        return {
            "answer": message,
            "sources": [],
            "has_more": False,
            "current_id": None,
        }

    return no_results
