"""
Completion provider - turns an assembled prompt into free text.

Same shape as the embeddings module: Protocol in core, a langchain-openai
production implementation, a deterministic test double, and a factory.
"""

from __future__ import annotations

import os
import re

from langchain_openai import ChatOpenAI
from openai import OpenAIError

from meeting_search.core import CompletionError, CompletionProvider

# Record headers start a line; citations inside instructions or answers do not
RECORD_HEADER = re.compile(r"^\[Record \d+\]", re.MULTILINE)


class ChatCompletion:
    """
    Chat-model completion via langchain-openai.

    The model may be injected (tests pass a MagicMock); otherwise a
    ChatOpenAI client is created with retries disabled.
    """

    def __init__(
        self,
        model: ChatOpenAI | None = None,
        model_name: str = "gpt-4o-mini",
        temperature: float = 0.2,
        max_tokens: int = 2000,
        timeout: float = 30.0,
    ):
        self._llm = model or ChatOpenAI(
            model=model_name,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
            max_retries=0,
            api_key=os.environ.get("OPENAI_API_KEY"),
        )

    def complete(self, prompt: str) -> str:
        """Invoke the chat model and return its text unmodified."""
        try:
            response = self._llm.invoke(prompt)
        except OpenAIError as e:
            raise CompletionError(f"Completion request failed: {e}") from e

        content = getattr(response, "content", None)
        if not isinstance(content, str):
            raise CompletionError(
                f"Completion response had no text content (got {type(content).__name__})"
            )
        return content


class MockCompletion:
    """
    Deterministic completion for offline development.

    Echoes how much context it was given so callers can see the
    pipeline ran end to end. NOT for production use.
    """

    def __init__(self):
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        records = len(RECORD_HEADER.findall(prompt))
        return f"[mock answer] {records} record(s) supplied as context."


def get_completion_provider(
    use_mock: bool = False,
    model_name: str = "gpt-4o-mini",
    temperature: float = 0.2,
    max_tokens: int = 2000,
    timeout: float = 30.0,
) -> CompletionProvider:
    """
    Factory function to get the appropriate completion provider.

    Args:
        use_mock: If True, return MockCompletion (for testing)
    """
    if use_mock:
        return MockCompletion()
    return ChatCompletion(
        model_name=model_name,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=timeout,
    )
