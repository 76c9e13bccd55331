"""
Completion module - grounded answer generation backends.
"""

from meeting_search.core import CompletionProvider
from meeting_search.completion.chat_completion import (
    ChatCompletion,
    MockCompletion,
    get_completion_provider,
)

__all__ = [
    "CompletionProvider",
    "ChatCompletion",
    "MockCompletion",
    "get_completion_provider",
]
