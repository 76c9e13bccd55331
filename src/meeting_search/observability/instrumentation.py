"""
OpenInference auto-instrumentation for the provider SDKs.

Embedding calls go through the openai SDK and completions through
langchain, so those are the two instrumentors registered.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_instrumented = False


def register_instrumentors() -> bool:
    """
    Register OpenInference auto-instrumentors (openai, langchain).

    Returns:
        True if any instrumentors were registered, False otherwise
    """
    global _instrumented
    if _instrumented:
        return True

    registered = []

    try:
        from openinference.instrumentation.openai import OpenAIInstrumentor
        OpenAIInstrumentor().instrument()
        registered.append("openai")
    except ImportError:
        logger.debug("OpenAI instrumentor not available")
    except Exception as e:
        logger.warning(f"Failed to instrument OpenAI: {e}")

    try:
        from openinference.instrumentation.langchain import LangChainInstrumentor
        LangChainInstrumentor().instrument()
        registered.append("langchain")
    except ImportError:
        logger.debug("LangChain instrumentor not available")
    except Exception as e:
        logger.warning(f"Failed to instrument LangChain: {e}")

    if registered:
        logger.info(f"Registered instrumentors: {', '.join(registered)}")
        _instrumented = True
        return True

    return False
