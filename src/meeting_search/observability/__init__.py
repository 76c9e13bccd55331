"""
Observability Module - Phoenix + OpenTelemetry tracing for search requests.

USAGE:
------
from meeting_search.observability import init_tracing, get_tracer

init_tracing()  # No-op unless TRACING_ENABLED=true

tracer = get_tracer()
with tracer.start_span("search.request", attributes={...}) as span:
    span.set_attribute("search.candidate_count", 3)
"""

from __future__ import annotations

import logging

from meeting_search.observability.config import TracingConfig, get_config, reset_config
from meeting_search.observability.tracer import (
    NoOpSpan,
    NoOpTracer,
    SpanProtocol,
    TracerProtocol,
    get_tracer,
    reset_tracer,
)
from meeting_search.observability.attributes import (
    search_request_attributes,
    search_result_attributes,
)

logger = logging.getLogger(__name__)

_tracing_initialized = False


def init_tracing(config: TracingConfig | None = None) -> bool:
    """
    Initialize tracing once at application startup.

    Exports to a remote OTLP collector when an endpoint is configured,
    otherwise launches a local Phoenix UI.

    Returns:
        True if tracing was initialized, False if disabled or unavailable
    """
    global _tracing_initialized
    if _tracing_initialized:
        return True

    config = config or get_config()

    if not config.enabled:
        logger.debug("Tracing disabled")
        return False

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor

        if config.collector_endpoint:
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

            exporter = OTLPSpanExporter(endpoint=config.collector_endpoint)
            logger.info("Tracing to remote collector: %s", config.collector_endpoint)
        else:
            import phoenix as px
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

            session = px.launch_app()
            exporter = OTLPSpanExporter(endpoint=f"{session.url.rstrip('/')}/v1/traces")
            logger.info("Phoenix UI available at: %s", session.url)

        provider = TracerProvider(
            resource=Resource.create({"openinference.project.name": config.project_name})
        )
        provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)

        from meeting_search.observability.instrumentation import register_instrumentors
        register_instrumentors()

        _tracing_initialized = True
        return True

    except ImportError as e:
        logger.warning("Tracing dependencies not installed, tracing disabled: %s", e)
        return False
    except Exception as e:
        logger.error("Failed to initialize tracing: %s", e)
        return False


def shutdown_tracing() -> None:
    """Flush and shut down the tracer provider."""
    global _tracing_initialized

    if not _tracing_initialized:
        return

    try:
        from opentelemetry import trace

        provider = trace.get_tracer_provider()
        if hasattr(provider, "shutdown"):
            provider.shutdown()
    except Exception as e:
        logger.warning("Error shutting down tracing: %s", e)

    reset_tracer()
    reset_config()
    _tracing_initialized = False


__all__ = [
    "init_tracing",
    "shutdown_tracing",
    "TracingConfig",
    "get_config",
    "reset_config",
    "TracerProtocol",
    "SpanProtocol",
    "NoOpTracer",
    "NoOpSpan",
    "get_tracer",
    "reset_tracer",
    "search_request_attributes",
    "search_result_attributes",
]
