"""
Tracing configuration.

Loads observability settings from environment variables.
Supports graceful degradation when Phoenix/OpenTelemetry is not installed.
"""

import os
from dataclasses import dataclass


@dataclass
class TracingConfig:
    """Configuration for Phoenix/OpenTelemetry tracing.

    Environment Variables:
        TRACING_ENABLED: Enable tracing (default: false)
        TRACING_PROJECT_NAME: Project name in Phoenix UI (default: meeting-search)
        TRACING_COLLECTOR_ENDPOINT: Remote OTLP endpoint (optional, local Phoenix if empty)
        TRACING_CAPTURE_QUERY_TEXT: Put raw query text on spans (default: false)

    Query text can name people and cases from closed sessions; it stays
    off spans unless explicitly enabled.
    """

    enabled: bool = False
    project_name: str = "meeting-search"
    collector_endpoint: str | None = None
    capture_query_text: bool = False

    @classmethod
    def from_env(cls) -> "TracingConfig":
        """Load config from environment variables."""
        return cls(
            enabled=os.environ.get("TRACING_ENABLED", "false").lower() in ("true", "1", "yes"),
            project_name=os.environ.get("TRACING_PROJECT_NAME", "meeting-search"),
            collector_endpoint=os.environ.get("TRACING_COLLECTOR_ENDPOINT") or None,
            capture_query_text=os.environ.get("TRACING_CAPTURE_QUERY_TEXT", "false").lower()
            in ("true", "1", "yes"),
        )


_config: TracingConfig | None = None


def get_config() -> TracingConfig:
    """Get the global tracing config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = TracingConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
