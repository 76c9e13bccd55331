"""
CLI module - unified command-line interface.

Provides entry points for:
- Asking questions (bulk and paginated)
- Seeding the document store
- Serving the HTTP API
"""

from meeting_search.cli.commands import (
    main,
    run_ask_cli,
    run_page_cli,
    run_walk_cli,
    run_seed_cli,
    run_serve_cli,
)

__all__ = [
    "main",
    "run_ask_cli",
    "run_page_cli",
    "run_walk_cli",
    "run_seed_cli",
    "run_serve_cli",
]
