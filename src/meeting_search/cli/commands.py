"""
CLI commands - entry points for querying and serving the archive.

Each command follows a consistent pattern:
1. Parse arguments
2. Build the service
3. Run
4. Print results
5. Return exit code
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from meeting_search.core import SearchError


def _load_env() -> None:
    """Load environment variables from .env file."""
    from dotenv import load_dotenv

    load_dotenv()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_sources(sources: list[dict]) -> None:
    for i, meta in enumerate(sources, start=1):
        print(
            f"  [{i}] {meta.get('meeting_type', 'unknown')} | "
            f"{meta.get('date', 'unknown')} | session {meta.get('session_num', 'unknown')} | "
            f"{meta.get('source', 'unknown')}"
        )


def run_ask_cli() -> int:
    """CLI entry point for a bulk search."""
    from meeting_search.search import get_search_service

    parser = argparse.ArgumentParser(description="Ask a question over the meeting archive")
    parser.add_argument("query", help="Natural-language question")
    parser.add_argument("--json", action="store_true", help="Print the raw JSON response")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()
    _configure_logging(args.verbose)

    response = get_search_service().search(args.query)

    if args.json:
        print(json.dumps(response.model_dump(by_alias=True), ensure_ascii=False, indent=2))
        return 0

    print("=" * 60)
    print(response.answer)
    print("=" * 60)
    print(f"Sources ({len(response.sources)}):")
    _print_sources(response.sources)
    return 0


def run_page_cli() -> int:
    """CLI entry point for one paginated step."""
    from meeting_search.search import get_search_service

    parser = argparse.ArgumentParser(description="Fetch the next unseen record for a query")
    parser.add_argument("query", help="Natural-language question")
    parser.add_argument(
        "--exclude",
        nargs="*",
        default=[],
        help="Record ids already returned by earlier pages",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()
    _configure_logging(args.verbose)

    page = get_search_service().search_page(args.query, args.exclude)
    print(json.dumps(page.model_dump(by_alias=True), ensure_ascii=False, indent=2))
    return 0


def run_walk_cli() -> int:
    """CLI entry point that pages through every relevant record."""
    from meeting_search.search import get_search_service

    parser = argparse.ArgumentParser(description="Page through all records for a query")
    parser.add_argument("query", help="Natural-language question")
    parser.add_argument("--max-pages", type=int, default=None, help="Stop after N pages")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()
    _configure_logging(args.verbose)

    count = 0
    for page in get_search_service().iter_pages(args.query, max_pages=args.max_pages):
        count += 1
        print("=" * 60)
        print(f"PAGE {count} - record {page.current_id}")
        print("=" * 60)
        print(page.answer)
        _print_sources(page.sources)

    print(f"\n{count} record(s) walked")
    return 0


def run_seed_cli() -> int:
    """CLI entry point that creates the schema and loads the sample records."""
    from meeting_search.config import get_settings
    from meeting_search.embeddings import get_embedding_provider
    from meeting_search.retrieval import get_document_store, seed_document_store

    parser = argparse.ArgumentParser(description="Seed the document store")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()
    _configure_logging(args.verbose)

    settings = get_settings()
    embeddings = get_embedding_provider(
        use_mock=settings.use_mock_embeddings,
        model=settings.embedding_model,
        timeout=settings.provider_timeout_s,
    )
    store = get_document_store(use_postgres=settings.use_postgres, embeddings=embeddings)
    store.connect()
    try:
        store.create_schema()
        seed_document_store(store)
    finally:
        store.close()

    print("Seeded sample meeting records")
    return 0


def run_serve_cli() -> int:
    """CLI entry point that runs the HTTP API."""
    import uvicorn

    from meeting_search.api import create_app

    parser = argparse.ArgumentParser(description="Serve the search API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()
    _configure_logging(args.verbose)

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def main() -> int:
    """
    Main CLI entry point with subcommands.

    Usage:
        meeting-search ask "QUERY"
        meeting-search page "QUERY" --exclude ID [ID ...]
        meeting-search walk "QUERY" [--max-pages N]
        meeting-search seed
        meeting-search serve [--host H] [--port P]
    """
    _load_env()

    parser = argparse.ArgumentParser(
        description="Hybrid search over archived meeting records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  ask     Answer a question from the top matching records
  page    Answer from the next record not yet seen
  walk    Page through every matching record
  seed    Create the schema and load sample records
  serve   Run the HTTP API

Examples:
  meeting-search ask "bus deficit guarantee"
  meeting-search page "youth housing" --exclude rec_plenary_2023_301_1
  USE_MOCK_EMBEDDINGS=true USE_MOCK_COMPLETION=true meeting-search walk "budget"
        """,
    )

    parser.add_argument(
        "command",
        choices=["ask", "page", "walk", "seed", "serve"],
        help="Command to run",
    )

    args, remaining = parser.parse_known_args()

    commands = {
        "ask": run_ask_cli,
        "page": run_page_cli,
        "walk": run_walk_cli,
        "seed": run_seed_cli,
        "serve": run_serve_cli,
    }

    # Re-inject remaining args for the subcommand
    sys.argv = [sys.argv[0]] + remaining

    try:
        return commands[args.command]()
    except SearchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
