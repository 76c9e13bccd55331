"""
HTTP API - FastAPI transport over SearchService.

Routes:
- POST /search       bulk answer
- POST /search/page  one candidate per call, exclusion-set pagination
- GET  /health
"""

from meeting_search.api.app import create_app

__all__ = ["create_app"]
