"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from pageanalyzer.api import app

    uvicorn pageanalyzer.api:app --port 8080
"""

from pageanalyzer.api.app import app, create_app

__all__ = ["app", "create_app"]
