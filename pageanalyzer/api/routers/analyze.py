"""Page analysis endpoint.

Routes
------
POST /api/analyze    Body: {"url": "https://..."}    → WebPageAnalysis envelope
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from pageanalyzer.analyzer import WebPageAnalyzer, validate_url
from pageanalyzer.errors import HttpError, InvalidUrlError, MalformedInputError

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class AnalyzeRequest(BaseModel):
    url: str = ""


class LinkCounts(BaseModel):
    internal: int
    external: int
    inaccessible: int


class AnalyzeResponse(BaseModel):
    html_version: str
    title: str
    headings: Dict[str, int]
    links: LinkCounts
    has_login_form: bool


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _error_status(exc: HttpError) -> int:
    # A redirect left over after the hop limit is not an error status to relay.
    return exc.status_code if exc.status_code >= 400 else 502


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(body: AnalyzeRequest, request: Request) -> Dict[str, Any]:
    """Fetch the page at ``url`` and return its structural analysis.

    Runs in FastAPI's threadpool; link probes fan out from there.
    """
    try:
        url = validate_url(body.url)
    except InvalidUrlError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    analyzer = WebPageAnalyzer(request.app.state.http_client, request.app.state.settings)
    try:
        analysis = analyzer.analyze(url)
    except HttpError as exc:
        raise HTTPException(status_code=_error_status(exc), detail=str(exc)) from exc
    except MalformedInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return analysis.to_dict()


# The static mount at "/" would otherwise answer other methods with a 404.
@router.api_route(
    "/analyze", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False
)
def analyze_method_not_allowed() -> None:
    raise HTTPException(status_code=405, detail="Method Not Allowed")
