"""Data models for the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")


def empty_heading_counts() -> Dict[str, int]:
    """Return a heading tally with all six levels set to zero."""
    return {level: 0 for level in HEADING_LEVELS}


@dataclass
class FetchedPage:
    """The body of a successful GET for a single URL."""

    url: str
    content: bytes
    status_code: int
    encoding: Optional[str] = None


@dataclass(frozen=True)
class LinkRecord:
    """Outcome of classifying and probing one resolved hyperlink."""

    resolved_url: str
    is_internal: bool
    is_accessible: bool


@dataclass(frozen=True)
class LinkAnalysis:
    internal: int = 0
    external: int = 0
    inaccessible: int = 0

    @property
    def total(self) -> int:
        return self.internal + self.external

    def to_dict(self) -> Dict[str, int]:
        return {
            "internal": self.internal,
            "external": self.external,
            "inaccessible": self.inaccessible,
        }


@dataclass(frozen=True)
class WebPageAnalysis:
    """Structural facts extracted from one web page."""

    html_version: str
    title: str
    headings: Dict[str, int] = field(default_factory=empty_heading_counts)
    links: LinkAnalysis = field(default_factory=LinkAnalysis)
    has_login_form: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON envelope served by the API."""
        return {
            "html_version": self.html_version,
            "title": self.title,
            "headings": {level: self.headings.get(level, 0) for level in HEADING_LEVELS},
            "links": self.links.to_dict(),
            "has_login_form": self.has_login_form,
        }
