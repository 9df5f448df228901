"""Analysis orchestration: fetch -> parse -> extract -> probe -> result.

The orchestrator is the only producer of :class:`WebPageAnalysis`.  Fetch and
tree-construction failures abort the analysis; structural extraction never
fails and link probe failures only raise the ``inaccessible`` count.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional
from urllib.parse import urlsplit

from pageanalyzer.clients.http_client import HttpClient
from pageanalyzer.config import Settings, settings as default_settings
from pageanalyzer.errors import InvalidUrlError
from pageanalyzer.models import WebPageAnalysis
from pageanalyzer.parser import (
    DocumentTree,
    analyze_tree_links,
    count_headings,
    extract_title,
    has_login_form,
    sniff_html_version,
)

logger = logging.getLogger(__name__)

TreeFactory = Callable[[bytes, str, Optional[str]], DocumentTree]


def validate_url(url: str) -> str:
    """Check that *url* is an absolute http(s) URL and return it unchanged.

    Raises:
        InvalidUrlError: with a message suitable for a 400 response.
    """
    if not url:
        raise InvalidUrlError("URL is required")

    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise InvalidUrlError(f"invalid URL format: {exc}") from exc

    if parts.scheme.lower() not in ("http", "https"):
        raise InvalidUrlError("only HTTP and HTTPS are supported")

    if not parts.netloc.rpartition("@")[2]:
        raise InvalidUrlError("host cannot be empty")

    return url


class WebPageAnalyzer:
    """Runs the full analysis of one page through a shared :class:`HttpClient`."""

    def __init__(
        self,
        http_client: HttpClient,
        config: Optional[Settings] = None,
        tree_factory: TreeFactory = DocumentTree.from_bytes,
    ) -> None:
        self.http_client = http_client
        self.config = config or default_settings
        self.tree_factory = tree_factory

    def analyze(self, url: str) -> WebPageAnalysis:
        """Fetch *url* and extract its structural facts.

        Raises:
            HttpError: If the page cannot be fetched.
            MalformedInputError: If the body cannot be decoded or *url*
                cannot anchor relative links.
        """
        logger.info("Analyzing %s", url)
        page = self.http_client.get(url)
        tree = self.tree_factory(page.content, url, page.encoding)

        title = extract_title(tree)
        headings = count_headings(tree)
        html_version = sniff_html_version(tree.raw_text)
        login_form = has_login_form(tree)

        links = analyze_tree_links(
            tree,
            self.http_client,
            max_workers=self.config.probe_max_workers,
            batch_timeout=self.config.probe_batch_timeout,
        )

        analysis = WebPageAnalysis(
            html_version=html_version,
            title=title,
            headings=headings,
            links=links,
            has_login_form=login_form,
        )
        logger.info(
            "Analyzed %s: %s, %d link(s), %d inaccessible",
            url,
            analysis.html_version,
            links.total,
            links.inaccessible,
        )
        return analysis


def analyze_url(url: str, config: Optional[Settings] = None) -> WebPageAnalysis:
    """Analyze *url* with a short-lived client built from *config*."""
    config = config or default_settings
    with HttpClient(
        timeout=config.request_timeout,
        max_redirects=config.max_redirects,
        user_agent=config.user_agent,
    ) as client:
        return WebPageAnalyzer(client, config).analyze(url)
