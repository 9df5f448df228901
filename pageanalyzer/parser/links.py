"""Hyperlink extraction and concurrent accessibility probing.

The checker only needs an object with a ``head(url)`` method that raises
:class:`HttpError` on failure, such as :class:`HttpClient`.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Dict, List, Optional, Protocol
from urllib.parse import SplitResult, urljoin, urlsplit

from pageanalyzer.errors import HttpError
from pageanalyzer.models import LinkAnalysis, LinkRecord
from pageanalyzer.parser.tree import DocumentTree

logger = logging.getLogger(__name__)

_NON_NAVIGABLE_PREFIXES = ("#", "javascript:", "mailto:", "tel:")


class AccessibilityProber(Protocol):
    def head(self, url: str) -> int: ...


# ---------------------------------------------------------------------------
# URL helpers
# ---------------------------------------------------------------------------

def _split(url: str) -> Optional[SplitResult]:
    """Split *url*, returning ``None`` when it does not parse."""
    try:
        parts = urlsplit(url)
        parts.port
    except ValueError:
        return None
    return parts


def _host(parts: SplitResult) -> str:
    # netloc minus any userinfo; the port stays part of the host.
    return parts.netloc.rpartition("@")[2]


def resolve_href(href: str, base_url: str) -> Optional[str]:
    """Resolve *href* against *base_url*, or ``None`` if it is not a navigable link."""
    if not href or href.startswith(_NON_NAVIGABLE_PREFIXES):
        return None
    if _split(href) is None:
        return None

    resolved = urljoin(base_url, href)
    if _split(resolved) is None:
        return None
    return resolved


def is_internal_link(url: str, base_host: str) -> bool:
    parts = _split(url)
    if parts is None:
        return False
    host = _host(parts)
    if not host:
        return True
    return host.lower() == base_host.lower()


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract_links(tree: DocumentTree) -> List[str]:
    """Return the absolute URL of every navigable ``<a href>``, in document order.

    Repeated links are kept once per occurrence.
    """
    links: List[str] = []
    for anchor in tree.elements("a"):
        resolved = resolve_href(anchor.get("href") or "", tree.base_url)
        if resolved is not None:
            links.append(resolved)
    return links


# ---------------------------------------------------------------------------
# Probing
# ---------------------------------------------------------------------------

def check_link_accessibility(prober: AccessibilityProber, url: str) -> bool:
    """Return ``True`` iff a HEAD probe of *url* answers with a 2xx/3xx status."""
    try:
        status = prober.head(url)
    except HttpError as exc:
        logger.debug("Link %s is inaccessible: %s", url, exc)
        return False
    return 200 <= status < 400


def probe_link(prober: AccessibilityProber, url: str, base_host: str) -> LinkRecord:
    if _split(url) is None:
        return LinkRecord(resolved_url=url, is_internal=False, is_accessible=False)

    return LinkRecord(
        resolved_url=url,
        is_internal=is_internal_link(url, base_host),
        is_accessible=check_link_accessibility(prober, url),
    )


def _unreachable(url: str, base_host: str) -> LinkRecord:
    return LinkRecord(
        resolved_url=url,
        is_internal=is_internal_link(url, base_host),
        is_accessible=False,
    )


def _aggregate(records: List[LinkRecord]) -> LinkAnalysis:
    internal = sum(1 for record in records if record.is_internal)
    inaccessible = sum(1 for record in records if not record.is_accessible)
    return LinkAnalysis(
        internal=internal,
        external=len(records) - internal,
        inaccessible=inaccessible,
    )


def analyze_links(
    links: List[str],
    base_host: str,
    prober: AccessibilityProber,
    max_workers: Optional[int] = None,
    batch_timeout: Optional[float] = None,
) -> LinkAnalysis:
    """Classify and probe every link concurrently, then tally the results.

    One probe is submitted per link.  With ``max_workers=None`` the pool has
    one thread per link, so every probe is in flight at once.  The call
    returns only after every probe has reported, unless ``batch_timeout``
    expires first; links still pending then count as inaccessible.
    """
    if not links:
        return LinkAnalysis()

    workers = min(max_workers or len(links), len(links))
    records: List[LinkRecord] = []
    timed_out = False
    pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="probe")

    try:
        future_to_url: Dict[Future, str] = {
            pool.submit(probe_link, prober, url, base_host): url for url in links
        }
        pending = dict(future_to_url)
        try:
            for future in as_completed(future_to_url, timeout=batch_timeout):
                url = pending.pop(future)
                try:
                    records.append(future.result())
                except Exception as exc:
                    logger.warning("Probe of %s failed unexpectedly: %s", url, exc)
                    records.append(_unreachable(url, base_host))
        except FuturesTimeoutError:
            timed_out = True
            logger.warning(
                "Link probing exceeded %.1fs; %d probe(s) counted inaccessible",
                batch_timeout,
                len(pending),
            )
            records.extend(_unreachable(url, base_host) for url in pending.values())
    finally:
        pool.shutdown(wait=not timed_out, cancel_futures=timed_out)

    return _aggregate(records)


def analyze_tree_links(
    tree: DocumentTree,
    prober: AccessibilityProber,
    max_workers: Optional[int] = None,
    batch_timeout: Optional[float] = None,
) -> LinkAnalysis:
    """Extract the links of *tree* and run :func:`analyze_links` over them."""
    links = extract_links(tree)
    logger.debug("Probing %d link(s) found on %s", len(links), tree.base_url)
    return analyze_links(links, tree.base_host, prober, max_workers, batch_timeout)
