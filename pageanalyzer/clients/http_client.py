"""Outbound HTTP transport: page fetching and header-only accessibility probes."""

from __future__ import annotations

from typing import Optional

import httpx

from pageanalyzer.config import settings
from pageanalyzer.errors import HttpError
from pageanalyzer.models import FetchedPage

# Transport-level failures have no upstream status to report.
_TRANSPORT_FAILURE_STATUS = 502


def _is_get_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _is_head_success(status_code: int) -> bool:
    return 200 <= status_code < 400


class HttpClient:
    """Thin wrapper around a shared :class:`httpx.Client`.

    Redirects are followed by hand so that hitting ``max_redirects`` hands
    back the last redirect response instead of raising.  The underlying
    ``httpx.Client`` is thread-safe; one instance is shared by every probe of
    an analysis.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        max_redirects: Optional[int] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.timeout = settings.request_timeout if timeout is None else timeout
        self.max_redirects = settings.max_redirects if max_redirects is None else max_redirects
        self._client = httpx.Client(
            headers={"User-Agent": user_agent or settings.user_agent},
            timeout=self.timeout,
            follow_redirects=False,
        )

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _send(self, method: str, url: str) -> httpx.Response:
        request = self._client.build_request(method, url)
        response = self._client.send(request)
        hops = 0
        while response.next_request is not None and hops < self.max_redirects:
            next_request = response.next_request
            response.close()
            response = self._client.send(next_request)
            hops += 1
        return response

    def get(self, url: str) -> FetchedPage:
        """Fetch *url* and return its body.

        Raises:
            HttpError: 502 on transport failure, or the upstream status for
                any non-2xx response.
        """
        try:
            response = self._send("GET", url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise HttpError(
                _TRANSPORT_FAILURE_STATUS, f"error in GET call: {exc}"
            ) from exc

        if not _is_get_success(response.status_code):
            raise HttpError(
                response.status_code,
                f"failure in GET call: {response.status_code} {response.reason_phrase}",
            )

        return FetchedPage(
            url=str(response.url),
            content=response.content,
            status_code=response.status_code,
            encoding=response.charset_encoding,
        )

    def head(self, url: str) -> int:
        """Issue a HEAD request and return the status code.

        Redirects left unfollowed after ``max_redirects`` hops count as
        success.

        Raises:
            HttpError: 502 on transport failure, or the upstream status when
                it falls outside ``[200, 400)``.
        """
        try:
            response = self._send("HEAD", url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise HttpError(
                _TRANSPORT_FAILURE_STATUS, f"error in HEAD call: {exc}"
            ) from exc

        if not _is_head_success(response.status_code):
            raise HttpError(
                response.status_code,
                f"failure in HEAD call: {response.status_code} {response.reason_phrase}",
            )

        return response.status_code
