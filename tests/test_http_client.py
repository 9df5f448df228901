"""Tests for the outbound HTTP transport.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made.  Transport failures are simulated with ``side_effect`` set to an
  ``httpx`` exception class.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from pageanalyzer.clients.http_client import HttpClient
from pageanalyzer.errors import HttpError
from pageanalyzer.models import FetchedPage

_PAGE = "<!DOCTYPE html><html><head><title>Fetched</title></head></html>"


@pytest.fixture()
def client():
    with HttpClient(timeout=2.0, max_redirects=2, user_agent="TestAgent/1.0") as c:
        yield c


# ---------------------------------------------------------------------------
# GET
# ---------------------------------------------------------------------------

class TestGet:
    def test_successful_fetch_returns_page(self, client: HttpClient) -> None:
        with respx.mock:
            respx.get("https://example.com/").mock(
                return_value=httpx.Response(
                    200, text=_PAGE, headers={"Content-Type": "text/html; charset=utf-8"}
                )
            )
            page = client.get("https://example.com/")

        assert isinstance(page, FetchedPage)
        assert page.status_code == 200
        assert page.content == _PAGE.encode()
        assert page.encoding == "utf-8"

    def test_missing_charset_leaves_encoding_unset(self, client: HttpClient) -> None:
        with respx.mock:
            respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, content=b"<html></html>")
            )
            page = client.get("https://example.com/")

        assert page.encoding is None

    def test_sends_user_agent(self, client: HttpClient) -> None:
        with respx.mock:
            route = respx.get("https://example.com/").mock(return_value=httpx.Response(200))
            client.get("https://example.com/")

        assert route.calls.last.request.headers["User-Agent"] == "TestAgent/1.0"

    def test_non_2xx_raises_with_upstream_status(self, client: HttpClient) -> None:
        with respx.mock:
            respx.get("https://example.com/missing").mock(return_value=httpx.Response(404))
            with pytest.raises(HttpError) as excinfo:
                client.get("https://example.com/missing")

        assert excinfo.value.status_code == 404
        assert "failure in GET call" in str(excinfo.value)
        assert str(excinfo.value).startswith("HTTP call related error, status code 404")

    def test_transport_failure_is_bad_gateway(self, client: HttpClient) -> None:
        with respx.mock:
            respx.get("https://down.example.com/").mock(side_effect=httpx.ConnectError)
            with pytest.raises(HttpError) as excinfo:
                client.get("https://down.example.com/")

        assert excinfo.value.status_code == 502
        assert "error in GET call" in excinfo.value.message

    def test_follows_redirects(self, client: HttpClient) -> None:
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(301, headers={"Location": "https://example.com/new"})
            )
            respx.get("https://example.com/new").mock(return_value=httpx.Response(200, text=_PAGE))
            page = client.get("https://example.com/old")

        assert page.url == "https://example.com/new"
        assert page.status_code == 200

    def test_redirect_limit_returns_last_redirect(self, client: HttpClient) -> None:
        with respx.mock:
            route = respx.get("https://example.com/loop").mock(
                return_value=httpx.Response(302, headers={"Location": "https://example.com/loop"})
            )
            with pytest.raises(HttpError) as excinfo:
                client.get("https://example.com/loop")

        assert excinfo.value.status_code == 302
        # The first request plus max_redirects hops.
        assert route.call_count == 3


# ---------------------------------------------------------------------------
# HEAD
# ---------------------------------------------------------------------------

class TestHead:
    def test_success_returns_status(self, client: HttpClient) -> None:
        with respx.mock:
            respx.head("https://example.com/").mock(return_value=httpx.Response(204))
            assert client.head("https://example.com/") == 204

    def test_redirect_past_limit_counts_as_success(self, client: HttpClient) -> None:
        with respx.mock:
            respx.head("https://example.com/loop").mock(
                return_value=httpx.Response(307, headers={"Location": "https://example.com/loop"})
            )
            assert client.head("https://example.com/loop") == 307

    @pytest.mark.parametrize("status", [400, 404, 500, 503])
    def test_error_statuses_raise(self, client: HttpClient, status: int) -> None:
        with respx.mock:
            respx.head("https://example.com/x").mock(return_value=httpx.Response(status))
            with pytest.raises(HttpError) as excinfo:
                client.head("https://example.com/x")

        assert excinfo.value.status_code == status

    @pytest.mark.parametrize("exc", [httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout])
    def test_transport_failures_raise_bad_gateway(self, client: HttpClient, exc: type) -> None:
        with respx.mock:
            respx.head("https://example.com/x").mock(side_effect=exc)
            with pytest.raises(HttpError) as excinfo:
                client.head("https://example.com/x")

        assert excinfo.value.status_code == 502
        assert "error in HEAD call" in excinfo.value.message

    def test_unsupported_scheme_raises_bad_gateway(self, client: HttpClient) -> None:
        with pytest.raises(HttpError) as excinfo:
            client.head("ftp://example.com/file")

        assert excinfo.value.status_code == 502
