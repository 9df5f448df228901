"""Exception types raised by the analysis pipeline."""

from __future__ import annotations


class HttpError(Exception):
    """An outbound HTTP call failed at the transport level or with a bad status.

    Transport failures (DNS, refused connection, timeout) carry ``502``;
    unsuccessful responses carry the upstream status code.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(status_code, message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        return f"HTTP call related error, status code {self.status_code}: {self.message}"


class MalformedInputError(Exception):
    """The page body could not be decoded or the base URL could not be parsed."""


class InvalidUrlError(ValueError):
    """A URL submitted for analysis is not an absolute http(s) URL."""
