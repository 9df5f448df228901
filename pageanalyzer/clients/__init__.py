"""Outbound HTTP clients."""

from pageanalyzer.clients.http_client import HttpClient

__all__ = ["HttpClient"]
