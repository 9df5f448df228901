"""DOCTYPE sniffing over the raw page source."""

from __future__ import annotations

from enum import Enum


class _HtmlVersion(Enum):
    HTML5 = "HTML5"
    HTML4_01 = "HTML 4.01"
    XHTML = "XHTML"
    UNKNOWN = "Unknown"


_HTML5_MARKER = "<!doctype html>"
_LEGACY_MARKER = "<!doctype html public"


def _classify_line(line: str) -> _HtmlVersion | None:
    line = line.lower()
    if _HTML5_MARKER in line:
        return _HtmlVersion.HTML5
    if _LEGACY_MARKER in line:
        if "4.01" in line:
            return _HtmlVersion.HTML4_01
        if "xhtml" in line:
            return _HtmlVersion.XHTML
    return None


def sniff_html_version(raw_text: str) -> str:
    """Return the display name of the document type declared in *raw_text*.

    Lines are scanned in order and the first classifiable one wins.  A
    ``<!DOCTYPE html PUBLIC ...>`` line naming neither HTML 4.01 nor XHTML
    does not stop the scan.
    """
    for line in raw_text.splitlines():
        version = _classify_line(line)
        if version is not None:
            return version.value
    return _HtmlVersion.UNKNOWN.value
