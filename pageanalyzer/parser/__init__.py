"""HTML parsing package: document tree, structural extractors and link analysis."""

from pageanalyzer.parser.doctype import sniff_html_version
from pageanalyzer.parser.extractors import count_headings, extract_title, has_login_form
from pageanalyzer.parser.links import analyze_links, analyze_tree_links, extract_links
from pageanalyzer.parser.tree import DocumentTree

__all__ = [
    "DocumentTree",
    "sniff_html_version",
    "extract_title",
    "count_headings",
    "has_login_form",
    "extract_links",
    "analyze_links",
    "analyze_tree_links",
]
