"""DocumentTree: the parsed, read-only view of one page shared by every extractor."""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional
from urllib.parse import SplitResult, urlsplit

from bs4 import BeautifulSoup, Comment, NavigableString, Tag, UnicodeDammit
from bs4.element import Declaration, Doctype, PageElement, ProcessingInstruction

from pageanalyzer.errors import MalformedInputError

# HTML5 tree construction: title/textarea are RCDATA, iframe/noembed are raw text.
_TREE_BUILDER = "html5lib"

# Parsed as raw text by browsers with scripting enabled.
_SCRIPTING_RAW_TEXT = ("noscript",)


class NodeKind(Enum):
    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    DIRECTIVE = "directive"


def node_kind(node: PageElement) -> NodeKind:
    """Classify a node of the tree."""
    if isinstance(node, BeautifulSoup):
        return NodeKind.DOCUMENT
    if isinstance(node, Tag):
        return NodeKind.ELEMENT
    if isinstance(node, Comment):
        return NodeKind.COMMENT
    if isinstance(node, (Doctype, Declaration, ProcessingInstruction)):
        return NodeKind.DIRECTIVE
    return NodeKind.TEXT


def parse_base_url(base_url: str) -> SplitResult:
    """Split *base_url*, rejecting anything that cannot anchor relative links."""
    try:
        parts = urlsplit(base_url)
        parts.port  # raises ValueError for a non-numeric or out-of-range port
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"unparseable base URL {base_url!r}: {exc}") from exc

    if not parts.scheme or not parts.netloc:
        raise MalformedInputError(f"base URL {base_url!r} must be absolute")
    return parts


def decode_body(content: bytes, encoding: Optional[str] = None) -> str:
    """Decode a response body to text.

    Candidates are tried in order: the charset from the response headers, a
    byte-order mark, a ``<meta>`` charset declaration, character-set
    detection when available, then UTF-8 and windows-1252.  An unknown or
    wrong header charset is skipped.
    """
    dammit = UnicodeDammit(
        content,
        known_definite_encodings=[encoding] if encoding else [],
        is_html=True,
    )
    text = dammit.unicode_markup
    if text is None:
        raise MalformedInputError("undecodable page body")

    if text.startswith("\ufeff"):
        text = text[1:]
    return text


def _flatten_raw_text(soup: BeautifulSoup) -> None:
    for element in soup.find_all(_SCRIPTING_RAW_TEXT):
        markup = element.decode_contents()
        element.clear()
        if markup:
            element.append(NavigableString(markup))


class DocumentTree:
    """A parsed HTML document plus the raw text it was built from.

    The raw text is kept because DOCTYPE declarations are sniffed from the
    source lines, not from the tree.  Multi-valued attributes such as
    ``class`` are kept as plain strings so that every attribute is a single
    key/value pair.
    """

    def __init__(self, raw_text: str, base_url: str) -> None:
        self.base = parse_base_url(base_url)
        self.base_url = base_url
        self.raw_text = raw_text
        self.soup = BeautifulSoup(raw_text, _TREE_BUILDER, multi_valued_attributes=None)
        _flatten_raw_text(self.soup)

    @classmethod
    def from_bytes(
        cls, content: bytes, base_url: str, encoding: Optional[str] = None
    ) -> "DocumentTree":
        return cls(decode_body(content, encoding), base_url)

    @classmethod
    def from_text(cls, text: str, base_url: str) -> "DocumentTree":
        return cls(text, base_url)

    @property
    def base_host(self) -> str:
        return self.base.netloc.rpartition("@")[2]

    def walk(self) -> Iterator[PageElement]:
        """Yield every node in document (pre-order) order, root first.

        ``descendants`` follows the ``next_element`` chain, so arbitrarily
        deep nesting never recurses.
        """
        yield self.soup
        yield from self.soup.descendants

    def elements(self, *names: str) -> Iterator[Tag]:
        """Yield element nodes in document order, optionally filtered by tag name."""
        for node in self.walk():
            if node_kind(node) is not NodeKind.ELEMENT:
                continue
            if names and node.name not in names:
                continue
            yield node


def text_content(node: Tag) -> str:
    """Concatenate the text nodes beneath *node* in document order."""
    return "".join(
        str(child)
        for child in node.descendants
        if isinstance(child, NavigableString) and node_kind(child) is NodeKind.TEXT
    )
