"""Structural extractors: title, heading tally and login-form detection.

Every function here reads a :class:`DocumentTree` without mutating it and
never raises; absence of a feature yields a default value.
"""

from __future__ import annotations

from typing import Dict, Iterable

from bs4 import Tag

from pageanalyzer.models import HEADING_LEVELS, empty_heading_counts
from pageanalyzer.parser.tree import DocumentTree, text_content

_FORM_ATTR_KEYS = ("action", "id", "class", "name")
_FORM_KEYWORDS = ("login", "signin", "auth", "session")

_USERNAME_INPUT_TYPES = ("email", "text")
_USERNAME_KEYWORDS = ("user", "email", "login")

_INPUT_ATTR_KEYS = ("name", "id", "class")
_INPUT_KEYWORDS = ("password", "login", "signin", "auth")


def _contains_any(value: str, needles: Iterable[str]) -> bool:
    return any(needle in value for needle in needles)


def _attr(tag: Tag, key: str) -> str:
    return (tag.get(key) or "").lower()


# ---------------------------------------------------------------------------
# Title / headings
# ---------------------------------------------------------------------------

def extract_title(tree: DocumentTree) -> str:
    """Return the stripped text of the first ``<title>`` in document order."""
    for title in tree.elements("title"):
        return text_content(title).strip()
    return ""


def count_headings(tree: DocumentTree) -> Dict[str, int]:
    """Tally ``h1``..``h6`` elements at any depth; all six levels are always present."""
    counts = empty_heading_counts()
    for heading in tree.elements(*HEADING_LEVELS):
        counts[heading.name] += 1
    return counts


# ---------------------------------------------------------------------------
# Login form detection
# ---------------------------------------------------------------------------

def _form_attributes_look_like_login(form: Tag) -> bool:
    for key, value in form.attrs.items():
        if _contains_any(key, _FORM_ATTR_KEYS) and _contains_any(
            (value or "").lower(), _FORM_KEYWORDS
        ):
            return True
    return False


def _form_has_credential_inputs(form: Tag) -> bool:
    has_password = False
    has_username = False

    for field in form.find_all("input"):
        input_type = _attr(field, "type")
        if input_type == "password":
            has_password = True
        if _contains_any(input_type, _USERNAME_INPUT_TYPES) and (
            _contains_any(_attr(field, "name"), _USERNAME_KEYWORDS)
            or _contains_any(_attr(field, "id"), _USERNAME_KEYWORDS)
        ):
            has_username = True

    return has_password and has_username


def _is_login_form(form: Tag) -> bool:
    return _form_attributes_look_like_login(form) or _form_has_credential_inputs(form)


def _is_credential_input(field: Tag) -> bool:
    for key, value in field.attrs.items():
        value = (value or "").lower()
        if key == "type" and value == "password":
            return True
        if _contains_any(key, _INPUT_ATTR_KEYS) and _contains_any(value, _INPUT_KEYWORDS):
            return True
    return False


def has_login_form(tree: DocumentTree) -> bool:
    """Return ``True`` on the first login signal found in document order.

    A signal is a form whose attributes mention login/session keywords, a
    form holding both a password field and a username-like field, or any
    password-looking input, even one outside a form.
    """
    for element in tree.elements("form", "input"):
        if element.name == "form" and _is_login_form(element):
            return True
        if element.name == "input" and _is_credential_input(element):
            return True
    return False
