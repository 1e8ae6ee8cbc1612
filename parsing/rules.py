"""Removal rules for elements, comments, and attributes.

Element-level removal runs once over the whole tree:
    - ``<style>`` and ``<script>`` subtrees are decomposed.
    - ``<link rel="stylesheet">`` elements are decomposed.
    - comments are extracted when ``remove_comments`` is set.

Attribute-level cleaning runs per element via ``clean_element()``. Each
attribute falls into exactly one ``AttributeOutcome``; presentational and
event attributes always go, ``data-*`` and ``class`` depend on the options.
The attribute list is snapshotted before anything is deleted.
"""

from __future__ import annotations

import re
from enum import Enum

from bs4 import BeautifulSoup, Comment, Tag

from models.options import CleanOptions

STRIP_TAGS = {"style", "script"}

# Pre-CSS presentational attributes plus inline ``style``.
STYLE_ATTRIBUTES = frozenset(
    {
        "style",
        "bgcolor",
        "color",
        "face",
        "size",
        "align",
        "valign",
        "width",
        "height",
        "border",
        "cellpadding",
        "cellspacing",
    }
)

EVENT_ATTRIBUTE_RE = re.compile(r"on[a-z]+", re.IGNORECASE | re.ASCII)

_DATA_PREFIX = "data-"
_CLASS_ATTRIBUTE = "class"


class AttributeOutcome(str, Enum):
    """Classification of a single attribute."""

    STYLE = "style"
    EVENT = "event"
    DATA = "data"
    CLASS = "class"
    RETAIN = "retain"


def is_event_attribute(name: str) -> bool:
    """Check if *name* is an inline event handler such as ``onclick``."""
    return EVENT_ATTRIBUTE_RE.fullmatch(name) is not None


def classify_attribute(name: str) -> AttributeOutcome:
    """Classify an attribute by its lower-cased name.

    Precedence: presentational > event handler > ``data-*`` > ``class``.
    """
    lowered = name.lower()
    if lowered in STYLE_ATTRIBUTES:
        return AttributeOutcome.STYLE
    if is_event_attribute(lowered):
        return AttributeOutcome.EVENT
    if lowered.startswith(_DATA_PREFIX):
        return AttributeOutcome.DATA
    if lowered == _CLASS_ATTRIBUTE:
        return AttributeOutcome.CLASS
    return AttributeOutcome.RETAIN


def should_remove(name: str, value: str | None, options: CleanOptions) -> bool:
    """Decide whether an attribute is removed under *options*.

    - presentational and event attributes are always removed
    - ``data-*`` only with ``remove_data_attrs``
    - ``class`` with ``remove_classes`` or when its value is blank
    """
    outcome = classify_attribute(name)
    if outcome in (AttributeOutcome.STYLE, AttributeOutcome.EVENT):
        return True
    if outcome is AttributeOutcome.DATA:
        return options.remove_data_attrs
    if outcome is AttributeOutcome.CLASS:
        return options.remove_classes or not (value or "").strip()
    return False


def clean_element(tag: Tag, options: CleanOptions) -> Tag:
    """Remove disallowed attributes from *tag* in place and return it."""
    attrs_to_remove = [
        name for name, value in list(tag.attrs.items())
        if should_remove(name, value, options)
    ]
    for name in attrs_to_remove:
        del tag[name]
    return tag


def _is_removable_element(tag: Tag) -> bool:
    if tag.name in STRIP_TAGS:
        return True
    if tag.name == "link":
        rel = tag.get("rel")
        return isinstance(rel, str) and rel.lower() == "stylesheet"
    return False


def remove_comments(soup: BeautifulSoup) -> int:
    """Extract every comment node anywhere in *soup*. Returns the count."""
    comments = soup.find_all(string=lambda text: isinstance(text, Comment))
    for comment in comments:
        comment.extract()
    return len(comments)


def remove_unwanted_elements(soup: BeautifulSoup, options: CleanOptions) -> int:
    """Decompose style/script/stylesheet-link elements and, optionally, comments.

    This function **mutates** the soup in place. Returns the number of
    elements removed (comments not included).
    """
    removed = 0
    for tag in soup.find_all(_is_removable_element):
        if tag.decomposed:
            continue
        tag.decompose()
        removed += 1

    if options.remove_comments:
        remove_comments(soup)

    return removed
