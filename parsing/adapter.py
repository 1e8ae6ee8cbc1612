"""BeautifulSoup parse/serialize adapter for the cleaning pipeline.

Two backends are used:
    - ``lxml`` for full documents, so the tree always has a root
      ``<html>`` element and a parsed doctype.
    - ``html5lib`` for fragments. The markup is parsed in ``<body>``
      context the way a browser parses ``body.innerHTML``: stray
      ``<html>``/``<body>`` tags merge into the existing wrappers, bogus
      markup such as ``<![if ...]>`` or ``<?...?>`` becomes a comment, and
      leading comments stay inside the body.

Multi-valued attribute splitting is disabled so every attribute value is
an opaque string, and serialization keeps the parser's attribute order.
"""

from __future__ import annotations

import logging
import warnings

from bs4 import BeautifulSoup, Doctype, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

logger = logging.getLogger("cleaner")

DOCUMENT_PARSER = "lxml"
FRAGMENT_PARSER = "html5lib"

# Puts the tokenizer in the "in body" insertion mode before the fragment.
_FRAGMENT_CONTEXT = "<body>"


class _SourceOrderFormatter(HTMLFormatter):
    """HTML formatter that keeps attributes in parse order.

    The stock formatters sort attributes alphabetically. Double quotes in
    attribute values are written as ``&quot;`` so values are always
    double-quoted.
    """

    def attributes(self, tag: Tag):  # noqa: ANN201
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())

    def attribute_value(self, value: str) -> str:
        return self.substitute(value).replace('"', "&quot;")


_FORMATTER = _SourceOrderFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)


def parse(markup: str, *, fragment: bool) -> BeautifulSoup:
    """Parse *markup* into a mutable tree.

    Never fails on malformed markup: both backends recover leniently.
    Warnings raised while parsing are logged and otherwise ignored.
    """
    if fragment:
        features = FRAGMENT_PARSER
        markup = _FRAGMENT_CONTEXT + markup
    else:
        features = DOCUMENT_PARSER

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        soup = BeautifulSoup(markup, features, multi_valued_attributes=None)

    for w in caught:
        logger.warning("HTML parsing had issues, cleaning anyway: %s", w.message)

    return soup


def doctype_name(soup: BeautifulSoup) -> str | None:
    """Return the parsed doctype name (``"html"``), or None without one."""
    for node in soup.contents:
        if isinstance(node, Doctype):
            parts = str(node).split()
            return parts[0] if parts else ""
    return None


def serialize(soup: BeautifulSoup, *, fragment: bool) -> str:
    """Serialize *soup* back to markup.

    Fragment mode returns the inner markup of ``<body>``. Document mode
    returns the doctype line (if any) followed by the root element's outer
    markup.
    """
    if fragment:
        return soup.body.decode_contents(formatter=_FORMATTER)

    result = ""
    name = doctype_name(soup)
    if name is not None:
        result = f"<!DOCTYPE {name}>\n"

    root = soup.find(True, recursive=False)
    if root is not None:
        result += root.decode(formatter=_FORMATTER)

    return result
