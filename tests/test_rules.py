"""Tests for parsing.rules: attribute classification and element removal."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from models.options import CleanOptions
from parsing.rules import (
    STYLE_ATTRIBUTES,
    AttributeOutcome,
    classify_attribute,
    clean_element,
    is_event_attribute,
    remove_comments,
    remove_unwanted_elements,
    should_remove,
)

DEFAULTS = CleanOptions()


def _soup(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)


# ---------------------------------------------------------------------------
# classify_attribute / is_event_attribute
# ---------------------------------------------------------------------------


class TestClassifyAttribute:
    @pytest.mark.parametrize("name", sorted(STYLE_ATTRIBUTES))
    def test_presentational(self, name: str) -> None:
        assert classify_attribute(name) is AttributeOutcome.STYLE

    def test_presentational_case_insensitive(self) -> None:
        assert classify_attribute("BGCOLOR") is AttributeOutcome.STYLE
        assert classify_attribute("Style") is AttributeOutcome.STYLE

    @pytest.mark.parametrize("name", ["onclick", "onMouseOver", "ONLOAD", "onx"])
    def test_event(self, name: str) -> None:
        assert classify_attribute(name) is AttributeOutcome.EVENT

    @pytest.mark.parametrize("name", ["on", "on-click", "onclick2", "one_two", "data-on"])
    def test_not_event(self, name: str) -> None:
        assert is_event_attribute(name) is False

    def test_event_requires_ascii_letters(self) -> None:
        # KELVIN SIGN folds to "k" under Unicode case-insensitive matching
        assert is_event_attribute("on\u212a") is False

    def test_data(self) -> None:
        assert classify_attribute("data-id") is AttributeOutcome.DATA
        assert classify_attribute("DATA-Foo") is AttributeOutcome.DATA

    def test_class(self) -> None:
        assert classify_attribute("class") is AttributeOutcome.CLASS
        assert classify_attribute("CLASS") is AttributeOutcome.CLASS

    @pytest.mark.parametrize("name", ["href", "id", "title", "alt", "src", "classes"])
    def test_retain(self, name: str) -> None:
        assert classify_attribute(name) is AttributeOutcome.RETAIN


# ---------------------------------------------------------------------------
# should_remove
# ---------------------------------------------------------------------------


class TestShouldRemove:
    def test_style_always_removed(self) -> None:
        assert should_remove("style", "color:red", DEFAULTS) is True

    def test_event_always_removed(self) -> None:
        assert should_remove("onclick", "x()", DEFAULTS) is True

    def test_data_depends_on_option(self) -> None:
        assert should_remove("data-id", "5", DEFAULTS) is False
        assert should_remove("data-id", "5", CleanOptions(remove_data_attrs=True)) is True

    @pytest.mark.parametrize("value", ["", "   ", "\t\n", None])
    def test_blank_class_always_removed(self, value: str | None) -> None:
        assert should_remove("class", value, DEFAULTS) is True

    def test_class_kept_unless_option(self) -> None:
        assert should_remove("class", "foo", DEFAULTS) is False
        assert should_remove("class", "foo", CleanOptions(remove_classes=True)) is True

    def test_other_attributes_kept(self) -> None:
        all_on = CleanOptions(
            remove_comments=True, remove_data_attrs=True, remove_classes=True
        )
        assert should_remove("href", "/x", all_on) is False


# ---------------------------------------------------------------------------
# clean_element
# ---------------------------------------------------------------------------


class TestCleanElement:
    def test_removes_all_matching_attributes(self) -> None:
        soup = _soup(
            '<td style="a" width="10" onclick="x()" id="cell" class="" '
            'data-row="1" align="left" title="t">x</td>'
        )
        td = soup.td
        result = clean_element(td, DEFAULTS)
        assert result is td
        assert list(td.attrs) == ["id", "data-row", "title"]

    def test_adjacent_removals_not_skipped(self) -> None:
        soup = _soup('<div style="a" bgcolor="b" color="c" face="d" size="e">x</div>')
        clean_element(soup.div, DEFAULTS)
        assert soup.div.attrs == {}

    def test_options_applied(self) -> None:
        soup = _soup('<span class="c" data-x="1" lang="en">x</span>')
        clean_element(
            soup.span, CleanOptions(remove_classes=True, remove_data_attrs=True)
        )
        assert soup.span.attrs == {"lang": "en"}


# ---------------------------------------------------------------------------
# remove_unwanted_elements / remove_comments
# ---------------------------------------------------------------------------


class TestRemoveUnwantedElements:
    def test_style_script_and_stylesheet_links(self) -> None:
        soup = _soup(
            "<style>p{color:red}</style>"
            '<link rel="stylesheet" href="a.css">'
            '<link rel="icon" href="i.png">'
            "<div><script>alert(1)</script><p>x</p></div>"
        )
        removed = remove_unwanted_elements(soup, DEFAULTS)
        assert removed == 3
        assert soup.find("style") is None
        assert soup.find("script") is None
        links = soup.find_all("link")
        assert len(links) == 1 and links[0]["rel"] == "icon"

    def test_stylesheet_rel_case_insensitive(self) -> None:
        soup = _soup('<link rel="StyleSheet" href="a.css"><p>x</p>')
        remove_unwanted_elements(soup, DEFAULTS)
        assert soup.find("link") is None

    def test_only_exact_stylesheet_rel(self) -> None:
        soup = _soup('<link rel="alternate stylesheet" href="a.css">')
        remove_unwanted_elements(soup, DEFAULTS)
        assert soup.find("link") is not None

    def test_comments_kept_by_default(self) -> None:
        soup = _soup("<!-- a --><p>x</p>")
        remove_unwanted_elements(soup, DEFAULTS)
        assert "<!-- a -->" in str(soup)

    def test_comments_removed_when_enabled(self) -> None:
        soup = _soup("<!-- a --><div><p>x<!-- b --></p></div>")
        remove_unwanted_elements(soup, CleanOptions(remove_comments=True))
        assert str(soup) == "<div><p>x</p></div>"


class TestRemoveComments:
    def test_nested_comments_counted(self) -> None:
        soup = _soup("<!-- a --><ul><li><!-- b -->x</li><li>y<!-- c --></li></ul>")
        assert remove_comments(soup) == 3
        assert str(soup) == "<ul><li>x</li><li>y</li></ul>"
