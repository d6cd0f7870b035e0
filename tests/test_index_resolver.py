"""Tests for index document resolution."""

import pytest

from calproxy.exceptions import IndexParseError
from calproxy.ingestion.index_resolver import IndexResolver
from helpers import make_index


def wrap(sections: str) -> bytes:
    return f"<html><body>{sections}</body></html>".encode()


def test_resolve_takes_first_name_cell_per_row():
    """Rows without a name cell contribute nothing; order is kept."""
    index = wrap(
        '<section><table class="nodeTable">'
        '<tr><td class="nameColumn"><a href="/a.ics">a</a></td></tr>'
        '<tr><td class="other"><a href="/ignored.ics">x</a></td></tr>'
        '<tr><td class="nameColumn"><a href="/b.ics">b</a></td></tr>'
        "</table></section>"
    )
    assert IndexResolver().resolve(index) == ["/a.ics", "/b.ics"]


def test_resolve_skips_tables_with_other_class():
    index = wrap(
        '<section><table class="fileTable">'
        '<tr><td class="nameColumn"><a href="/a.ics">a</a></td></tr>'
        "</table></section>"
    )
    assert IndexResolver().resolve(index) == []


def test_resolve_multiple_sections_in_document_order():
    index = wrap(
        '<section><table class="nodeTable">'
        '<tr><td class="nameColumn"><a href="/z.ics">z</a></td></tr>'
        "</table></section>"
        '<section><table class="propTable">'
        '<tr><td class="nameColumn"><a href="/skip.ics">s</a></td></tr>'
        "</table></section>"
        "<section><p>no table here</p></section>"
        '<section><table class="nodeTable">'
        '<tr><td class="nameColumn"><a href="/a.ics">a</a></td></tr>'
        "</table></section>"
    )
    assert IndexResolver().resolve(index) == ["/z.ics", "/a.ics"]


def test_resolve_row_contributes_at_most_one_locator():
    index = wrap(
        '<section><table class="nodeTable"><tr>'
        '<td class="typeColumn">Calendar</td>'
        '<td class="nameColumn"><a href="/first.ics">1</a></td>'
        '<td class="nameColumn"><a href="/second.ics">2</a></td>'
        "</tr></table></section>"
    )
    assert IndexResolver().resolve(index) == ["/first.ics"]


def test_resolve_keeps_duplicates():
    index = make_index(["/a.ics", "/a.ics"])
    assert IndexResolver().resolve(index) == ["/a.ics", "/a.ics"]


def test_resolve_name_cell_without_link_is_skipped():
    index = wrap(
        '<section><table class="nodeTable">'
        '<tr><td class="nameColumn">no link</td></tr>'
        '<tr><td class="nameColumn"><a>no href</a></td></tr>'
        '<tr><td class="nameColumn"><a href="/ok.ics">ok</a></td></tr>'
        "</table></section>"
    )
    assert IndexResolver().resolve(index) == ["/ok.ics"]


def test_resolve_ignores_xhtml_namespace():
    index = (
        b'<html xmlns="http://www.w3.org/1999/xhtml"><body>'
        b'<section><table class="nodeTable">'
        b'<tr><td class="nameColumn"><a href="/ns.ics">ns</a></td></tr>'
        b"</table></section></body></html>"
    )
    assert IndexResolver().resolve(index) == ["/ns.ics"]


def test_resolve_empty_listing():
    assert IndexResolver().resolve(make_index([])) == []


def test_resolve_custom_class_labels():
    resolver = IndexResolver(table_class="listing", name_class="name")
    index = wrap(
        '<section><table class="listing">'
        '<tr><td class="name"><a href="/c.ics">c</a></td></tr>'
        "</table></section>"
    )
    assert resolver.resolve(index) == ["/c.ics"]


@pytest.mark.parametrize(
    "document",
    [
        b"<html><body><section>",
        b"<html><body><br></body></html>",
        b"not markup at all",
        b"",
    ],
)
def test_resolve_malformed_markup_raises(document):
    with pytest.raises(IndexParseError):
        IndexResolver().resolve(document)


def test_resolve_wrong_root_raises():
    with pytest.raises(IndexParseError, match="expected <html>"):
        IndexResolver().resolve(b"<feed><entry/></feed>")
