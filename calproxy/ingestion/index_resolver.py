"""Index document resolver: extracts calendar resource locators."""

import logging
import xml.etree.ElementTree as ET

from calproxy.constants import NAME_COLUMN_CLASS, NODE_TABLE_CLASS
from calproxy.exceptions import IndexParseError

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    """Strip an XML namespace from a tag (``{ns}td`` -> ``td``)."""
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _first_child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


class IndexResolver:
    """Resolves the upstream index document into resource locators.

    The index is an XHTML listing of the form
    ``html > body > section > table.nodeTable > tr > td.nameColumn > a[href]``.
    Locators are returned in document order without de-duplication.
    """

    def __init__(
        self,
        table_class: str = NODE_TABLE_CLASS,
        name_class: str = NAME_COLUMN_CLASS,
    ):
        self.table_class = table_class
        self.name_class = name_class

    def resolve(self, data: bytes) -> list[str]:
        """Parse index bytes and return locator paths.

        Raises:
            IndexParseError: If the document is not well-formed markup
        """
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise IndexParseError(f"Index document is not well-formed: {e}") from e

        if _local_name(root.tag) != "html":
            raise IndexParseError(
                f"Index document root is <{_local_name(root.tag)}>, expected <html>"
            )

        locators = []
        for body in _children(root, "body"):
            for section in _children(body, "section"):
                table = _first_child(section, "table")
                if table is None or table.get("class") != self.table_class:
                    continue
                for row in _children(table, "tr"):
                    locator = self._row_locator(row)
                    if locator:
                        locators.append(locator)

        logger.info(f"Resolved {len(locators)} locators from index")
        return locators

    def _row_locator(self, row: ET.Element) -> str | None:
        """Return the href of the row's first name cell, if any."""
        for cell in _children(row, "td"):
            if cell.get("class") != self.name_class:
                continue
            link = _first_child(cell, "a")
            href = link.get("href") if link is not None else None
            if not href:
                logger.debug("Name cell without link, skipping row")
            return href or None
        return None
