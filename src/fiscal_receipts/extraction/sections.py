"""Section segmenter: split the rendered text into divider-delimited blocks.

The receipt template marks its logical blocks (header, date/numbering,
items, totals, fiscal details) only with a printed line of dashes, so block
boundaries are recovered by matching that text, not by DOM structure. Each
block is then tagged by the first landmark it contains, which lets the
extractors look blocks up by kind instead of by ordinal position.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from bs4 import BeautifulSoup, NavigableString
from bs4.element import (
    Comment,
    Declaration,
    Doctype,
    ProcessingInstruction,
    Script,
    Stylesheet,
    TemplateString,
)

from fiscal_receipts.models.labels import (
    DETAIL_LABELS,
    DIVIDER,
    INN_LABEL,
    RECEIPT_NUMBER_PREFIX,
    SHIFT_NUMBER_PREFIX,
    TOTAL_LABELS,
)

logger = logging.getLogger(__name__)

# Strings that never render as receipt text
_NON_TEXT = (Comment, Declaration, Doctype, ProcessingInstruction, Script, Stylesheet, TemplateString)

_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}")
# "label: value" lines, shared with the totals extractor
LABEL_VALUE_RE = re.compile(r"^(.*?):\s*(.+)$")


class SectionKind(str, Enum):
    HEADER = "header"
    NUMBERING = "numbering"
    ITEMS = "items"
    TOTALS = "totals"
    DETAILS = "details"
    OTHER = "other"


@dataclass
class Section:
    lines: list[str] = field(default_factory=list)
    has_table: bool = False
    kind: SectionKind = SectionKind.OTHER

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def iter_text_nodes(soup: BeautifulSoup) -> Iterator[NavigableString]:
    """Yield every rendered text node in document order."""
    for node in soup.find_all(string=True):
        if isinstance(node, _NON_TEXT):
            continue
        yield node


def segment(soup: BeautifulSoup, divider: str = DIVIDER, flush_trailing: bool = True) -> list[Section]:
    """Split the document's text nodes into sections at each divider line.

    Empty sections (two dividers in a row) are skipped. Text after the last
    divider becomes a final section unless flush_trailing is False.
    """
    sections: list[Section] = []
    current = Section()

    for node in iter_text_nodes(soup):
        text = node.strip()
        if not text:
            continue
        if text == divider:
            if current.lines:
                sections.append(current)
            current = Section()
            continue
        current.lines.append(text)
        if node.find_parent("table") is not None:
            current.has_table = True

    if current.lines:
        if flush_trailing:
            sections.append(current)
        else:
            logger.debug(f"Dropping {len(current.lines)} trailing lines after last divider")

    for index, section in enumerate(sections):
        section.kind = classify(section, index)
    logger.debug(f"Segmented {len(sections)} sections: {[s.kind.value for s in sections]}")
    return sections


def _label(line: str) -> str | None:
    m = LABEL_VALUE_RE.match(line)
    return m.group(1).strip() if m else None


def classify(section: Section, index: int) -> SectionKind:
    """Tag a section by the first landmark it carries."""
    if section.has_table:
        return SectionKind.ITEMS
    lines = section.lines
    if any(
        _TIMESTAMP_RE.match(line)
        or line.startswith(RECEIPT_NUMBER_PREFIX)
        or line.startswith(SHIFT_NUMBER_PREFIX)
        for line in lines
    ):
        return SectionKind.NUMBERING
    labels = {_label(line) for line in lines}
    if labels & DETAIL_LABELS.keys():
        return SectionKind.DETAILS
    if labels & TOTAL_LABELS.keys():
        return SectionKind.TOTALS
    if index == 0 or any(line.startswith(INN_LABEL) for line in lines):
        return SectionKind.HEADER
    return SectionKind.OTHER


def find_section(sections: list[Section], kind: SectionKind) -> Section | None:
    """First section of the given kind, or None."""
    for section in sections:
        if section.kind == kind:
            return section
    return None
