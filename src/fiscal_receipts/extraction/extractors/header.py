"""Header block: merchant name, address and INN."""

from __future__ import annotations

import logging

from bs4 import Tag

from fiscal_receipts.config import ADDRESS_PLACEHOLDER
from fiscal_receipts.errors import MalformedReceiptError
from fiscal_receipts.extraction.extractors.base import FieldExtractor, ParseContext, ParseResult
from fiscal_receipts.extraction.sections import SectionKind, find_section
from fiscal_receipts.models.labels import ADDRESS_LABEL, ADDRESS_MISSING, DIVIDER, INN_LABEL
from fiscal_receipts.models.receipt import DiagnosticKind

logger = logging.getLogger(__name__)

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def _merchant_heading(ctx: ParseContext) -> Tag | None:
    """First heading printed before the first divider line."""
    divider = ctx.soup.find(string=lambda s: s is not None and s.strip() == DIVIDER)
    if divider is None:
        return ctx.soup.find(HEADING_TAGS)
    # find_all_previous walks backwards from the divider
    headings = divider.find_all_previous(HEADING_TAGS)
    return headings[-1] if headings else None


def _header_lines(ctx: ParseContext) -> list[str]:
    if ctx.options.legacy_sections:
        section = ctx.sections[0] if ctx.sections else None
    else:
        section = find_section(ctx.sections, SectionKind.HEADER)
    return section.lines if section is not None else []


def _labelled_line(lines: list[str], label: str) -> str | None:
    return next((line for line in lines if line.startswith(label)), None)


class HeaderExtractor(FieldExtractor):
    name = "header"

    def extract(self, ctx: ParseContext, result: ParseResult) -> None:
        heading = _merchant_heading(ctx)
        if heading is None:
            if ctx.options.strict:
                raise MalformedReceiptError("heading element", "merchant name is printed as a heading")
            ctx.report(DiagnosticKind.MISSING_SECTION, "institution", "heading element not found")
        else:
            result.institution = heading.get_text().strip()

        lines = _header_lines(ctx)

        # "Адрес: ул. ..." or the template's own "Адрес не указан"
        line = _labelled_line(lines, ADDRESS_LABEL)
        address = ""
        if line is not None:
            address = line[len(ADDRESS_LABEL):].lstrip(" :").strip()
        if not address or address == ADDRESS_MISSING:
            logger.debug("No merchant address printed, using placeholder")
            address = ADDRESS_PLACEHOLDER
        result.address = address

        # "ИНН 7733046721  ": label, padding, value
        line = _labelled_line(lines, INN_LABEL)
        tokens = line.split() if line is not None else []
        if len(tokens) > 1:
            result.inn = tokens[1]
        else:
            logger.debug("No INN printed")
