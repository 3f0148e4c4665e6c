"""Receipt pipeline: load -> segment -> extract -> assemble."""

from __future__ import annotations

import logging
from typing import Optional

from fiscal_receipts.extraction.document import load_document
from fiscal_receipts.extraction.extractors.base import (
    FieldExtractor,
    ParseContext,
    ParseResult,
    ParserOptions,
)
from fiscal_receipts.extraction.extractors.header import HeaderExtractor
from fiscal_receipts.extraction.extractors.items import ItemsExtractor
from fiscal_receipts.extraction.extractors.numbering import NumberingExtractor
from fiscal_receipts.extraction.extractors.totals import TotalsExtractor
from fiscal_receipts.extraction.qr import cheque_from_soup
from fiscal_receipts.extraction.sections import segment
from fiscal_receipts.models.receipt import ParseReport, ReceiptData

logger = logging.getLogger(__name__)

# Independent passes, run in print order
EXTRACTORS: list[FieldExtractor] = [
    HeaderExtractor(),
    NumberingExtractor(),
    ItemsExtractor(),
    TotalsExtractor(),
]


def _assemble(result: ParseResult) -> ReceiptData:
    return ReceiptData(
        institution=result.institution,
        address=result.address,
        inn=result.inn,
        datetime=result.datetime,
        receipt_number=result.receipt_number,
        shift_number=result.shift_number,
        cashier=result.cashier,
        positions=result.positions,
        total=result.total,
        cash=result.cash,
        card=result.card,
        tax18=result.tax18,
        tax10=result.tax10,
        kkt_reg_number=result.kkt_reg_number,
        fn=result.fn,
        fd=result.fd,
        fpd=result.fpd,
    )


class ReceiptParser:
    """Parses one rendered receipt per call; holds no per-document state."""

    def __init__(self, options: Optional[ParserOptions] = None) -> None:
        self.options = options or ParserOptions()

    def parse_report(self, html: str) -> ParseReport:
        soup = load_document(html, max_bytes=self.options.max_bytes, max_depth=self.options.max_depth)
        sections = segment(soup, flush_trailing=not self.options.legacy_sections)
        ctx = ParseContext(soup, sections, self.options)

        result = ParseResult()
        for extractor in EXTRACTORS:
            logger.debug(f"Running {extractor.name} extractor")
            extractor.extract(ctx, result)

        receipt = _assemble(result)
        if ctx.diagnostics:
            logger.warning(
                f"Receipt {receipt.fd or '?'} parsed with {len(ctx.diagnostics)} defaulted fields"
            )
        return ParseReport(
            receipt=receipt,
            diagnostics=ctx.diagnostics,
            defaulted_rows=result.defaulted_rows,
            sections=[s.text for s in sections],
            qr=cheque_from_soup(soup),
        )

    def parse(self, html: str) -> ReceiptData:
        return self.parse_report(html).receipt


def parse_receipt_report(html: str, options: Optional[ParserOptions] = None) -> ParseReport:
    """Parse a rendered receipt, returning the record and its diagnostics."""
    return ReceiptParser(options).parse_report(html)


def parse_receipt(html: str, options: Optional[ParserOptions] = None) -> ReceiptData:
    """Parse a rendered receipt into a ReceiptData.

    Raises MalformedReceiptError when a structural anchor is missing (strict
    mode, the default) and FieldParseError on unreadable numbers when
    options.strict_numbers is set.
    """
    return ReceiptParser(options).parse(html)
