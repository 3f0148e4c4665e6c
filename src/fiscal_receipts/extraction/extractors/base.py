"""Base class and shared state for the field extractors."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from decimal import Decimal

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict

from fiscal_receipts import config
from fiscal_receipts.errors import FieldParseError, MalformedReceiptError
from fiscal_receipts.extraction.numbers import parse_amount
from fiscal_receipts.extraction.sections import Section, SectionKind, find_section
from fiscal_receipts.models.receipt import DiagnosticKind, ParseDiagnostic, ReceiptPosition

logger = logging.getLogger(__name__)

# Positional layout of the legacy parser: sections[1], sections[3], sections[4]
LEGACY_SECTION_INDEX = {
    SectionKind.NUMBERING: 1,
    SectionKind.TOTALS: 3,
    SectionKind.DETAILS: 4,
}


class ParserOptions(BaseModel):
    """Strictness and compatibility switches for one parse."""

    model_config = ConfigDict(frozen=True)

    strict: bool = config.STRICT
    strict_numbers: bool = config.STRICT_NUMBERS
    legacy_sections: bool = config.LEGACY_SECTIONS
    max_bytes: int = config.MAX_DOCUMENT_BYTES
    max_depth: int = config.MAX_NESTING_DEPTH


class ParseResult:
    """Intermediate parse result before creating a ReceiptData."""

    def __init__(self) -> None:
        self.institution: str = ""
        self.address: str = ""
        self.inn: str = ""
        self.datetime: str = ""
        self.receipt_number: str = ""
        self.shift_number: str = ""
        self.cashier: str = ""
        self.positions: list[ReceiptPosition] = []
        self.total: Decimal = Decimal("0")
        self.cash: Decimal = Decimal("0")
        self.card: Decimal = Decimal("0")
        self.tax18: Decimal = Decimal("0")
        self.tax10: Decimal = Decimal("0")
        self.kkt_reg_number: str = ""
        self.fn: str = ""
        self.fd: str = ""
        self.fpd: str = ""
        self.defaulted_rows: int = 0


class ParseContext:
    """Everything one parse shares across extractors: tree, sections, diagnostics."""

    def __init__(self, soup: BeautifulSoup, sections: list[Section], options: ParserOptions) -> None:
        self.soup = soup
        self.sections = sections
        self.options = options
        self.diagnostics: list[ParseDiagnostic] = []

    def report(self, kind: DiagnosticKind, field: str, message: str) -> None:
        logger.warning(f"{field}: {message}")
        self.diagnostics.append(ParseDiagnostic(kind=kind, field=field, message=message))

    def section(self, kind: SectionKind) -> Section | None:
        """Look up a section, raising in strict mode when it is absent."""
        if self.options.legacy_sections:
            index = LEGACY_SECTION_INDEX[kind]
            found = self.sections[index] if index < len(self.sections) else None
            missing = f"section #{index} ({kind.value})"
        else:
            found = find_section(self.sections, kind)
            missing = f"{kind.value} section"

        if found is None:
            if self.options.strict:
                raise MalformedReceiptError(missing, f"{len(self.sections)} sections recovered")
            self.report(DiagnosticKind.MISSING_SECTION, kind.value, f"{missing} not found")
        return found

    def number(self, field: str, text: str) -> Decimal:
        """Parse a printed number; unparseable text defaults to 0 unless strict."""
        try:
            return parse_amount(text, field)
        except FieldParseError:
            if self.options.strict_numbers:
                raise
            self.report(DiagnosticKind.FIELD_PARSE, field, f"unparseable number {text!r}, using 0")
            return Decimal("0")


class FieldExtractor(ABC):
    """Base class all field extractors inherit from."""

    @abstractmethod
    def extract(self, ctx: ParseContext, result: ParseResult) -> None:
        """Fill this extractor's fields of result from the parse context."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name used in log messages."""
