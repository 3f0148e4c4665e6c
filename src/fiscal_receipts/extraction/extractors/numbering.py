"""Date/numbering block: timestamp, receipt number, shift number, cashier."""

from fiscal_receipts.extraction.extractors.base import FieldExtractor, ParseContext, ParseResult
from fiscal_receipts.extraction.sections import SectionKind
from fiscal_receipts.models.labels import CASHIER_PREFIX, RECEIPT_NUMBER_PREFIX, SHIFT_NUMBER_PREFIX
from fiscal_receipts.models.receipt import DiagnosticKind

# Print order of the block; the timestamp carries no label
FIELDS = [
    ("datetime", ""),
    ("receipt_number", RECEIPT_NUMBER_PREFIX),
    ("shift_number", SHIFT_NUMBER_PREFIX),
    ("cashier", CASHIER_PREFIX),
]


class NumberingExtractor(FieldExtractor):
    name = "numbering"

    def extract(self, ctx: ParseContext, result: ParseResult) -> None:
        section = ctx.section(SectionKind.NUMBERING)
        if section is None:
            return

        lines = section.lines
        if len(lines) < len(FIELDS):
            ctx.report(
                DiagnosticKind.PARTIAL_SECTION,
                SectionKind.NUMBERING.value,
                f"expected {len(FIELDS)} lines, found {len(lines)}; missing fields left empty",
            )

        for (attr, prefix), line in zip(FIELDS, lines):
            value = line.strip()
            if prefix:
                value = value.removeprefix(prefix).strip()
            setattr(result, attr, value)
