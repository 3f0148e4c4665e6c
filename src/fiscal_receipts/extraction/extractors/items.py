"""Line-item table: one ReceiptPosition per data row."""

from __future__ import annotations

import logging
from decimal import Decimal

from fiscal_receipts.errors import MalformedReceiptError
from fiscal_receipts.extraction.extractors.base import FieldExtractor, ParseContext, ParseResult
from fiscal_receipts.models.receipt import DiagnosticKind, ReceiptPosition

logger = logging.getLogger(__name__)

# Cells: ordinal, name, price, quantity, total
ROW_CELLS = 5


class ItemsExtractor(FieldExtractor):
    name = "items"

    def extract(self, ctx: ParseContext, result: ParseResult) -> None:
        table = ctx.soup.find("table")
        if table is None:
            if ctx.options.strict:
                raise MalformedReceiptError("item table")
            ctx.report(DiagnosticKind.MISSING_SECTION, "positions", "item table not found")
            return

        rows = table.find_all("tr")[1:]  # first row is the column header
        for row_no, row in enumerate(rows, start=1):
            cells = [td.get_text().strip() for td in row.find_all("td")]
            present = len(cells)
            if present < ROW_CELLS:
                ctx.report(
                    DiagnosticKind.PARTIAL_SECTION,
                    f"positions[{row_no}]",
                    f"row has {present} of {ROW_CELLS} cells; missing cells defaulted",
                )
                result.defaulted_rows += 1
                cells += [""] * (ROW_CELLS - present)

            def number(index: int, field: str) -> Decimal:
                if index >= present:
                    return Decimal("0")
                return ctx.number(f"positions[{row_no}].{field}", cells[index])

            result.positions.append(
                ReceiptPosition(
                    name=cells[1],
                    price=number(2, "price"),
                    quantity=number(3, "quantity"),
                    total=number(4, "total"),
                )
            )
        logger.debug(f"Extracted {len(result.positions)} positions")
