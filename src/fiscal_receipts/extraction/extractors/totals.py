"""Totals and fiscal-details blocks."""

from __future__ import annotations

import logging

from fiscal_receipts.extraction.extractors.base import FieldExtractor, ParseContext, ParseResult
from fiscal_receipts.extraction.sections import LABEL_VALUE_RE, SectionKind
from fiscal_receipts.models.labels import DETAIL_LABELS, TOTAL_LABELS

logger = logging.getLogger(__name__)


def label_values(lines: list[str]) -> dict[str, str]:
    """Collect "label: value" lines; the first occurrence of a label wins."""
    values: dict[str, str] = {}
    for line in lines:
        m = LABEL_VALUE_RE.match(line)
        if m:
            values.setdefault(m.group(1), m.group(2))
    return values


def detail_values(lines: list[str]) -> dict[str, str]:
    """Split each line on the first ": " into a trimmed key and value."""
    values: dict[str, str] = {}
    for line in lines:
        key, _, value = line.partition(": ")
        values[key.strip()] = value.strip()
    return values


class TotalsExtractor(FieldExtractor):
    name = "totals"

    def extract(self, ctx: ParseContext, result: ParseResult) -> None:
        section = ctx.section(SectionKind.TOTALS)
        if section is not None:
            values = label_values(section.lines)
            for label, attr in TOTAL_LABELS.items():
                if label in values:
                    setattr(result, attr, ctx.number(attr, values[label]))
                else:
                    logger.debug(f"No {label!r} line in totals, using 0")

        section = ctx.section(SectionKind.DETAILS)
        if section is not None:
            values = detail_values(section.lines)
            for label, attr in DETAIL_LABELS.items():
                setattr(result, attr, values.get(label, ""))
