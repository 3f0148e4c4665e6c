"""Locale-formatted number parsing ("1,250.00": comma groups, dot decimals)."""

import re
from decimal import Decimal

from fiscal_receipts.errors import FieldParseError

_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$")


def parse_amount(text: str, field: str = "amount") -> Decimal:
    """Parse a printed amount or quantity into a finite non-negative Decimal.

    Commas are thousands separators and are dropped; the dot is always the
    decimal point, whatever the process locale says.
    """
    cleaned = text.strip().replace(",", "").replace("\xa0", "")
    if not _NUMBER_RE.match(cleaned):
        raise FieldParseError(field, text)
    return Decimal(cleaned)
