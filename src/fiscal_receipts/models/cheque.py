"""The fiscal-identifier query accepted by the receipt verification service."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from fiscal_receipts.models.receipt import ReceiptData

# 2025-03-03T13:00:00, 2025-03-03 13:00 or the compact QR form 20250303T1300
_TIMESTAMP_RE = re.compile(
    r"^(\d{4})-?(\d{2})-?(\d{2})[T ]?(\d{2}):?(\d{2})"
)


def split_timestamp(value: str) -> tuple[str, str]:
    """Split a printed or QR timestamp into ("YYYY-MM-DD", "HH:MM")."""
    m = _TIMESTAMP_RE.match(value.strip())
    if not m:
        return "", ""
    year, month, day, hour, minute = m.groups()
    return f"{year}-{month}-{day}", f"{hour}:{minute}"


class ChequeData(BaseModel):
    fn: str = ""
    fd: str = ""
    fp: str = ""
    total: str = ""  # rubles, two decimals: "1250.00"
    date: str = ""   # YYYY-MM-DD
    time: str = ""   # HH:MM

    @classmethod
    def from_receipt(cls, receipt: ReceiptData) -> ChequeData:
        """Build the verification query for an already parsed receipt."""
        date, time = split_timestamp(receipt.datetime)
        return cls(
            fn=receipt.fn,
            fd=receipt.fd,
            fp=receipt.fpd,
            total=f"{receipt.total.quantize(Decimal('0.01'))}" if receipt.total else "",
            date=date,
            time=time,
        )
