"""Recover the fiscal identifiers encoded in the receipt's QR-code image URL."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from urllib.parse import parse_qs, urlparse

from bs4 import BeautifulSoup

from fiscal_receipts.extraction.document import load_document
from fiscal_receipts.models.cheque import ChequeData, split_timestamp

logger = logging.getLogger(__name__)

# Keys of the tax service's QR payload: t=...&s=...&fn=...&i=...&fp=...&n=...
_QR_KEYS = {"fn", "fp"}


def _payload(src: str) -> dict[str, str] | None:
    """The QR payload of an image URL, either as its query or in a data= parameter."""
    query = parse_qs(urlparse(src).query)
    for candidate in [query, *(parse_qs(v) for v in query.get("data", []))]:
        flat = {k: v[0] for k, v in candidate.items() if v}
        if _QR_KEYS <= flat.keys():
            return flat
    return None


def _rubles(value: str) -> str:
    # Printed sums carry a decimal point; bare integers are kopecks
    try:
        amount = Decimal(value) if "." in value else Decimal(value) / 100
    except InvalidOperation:
        logger.warning(f"Unreadable QR sum {value!r}")
        return ""
    return f"{amount.quantize(Decimal('0.01'))}"


def cheque_from_soup(soup: BeautifulSoup) -> ChequeData | None:
    for img in soup.find_all("img", src=True):
        payload = _payload(img["src"])
        if payload is None:
            continue
        date, time = split_timestamp(payload.get("t", ""))
        return ChequeData(
            fn=payload["fn"],
            fd=payload.get("fd", payload.get("i", "")),
            fp=payload["fp"],
            total=_rubles(payload["s"]) if "s" in payload else "",
            date=date,
            time=time,
        )
    return None


def extract_cheque_data(html: str) -> ChequeData | None:
    """ChequeData from the first QR image in the document, or None."""
    return cheque_from_soup(load_document(html))
