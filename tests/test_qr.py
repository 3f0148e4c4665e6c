"""Fiscal identifiers recovered from the QR-code image."""

from decimal import Decimal

from conftest import (
    DETAIL_LINES,
    TOTAL_LINES,
    header_block,
    items_block,
    lines_block,
    numbering_block,
    receipt_html,
)
from fiscal_receipts.extraction.pipeline import parse_receipt, parse_receipt_report
from fiscal_receipts.extraction.qr import extract_cheque_data
from fiscal_receipts.models.cheque import ChequeData, split_timestamp
from fiscal_receipts.models.receipt import ReceiptData


def _with_trailer(trailer: str) -> str:
    return receipt_html(
        header_block(), numbering_block(), items_block(),
        lines_block(TOTAL_LINES), lines_block(DETAIL_LINES),
        trailer=trailer,
    )


class TestExtractChequeData:

    def test_sample_qr(self, sample_html):
        cheque = extract_cheque_data(sample_html)
        assert cheque == ChequeData(
            fn="7384440800215290",
            fd="2271",
            fp="1305261358",
            total="1250.00",
            date="2025-03-03",
            time="13:00",
        )

    def test_tax_service_payload_in_query(self):
        html = "<img src='https://check.example/?t=20250303T1300&amp;s=1250.00&amp;fn=1&amp;i=2&amp;fp=3&amp;n=1'>"
        cheque = extract_cheque_data(html)
        assert (cheque.fn, cheque.fd, cheque.fp) == ("1", "2", "3")
        assert cheque.total == "1250.00"
        assert (cheque.date, cheque.time) == ("2025-03-03", "13:00")

    def test_no_qr(self):
        assert extract_cheque_data("<img src='logo.png'><p>ФН: 1</p>") is None

    def test_mismatch_with_printed_details(self):
        tampered = "<img src='https://qr.example/?data=fn%3D7384440800215290%26fd%3D9999%26fp%3D1305261358'>"
        report = parse_receipt_report(_with_trailer(tampered))
        assert report.qr.fd == "9999"
        assert report.qr_mismatches() == ["fd"]


class TestChequeFromReceipt:

    def test_builds_verification_query(self, sample_html):
        cheque = ChequeData.from_receipt(parse_receipt(sample_html))
        assert cheque == extract_cheque_data(sample_html)

    def test_empty_receipt(self):
        cheque = ChequeData.from_receipt(ReceiptData())
        assert cheque == ChequeData()

    def test_total_is_rounded_to_kopecks(self):
        cheque = ChequeData.from_receipt(ReceiptData(total=Decimal("99.5")))
        assert cheque.total == "99.50"

    def test_split_timestamp(self):
        assert split_timestamp("2025-03-03T13:00:00") == ("2025-03-03", "13:00")
        assert split_timestamp("2025-03-03 09:05") == ("2025-03-03", "09:05")
        assert split_timestamp("вчера") == ("", "")
