"""Pydantic receipt models: the record produced for every parsed document."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from fiscal_receipts.models.cheque import ChequeData


class _ReceiptModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ReceiptPosition(_ReceiptModel):
    """One purchased line item, as printed."""

    name: str = ""
    price: Decimal = Decimal("0")
    quantity: Decimal = Decimal("0")
    total: Decimal = Decimal("0")

    @field_serializer("price", "quantity", "total", when_used="json")
    def serialize_number(self, value: Decimal) -> float:
        return float(value)


class ReceiptData(_ReceiptModel):
    """A normalized fiscal receipt."""

    institution: str = ""
    address: str = ""
    inn: str = ""
    datetime: str = ""
    receipt_number: str = ""
    shift_number: str = ""
    cashier: str = ""
    positions: list[ReceiptPosition] = Field(default_factory=list)
    total: Decimal = Decimal("0")
    cash: Decimal = Decimal("0")
    card: Decimal = Decimal("0")
    tax18: Decimal = Decimal("0")
    tax10: Decimal = Decimal("0")
    kkt_reg_number: str = ""
    fn: str = ""
    fd: str = ""
    fpd: str = ""

    @field_serializer("total", "cash", "card", "tax18", "tax10", when_used="json")
    def serialize_number(self, value: Decimal) -> float:
        return float(value)

    def to_json_dict(self) -> dict:
        """Plain dict with the camelCase field names consumers expect."""
        return self.model_dump(by_alias=True, mode="json")


class DiagnosticKind(str, Enum):
    MISSING_SECTION = "missing_section"
    FIELD_PARSE = "field_parse"
    PARTIAL_SECTION = "partial_section"


class ParseDiagnostic(BaseModel):
    """A non-fatal problem met while parsing; the affected field was defaulted."""

    kind: DiagnosticKind
    field: str
    message: str


class ParseReport(BaseModel):
    """The parsed record together with everything that had to be defaulted."""

    receipt: ReceiptData
    diagnostics: list[ParseDiagnostic] = Field(default_factory=list)
    defaulted_rows: int = 0
    sections: list[str] = Field(default_factory=list)
    qr: Optional[ChequeData] = None

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def qr_mismatches(self) -> list[str]:
        """Fiscal identifiers whose QR value disagrees with the printed one.

        Identifiers missing on either side are not compared.
        """
        if self.qr is None:
            return []
        printed = ChequeData.from_receipt(self.receipt).model_dump()
        encoded = self.qr.model_dump()
        return [
            name
            for name, value in printed.items()
            if value and encoded[name] and value != encoded[name]
        ]
