"""Exceptions raised by the receipt parser."""

from __future__ import annotations


class ReceiptParseError(Exception):
    """Base class for all receipt parsing failures."""


class MalformedReceiptError(ReceiptParseError):
    """The document lacks a structural anchor the layout requires."""

    def __init__(self, anchor: str, detail: str = "") -> None:
        self.anchor = anchor
        self.detail = detail
        super().__init__(self._message())

    def _message(self) -> str:
        message = f"malformed receipt document: missing {self.anchor}"
        if self.detail:
            message = f"{message} ({self.detail})"
        return message


class DocumentTooLargeError(MalformedReceiptError):
    """The input exceeds the configured size or nesting-depth limit."""

    def __init__(self, detail: str) -> None:
        super().__init__("document", detail)

    def _message(self) -> str:
        return f"malformed receipt document: input rejected ({self.detail})"


class FieldParseError(ReceiptParseError, ValueError):
    """A numeric field could not be read as a locale-formatted number."""

    def __init__(self, field: str, text: str) -> None:
        self.field = field
        self.text = text
        super().__init__(f"cannot parse {field!r} as a number: {text!r}")
