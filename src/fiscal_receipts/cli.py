"""Click CLI — parse rendered receipts from files or stdin."""

from __future__ import annotations

import json
import logging
from typing import BinaryIO

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from fiscal_receipts.config import DEFAULT_ENCODING, LOG_LEVEL
from fiscal_receipts.errors import ReceiptParseError
from fiscal_receipts.extraction.extractors.base import ParserOptions
from fiscal_receipts.extraction.pipeline import parse_receipt_report
from fiscal_receipts.extraction.qr import extract_cheque_data
from fiscal_receipts.models.receipt import ParseReport

console = Console()


def _print_summary(report: ParseReport) -> None:
    r = report.receipt
    console.print(f"[bold]{escape(r.institution or '—')}[/bold]")
    console.print(f"  {r.address}")
    console.print(f"  ИНН {r.inn or '—'}")
    console.print(
        f"  {r.datetime or '—'}  Чек № {r.receipt_number or '—'}  "
        f"Смена № {r.shift_number or '—'}  Кассир: {r.cashier or '—'}"
    )

    table = Table(title="Positions")
    table.add_column("#", style="dim", width=3)
    table.add_column("Name", width=40)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Qty", justify="right", width=6)
    table.add_column("Total", justify="right", width=12)
    for i, p in enumerate(r.positions, start=1):
        table.add_row(str(i), escape(p.name), str(p.price), str(p.quantity), str(p.total))
    console.print(table)

    console.print(f"  ИТОГО: {r.total}   Наличные: {r.cash}   Карта: {r.card}")
    console.print(f"  НДС 18%: {r.tax18}   НДС 10%: {r.tax10}")
    console.print(f"  ККТ {r.kkt_reg_number or '—'}  ФН {r.fn or '—'}  ФД {r.fd or '—'}  ФПД {r.fpd or '—'}")

    for d in report.diagnostics:
        console.print(f"  [yellow]{d.kind.value}[/yellow]  {escape(d.field)}: {escape(d.message)}")
    if report.defaulted_rows:
        console.print(f"  [yellow]{report.defaulted_rows} item rows defaulted[/yellow]")
    for name in report.qr_mismatches():
        console.print(f"  [yellow]QR mismatch[/yellow]  {name}")


def _decode(source: BinaryIO, encoding: str) -> str:
    """Read the whole source and decode it, exiting with a red error on failure."""
    try:
        return source.read().decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        console.print(f"[red]cannot decode input as {escape(encoding)}: {escape(str(e))}[/red]")
        raise SystemExit(1)


@click.group()
@click.option("--log-level", default=LOG_LEVEL, show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def cli(log_level: str) -> None:
    """Fiscal receipts — structured data from rendered receipt HTML."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@cli.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--json", "as_json", is_flag=True, help="Print the record as JSON")
@click.option("--lenient", is_flag=True, help="Default missing sections instead of failing")
@click.option("--strict-numbers", is_flag=True, help="Fail on unparseable numbers")
@click.option("--legacy-sections", is_flag=True, help="Address sections by position, drop trailing text")
@click.option("--encoding", default=DEFAULT_ENCODING, show_default=True, help="Text encoding of the input")
def parse(source: BinaryIO, as_json: bool, lenient: bool, strict_numbers: bool,
          legacy_sections: bool, encoding: str) -> None:
    """Parse one receipt HTML file (or stdin)."""
    options = ParserOptions(
        strict=not lenient,
        strict_numbers=strict_numbers,
        legacy_sections=legacy_sections,
    )
    html = _decode(source, encoding)
    try:
        report = parse_receipt_report(html, options)
    except ReceiptParseError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(report.receipt.to_json_dict(), ensure_ascii=False, indent=2))
        return
    _print_summary(report)


@cli.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--encoding", default=DEFAULT_ENCODING, show_default=True, help="Text encoding of the input")
def qr(source: BinaryIO, encoding: str) -> None:
    """Print the fiscal identifiers encoded in the receipt's QR code."""
    html = _decode(source, encoding)
    try:
        cheque = extract_cheque_data(html)
    except ReceiptParseError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    if cheque is None:
        console.print("[yellow]No QR code found.[/yellow]")
        raise SystemExit(1)
    click.echo(json.dumps(cheque.model_dump(), ensure_ascii=False, indent=2))
