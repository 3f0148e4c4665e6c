"""Shared receipt HTML fixtures, laid out like the verification service renders them."""

import pytest

DIVIDER = "-" * 32

INSTITUTION = (
    "ФЕДЕРАЛЬНОЕ БЮДЖЕТНОЕ УЧРЕЖДЕНИЕ &quot;ЦЕНТРАЛЬНАЯ КЛИНИЧЕСКАЯ БОЛЬНИЦА "
    "ГРАЖДАНСКОЙ АВИАЦИИ&quot;"
)

NUMBERING_LINES = [
    "2025-03-03T13:00:00",
    "Чек № 2271",
    "Смена № 42",
    "Кассир: Конова Светлана Николаевна",
]

SAMPLE_ROW = ("1", "Прием (осмотр, консультация) врача-уролога повторный", "1,250.00", "2", "2,250.00")

TOTAL_LINES = [
    "ИТОГО: 1,250.00",
    "Наличные: 0.00",
    "Карта: 1,250.00",
    "НДС 18%: 0.00",
    "НДС 10%: 0.00",
]

DETAIL_LINES = [
    "ВИД НАЛОГООБЛОЖЕНИЯ: 1",
    "Рег. номер ККТ: 0000733387011528    ",
    "ФН: 7384440800215290",
    "ФД: 2271",
    "ФПД#: 1305261358",
]

QR_SRC = (
    "https://api.qrserver.com/v1/create-qr-code/?data=fn%3D7384440800215290%26fd%3D2271"
    "%26fp%3D1305261358%26t%3D2025-03-03T13%3A00%3A00%26s%3D125000"
)

TRAILER = (
    f"<h4>QR-код чека:</h4><img src='{QR_SRC}' alt='QR код'></div>"
    "<div style='text-align: center;'><button onclick='history.back();'>Сканировать еще</button>"
    "<form action='save_receipt.php' method='post'>"
    "<input type='hidden' name='fiscal_drive_number' value='7384440800215290'>"
    "<select name='format'><option value='pdf'>PDF</option><option value='json'>JSON</option></select>"
    "<input type='submit' value='Сохранить чек'></form></div>"
)


def header_block(address: str | None = "Адрес не указан", inn: str = "7733046721", heading: bool = True) -> str:
    html = f"<h3>{INSTITUTION}</h3>" if heading else ""
    if address is not None:
        html += f"{address}<br>"
    return html + f"ИНН {inn}  <br>"


def numbering_block(lines: list[str] = NUMBERING_LINES) -> str:
    return "".join(f"{line}<br>" for line in lines)


def items_block(rows: list[tuple[str, ...]] = [SAMPLE_ROW]) -> str:
    html = (
        "<h4>ПРИХОД</h4><table style='width: 100%;'>"
        "<tr><th>№</th><th>Название</th><th>Цена</th><th>Кол.</th><th>Сумма</th></tr>"
    )
    for row in rows:
        html += "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>"
    return html + "</table>"


def lines_block(lines: list[str]) -> str:
    return "".join(f"<p>{line}</p>" for line in lines)


def receipt_html(*blocks: str, trailer: str = TRAILER) -> str:
    """Join blocks the way the template does: each one followed by a divider line."""
    body = "".join(f"{block}{DIVIDER}<br>" for block in blocks)
    return f"<div style='width: 320px; font-family: monospace;'>{body}{trailer}"


def sample_blocks() -> list[str]:
    return [
        header_block(),
        numbering_block(),
        items_block(),
        lines_block(TOTAL_LINES),
        lines_block(DETAIL_LINES),
    ]


@pytest.fixture
def sample_html() -> str:
    return receipt_html(*sample_blocks())


@pytest.fixture
def three_section_html() -> str:
    """Header, numbering and items only: totals and fiscal details are absent."""
    return receipt_html(header_block(), numbering_block(), items_block())
