"""Label literals printed on the rendered receipt template."""

# Horizontal rule between logical blocks of the printable receipt
DIVIDER = "-" * 32

# Header block
ADDRESS_LABEL = "Адрес"
INN_LABEL = "ИНН"
ADDRESS_MISSING = "не указан"

# Date/numbering block, in print order after the timestamp
RECEIPT_NUMBER_PREFIX = "Чек №"
SHIFT_NUMBER_PREFIX = "Смена №"
CASHIER_PREFIX = "Кассир:"

# Totals block: printed label -> ReceiptData attribute
TOTAL_LABELS = {
    "ИТОГО": "total",
    "Наличные": "cash",
    "Карта": "card",
    "НДС 18%": "tax18",
    "НДС 10%": "tax10",
}

# Fiscal details block: printed label -> ReceiptData attribute
DETAIL_LABELS = {
    "Рег. номер ККТ": "kkt_reg_number",
    "ФН": "fn",
    "ФД": "fd",
    "ФПД#": "fpd",
}
