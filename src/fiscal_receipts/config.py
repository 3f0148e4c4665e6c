"""Configuration: parser strictness, input guards, defaults."""

import os


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


# Fail on missing structural anchors (heading, table, required sections)
STRICT = _env_flag("RECEIPT_STRICT", "1")

# Fail on unparseable numbers instead of defaulting them to 0
STRICT_NUMBERS = _env_flag("RECEIPT_STRICT_NUMBERS", "0")

# Address sections by position (1, 3, 4) and drop trailing text, like the old parser did
LEGACY_SECTIONS = _env_flag("RECEIPT_LEGACY_SECTIONS", "0")

# Input guards for the document-load step
MAX_DOCUMENT_BYTES = int(os.environ.get("RECEIPT_MAX_BYTES", "2000000"))
MAX_NESTING_DEPTH = int(os.environ.get("RECEIPT_MAX_DEPTH", "256"))

# Log level installed by the CLI
LOG_LEVEL = os.environ.get("RECEIPT_LOG_LEVEL", "WARNING").upper()

# Emitted when the receipt carries no merchant address
ADDRESS_PLACEHOLDER = "Адрес не указан"

DEFAULT_ENCODING = "utf-8"
